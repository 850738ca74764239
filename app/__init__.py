"""
Streamlit Dashboard Application

This module provides the web-based dashboard for the Boiler Cofiring Monitor.
Built with Streamlit for rapid development and easy deployment.

Components:
- dashboard.py: Main dashboard application
- components/: Reusable UI components
  - charts.py: Plotly chart components
  - gauge.py: KPI cards and status badges
  - panels.py: Recommendation, alarm and activity panels

Features:
- Login gate
- Live KPI monitoring
- Parameter detail view with correlation heat map
- Model recommendations and operator controls
"""

__version__ = "0.1.0"
