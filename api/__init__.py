"""
API Module - FastAPI Backend

This module provides the REST API for the Boiler Cofiring Monitor.
It serves synthetic telemetry, KPI status, model recommendations and
the operator control panel.

Key Components:
- main.py: FastAPI application and root endpoints
- models.py: Pydantic schemas for request/response validation
- routes/: API endpoint implementations

Endpoints:
- GET /api/v1/telemetry/kpi: Current KPI snapshot with status
- GET /api/v1/telemetry/series: 100-point series for trend charts
- GET /api/v1/recommendations: Recommendation cards for a model
- GET /api/v1/operator/state: Setpoints, alarms and activity log
- POST /api/v1/operator/activity/tick: Background activity timer
- POST /api/v1/auth/login: Log in with a demo account
"""

__version__ = "0.1.0"
