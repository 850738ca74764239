"""
API Routes Module

This module contains all API endpoint implementations organized by function:
- telemetry.py: Live samples, series, KPI, summaries and correlation
- recommendations.py: Model predictions and recommendation cards
- operator.py: Operator control panel
- auth.py: Login against the demo accounts

All routers are combined in main.py to create the complete API.
"""

from .telemetry import router as telemetry_router
from .recommendations import router as recommendations_router
from .operator import router as operator_router
from .auth import router as auth_router

__all__ = [
    "telemetry_router",
    "recommendations_router",
    "operator_router",
    "auth_router",
]
