"""
Core Module - Boiler Cofiring Monitor

This module contains the business logic of the monitor:
- KPI classification (optimal / warning / critical)
- Series statistics for the detail view
- Range-guard validation of operator input
- Operator console state
- Demo credential check

These components are framework-agnostic and are used by both
the API and its tests.
"""

from .auth import User, authenticate
from .kpi import KPIClassifier, KPISnapshot, KPIStatus, KPIThresholds, get_current_kpi
from .operator import OperatorConsole
from .statistics import (
    BOILER_PARAMETERS,
    ParameterSpec,
    ParameterSummary,
    TrendDirection,
    correlation_matrix,
    summarize_window,
)
from .validators import RangeGuard, ValidationResult, validate_manual_entry

__all__ = [
    # Auth
    "User",
    "authenticate",

    # KPI
    "KPIClassifier",
    "KPISnapshot",
    "KPIStatus",
    "KPIThresholds",
    "get_current_kpi",

    # Operator
    "OperatorConsole",

    # Statistics
    "BOILER_PARAMETERS",
    "ParameterSpec",
    "ParameterSummary",
    "TrendDirection",
    "correlation_matrix",
    "summarize_window",

    # Validation
    "RangeGuard",
    "ValidationResult",
    "validate_manual_entry",
]

__version__ = "0.1.0"
