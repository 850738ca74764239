"""
Pydantic Models for API Request/Response Validation

This module defines all the data models used by the API for:
- Request body validation
- Response serialization
- Documentation generation (OpenAPI/Swagger)

All models use Pydantic v2 syntax for validation and serialization.
"""

from datetime import datetime
from typing import Any, Optional, List, Dict
from enum import Enum
from pydantic import BaseModel, Field


# =========================================
# Enums
# =========================================

class KPIStatus(str, Enum):
    """KPI status categories."""
    OPTIMAL = "optimal"
    WARNING = "warning"
    CRITICAL = "critical"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class ValidationStatus(str, Enum):
    """Data validation status."""
    ACCEPTED = "accepted"
    ACCEPTED_WITH_WARNINGS = "accepted_with_warnings"
    REJECTED = "rejected"


# =========================================
# Telemetry Models
# =========================================

class BoilerSampleModel(BaseModel):
    """One instant of boiler telemetry."""
    timestamp: float = Field(..., description="Epoch milliseconds")
    steam_temp: float = Field(..., description="Main steam temperature (°C)")
    drum_pressure: float = Field(..., description="Drum pressure (bar)")
    coal_flow: float = Field(..., description="Coal mass flow (t/h)")
    biomass_flow: float = Field(..., description="Biomass mass flow (t/h)")
    load_unit: float = Field(..., description="Unit load (MW)")
    primary_air: float = Field(..., description="Primary air flow (t/h)")
    secondary_air: float = Field(..., description="Secondary air flow (t/h)")
    excess_air: float = Field(..., description="Excess air (%)")
    efficiency: float = Field(..., description="Thermal efficiency (%)")
    co2_emission: float = Field(..., description="CO₂ emission (mg/Nm³)")
    o2_level: float = Field(..., description="Flue-gas O₂ (%)")
    co_level: float = Field(..., description="CO level (ppm)")
    nox_level: float = Field(..., description="NOₓ level (mg/Nm³)")
    cofiring_ratio: float = Field(..., description="Biomass share of fuel (%)")

    class Config:
        json_schema_extra = {
            "example": {
                "timestamp": 1760864400000.0,
                "steam_temp": 538.6,
                "drum_pressure": 248.7,
                "coal_flow": 360.1,
                "biomass_flow": 18.0,
                "load_unit": 400.2,
                "primary_air": 211.3,
                "secondary_air": 451.4,
                "excess_air": 22.6,
                "efficiency": 88.6,
                "co2_emission": 751.2,
                "o2_level": 3.45,
                "co_level": 47.1,
                "nox_level": 187.9,
                "cofiring_ratio": 5.0
            }
        }


class SeriesResponse(BaseModel):
    """A fixed 100-point telemetry series."""
    duration_hours: float = Field(..., description="Span of the series")
    spacing_ms: float = Field(..., description="Milliseconds between points")
    points_per_hour: float = Field(..., description="Points covering one hour")
    point_count: int
    samples: List[BoilerSampleModel]


class KPIResponse(BaseModel):
    """KPI snapshot of a fresh sample."""
    timestamp: Optional[float] = None
    steam_temp: float
    drum_pressure: float
    efficiency: float
    co2_emission: float
    cofiring_ratio: float
    load_unit: float
    status: KPIStatus
    reasons: List[str] = Field(
        default_factory=list,
        description="Limits crossed (empty when optimal)"
    )


class ParameterInfo(BaseModel):
    key: str
    label: str
    unit: str
    target: str
    color: str


class ParameterSummaryModel(BaseModel):
    """Summary statistics of one parameter."""
    key: str
    label: str
    unit: str
    target: str
    avg: float
    max: float
    min: float
    latest: float
    trend: TrendDirection


class SummaryResponse(BaseModel):
    duration_hours: float
    window_hours: float
    point_count: int = Field(..., description="Points inside the window")
    parameters: List[ParameterSummaryModel]


class CorrelationResponse(BaseModel):
    duration_hours: float
    keys: List[str]
    matrix: Dict[str, Dict[str, float]]


# =========================================
# Recommendation Models
# =========================================

class PredictionModel(BaseModel):
    """Optimisation result of one offline model."""
    model: str
    description: str
    accuracy: float
    predicted_efficiency: float
    optimal_cofiring_ratio: float
    predicted_co2: float
    recommended_steam_temp: float
    recommended_o2_level: float
    confidence: float


class RecommendationModel(BaseModel):
    id: int
    title: str
    description: str
    impact: str
    priority: str


class RecommendationsResponse(BaseModel):
    prediction: PredictionModel
    recommendations: List[RecommendationModel]


# =========================================
# Operator Models
# =========================================

class OperatorLogModel(BaseModel):
    id: str
    timestamp: float
    user: str
    action: str
    status: str
    parameter: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None


class AlarmModel(BaseModel):
    id: str
    timestamp: float
    severity: str
    message: str
    parameter: str
    value: str
    acknowledged: bool


class SetpointLimitModel(BaseModel):
    """Slider limits of one operator control."""
    minimum: float
    maximum: float
    step: float
    unit: str
    default: float


class OperatorStateResponse(BaseModel):
    setpoints: Dict[str, float]
    limits: Dict[str, SetpointLimitModel]
    auto_mode: bool
    system_enabled: bool
    active_alarms: int
    alarms: List[AlarmModel]
    logs: List[OperatorLogModel]


class SetpointUpdate(BaseModel):
    """Partial setpoint change; omitted controls keep their value."""
    coal_flow: Optional[float] = Field(None, description="Coal flow setpoint (t/h)")
    biomass_flow: Optional[float] = Field(None, description="Biomass flow setpoint (t/h)")
    o2_level: Optional[float] = Field(None, description="O₂ setpoint (%)")
    steam_temp: Optional[float] = Field(None, description="Steam temperature setpoint (°C)")
    primary_air: Optional[float] = Field(None, description="Primary air setpoint (t/h)")


class ModeUpdate(BaseModel):
    auto_mode: Optional[bool] = None
    system_enabled: Optional[bool] = None


class ActionRequest(BaseModel):
    user: str = Field(default="Current Operator", min_length=1, max_length=50)


class ManualEntry(BaseModel):
    """Manually entered readings, checked by the range guard."""
    coal_flow: Optional[float] = Field(None, description="Coal flow (t/h)")
    biomass_flow: Optional[float] = Field(None, description="Biomass flow (t/h)")
    steam_temp: Optional[float] = Field(None, description="Steam temperature (°C)")
    drum_pressure: Optional[float] = Field(None, description="Drum pressure (bar)")
    o2_level: Optional[float] = Field(None, description="Flue-gas O₂ (%)")
    co_level: Optional[float] = Field(None, description="CO level (ppm)")

    class Config:
        json_schema_extra = {
            "example": {
                "coal_flow": 360.0,
                "biomass_flow": 18.0,
                "steam_temp": 538.5,
                "drum_pressure": 248.7,
                "o2_level": 3.45,
                "co_level": 45
            }
        }


# =========================================
# Validation Response Models
# =========================================

class ValidationIssue(BaseModel):
    """A single validation issue."""
    severity: str = Field(..., description="error, warning, or info")
    rule_name: str = Field(..., description="Name of the violated rule")
    message: str = Field(..., description="Human-readable description")
    metric_name: Optional[str] = Field(None, description="Affected field")
    actual_value: Optional[float] = Field(None, description="The problematic value")
    expected_range: Optional[str] = Field(None, description="Expected value range")
    recommendation: Optional[str] = Field(None, description="How to fix")


class ValidationResponse(BaseModel):
    """Response from range validation."""
    is_valid: bool = Field(..., description="Whether data was accepted")
    status: ValidationStatus = Field(..., description="Validation status")
    error_count: int = Field(default=0, description="Number of errors")
    warning_count: int = Field(default=0, description="Number of warnings")
    info_count: int = Field(default=0, description="Number of info notes")
    issues: List[ValidationIssue] = Field(
        default_factory=list,
        description="List of validation issues"
    )


# =========================================
# Auth Models
# =========================================

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserModel(BaseModel):
    id: str
    username: str
    role: str
    name: str


class LoginResponse(BaseModel):
    user: UserModel
    token: str


# =========================================
# System Status Models
# =========================================

class SystemHealth(BaseModel):
    """System health check response."""
    status: str = Field(..., description="ok, degraded, or error")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Current server time")
    components: Dict[str, str] = Field(
        default_factory=dict,
        description="Status of system components"
    )


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: bool = True
    message: Any
    detail: Optional[str] = None
    status_code: Optional[int] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
