"""
Operator Control Endpoints

This module backs the operator control panel:
- Current setpoints, mode switches, alarms and activity log
- Range-guarded setpoint changes
- Applying and resetting setpoints
- Alarm acknowledgement
- Validation of manually entered readings

The console state is held in memory by this process and resets on
restart.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.models import (
    ActionRequest,
    AlarmModel,
    ErrorResponse,
    ManualEntry,
    ModeUpdate,
    OperatorLogModel,
    OperatorStateResponse,
    SetpointUpdate,
    ValidationResponse,
)
from core.operator import OperatorConsole
from core.validators import RangeGuard

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/operator", tags=["Operator Controls"])

# Initialize components
console = OperatorConsole()
range_guard = RangeGuard()


def get_console() -> OperatorConsole:
    """Dependency returning the process-wide operator console."""
    return console


def state_response(console: OperatorConsole) -> OperatorStateResponse:
    return OperatorStateResponse(**console.to_dict())


# =========================================
# State
# =========================================

@router.get(
    "/state",
    response_model=OperatorStateResponse,
    summary="Get operator console state",
    description="""
    Current setpoints, mode switches, alarms and the activity log
    (newest first, at most 50 entries). Reading the state changes nothing.
    """
)
async def get_state(console: OperatorConsole = Depends(get_console)):
    """Get the operator console state."""
    return state_response(console)


@router.post(
    "/activity/tick",
    response_model=OperatorStateResponse,
    summary="Advance background activity",
    description="""
    One tick of the background activity timer. With 30% probability a
    log entry is added, attributed to the automatic controller in auto
    mode and to the shift operator otherwise. Returns the updated state.
    """
)
async def activity_tick(console: OperatorConsole = Depends(get_console)):
    """Maybe record one background log entry."""
    entry = console.record_auto_activity()
    if entry is not None:
        logger.debug("Background activity: %s", entry.action)
    return state_response(console)


# =========================================
# Controls
# =========================================

@router.put(
    "/controls",
    response_model=OperatorStateResponse,
    summary="Update setpoints",
    responses={422: {"model": ErrorResponse, "description": "Setpoints rejected"}},
    description="""
    Change one or more setpoints. Omitted controls keep their value.

    The merged setpoints must lie inside each control's limits. A
    cofiring ratio (biomass / coal) above 5% is accepted with a warning.
    A rejected change returns 422 with the validation issues and leaves
    the setpoints untouched.
    """
)
async def update_controls(
    update: SetpointUpdate,
    console: OperatorConsole = Depends(get_console)
):
    """Update setpoints."""
    changes = update.model_dump(exclude_none=True)
    result = console.update_setpoints(changes)

    if not result.is_valid:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=result.to_dict()
        )

    return state_response(console)


@router.post(
    "/controls/apply",
    response_model=OperatorLogModel,
    summary="Apply setpoints",
    description="Send the current setpoints to the plant and record it in the activity log."
)
async def apply_controls(
    request: Optional[ActionRequest] = None,
    console: OperatorConsole = Depends(get_console)
):
    """Apply the current setpoints."""
    entry = console.apply_changes(user=request.user if request else ActionRequest().user)
    return OperatorLogModel(**entry.to_dict())


@router.post(
    "/controls/reset",
    response_model=OperatorStateResponse,
    summary="Reset setpoints",
    description="Return every setpoint to the design operating point."
)
async def reset_controls(console: OperatorConsole = Depends(get_console)):
    """Reset setpoints to defaults."""
    console.reset_setpoints()
    return state_response(console)


@router.put(
    "/mode",
    response_model=OperatorStateResponse,
    summary="Set operating mode",
    description="Toggle auto mode and/or the system enable switch."
)
async def set_mode(
    update: ModeUpdate,
    console: OperatorConsole = Depends(get_console)
):
    """Set auto mode and system enable."""
    console.set_mode(auto_mode=update.auto_mode, system_enabled=update.system_enabled)
    return state_response(console)


# =========================================
# Alarms
# =========================================

@router.post(
    "/alarms/{alarm_id}/acknowledge",
    response_model=AlarmModel,
    responses={404: {"model": ErrorResponse, "description": "Unknown alarm"}},
    summary="Acknowledge an alarm"
)
async def acknowledge_alarm(
    alarm_id: str,
    request: Optional[ActionRequest] = None,
    console: OperatorConsole = Depends(get_console)
):
    """Acknowledge an alarm."""
    try:
        alarm = console.acknowledge_alarm(
            alarm_id, user=request.user if request else ActionRequest().user
        )
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Alarm '{alarm_id}' not found"
        )

    return AlarmModel(**alarm.to_dict())


# =========================================
# Manual Entry
# =========================================

@router.post(
    "/manual-entry/validate",
    response_model=ValidationResponse,
    summary="Validate manual readings",
    description="""
    Check manually entered readings before they are used.

    **Checks performed:**
    - Absolute bounds (no negative flows or pressures, O₂ within 0-21%)
    - Cofiring ratio at or below 5%
    - Typical operating ranges (warnings only)

    Nothing is stored; the response only reports the issues.
    """
)
async def validate_manual_entry(entry: ManualEntry):
    """Validate manually entered readings."""
    result = range_guard.validate_manual_entry(entry.model_dump(exclude_none=True))
    return ValidationResponse(**result.to_dict())
