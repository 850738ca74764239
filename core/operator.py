"""
Operator Console

Holds the state behind the operator control panel: current setpoints,
the auto-mode and system-enable switches, the alarm list and the
activity log. State lives in memory only and resets with the process.

Every operator action is appended to the activity log, newest first,
and the log is capped at ``MAX_LOG_ENTRIES`` entries.
"""

import logging
import random
import time
from typing import Any, Callable, Dict, List, Optional

from engine.fixtures import Alarm, FixtureLibrary, LogStatus, OperatorLog
from .validators import RangeGuard, SETPOINT_LIMITS, ValidationResult

logger = logging.getLogger(__name__)


MAX_LOG_ENTRIES = 50

AUTO_ACTIONS = [
    "Auto adjustment applied",
    "Setpoint updated",
    "Parameter optimized",
    "Alarm acknowledged",
]


def default_setpoints() -> Dict[str, float]:
    """Setpoints at the design operating point."""
    return {name: limit.default for name, limit in SETPOINT_LIMITS.items()}


class OperatorConsole:
    """
    In-memory operator control panel.

    Example:
        console = OperatorConsole()
        result = console.update_setpoints({"o2_level": 3.5})
        if result.is_valid:
            console.apply_changes(user="Operator A")
        console.acknowledge_alarm("alarm-1")
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
        guard: Optional[RangeGuard] = None
    ):
        """
        Initialize the console from the log and alarm fixtures.

        Args:
            rng: Random source for fixture ages and auto activity
            clock: Callable returning the current epoch time in milliseconds
            guard: Validator for setpoint changes
        """
        self.rng = rng or random.Random()
        self.clock = clock or (lambda: time.time() * 1000)
        self.guard = guard or RangeGuard()

        self.setpoints: Dict[str, float] = default_setpoints()
        self.auto_mode = True
        self.system_enabled = True

        now = self.clock()
        self.logs: List[OperatorLog] = FixtureLibrary.operator_logs(rng=self.rng, now_ms=now)
        self.alarms: List[Alarm] = FixtureLibrary.alarms(now_ms=now)

    # =========================================
    # Activity Log
    # =========================================

    def add_log(
        self,
        user: str,
        action: str,
        status: LogStatus = LogStatus.SUCCESS,
        parameter: Optional[str] = None,
        old_value: Optional[str] = None,
        new_value: Optional[str] = None
    ) -> OperatorLog:
        """Prepend an entry to the activity log."""
        now = self.clock()
        entry = OperatorLog(
            id=f"log-{int(now)}-{len(self.logs)}",
            timestamp=now,
            user=user,
            action=action,
            status=status,
            parameter=parameter,
            old_value=old_value,
            new_value=new_value,
        )
        self.logs.insert(0, entry)
        del self.logs[MAX_LOG_ENTRIES:]
        return entry

    def record_auto_activity(self) -> Optional[OperatorLog]:
        """
        Maybe log a background action, as the plant DCS would.

        Fires with 30% probability; the user is the automatic controller
        in auto mode and the operator otherwise.
        """
        if self.rng.random() <= 0.7:
            return None

        return self.add_log(
            user="System (Auto)" if self.auto_mode else "Operator",
            action=self.rng.choice(AUTO_ACTIONS),
        )

    # =========================================
    # Controls
    # =========================================

    def update_setpoints(self, changes: Dict[str, float]) -> ValidationResult:
        """
        Change one or more setpoints.

        The merged setpoints are range-guarded first; nothing changes
        when the result is rejected.

        Raises:
            ValueError: If a name is not an operator control
        """
        unknown = sorted(set(changes) - set(SETPOINT_LIMITS))
        if unknown:
            raise ValueError(f"Unknown setpoints: {unknown}")

        merged = {**self.setpoints, **changes}
        result = self.guard.validate_setpoints(merged)

        if result.is_valid:
            self.setpoints = merged
            logger.info("Setpoints updated: %s", changes)
            if result.issues:
                logger.warning(
                    "Setpoints accepted with warnings: %s",
                    ", ".join(i.rule_name for i in result.issues)
                )

        return result

    def apply_changes(self, user: str = "Current Operator") -> OperatorLog:
        """Log that the current setpoints were sent to the plant."""
        logger.info("Setpoints applied by %s: %s", user, self.setpoints)
        return self.add_log(user=user, action="Manual parameter adjustment")

    def reset_setpoints(self) -> Dict[str, float]:
        """Return all setpoints to the design operating point."""
        self.setpoints = default_setpoints()
        logger.info("Setpoints reset to defaults")
        return dict(self.setpoints)

    def set_mode(
        self,
        auto_mode: Optional[bool] = None,
        system_enabled: Optional[bool] = None
    ) -> None:
        """Toggle auto mode and/or the system enable switch."""
        if auto_mode is not None:
            self.auto_mode = auto_mode
        if system_enabled is not None:
            self.system_enabled = system_enabled
        logger.info(
            "Mode changed: auto=%s enabled=%s", self.auto_mode, self.system_enabled
        )

    # =========================================
    # Alarms
    # =========================================

    def get_alarm(self, alarm_id: str) -> Alarm:
        """
        Look up an alarm.

        Raises:
            KeyError: If no alarm has this id
        """
        for alarm in self.alarms:
            if alarm.id == alarm_id:
                return alarm
        raise KeyError(alarm_id)

    def acknowledge_alarm(self, alarm_id: str, user: str = "Current Operator") -> Alarm:
        """
        Mark an alarm acknowledged and log it.

        Raises:
            KeyError: If no alarm has this id
        """
        alarm = self.get_alarm(alarm_id)
        alarm.acknowledged = True

        self.add_log(
            user=user,
            action="Alarm acknowledged",
            parameter="Alarm System",
            status=LogStatus.WARNING,
        )
        logger.info("Alarm %s acknowledged by %s", alarm_id, user)
        return alarm

    @property
    def active_alarm_count(self) -> int:
        return sum(1 for a in self.alarms if not a.acknowledged)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "setpoints": dict(self.setpoints),
            "limits": {name: limit.to_dict() for name, limit in SETPOINT_LIMITS.items()},
            "auto_mode": self.auto_mode,
            "system_enabled": self.system_enabled,
            "active_alarms": self.active_alarm_count,
            "alarms": [a.to_dict() for a in self.alarms],
            "logs": [entry.to_dict() for entry in self.logs],
        }
