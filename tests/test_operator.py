"""
Tests for the Operator Console

Run with: pytest tests/test_operator.py -v
"""

import random

import pytest
from core.operator import MAX_LOG_ENTRIES, OperatorConsole, default_setpoints
from core.validators import ValidationSeverity
from engine.fixtures import LogStatus


NOW = 1_760_000_000_000.0


class FakeClock:
    """Clock advancing one second per call."""

    def __init__(self, start: float = NOW):
        self.now = start

    def __call__(self) -> float:
        self.now += 1000
        return self.now


class TestInitialState:
    """A new console starts at the design point."""

    def setup_method(self):
        self.console = OperatorConsole(rng=random.Random(1), clock=FakeClock())

    def test_default_setpoints(self):
        assert self.console.setpoints == {
            "coal_flow": 360.0,
            "biomass_flow": 18.0,
            "o2_level": 3.45,
            "steam_temp": 538.5,
            "primary_air": 211.0,
        }

    def test_modes(self):
        assert self.console.auto_mode is True
        assert self.console.system_enabled is True

    def test_fixtures_loaded(self):
        assert len(self.console.logs) == 6
        assert len(self.console.alarms) == 4
        assert self.console.active_alarm_count == 1


class TestSetpoints:
    """Range-guarded setpoint changes."""

    def setup_method(self):
        self.console = OperatorConsole(rng=random.Random(2), clock=FakeClock())

    def test_valid_change_applied(self):
        result = self.console.update_setpoints({"o2_level": 3.6})

        assert result.is_valid
        assert self.console.setpoints["o2_level"] == 3.6
        assert self.console.setpoints["coal_flow"] == 360.0

    def test_rejected_change_leaves_state(self):
        result = self.console.update_setpoints({"steam_temp": 600.0})

        assert not result.is_valid
        assert self.console.setpoints == default_setpoints()

    def test_coal_trim_from_defaults_applied(self):
        result = self.console.update_setpoints({"coal_flow": 359.5})

        # Defaults sit on the ceiling, so any coal trim crosses it
        assert result.is_valid
        assert result.status == "accepted_with_warnings"
        assert [i.rule_name for i in result.issues] == ["cofiring_ratio_ceiling"]
        assert self.console.setpoints["coal_flow"] == 359.5
        assert self.console.setpoints["biomass_flow"] == 18.0

    def test_biomass_over_ceiling_warns(self):
        result = self.console.update_setpoints({"coal_flow": 340.0})

        # 18 t/h biomass on 340 t/h coal is 5.3%
        assert result.is_valid
        assert result.issues[0].severity == ValidationSeverity.WARNING
        assert self.console.setpoints["coal_flow"] == 340.0

    def test_biomass_within_ceiling_clean(self):
        result = self.console.update_setpoints({"coal_flow": 340.0, "biomass_flow": 17.0})

        assert result.status == "accepted"
        assert result.issues == []

    def test_unknown_setpoint_raises(self):
        with pytest.raises(ValueError):
            self.console.update_setpoints({"turbine_speed": 3000.0})

    def test_reset(self):
        self.console.update_setpoints({"o2_level": 4.0, "primary_air": 220.0})

        setpoints = self.console.reset_setpoints()

        assert setpoints == default_setpoints()
        assert self.console.setpoints == default_setpoints()

    def test_apply_logs_adjustment(self):
        entry = self.console.apply_changes(user="Operator A")

        assert self.console.logs[0] is entry
        assert entry.action == "Manual parameter adjustment"
        assert entry.user == "Operator A"
        assert entry.status == LogStatus.SUCCESS


class TestMode:
    """Auto mode and system enable switches."""

    def setup_method(self):
        self.console = OperatorConsole(rng=random.Random(3), clock=FakeClock())

    def test_toggle_auto(self):
        self.console.set_mode(auto_mode=False)

        assert self.console.auto_mode is False
        assert self.console.system_enabled is True

    def test_toggle_both(self):
        self.console.set_mode(auto_mode=False, system_enabled=False)

        assert self.console.auto_mode is False
        assert self.console.system_enabled is False


class TestAlarms:
    """Alarm acknowledgement."""

    def setup_method(self):
        self.console = OperatorConsole(rng=random.Random(4), clock=FakeClock())

    def test_acknowledge(self):
        alarm = self.console.acknowledge_alarm("alarm-1", user="Operator B")

        assert alarm.acknowledged is True
        assert self.console.active_alarm_count == 0

    def test_acknowledge_logs_warning(self):
        self.console.acknowledge_alarm("alarm-1")

        entry = self.console.logs[0]
        assert entry.action == "Alarm acknowledged"
        assert entry.parameter == "Alarm System"
        assert entry.status == LogStatus.WARNING
        assert entry.user == "Current Operator"

    def test_unknown_alarm(self):
        with pytest.raises(KeyError):
            self.console.acknowledge_alarm("alarm-99")


class TestActivityLog:
    """Log ordering and cap."""

    def setup_method(self):
        self.console = OperatorConsole(rng=random.Random(5), clock=FakeClock())

    def test_newest_first(self):
        first = self.console.add_log(user="A", action="first")
        second = self.console.add_log(user="A", action="second")

        assert self.console.logs[0] is second
        assert self.console.logs[1] is first
        assert second.timestamp > first.timestamp

    def test_capped(self):
        for i in range(MAX_LOG_ENTRIES + 20):
            self.console.add_log(user="A", action=f"action {i}")

        assert len(self.console.logs) == MAX_LOG_ENTRIES
        assert self.console.logs[0].action == f"action {MAX_LOG_ENTRIES + 19}"

    def test_auto_activity_probability(self):
        added = [self.console.record_auto_activity() for _ in range(200)]
        fired = [entry for entry in added if entry is not None]

        # Roughly three in ten calls add an entry
        assert 30 <= len(fired) <= 90
        assert all(entry.user == "System (Auto)" for entry in fired)

    def test_auto_activity_user_in_manual_mode(self):
        self.console.set_mode(auto_mode=False)

        fired = [
            entry for entry in (self.console.record_auto_activity() for _ in range(50))
            if entry is not None
        ]

        assert fired
        assert all(entry.user == "Operator" for entry in fired)


class TestSerialization:
    """Test console state dictionaries."""

    def test_to_dict(self):
        console = OperatorConsole(rng=random.Random(6), clock=FakeClock())

        d = console.to_dict()

        assert d["active_alarms"] == 1
        assert set(d["limits"]) == set(d["setpoints"])
        assert d["limits"]["coal_flow"]["maximum"] == 380.0
        assert d["alarms"][0]["severity"] == "warning"
        assert d["logs"][0]["status"] in ("success", "warning", "error")
