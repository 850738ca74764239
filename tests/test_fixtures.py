"""
Tests for Recommendation and Operator Fixtures

Run with: pytest tests/test_fixtures.py -v
"""

import random

import pytest
from engine.fixtures import (
    AlarmSeverity,
    FixtureLibrary,
    LogStatus,
    ModelType,
)


NOW = 1_760_000_000_000.0


class TestPredictions:
    """Test the model prediction table."""

    def setup_method(self):
        self.predictions = FixtureLibrary.ml_predictions()

    def test_three_models(self):
        assert [p.model for p in self.predictions] == [
            ModelType.ANN, ModelType.RSM, ModelType.LIGHTGBM
        ]

    def test_cofiring_never_above_limit(self):
        assert all(p.optimal_cofiring_ratio <= 5.0 for p in self.predictions)

    def test_confidence_is_fraction(self):
        assert all(0 < p.confidence <= 1 for p in self.predictions)

    def test_best_is_lightgbm(self):
        best = FixtureLibrary.best_prediction()

        assert best.model == ModelType.LIGHTGBM
        assert best.accuracy == 95.2

    def test_get_prediction(self):
        rsm = FixtureLibrary.get_prediction(ModelType.RSM)

        assert rsm.accuracy == 91.8
        assert rsm.predicted_co2 == 765.0

    def test_to_dict_uses_model_name(self):
        d = FixtureLibrary.best_prediction().to_dict()

        assert d["model"] == "LightGBM"
        assert d["description"] == "Gradient Boosting Machine"


class TestRecommendations:
    """Recommendation cards derived from a prediction."""

    def setup_method(self):
        self.best = FixtureLibrary.best_prediction()
        self.recs = FixtureLibrary.recommendations(self.best)

    def test_four_cards(self):
        assert [r.id for r in self.recs] == [1, 2, 3, 4]

    def test_priorities(self):
        assert [r.priority for r in self.recs] == ["high", "high", "medium", "medium"]

    def test_efficiency_impact(self):
        # 89.2% predicted against the 87% reference
        assert self.recs[0].impact == "+2.2% efficiency"

    def test_co2_impact(self):
        # 745 mg/Nm³ predicted against the 800 reference
        assert self.recs[1].impact.startswith("-55 ")

    def test_description_names_model(self):
        assert "LightGBM" in self.recs[0].description
        assert "5.0%" in self.recs[0].description

    def test_other_model_changes_text(self):
        rsm = FixtureLibrary.recommendations(FixtureLibrary.get_prediction(ModelType.RSM))

        assert rsm[0].impact == "+1.3% efficiency"
        assert "RSM" in rsm[0].description


class TestOperatorLogs:
    """Initial activity log."""

    def setup_method(self):
        self.logs = FixtureLibrary.operator_logs(rng=random.Random(4), now_ms=NOW)

    def test_six_entries(self):
        assert [entry.id for entry in self.logs] == [f"log-{i}" for i in range(6)]

    def test_users(self):
        assert {entry.user for entry in self.logs} <= {"Operator A", "Operator B"}

    def test_reset_alarm_is_warning(self):
        reset = next(entry for entry in self.logs if entry.action == "Reset alarm")

        assert reset.status == LogStatus.WARNING
        assert reset.old_value is None

    def test_ages_are_bounded(self):
        for i, entry in enumerate(self.logs):
            assert NOW - i * 2 * 60 * 60 * 1000 <= entry.timestamp <= NOW

    def test_seeded_logs_repeat(self):
        again = FixtureLibrary.operator_logs(rng=random.Random(4), now_ms=NOW)

        assert [e.to_dict() for e in again] == [e.to_dict() for e in self.logs]

    def test_to_dict_status_value(self):
        assert self.logs[0].to_dict()["status"] == "success"


class TestAlarms:
    """Initial alarm list."""

    def setup_method(self):
        self.alarms = FixtureLibrary.alarms(now_ms=NOW)

    def test_four_alarms(self):
        assert [a.id for a in self.alarms] == ["alarm-1", "alarm-2", "alarm-3", "alarm-4"]

    def test_only_first_unacknowledged(self):
        assert [a.acknowledged for a in self.alarms] == [False, True, True, True]

    def test_first_is_co2_warning(self):
        alarm = self.alarms[0]

        assert alarm.severity == AlarmSeverity.WARNING
        assert alarm.timestamp == pytest.approx(NOW - 5 * 60 * 1000)
        assert alarm.to_dict()["severity"] == "warning"

    def test_fresh_copies(self):
        first = FixtureLibrary.alarms(now_ms=NOW)
        first[0].acknowledged = True

        assert FixtureLibrary.alarms(now_ms=NOW)[0].acknowledged is False
