"""
Tests for the REST API

Endpoints are exercised through FastAPI's TestClient with a seeded
generator, a fixed clock and a fresh operator console per test.

Run with: pytest tests/test_api.py -v
"""

import csv
import io
import random

import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.routes.operator import get_console
from api.routes.telemetry import get_generator
from core.operator import OperatorConsole
from engine.generator import BoilerDataGenerator


NOW = 1_760_000_000_000.0


def fixed_clock():
    return NOW


class APITestCase:
    """Base class wiring deterministic dependencies into the app."""

    def setup_method(self):
        self.generator = BoilerDataGenerator(random_seed=42, clock=fixed_clock)
        self.console = OperatorConsole(rng=random.Random(42), clock=fixed_clock)

        app.dependency_overrides[get_generator] = lambda: self.generator
        app.dependency_overrides[get_console] = lambda: self.console

        self.client = TestClient(app)

    def teardown_method(self):
        app.dependency_overrides.clear()


class TestSystemEndpoints(APITestCase):
    """Root, health, liveness and info."""

    def test_root(self):
        response = self.client.get("/")

        assert response.status_code == 200
        assert response.json()["api_base"] == "/api/v1"

    def test_health(self):
        response = self.client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["components"]["telemetry_generator"] == "ok"
        assert data["components"]["operator_console"] == "ok"

    def test_health_leaves_random_stream(self):
        state = self.generator.rng.getstate()

        self.client.get("/health")

        assert self.generator.rng.getstate() == state

    def test_live(self):
        assert self.client.get("/live").json() == {"alive": True}

    def test_info(self):
        data = self.client.get("/info").json()

        assert data["plant"]["series_points"] == 100
        assert data["features"]["persistence"] is False


class TestTelemetryEndpoints(APITestCase):
    """Samples, series and KPI."""

    def test_sample(self):
        response = self.client.get("/api/v1/telemetry/sample")

        assert response.status_code == 200
        data = response.json()
        assert data["cofiring_ratio"] == 5.0
        assert data["timestamp"] == NOW
        assert 82 <= data["efficiency"] <= 92

    def test_series_default(self):
        data = self.client.get("/api/v1/telemetry/series").json()

        assert data["duration_hours"] == 24
        assert data["point_count"] == 100
        assert len(data["samples"]) == 100
        assert data["spacing_ms"] == 864_000

    def test_series_week(self):
        data = self.client.get("/api/v1/telemetry/series", params={"hours": 168}).json()

        assert data["spacing_ms"] == 7 * 864_000
        assert data["points_per_hour"] == pytest.approx(100 / 168)
        timestamps = [s["timestamp"] for s in data["samples"]]
        assert timestamps == sorted(timestamps)
        assert timestamps[-1] <= NOW

    def test_series_rejects_zero_hours(self):
        response = self.client.get("/api/v1/telemetry/series", params={"hours": 0})

        assert response.status_code == 422

    def test_series_rejects_negative_hours(self):
        response = self.client.get("/api/v1/telemetry/series", params={"hours": -24})

        assert response.status_code == 422

    def test_series_export(self):
        response = self.client.get("/api/v1/telemetry/series/export", params={"hours": 24})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "boiler_series_24h.csv" in response.headers["content-disposition"]

        rows = list(csv.DictReader(io.StringIO(response.text)))
        assert len(rows) == 100
        assert "efficiency" in rows[0]

    def test_kpi(self):
        response = self.client.get("/api/v1/telemetry/kpi")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] in ("optimal", "warning", "critical")
        assert data["cofiring_ratio"] == 5.0
        if data["status"] == "optimal":
            assert data["reasons"] == []

    def test_parameters(self):
        data = self.client.get("/api/v1/telemetry/parameters").json()

        assert len(data) == 9
        assert data[0]["key"] == "steam_temp"

    def test_parameters_search(self):
        data = self.client.get("/api/v1/telemetry/parameters", params={"search": "flow"}).json()

        assert {p["key"] for p in data} == {"coal_flow", "biomass_flow"}


class TestSummaryEndpoints(APITestCase):
    """Detail-view summaries and correlation."""

    def test_summary_window(self):
        data = self.client.get(
            "/api/v1/telemetry/summary",
            params={"hours": 168, "window_hours": 24}
        ).json()

        assert data["duration_hours"] == 168
        assert data["window_hours"] == 24
        assert data["point_count"] == 14
        assert len(data["parameters"]) == 9

        efficiency = next(p for p in data["parameters"] if p["key"] == "efficiency")
        assert efficiency["unit"] == "%"
        assert efficiency["min"] <= efficiency["avg"] <= efficiency["max"]
        assert efficiency["trend"] in ("up", "down", "stable")

    def test_summary_defaults_to_whole_series(self):
        data = self.client.get("/api/v1/telemetry/summary").json()

        assert data["duration_hours"] == 168
        assert data["window_hours"] == 168
        assert data["point_count"] == 100

    def test_summary_search(self):
        data = self.client.get(
            "/api/v1/telemetry/summary",
            params={"hours": 24, "search": "Level"}
        ).json()

        assert [p["key"] for p in data["parameters"]] == ["o2_level", "co_level", "nox_level"]

    def test_correlation(self):
        data = self.client.get("/api/v1/telemetry/correlation", params={"hours": 24}).json()

        assert len(data["keys"]) == 9
        for key in data["keys"]:
            assert data["matrix"][key][key] == pytest.approx(1.0)


class TestRecommendationEndpoints(APITestCase):
    """Model predictions and recommendation cards."""

    def test_predictions(self):
        data = self.client.get("/api/v1/recommendations/predictions").json()

        assert [p["model"] for p in data] == ["ANN", "RSM", "LightGBM"]

    def test_best(self):
        data = self.client.get("/api/v1/recommendations/best").json()

        assert data["model"] == "LightGBM"
        assert data["accuracy"] == 95.2

    def test_recommendations_default_to_best(self):
        data = self.client.get("/api/v1/recommendations").json()

        assert data["prediction"]["model"] == "LightGBM"
        assert len(data["recommendations"]) == 4

    def test_recommendations_case_insensitive(self):
        data = self.client.get("/api/v1/recommendations", params={"model": "ann"}).json()

        assert data["prediction"]["model"] == "ANN"

    def test_unknown_model(self):
        response = self.client.get("/api/v1/recommendations", params={"model": "XGBoost"})

        assert response.status_code == 404
        body = response.json()
        assert body["error"] is True
        assert body["status_code"] == 404
        assert "XGBoost" in body["message"]


class TestOperatorEndpoints(APITestCase):
    """Operator control panel."""

    def test_state(self):
        data = self.client.get("/api/v1/operator/state").json()

        assert data["setpoints"]["coal_flow"] == 360.0
        assert data["limits"]["o2_level"]["maximum"] == 6.0
        assert data["auto_mode"] is True
        assert data["active_alarms"] == 1
        assert len(data["alarms"]) == 4
        assert len(data["logs"]) == 6

    def test_state_read_leaves_log_unchanged(self):
        for _ in range(20):
            self.client.get("/api/v1/operator/state")

        assert len(self.console.logs) == 6

    def test_activity_tick(self):
        sizes = [
            len(self.client.post("/api/v1/operator/activity/tick").json()["logs"])
            for _ in range(40)
        ]

        assert sizes == sorted(sizes)
        assert 6 < sizes[-1] <= 46
        assert self.console.logs[0].user == "System (Auto)"

    def test_coal_trim_from_defaults(self):
        response = self.client.put("/api/v1/operator/controls", json={"coal_flow": 359.5})

        assert response.status_code == 200
        assert response.json()["setpoints"]["coal_flow"] == 359.5

    def test_update_controls(self):
        response = self.client.put("/api/v1/operator/controls", json={"o2_level": 3.8})

        assert response.status_code == 200
        assert response.json()["setpoints"]["o2_level"] == 3.8
        assert self.console.setpoints["o2_level"] == 3.8

    def test_update_controls_rejected(self):
        response = self.client.put("/api/v1/operator/controls", json={"steam_temp": 600.0})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] is True
        assert body["message"]["status"] == "rejected"
        assert self.console.setpoints["steam_temp"] == 538.5

    def test_apply_controls(self):
        response = self.client.post(
            "/api/v1/operator/controls/apply", json={"user": "Operator A"}
        )

        assert response.status_code == 200
        assert response.json()["action"] == "Manual parameter adjustment"
        assert self.console.logs[0].user == "Operator A"

    def test_apply_controls_without_body(self):
        response = self.client.post("/api/v1/operator/controls/apply")

        assert response.status_code == 200
        assert response.json()["user"] == "Current Operator"

    def test_reset_controls(self):
        self.client.put("/api/v1/operator/controls", json={"primary_air": 230.0})

        data = self.client.post("/api/v1/operator/controls/reset").json()

        assert data["setpoints"]["primary_air"] == 211.0

    def test_set_mode(self):
        data = self.client.put("/api/v1/operator/mode", json={"auto_mode": False}).json()

        assert data["auto_mode"] is False
        assert data["system_enabled"] is True

    def test_acknowledge_alarm(self):
        response = self.client.post("/api/v1/operator/alarms/alarm-1/acknowledge")

        assert response.status_code == 200
        assert response.json()["acknowledged"] is True
        assert self.console.active_alarm_count == 0
        assert self.console.logs[0].action == "Alarm acknowledged"

    def test_acknowledge_unknown_alarm(self):
        response = self.client.post("/api/v1/operator/alarms/alarm-99/acknowledge")

        assert response.status_code == 404
        assert response.json()["error"] is True

    def test_validate_manual_entry(self):
        response = self.client.post("/api/v1/operator/manual-entry/validate", json={
            "coal_flow": 360.0,
            "biomass_flow": 18.0,
            "steam_temp": 538.5,
        })

        assert response.status_code == 200
        assert response.json()["status"] == "accepted"

    def test_validate_manual_entry_rejected(self):
        response = self.client.post("/api/v1/operator/manual-entry/validate", json={
            "coal_flow": 360.0,
            "biomass_flow": 30.0,
        })

        data = response.json()
        assert data["is_valid"] is False
        assert data["error_count"] == 1
        assert data["issues"][0]["rule_name"] == "cofiring_ratio_ceiling"


class TestAuthEndpoints(APITestCase):
    """Login."""

    def test_login(self):
        response = self.client.post(
            "/api/v1/auth/login", json={"username": "operator", "password": "operator123"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["role"] == "operator"
        assert data["token"].startswith("session_")

    def test_bad_password(self):
        response = self.client.post(
            "/api/v1/auth/login", json={"username": "admin", "password": "wrong"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid username or password"

    def test_missing_password(self):
        response = self.client.post("/api/v1/auth/login", json={"username": "admin"})

        assert response.status_code == 422
