"""
Static Fixtures for Recommendations and the Operator View

The recommendation page shows predictions from three offline models
(ANN, RSM and LightGBM). No inference runs here: the rows below are the
published results of those models and are returned as-is.

The operator view starts from a fixed activity log and alarm list. Log
entries get a random operator and a random age so the panel looks lived-in.
"""

import random
import time
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


class ModelType(Enum):
    """Offline models whose predictions are shown on the recommendation page."""
    ANN = "ANN"
    RSM = "RSM"
    LIGHTGBM = "LightGBM"


MODEL_DESCRIPTIONS = {
    ModelType.ANN: "Artificial Neural Network (Keras)",
    ModelType.RSM: "Response Surface Methodology (second-order polynomial)",
    ModelType.LIGHTGBM: "Gradient Boosting Machine",
}


@dataclass(frozen=True)
class MLPrediction:
    """
    Optimisation result of one offline model.

    Attributes:
        model: Which model produced the row
        accuracy: Validation accuracy (%)
        predicted_efficiency: Efficiency at the recommended setpoints (%)
        optimal_cofiring_ratio: Recommended biomass share (%), never above 5
        predicted_co2: CO2 at the recommended setpoints (mg/Nm³)
        recommended_steam_temp: Steam temperature target (°C)
        recommended_o2_level: Flue-gas O2 target (%)
        confidence: Model confidence (0-1)
    """
    model: ModelType
    accuracy: float
    predicted_efficiency: float
    optimal_cofiring_ratio: float
    predicted_co2: float
    recommended_steam_temp: float
    recommended_o2_level: float
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["model"] = self.model.value
        data["description"] = MODEL_DESCRIPTIONS[self.model]
        return data


@dataclass(frozen=True)
class Recommendation:
    """An operating recommendation derived from a model prediction."""
    id: int
    title: str
    description: str
    impact: str
    priority: str              # "high" or "medium"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class LogStatus(Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class AlarmSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass
class OperatorLog:
    """One entry of the operator activity log. Timestamp is epoch ms."""
    id: str
    timestamp: float
    user: str
    action: str
    status: LogStatus
    parameter: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


@dataclass
class Alarm:
    """A plant alarm shown on the operator page. Timestamp is epoch ms."""
    id: str
    timestamp: float
    severity: AlarmSeverity
    message: str
    parameter: str
    value: str
    acknowledged: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


# Reference values the recommendation impacts are measured against
REFERENCE_EFFICIENCY = 87.0
REFERENCE_CO2 = 800.0


class FixtureLibrary:
    """
    Library of static fixtures.

    Usage:
        predictions = FixtureLibrary.ml_predictions()
        best = FixtureLibrary.best_prediction()
        recs = FixtureLibrary.recommendations(best)

        logs = FixtureLibrary.operator_logs(rng=random.Random(1))
        alarms = FixtureLibrary.alarms()
    """

    @staticmethod
    def ml_predictions() -> List[MLPrediction]:
        """Predictions of the three models, all capped at 5% cofiring."""
        return [
            MLPrediction(
                model=ModelType.ANN,
                accuracy=94.5,
                predicted_efficiency=88.8,
                optimal_cofiring_ratio=5.0,
                predicted_co2=752.0,
                recommended_steam_temp=538.7,
                recommended_o2_level=3.44,
                confidence=0.92,
            ),
            MLPrediction(
                model=ModelType.RSM,
                accuracy=91.8,
                predicted_efficiency=88.3,
                optimal_cofiring_ratio=4.8,
                predicted_co2=765.0,
                recommended_steam_temp=538.4,
                recommended_o2_level=3.46,
                confidence=0.89,
            ),
            MLPrediction(
                model=ModelType.LIGHTGBM,
                accuracy=95.2,
                predicted_efficiency=89.2,
                optimal_cofiring_ratio=5.0,
                predicted_co2=745.0,
                recommended_steam_temp=538.9,
                recommended_o2_level=3.43,
                confidence=0.94,
            ),
        ]

    @staticmethod
    def get_prediction(model: ModelType) -> Optional[MLPrediction]:
        """Look up the prediction row of one model."""
        for prediction in FixtureLibrary.ml_predictions():
            if prediction.model == model:
                return prediction
        return None

    @staticmethod
    def best_prediction() -> MLPrediction:
        """The most accurate model's prediction (LightGBM in the fixture)."""
        return max(FixtureLibrary.ml_predictions(), key=lambda p: p.accuracy)

    @staticmethod
    def recommendations(prediction: MLPrediction) -> List[Recommendation]:
        """
        Build the recommendation cards for a selected model.

        Impacts are expressed against the reference operating point
        (87% efficiency, 800 mg/Nm³ CO2).
        """
        return [
            Recommendation(
                id=1,
                title="Raise biomass ratio",
                description=(
                    f"Based on the {prediction.model.value} model, run the biomass "
                    f"cofiring ratio at {prediction.optimal_cofiring_ratio:.1f}% "
                    f"for optimal results"
                ),
                impact=f"+{prediction.predicted_efficiency - REFERENCE_EFFICIENCY:.1f}% efficiency",
                priority="high",
            ),
            Recommendation(
                id=2,
                title="Optimise steam temperature",
                description=(
                    f"Set the steam temperature target to "
                    f"{prediction.recommended_steam_temp}°C for maximum performance"
                ),
                impact=f"-{REFERENCE_CO2 - prediction.predicted_co2:.0f} mg/Nm³ CO₂ emission",
                priority="high",
            ),
            Recommendation(
                id=3,
                title="Adjust O₂ level",
                description=(
                    f"Hold flue-gas O₂ at {prediction.recommended_o2_level:.1f}% "
                    f"for optimal combustion"
                ),
                impact="Reduces NOₓ emission by up to 12%",
                priority="medium",
            ),
            Recommendation(
                id=4,
                title="Continuous monitoring",
                description="Monitor key parameters every 5 minutes for early anomaly detection",
                impact="Prevents unplanned downtime",
                priority="medium",
            ),
        ]

    @staticmethod
    def operator_logs(
        rng: Optional[random.Random] = None,
        now_ms: Optional[float] = None
    ) -> List[OperatorLog]:
        """
        Initial operator activity log.

        Entry ``i`` is up to ``2 * i`` hours old and is attributed to
        Operator A or Operator B at random.
        """
        rng = rng or random.Random()
        now = now_ms if now_ms is not None else time.time() * 1000

        actions = [
            ("Adjusted coal flow", "coalFlow", "360.2", "360.5", LogStatus.SUCCESS),
            ("Optimized O2 level", "o2Level", "3.48", "3.45", LogStatus.SUCCESS),
            ("Updated excess air", "excessAir", "22.3", "22.6", LogStatus.SUCCESS),
            ("Reset alarm", "alarm", None, None, LogStatus.WARNING),
            ("Adjusted primary air", "primaryAir", "210.9", "211.5", LogStatus.SUCCESS),
            ("Steam temp stabilization", "steamTemp", "538.2", "538.6", LogStatus.SUCCESS),
        ]

        return [
            OperatorLog(
                id=f"log-{index}",
                timestamp=now - index * 1000 * 60 * rng.random() * 120,
                user="Operator A" if rng.random() > 0.5 else "Operator B",
                action=action,
                parameter=parameter,
                old_value=old_value,
                new_value=new_value,
                status=status,
            )
            for index, (action, parameter, old_value, new_value, status) in enumerate(actions)
        ]

    @staticmethod
    def alarms(now_ms: Optional[float] = None) -> List[Alarm]:
        """Initial alarm list; only the CO2 alarm is unacknowledged."""
        now = now_ms if now_ms is not None else time.time() * 1000
        minute = 1000 * 60

        return [
            Alarm(
                id="alarm-1",
                timestamp=now - 5 * minute,
                severity=AlarmSeverity.WARNING,
                message="CO2 emission approaching upper limit",
                parameter="CO2",
                value="825 mg/Nm3",
                acknowledged=False,
            ),
            Alarm(
                id="alarm-2",
                timestamp=now - 15 * minute,
                severity=AlarmSeverity.INFO,
                message="Cofiring ratio optimized at 5%",
                parameter="Cofiring Ratio",
                value="5.0%",
                acknowledged=True,
            ),
            Alarm(
                id="alarm-3",
                timestamp=now - 45 * minute,
                severity=AlarmSeverity.WARNING,
                message="O2 level slightly high",
                parameter="O2 Flue Gas",
                value="3.48%",
                acknowledged=True,
            ),
            Alarm(
                id="alarm-4",
                timestamp=now - 90 * minute,
                severity=AlarmSeverity.INFO,
                message="Load unit stable at 400 MW",
                parameter="Unit Load",
                value="400.1 MW",
                acknowledged=True,
            ),
        ]
