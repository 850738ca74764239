"""
KPI Classifier for the Boiler Cofiring Process

Reduces a telemetry sample to the handful of values shown on the KPI
cards, plus a status used to colour the header badge.

Rules (evaluated in order, later rules override earlier ones):
- optimal by default
- warning if efficiency < 86% or CO2 > 820 mg/Nm³
- critical if efficiency < 84% or CO2 > 860 mg/Nm³

The critical check runs unconditionally after the warning check, so a
sample can go straight from optimal to critical.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from engine.generator import BoilerDataGenerator, BoilerSample

logger = logging.getLogger(__name__)


class KPIStatus(Enum):
    """Status shown on the dashboard header."""
    OPTIMAL = "optimal"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass
class KPIThresholds:
    """Efficiency floors (%) and CO2 ceilings (mg/Nm³) for each status."""
    warning_efficiency: float = 86.0
    warning_co2: float = 820.0
    critical_efficiency: float = 84.0
    critical_co2: float = 860.0


@dataclass
class KPISnapshot:
    """
    Reduced view of a sample with its status.

    ``reasons`` lists which limits were crossed; it is empty when the
    status is optimal.
    """
    steam_temp: float
    drum_pressure: float
    efficiency: float
    co2_emission: float
    cofiring_ratio: float
    load_unit: float
    status: KPIStatus
    timestamp: Optional[float] = None
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "steam_temp": self.steam_temp,
            "drum_pressure": self.drum_pressure,
            "efficiency": self.efficiency,
            "co2_emission": self.co2_emission,
            "cofiring_ratio": self.cofiring_ratio,
            "load_unit": self.load_unit,
            "status": self.status.value,
            "reasons": list(self.reasons),
        }


class KPIClassifier:
    """
    Classifies samples into optimal / warning / critical.

    Example:
        classifier = KPIClassifier()
        snapshot = classifier.current()
        print(f"{snapshot.efficiency:.1f}% -> {snapshot.status.value}")
    """

    def __init__(
        self,
        thresholds: Optional[KPIThresholds] = None,
        generator: Optional[BoilerDataGenerator] = None
    ):
        """
        Initialize the classifier.

        Args:
            thresholds: Status limits (uses defaults if None)
            generator: Source of fresh samples for ``current()``
        """
        self.thresholds = thresholds or KPIThresholds()
        self.generator = generator or BoilerDataGenerator()

    def classify_values(self, efficiency: float, co2_emission: float) -> KPIStatus:
        """Apply the status rules to an efficiency / CO2 pair."""
        t = self.thresholds

        status = KPIStatus.OPTIMAL
        if efficiency < t.warning_efficiency or co2_emission > t.warning_co2:
            status = KPIStatus.WARNING
        if efficiency < t.critical_efficiency or co2_emission > t.critical_co2:
            status = KPIStatus.CRITICAL

        return status

    def classify(self, sample: BoilerSample) -> KPISnapshot:
        """
        Build a KPI snapshot from an existing sample.

        Args:
            sample: Telemetry sample to reduce

        Returns:
            KPISnapshot with status and reasons
        """
        status = self.classify_values(sample.efficiency, sample.co2_emission)

        snapshot = KPISnapshot(
            timestamp=sample.timestamp,
            steam_temp=sample.steam_temp,
            drum_pressure=sample.drum_pressure,
            efficiency=sample.efficiency,
            co2_emission=sample.co2_emission,
            cofiring_ratio=sample.cofiring_ratio,
            load_unit=sample.load_unit,
            status=status,
            reasons=self._reasons(sample.efficiency, sample.co2_emission),
        )

        if status != KPIStatus.OPTIMAL:
            logger.debug("KPI status %s: %s", status.value, "; ".join(snapshot.reasons))

        return snapshot

    def current(self) -> KPISnapshot:
        """Draw a new sample and classify it. Not a read of shared state."""
        return self.classify(self.generator.generate_sample())

    def _reasons(self, efficiency: float, co2_emission: float) -> List[str]:
        t = self.thresholds
        reasons = []

        if efficiency < t.critical_efficiency:
            reasons.append(
                f"Efficiency {efficiency:.2f}% below critical limit {t.critical_efficiency:g}%"
            )
        elif efficiency < t.warning_efficiency:
            reasons.append(
                f"Efficiency {efficiency:.2f}% below warning limit {t.warning_efficiency:g}%"
            )

        if co2_emission > t.critical_co2:
            reasons.append(
                f"CO2 {co2_emission:.0f} mg/Nm³ above critical limit {t.critical_co2:g} mg/Nm³"
            )
        elif co2_emission > t.warning_co2:
            reasons.append(
                f"CO2 {co2_emission:.0f} mg/Nm³ above warning limit {t.warning_co2:g} mg/Nm³"
            )

        return reasons


def get_current_kpi(generator: Optional[BoilerDataGenerator] = None) -> KPISnapshot:
    """
    Convenience function returning the KPI snapshot of a fresh draw.

    Args:
        generator: Optional generator (a default unseeded one if None)

    Returns:
        KPISnapshot

    Example:
        kpi = get_current_kpi()
        if kpi.status is KPIStatus.CRITICAL:
            print(kpi.reasons)
    """
    return KPIClassifier(generator=generator).current()
