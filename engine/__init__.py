"""
Engine Module - Synthetic Data Generation

This module produces all the data the boiler cofiring monitor shows.
There is no plant connection: telemetry is synthesized on demand and the
model predictions, operator logs and alarms are static fixtures.

Key Components:
- BoilerDataGenerator: Generates single samples and 100-point series
- BoilerSample / BoilerSeries: Immutable telemetry value objects
- FixtureLibrary: ML predictions, recommendations, logs and alarms

Usage:
    from engine import BoilerDataGenerator, FixtureLibrary

    generator = BoilerDataGenerator(random_seed=7)
    sample = generator.generate_sample()
    week = generator.generate_series(duration_hours=168)

    best = FixtureLibrary.best_prediction()
    cards = FixtureLibrary.recommendations(best)
"""

from .fixtures import (
    Alarm,
    AlarmSeverity,
    FixtureLibrary,
    LogStatus,
    MLPrediction,
    ModelType,
    OperatorLog,
    Recommendation,
)
from .generator import (
    BoilerBaseline,
    BoilerDataGenerator,
    BoilerSample,
    BoilerSeries,
    SAMPLE_LIMITS,
    SERIES_LIMITS,
    SERIES_POINTS,
    generate_sample,
    generate_series,
)

__all__ = [
    # Fixtures
    "Alarm",
    "AlarmSeverity",
    "FixtureLibrary",
    "LogStatus",
    "MLPrediction",
    "ModelType",
    "OperatorLog",
    "Recommendation",

    # Data Generator
    "BoilerBaseline",
    "BoilerDataGenerator",
    "BoilerSample",
    "BoilerSeries",
    "SAMPLE_LIMITS",
    "SERIES_LIMITS",
    "SERIES_POINTS",
    "generate_sample",
    "generate_series",
]

__version__ = "0.1.0"
