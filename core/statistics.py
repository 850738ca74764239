"""
Series Statistics for the Detail View

The detail page reduces a long series to a card per parameter:
average, maximum, minimum, latest value and a trend arrow. It also
shows a correlation heat map across the parameters.

Trend is a simple last-vs-previous comparison, not a regression:
- up: latest > previous
- down: latest < previous
- stable: equal, or fewer than two points
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from engine.generator import BoilerSample, BoilerSeries


class TrendDirection(Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class ParameterSpec:
    """Display metadata for one telemetry field."""
    key: str
    label: str
    unit: str
    target: str
    color: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "key": self.key,
            "label": self.label,
            "unit": self.unit,
            "target": self.target,
            "color": self.color,
        }


BOILER_PARAMETERS: List[ParameterSpec] = [
    ParameterSpec("steam_temp", "Steam Temperature", "°C", "538-540", "#f97316"),
    ParameterSpec("drum_pressure", "Drum Pressure", "bar", "248-249", "#3b82f6"),
    ParameterSpec("coal_flow", "Coal Flow", "t/h", "359-361", "#334155"),
    ParameterSpec("biomass_flow", "Biomass Flow", "t/h", "17-19", "#10b981"),
    ParameterSpec("efficiency", "Efficiency", "%", ">85", "#8b5cf6"),
    ParameterSpec("co2_emission", "CO₂ Emission", "mg/Nm³", "<800", "#ef4444"),
    ParameterSpec("o2_level", "O₂ Level", "%", "3-4", "#06b6d4"),
    ParameterSpec("co_level", "CO Level", "ppm", "<50", "#f59e0b"),
    ParameterSpec("nox_level", "NOₓ Level", "mg/Nm³", "<200", "#ec4899"),
]


@dataclass
class ParameterSummary:
    """Summary statistics of one parameter over a window."""
    key: str
    avg: float
    max: float
    min: float
    latest: float
    trend: TrendDirection

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "avg": self.avg,
            "max": self.max,
            "min": self.min,
            "latest": self.latest,
            "trend": self.trend.value,
        }


def trend_direction(values: Sequence[float]) -> TrendDirection:
    """Compare the last value with the one before it."""
    if len(values) < 2:
        return TrendDirection.STABLE

    latest, previous = values[-1], values[-2]
    if latest > previous:
        return TrendDirection.UP
    elif latest < previous:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


def summarize_values(key: str, values: Sequence[float]) -> ParameterSummary:
    """
    Summarise a list of values.

    Args:
        key: Parameter name carried into the result
        values: Values in time order, oldest first

    Returns:
        ParameterSummary

    Raises:
        ValueError: If values is empty
    """
    if not values:
        raise ValueError(f"No values to summarise for {key}")

    return ParameterSummary(
        key=key,
        avg=sum(values) / len(values),
        max=max(values),
        min=min(values),
        latest=values[-1],
        trend=trend_direction(values),
    )


def search_parameters(
    term: str = "",
    parameters: Optional[List[ParameterSpec]] = None
) -> List[ParameterSpec]:
    """Filter parameters whose label contains ``term`` (case-insensitive)."""
    parameters = parameters if parameters is not None else BOILER_PARAMETERS
    needle = term.strip().lower()
    return [p for p in parameters if needle in p.label.lower()]


def summarize_samples(
    samples: Sequence[BoilerSample],
    parameters: Optional[List[ParameterSpec]] = None
) -> List[ParameterSummary]:
    """Summarise every parameter over a list of samples."""
    parameters = parameters if parameters is not None else BOILER_PARAMETERS
    return [
        summarize_values(p.key, [getattr(s, p.key) for s in samples])
        for p in parameters
    ]


def summarize_window(
    series: BoilerSeries,
    window_hours: Optional[float] = None,
    search: str = ""
) -> List[ParameterSummary]:
    """
    Summarise the trailing ``window_hours`` of a series.

    The window is cut with the series' own points-per-hour, so asking for
    24 hours of a 168-hour series uses the last 14 points.

    Args:
        series: Series to reduce
        window_hours: Trailing window (whole series if None)
        search: Optional label filter

    Returns:
        One summary per matching parameter
    """
    samples = series.last_hours(window_hours) if window_hours else list(series)
    return summarize_samples(samples, search_parameters(search))


def correlation_matrix(
    samples: Sequence[BoilerSample],
    keys: Optional[List[str]] = None
) -> Dict[str, Dict[str, float]]:
    """
    Pearson correlation between parameters.

    A constant parameter has no defined correlation with anything;
    its off-diagonal entries are reported as 0.0 and its diagonal as 1.0.

    Args:
        samples: Samples to correlate (at least two)
        keys: Parameter names (defaults to the catalogue)

    Returns:
        Nested mapping ``matrix[row_key][col_key]``

    Raises:
        ValueError: If fewer than two samples are given
    """
    if len(samples) < 2:
        raise ValueError("Correlation needs at least two samples")

    keys = keys or [p.key for p in BOILER_PARAMETERS]
    data = np.array([[getattr(s, k) for s in samples] for k in keys], dtype=float)

    with np.errstate(divide="ignore", invalid="ignore"):
        matrix = np.corrcoef(data)
    matrix = np.nan_to_num(matrix, nan=0.0)
    np.fill_diagonal(matrix, 1.0)

    return {
        row_key: {col_key: float(matrix[i, j]) for j, col_key in enumerate(keys)}
        for i, row_key in enumerate(keys)
    }
