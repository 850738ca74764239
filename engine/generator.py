"""
Synthetic Data Generator for Boiler Cofiring Telemetry

Generates realistic boiler readings for the monitoring dashboard and API.
There is no plant connection: every value is drawn from narrow ranges around
a design operating point, with derived fields computed from the independent
ones so that the correlation structure stays intact.

Features:
- Single "now" samples for live KPI cards
- Fixed 100-point series for trend charts (duration only changes spacing)
- Smooth periodic component per field plus independent noise
- Clamping of bounded fields to documented windows
- Injectable, seedable random source and clock
- Export to CSV or plain dictionaries
"""

import csv
import logging
import math
import random
import time
from dataclasses import dataclass, asdict, fields
from typing import Callable, Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


SERIES_POINTS = 100
MS_PER_HOUR = 60 * 60 * 1000

# Clamp windows for single samples
SAMPLE_LIMITS: Dict[str, Tuple[float, float]] = {
    "efficiency": (82.0, 92.0),
    "co2_emission": (700.0, 900.0),
    "nox_level": (150.0, 220.0),
    "co_level": (25.0, 70.0),
}

# Series windows are tighter than the sample windows
SERIES_LIMITS: Dict[str, Tuple[float, float]] = {
    "efficiency": (83.0, 92.0),
    "co2_emission": (720.0, 880.0),
    "nox_level": (155.0, 215.0),
    "co_level": (28.0, 65.0),
}


def clamp(value: float, limits: Tuple[float, float]) -> float:
    """Clamp a value into a (min, max) window."""
    low, high = limits
    return max(low, min(high, value))


def _now_ms() -> float:
    return time.time() * 1000.0


@dataclass
class BoilerBaseline:
    """
    Design operating point of a 400 MW coal unit cofiring biomass.

    The reference values (steam temperature, O2) are the points the
    efficiency and emission formulas are linearised around; the other
    values are the centres of the sampled ranges.
    """
    # Fuel and load
    load_mw: float = 400.0
    coal_flow_tph: float = 360.0
    cofiring_ratio: float = 5.0        # % biomass by mass, fixed ceiling

    # Combustion air
    primary_air_tph: float = 211.0
    secondary_air_tph: float = 451.0
    excess_air_pct: float = 22.5

    # Steam side
    steam_temp_c: float = 538.5
    drum_pressure_bar: float = 248.7

    # Flue gas
    o2_level_pct: float = 3.45

    # Linearisation references
    reference_steam_temp_c: float = 538.0
    reference_o2_pct: float = 3.45

    # Formula intercepts
    base_efficiency: float = 87.0
    base_co2: float = 800.0
    base_nox: float = 180.0
    base_co: float = 40.0


@dataclass(frozen=True)
class BoilerSample:
    """One instant of boiler telemetry. Timestamp is epoch milliseconds."""
    timestamp: float
    steam_temp: float          # °C
    drum_pressure: float       # bar
    coal_flow: float           # t/h
    biomass_flow: float        # t/h
    load_unit: float           # MW
    primary_air: float         # t/h
    secondary_air: float       # t/h
    excess_air: float          # %
    efficiency: float          # %
    co2_emission: float        # mg/Nm³
    o2_level: float            # %
    co_level: float            # ppm
    nox_level: float           # mg/Nm³
    cofiring_ratio: float      # %

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]


@dataclass(frozen=True)
class BoilerSeries:
    """
    A fixed-cardinality series of samples spanning ``duration_hours``.

    Granularity is always duration / 100. Use ``points_per_hour`` or
    ``last_hours`` to take an exact window instead of guessing a
    divisor for the slice length.
    """
    duration_hours: float
    spacing_ms: float
    samples: Tuple[BoilerSample, ...]

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[BoilerSample]:
        return iter(self.samples)

    def __getitem__(self, index):
        return self.samples[index]

    @property
    def points_per_hour(self) -> float:
        """Number of points covering one hour of this series."""
        return len(self.samples) / self.duration_hours

    @property
    def timestamps(self) -> List[float]:
        return [s.timestamp for s in self.samples]

    def values(self, field_name: str) -> List[float]:
        """Return one field across the whole series."""
        return [getattr(s, field_name) for s in self.samples]

    def last_hours(self, hours: float) -> List[BoilerSample]:
        """
        Return the trailing samples covering ``hours``.

        The count is ``floor(hours * points_per_hour)``, at least one point
        and at most the full series.

        Args:
            hours: Window length in hours

        Returns:
            List of samples, oldest first
        """
        count = int(math.floor(hours * self.points_per_hour))
        count = max(1, min(len(self.samples), count))
        return list(self.samples[-count:])

    def to_dicts(self) -> List[Dict[str, float]]:
        return [s.to_dict() for s in self.samples]

    def to_csv(self, filepath: str) -> str:
        """
        Save the series as CSV.

        Args:
            filepath: File path to save CSV

        Returns:
            Filepath of saved CSV
        """
        with open(filepath, "w", newline="") as f:
            write_series_csv(self, f)
        return filepath


def write_series_csv(series: BoilerSeries, stream) -> None:
    """Write a series as CSV to an open text stream."""
    writer = csv.DictWriter(stream, fieldnames=BoilerSample.field_names())
    writer.writeheader()
    writer.writerows(series.to_dicts())


class BoilerDataGenerator:
    """
    Generator for synthetic boiler telemetry.

    Every call is an independent draw: the generator keeps no simulation
    state between calls, only its random source and clock.

    Example:
        gen = BoilerDataGenerator(random_seed=42)

        now = gen.generate_sample()
        print(f"{now.efficiency:.2f}% at {now.load_unit:.1f} MW")

        week = gen.generate_series(duration_hours=168)
        last_day = week.last_hours(24)
    """

    def __init__(
        self,
        baseline: Optional[BoilerBaseline] = None,
        rng: Optional[random.Random] = None,
        random_seed: Optional[int] = None,
        clock: Optional[Callable[[], float]] = None
    ):
        """
        Initialize the generator.

        Args:
            baseline: Design operating point (uses defaults if None)
            rng: Random source to draw from (takes precedence over the seed)
            random_seed: Seed for a private random source
            clock: Callable returning the current epoch time in milliseconds
        """
        self.baseline = baseline or BoilerBaseline()
        self.rng = rng if rng is not None else random.Random(random_seed)
        self.clock = clock or _now_ms

    def generate_sample(self) -> BoilerSample:
        """
        Generate one sample representing "now".

        Independent fields are drawn first; efficiency, CO2, NOx and CO
        are then computed from them and clamped.

        Returns:
            Fully populated BoilerSample
        """
        b = self.baseline
        u = self.rng.uniform

        # =========================================
        # Independent fields
        # =========================================
        load_unit = b.load_mw + u(-0.5, 0.4)
        coal_flow = b.coal_flow_tph + u(-0.5, 0.4)
        cofiring_ratio = b.cofiring_ratio
        biomass_flow = coal_flow * cofiring_ratio / 100

        primary_air = b.primary_air_tph + u(-0.5, 0.6)
        secondary_air = b.secondary_air_tph + u(-0.5, 0.7)
        excess_air = b.excess_air_pct + u(-0.3, 0.5)
        steam_temp = b.steam_temp_c + u(-0.4, 0.5)
        drum_pressure = b.drum_pressure_bar + u(-0.4, 0.4)
        o2_level = b.o2_level_pct + u(-0.03, 0.03)

        # =========================================
        # Derived fields
        # =========================================
        efficiency_base = (
            b.base_efficiency
            + cofiring_ratio * 0.3
            + (steam_temp - b.reference_steam_temp_c) * 0.2
            + (b.reference_o2_pct - o2_level) * 0.5
        )
        efficiency = efficiency_base + u(-0.75, 0.75)

        # Biomass displaces fossil carbon
        co2_base = (
            b.base_co2
            - cofiring_ratio * 10
            + (o2_level - b.reference_o2_pct) * 15
        )
        co2_emission = co2_base + u(-10.0, 10.0)

        nox_level = b.base_nox + (steam_temp - b.reference_steam_temp_c) * 2 + u(0.0, 15.0)
        co_level = b.base_co + u(0.0, 15.0)

        return BoilerSample(
            timestamp=self.clock(),
            steam_temp=steam_temp,
            drum_pressure=drum_pressure,
            coal_flow=coal_flow,
            biomass_flow=biomass_flow,
            load_unit=load_unit,
            primary_air=primary_air,
            secondary_air=secondary_air,
            excess_air=excess_air,
            efficiency=clamp(efficiency, SAMPLE_LIMITS["efficiency"]),
            co2_emission=clamp(co2_emission, SAMPLE_LIMITS["co2_emission"]),
            o2_level=o2_level,
            co_level=clamp(co_level, SAMPLE_LIMITS["co_level"]),
            nox_level=clamp(nox_level, SAMPLE_LIMITS["nox_level"]),
            cofiring_ratio=cofiring_ratio,
        )

    def generate_series(self, duration_hours: float = 24) -> BoilerSeries:
        """
        Generate a 100-point series ending just before "now".

        Point ``i`` is stamped ``now - (100 - i) * spacing`` where spacing is
        ``duration_hours * 3_600_000 / 100`` ms. The duration is not
        validated here.

        Args:
            duration_hours: Span of the series in hours

        Returns:
            BoilerSeries with ascending timestamps
        """
        now = self.clock()
        spacing = duration_hours * MS_PER_HOUR / SERIES_POINTS

        samples = tuple(
            self._series_point(i, now - (SERIES_POINTS - i) * spacing)
            for i in range(SERIES_POINTS)
        )

        logger.debug(
            "Generated %d-point series over %sh (spacing %.0f ms)",
            len(samples), duration_hours, spacing
        )

        return BoilerSeries(
            duration_hours=duration_hours,
            spacing_ms=spacing,
            samples=samples,
        )

    def _series_point(self, i: int, timestamp: float) -> BoilerSample:
        """
        Generate series point ``i``.

        Each field gets its own sine/cosine period so consecutive points
        drift smoothly instead of looking like white noise.
        """
        b = self.baseline
        u = self.rng.uniform

        load_unit = b.load_mw + math.sin(i / 20) * 0.3 + u(-0.25, 0.25)
        coal_flow = b.coal_flow_tph + math.sin(i / 15) * 0.4 + u(-0.3, 0.3)
        cofiring_ratio = b.cofiring_ratio
        biomass_flow = coal_flow * cofiring_ratio / 100

        primary_air = b.primary_air_tph + math.sin(i / 18) * 0.5 + u(-0.4, 0.4)
        secondary_air = b.secondary_air_tph + math.cos(i / 22) * 0.6 + u(-0.45, 0.45)
        excess_air = b.excess_air_pct + math.sin(i / 25) * 0.4 + u(0.0, 0.5)
        steam_temp = b.steam_temp_c + math.sin(i / 12) * 0.4 + u(-0.3, 0.3)
        drum_pressure = b.drum_pressure_bar + math.cos(i / 16) * 0.35 + u(-0.25, 0.25)
        o2_level = b.o2_level_pct + math.sin(i / 14) * 0.02 + u(-0.02, 0.02)

        efficiency = (
            b.base_efficiency + 0.5
            + math.sin(i / 20) * 1.5
            + cofiring_ratio * 0.3
            + u(-0.6, 0.6)
        )
        co2_emission = (
            b.base_co2
            - cofiring_ratio * 10
            + math.sin(i / 18) * 15
            + u(-9.0, 9.0)
        )
        nox_level = b.base_nox + 5 + math.sin(i / 16) * 12 + u(0.0, 10.0)
        co_level = b.base_co + 2 + u(0.0, 12.0)

        return BoilerSample(
            timestamp=timestamp,
            steam_temp=steam_temp,
            drum_pressure=drum_pressure,
            coal_flow=coal_flow,
            biomass_flow=biomass_flow,
            load_unit=load_unit,
            primary_air=primary_air,
            secondary_air=secondary_air,
            excess_air=excess_air,
            efficiency=clamp(efficiency, SERIES_LIMITS["efficiency"]),
            co2_emission=clamp(co2_emission, SERIES_LIMITS["co2_emission"]),
            o2_level=o2_level,
            co_level=clamp(co_level, SERIES_LIMITS["co_level"]),
            nox_level=clamp(nox_level, SERIES_LIMITS["nox_level"]),
            cofiring_ratio=cofiring_ratio,
        )


# =========================================
# Convenience Functions
# =========================================

def generate_sample(rng: Optional[random.Random] = None) -> BoilerSample:
    """
    Generate one sample with default settings.

    Args:
        rng: Optional random source (unseeded if None)

    Returns:
        BoilerSample stamped with the current time
    """
    return BoilerDataGenerator(rng=rng).generate_sample()


def generate_series(
    duration_hours: float = 24,
    rng: Optional[random.Random] = None
) -> BoilerSeries:
    """
    Generate a 100-point series with default settings.

    Args:
        duration_hours: Span of the series in hours
        rng: Optional random source (unseeded if None)

    Returns:
        BoilerSeries ending at the current time
    """
    return BoilerDataGenerator(rng=rng).generate_series(duration_hours)
