"""
Tests for Synthetic Telemetry Generation

These tests verify the single-sample and series generators: value
windows, the fixed cofiring ratio, series timing and reproducibility.

Run with: pytest tests/test_generator.py -v
"""

import io
import csv
import random
from dataclasses import FrozenInstanceError

import pytest
from engine.generator import (
    BoilerBaseline,
    BoilerDataGenerator,
    BoilerSample,
    MS_PER_HOUR,
    SERIES_POINTS,
    clamp,
    generate_sample,
    generate_series,
    write_series_csv,
)


NOW = 1_760_000_000_000.0


def fixed_clock():
    return NOW


class TestClamp:
    """Test the clamp helper."""

    def test_inside(self):
        assert clamp(5.0, (0.0, 10.0)) == 5.0

    def test_below(self):
        assert clamp(-1.0, (0.0, 10.0)) == 0.0

    def test_above(self):
        assert clamp(11.0, (0.0, 10.0)) == 10.0


class TestSampleWindows:
    """Every sample stays inside the published windows."""

    def setup_method(self):
        self.generator = BoilerDataGenerator(random_seed=7, clock=fixed_clock)
        self.samples = [self.generator.generate_sample() for _ in range(500)]

    def test_efficiency_window(self):
        assert all(82 <= s.efficiency <= 92 for s in self.samples)

    def test_co2_window(self):
        assert all(700 <= s.co2_emission <= 900 for s in self.samples)

    def test_nox_window(self):
        assert all(150 <= s.nox_level <= 220 for s in self.samples)

    def test_co_window(self):
        assert all(25 <= s.co_level <= 70 for s in self.samples)

    def test_cofiring_ratio_is_fixed(self):
        assert all(s.cofiring_ratio == 5.0 for s in self.samples)

    def test_biomass_follows_coal(self):
        for s in self.samples:
            assert s.biomass_flow == pytest.approx(s.coal_flow * s.cofiring_ratio / 100)

    def test_timestamp_from_clock(self):
        assert all(s.timestamp == NOW for s in self.samples)


class TestSampleValues:
    """Independent fields sit near the design operating point."""

    def setup_method(self):
        self.generator = BoilerDataGenerator(random_seed=11, clock=fixed_clock)
        self.samples = [self.generator.generate_sample() for _ in range(200)]

    def test_load_near_rated(self):
        assert all(399.5 <= s.load_unit <= 400.4 for s in self.samples)

    def test_coal_flow_jitter(self):
        assert all(359.5 <= s.coal_flow <= 360.4 for s in self.samples)

    def test_steam_temp_jitter(self):
        assert all(538.1 <= s.steam_temp <= 539.0 for s in self.samples)

    def test_o2_jitter(self):
        assert all(3.42 <= s.o2_level <= 3.48 for s in self.samples)

    def test_co_floor(self):
        # CO is the base value plus a non-negative draw
        assert all(s.co_level >= 40 for s in self.samples)

    def test_custom_baseline(self):
        baseline = BoilerBaseline(load_mw=300.0)
        sample = BoilerDataGenerator(baseline=baseline, random_seed=1).generate_sample()

        assert 299.5 <= sample.load_unit <= 300.4


class FixedFractionRandom:
    """Random source whose uniform draws land at a fixed fraction of the interval."""

    def __init__(self, fraction: float):
        self.fraction = fraction

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.fraction


class TestDerivedFields:
    """Efficiency, CO2, NOx and CO follow the baseline formulas."""

    def test_midpoint_draws(self):
        baseline = BoilerBaseline(steam_temp_c=540.5, o2_level_pct=3.65)
        generator = BoilerDataGenerator(
            baseline=baseline, rng=FixedFractionRandom(0.5), clock=fixed_clock
        )

        sample = generator.generate_sample()

        assert sample.steam_temp == pytest.approx(540.55)
        assert sample.o2_level == pytest.approx(3.65)
        # 87 + 5 * 0.3 + 2.55 * 0.2 - 0.2 * 0.5
        assert sample.efficiency == pytest.approx(88.91)
        # 800 - 5 * 10 + 0.2 * 15
        assert sample.co2_emission == pytest.approx(753.0)
        assert sample.nox_level == pytest.approx(192.6)
        assert sample.co_level == pytest.approx(47.5)

    def test_low_end_draws(self):
        generator = BoilerDataGenerator(rng=FixedFractionRandom(0.0), clock=fixed_clock)

        sample = generator.generate_sample()

        assert sample.steam_temp == pytest.approx(538.1)
        assert sample.o2_level == pytest.approx(3.42)
        # 87 + 1.5 + 0.1 * 0.2 + 0.03 * 0.5 - 0.75
        assert sample.efficiency == pytest.approx(87.785)
        # 800 - 50 - 0.03 * 15 - 10
        assert sample.co2_emission == pytest.approx(739.55)
        assert sample.co_level == pytest.approx(40.0)

    def test_formulas_hold_for_random_draws(self):
        generator = BoilerDataGenerator(random_seed=17, clock=fixed_clock)

        for _ in range(50):
            s = generator.generate_sample()
            efficiency_base = (
                87 + 0.3 * s.cofiring_ratio
                + 0.2 * (s.steam_temp - 538) + 0.5 * (3.45 - s.o2_level)
            )
            co2_base = 800 - 10 * s.cofiring_ratio + 15 * (s.o2_level - 3.45)

            assert abs(s.efficiency - efficiency_base) <= 0.75 + 1e-9
            assert abs(s.co2_emission - co2_base) <= 10 + 1e-9


class TestSampleSerialization:
    """Test sample dictionaries."""

    def test_to_dict_has_all_fields(self):
        sample = BoilerDataGenerator(random_seed=3).generate_sample()
        d = sample.to_dict()

        assert set(d) == set(BoilerSample.field_names())
        assert len(d) == 15

    def test_sample_is_frozen(self):
        sample = BoilerDataGenerator(random_seed=3).generate_sample()

        with pytest.raises(FrozenInstanceError):
            sample.efficiency = 99.0


class TestSeriesTiming:
    """Series always hold 100 points ending before now."""

    def setup_method(self):
        self.generator = BoilerDataGenerator(random_seed=42, clock=fixed_clock)

    def test_fixed_length(self):
        for hours in (1, 24, 168, 720):
            assert len(self.generator.generate_series(hours)) == SERIES_POINTS

    def test_spacing(self):
        series = self.generator.generate_series(24)

        assert series.spacing_ms == 24 * MS_PER_HOUR / 100
        assert series.spacing_ms == 864_000

    def test_timestamps_ascending(self):
        ts = self.generator.generate_series(24).timestamps

        assert all(b > a for a, b in zip(ts, ts[1:]))

    def test_first_and_last_timestamp(self):
        series = self.generator.generate_series(24)

        assert series[0].timestamp == pytest.approx(NOW - 100 * series.spacing_ms)
        assert series[-1].timestamp == pytest.approx(NOW - series.spacing_ms)
        assert series[-1].timestamp <= NOW

    def test_doubling_duration_doubles_spacing(self):
        short = self.generator.generate_series(12)
        long = self.generator.generate_series(24)

        assert long.spacing_ms == pytest.approx(2 * short.spacing_ms)

    def test_day_and_week_spacing_ratio(self):
        day = self.generator.generate_series(24)
        week = self.generator.generate_series(168)

        assert len(day) == len(week) == 100
        assert week.spacing_ms / day.spacing_ms == pytest.approx(7.0)


class TestSeriesWindows:
    """Series points stay inside their windows."""

    def setup_method(self):
        generator = BoilerDataGenerator(random_seed=5, clock=fixed_clock)
        self.series = generator.generate_series(168)

    def test_efficiency_window(self):
        assert all(83 <= v <= 92 for v in self.series.values("efficiency"))

    def test_co2_window(self):
        assert all(720 <= v <= 880 for v in self.series.values("co2_emission"))

    def test_nox_window(self):
        assert all(155 <= v <= 215 for v in self.series.values("nox_level"))

    def test_co_window(self):
        assert all(28 <= v <= 65 for v in self.series.values("co_level"))

    def test_cofiring_ratio_is_fixed(self):
        assert set(self.series.values("cofiring_ratio")) == {5.0}


HIGH_BASELINE = BoilerBaseline(base_efficiency=120.0, base_co2=2000.0, base_nox=400.0, base_co=200.0)
LOW_BASELINE = BoilerBaseline(base_efficiency=50.0, base_co2=100.0, base_nox=0.0, base_co=0.0)


class TestClamping:
    """Out-of-window baselines pin derived fields at the window edges."""

    def test_sample_upper_edges(self):
        sample = BoilerDataGenerator(baseline=HIGH_BASELINE, random_seed=1).generate_sample()

        assert sample.efficiency == 92.0
        assert sample.co2_emission == 900.0
        assert sample.nox_level == 220.0
        assert sample.co_level == 70.0

    def test_sample_lower_edges(self):
        sample = BoilerDataGenerator(baseline=LOW_BASELINE, random_seed=1).generate_sample()

        assert sample.efficiency == 82.0
        assert sample.co2_emission == 700.0
        assert sample.nox_level == 150.0
        assert sample.co_level == 25.0

    def test_series_upper_edges(self):
        series = BoilerDataGenerator(
            baseline=HIGH_BASELINE, random_seed=1, clock=fixed_clock
        ).generate_series(24)

        assert set(series.values("efficiency")) == {92.0}
        assert set(series.values("co2_emission")) == {880.0}
        assert set(series.values("nox_level")) == {215.0}
        assert set(series.values("co_level")) == {65.0}

    def test_series_lower_edges(self):
        series = BoilerDataGenerator(
            baseline=LOW_BASELINE, random_seed=1, clock=fixed_clock
        ).generate_series(24)

        assert set(series.values("efficiency")) == {83.0}
        assert set(series.values("co2_emission")) == {720.0}
        assert set(series.values("nox_level")) == {155.0}
        assert set(series.values("co_level")) == {28.0}


class TestLastHours:
    """Exact window slicing."""

    def setup_method(self):
        self.generator = BoilerDataGenerator(random_seed=9, clock=fixed_clock)

    def test_day_of_week(self):
        week = self.generator.generate_series(168)

        window = week.last_hours(24)

        assert len(window) == 14
        assert window[-1] == week[-1]

    def test_points_per_hour(self):
        week = self.generator.generate_series(168)

        assert week.points_per_hour == pytest.approx(100 / 168)

    def test_full_duration(self):
        day = self.generator.generate_series(24)

        assert len(day.last_hours(24)) == 100

    def test_longer_than_series(self):
        day = self.generator.generate_series(24)

        assert len(day.last_hours(1000)) == 100

    def test_tiny_window_keeps_one_point(self):
        week = self.generator.generate_series(168)

        assert len(week.last_hours(0.1)) == 1


class TestReproducibility:
    """Seeded generators reproduce identical output."""

    def test_same_seed_same_samples(self):
        a = BoilerDataGenerator(random_seed=123, clock=fixed_clock)
        b = BoilerDataGenerator(random_seed=123, clock=fixed_clock)

        assert a.generate_sample() == b.generate_sample()

    def test_same_seed_same_series(self):
        a = BoilerDataGenerator(random_seed=123, clock=fixed_clock).generate_series(168)
        b = BoilerDataGenerator(random_seed=123, clock=fixed_clock).generate_series(168)

        assert a.to_dicts() == b.to_dicts()

    def test_injected_rng(self):
        a = generate_sample(rng=random.Random(99))
        b = generate_sample(rng=random.Random(99))

        assert a.efficiency == b.efficiency
        assert a.coal_flow == b.coal_flow

    def test_different_seeds_differ(self):
        a = BoilerDataGenerator(random_seed=1).generate_series(24)
        b = BoilerDataGenerator(random_seed=2).generate_series(24)

        assert a.values("efficiency") != b.values("efficiency")


class TestConvenienceFunctions:
    """Test module-level helpers."""

    def test_generate_series_default_duration(self):
        series = generate_series(rng=random.Random(4))

        assert series.duration_hours == 24
        assert len(series) == 100


class TestCsvExport:
    """Test writing a series as CSV."""

    def setup_method(self):
        generator = BoilerDataGenerator(random_seed=21, clock=fixed_clock)
        self.series = generator.generate_series(24)

    def test_write_to_stream(self):
        buffer = io.StringIO()
        write_series_csv(self.series, buffer)
        buffer.seek(0)

        rows = list(csv.DictReader(buffer))

        assert len(rows) == 100
        assert list(rows[0].keys()) == BoilerSample.field_names()
        assert float(rows[0]["timestamp"]) == pytest.approx(self.series[0].timestamp)

    def test_to_csv_file(self, tmp_path):
        path = tmp_path / "series.csv"

        returned = self.series.to_csv(str(path))

        assert returned == str(path)
        lines = path.read_text().strip().splitlines()
        assert len(lines) == 101
