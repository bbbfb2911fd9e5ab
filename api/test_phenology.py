"""Tests for the seasonal bloom phenology model."""

from datetime import date, datetime, timedelta

import numpy as np
import pytest

from bloomee.models.bloom import Phase, Season
from bloomee.phenology import (
    compute_bloom,
    day_of_year,
    generate_bloom_grid,
    hemisphere_day,
    latitude_factor,
    seasonal_stage,
)

LATITUDES = [-150, -90, -75, -45, -20, -5, 0, 5, 25, 45, 65, 80, 90, 150]


class TestDayOfYear:

    def test_first_day_is_one(self):
        assert day_of_year(date(2023, 1, 1)) == 1

    def test_leap_year_has_366th_day(self):
        assert day_of_year(date(2024, 12, 31)) == 366
        assert day_of_year(date(2023, 12, 31)) == 365

    def test_time_of_day_is_ignored(self):
        assert day_of_year(datetime(2023, 4, 10, 23, 59)) == day_of_year(date(2023, 4, 10))


class TestSeasonalStage:

    @pytest.mark.parametrize("day, season, phase, intensity", [
        (60, Season.SPRING, Phase.PRE_BLOOM, 0.0),
        (105, Season.SPRING, Phase.BLOOM, 0.65),
        (195, Season.SUMMER, Phase.BLOOM, 1.0),
        (300, Season.FALL, Phase.DORMANT, 1 / 6),
        (15, Season.WINTER, Phase.DORMANT, 0.1),
        (365, Season.WINTER, Phase.DORMANT, 0.0),
    ])
    def test_known_points(self, day, season, phase, intensity):
        s, p, value = seasonal_stage(day)
        assert s == season
        assert p == phase
        assert value == pytest.approx(intensity)

    def test_season_boundaries(self):
        assert seasonal_stage(59)[0] == Season.WINTER
        assert seasonal_stage(149)[0] == Season.SPRING
        assert seasonal_stage(150)[0] == Season.SUMMER
        assert seasonal_stage(240)[0] == Season.FALL
        assert seasonal_stage(330)[0] == Season.WINTER

    def test_southern_day_shift(self):
        assert hemisphere_day(10, 100) == 100
        assert hemisphere_day(0, 100) == 100
        assert hemisphere_day(-10, 1) == 184
        assert hemisphere_day(-10, 200) == 18


class TestLatitudeFactor:

    @pytest.mark.parametrize("abs_lat, low, high", [
        (0, 0.8, 1.0),
        (20, 0.7, 1.0),
        (40, 0.6, 1.0),
        (60, 0.3, 0.7),
        (80, 0.1, 0.3),
        (120, 0.1, 0.3),
    ])
    def test_band_ranges(self, abs_lat, low, high, make_fixed_rng):
        assert latitude_factor(abs_lat, make_fixed_rng(0.0)) == pytest.approx(low)
        assert latitude_factor(abs_lat, make_fixed_rng(0.999999)) == pytest.approx(high, abs=1e-5)

    def test_unseeded_jitter_stays_in_band(self):
        for _ in range(200):
            assert 0.3 <= latitude_factor(55) <= 0.7


class TestComputeBloom:

    def test_intensity_always_in_unit_range(self, rng):
        start = date(2024, 1, 1)
        for lat in LATITUDES:
            for offset in range(0, 366, 5):
                bloom = compute_bloom(lat, start + timedelta(days=offset), rng)
                assert 0.0 <= bloom.intensity <= 1.0

    def test_labels_are_enumerated(self, rng):
        start = date(2023, 1, 1)
        for lat in LATITUDES:
            for offset in range(0, 365, 3):
                bloom = compute_bloom(lat, start + timedelta(days=offset), rng)
                assert bloom.season in Season
                assert bloom.phase in Phase

    def test_hemisphere_symmetry(self, fixed_rng):
        """Southern logic is the northern curve applied half a year later."""
        start = date(2023, 1, 1)
        for doy in range(184, 365):
            north_date = start + timedelta(days=doy - 1)
            south_date = north_date - timedelta(days=183)
            north = compute_bloom(45.0, north_date, fixed_rng)
            south = compute_bloom(-45.0, south_date, fixed_rng)
            assert north.season == south.season
            assert north.phase == south.phase
            assert north.intensity == pytest.approx(south.intensity)

    def test_opposite_seasons_on_same_date(self, fixed_rng):
        d = date(2023, 7, 15)
        assert compute_bloom(40, d, fixed_rng).season == Season.SUMMER
        assert compute_bloom(-40, d, fixed_rng).season == Season.WINTER

    def test_seeded_calls_are_reproducible(self):
        d = date(2023, 4, 20)
        first = compute_bloom(35.0, d, np.random.default_rng(7))
        second = compute_bloom(35.0, d, np.random.default_rng(7))
        assert first == second

    def test_out_of_domain_latitude_uses_polar_band(self, make_fixed_rng):
        bloom = compute_bloom(135.0, date(2023, 4, 20), make_fixed_rng(0.999999))
        assert bloom.intensity <= 0.3

    def test_exact_value_with_fixed_jitter(self, fixed_rng):
        # Day 105 (2023-04-15) is mid-spring bloom: 0.65 raw, temperate factor 0.8
        bloom = compute_bloom(40.0, date(2023, 4, 15), fixed_rng)
        assert bloom.phase == Phase.BLOOM
        assert bloom.intensity == pytest.approx(0.65 * 0.8)


def test_bloom_grid_has_resolution_plus_one_squared_points(rng):
    samples = generate_bloom_grid(-10, 10, 0, 20, 4, date(2023, 6, 1), rng)
    assert len(samples) == 25
    lats = sorted({lat for lat, _, _ in samples})
    assert lats[0] == pytest.approx(-10)
    assert lats[-1] == pytest.approx(10)
