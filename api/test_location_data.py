"""Tests for the location-specific data synthesizer."""

import copy
from datetime import date

import numpy as np
import pytest

from bloomee import color_mapping, location_data, phenology, regions
from bloomee.location_data import (
    FALLBACK_PARAMETERS,
    REGION_PARAMETERS,
    CatalogError,
    bloom_status,
    ecological_insights,
    generate_ndvi,
    generate_weather,
    parameters_for,
    sample_region_metrics,
    season_for_month,
    validate_catalog,
)
from bloomee.models.bloom import BloomRegion, Coordinate, Season


class TestCatalogConsistency:

    def test_every_catalog_region_has_parameters(self):
        validate_catalog(regions.REGION_CATALOG)

    def test_drift_fails_fast(self):
        orphan = BloomRegion('atlantis_kelp', 'Atlantis Kelp', Coordinate(0, -30), 1000)
        with pytest.raises(CatalogError, match='atlantis_kelp'):
            validate_catalog(regions.REGION_CATALOG + (orphan,))

    def test_bloom_seasons_are_real_seasons(self):
        for params in REGION_PARAMETERS.values():
            assert params.bloom_seasons <= set(Season)
        assert REGION_PARAMETERS['india_lotus'].bloom_seasons == {Season.SUMMER}


class TestNdvi:

    def test_bloom_season_draws_stay_in_range_and_run_higher(self, rng):
        low, high = REGION_PARAMETERS['japan_cherry'].ndvi_range
        spring = np.array([generate_ndvi('japan_cherry', Season.SPRING, rng) for _ in range(1000)])
        winter = np.array([generate_ndvi('japan_cherry', Season.WINTER, rng) for _ in range(1000)])
        assert spring.min() >= low
        assert spring.max() <= high
        assert spring.mean() > winter.mean()

    def test_fallback_range(self, rng):
        low, high = FALLBACK_PARAMETERS.ndvi_range
        for _ in range(200):
            assert low <= generate_ndvi('atlantis_kelp', Season.SPRING, rng) <= high


class TestWeather:

    def test_seasonal_offsets_without_jitter(self, fixed_rng):
        # japan_cherry: 5-25 C midpoint 15, 50-200 mm midpoint 125
        summer = generate_weather('japan_cherry', Season.SUMMER, fixed_rng)
        winter = generate_weather('japan_cherry', Season.WINTER, fixed_rng)
        assert summer.temperature_mean_c == pytest.approx(23.0)
        assert summer.precipitation_mm == pytest.approx(100.0)
        assert winter.temperature_mean_c == pytest.approx(5.0)
        assert winter.precipitation_mm == pytest.approx(137.5)

    def test_precipitation_never_negative(self, rng):
        for season in Season:
            for _ in range(200):
                assert generate_weather('morocco_roses', season, rng).precipitation_mm >= 0

    def test_fallback_weather(self, rng):
        weather = generate_weather('atlantis_kelp', Season.FALL, rng)
        assert 20 <= weather.temperature_mean_c <= 30
        assert 0 <= weather.precipitation_mm <= 50


class TestBloomStatus:

    @pytest.mark.parametrize("ndvi, season, expected", [
        (0.75, Season.SPRING, 'Peak Bloom'),
        (0.60, Season.SPRING, 'Active Bloom'),
        (0.45, Season.SPRING, 'Early Bloom'),
        (0.35, Season.SPRING, 'Pre-Bloom'),
        (0.45, Season.WINTER, 'Post-Bloom'),
        (0.35, Season.WINTER, 'Dormant'),
    ])
    def test_thresholds_relative_to_region_max(self, ndvi, season, expected):
        # japan_cherry max NDVI 0.8 -> thresholds 0.72 / 0.56 / 0.40
        assert bloom_status('japan_cherry', ndvi, season) == expected

    def test_fallback_thresholds(self):
        assert bloom_status('atlantis_kelp', 0.75, Season.WINTER) == 'Peak Bloom'
        assert bloom_status('atlantis_kelp', 0.2, Season.WINTER) == 'Pre-Bloom'


class TestSampleRegionMetrics:

    def test_known_region(self, rng):
        metrics = sample_region_metrics('netherlands_tulips', 'spring', rng)
        assert metrics.region_id == 'netherlands_tulips'
        assert metrics.season == Season.SPRING
        assert not metrics.is_fallback
        assert metrics.bloom_status in {'Peak Bloom', 'Active Bloom', 'Early Bloom', 'Pre-Bloom'}

    def test_unknown_region_uses_named_fallback(self, rng):
        params, is_fallback = parameters_for('atlantis_kelp')
        assert is_fallback
        assert params is FALLBACK_PARAMETERS
        metrics = sample_region_metrics('atlantis_kelp', Season.SUMMER, rng)
        assert metrics.is_fallback
        assert metrics.to_dict()['is_fallback'] is True


def test_ecological_insights():
    lavender = ecological_insights('france_lavender', 0.5)
    assert lavender['fire_risk'] == 'high'
    assert lavender['water_stress'] == 'high'
    cherry = ecological_insights('japan_cherry', 0.75)
    assert cherry == {
        'vegetation_health': 'excellent',
        'water_stress': 'low',
        'fire_risk': 'low',
        'biodiversity': 'high',
    }
    assert ecological_insights('atlantis_kelp', 0.5)['vegetation_health'] == 'good'


@pytest.mark.parametrize("month, season", [
    (1, Season.WINTER), (3, Season.SPRING), (7, Season.SUMMER), (10, Season.FALL), (12, Season.WINTER),
])
def test_season_for_month(month, season):
    assert season_for_month(month) == season


def test_static_tables_unchanged_after_many_calls(rng):
    snapshot = copy.deepcopy((
        regions.REGION_CATALOG,
        dict(location_data.REGION_PARAMETERS),
        dict(color_mapping.PHASE_COLORS),
        dict(color_mapping.SEASON_TINTS),
        phenology.LATITUDE_BANDS,
    ))
    region_ids = [region.id for region in regions.REGION_CATALOG]
    seasons = list(Season)
    d = date(2023, 4, 1)

    for i in range(10000):
        lat = (i % 180) - 90
        region_id = regions.resolve_region(lat, (i * 7) % 360 - 180, variety=True, rng=rng)
        bloom = phenology.compute_bloom(lat, d, rng)
        color_mapping.intensity_to_color(bloom.intensity, bloom.phase, bloom.season, rng)
        sample_region_metrics(region_ids[i % len(region_ids)], seasons[i % 4], rng)
        assert region_id in region_ids

    assert snapshot == (
        regions.REGION_CATALOG,
        dict(location_data.REGION_PARAMETERS),
        dict(color_mapping.PHASE_COLORS),
        dict(color_mapping.SEASON_TINTS),
        phenology.LATITUDE_BANDS,
    )
