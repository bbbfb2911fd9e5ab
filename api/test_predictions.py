"""Tests for region predictions, forecasts and the click-to-panel flow."""

from datetime import date

import pytest

from bloomee.predictions import describe_location, region_forecast, region_prediction

TOKYO = (35.6762, 139.6503)


class TestRegionPrediction:

    def test_keys_and_calendar_season(self, rng):
        prediction = region_prediction('japan_cherry', date(2024, 4, 5), rng=rng)
        assert prediction['region'] == 'japan_cherry'
        assert prediction['region_name'] == 'Japan Cherry Blossoms'
        assert prediction['date'] == '2024-04-05'
        assert prediction['season'] == 'spring'
        assert 0.3 <= prediction['ndvi_score'] <= 0.8
        assert set(prediction['weather']) == {'temperature_mean_c', 'precipitation_mm'}
        assert not prediction['is_fallback']

    def test_weather_can_be_left_out(self, rng):
        prediction = region_prediction('france_lavender', date(2024, 7, 1), include_weather=False, rng=rng)
        assert prediction['weather'] is None

    def test_explicit_season_overrides_date(self, rng):
        prediction = region_prediction('france_lavender', date(2024, 1, 10), season='summer', rng=rng)
        assert prediction['season'] == 'summer'

    def test_unknown_region_is_flagged(self, rng):
        prediction = region_prediction('atlantis_kelp', date(2024, 4, 5), rng=rng)
        assert prediction['is_fallback']
        assert prediction['region_name'] == 'atlantis_kelp'


def test_forecast_has_one_prediction_per_day(rng):
    forecast = region_forecast('netherlands_tulips', date(2024, 2, 27), 5, rng=rng)
    assert forecast['forecast_days'] == 5
    dates = [p['date'] for p in forecast['predictions']]
    assert dates == ['2024-02-27', '2024-02-28', '2024-02-29', '2024-03-01', '2024-03-02']
    assert [p['season'] for p in forecast['predictions']][-1] == 'spring'


class TestDescribeLocation:

    def test_tokyo_panel(self, fixed_rng):
        panel = describe_location(*TOKYO, date(2023, 4, 15), rng=fixed_rng)
        assert panel['region']['id'] == 'japan_cherry'
        assert panel['region']['within_threshold']
        assert panel['region']['distance_km'] == pytest.approx(370, abs=30)
        assert panel['bloom']['phase'] == 'bloom'
        assert panel['color']['hex'].startswith('#')
        assert panel['metrics']['region'] == 'japan_cherry'
        assert panel['metrics']['season'] == panel['bloom']['season']
        assert panel['point']['y'] == pytest.approx(0.583, abs=1e-3)

    def test_coordinates_are_normalized(self, fixed_rng):
        panel = describe_location(95.0, 370.0, date(2023, 4, 15), rng=fixed_rng)
        assert panel['location'] == {'lat': 90.0, 'lng': pytest.approx(10.0)}

    def test_southern_click_uses_southern_season(self, fixed_rng):
        panel = describe_location(-33.9249, 18.4241, date(2023, 7, 15), rng=fixed_rng)
        assert panel['region']['id'] == 'south_africa_protea'
        assert panel['bloom']['season'] == 'winter'
        assert panel['metrics']['bloom_status'] in {'Peak Bloom', 'Active Bloom', 'Early Bloom', 'Pre-Bloom'}
