"""
Region bloom predictions and forecasts built from the synthesizer, plus the
click-to-panel flow: resolve region, compute bloom, map color, sample metrics.
"""

from datetime import timedelta

from .color_mapping import intensity_to_color, to_hex
from .geo import haversine_distance, lat_lng_to_point
from .location_data import ecological_insights, sample_region_metrics, season_for_month
from .models.bloom import Coordinate, Season
from .phenology import compute_bloom
from .regions import get_region, region_name, resolve_region, within_threshold
from .rng import get_rng


def region_prediction(region_id, d, include_weather=True, season=None, rng=None):
    """
    Bloom prediction for a region on a date.

    Args:
        region_id: Catalog region id. Unknown ids use the generic fallback.
        d: Prediction date.
        include_weather: Include the sampled weather block.
        season: Season to sample for; defaults to the calendar season of ``d``.
        rng: Optional random source.
    """
    rng = get_rng(rng)
    season = Season(season) if season is not None else season_for_month(d.month)
    metrics = sample_region_metrics(region_id, season, rng)

    return {
        'region': region_id,
        'region_name': region_name(region_id),
        'date': d.isoformat(),
        'season': season.value,
        'ndvi_score': round(metrics.ndvi, 4),
        'bloom_status': metrics.bloom_status,
        'weather': metrics.weather.to_dict() if include_weather else None,
        'ecological_insights': ecological_insights(region_id, metrics.ndvi),
        'is_fallback': metrics.is_fallback,
    }


def region_forecast(region_id, start, days, include_weather=True, rng=None):
    """Daily predictions for ``days`` days starting at ``start``."""
    rng = get_rng(rng)
    predictions = [
        region_prediction(region_id, start + timedelta(days=i), include_weather, rng=rng)
        for i in range(days)
    ]
    return {
        'region': region_id,
        'region_name': region_name(region_id),
        'forecast_start': start.isoformat(),
        'forecast_days': days,
        'predictions': predictions,
    }


def describe_location(lat, lng, d, variety=False, rng=None):
    """Everything the dashboard panel shows for a clicked coordinate."""
    rng = get_rng(rng)
    coordinate = Coordinate.normalized(lat, lng)
    region_id = resolve_region(coordinate.lat, coordinate.lng, variety=variety, rng=rng)
    region = get_region(region_id)
    distance = haversine_distance(coordinate.lat, coordinate.lng,
                                  region.anchor.lat, region.anchor.lng)

    bloom = compute_bloom(coordinate.lat, d, rng)
    color = intensity_to_color(bloom.intensity, bloom.phase, bloom.season, rng)
    metrics = sample_region_metrics(region_id, bloom.season, rng)

    return {
        'location': {'lat': coordinate.lat, 'lng': coordinate.lng},
        'point': lat_lng_to_point(coordinate.lat, coordinate.lng),
        'date': d.isoformat(),
        'region': {
            **region.to_dict(),
            'distance_km': round(distance, 1),
            'within_threshold': within_threshold(region, distance),
        },
        'bloom': bloom.to_dict(),
        'color': {**color.to_dict(), 'hex': to_hex(color)},
        'metrics': metrics.to_dict(),
        'ecological_insights': ecological_insights(region_id, metrics.ndvi),
    }
