"""
Bloom data generator for demonstration and dashboard overlays.

Runs the phenology model and color mapper over reference cities, lat/lng
grids and weekly time series, returning pandas DataFrames.
"""

from datetime import date, timedelta

import pandas as pd

from .color_mapping import intensity_to_color
from .models.bloom import BloomDataPoint
from .phenology import compute_bloom, generate_bloom_grid
from .rng import get_rng

# Predefined reference locations
BLOOM_LOCATIONS = {
    # Northern Hemisphere
    'Amsterdam, Netherlands': {'lat': 52.3676, 'lng': 4.9041},
    'Tokyo, Japan': {'lat': 35.6762, 'lng': 139.6503},
    'New York, USA': {'lat': 40.7128, 'lng': -74.0060},
    'London, UK': {'lat': 51.5074, 'lng': -0.1278},
    'Berlin, Germany': {'lat': 52.5200, 'lng': 13.4050},
    'Moscow, Russia': {'lat': 55.7558, 'lng': 37.6176},

    # Southern Hemisphere
    'Sydney, Australia': {'lat': -33.8688, 'lng': 151.2093},
    'São Paulo, Brazil': {'lat': -23.5505, 'lng': -46.6333},
    'Cape Town, South Africa': {'lat': -33.9249, 'lng': 18.4241},
    'Buenos Aires, Argentina': {'lat': -34.6118, 'lng': -58.3960},

    # Tropical Regions
    'Singapore': {'lat': 1.3521, 'lng': 103.8198},
    'Mumbai, India': {'lat': 19.0760, 'lng': 72.8777},
    'Jakarta, Indonesia': {'lat': -6.2088, 'lng': 106.8456},

    # Polar Regions
    'Reykjavik, Iceland': {'lat': 64.1466, 'lng': -21.9426},
    'Fairbanks, Alaska': {'lat': 64.8378, 'lng': -147.7164},
}

COLUMNS = ['location', 'lat', 'lng', 'intensity', 'season', 'phase', 'r', 'g', 'b']


def bloom_point(lat, lng, d, location=None, rng=None) -> BloomDataPoint:
    """Bloom state and display color for one coordinate."""
    rng = get_rng(rng)
    bloom = compute_bloom(lat, d, rng)
    return _to_point(lat, lng, bloom, location, rng)


def _to_point(lat, lng, bloom, location, rng):
    color = intensity_to_color(bloom.intensity, bloom.phase, bloom.season, rng)
    return BloomDataPoint(
        lat=lat,
        lng=lng,
        intensity=bloom.intensity,
        season=bloom.season,
        phase=bloom.phase,
        color=color,
        location=location if location is not None else f"{lat:.2f}°, {lng:.2f}°",
    )


def _row(point):
    return {
        'location': point.location,
        'lat': point.lat,
        'lng': point.lng,
        'intensity': point.intensity,
        'season': point.season.value,
        'phase': point.phase.value,
        'r': point.color.r,
        'g': point.color.g,
        'b': point.color.b,
    }


def _frame(points):
    return pd.DataFrame([_row(p) for p in points], columns=COLUMNS)


def global_bloom_data(d, rng=None):
    """One row per predefined location for the given date."""
    rng = get_rng(rng)
    points = [
        bloom_point(coords['lat'], coords['lng'], d, name, rng)
        for name, coords in BLOOM_LOCATIONS.items()
    ]
    return _frame(points)


def grid_bloom_data(start_lat, end_lat, start_lng, end_lng, resolution, d, rng=None):
    """Bloom data for a regular lat/lng grid."""
    rng = get_rng(rng)
    samples = generate_bloom_grid(start_lat, end_lat, start_lng, end_lng, resolution, d, rng)
    return _frame(_to_point(lat, lng, bloom, None, rng) for lat, lng, bloom in samples)


def seasonal_bloom_data(location, year=2023, rng=None):
    """
    Weekly bloom data for a predefined location throughout the year.

    Returns an empty frame for an unknown location.
    """
    coords = BLOOM_LOCATIONS.get(location)
    if coords is None:
        return pd.DataFrame(columns=['date'] + COLUMNS)

    rng = get_rng(rng)
    start = date(year, 1, 1)
    rows = []
    for week in range(52):
        day = start + timedelta(days=week * 7)
        row = _row(bloom_point(coords['lat'], coords['lng'], day, location, rng))
        row['date'] = day.isoformat()
        rows.append(row)
    return pd.DataFrame(rows, columns=['date'] + COLUMNS)


def bloom_statistics(d, rng=None, data=None):
    """
    Counts of active, peak and dormant locations plus season/phase distributions.

    Pass ``data`` (a frame from global_bloom_data) to reuse an existing sample.
    """
    df = data if data is not None else global_bloom_data(d, rng)
    return {
        'total_locations': int(len(df)),
        'active_bloom': int((df['intensity'] > 0.3).sum()),
        'peak_bloom': int((df['intensity'] > 0.7).sum()),
        'dormant': int((df['intensity'] < 0.2).sum()),
        'season_distribution': {k: int(v) for k, v in df['season'].value_counts().items()},
        'phase_distribution': {k: int(v) for k, v in df['phase'].value_counts().items()},
    }


def peak_bloom_locations(d, threshold=0.8, rng=None, data=None):
    """Predefined locations at or above the peak-bloom threshold."""
    df = data if data is not None else global_bloom_data(d, rng)
    return df[df['intensity'] >= threshold].reset_index(drop=True)


def dormant_locations(d, threshold=0.2, rng=None, data=None):
    """Predefined locations at or below the dormancy threshold."""
    df = data if data is not None else global_bloom_data(d, rng)
    return df[df['intensity'] <= threshold].reset_index(drop=True)
