"""
Bloom region catalog and nearest-region resolver.

The catalog is a static tuple of named reference regions. Resolution is a
linear haversine scan; an opt-in variety mode occasionally swaps the nearest
match for one of the latitude-closest regions so repeated demo clicks show
different regions.
"""

import logging
from typing import Dict, Optional, Tuple

from . import config
from .geo import haversine_distance
from .models.bloom import BloomRegion, Coordinate
from .rng import get_rng


def _region(region_id, name, lat, lng, threshold_km):
    return BloomRegion(id=region_id, name=name, anchor=Coordinate(lat, lng),
                       threshold_km=threshold_km)


REGION_CATALOG: Tuple[BloomRegion, ...] = (
    # Backend-monitored regions
    _region('japan_cherry', 'Japan Cherry Blossoms', 35.0116, 135.7681, 2000),
    _region('usa_cherry_dc', 'USA Cherry Blossoms', 38.9072, -77.0369, 2000),
    _region('bandung_floriculture', 'Bandung Floriculture', -6.9175, 107.6191, 1500),
    _region('netherlands_tulips', 'Netherlands Tulips', 52.3676, 4.9041, 1000),
    _region('france_lavender', 'France Lavender', 43.9493, 5.0514, 1500),
    _region('uk_bluebells', 'UK Bluebells', 51.5074, -0.1278, 1500),
    _region('california_poppies', 'California Poppies', 34.0522, -118.2437, 2000),
    _region('texas_bluebonnets', 'Texas Bluebonnets', 30.2672, -97.7431, 2000),
    # Additional regions for global coverage
    _region('south_africa_protea', 'South Africa Protea', -33.9249, 18.4241, 2000),
    _region('morocco_roses', 'Morocco Roses', 31.2417, -6.1289, 1500),
    _region('kenya_wildflowers', 'Kenya Wildflowers', -1.2921, 36.8219, 2000),
    _region('australia_wildflowers', 'Australia Wildflowers', -31.9505, 115.8605, 3000),
    _region('brazil_flowers', 'Brazil Flowers', -22.9068, -43.1729, 2500),
    _region('india_lotus', 'India Lotus', 28.6139, 77.2090, 2500),
    _region('canada_tulips', 'Canada Tulips', 45.4215, -75.6972, 2000),
    _region('chile_wildflowers', 'Chile Wildflowers', -27.3668, -70.3314, 2000),
    _region('new_zealand_flowers', 'New Zealand Flowers', -41.2865, 174.7762, 2000),
    _region('argentina_flowers', 'Argentina Flowers', -34.6037, -58.3816, 2000),
    _region('patagonia_wildflowers', 'Patagonia Wildflowers', -50.3379, -72.2648, 1500),
    _region('chile_patagonia', 'Chile Patagonia', -51.7308, -72.5060, 1000),
)

_REGIONS_BY_ID: Dict[str, BloomRegion] = {region.id: region for region in REGION_CATALOG}


def get_region(region_id) -> Optional[BloomRegion]:
    return _REGIONS_BY_ID.get(region_id)


def region_name(region_id):
    """Display name for a region id; unknown ids are returned as-is."""
    region = get_region(region_id)
    return region.name if region else region_id


def nearest_region(lat, lng, catalog=REGION_CATALOG) -> Tuple[BloomRegion, float]:
    """Closest catalog entry and its distance in km. The first entry wins exact ties."""
    closest = catalog[0]
    min_distance = haversine_distance(lat, lng, closest.anchor.lat, closest.anchor.lng)
    for region in catalog[1:]:
        distance = haversine_distance(lat, lng, region.anchor.lat, region.anchor.lng)
        if distance < min_distance:
            min_distance = distance
            closest = region
    return closest, min_distance


def within_threshold(region, distance_km):
    """Whether a match lies inside the region's nominal radius. Informational only."""
    return distance_km <= region.threshold_km


def variety_candidates(lat, catalog=REGION_CATALOG, top=None):
    """Regions ranked by latitude proximity, highest weight first."""
    if top is None:
        top = config.VARIETY_TOP_CANDIDATES
    weighted = [
        (max(0.1, 1 / (1 + abs(lat - region.anchor.lat) / 20)), region)
        for region in catalog
    ]
    # sorted() is stable, so equal weights keep catalog order
    weighted = sorted(weighted, key=lambda item: item[0], reverse=True)
    return [region for _, region in weighted[:top]]


def resolve_region(lat, lng, variety=False, rng=None, catalog=REGION_CATALOG):
    """
    Map a coordinate to a bloom region id.

    Args:
        lat: Latitude; clamped to [-90, 90].
        lng: Longitude; wrapped into [-180, 180).
        variety: Opt-in demo mode. With probability VARIETY_PROBABILITY (and
            only when the nearest region is closer than
            VARIETY_MAX_DISTANCE_KM) one of the top latitude-weighted regions
            is picked at random instead of the nearest.
        rng: Optional random source, only used in variety mode.
        catalog: Region catalog to search. Must be non-empty.

    Returns:
        The id of a catalog region. The nearest region is always returned in
        the default mode, regardless of its threshold.
    """
    coordinate = Coordinate.normalized(lat, lng)
    closest, min_distance = nearest_region(coordinate.lat, coordinate.lng, catalog)

    if variety and min_distance < config.VARIETY_MAX_DISTANCE_KM:
        rng = get_rng(rng)
        if rng.random() < config.VARIETY_PROBABILITY:
            candidates = variety_candidates(coordinate.lat, catalog)
            selected = candidates[int(rng.random() * len(candidates))]
            logging.debug(f"Using random region for variety: {selected.name} "
                          f"(from {', '.join(c.name for c in candidates)})")
            return selected.id

    logging.debug(f"Using closest region: {closest.name} (distance: {min_distance:.1f}km)")
    return closest.id
