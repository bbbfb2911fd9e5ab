"""
Location-specific bloom data synthesizer.

Draws plausible NDVI, weather and bloom-status values from per-region
parameter ranges. Values are fabricated for the dashboard, not measured.

Region ids that have no parameter entry take an explicit generic fallback
and are reported with ``is_fallback=True``.
"""

import logging
from types import MappingProxyType
from typing import Tuple

from .models.bloom import RegionMetrics, RegionParameters, Season, WeatherSample
from .rng import get_rng


class CatalogError(ValueError):
    """Region catalog and parameter table are out of sync."""


def _params(name, biome, climate, species, seasons, ndvi, temperature, precipitation,
            biodiversity, density, water):
    return RegionParameters(
        name=name,
        biome=biome,
        climate=climate,
        typical_species=tuple(species),
        bloom_seasons=frozenset(Season(s) for s in seasons),
        ndvi_range=ndvi,
        temperature_range=temperature,
        precipitation_range=precipitation,
        biodiversity=biodiversity,
        vegetation_density=density,
        water_availability=water,
    )


REGION_PARAMETERS = MappingProxyType({
    'japan_cherry': _params(
        'Japan Cherry Blossoms', 'Temperate Deciduous Forest', 'Humid Subtropical',
        ['Sakura (Cherry Blossom)', 'Japanese Maple', 'Bamboo', 'Pine'],
        ['spring'], (0.3, 0.8), (5, 25), (50, 200), 'high', 'dense', 'abundant'),
    'usa_cherry_dc': _params(
        'USA Cherry Blossoms', 'Temperate Deciduous Forest', 'Humid Continental',
        ['Cherry Blossom', 'Dogwood', 'Red Maple', 'Oak'],
        ['spring'], (0.2, 0.7), (-5, 30), (40, 150), 'moderate', 'moderate', 'moderate'),
    'bandung_floriculture': _params(
        'Bandung Floriculture', 'Tropical Highland', 'Tropical Highland',
        ['Orchids', 'Hibiscus', 'Frangipani', 'Bougainvillea'],
        ['spring', 'summer', 'fall'], (0.5, 0.9), (18, 28), (100, 300), 'high', 'dense', 'abundant'),
    'netherlands_tulips': _params(
        'Netherlands Tulips', 'Temperate Grassland', 'Oceanic',
        ['Tulips', 'Daffodils', 'Hyacinth', 'Crocus'],
        ['spring'], (0.4, 0.8), (2, 20), (30, 100), 'moderate', 'moderate', 'abundant'),
    'france_lavender': _params(
        'France Lavender', 'Mediterranean Scrub', 'Mediterranean',
        ['Lavender', 'Rosemary', 'Thyme', 'Olive'],
        ['summer'], (0.3, 0.7), (8, 35), (20, 80), 'moderate', 'sparse', 'limited'),
    'uk_bluebells': _params(
        'UK Bluebells', 'Temperate Deciduous Forest', 'Oceanic',
        ['Bluebells', 'Primroses', 'Wood Anemone', 'Beech'],
        ['spring'], (0.4, 0.8), (3, 22), (60, 120), 'high', 'dense', 'abundant'),
    'california_poppies': _params(
        'California Poppies', 'Mediterranean Scrub', 'Mediterranean',
        ['California Poppy', 'Sagebrush', 'Oak', 'Manzanita'],
        ['spring'], (0.2, 0.6), (10, 32), (15, 60), 'moderate', 'sparse', 'limited'),
    'texas_bluebonnets': _params(
        'Texas Bluebonnets', 'Temperate Grassland', 'Humid Subtropical',
        ['Bluebonnets', 'Indian Paintbrush', 'Prickly Pear', 'Mesquite'],
        ['spring'], (0.3, 0.7), (8, 35), (25, 120), 'moderate', 'sparse', 'moderate'),
    'south_africa_protea': _params(
        'South Africa Protea', 'Fynbos', 'Mediterranean',
        ['Protea', 'Erica', 'Restio', 'Leucadendron'],
        ['winter', 'spring'], (0.4, 0.8), (5, 25), (20, 80), 'high', 'moderate', 'moderate'),
    'morocco_roses': _params(
        'Morocco Roses', 'Desert Scrub', 'Arid',
        ['Damask Rose', 'Cactus', 'Aloe', 'Date Palm'],
        ['spring'], (0.2, 0.6), (10, 40), (10, 50), 'low', 'sparse', 'limited'),
    'kenya_wildflowers': _params(
        'Kenya Wildflowers', 'Savanna', 'Tropical Savanna',
        ['Acacia', 'Baobab', 'Wildflowers', 'Grasses'],
        ['spring', 'summer'], (0.3, 0.8), (15, 35), (30, 150), 'high', 'moderate', 'moderate'),
    'australia_wildflowers': _params(
        'Australia Wildflowers', 'Arid Scrub', 'Arid',
        ['Kangaroo Paw', 'Wattle', 'Eucalyptus', 'Wildflowers'],
        ['spring', 'winter'], (0.2, 0.7), (5, 45), (10, 80), 'moderate', 'sparse', 'limited'),
    'brazil_flowers': _params(
        'Brazil Flowers', 'Tropical Rainforest', 'Tropical',
        ['Orchids', 'Bromeliads', 'Heliconia', 'Passion Flower'],
        ['spring', 'summer'], (0.6, 0.9), (20, 35), (100, 300), 'high', 'dense', 'abundant'),
    # Monsoon blooming is folded into summer
    'india_lotus': _params(
        'India Lotus', 'Wetland', 'Tropical Monsoon',
        ['Lotus', 'Water Lily', 'Mango', 'Banyan'],
        ['summer'], (0.5, 0.9), (15, 40), (50, 400), 'high', 'dense', 'abundant'),
    'canada_tulips': _params(
        'Canada Tulips', 'Temperate Forest', 'Continental',
        ['Tulips', 'Maple', 'Pine', 'Wildflowers'],
        ['spring'], (0.2, 0.8), (-20, 25), (40, 120), 'moderate', 'moderate', 'abundant'),
    'chile_wildflowers': _params(
        'Chile Wildflowers', 'Mediterranean', 'Mediterranean',
        ['Wildflowers', 'Cacti', 'Shrubs', 'Herbs'],
        ['spring'], (0.2, 0.6), (5, 30), (20, 100), 'moderate', 'moderate', 'moderate'),
    'new_zealand_flowers': _params(
        'New Zealand Flowers', 'Temperate Forest', 'Oceanic',
        ['Native Flowers', 'Ferns', 'Trees', 'Shrubs'],
        ['spring', 'summer'], (0.4, 0.9), (0, 25), (60, 200), 'high', 'dense', 'abundant'),
    'argentina_flowers': _params(
        'Argentina Flowers', 'Grassland', 'Temperate',
        ['Wildflowers', 'Grasses', 'Herbs', 'Shrubs'],
        ['spring', 'summer'], (0.3, 0.7), (5, 30), (40, 120), 'moderate', 'moderate', 'moderate'),
    'patagonia_wildflowers': _params(
        'Patagonia Wildflowers', 'Steppe', 'Cold Desert',
        ['Patagonian Wildflowers', 'Grasses', 'Shrubs', 'Herbs'],
        ['spring', 'summer'], (0.2, 0.6), (-10, 20), (20, 80), 'low', 'sparse', 'limited'),
    'chile_patagonia': _params(
        'Chile Patagonia', 'Temperate Rainforest', 'Oceanic',
        ['Native Flowers', 'Ferns', 'Mosses', 'Trees'],
        ['spring', 'summer'], (0.4, 0.8), (-5, 15), (80, 200), 'high', 'dense', 'abundant'),
})

# Generic defaults for region ids missing from REGION_PARAMETERS
FALLBACK_PARAMETERS = _params(
    'Unknown Region', 'Unknown', 'Unknown', [], [],
    (0.3, 0.8), (20, 30), (0, 50), 'moderate', 'moderate', 'moderate')

SEASONAL_TEMPERATURE_OFFSET = {
    Season.SPRING: 0,
    Season.SUMMER: 8,
    Season.FALL: -5,
    Season.WINTER: -10,
}

SEASONAL_PRECIPITATION_MULTIPLIER = {
    Season.SPRING: 1.2,
    Season.SUMMER: 0.8,
    Season.FALL: 1.0,
    Season.WINTER: 1.1,
}

# Fractions of the region's max NDVI
PEAK_FRACTION = 0.9
ACTIVE_FRACTION = 0.7
EARLY_FRACTION = 0.5


def parameters_for(region_id) -> Tuple[RegionParameters, bool]:
    """Parameters for a region and whether the generic fallback was used."""
    params = REGION_PARAMETERS.get(region_id)
    if params is None:
        return FALLBACK_PARAMETERS, True
    return params, False


def validate_catalog(catalog, parameters=REGION_PARAMETERS):
    """
    Check every catalog region has a parameter entry.

    Raises:
        CatalogError: Listing the catalog ids without parameters.
    """
    missing = [region.id for region in catalog if region.id not in parameters]
    if missing:
        raise CatalogError(f"Regions without parameters: {', '.join(missing)}")
    logging.info(f"Region catalog validated: {len(catalog)} regions with parameters")


def generate_ndvi(region_id, season, rng=None):
    """
    NDVI score for a region and season.

    During a bloom season the draw is shifted toward the top of the region's
    range, otherwise toward the bottom, and always clamped to the range.
    """
    season = Season(season)
    rng = get_rng(rng)
    params, is_fallback = parameters_for(region_id)
    if is_fallback:
        low, high = FALLBACK_PARAMETERS.ndvi_range
        return low + rng.random() * (high - low)

    ndvi_min, ndvi_max = params.ndvi_range
    if season in params.bloom_seasons:
        base_min, base_max = ndvi_min + 0.1, ndvi_max
    else:
        base_min, base_max = ndvi_min, ndvi_max - 0.1

    variation = (base_max - base_min) * 0.3
    value = base_min + (base_max - base_min) * rng.random() + (rng.random() - 0.5) * variation
    return max(ndvi_min, min(ndvi_max, value))


def generate_weather(region_id, season, rng=None) -> WeatherSample:
    """Temperature and precipitation around the region's mid values, adjusted by season."""
    season = Season(season)
    rng = get_rng(rng)
    params, is_fallback = parameters_for(region_id)
    if is_fallback:
        t_min, t_max = FALLBACK_PARAMETERS.temperature_range
        p_min, p_max = FALLBACK_PARAMETERS.precipitation_range
        return WeatherSample(
            temperature_mean_c=round(t_min + rng.random() * (t_max - t_min), 1),
            precipitation_mm=round(p_min + rng.random() * (p_max - p_min), 1),
        )

    t_min, t_max = params.temperature_range
    base_temp = (t_min + t_max) / 2
    temp_variation = (t_max - t_min) * 0.4
    temperature = (base_temp + SEASONAL_TEMPERATURE_OFFSET[season]
                   + (rng.random() - 0.5) * temp_variation)

    p_min, p_max = params.precipitation_range
    base_precip = (p_min + p_max) / 2
    precip_variation = (p_max - p_min) * 0.5
    precipitation = max(0.0, base_precip * SEASONAL_PRECIPITATION_MULTIPLIER[season]
                        + (rng.random() - 0.5) * precip_variation)

    return WeatherSample(
        temperature_mean_c=round(temperature, 1),
        precipitation_mm=round(precipitation, 1),
    )


def bloom_status(region_id, ndvi, season):
    """Bloom status label from NDVI relative to the region's maximum NDVI."""
    season = Season(season)
    params, is_fallback = parameters_for(region_id)
    if is_fallback:
        if ndvi > 0.7:
            return 'Peak Bloom'
        if ndvi > 0.5:
            return 'Active Bloom'
        if ndvi > 0.3:
            return 'Early Bloom'
        return 'Pre-Bloom'

    ndvi_max = params.ndvi_range[1]
    peak_threshold = ndvi_max * PEAK_FRACTION
    active_threshold = ndvi_max * ACTIVE_FRACTION
    early_threshold = ndvi_max * EARLY_FRACTION

    if season not in params.bloom_seasons:
        return 'Post-Bloom' if ndvi > early_threshold else 'Dormant'

    if ndvi > peak_threshold:
        return 'Peak Bloom'
    if ndvi > active_threshold:
        return 'Active Bloom'
    if ndvi > early_threshold:
        return 'Early Bloom'
    return 'Pre-Bloom'


def sample_region_metrics(region_id, season, rng=None) -> RegionMetrics:
    """Sample NDVI, weather and bloom status for a region in a season."""
    season = Season(season)
    rng = get_rng(rng)
    _, is_fallback = parameters_for(region_id)
    if is_fallback:
        logging.warning(f"No parameters for region '{region_id}', using generic defaults")

    ndvi = generate_ndvi(region_id, season, rng)
    return RegionMetrics(
        region_id=region_id,
        season=season,
        ndvi=ndvi,
        weather=generate_weather(region_id, season, rng),
        bloom_status=bloom_status(region_id, ndvi, season),
        is_fallback=is_fallback,
    )


def ecological_insights(region_id, ndvi):
    """Qualitative vegetation health, water stress, fire risk and biodiversity."""
    params, is_fallback = parameters_for(region_id)
    if is_fallback:
        return {
            'vegetation_health': 'excellent' if ndvi > 0.6 else 'good' if ndvi > 0.4 else 'moderate',
            'water_stress': 'moderate',
            'fire_risk': 'moderate',
            'biodiversity': 'moderate',
        }

    base_threshold = {'dense': 0.6, 'moderate': 0.5}.get(params.vegetation_density, 0.4)
    if ndvi > base_threshold + 0.1:
        vegetation_health = 'excellent'
    elif ndvi > base_threshold:
        vegetation_health = 'good'
    elif ndvi > base_threshold - 0.1:
        vegetation_health = 'moderate'
    else:
        vegetation_health = 'poor'

    water_stress = {'abundant': 'low', 'moderate': 'moderate'}.get(params.water_availability, 'high')

    if 'Mediterranean' in params.climate:
        fire_risk = 'high'
    elif params.water_availability == 'limited':
        fire_risk = 'moderate'
    else:
        fire_risk = 'low'

    return {
        'vegetation_health': vegetation_health,
        'water_stress': water_stress,
        'fire_risk': fire_risk,
        'biodiversity': params.biodiversity,
    }


def season_for_month(month) -> Season:
    """Calendar season for a month (1-12), Northern-hemisphere convention."""
    if 3 <= month <= 5:
        return Season.SPRING
    if 6 <= month <= 8:
        return Season.SUMMER
    if 9 <= month <= 11:
        return Season.FALL
    return Season.WINTER
