"""
Seasonal bloom phenology model.

Maps (latitude, date) to a bloom intensity, season and phase:
1. Day of year from the date's own calendar year
2. Southern hemisphere handled by phase-shifting the day by 183 and reusing
   the Northern-hemisphere curve
3. Raw intensity damped by a jittered latitude-band factor
   (tropical, subtropical, temperate, boreal, polar)
"""

from datetime import datetime
from typing import List, Tuple

from .models.bloom import BloomIntensity, Phase, Season
from .rng import get_rng

SOUTHERN_SHIFT_DAYS = 183

# (upper bound of |latitude|, minimum factor, jitter span)
LATITUDE_BANDS = (
    (10, 0.8, 0.2),   # tropical - consistent bloom throughout the year
    (30, 0.7, 0.3),   # subtropical
    (50, 0.6, 0.4),   # temperate - strong seasonal variation
    (70, 0.3, 0.4),   # boreal - very seasonal
)
POLAR_BAND = (0.1, 0.2)


def day_of_year(d):
    """Day of year, 1-based (366 on the last day of a leap year)."""
    if isinstance(d, datetime):
        d = d.date()
    return d.timetuple().tm_yday


def hemisphere_day(latitude, day):
    """Day index fed to the seasonal curve; shifted half a year south of the equator."""
    if latitude >= 0:
        return day
    return (day + SOUTHERN_SHIFT_DAYS) % 365


def seasonal_stage(day) -> Tuple[Season, Phase, float]:
    """
    Northern-hemisphere seasonal curve for a (possibly shifted) day index.

    Each season is a 90-day window with its own piecewise-linear ramp.
    Returns the season, the bloom phase and the undamped intensity.
    """
    if 60 <= day < 150:  # March-May
        progress = (day - 60) / 90
        if progress < 0.3:
            return Season.SPRING, Phase.PRE_BLOOM, progress / 0.3 * 0.3
        if progress < 0.7:
            return Season.SPRING, Phase.BLOOM, 0.3 + (progress - 0.3) / 0.4 * 0.7
        return Season.SPRING, Phase.POST_BLOOM, 1.0 - (progress - 0.7) / 0.3 * 0.5

    if 150 <= day < 240:  # June-August
        progress = (day - 150) / 90
        if progress < 0.2:
            return Season.SUMMER, Phase.BLOOM, 0.8 + progress / 0.2 * 0.2
        if progress < 0.8:
            return Season.SUMMER, Phase.BLOOM, 1.0
        return Season.SUMMER, Phase.POST_BLOOM, 1.0 - (progress - 0.8) / 0.2 * 0.3

    if 240 <= day < 330:  # September-November
        progress = (day - 240) / 90
        if progress < 0.4:
            return Season.FALL, Phase.POST_BLOOM, 0.7 - progress / 0.4 * 0.4
        return Season.FALL, Phase.DORMANT, 0.3 - (progress - 0.4) / 0.6 * 0.3

    # December-February
    return Season.WINTER, Phase.DORMANT, max(0.0, 0.1 - abs(day - 15) / 45 * 0.1)


def latitude_factor(abs_latitude, rng=None):
    """
    Latitude-based bloom damping factor.

    Tropical regions have more consistent bloom, polar regions minimal bloom.
    Anything past the last band (including |lat| > 90) is treated as polar.
    """
    rng = get_rng(rng)
    for upper, minimum, span in LATITUDE_BANDS:
        if abs_latitude < upper:
            return minimum + rng.random() * span
    minimum, span = POLAR_BAND
    return minimum + rng.random() * span


def compute_bloom(latitude, d, rng=None) -> BloomIntensity:
    """
    Calculate bloom intensity based on latitude and date.

    Args:
        latitude: Latitude in degrees. Out-of-range values degrade to the
            polar band rather than raising.
        d: date or datetime; the time of day is ignored.
        rng: Optional random source for the latitude jitter.

    Returns:
        BloomIntensity with intensity clamped to [0, 1].
    """
    day = hemisphere_day(latitude, day_of_year(d))
    season, phase, intensity = seasonal_stage(day)

    intensity *= latitude_factor(abs(latitude), rng)

    return BloomIntensity(
        intensity=max(0.0, min(1.0, intensity)),
        season=season,
        phase=phase,
    )


def generate_bloom_grid(start_lat, end_lat, start_lng, end_lng, resolution, d,
                        rng=None) -> List[Tuple[float, float, BloomIntensity]]:
    """Bloom samples on a (resolution + 1) x (resolution + 1) lat/lng grid."""
    rng = get_rng(rng)
    resolution = max(1, int(resolution))
    lat_step = (end_lat - start_lat) / resolution
    lng_step = (end_lng - start_lng) / resolution

    samples = []
    for i in range(resolution + 1):
        lat = start_lat + i * lat_step
        for j in range(resolution + 1):
            lng = start_lng + j * lng_step
            samples.append((lat, lng, compute_bloom(lat, d, rng)))
    return samples
