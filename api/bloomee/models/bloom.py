"""
Core bloom data types shared by the phenology model, region resolver,
color mapper and data synthesizer.

Everything here is immutable and recomputed from inputs on every call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple


class Season(str, Enum):
    SPRING = 'spring'
    SUMMER = 'summer'
    FALL = 'fall'
    WINTER = 'winter'


class Phase(str, Enum):
    PRE_BLOOM = 'pre-bloom'
    BLOOM = 'bloom'
    POST_BLOOM = 'post-bloom'
    DORMANT = 'dormant'


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float

    @classmethod
    def normalized(cls, lat: float, lng: float) -> 'Coordinate':
        """Clamp latitude to [-90, 90] and wrap longitude into [-180, 180)."""
        lat = max(-90.0, min(90.0, float(lat)))
        lng = ((float(lng) + 180.0) % 360.0) - 180.0
        return cls(lat=lat, lng=lng)


@dataclass(frozen=True)
class BloomIntensity:
    intensity: float  # 0-1, where 1 is peak bloom
    season: Season
    phase: Phase

    def to_dict(self) -> Dict:
        return {
            'intensity': round(self.intensity, 4),
            'season': self.season.value,
            'phase': self.phase.value,
        }


@dataclass(frozen=True)
class ColorMapping:
    r: float
    g: float
    b: float
    intensity: float

    def to_dict(self) -> Dict:
        return {
            'r': round(self.r, 4),
            'g': round(self.g, 4),
            'b': round(self.b, 4),
            'intensity': round(self.intensity, 4),
        }


@dataclass(frozen=True)
class BloomRegion:
    id: str
    name: str
    anchor: Coordinate
    threshold_km: float

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'lat': self.anchor.lat,
            'lng': self.anchor.lng,
            'threshold_km': self.threshold_km,
        }


@dataclass(frozen=True)
class RegionParameters:
    """Static sampling ranges and qualitative tags for one bloom region."""

    name: str
    biome: str
    climate: str
    typical_species: Tuple[str, ...]
    bloom_seasons: FrozenSet[Season]
    ndvi_range: Tuple[float, float]
    temperature_range: Tuple[float, float]  # degrees C
    precipitation_range: Tuple[float, float]  # mm
    biodiversity: str  # high | moderate | low
    vegetation_density: str  # dense | moderate | sparse
    water_availability: str  # abundant | moderate | limited


@dataclass(frozen=True)
class WeatherSample:
    temperature_mean_c: float
    precipitation_mm: float

    def to_dict(self) -> Dict:
        return {
            'temperature_mean_c': self.temperature_mean_c,
            'precipitation_mm': self.precipitation_mm,
        }


@dataclass(frozen=True)
class RegionMetrics:
    region_id: str
    season: Season
    ndvi: float
    weather: WeatherSample
    bloom_status: str
    is_fallback: bool = False

    def to_dict(self) -> Dict:
        return {
            'region': self.region_id,
            'season': self.season.value,
            'ndvi': round(self.ndvi, 4),
            'weather': self.weather.to_dict(),
            'bloom_status': self.bloom_status,
            'is_fallback': self.is_fallback,
        }


@dataclass(frozen=True)
class BloomDataPoint:
    lat: float
    lng: float
    intensity: float
    season: Season
    phase: Phase
    color: ColorMapping
    location: Optional[str] = field(default=None)

    def to_dict(self) -> Dict:
        return {
            'lat': self.lat,
            'lng': self.lng,
            'intensity': round(self.intensity, 4),
            'season': self.season.value,
            'phase': self.phase.value,
            'color': self.color.to_dict(),
            'location': self.location,
        }
