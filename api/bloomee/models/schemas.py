from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import date as date_type

from .. import config
from .bloom import Phase, Season


class _Query(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)


class BloomIntensityQuery(_Query):
    lat: float = Field(..., ge=-90, le=90, description="Latitude of the location.")
    lng: float = Field(0.0, ge=-180, le=180, description="Longitude of the location.")
    date: Optional[date_type] = Field(None, description="Date to evaluate. Defaults to today.")


class BloomGridQuery(_Query):
    start_lat: float = Field(..., ge=-90, le=90)
    end_lat: float = Field(..., ge=-90, le=90)
    start_lng: float = Field(..., ge=-180, le=180)
    end_lng: float = Field(..., ge=-180, le=180)
    resolution: int = Field(10, ge=1, description="Grid cells per side.")
    date: Optional[date_type] = None

    @field_validator('resolution')
    @classmethod
    def resolution_within_limit(cls, v):
        if v > config.MAX_GRID_RESOLUTION:
            raise ValueError(f"resolution must be at most {config.MAX_GRID_RESOLUTION}")
        return v


class SeasonalQuery(_Query):
    location: str = Field(..., description="Name of a predefined bloom location.")
    year: int = Field(2023, ge=1900, le=2100)


class StatisticsQuery(_Query):
    date: Optional[date_type] = None
    peak_threshold: float = Field(0.8, ge=0, le=1)
    dormant_threshold: float = Field(0.2, ge=0, le=1)


class PaletteQuery(_Query):
    phase: Phase
    season: Season
    steps: int = Field(default_factory=lambda: config.DEFAULT_PALETTE_STEPS, ge=1)

    @field_validator('steps')
    @classmethod
    def steps_within_limit(cls, v):
        if v > config.MAX_PALETTE_STEPS:
            raise ValueError(f"steps must be at most {config.MAX_PALETTE_STEPS}")
        return v


class PhaseTransitionQuery(_Query):
    from_phase: Phase
    to_phase: Phase
    season: Season
    progress: float = Field(0.5, description="Transition progress; clamped to [0, 1].")


class ResolveRegionQuery(_Query):
    lat: float = Field(..., ge=-90, le=90, description="Latitude of the location.")
    lng: float = Field(..., ge=-180, le=180, description="Longitude of the location.")
    variety: bool = Field(False, description="Opt-in demo variety mode.")


class GlobePointQuery(_Query):
    """A point on the globe mesh; it need not be unit length."""

    x: float
    y: float
    z: float
    variety: bool = False


class LocateQuery(ResolveRegionQuery):
    date: Optional[date_type] = None


class RegionMetricsQuery(_Query):
    season: Optional[Season] = None


class RegionPredictionQuery(_Query):
    date: Optional[date_type] = None
    include_weather: bool = True
    season: Optional[Season] = None


class ForecastQuery(_Query):
    start_date: Optional[date_type] = None
    days: int = Field(default_factory=lambda: config.DEFAULT_FORECAST_DAYS, ge=1)
    include_weather: bool = True

    @field_validator('days')
    @classmethod
    def days_within_limit(cls, v):
        if v > config.MAX_FORECAST_DAYS:
            raise ValueError(f"days must be at most {config.MAX_FORECAST_DAYS}")
        return v
