"""
Color mapping utilities for bloom visualization.
"""

from typing import List

from .models.bloom import ColorMapping, Phase, Season
from .rng import get_rng

# Base colors for each bloom phase
PHASE_COLORS = {
    Phase.DORMANT: (0.3, 0.3, 0.3),      # Dark gray/brown
    Phase.PRE_BLOOM: (0.4, 0.5, 0.3),    # Dull green
    Phase.BLOOM: (0.2, 0.7, 0.3),        # Vibrant green
    Phase.POST_BLOOM: (0.6, 0.4, 0.2),   # Yellow/orange
}

# Seasonal tints blended on top of the phase color
SEASON_TINTS = {
    Season.SPRING: (0.0, 0.3, 0.0),  # Fresh green
    Season.SUMMER: (0.0, 0.5, 0.0),  # Deep green
    Season.FALL: (0.3, 0.2, 0.0),    # Orange/brown
    Season.WINTER: (0.2, 0.2, 0.2),  # Gray
}

GAMMA = 0.8
TINT_WEIGHT = 0.3
JITTER_WEIGHT = 0.1


def _clamp(value, low=0.0, high=1.0):
    return max(low, min(high, value))


def intensity_to_color(intensity, phase, season, rng=None) -> ColorMapping:
    """
    Convert bloom intensity to an RGB color.

    The phase color is scaled by ``intensity ** 0.8`` so mid intensities don't
    look washed out, the seasonal tint is added in proportion to intensity,
    and a small random jitter gives neighbouring points visual variety.

    Raises:
        ValueError: If phase or season is not a known label.
    """
    phase = Phase(phase)
    season = Season(season)
    rng = get_rng(rng)

    factor = _clamp(intensity) ** GAMMA
    variation = intensity * JITTER_WEIGHT

    channels = []
    for base, tint in zip(PHASE_COLORS[phase], SEASON_TINTS[season]):
        value = min(1.0, base * factor + tint * intensity * TINT_WEIGHT)
        value += (rng.random() - 0.5) * variation
        channels.append(_clamp(value))

    r, g, b = channels
    return ColorMapping(r=r, g=g, b=b, intensity=intensity)


def generate_color_palette(phase, season, steps=10, rng=None) -> List[ColorMapping]:
    """Colors for ``steps`` evenly spaced intensities from 0 to 1."""
    rng = get_rng(rng)
    if steps < 2:
        return [intensity_to_color(1.0, phase, season, rng)] if steps == 1 else []
    return [intensity_to_color(i / (steps - 1), phase, season, rng) for i in range(steps)]


def interpolate_colors(color1, color2, factor) -> ColorMapping:
    """Linear blend between two colors; factor is clamped to [0, 1]."""
    t = _clamp(factor)
    return ColorMapping(
        r=color1.r + (color2.r - color1.r) * t,
        g=color1.g + (color2.g - color1.g) * t,
        b=color1.b + (color2.b - color1.b) * t,
        intensity=color1.intensity + (color2.intensity - color1.intensity) * t,
    )


def create_phase_transition(from_phase, to_phase, season, progress, rng=None) -> ColorMapping:
    """Smooth transition between two bloom phases at mid intensity."""
    rng = get_rng(rng)
    from_color = intensity_to_color(0.5, from_phase, season, rng)
    to_color = intensity_to_color(0.5, to_phase, season, rng)
    return interpolate_colors(from_color, to_color, progress)


def to_hex(color):
    """'#rrggbb' string for a ColorMapping."""
    return '#{:02x}{:02x}{:02x}'.format(
        *(int(round(_clamp(c) * 255)) for c in (color.r, color.g, color.b))
    )
