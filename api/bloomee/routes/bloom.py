from flask import Blueprint, request, jsonify
from datetime import date
import logging
import traceback
from pydantic import ValidationError

from ..bloom_data import (
    bloom_statistics,
    dormant_locations,
    global_bloom_data,
    grid_bloom_data,
    peak_bloom_locations,
    seasonal_bloom_data,
)
from ..color_mapping import (
    create_phase_transition,
    generate_color_palette,
    intensity_to_color,
    to_hex,
)
from ..models.schemas import (
    BloomGridQuery,
    BloomIntensityQuery,
    PaletteQuery,
    PhaseTransitionQuery,
    SeasonalQuery,
    StatisticsQuery,
)
from ..phenology import compute_bloom

bloom_bp = Blueprint('bloom', __name__)


def validation_error(endpoint, e):
    """400 response for a pydantic validation failure."""
    errors = e.errors(include_url=False, include_context=False)
    logging.error(f"Validation error in {endpoint} endpoint: {errors}")
    return jsonify(error=errors), 400


def server_error(endpoint, e):
    """500 response for an unexpected failure, with the traceback logged."""
    logging.error(f"API Error in {endpoint} endpoint: {e}")
    logging.error(traceback.format_exc())
    return jsonify(error=str(e), details="Check server logs for traceback"), 500


@bloom_bp.route('/intensity', methods=['GET'])
def get_bloom_intensity():
    """Bloom intensity, season, phase and display color for a latitude and date."""
    try:
        query = BloomIntensityQuery(**request.args.to_dict())
    except ValidationError as e:
        return validation_error('/intensity', e)

    try:
        target_date = query.date or date.today()
        bloom = compute_bloom(query.lat, target_date)
        color = intensity_to_color(bloom.intensity, bloom.phase, bloom.season)
        return jsonify({
            "location": {"lat": query.lat, "lng": query.lng},
            "date": target_date.isoformat(),
            "bloom": bloom.to_dict(),
            "color": {**color.to_dict(), "hex": to_hex(color)},
        })
    except Exception as e:
        return server_error('/intensity', e)


@bloom_bp.route('/grid', methods=['GET'])
def get_bloom_grid():
    """Bloom data for a lat/lng grid, one record per grid point."""
    try:
        query = BloomGridQuery(**request.args.to_dict())
    except ValidationError as e:
        return validation_error('/grid', e)

    try:
        target_date = query.date or date.today()
        df = grid_bloom_data(query.start_lat, query.end_lat, query.start_lng, query.end_lng,
                             query.resolution, target_date)
        return jsonify({
            "date": target_date.isoformat(),
            "resolution": query.resolution,
            "count": len(df),
            "points": df.to_dict(orient='records'),
        })
    except Exception as e:
        return server_error('/grid', e)


@bloom_bp.route('/seasonal', methods=['GET'])
def get_seasonal_bloom():
    """Weekly bloom curve for a predefined location."""
    try:
        query = SeasonalQuery(**request.args.to_dict())
    except ValidationError as e:
        return validation_error('/seasonal', e)

    try:
        df = seasonal_bloom_data(query.location, query.year)
        if df.empty:
            return jsonify({"error": f"Unknown location: {query.location}"}), 404
        return jsonify({
            "location": query.location,
            "year": query.year,
            "weeks": df.to_dict(orient='records'),
        })
    except Exception as e:
        return server_error('/seasonal', e)


@bloom_bp.route('/statistics', methods=['GET'])
def get_bloom_statistics():
    """Global bloom statistics plus the peak and dormant locations."""
    try:
        query = StatisticsQuery(**request.args.to_dict())
    except ValidationError as e:
        return validation_error('/statistics', e)

    try:
        target_date = query.date or date.today()
        df = global_bloom_data(target_date)
        return jsonify({
            "date": target_date.isoformat(),
            "statistics": bloom_statistics(target_date, data=df),
            "peak_locations": peak_bloom_locations(target_date, query.peak_threshold,
                                                   data=df)["location"].tolist(),
            "dormant_locations": dormant_locations(target_date, query.dormant_threshold,
                                                   data=df)["location"].tolist(),
        })
    except Exception as e:
        return server_error('/statistics', e)


@bloom_bp.route('/palette', methods=['GET'])
def get_color_palette():
    """Color ramp for a phase and season."""
    try:
        query = PaletteQuery(**request.args.to_dict())
    except ValidationError as e:
        return validation_error('/palette', e)

    try:
        palette = generate_color_palette(query.phase, query.season, query.steps)
        return jsonify({
            "phase": query.phase.value,
            "season": query.season.value,
            "colors": [{**c.to_dict(), "hex": to_hex(c)} for c in palette],
        })
    except Exception as e:
        return server_error('/palette', e)


@bloom_bp.route('/transition', methods=['GET'])
def get_phase_transition():
    """Color part-way through a transition between two bloom phases."""
    try:
        query = PhaseTransitionQuery(**request.args.to_dict())
    except ValidationError as e:
        return validation_error('/transition', e)

    try:
        color = create_phase_transition(query.from_phase, query.to_phase, query.season,
                                        query.progress)
        return jsonify({
            "from_phase": query.from_phase.value,
            "to_phase": query.to_phase.value,
            "season": query.season.value,
            "progress": query.progress,
            "color": {**color.to_dict(), "hex": to_hex(color)},
        })
    except Exception as e:
        return server_error('/transition', e)
