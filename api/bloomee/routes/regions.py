"""
Bloom region routes (Flask)

Catalog listing, coordinate-to-region resolution and per-region metrics,
predictions and forecasts.
"""

from flask import Blueprint, request, jsonify
from datetime import date
import logging
from pydantic import ValidationError

from .bloom import server_error, validation_error
from ..geo import point_to_lat_lng
from ..location_data import parameters_for, sample_region_metrics, season_for_month
from ..models.schemas import (
    ForecastQuery,
    GlobePointQuery,
    LocateQuery,
    RegionMetricsQuery,
    RegionPredictionQuery,
    ResolveRegionQuery,
)
from ..predictions import describe_location, region_forecast, region_prediction
from ..regions import REGION_CATALOG, get_region, region_name, resolve_region

regions_bp = Blueprint('regions', __name__)


@regions_bp.route('/', methods=['GET'])
def list_regions():
    """List the bloom region catalog."""
    regions = []
    for region in REGION_CATALOG:
        params, _ = parameters_for(region.id)
        regions.append({
            **region.to_dict(),
            "biome": params.biome,
            "bloom_seasons": sorted(s.value for s in params.bloom_seasons),
        })
    return jsonify({"count": len(regions), "regions": regions})


@regions_bp.route('/resolve', methods=['GET'])
def resolve():
    """
    Resolve a coordinate to the nearest bloom region.

    Query: lat, lng, variety (optional, default false)
    """
    try:
        query = ResolveRegionQuery(**request.args.to_dict())
    except ValidationError as e:
        return validation_error('/resolve', e)

    try:
        region_id = resolve_region(query.lat, query.lng, variety=query.variety)
        return jsonify({
            "location": {"lat": query.lat, "lng": query.lng},
            "region": get_region(region_id).to_dict(),
            "variety": query.variety,
        })
    except Exception as e:
        return server_error('/resolve', e)


@regions_bp.route('/resolve-point', methods=['GET'])
def resolve_point():
    """
    Resolve a clicked point on the globe mesh to the nearest bloom region.

    Query: x, y, z (any non-zero length), variety (optional, default false)
    """
    try:
        query = GlobePointQuery(**request.args.to_dict())
        coords = point_to_lat_lng(query.x, query.y, query.z)
    except ValidationError as e:
        return validation_error('/resolve-point', e)
    except ValueError as e:
        logging.error(f"Invalid globe point in /resolve-point endpoint: {e}")
        return jsonify(error=str(e)), 400

    try:
        region_id = resolve_region(coords['lat'], coords['lng'], variety=query.variety)
        return jsonify({
            "location": coords,
            "region": get_region(region_id).to_dict(),
            "variety": query.variety,
        })
    except Exception as e:
        return server_error('/resolve-point', e)


@regions_bp.route('/locate', methods=['GET'])
def locate():
    """Region, bloom state, color and metrics for a clicked coordinate."""
    try:
        query = LocateQuery(**request.args.to_dict())
    except ValidationError as e:
        return validation_error('/locate', e)

    try:
        return jsonify(describe_location(query.lat, query.lng, query.date or date.today(),
                                         variety=query.variety))
    except Exception as e:
        return server_error('/locate', e)


@regions_bp.route('/<region_id>/metrics', methods=['GET'])
def region_metrics(region_id):
    """Sampled NDVI, weather and bloom status for a region."""
    try:
        query = RegionMetricsQuery(**request.args.to_dict())
    except ValidationError as e:
        return validation_error('/metrics', e)

    try:
        season = query.season or season_for_month(date.today().month)
        metrics = sample_region_metrics(region_id, season)
        return jsonify({**metrics.to_dict(), "region_name": region_name(region_id)})
    except Exception as e:
        return server_error('/metrics', e)


@regions_bp.route('/<region_id>/predict', methods=['GET'])
def predict(region_id):
    """Bloom prediction for a region on a date."""
    try:
        query = RegionPredictionQuery(**request.args.to_dict())
    except ValidationError as e:
        return validation_error('/predict', e)

    try:
        return jsonify(region_prediction(region_id, query.date or date.today(),
                                         include_weather=query.include_weather,
                                         season=query.season))
    except Exception as e:
        return server_error('/predict', e)


@regions_bp.route('/<region_id>/forecast', methods=['GET'])
def forecast(region_id):
    """Daily bloom predictions for a region over a date range."""
    try:
        query = ForecastQuery(**request.args.to_dict())
    except ValidationError as e:
        return validation_error('/forecast', e)

    try:
        return jsonify(region_forecast(region_id, query.start_date or date.today(), query.days,
                                       include_weather=query.include_weather))
    except Exception as e:
        return server_error('/forecast', e)
