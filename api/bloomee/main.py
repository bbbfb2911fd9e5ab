from flask import Flask, jsonify
from flask_cors import CORS
import logging

from . import config
from .location_data import CatalogError, validate_catalog
from .regions import REGION_CATALOG
from .routes.bloom import bloom_bp
from .routes.regions import regions_bp

logging.basicConfig(level=config.LOG_LEVEL,
                    format='%(asctime)s - %(levelname)s - %(message)s')


def catalog_status():
    """Validate the region catalog, returning (valid, error message)."""
    try:
        validate_catalog(REGION_CATALOG)
        return True, None
    except CatalogError as e:
        return False, str(e)


# Fail fast if the region catalog and parameter table have drifted apart
CATALOG_VALID, _catalog_error = catalog_status()
if not CATALOG_VALID:
    logging.error(f"✗ Region catalog is invalid: {_catalog_error}")
    raise CatalogError(_catalog_error)

app = Flask(__name__)
CORS(app)

app.register_blueprint(bloom_bp, url_prefix='/api/bloom')
app.register_blueprint(regions_bp, url_prefix='/api/regions')


@app.route('/')
def index():
    """Returns a welcome message."""
    return jsonify(message="Bloomee API is running.")


@app.route('/api/health')
def health():
    """Returns API health status, re-checking the region catalog."""
    valid, error = catalog_status()
    return jsonify({
        "status": "healthy" if valid else "degraded",
        "regions": len(REGION_CATALOG),
        "catalog_valid": valid,
        "message": "API is running" if valid else error,
    })


def run():
    """Start the development server (installed as the ``bloomee`` command)."""
    app.run(host='0.0.0.0', port=config.PORT, debug=config.DEBUG)


if __name__ == '__main__':
    run()
