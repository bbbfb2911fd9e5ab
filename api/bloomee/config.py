"""
Configuration for the Bloomee API

IMPORTANT: Set these values in your .env file instead of here:
  PORT=5001
  LOG_LEVEL=DEBUG
  VARIETY_PROBABILITY=0.2

The values below are just fallback defaults.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file before reading them
load_dotenv()

# Flask
PORT = int(os.getenv('PORT', 5001))
DEBUG = os.getenv('DEBUG', 'true').lower() in ('1', 'true', 'yes')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Region resolver (variety mode is opt-in, demo only)
VARIETY_PROBABILITY = float(os.getenv('VARIETY_PROBABILITY', 0.2))
VARIETY_MAX_DISTANCE_KM = float(os.getenv('VARIETY_MAX_DISTANCE_KM', 10000))
VARIETY_TOP_CANDIDATES = int(os.getenv('VARIETY_TOP_CANDIDATES', 3))

# Forecast
DEFAULT_FORECAST_DAYS = int(os.getenv('DEFAULT_FORECAST_DAYS', 7))
MAX_FORECAST_DAYS = int(os.getenv('MAX_FORECAST_DAYS', 30))

# Grid / palette limits
MAX_GRID_RESOLUTION = int(os.getenv('MAX_GRID_RESOLUTION', 50))
DEFAULT_PALETTE_STEPS = int(os.getenv('DEFAULT_PALETTE_STEPS', 10))
MAX_PALETTE_STEPS = int(os.getenv('MAX_PALETTE_STEPS', 100))
