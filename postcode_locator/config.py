# postcode_locator/config.py
from dotenv import load_dotenv
import os

load_dotenv()

# API Keys
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")

# Runtime parameters
MAX_RANGE_MILES = float(os.getenv("MAX_RANGE_MILES", "10"))
CACHE_TTL_MILLIS = int(os.getenv("CACHE_TTL_MILLIS", "3000000"))  # 50 minutes
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "60"))
GEOCODE_RATE_LIMIT = int(os.getenv("GEOCODE_RATE_LIMIT", "10"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# URLs
LOCATIONS_URL = os.getenv("LOCATIONS_URL", "locations.json")
GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
POSTCODES_IO_URL = "https://api.postcodes.io"

# File names
CACHE_PATH = os.getenv("CACHE_PATH", ".postcode_locator_cache.json")  # empty disables the cache
INPUT_CSV = "postcodes.csv"
OUTPUT_CSV = "nearest_locations.csv"
