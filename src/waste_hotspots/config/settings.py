# ============================================================
# 📦 src/waste_hotspots/config/settings.py
# ============================================================

import os
from dotenv import load_dotenv

load_dotenv()


# =====================================================
# 🔥 Hotspot detection
# =====================================================
HOTSPOT_RADIUS_KM = float(os.getenv("HOTSPOT_RADIUS_KM", "0.5"))
HOTSPOT_MIN_SIZE = int(os.getenv("HOTSPOT_MIN_SIZE", "3"))

# greedy = anchor-order approximation | connected = BallTree + union-find
HOTSPOT_STRATEGY = os.getenv("HOTSPOT_STRATEGY", "greedy")


# =====================================================
# 🌡️ Heat layer
# =====================================================
HEAT_WEIGHT_FACTOR = float(os.getenv("HEAT_WEIGHT_FACTOR", "3"))
HEAT_WEIGHT_CAP = float(os.getenv("HEAT_WEIGHT_CAP", "150"))
DEFAULT_WEIGHT_KG = 1.0


# =====================================================
# 🗺️ Reverse geocoding
# =====================================================
# auto | google | nominatim | none
GEOCODER_PROVIDER = os.getenv("GEOCODER_PROVIDER", "auto").strip().lower()
GMAPS_API_KEY = os.getenv("GMAPS_API_KEY")
NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
GEOCODE_TIMEOUT_SEC = float(os.getenv("GEOCODE_TIMEOUT_SEC", "5"))
GEOCODE_MAX_WORKERS = int(os.getenv("GEOCODE_MAX_WORKERS", "4"))
GEOCODER_USER_AGENT = os.getenv("GEOCODER_USER_AGENT", "WasteHotspots-Geocoder/1.0")


# =====================================================
# ⚙️ Runtime
# =====================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
API_PORT = int(os.getenv("API_PORT", "8010"))
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "output/hotspots")
