import logging
import os

from dotenv import load_dotenv

# --- ENVIRONMENT ---

# Load environment variables from .env file
load_dotenv()

# Only a demo key is ever needed; no NASA endpoint is queried.
NASA_API_KEY = os.getenv("NASA_API_KEY", "DEMO_KEY")

USGS_API_BASE = os.getenv("USGS_API_BASE", "https://earthquake.usgs.gov/fdsnws/event/1/query")
USGS_TIMEOUT = float(os.getenv("USGS_TIMEOUT", "10"))
USGS_USER_AGENT = os.getenv("USGS_USER_AGENT", "WellSphere/1.0")

EMAIL_USER = os.getenv("EMAIL_USER", "noreply@wellsphere.com")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


# --- LOGGING ---

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
