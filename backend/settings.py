import logging
import os
from pathlib import Path
from typing import Optional

# Basic settings helper to read environment configuration.

BACKEND_ROOT = Path(__file__).resolve().parent
DEFAULT_DATABASE_URL = f"sqlite:///{BACKEND_ROOT / 'app.db'}"
DEFAULT_OSM_API_BASE_URL = "https://api.openstreetmap.org/api/0.6/node"
FALLBACK_USER_AGENT = "campus-pos-backend/0.1 (contact: example@example.com)"

logger = logging.getLogger(__name__)


def _as_float(val: str | None, default: Optional[float] = None) -> Optional[float]:
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        logger.warning("Ignoring invalid float setting %r; using default %r", val, default)
        return default


class Settings:
    def __init__(self) -> None:
        self.DATABASE_URL: str = os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
        self.OSM_API_BASE_URL: str = os.getenv("OSM_API_BASE_URL") or DEFAULT_OSM_API_BASE_URL
        self.OSM_USER_AGENT: Optional[str] = os.getenv("OSM_USER_AGENT")
        # None keeps the transport default (no timeout)
        self.OSM_REQUEST_TIMEOUT: Optional[float] = _as_float(os.getenv("OSM_REQUEST_TIMEOUT"))
        self.LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").upper()


settings = Settings()
