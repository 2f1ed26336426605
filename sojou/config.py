"""
config.py
---------
Central configuration for the Sojou backend.
Every knob is read from an environment variable with a working default, so
the service and the CLI run with no .env file at all.
"""

import os
from pathlib import Path

# Load .env from the project root (if it exists) so env vars in that file
# are picked up by os.getenv() below.  Won't override vars already set in the shell.
from dotenv import load_dotenv

_ROOT_DIR: Path = Path(__file__).resolve().parents[1]
_env_path = _ROOT_DIR / ".env"
if _env_path.exists():
    load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# ── Catalog ───────────────────────────────────────────────────────────────────
# JSON list of activity records (the swipe deck). Same shape the mobile app
# bundles: camelCase keys such as durationMins / priceTier / openWindows.
CATALOG_PATH: str = os.getenv("SOJOU_CATALOG_PATH", str(_ROOT_DIR / "data" / "activities.paris.json"))
DEFAULT_CITY: str = os.getenv("SOJOU_DEFAULT_CITY", "Paris")

# ── Trip configuration bounds ────────────────────────────────────────────────
# The day picker in the app offers 2–4 days; the builder itself accepts any int.
DEFAULT_DAYS_COUNT: int  = int(os.getenv("SOJOU_DEFAULT_DAYS_COUNT", "3"))
MIN_DAYS_COUNT: int      = int(os.getenv("SOJOU_MIN_DAYS_COUNT", "2"))
MAX_DAYS_COUNT: int      = int(os.getenv("SOJOU_MAX_DAYS_COUNT", "4"))
DEFAULT_BUDGET_TIER: int = int(os.getenv("SOJOU_DEFAULT_BUDGET_TIER", "2"))   # 0 = free … 3 = €€€
# Upper bound for the stateless /itinerary/build endpoint (one day allocates three blocks).
MAX_BUILD_DAYS: int      = int(os.getenv("SOJOU_MAX_BUILD_DAYS", "30"))

# ── Logging ───────────────────────────────────────────────────────────────────
# Structured session logs land in LOGS_DIR/<session_id>.jsonl
LOGS_DIR: str            = os.getenv("SOJOU_LOGS_DIR", str(_ROOT_DIR / "logs"))
STRUCTURED_LOGGING: bool = _env_bool("SOJOU_STRUCTURED_LOGGING", "true")
LOG_LEVEL: str           = os.getenv("SOJOU_LOG_LEVEL", "INFO").upper()

# ── HTTP server ───────────────────────────────────────────────────────────────
API_HOST: str = os.getenv("SOJOU_API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("SOJOU_API_PORT", "8000"))
# In-memory trip store; the least recently used trip is evicted past this size.
MAX_TRIP_SESSIONS: int = int(os.getenv("SOJOU_MAX_TRIP_SESSIONS", "1000"))
