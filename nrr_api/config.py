# nrr_api/config.py
from __future__ import annotations

import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _get_env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, str(default))
    try:
        return float(raw)
    except ValueError:
        return default


# -------------------------
# Calculator defaults
# -------------------------
DEFAULT_SEASON: int = _get_env_int("DEFAULT_SEASON", 2022)
DEFAULT_MATCH_OVERS: int = _get_env_int("DEFAULT_MATCH_OVERS", 20)

# Resolution of the chase-overs search (decimal overs)
CHASE_PRECISION_OVERS: float = _get_env_float("CHASE_PRECISION_OVERS", 0.01)


# -------------------------
# ESPN standings config (IPL)
# -------------------------
IPL_SERIES_ID: str = _get_env("IPL_SERIES_ID", "8048")

ESPN_TABLE_URL_TEMPLATE: str = _get_env(
    "ESPN_TABLE_URL_TEMPLATE",
    "https://www.espn.in/cricket/table/series/{series_id}/season/{season}/indian-premier-league",
)

ESPN_TIMEOUT_SECONDS: int = _get_env_int("ESPN_TIMEOUT_SECONDS", 20)

# Cache TTLs
STANDINGS_CACHE_TTL_SECONDS: int = _get_env_int("STANDINGS_CACHE_TTL_SECONDS", 120)
STANDINGS_STALE_TTL_SECONDS: int = _get_env_int("STANDINGS_STALE_TTL_SECONDS", 24 * 3600)

LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO").upper()


def validate_config() -> None:
    if DEFAULT_MATCH_OVERS <= 0:
        raise RuntimeError("DEFAULT_MATCH_OVERS must be positive")

    if not 0 < CHASE_PRECISION_OVERS < 1:
        raise RuntimeError("CHASE_PRECISION_OVERS must be between 0 and 1")

    # ESPN template must have placeholders
    if "{season}" not in ESPN_TABLE_URL_TEMPLATE or "{series_id}" not in ESPN_TABLE_URL_TEMPLATE:
        raise RuntimeError("ESPN_TABLE_URL_TEMPLATE must contain {series_id} and {season} placeholders.")

    if not ESPN_TABLE_URL_TEMPLATE.startswith("http"):
        raise RuntimeError("ESPN_TABLE_URL_TEMPLATE must start with http/https")

    if ESPN_TIMEOUT_SECONDS <= 0:
        raise RuntimeError("ESPN_TIMEOUT_SECONDS must be positive")

    # TTL validation
    if STANDINGS_CACHE_TTL_SECONDS <= 0:
        raise RuntimeError("STANDINGS_CACHE_TTL_SECONDS must be positive")

    if STANDINGS_STALE_TTL_SECONDS < STANDINGS_CACHE_TTL_SECONDS:
        raise RuntimeError("STANDINGS_STALE_TTL_SECONDS must be >= STANDINGS_CACHE_TTL_SECONDS")

    if LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise RuntimeError(f"Invalid LOG_LEVEL: {LOG_LEVEL}")
