# nrr_api/cache.py
from __future__ import annotations

import time
from typing import Any, Dict, Literal, Optional, Tuple

# In-memory TTL cache for fetched standings (single-instance deploys).
# Solver snapshots are never cached.
# key -> (expires_at_epoch, value)
_cache: Dict[str, Tuple[float, Any]] = {}

Freshness = Literal["fresh", "stale"]


def make_key(*parts: object) -> str:
    """make_key("ipl-standings", 2022, "fresh") -> "ipl-standings:2022:fresh" """
    cleaned = [str(p).strip() for p in parts if str(p).strip()]
    if not cleaned:
        raise ValueError("Cache key must have at least one non-empty part")
    return ":".join(cleaned)


def standings_key(season: int, freshness: Freshness) -> str:
    return make_key("ipl-standings", season, freshness)


def get(key: str) -> Optional[Any]:
    item = _cache.get(key)
    if not item:
        return None

    expires_at, value = item
    if time.time() > expires_at:
        _cache.pop(key, None)
        return None

    return value


def set(key: str, value: Any, ttl_seconds: int = 60) -> None:
    if ttl_seconds <= 0:
        return
    _cache[key] = (time.time() + ttl_seconds, value)


def clear() -> None:
    _cache.clear()
