"""
Memo cache for search results.

The catalog is static, so a result depends only on the query, the filter
state, the saved ids and which catalog was searched. Entries hold the
matching recipe positions rather than the recipes themselves.
"""
from __future__ import annotations

import hashlib
import json
import logging
import time
from collections.abc import Iterable, Sequence
from typing import Any

from .config import DEFAULT_CATALOG_CONFIG
from .models import FilterState, Recipe

logger = logging.getLogger(__name__)

_MAX_ENTRIES = 512

_entries: dict[str, dict[str, Any]] = {}
_hits: int = 0
_misses: int = 0
_evictions: int = 0


def search_key(
    catalog: Sequence[Recipe],
    query: str,
    state: FilterState,
    saved_ids: Iterable[int],
) -> str:
    payload = {
        "catalog": hash(tuple(catalog)),
        "query": query,
        "filters": state.model_dump(mode="json"),
        # Saved ids only narrow results when the saved-only stage is active.
        "saved": sorted(saved_ids) if state.saved_only else None,
    }
    normalized = json.dumps(payload, sort_keys=True)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def lookup(key: str, ttl: float = DEFAULT_CATALOG_CONFIG.cache_ttl) -> tuple[int, ...] | None:
    """Return the cached catalog positions for *key*, or ``None`` on a miss."""
    global _hits, _misses
    entry = _entries.get(key)
    if entry and time.time() - entry["created_at"] < ttl:
        _hits += 1
        logger.debug("Search cache hit for %s", key)
        return entry["positions"]
    if entry:
        del _entries[key]
    _misses += 1
    return None


def store(key: str, positions: tuple[int, ...]) -> None:
    global _evictions
    if key not in _entries and len(_entries) >= _MAX_ENTRIES:
        oldest = min(_entries, key=lambda k: _entries[k]["created_at"])
        del _entries[oldest]
        _evictions += 1
    _entries[key] = {"positions": positions, "created_at": time.time()}


def get_cache_stats() -> dict:
    total = _hits + _misses
    return {
        "size": len(_entries),
        "hits": _hits,
        "misses": _misses,
        "evictions": _evictions,
        "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
    }


def clear_cache() -> None:
    global _hits, _misses, _evictions
    _entries.clear()
    _hits = 0
    _misses = 0
    _evictions = 0
