from __future__ import annotations

import time
from collections.abc import Iterable, Sequence

from ..analytics.store import record_event
from . import cache
from .filters import filter_recipes
from .models import FilterState, Recipe


def _record_search(
    query: str,
    state: FilterState,
    results_returned: int,
    start_time: float,
    cache_hit: bool,
) -> None:
    elapsed_ms = round((time.time() - start_time) * 1000, 3)
    record_event("search", {
        "query": query.strip(),
        "meal_types": list(state.meal_type),
        "cooking_time": state.cooking_time.value if state.cooking_time else None,
        "difficulty": state.difficulty.value if state.difficulty else None,
        "saved_only": state.saved_only,
        "results_returned": results_returned,
        "response_time_ms": elapsed_ms,
        "cache_hit": cache_hit,
    })


def search_recipes(
    catalog: Sequence[Recipe],
    query: str,
    state: FilterState,
    saved_ids: Iterable[int],
) -> list[Recipe]:
    """Run ``filter_recipes`` through the memo cache and log a search event.

    Same signature and same results as ``filter_recipes``.
    """
    start_time = time.time()
    saved_ids = frozenset(saved_ids)

    key = cache.search_key(catalog, query, state, saved_ids)
    positions = cache.lookup(key)
    if positions is not None:
        results = [catalog[i] for i in positions]
        _record_search(query, state, len(results), start_time, cache_hit=True)
        return results

    results = filter_recipes(catalog, query, state, saved_ids)

    # Recipe ids are unique, so each result maps back to exactly one position.
    index_by_id = {recipe.id: i for i, recipe in enumerate(catalog)}
    cache.store(key, tuple(index_by_id[recipe.id] for recipe in results))

    _record_search(query, state, len(results), start_time, cache_hit=False)
    return results
