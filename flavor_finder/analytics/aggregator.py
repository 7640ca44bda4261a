from __future__ import annotations

from collections import Counter
from typing import Any


def _rate(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    saves = [e for e in events if e["type"] == "save"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 3) if times else 0.0

    # Top queries (case-insensitive, blank queries skipped)
    query_counter: Counter[str] = Counter()
    for s in searches:
        q = (s.get("query") or "").lower()
        if q:
            query_counter[q] += 1
    top_queries = [{"query": q, "count": c} for q, c in query_counter.most_common(10)]

    # Meal type usage
    meal_counter: Counter[str] = Counter()
    for s in searches:
        for m in s.get("meal_types", []) or []:
            meal_counter[m] += 1

    cooking_time_usage = dict(Counter(s["cooking_time"] for s in searches if s.get("cooking_time")))
    difficulty_usage = dict(Counter(s["difficulty"] for s in searches if s.get("difficulty")))

    # Filter usage rates
    filter_counts = {"query": 0, "meal_type": 0, "cooking_time": 0, "difficulty": 0, "saved_only": 0}
    for s in searches:
        if s.get("query"):
            filter_counts["query"] += 1
        if s.get("meal_types"):
            filter_counts["meal_type"] += 1
        if s.get("cooking_time"):
            filter_counts["cooking_time"] += 1
        if s.get("difficulty"):
            filter_counts["difficulty"] += 1
        if s.get("saved_only"):
            filter_counts["saved_only"] += 1
    filter_usage = {k: _rate(v, total) for k, v in filter_counts.items()}

    zero_results = sum(1 for s in searches if s.get("results_returned") == 0)

    cache_hits = sum(1 for s in searches if s.get("cache_hit"))

    # Saves: net bookmark count per recipe, most saved first
    save_counter: Counter[int] = Counter()
    for e in saves:
        save_counter[e["recipe_id"]] += 1 if e.get("is_saved") else -1
    top_saved = [
        {"recipe_id": rid, "saves": n}
        for rid, n in save_counter.most_common()
        if n > 0
    ][:10]

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "top_queries": top_queries,
        "top_meal_types": [{"name": n, "count": c} for n, c in meal_counter.most_common(10)],
        "cooking_time_usage": cooking_time_usage,
        "difficulty_usage": difficulty_usage,
        "filter_usage": filter_usage,
        "zero_result_searches": zero_results,
        "cache_stats": {
            "hits": cache_hits,
            "misses": total - cache_hits,
            "hit_rate": _rate(cache_hits, total),
        },
        "save_summary": {
            "total_toggles": len(saves),
            "saved": sum(1 for e in saves if e.get("is_saved")),
            "unsaved": sum(1 for e in saves if not e.get("is_saved")),
            "top_saved_recipes": top_saved,
        },
    }
