"""
Search-and-filter engine.

``filter_recipes`` narrows a catalog in five fixed stages: text search,
meal type, cooking time, difficulty, saved only. Each stage only drops
recipes, so the result is always an ordered subsequence of the catalog.
A stage whose constraint is absent passes everything through.
"""
from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable, Sequence

from .models import CookingTime, FilterState, Recipe

# ASCII digits only, with an optional "+"; a leading "-" never parses.
_LEADING_DIGITS = re.compile(r"\+?[0-9]+")

# Boundaries are not symmetric: 15 and 30 both fall in "15-30 min".
COOKING_TIME_BUCKETS: dict[CookingTime, Callable[[float], bool]] = {
    CookingTime.under_15: lambda minutes: minutes < 15,
    CookingTime.from_15_to_30: lambda minutes: 15 <= minutes <= 30,
    CookingTime.from_30_to_60: lambda minutes: 30 < minutes <= 60,
    CookingTime.over_60: lambda minutes: minutes > 60,
}


def parse_minutes(time_text: str) -> float:
    """Return the leading integer of a ``"<n> min"`` string, or ``nan``."""
    token = time_text.lstrip().split(" ")[0]
    match = _LEADING_DIGITS.match(token)
    if match is None:
        return math.nan
    return float(match.group())


def matches_query(recipe: Recipe, query: str) -> bool:
    needle = query.lower()
    return (
        needle in recipe.title.lower()
        or needle in recipe.description.lower()
        or any(needle in tag.lower() for tag in recipe.tags)
    )


def matches_meal_type(recipe: Recipe, meal_types: Iterable[str]) -> bool:
    selected = set(meal_types)
    return any(tag in selected for tag in recipe.tags)


def matches_cooking_time(recipe: Recipe, bucket: CookingTime) -> bool:
    # NaN compares false against every bound, so it never lands in a bucket.
    return COOKING_TIME_BUCKETS[bucket](parse_minutes(recipe.time))


def filter_recipes(
    catalog: Sequence[Recipe],
    query: str,
    state: FilterState,
    saved_ids: Iterable[int],
) -> list[Recipe]:
    results = list(catalog)

    if query.strip():
        results = [r for r in results if matches_query(r, query)]

    if state.meal_type:
        results = [r for r in results if matches_meal_type(r, state.meal_type)]

    if state.cooking_time is not None:
        results = [r for r in results if matches_cooking_time(r, state.cooking_time)]

    if state.difficulty is not None:
        results = [r for r in results if r.difficulty == state.difficulty]

    if state.saved_only:
        saved = set(saved_ids)
        results = [r for r in results if r.id in saved]

    return results
