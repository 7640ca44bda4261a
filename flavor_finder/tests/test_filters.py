from __future__ import annotations

import math

import pytest

from flavor_finder.recipes.filters import filter_recipes, matches_cooking_time, parse_minutes
from flavor_finder.recipes.models import CookingTime, Difficulty, FilterState, Recipe


def _recipe(recipe_id: int, title: str, tags: list[str], time: str, difficulty: str, description: str = "") -> Recipe:
    return Recipe(
        id=recipe_id,
        title=title,
        description=description or f"{title} description",
        tags=tags,
        time=time,
        difficulty=difficulty,
        servings=2,
    )


LEMON_SALMON = _recipe(1, "Lemon Salmon", ["Dinner"], "25 min", "Easy")
SHRIMP_TACOS = _recipe(2, "Shrimp Tacos", ["Lunch"], "35 min", "Medium")
SCENARIO_CATALOG = [LEMON_SALMON, SHRIMP_TACOS]

CATALOG = [
    LEMON_SALMON,
    SHRIMP_TACOS,
    _recipe(3, "Fish Bagel", ["Breakfast", "fish"], "10 min", "Easy", "Smoked salmon on a bagel"),
    _recipe(4, "Paella", ["Dinner", "Spanish"], "75 min", "Hard"),
    _recipe(5, "Mystery Stew", ["Dinner"], "about an hour", "Medium"),
    _recipe(6, "Fish Cakes", ["Snack"], "60 min", "Medium", "Crispy cod patties"),
]

EMPTY = FilterState()


# ── Duration parsing ─────────────────────────────────────────────────────


class TestParseMinutes:
    def test_plain_minutes(self):
        assert parse_minutes("25 min") == 25

    def test_digits_glued_to_unit(self):
        assert parse_minutes("25min") == 25

    def test_only_first_token_counts(self):
        assert parse_minutes("1 h 30 min") == 1

    def test_words_are_nan(self):
        assert math.isnan(parse_minutes("about an hour"))

    def test_negative_is_nan(self):
        assert math.isnan(parse_minutes("-5 min"))

    def test_empty_is_nan(self):
        assert math.isnan(parse_minutes(""))

    def test_explicit_plus_sign(self):
        assert parse_minutes("+25 min") == 25

    def test_leading_whitespace_is_ignored(self):
        assert parse_minutes("\t25 min") == 25
        assert parse_minutes("  25 min") == 25

    def test_non_ascii_digits_are_nan(self):
        assert math.isnan(parse_minutes("٢٥ min"))


# ── Cooking time buckets ─────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("time", "bucket"),
    [
        ("14 min", CookingTime.under_15),
        ("15 min", CookingTime.from_15_to_30),
        ("30 min", CookingTime.from_15_to_30),
        ("31 min", CookingTime.from_30_to_60),
        ("60 min", CookingTime.from_30_to_60),
        ("61 min", CookingTime.over_60),
    ],
)
def test_each_duration_lands_in_exactly_one_bucket(time, bucket):
    recipe = _recipe(1, "x", [], time, "Easy")
    matched = [b for b in CookingTime if matches_cooking_time(recipe, b)]
    assert matched == [bucket]


def test_unparseable_time_matches_no_bucket():
    recipe = _recipe(1, "x", [], "soon", "Easy")
    assert not any(matches_cooking_time(recipe, b) for b in CookingTime)


def test_time_filter_excludes_unparseable_durations():
    results = filter_recipes(CATALOG, "", FilterState(cooking_time=CookingTime.over_60), set())
    assert [r.id for r in results] == [4]


# ── Pipeline ─────────────────────────────────────────────────────────────


def test_empty_query_and_state_is_identity():
    assert filter_recipes(CATALOG, "", EMPTY, {1, 2}) == CATALOG


def test_whitespace_query_is_skipped():
    assert filter_recipes(CATALOG, "   ", EMPTY, set()) == CATALOG


def test_result_is_a_new_list():
    catalog = list(CATALOG)
    results = filter_recipes(catalog, "", EMPTY, set())
    results.pop()
    assert catalog == CATALOG


@pytest.mark.parametrize("recipe", CATALOG)
def test_title_substring_always_matches(recipe):
    query = recipe.title[1:5].upper()
    assert recipe in filter_recipes(CATALOG, query, EMPTY, set())


def test_query_matches_description_and_tags():
    assert [r.id for r in filter_recipes(CATALOG, "COD", EMPTY, set())] == [6]
    assert [r.id for r in filter_recipes(CATALOG, "spanish", EMPTY, set())] == [4]


def test_query_is_substring_not_tokenized():
    assert filter_recipes(CATALOG, "fish cake", EMPTY, set()) == [CATALOG[5]]
    assert filter_recipes(CATALOG, "bagel fish", EMPTY, set()) == []


def test_meal_type_is_logical_or():
    state = FilterState(meal_type=("Breakfast", "Lunch"))
    assert [r.id for r in filter_recipes(CATALOG, "", state, set())] == [2, 3]


def test_meal_type_is_case_sensitive():
    state = FilterState(meal_type=("dinner",))
    assert filter_recipes(CATALOG, "", state, set()) == []


def test_difficulty_exact_match():
    state = FilterState(difficulty=Difficulty.medium)
    assert [r.id for r in filter_recipes(CATALOG, "", state, set())] == [2, 5, 6]


def test_stages_combine_and_preserve_order():
    state = FilterState(meal_type=("Dinner", "Snack"), difficulty=Difficulty.medium)
    results = filter_recipes(CATALOG, "", state, set())
    assert [r.id for r in results] == [5, 6]


def test_saved_only_keeps_saved_ids():
    state = FilterState(saved_only=True)
    assert [r.id for r in filter_recipes(CATALOG, "", state, [6, 1])] == [1, 6]
    assert filter_recipes(CATALOG, "", state, set()) == []


def test_saved_ids_ignored_without_saved_only():
    assert filter_recipes(CATALOG, "", EMPTY, {99}) == CATALOG


# ── Scenarios ────────────────────────────────────────────────────────────


def test_scenario_dinner_in_15_to_30_minutes():
    state = FilterState(meal_type=("Dinner",), cooking_time=CookingTime.from_15_to_30)
    assert filter_recipes(SCENARIO_CATALOG, "", state, set()) == [LEMON_SALMON]


def test_scenario_search_shrimp():
    assert filter_recipes(SCENARIO_CATALOG, "shrimp", EMPTY, set()) == [SHRIMP_TACOS]


def test_scenario_saved_only():
    state = FilterState(saved_only=True)
    assert filter_recipes(SCENARIO_CATALOG, "", state, {2}) == [SHRIMP_TACOS]
    assert filter_recipes(SCENARIO_CATALOG, "", state, set()) == []
