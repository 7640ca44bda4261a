from __future__ import annotations

from flavor_finder.browse.session import BROWSE_STATE_KEY, BrowseSession, load_browse_state
from flavor_finder.recipes.models import FilterState, Recipe

CATALOG = (
    Recipe(id=1, title="Lemon Salmon", description="", tags=["Dinner"],
           time="25 min", difficulty="Easy", servings=4),
    Recipe(id=2, title="Shrimp Tacos", description="", tags=["Lunch"],
           time="35 min", difficulty="Medium", servings=4),
)


def test_empty_session_gives_empty_state():
    state = load_browse_state({})
    assert state.query == ""
    assert state.filters == FilterState()
    assert state.saved_ids == []


def test_invalid_stored_state_is_discarded():
    session = {BROWSE_STATE_KEY: {"filters": {"cooking_time": "forever"}, "saved_ids": ["x"]}}
    assert load_browse_state(session).filters == FilterState()


def test_mutations_are_written_back_to_the_session():
    session: dict = {}
    browse = BrowseSession(session, CATALOG)
    browse.controller.set_cooking_time("15-30 min")
    browse.saved.toggle(2)
    assert session[BROWSE_STATE_KEY] == {
        "query": "",
        "filters": {
            "meal_type": [],
            "cooking_time": "15-30 min",
            "difficulty": None,
            "saved_only": False,
        },
        "saved_ids": [2],
    }


def test_state_round_trips_through_the_session():
    session: dict = {}
    first = BrowseSession(session, CATALOG)
    first.controller.set_query("tacos")
    first.controller.toggle_meal_type("Lunch")
    first.saved.toggle(2)
    first.controller.toggle_saved_only()

    second = BrowseSession(session, CATALOG)
    assert second.controller.query == "tacos"
    assert second.controller.state.meal_type == ("Lunch",)
    assert second.saved.contains(2)
    assert [r.id for r in second.controller.results] == [2]


def test_one_tracker_per_session():
    session: dict = {}
    browse = BrowseSession(session, CATALOG)
    browse.controller.toggle_saved_only()
    assert browse.controller.results == []
    browse.saved.toggle(1)
    assert browse.controller.saved is browse.saved
    assert [r.id for r in browse.controller.results] == [1]
