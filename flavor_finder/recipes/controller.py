from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from .filters import filter_recipes
from .models import CookingTime, Difficulty, FilterState, Recipe
from .saved import SavedRecipes

Engine = Callable[[Sequence[Recipe], str, FilterState, Iterable[int]], list[Recipe]]


class FilterController:
    """Current query and filter state for one browsing session.

    Every mutation swaps in a new ``FilterState``, re-runs the engine over the
    whole catalog and then calls ``on_change(controller)``. Toggling a recipe
    in the attached ``SavedRecipes`` re-runs the engine as well, because the
    saved ids feed the saved-only stage.
    """

    def __init__(
        self,
        catalog: Sequence[Recipe],
        saved: SavedRecipes,
        query: str = "",
        state: FilterState | None = None,
        on_change: Callable[[FilterController], None] | None = None,
        engine: Engine = filter_recipes,
    ) -> None:
        self._catalog = catalog
        self._saved = saved
        self._query = query
        self._state = state or FilterState()
        self._on_change = on_change
        self._engine = engine
        # First evaluation waits until someone reads the results.
        self._results: list[Recipe] | None = None
        saved.add_listener(self.refresh)

    # ── Read-only views ──────────────────────────────────────────────────

    @property
    def query(self) -> str:
        return self._query

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def saved(self) -> SavedRecipes:
        return self._saved

    @property
    def results(self) -> list[Recipe]:
        if self._results is None:
            self._results = self._evaluate()
        return list(self._results)

    @property
    def has_active_filters(self) -> bool:
        return not self._state.is_empty

    @property
    def heading(self) -> str:
        if self._state.saved_only:
            return "Saved Recipes"
        if self._query:
            return f'Search Results for "{self._query}"'
        return "All Recipes"

    # ── Mutations ────────────────────────────────────────────────────────

    def set_query(self, text: str) -> None:
        self._query = text
        self.refresh()

    def toggle_meal_type(self, meal_type: str) -> FilterState:
        current = self._state.meal_type
        if meal_type in current:
            updated = tuple(t for t in current if t != meal_type)
        else:
            updated = (*current, meal_type)
        return self._replace(meal_type=updated)

    def set_cooking_time(self, bucket: CookingTime | str | None) -> FilterState:
        bucket = CookingTime(bucket) if bucket is not None else None
        return self._replace(
            cooking_time=None if self._state.cooking_time == bucket else bucket,
        )

    def set_difficulty(self, level: Difficulty | str | None) -> FilterState:
        level = Difficulty(level) if level is not None else None
        return self._replace(
            difficulty=None if self._state.difficulty == level else level,
        )

    def toggle_saved_only(self) -> FilterState:
        return self._replace(saved_only=not self._state.saved_only)

    def clear_all(self) -> FilterState:
        self._state = FilterState()
        self.refresh()
        return self._state

    def refresh(self) -> None:
        self._results = self._evaluate()
        if self._on_change is not None:
            self._on_change(self)

    # ── Internals ────────────────────────────────────────────────────────

    def _replace(self, **changes: Any) -> FilterState:
        self._state = FilterState.model_validate({**self._state.model_dump(), **changes})
        self.refresh()
        return self._state

    def _evaluate(self) -> list[Recipe]:
        return self._engine(self._catalog, self._query, self._state, self._saved.ids)
