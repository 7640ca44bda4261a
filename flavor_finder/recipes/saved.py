from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator


class SavedRecipes:
    """Bookmarked recipe ids for one browsing session."""

    def __init__(self, ids: Iterable[int] = ()) -> None:
        self._ids: set[int] = set(ids)
        self._listeners: list[Callable[[], None]] = []

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def toggle(self, recipe_id: int) -> bool:
        """Add *recipe_id* if absent, remove it if present.

        Returns whether the recipe is saved afterwards.
        """
        if recipe_id in self._ids:
            self._ids.discard(recipe_id)
            is_saved = False
        else:
            self._ids.add(recipe_id)
            is_saved = True
        for callback in self._listeners:
            callback()
        return is_saved

    def contains(self, recipe_id: int) -> bool:
        return recipe_id in self._ids

    @property
    def ids(self) -> frozenset[int]:
        return frozenset(self._ids)

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._ids

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._ids))

    def __len__(self) -> int:
        return len(self._ids)
