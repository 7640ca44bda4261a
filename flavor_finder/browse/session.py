from __future__ import annotations

import logging
from collections.abc import MutableMapping, Sequence
from typing import Any

from fastapi import Request
from pydantic import ValidationError

from ..recipes.controller import FilterController
from ..recipes.data_store import get_catalog
from ..recipes.models import Recipe
from ..recipes.retrieval import search_recipes
from ..recipes.saved import SavedRecipes
from .models import BrowseState

logger = logging.getLogger(__name__)

BROWSE_STATE_KEY = "browse_state"


def load_browse_state(session: MutableMapping[str, Any]) -> BrowseState:
    """Read the stored browse state, or an empty one if absent or invalid."""
    raw = session.get(BROWSE_STATE_KEY)
    if not raw:
        return BrowseState()
    try:
        return BrowseState.model_validate(raw)
    except ValidationError:
        logger.warning("Discarding invalid browse state from session", exc_info=True)
        return BrowseState()


class BrowseSession:
    """One controller and one saved-recipe tracker bound to a session.

    The list and detail endpoints both go through this object, so a recipe
    saved from either view shows as saved in the other.
    """

    def __init__(self, session: MutableMapping[str, Any], catalog: Sequence[Recipe]) -> None:
        self._session = session
        self.catalog = catalog
        state = load_browse_state(session)
        self.saved = SavedRecipes(state.saved_ids)
        self.controller = FilterController(
            catalog,
            self.saved,
            query=state.query,
            state=state.filters,
            on_change=self._commit,
            engine=search_recipes,
        )

    def _commit(self, controller: FilterController) -> None:
        state = BrowseState(
            query=controller.query,
            filters=controller.state,
            saved_ids=list(self.saved),
        )
        self._session[BROWSE_STATE_KEY] = state.model_dump(mode="json")


def get_browse_session(request: Request) -> BrowseSession:
    """FastAPI dependency: the browse session for the current request."""
    return BrowseSession(request.session, get_catalog())
