from __future__ import annotations

import os

from fastapi import Depends, FastAPI, HTTPException
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .browse.session import BrowseSession, get_browse_session
from .recipes.cache import get_cache_stats
from .recipes.config import DEFAULT_CATALOG_CONFIG
from .recipes.controller import FilterController
from .recipes.data_store import catalog_metadata, find_recipe
from .recipes.models import (
    MEAL_TYPES,
    CookingTimeRequest,
    DifficultyRequest,
    InstructionStep,
    MealTypeRequest,
    Recipe,
    RecipeCard,
    RecipeDetail,
    RecipeListResponse,
    SaveToggleResponse,
    SearchRequest,
)

APP_NAME = "Fishy Flavor Finder"
NOT_FOUND_DETAIL = "Recipe not found"
UNKNOWN_MEAL_TYPE_DETAIL = "Unknown meal type"
EMPTY_MESSAGE = "No recipes found matching your criteria. Try adjusting your filters or search terms."

app = FastAPI(title=f"{APP_NAME} API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "flavor-finder-secret-change-in-production"),
)


# ── Response builders ────────────────────────────────────────────────────


def _card(recipe: Recipe, is_saved: bool) -> RecipeCard:
    return RecipeCard(
        id=recipe.id,
        title=recipe.title,
        description=recipe.description,
        image=recipe.image or DEFAULT_CATALOG_CONFIG.placeholder_image,
        fallback_image=DEFAULT_CATALOG_CONFIG.card_fallback_image,
        time=recipe.time,
        difficulty=recipe.difficulty,
        servings=recipe.servings,
        tags=list(recipe.tags),
        is_saved=is_saved,
    )


def _detail(recipe: Recipe, is_saved: bool) -> RecipeDetail:
    return RecipeDetail(
        id=recipe.id,
        title=recipe.title,
        description=recipe.description,
        hero_image=recipe.hero_image or recipe.image or DEFAULT_CATALOG_CONFIG.placeholder_image,
        fallback_image=DEFAULT_CATALOG_CONFIG.hero_fallback_image,
        tags=list(recipe.tags),
        time=recipe.time,
        prep_time=recipe.prep_time,
        cook_time=recipe.cook_time,
        difficulty=recipe.difficulty,
        servings=recipe.servings,
        ingredients=list(recipe.ingredients),
        instructions=[
            InstructionStep(number=i, text=step)
            for i, step in enumerate(recipe.instructions, start=1)
        ],
        is_saved=is_saved,
    )


def _list_response(controller: FilterController) -> RecipeListResponse:
    results = controller.results
    return RecipeListResponse(
        heading=controller.heading,
        query=controller.query,
        filters=controller.state,
        has_active_filters=controller.has_active_filters,
        count=len(results),
        empty_message=None if results else EMPTY_MESSAGE,
        recipes=[_card(r, controller.saved.contains(r.id)) for r in results],
    )


def _get_recipe_or_404(recipe_id: str, browse: BrowseSession) -> Recipe:
    # Any id that is not a plain ASCII integer simply names no recipe.
    if not (recipe_id.isascii() and recipe_id.isdigit()):
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    recipe = find_recipe(int(recipe_id), browse.catalog)
    if recipe is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return recipe


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {"app_name": APP_NAME, **catalog_metadata()}


# ── Recipe list, search and filters ──────────────────────────────────────


@app.get("/recipes", response_model=RecipeListResponse)
def list_recipes(browse: BrowseSession = Depends(get_browse_session)) -> RecipeListResponse:
    return _list_response(browse.controller)


@app.post("/search", response_model=RecipeListResponse)
def search(
    body: SearchRequest,
    browse: BrowseSession = Depends(get_browse_session),
) -> RecipeListResponse:
    browse.controller.set_query(body.query)
    return _list_response(browse.controller)


@app.post("/filters/meal-type", response_model=RecipeListResponse)
def toggle_meal_type(
    body: MealTypeRequest,
    browse: BrowseSession = Depends(get_browse_session),
) -> RecipeListResponse:
    selected = browse.controller.state.meal_type
    known = set(MEAL_TYPES).union(*(r.tags for r in browse.catalog))
    if body.meal_type not in selected and body.meal_type not in known:
        raise HTTPException(status_code=422, detail=UNKNOWN_MEAL_TYPE_DETAIL)
    browse.controller.toggle_meal_type(body.meal_type)
    return _list_response(browse.controller)


@app.post("/filters/cooking-time", response_model=RecipeListResponse)
def set_cooking_time(
    body: CookingTimeRequest,
    browse: BrowseSession = Depends(get_browse_session),
) -> RecipeListResponse:
    browse.controller.set_cooking_time(body.cooking_time)
    return _list_response(browse.controller)


@app.post("/filters/difficulty", response_model=RecipeListResponse)
def set_difficulty(
    body: DifficultyRequest,
    browse: BrowseSession = Depends(get_browse_session),
) -> RecipeListResponse:
    browse.controller.set_difficulty(body.difficulty)
    return _list_response(browse.controller)


@app.post("/filters/saved-only", response_model=RecipeListResponse)
def toggle_saved_only(browse: BrowseSession = Depends(get_browse_session)) -> RecipeListResponse:
    browse.controller.toggle_saved_only()
    return _list_response(browse.controller)


@app.post("/filters/clear", response_model=RecipeListResponse)
def clear_filters(browse: BrowseSession = Depends(get_browse_session)) -> RecipeListResponse:
    browse.controller.clear_all()
    return _list_response(browse.controller)


# ── Recipe detail and saving ─────────────────────────────────────────────


@app.get("/recipes/{recipe_id}", response_model=RecipeDetail)
def recipe_detail(
    recipe_id: str,
    browse: BrowseSession = Depends(get_browse_session),
) -> RecipeDetail:
    recipe = _get_recipe_or_404(recipe_id, browse)
    return _detail(recipe, browse.saved.contains(recipe.id))


@app.post("/recipes/{recipe_id}/save", response_model=SaveToggleResponse)
def toggle_save(
    recipe_id: str,
    browse: BrowseSession = Depends(get_browse_session),
) -> SaveToggleResponse:
    recipe = _get_recipe_or_404(recipe_id, browse)
    is_saved = browse.saved.toggle(recipe.id)
    record_event("save", {"recipe_id": recipe.id, "is_saved": is_saved})
    return SaveToggleResponse(recipe_id=recipe.id, is_saved=is_saved, saved_count=len(browse.saved))


@app.get("/saved", response_model=list[RecipeCard])
def saved_recipes(browse: BrowseSession = Depends(get_browse_session)) -> list[RecipeCard]:
    return [_card(r, True) for r in browse.catalog if browse.saved.contains(r.id)]


# ── Operational endpoints ────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
