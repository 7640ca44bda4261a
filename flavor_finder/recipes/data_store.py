from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import MEAL_TYPES, CookingTime, Difficulty, Recipe

logger = logging.getLogger(__name__)

_LIST_COLUMNS = ("tags", "ingredients", "instructions")
_OPTIONAL_COLUMNS = ("prep_time", "cook_time", "hero_image")

_df: pd.DataFrame | None = None
_catalog: tuple[Recipe, ...] | None = None


class CatalogError(ValueError):
    """The recipe catalog file is missing, malformed or has duplicate ids."""


def _missing(value: Any) -> bool:
    if value is None:
        return True
    return not isinstance(value, (list, tuple)) and not pd.notna(value)


def _optional(value: Any) -> str | None:
    if _missing(value):
        return None
    text = str(value).strip()
    return text or None


def _row_to_recipe(row: dict[str, Any]) -> Recipe:
    data = dict(row)
    for col in _LIST_COLUMNS:
        value = data.get(col)
        if _missing(value):
            data[col] = []
        elif isinstance(value, (list, tuple)):
            data[col] = list(value)
        else:
            raise TypeError(f"{col} must be a list, got {type(value).__name__}")
    for col in _OPTIONAL_COLUMNS:
        data[col] = _optional(data.get(col))
    data["image"] = _optional(data.get("image")) or ""
    # Fractional ids or servings are rejected by validation, never truncated.
    return Recipe.model_validate(data)


def _load(path: Path) -> pd.DataFrame:
    try:
        # Column names like "cook_time" would otherwise be parsed as dates.
        df = pd.read_json(path, orient="records", convert_dates=False, keep_default_dates=False)
    except (OSError, ValueError) as exc:
        raise CatalogError(f"Could not read recipe catalog at {path}") from exc

    missing = {"id", "title", "time", "difficulty", "servings"} - set(df.columns)
    if not df.empty and missing:
        raise CatalogError(f"Recipe catalog is missing columns: {sorted(missing)}")

    return df


def _build_catalog(df: pd.DataFrame) -> tuple[Recipe, ...]:
    recipes: list[Recipe] = []
    for row in df.to_dict(orient="records"):
        try:
            recipes.append(_row_to_recipe(row))
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise CatalogError(f"Invalid recipe record {row.get('id')!r}: {exc}") from exc

    ids = pd.Series([r.id for r in recipes], dtype="int64")
    duplicated = sorted(set(ids[ids.duplicated()].tolist()))
    if duplicated:
        raise CatalogError(f"Duplicate recipe ids in catalog: {duplicated}")
    return tuple(recipes)


def load_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> tuple[Recipe, ...]:
    """(Re)load the catalog from ``config.catalog_path`` and cache it in memory."""
    global _df, _catalog
    df = _load(config.catalog_path)
    catalog = _build_catalog(df)
    _df, _catalog = df, catalog
    logger.info("Loaded %d recipes from %s", len(catalog), config.catalog_path)
    return catalog


def get_catalog() -> tuple[Recipe, ...]:
    """Return the in-memory recipe catalog, loading it on first call."""
    if _catalog is None:
        return load_catalog()
    return _catalog


def get_dataframe() -> pd.DataFrame:
    """Return the raw catalog DataFrame, loading it on first call."""
    if _df is None:
        load_catalog()
    return _df


def find_recipe(recipe_id: int, catalog: tuple[Recipe, ...] | None = None) -> Recipe | None:
    """Look up a recipe by id. Returns ``None`` when no recipe has that id."""
    for recipe in catalog if catalog is not None else get_catalog():
        if recipe.id == recipe_id:
            return recipe
    return None


def clear_catalog() -> None:
    global _df, _catalog
    _df = None
    _catalog = None


def catalog_metadata() -> dict[str, Any]:
    df = get_dataframe()
    tags: set[str] = set()
    if "tags" in df.columns:
        for val in df["tags"]:
            if isinstance(val, list):
                tags.update(t.strip() for t in val if str(t).strip())
    present = set(df["difficulty"].dropna().tolist()) if "difficulty" in df.columns else set()
    return {
        "total_recipes": len(df),
        "meal_types": list(MEAL_TYPES),
        "cooking_times": [bucket.value for bucket in CookingTime],
        "difficulties": [level.value for level in Difficulty],
        "difficulties_in_catalog": [d.value for d in Difficulty if d.value in present],
        "tags": sorted(tags),
    }
