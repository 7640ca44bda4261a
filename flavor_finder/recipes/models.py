from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    easy = "Easy"
    medium = "Medium"
    hard = "Hard"


class CookingTime(str, Enum):
    under_15 = "Under 15 min"
    from_15_to_30 = "15-30 min"
    from_30_to_60 = "30-60 min"
    over_60 = "Over 60 min"


MEAL_TYPES: tuple[str, ...] = ("Breakfast", "Lunch", "Dinner", "Dessert", "Snack")


class Recipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    description: str
    tags: tuple[str, ...] = ()
    time: str
    prep_time: str | None = None
    cook_time: str | None = None
    difficulty: Difficulty
    servings: int = Field(..., gt=0)
    ingredients: tuple[str, ...] = ()
    instructions: tuple[str, ...] = ()
    image: str = ""
    hero_image: str | None = None


class FilterState(BaseModel):
    """Every active filter selection except the free-text query.

    Instances are frozen; changes always build a new value.
    """

    model_config = ConfigDict(frozen=True)

    meal_type: tuple[str, ...] = ()
    cooking_time: CookingTime | None = None
    difficulty: Difficulty | None = None
    saved_only: bool = False

    @property
    def is_empty(self) -> bool:
        return (
            not self.meal_type
            and self.cooking_time is None
            and self.difficulty is None
            and not self.saved_only
        )


# ── API payloads ─────────────────────────────────────────────────────────


class SearchRequest(BaseModel):
    query: str = Field(default="", max_length=200)


class MealTypeRequest(BaseModel):
    meal_type: str = Field(..., min_length=1, max_length=50)


class CookingTimeRequest(BaseModel):
    cooking_time: CookingTime


class DifficultyRequest(BaseModel):
    difficulty: Difficulty


class RecipeCard(BaseModel):
    id: int
    title: str
    description: str
    image: str
    fallback_image: str
    time: str
    difficulty: Difficulty
    servings: int
    tags: list[str]
    is_saved: bool = False


class InstructionStep(BaseModel):
    number: int
    text: str


class RecipeDetail(BaseModel):
    id: int
    title: str
    description: str
    hero_image: str
    fallback_image: str
    tags: list[str]
    time: str
    prep_time: str | None
    cook_time: str | None
    difficulty: Difficulty
    servings: int
    ingredients: list[str]
    instructions: list[InstructionStep]
    is_saved: bool = False


class RecipeListResponse(BaseModel):
    heading: str
    query: str
    filters: FilterState
    has_active_filters: bool
    count: int
    empty_message: str | None = None
    recipes: list[RecipeCard]


class SaveToggleResponse(BaseModel):
    recipe_id: int
    is_saved: bool
    saved_count: int
