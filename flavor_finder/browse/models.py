from __future__ import annotations

from pydantic import BaseModel, Field

from ..recipes.models import FilterState


class BrowseState(BaseModel):
    query: str = ""
    filters: FilterState = Field(default_factory=FilterState)
    saved_ids: list[int] = Field(default_factory=list)
