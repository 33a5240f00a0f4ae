from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Difficulty(str, Enum):
    easy = "Easy"
    medium = "Medium"
    hard = "Hard"


class SortOrder(str, Enum):
    latest = "latest"
    popular = "popular"
    trending = "trending"


class Ingredient(_CamelModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    amount: str = ""
    unit: str = ""


class Recipe(_CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = ""
    ingredients: list[Ingredient] = Field(default_factory=list)
    instructions: str = ""
    prep_time: int = Field(..., ge=1)
    cook_time: int = Field(..., ge=1)
    servings: int = Field(default=1, ge=1)
    difficulty: Difficulty = Difficulty.easy
    cuisine: str = ""
    tags: list[str] = Field(default_factory=list)
    author: str | None = None
    likes: list[str] = Field(default_factory=list)
    views: int = Field(default=0, ge=0)
    is_published: bool = True
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps are taken as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def total_time(self) -> int:
        return self.prep_time + self.cook_time

    @property
    def like_count(self) -> int:
        return len(self.likes)


class ScoredRecipe(Recipe):
    match_score: int = 0


class ListingQuery(_CamelModel):
    search: str | None = None
    cuisine: str | None = None
    tags: list[str] = Field(default_factory=list)
    difficulty: str | None = None
    max_time: int | None = Field(default=None, ge=1)
    sort: SortOrder = SortOrder.latest
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=12, ge=1)


class Pagination(BaseModel):
    page: int
    pages: int
    total: int
    limit: int


class ListingResponse(BaseModel):
    recipes: list[Recipe]
    pagination: Pagination


class SuggestionRequest(BaseModel):
    ingredients: list[str] | None = Field(
        default=None, description='Free-text ingredient names, e.g. ["chicken", "garlic"]'
    )

    @field_validator("ingredients", mode="before")
    @classmethod
    def _non_list_is_missing(cls, value: Any) -> Any:
        return value if isinstance(value, list) else None


class SuggestionResponse(BaseModel):
    suggestions: list[ScoredRecipe]
    ingredients: list[str]


class RecipeMetadata(BaseModel):
    cuisines: list[str]
    tags: list[str]
    difficulties: list[str]
