from __future__ import annotations

from typing import Any


class RecipeQueryError(ValueError):
    """Base class for rejected listing/suggestion requests."""


class InvalidParameter(RecipeQueryError):
    def __init__(self, name: str, value: Any, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for '{name}': {value!r} ({reason})")


class EmptyIngredientList(RecipeQueryError):
    def __init__(self) -> None:
        super().__init__("Please provide at least one ingredient")


class RecipeNotFound(LookupError):
    def __init__(self, recipe_id: str) -> None:
        self.recipe_id = recipe_id
        super().__init__(f"Recipe not found: {recipe_id}")
