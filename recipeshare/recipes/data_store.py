from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol

import pandas as pd
from pydantic import ValidationError

from ..data_ingestion.ingest import load_recipe_frame
from .config import DEFAULT_RECIPE_CONFIG
from .errors import RecipeNotFound
from .models import Recipe
from .predicates import Predicate

logger = logging.getLogger(__name__)

ASCENDING = 1
DESCENDING = -1

# (Recipe attribute, direction) pairs, most significant first.
SortKeys = Sequence[tuple[str, int]]


class RecipeStore(Protocol):
    def find(
        self,
        predicate: Predicate,
        sort: SortKeys = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Recipe]: ...

    def count(self, predicate: Predicate) -> int: ...


class InMemoryRecipeStore:
    """
    Ordered in-memory recipe collection.

    Natural order is insertion order. Sorting is stable, so records that tie
    on every sort key keep their natural order.
    """

    def __init__(self, recipes: Iterable[Recipe] = ()) -> None:
        self._recipes: list[Recipe] = list(recipes)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._recipes)

    def all(self) -> list[Recipe]:
        return list(self._recipes)

    def find(
        self,
        predicate: Predicate,
        sort: SortKeys = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Recipe]:
        matches = [r for r in self._recipes if predicate(r)]
        # Least significant key first; each pass is stable.
        for field, direction in reversed(sort):
            matches.sort(key=lambda r: getattr(r, field), reverse=direction == DESCENDING)
        end = None if limit is None else skip + limit
        return matches[skip:end]

    def count(self, predicate: Predicate) -> int:
        return sum(1 for r in self._recipes if predicate(r))

    def get(self, recipe_id: str) -> Recipe:
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        raise RecipeNotFound(recipe_id)

    def increment_views(self, recipe_id: str) -> Recipe:
        with self._lock:
            for i, recipe in enumerate(self._recipes):
                if recipe.id == recipe_id:
                    updated = recipe.model_copy(update={"views": recipe.views + 1})
                    self._recipes[i] = updated
                    return updated
        raise RecipeNotFound(recipe_id)


def _records(frame: pd.DataFrame) -> list[dict]:
    return frame.astype(object).where(frame.notna(), None).to_dict("records")


def load_store(path: Path) -> InMemoryRecipeStore:
    recipes: list[Recipe] = []
    for record in _records(load_recipe_frame(path)):
        try:
            recipes.append(Recipe.model_validate(record))
        except ValidationError:
            logger.warning("Skipping invalid recipe record %r", record.get("id"), exc_info=True)
    logger.info("Loaded %d recipes from %s", len(recipes), path)
    return InMemoryRecipeStore(recipes)


_store: InMemoryRecipeStore | None = None


def get_store() -> InMemoryRecipeStore:
    """Return the process-wide recipe store, loading it on first call."""
    global _store
    if _store is None:
        _store = load_store(DEFAULT_RECIPE_CONFIG.data_path)
    return _store


def reset_store() -> None:
    global _store
    _store = None
