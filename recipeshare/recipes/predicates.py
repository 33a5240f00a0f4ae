"""
Composable filter predicates over recipe records.

A ``Predicate`` is a boolean function over a ``Recipe`` plus a short readable
description. Listing and suggestion queries are assembled from the factories
below and handed to a ``RecipeStore``, which only needs to call them; no store
query language leaks into the engines.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable

from .models import Recipe


def contains(haystack: str | None, needle: str) -> bool:
    """Case-insensitive substring test. ``needle`` is literal text, never a pattern."""
    if not haystack:
        return False
    return needle.lower() in haystack.lower()


class Predicate:
    __slots__ = ("_fn", "description")

    def __init__(self, fn: Callable[[Recipe], bool], description: str) -> None:
        self._fn = fn
        self.description = description

    def __call__(self, recipe: Recipe) -> bool:
        return bool(self._fn(recipe))

    def __and__(self, other: Predicate) -> Predicate:
        return all_of(self, other)

    def __or__(self, other: Predicate) -> Predicate:
        return any_of(self, other)

    def __repr__(self) -> str:
        return f"Predicate({self.description})"


def match_all() -> Predicate:
    return Predicate(lambda recipe: True, "*")


def all_of(*predicates: Predicate) -> Predicate:
    if not predicates:
        return match_all()
    if len(predicates) == 1:
        return predicates[0]
    parts = tuple(predicates)
    return Predicate(
        lambda recipe: all(p(recipe) for p in parts),
        "(" + " AND ".join(p.description for p in parts) + ")",
    )


def any_of(*predicates: Predicate) -> Predicate:
    if len(predicates) == 1:
        return predicates[0]
    parts = tuple(predicates)
    # An empty disjunction matches nothing.
    return Predicate(
        lambda recipe: any(p(recipe) for p in parts),
        "(" + " OR ".join(p.description for p in parts) + ")" if parts else "(none)",
    )


def ingredient_contains(term: str) -> Predicate:
    return Predicate(
        lambda recipe: any(contains(ing.name, term) for ing in recipe.ingredients),
        f"ingredients.name ~ {term!r}",
    )


def title_or_description_contains(term: str) -> Predicate:
    return Predicate(
        lambda recipe: contains(recipe.title, term) or contains(recipe.description, term),
        f"title|description ~ {term!r}",
    )


def text_contains(term: str) -> Predicate:
    """Match ``term`` in the title, the description or any ingredient name."""
    return any_of(title_or_description_contains(term), ingredient_contains(term))


def cuisine_is(cuisine: str) -> Predicate:
    return Predicate(lambda recipe: recipe.cuisine == cuisine, f"cuisine == {cuisine!r}")


def difficulty_is(difficulty: str) -> Predicate:
    return Predicate(
        lambda recipe: recipe.difficulty.value == difficulty,
        f"difficulty == {difficulty!r}",
    )


def has_any_tag(tags: Iterable[str]) -> Predicate:
    wanted = frozenset(tags)
    return Predicate(
        lambda recipe: not wanted.isdisjoint(recipe.tags),
        f"tags in {sorted(wanted)!r}",
    )


def max_total_time(minutes: int) -> Predicate:
    return Predicate(
        lambda recipe: recipe.total_time <= minutes,
        f"prepTime + cookTime <= {minutes}",
    )


def is_published() -> Predicate:
    return Predicate(lambda recipe: recipe.is_published, "isPublished")
