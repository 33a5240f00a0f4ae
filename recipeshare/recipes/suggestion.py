"""
Ingredient-based recipe suggestions.

Given the ingredients a user has on hand, pull a small candidate set of
published recipes that mention any of them, score each candidate, and return
the best matches.

Scoring, summed over every supplied ingredient term:

* ``+2`` when the term appears in any ingredient name.
* ``+1`` when the term appears in the title or the description (once per term).

All matching is case-insensitive substring matching through
``predicates.contains``, for retrieval and scoring alike.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from . import predicates as p
from .config import DEFAULT_RECIPE_CONFIG, RecipeConfig
from .data_store import RecipeStore
from .errors import EmptyIngredientList
from .models import Recipe, ScoredRecipe, SuggestionResponse

logger = logging.getLogger(__name__)

INGREDIENT_MATCH_POINTS = 2
TEXT_MATCH_POINTS = 1


def normalize_ingredients(ingredients: Sequence[str] | None) -> list[str]:
    """Trim each term and drop blanks; raise ``EmptyIngredientList`` if nothing is left."""
    if not ingredients:
        raise EmptyIngredientList()
    terms = [term.strip() for term in ingredients if term and term.strip()]
    if not terms:
        raise EmptyIngredientList()
    return terms


def candidate_predicate(terms: Sequence[str]) -> p.Predicate:
    return p.is_published() & p.any_of(*(p.text_contains(term) for term in terms))


def score_recipe(recipe: Recipe, terms: Sequence[str]) -> int:
    score = 0
    for term in terms:
        if any(p.contains(ing.name, term) for ing in recipe.ingredients):
            score += INGREDIENT_MATCH_POINTS
        if p.contains(recipe.title, term) or p.contains(recipe.description, term):
            score += TEXT_MATCH_POINTS
    return score


def rank_candidates(
    candidates: Sequence[Recipe], terms: Sequence[str], limit: int
) -> list[ScoredRecipe]:
    scored = [
        ScoredRecipe.model_validate({**recipe.model_dump(), "match_score": score_recipe(recipe, terms)})
        for recipe in candidates
    ]
    # sorted() is stable: equal scores keep candidate order.
    scored = sorted(scored, key=lambda s: s.match_score, reverse=True)
    return scored[:limit]


def suggest_recipes(
    ingredients: Sequence[str] | None,
    store: RecipeStore,
    config: RecipeConfig = DEFAULT_RECIPE_CONFIG,
) -> SuggestionResponse:
    terms = normalize_ingredients(ingredients)

    candidates = store.find(candidate_predicate(terms), limit=config.candidate_limit)
    suggestions = rank_candidates(candidates, terms, config.suggestion_limit)
    logger.debug(
        "suggest %r: %d candidates, top scores %s",
        terms,
        len(candidates),
        [s.match_score for s in suggestions],
    )

    return SuggestionResponse(suggestions=suggestions, ingredients=terms)
