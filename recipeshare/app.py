from __future__ import annotations

import os
import time

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.events import EventType, get_events, record_event
from .recipes.data_store import get_store
from .recipes.errors import EmptyIngredientList, InvalidParameter, RecipeNotFound
from .recipes.listing import list_recipes, parse_listing_query
from .recipes.models import (
    Difficulty,
    ListingResponse,
    Recipe,
    RecipeMetadata,
    SuggestionRequest,
    SuggestionResponse,
)
from .recipes.suggestion import suggest_recipes

app = FastAPI(title="RecipeShare API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip()
        for o in os.environ.get(
            "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
        ).split(",")
        if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _elapsed_ms(start: float) -> float:
    return round((time.time() - start) * 1000, 3)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata", response_model=RecipeMetadata)
def metadata() -> RecipeMetadata:
    recipes = get_store().all()
    cuisines = {r.cuisine for r in recipes if r.cuisine}
    tags = {t for r in recipes for t in r.tags}
    return RecipeMetadata(
        cuisines=sorted(cuisines),
        tags=sorted(tags),
        difficulties=[d.value for d in Difficulty],
    )


# ── Recipe endpoints ─────────────────────────────────────────────────────


@app.get("/api/recipes", response_model=ListingResponse)
def recipes(
    search: str | None = None,
    cuisine: str | None = None,
    tags: str | None = None,
    difficulty: str | None = None,
    max_time: str | None = Query(default=None, alias="maxTime"),
    sort: str | None = None,
    page: str | None = None,
    limit: str | None = None,
) -> ListingResponse:
    start_time = time.time()
    try:
        query = parse_listing_query(
            search=search,
            cuisine=cuisine,
            tags=tags,
            difficulty=difficulty,
            max_time=max_time,
            sort=sort,
            page=page,
            limit=limit,
        )
    except InvalidParameter as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    response = list_recipes(query, get_store())

    record_event(EventType.search, {
        "search": query.search,
        "cuisine": query.cuisine,
        "tags": query.tags,
        "difficulty": query.difficulty,
        "max_time": query.max_time,
        "sort": query.sort.value,
        "page": query.page,
        "total": response.pagination.total,
        "response_time_ms": _elapsed_ms(start_time),
    })
    return response


@app.post("/api/recipes/suggest", response_model=SuggestionResponse)
def suggest(body: SuggestionRequest | None = Body(default=None)) -> SuggestionResponse:
    start_time = time.time()
    ingredients = body.ingredients if body is not None else None
    try:
        response = suggest_recipes(ingredients, get_store())
    except EmptyIngredientList as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    record_event(EventType.suggest, {
        "ingredients": response.ingredients,
        "results_returned": len(response.suggestions),
        "response_time_ms": _elapsed_ms(start_time),
    })
    return response


@app.get("/api/recipes/{recipe_id}", response_model=Recipe)
def recipe_detail(recipe_id: str) -> Recipe:
    store = get_store()
    try:
        recipe = store.get(recipe_id)
    except RecipeNotFound as exc:
        raise HTTPException(status_code=404, detail="Recipe not found") from exc
    # The view is counted after the read; the caller sees the prior count.
    store.increment_views(recipe_id)
    return recipe


# ── Usage analytics ──────────────────────────────────────────────────────


@app.get("/api/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
