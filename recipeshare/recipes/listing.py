from __future__ import annotations

import logging
import math

from . import predicates as p
from .config import DEFAULT_RECIPE_CONFIG, RecipeConfig
from .data_store import DESCENDING, RecipeStore, SortKeys
from .errors import InvalidParameter
from .models import ListingQuery, ListingResponse, Pagination, SortOrder

logger = logging.getLogger(__name__)

SORT_ORDERS: dict[SortOrder, SortKeys] = {
    SortOrder.latest: [("created_at", DESCENDING)],
    SortOrder.popular: [("like_count", DESCENDING), ("created_at", DESCENDING)],
    SortOrder.trending: [("views", DESCENDING), ("created_at", DESCENDING)],
}


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def _positive_int(name: str, value: str | int | None, default: int | None) -> int | None:
    if _blank(value):
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        raise InvalidParameter(name, value, "must be an integer") from None
    if number < 1:
        raise InvalidParameter(name, value, "must be a positive integer")
    return number


def _split_tags(tags: str | None) -> list[str]:
    if _blank(tags):
        return []
    return [t.strip().lower() for t in tags.split(",") if t.strip()]


def _parse_sort(sort: str | None) -> SortOrder:
    try:
        return SortOrder((sort or "").strip().lower())
    except ValueError:
        return SortOrder.latest


def parse_listing_query(
    search: str | None = None,
    cuisine: str | None = None,
    tags: str | None = None,
    difficulty: str | None = None,
    max_time: str | int | None = None,
    sort: str | None = None,
    page: str | int | None = None,
    limit: str | int | None = None,
    config: RecipeConfig = DEFAULT_RECIPE_CONFIG,
) -> ListingQuery:
    """
    Decode raw request parameters into a ``ListingQuery``.

    Empty strings count as absent. ``page``, ``limit`` and ``maxTime`` must be
    positive integers and ``limit`` may not exceed ``config.max_page_size``;
    anything else raises ``InvalidParameter``. An unknown ``sort`` falls back
    to ``latest``.
    """
    parsed_limit = _positive_int("limit", limit, config.default_page_size)
    if parsed_limit > config.max_page_size:
        raise InvalidParameter(
            "limit", limit, f"must be at most {config.max_page_size}, set by RECIPES_MAX_PAGE_SIZE"
        )

    return ListingQuery(
        search=None if _blank(search) else search.strip(),
        cuisine=None if _blank(cuisine) else cuisine.strip(),
        tags=_split_tags(tags),
        difficulty=None if _blank(difficulty) else difficulty.strip(),
        max_time=_positive_int("maxTime", max_time, None),
        sort=_parse_sort(sort),
        page=_positive_int("page", page, 1),
        limit=parsed_limit,
    )


def build_listing_predicate(query: ListingQuery) -> p.Predicate:
    """AND together one predicate per filter present in ``query``."""
    conditions: list[p.Predicate] = []
    if query.search:
        conditions.append(p.text_contains(query.search))
    if query.cuisine:
        conditions.append(p.cuisine_is(query.cuisine))
    if query.tags:
        conditions.append(p.has_any_tag(query.tags))
    if query.difficulty:
        conditions.append(p.difficulty_is(query.difficulty))
    if query.max_time is not None:
        conditions.append(p.max_total_time(query.max_time))
    return p.all_of(*conditions)


def sort_order_for(sort: SortOrder | str) -> SortKeys:
    if not isinstance(sort, SortOrder):
        sort = _parse_sort(sort)
    return SORT_ORDERS[sort]


def list_recipes(query: ListingQuery, store: RecipeStore) -> ListingResponse:
    predicate = build_listing_predicate(query)
    skip = (query.page - 1) * query.limit

    total = store.count(predicate)
    recipes = store.find(predicate, sort_order_for(query.sort), skip=skip, limit=query.limit)
    logger.debug(
        "listing %r sort=%s page=%d -> %d/%d", predicate, query.sort.value, query.page, len(recipes), total
    )

    return ListingResponse(
        recipes=recipes,
        pagination=Pagination(
            page=query.page,
            pages=math.ceil(total / query.limit),
            total=total,
            limit=query.limit,
        ),
    )
