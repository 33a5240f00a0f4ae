from __future__ import annotations

from collections import Counter
from typing import Any

_FILTERS = ("search", "cuisine", "tags", "difficulty", "max_time")


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": count} for name, count in counter.most_common(n)]


def _rate(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    suggestions = [e for e in events if e["type"] == "suggest"]
    total = len(searches)

    times = [e["response_time_ms"] for e in searches + suggestions if "response_time_ms" in e]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    term_counter: Counter[str] = Counter()
    cuisine_counter: Counter[str] = Counter()
    tag_counter: Counter[str] = Counter()
    sort_counter: Counter[str] = Counter()
    filter_counts = dict.fromkeys(_FILTERS, 0)
    for s in searches:
        if s.get("search"):
            term_counter[s["search"].lower()] += 1
        if s.get("cuisine"):
            cuisine_counter[s["cuisine"]] += 1
        for tag in s.get("tags", []) or []:
            tag_counter[tag] += 1
        sort_counter[s.get("sort", "latest")] += 1
        for name in _FILTERS:
            if s.get(name):
                filter_counts[name] += 1

    ingredient_counter: Counter[str] = Counter()
    empty_suggestions = 0
    for s in suggestions:
        for term in s.get("ingredients", []) or []:
            ingredient_counter[term.lower()] += 1
        if not s.get("results_returned"):
            empty_suggestions += 1

    return {
        "total_searches": total,
        "total_suggestions": len(suggestions),
        "avg_response_time_ms": avg_time,
        "top_search_terms": _top(term_counter),
        "top_cuisines": _top(cuisine_counter),
        "top_tags": _top(tag_counter),
        "top_ingredients": _top(ingredient_counter),
        "sort_usage": dict(sort_counter),
        "filter_usage": {k: _rate(v, total) for k, v in filter_counts.items()},
        "empty_suggestion_rate": _rate(empty_suggestions, len(suggestions)),
    }
