"""Rolling log of listing and suggestion requests served by the API."""

from __future__ import annotations

import time
from collections import deque
from enum import Enum
from typing import Any

MAX_EVENTS = 1000


class EventType(str, Enum):
    search = "search"
    suggest = "suggest"


_events: deque[dict[str, Any]] = deque(maxlen=MAX_EVENTS)


def record_event(event_type: EventType | str, data: dict[str, Any]) -> None:
    """Append one request event; the oldest entry is evicted past ``MAX_EVENTS``."""
    kind = EventType(event_type)
    _events.append({
        "type": kind.value,
        "timestamp": time.time(),
        **data,
    })


def get_events(event_type: EventType | str | None = None) -> list[dict[str, Any]]:
    """Snapshot of the retained events, oldest first, optionally of one type."""
    if event_type is None:
        return list(_events)
    kind = EventType(event_type).value
    return [e for e in _events if e["type"] == kind]


def clear_events() -> None:
    _events.clear()
