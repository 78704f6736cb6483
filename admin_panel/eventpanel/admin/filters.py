"""Client-side filtering of the events table."""
from __future__ import annotations

from typing import Iterable, List, Optional

from eventpanel.models.event import Event


def matches(event: Event, search: str = "", category: Optional[str] = None) -> bool:
    """Case-insensitive title match AND (no category OR same category)."""
    if search.lower() not in event.title.lower():
        return False
    if not category:
        return True
    return event.category is not None and event.category.value == category


def filter_events(
    events: Iterable[Event], search: str = "", category: Optional[str] = None
) -> List[Event]:
    return [event for event in events if matches(event, search, category)]
