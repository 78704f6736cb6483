"""State for the "Manage Events" table: loading, filtering and row actions."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from eventpanel.admin.client import ApiError, EventPanelClient
from eventpanel.admin.filters import filter_events
from eventpanel.models.event import Event
from eventpanel.services.report_service import render_event_report, save_event_report
from eventpanel.utils.logger import logger


class EventTable:
    def __init__(self, client: EventPanelClient) -> None:
        self._client = client
        self.events: List[Event] = []
        self.search = ""
        self.category: Optional[str] = None
        self.loading = False
        self.error: Optional[str] = None

    @property
    def visible(self) -> List[Event]:
        """Rows matching the current search term and category."""
        return filter_events(self.events, self.search, self.category)

    @staticmethod
    def can_complete(event: Event) -> bool:
        return not event.is_completed

    async def refresh(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.events = await self._client.list_events()
        except ApiError as exc:
            self.error = "Error fetching events"
            logger.error("Error fetching events", extra={"error": exc.message})
        finally:
            self.loading = False

    async def delete(self, event_id: str) -> bool:
        try:
            await self._client.delete_event(event_id)
        except ApiError as exc:
            self.error = "Error deleting event"
            logger.error("Error deleting event", extra={"event_id": event_id, "error": exc.message})
            return False
        self.events = [event for event in self.events if event.id != event_id]
        return True

    async def complete(self, event_id: str) -> bool:
        try:
            updated = await self._client.complete_event(event_id)
        except ApiError as exc:
            self.error = "Error updating event status"
            logger.error("Error updating event status", extra={"event_id": event_id, "error": exc.message})
            return False
        self._replace(updated)
        return True

    async def update(self, event_id: str, fields: Dict[str, Any]) -> bool:
        try:
            updated = await self._client.update_event(event_id, fields)
        except ApiError as exc:
            self.error = "Error updating event"
            logger.error("Error updating event", extra={"event_id": event_id, "error": exc.message})
            return False
        self._replace(updated)
        return True

    def report(self) -> bytes:
        return render_event_report(self.visible)

    def save_report(self, path: Optional[Path] = None) -> Path:
        return save_event_report(self.visible, path)

    def _replace(self, updated: Event) -> None:
        self.events = [updated if event.id == updated.id else event for event in self.events]
