"""Supabase-backed stores for events and packages.

Encapsulates reading and writing records through the async supabase
client (PostgREST underneath), so a store round trip never blocks the
event loop. Identity and insertion timestamps are assigned by the
database. A single `SupabaseClient` is connected at startup and shared by
the stores.
"""
from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import acreate_client, AsyncClient

from eventpanel.errors import StoreError
from eventpanel.models.event import Event
from eventpanel.models.package import Package
from eventpanel.utils import settings
from eventpanel.utils.logger import logger


class SupabaseClient:
    """Owns the async supabase connection handle."""

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    @classmethod
    async def connect(cls) -> "SupabaseClient":
        url = settings.SUPABASE_URL
        key = settings.SUPABASE_SERVICE_ROLE_KEY
        if not url or not key:
            raise RuntimeError("Supabase env vars are not configured")
        return cls(await acreate_client(url, key))

    def table(self, name: str):
        return self._client.table(name)

    async def close(self) -> None:
        postgrest = getattr(self._client, "postgrest", None)
        if postgrest is not None:
            await postgrest.aclose()
        logger.debug("Closed supabase session")


async def _execute(query, action: str) -> List[Dict[str, Any]]:
    try:
        resp = await query.execute()
    except (APIError, httpx.HTTPError) as exc:
        logger.warning("Store request failed", extra={"action": action, "error": str(exc)})
        raise StoreError(f"Failed to {action}") from exc
    return resp.data or []


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class EventStore:
    """CRUD access to the events table."""

    def __init__(self, supa: SupabaseClient, table: str = settings.EVENTS_TABLE) -> None:
        self._supa = supa
        self._table = table

    async def insert(self, record: Dict[str, Any]) -> Event:
        rows = await _execute(self._supa.table(self._table).insert(record), "insert event")
        if not rows:
            raise StoreError("Failed to insert event")
        return Event.model_validate(rows[0])

    async def list(self) -> List[Event]:
        rows = await _execute(
            self._supa.table(self._table).select("*").order("created_at"),
            "list events",
        )
        logger.debug("Fetched events", extra={"count": len(rows)})
        return [Event.model_validate(row) for row in rows]

    async def get(self, event_id: str) -> Optional[Event]:
        # ids are uuid columns; anything else can't match a row
        if not _is_uuid(event_id):
            return None
        rows = await _execute(
            self._supa.table(self._table).select("*").eq("id", event_id).limit(1),
            "fetch event",
        )
        return Event.model_validate(rows[0]) if rows else None

    async def update(self, event_id: str, changes: Dict[str, Any]) -> Optional[Event]:
        if not _is_uuid(event_id):
            return None
        rows = await _execute(
            self._supa.table(self._table).update(changes).eq("id", event_id),
            "update event",
        )
        return Event.model_validate(rows[0]) if rows else None

    async def delete(self, event_id: str) -> bool:
        if not _is_uuid(event_id):
            return False
        rows = await _execute(
            self._supa.table(self._table).delete().eq("id", event_id),
            "delete event",
        )
        return bool(rows)


class PackageStore:
    """Access to the packages table."""

    def __init__(self, supa: SupabaseClient, table: str = settings.PACKAGES_TABLE) -> None:
        self._supa = supa
        self._table = table

    async def list(self, category: Optional[str] = None) -> List[Package]:
        query = self._supa.table(self._table).select("*")
        if category is not None:
            query = query.eq("category", category)
        rows = await _execute(query.order("created_at"), "list packages")
        logger.debug("Fetched packages", extra={"count": len(rows), "category": category})
        return [Package.model_validate(row) for row in rows]

    async def get(self, package_id: str) -> Optional[Package]:
        if not _is_uuid(package_id):
            return None
        rows = await _execute(
            self._supa.table(self._table).select("*").eq("id", package_id).limit(1),
            "fetch package",
        )
        return Package.model_validate(rows[0]) if rows else None

    async def insert(self, record: Dict[str, Any]) -> Package:
        rows = await _execute(self._supa.table(self._table).insert(record), "insert package")
        if not rows:
            raise StoreError("Failed to insert package")
        return Package.model_validate(rows[0])
