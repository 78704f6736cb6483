"""Event lifecycle rules: validation, status transitions and queries.

The service owns every rule that goes beyond raw storage. It receives its
stores by injection and keeps no state between calls; each operation is a
single read and/or write against the event store, with at most one
read-only package lookup.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional, Protocol

from eventpanel.errors import NotFoundError, ValidationError
from eventpanel.models.enums import Category, EventStatus
from eventpanel.models.event import REQUIRED_FIELDS, Event, EventCreate, EventUpdate
from eventpanel.models.package import Package
from eventpanel.utils.logger import logger


class EventStoreProtocol(Protocol):
    async def insert(self, record: Dict[str, Any]) -> Event: ...

    async def list(self) -> List[Event]: ...

    async def get(self, event_id: str) -> Optional[Event]: ...

    async def update(self, event_id: str, changes: Dict[str, Any]) -> Optional[Event]: ...

    async def delete(self, event_id: str) -> bool: ...


class PackageLookup(Protocol):
    async def get(self, package_id: str) -> Optional[Package]: ...


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_time(value: str) -> str:
    """Return `value` as HH:MM (or HH:MM:SS when seconds are given)."""
    try:
        parsed = dt.time.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid time of day: {value!r}") from exc
    if parsed.second or parsed.microsecond:
        return parsed.strftime("%H:%M:%S")
    return parsed.strftime("%H:%M")


class EventService:
    def __init__(self, events: EventStoreProtocol, packages: PackageLookup) -> None:
        self._events = events
        self._packages = packages

    async def create(self, fields: EventCreate) -> Event:
        data = fields.model_dump()
        missing = [name for name in REQUIRED_FIELDS if _is_blank(data.get(name))]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        category = Category.parse(data["category"])
        await self._check_package(data["package_id"], category)

        record = {
            "title": data["title"].strip(),
            "date": data["date"].isoformat(),
            "time": normalize_time(data["time"]),
            "location": data["location"].strip(),
            "description": data["description"],
            "category": category.value if category else None,
            "package_id": data["package_id"],
            "status": EventStatus.NOT_COMPLETED.value,
        }
        event = await self._events.insert(record)
        logger.info("Created event", extra={"event_id": event.id, "title": event.title})
        return event

    async def list(self) -> List[Event]:
        return await self._events.list()

    async def get(self, event_id: str) -> Event:
        event = await self._events.get(event_id)
        if event is None:
            raise NotFoundError(f"Event {event_id} not found")
        return event

    async def update(self, event_id: str, fields: EventUpdate) -> Event:
        """Merge the provided fields into the stored event.

        Only keys present in the request are replaced; `status` and `id` are
        never touched here. Category and package consistency is checked on
        the merged record.
        """
        current = await self.get(event_id)
        provided = fields.model_dump(exclude_unset=True)

        blank = [name for name in REQUIRED_FIELDS if name in provided and _is_blank(provided[name])]
        if blank:
            raise ValidationError(f"Required fields cannot be empty: {', '.join(blank)}")

        changes: Dict[str, Any] = {}
        for name in ("title", "location"):
            if name in provided:
                changes[name] = provided[name].strip()
        if "description" in provided:
            changes["description"] = provided["description"]
        if "date" in provided:
            changes["date"] = provided["date"].isoformat()
        if "time" in provided:
            changes["time"] = normalize_time(provided["time"])

        category = Category.parse(provided["category"]) if "category" in provided else current.category
        package_id = provided["package_id"] if "package_id" in provided else current.package_id
        if "category" in provided or "package_id" in provided:
            await self._check_package(package_id, category)
            changes["category"] = category.value if category else None
            changes["package_id"] = package_id

        if not changes:
            return current

        event = await self._events.update(event_id, changes)
        if event is None:
            raise NotFoundError(f"Event {event_id} not found")
        logger.info("Updated event", extra={"event_id": event_id, "fields": sorted(changes)})
        return event

    async def complete(self, event_id: str) -> Event:
        event = await self._events.update(event_id, {"status": EventStatus.COMPLETED.value})
        if event is None:
            raise NotFoundError(f"Event {event_id} not found")
        logger.info("Completed event", extra={"event_id": event_id})
        return event

    async def delete(self, event_id: str) -> None:
        deleted = await self._events.delete(event_id)
        if not deleted:
            raise NotFoundError(f"Event {event_id} not found")
        logger.info("Deleted event", extra={"event_id": event_id})

    async def _check_package(self, package_id: Optional[str], category: Optional[Category]) -> None:
        if package_id is None:
            return
        if category is None:
            raise ValidationError("A category is required when a package is selected")
        package = await self._packages.get(package_id)
        if package is None:
            raise ValidationError(f"Package {package_id} does not exist")
        if package.category != category:
            raise ValidationError(
                f"Package {package_id} belongs to '{package.category.value}', not '{category.value}'"
            )
