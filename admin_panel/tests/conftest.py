from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from eventpanel.main import create_app
from eventpanel.models.event import Event
from eventpanel.models.package import Package
from eventpanel.services.event_service import EventService
from eventpanel.services.package_service import PackageService


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InMemoryEventStore:
    """Dict-backed stand-in for the supabase event store."""

    def __init__(self) -> None:
        self.rows: Dict[str, Dict[str, Any]] = {}

    async def insert(self, record: Dict[str, Any]) -> Event:
        row = {**record, "id": str(uuid.uuid4()), "created_at": _now()}
        self.rows[row["id"]] = row
        return Event.model_validate(row)

    async def list(self) -> List[Event]:
        return [Event.model_validate(row) for row in self.rows.values()]

    async def get(self, event_id: str) -> Optional[Event]:
        row = self.rows.get(event_id)
        return Event.model_validate(row) if row else None

    async def update(self, event_id: str, changes: Dict[str, Any]) -> Optional[Event]:
        row = self.rows.get(event_id)
        if row is None:
            return None
        row.update(changes)
        return Event.model_validate(row)

    async def delete(self, event_id: str) -> bool:
        return self.rows.pop(event_id, None) is not None


class InMemoryPackageStore:
    def __init__(self) -> None:
        self.rows: Dict[str, Dict[str, Any]] = {}

    def add(self, name: str, category: str) -> Package:
        row = {"id": str(uuid.uuid4()), "name": name, "category": category, "created_at": _now()}
        self.rows[row["id"]] = row
        return Package.model_validate(row)

    async def list(self, category: Optional[str] = None) -> List[Package]:
        return [
            Package.model_validate(row)
            for row in self.rows.values()
            if category is None or row["category"] == category
        ]

    async def get(self, package_id: str) -> Optional[Package]:
        row = self.rows.get(package_id)
        return Package.model_validate(row) if row else None

    async def insert(self, record: Dict[str, Any]) -> Package:
        row = {**record, "id": str(uuid.uuid4()), "created_at": _now()}
        self.rows[row["id"]] = row
        return Package.model_validate(row)


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def package_store() -> InMemoryPackageStore:
    return InMemoryPackageStore()


@pytest.fixture
def wedding_package(package_store) -> Package:
    return package_store.add("Golden Wedding", "Weddings")


@pytest.fixture
def birthday_package(package_store) -> Package:
    return package_store.add("Balloon Party", "Birthdays")


@pytest.fixture
def event_service(event_store, package_store) -> EventService:
    return EventService(event_store, package_store)


@pytest.fixture
def package_service(package_store) -> PackageService:
    return PackageService(package_store)


@pytest.fixture
def app(event_service, package_service):
    application = create_app(use_lifespan=False)
    application.state.event_service = event_service
    application.state.package_service = package_service
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def event_fields() -> Dict[str, Any]:
    return {
        "title": "Summer Wedding",
        "date": "2026-07-04",
        "time": "14:30",
        "location": "Rose Garden",
        "description": "Outdoor ceremony with floral arch",
    }
