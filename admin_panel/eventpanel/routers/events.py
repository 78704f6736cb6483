"""Events router: create, list, update, complete and delete events.

No business logic lives here; each route delegates to the event service and
typed service errors are turned into the error envelope by the handlers
registered in `main`.
"""
from __future__ import annotations

from typing import List
from fastapi import APIRouter, Depends, status

from eventpanel.models.enums import Category
from eventpanel.models.event import Event, EventCreate, EventUpdate
from eventpanel.services.event_service import EventService
from eventpanel.routers.deps import get_event_service

router = APIRouter()


@router.post("/event", response_model=Event, status_code=status.HTTP_201_CREATED)
async def create_event(
    fields: EventCreate, service: EventService = Depends(get_event_service)
) -> Event:
    """Create an event with status `Not Completed`."""
    return await service.create(fields)


@router.get("/event", response_model=List[Event])
async def list_events(service: EventService = Depends(get_event_service)) -> List[Event]:
    """Return every event in insertion order."""
    return await service.list()


@router.get("/event/{event_id}", response_model=Event)
async def get_event(event_id: str, service: EventService = Depends(get_event_service)) -> Event:
    return await service.get(event_id)


@router.put("/event/{event_id}", response_model=Event)
async def update_event(
    event_id: str, fields: EventUpdate, service: EventService = Depends(get_event_service)
) -> Event:
    """Replace the fields present in the body; others keep their values."""
    return await service.update(event_id, fields)


@router.delete("/event/{event_id}", response_model=dict)
async def delete_event(event_id: str, service: EventService = Depends(get_event_service)) -> dict:
    await service.delete(event_id)
    return {"success": True, "message": "Event deleted successfully"}


@router.patch("/event/{event_id}/complete", response_model=Event)
async def complete_event(event_id: str, service: EventService = Depends(get_event_service)) -> Event:
    """Mark an event as completed. Completing twice is not an error."""
    return await service.complete(event_id)


@router.get("/categories", response_model=List[str])
async def list_categories() -> List[str]:
    return Category.values()
