"""Pydantic models for events."""
from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventpanel.models.enums import Category, EventStatus

REQUIRED_FIELDS = ("title", "date", "time", "location", "description")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Event(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    date: dt.date
    time: str
    location: str
    description: str
    category: Category | None = None
    package_id: str | None = Field(default=None, alias="packageId")
    status: EventStatus = EventStatus.NOT_COMPLETED
    created_at: dt.datetime | None = Field(default=None, alias="createdAt")

    @property
    def is_completed(self) -> bool:
        return self.status == EventStatus.COMPLETED


class EventFields(BaseModel):
    """Incoming event fields; every field is optional at parse time.

    Presence and content rules are enforced by the event service so that
    create and partial update share one validation path.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = None
    date: dt.date | None = None
    time: str | None = None
    location: str | None = None
    description: str | None = None
    category: str | None = None
    package_id: str | None = Field(default=None, alias="packageId")

    @field_validator("date", "category", "package_id", mode="before")
    @classmethod
    def _empty_as_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)


class EventCreate(EventFields):
    pass


class EventUpdate(EventFields):
    pass
