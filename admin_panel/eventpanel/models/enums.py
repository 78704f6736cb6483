"""Enumerations shared by the API and the admin client."""
from __future__ import annotations

from enum import Enum
from typing import Optional

from eventpanel.errors import ValidationError


class Category(str, Enum):
    WEDDINGS = "Weddings"
    ENGAGEMENT = "Engagement"
    BIRTHDAYS = "Birthdays"
    HOME_DECOR = "Home Decor"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Category"]:
        """Return the member for `value`; None and "" mean no category."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError as exc:
            allowed = ", ".join(cls.values())
            raise ValidationError(f"Invalid category '{value}'. Allowed: {allowed}") from exc


class EventStatus(str, Enum):
    NOT_COMPLETED = "Not Completed"
    COMPLETED = "Completed"
