"""Error taxonomy for the event panel.

Every error carries the HTTP status the API layer answers with, so the
exception handlers in `main` stay a one-to-one mapping.
"""
from __future__ import annotations


class EventPanelError(Exception):
    """Base error for the event panel."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(EventPanelError):
    """A required field is missing or a value is not acceptable."""

    status_code = 400


class NotFoundError(EventPanelError):
    """The targeted record does not exist."""

    status_code = 404


class StoreError(EventPanelError):
    """The underlying persistence layer failed."""

    status_code = 500
