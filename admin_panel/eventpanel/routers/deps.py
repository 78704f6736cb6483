"""FastAPI dependencies resolving services from application state."""
from __future__ import annotations

from fastapi import Request

from eventpanel.services.event_service import EventService
from eventpanel.services.package_service import PackageService


def get_event_service(request: Request) -> EventService:
    return request.app.state.event_service


def get_package_service(request: Request) -> PackageService:
    return request.app.state.package_service
