"""Async HTTP client for the event panel API, used by the admin views.

Non-2xx responses are turned into `ApiError` using the error envelope the
API returns. Calls are made once; there are no retries.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from eventpanel.models.event import Event
from eventpanel.models.package import Package
from eventpanel.utils import settings
from eventpanel.utils.logger import logger


class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class EventPanelClient:
    """Async client for the event and package endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = settings.EVENTPANEL_HTTP_TIMEOUT,
    ) -> None:
        self._base = (base_url or settings.EVENTPANEL_API_BASE).rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "EventPanelClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base}{path}"
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("API request failed", extra={"url": url, "error": str(exc)})
            raise ApiError(0, str(exc) or exc.__class__.__name__) from exc
        if resp.is_error:
            raise ApiError(resp.status_code, _error_message(resp))
        return resp.json()

    async def list_events(self) -> List[Event]:
        data = await self._request("GET", "/api/event/event")
        return [Event.model_validate(item) for item in data]

    async def get_event(self, event_id: str) -> Event:
        return Event.model_validate(await self._request("GET", f"/api/event/event/{event_id}"))

    async def create_event(self, fields: Dict[str, Any]) -> Event:
        return Event.model_validate(await self._request("POST", "/api/event/event", json=fields))

    async def update_event(self, event_id: str, fields: Dict[str, Any]) -> Event:
        data = await self._request("PUT", f"/api/event/event/{event_id}", json=fields)
        return Event.model_validate(data)

    async def complete_event(self, event_id: str) -> Event:
        data = await self._request("PATCH", f"/api/event/event/{event_id}/complete")
        return Event.model_validate(data)

    async def delete_event(self, event_id: str) -> None:
        await self._request("DELETE", f"/api/event/event/{event_id}")

    async def list_categories(self) -> List[str]:
        return await self._request("GET", "/api/event/categories")

    async def list_packages(self, category: Optional[str] = None) -> List[Package]:
        params = {"category": category} if category else None
        data = await self._request("GET", "/api/package", params=params)
        return [Package.model_validate(item) for item in data]


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.reason_phrase
