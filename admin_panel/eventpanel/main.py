"""FastAPI entrypoint for the event panel backend.

Exposes health check and domain routers. The store handle is created once
at startup and released on shutdown; services receive it by injection.
Every failure is answered with the `{success, statusCode, message}`
envelope.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventpanel.celery_app import celery_app  # noqa: F401 binds shared tasks to the broker
from eventpanel.errors import EventPanelError
from eventpanel.routers.events import router as events_router
from eventpanel.routers.packages import router as packages_router
from eventpanel.routers.reports import router as reports_router
from eventpanel.services.event_service import EventService
from eventpanel.services.package_service import PackageService
from eventpanel.services.supabase_client import EventStore, PackageStore, SupabaseClient
from eventpanel.utils import settings
from eventpanel.utils.logger import logger


def _envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "statusCode": status_code, "message": message},
    )


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    supa = await SupabaseClient.connect()
    packages = PackageStore(supa)
    app.state.event_service = EventService(EventStore(supa), packages)
    app.state.package_service = PackageService(packages)
    logger.info("Connected to Supabase")
    try:
        yield
    finally:
        await supa.close()
        logger.info("Store connection closed")


def create_app(use_lifespan: bool = True) -> FastAPI:
    app = FastAPI(
        title="Event Panel Backend",
        version="0.1.0",
        lifespan=lifespan if use_lifespan else None,
    )

    # Must sit inside CORSMiddleware: unexpected-error envelopes need CORS headers too.
    @app.middleware("http")
    async def _unexpected(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:  # noqa: BLE001 last-resort envelope
            logger.exception("Unhandled error", extra={"path": request.url.path})
            return _envelope(500, "Internal Server Error")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(EventPanelError)
    async def _panel_error(request: Request, exc: EventPanelError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Request failed", extra={"path": request.url.path, "error": exc.message})
        else:
            logger.warning("Request rejected", extra={"path": request.url.path, "error": exc.message})
        return _envelope(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_invalid(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _envelope(400, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _envelope(exc.status_code, str(exc.detail))

    @app.get("/health")
    async def health() -> dict:
        """Simple health endpoint to verify service readiness."""
        logger.debug("Health check requested")
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    # Routers
    app.include_router(events_router, prefix="/api/event", tags=["events"])
    app.include_router(reports_router, prefix="/api/event", tags=["reports"])
    app.include_router(packages_router, prefix="/api/package", tags=["packages"])
    return app


app = create_app()


def run() -> None:
    uvicorn.run("eventpanel.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
