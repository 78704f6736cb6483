"""Celery tasks for the event panel.

Renders the filtered event report and emails it. External I/O is done via
service modules; the task is safe to retry since it only reads events.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from celery import shared_task
from tenacity import retry, wait_exponential, stop_after_attempt

from eventpanel.admin.filters import filter_events
from eventpanel.services.email_service import EmailService
from eventpanel.services.report_service import render_event_report
from eventpanel.services.supabase_client import EventStore, SupabaseClient
from eventpanel.utils.logger import logger


@shared_task(name="email_event_report")
@retry(wait=wait_exponential(multiplier=1, min=2, max=30), stop=stop_after_attempt(3))
def email_event_report(
    search: str = "", category: Optional[str] = None, recipient: Optional[str] = None
) -> dict:
    """Email the event report for the given table filter.

    This function runs in Celery worker context. It bridges to async
    services via asyncio.
    """
    logger.info("Starting event report", extra={"search": search, "category": category})

    async def _async_impl() -> Dict[str, Any]:
        supa = await SupabaseClient.connect()
        try:
            events = await EventStore(supa).list()
        finally:
            await supa.close()
        rows = filter_events(events, search, category)
        pdf = render_event_report(rows)
        await EmailService().send_event_report(pdf, event_count=len(rows), recipient=recipient)
        return {"status": "sent", "count": len(rows)}

    return asyncio.run(_async_impl())
