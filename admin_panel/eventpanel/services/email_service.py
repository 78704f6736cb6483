"""Email service to deliver event reports via Brevo (Sendinblue).

Uses the sib-api-v3-sdk transactional email API; the PDF travels as a
base64 attachment.
"""
from __future__ import annotations

import base64
from typing import Optional

import sib_api_v3_sdk
from sib_api_v3_sdk.rest import ApiException

from eventpanel.services.report_service import REPORT_FILENAME
from eventpanel.utils import settings
from eventpanel.utils.logger import logger


class EmailService:
    """Wrapper to send report emails via Brevo API."""

    def __init__(self) -> None:
        self._api_key = settings.BREVO_API_KEY
        self._sender = settings.REPORT_SENDER
        self._recipient = settings.REPORT_RECIPIENT
        cfg = sib_api_v3_sdk.Configuration()
        if self._api_key:
            cfg.api_key["api-key"] = self._api_key
        self._client = sib_api_v3_sdk.ApiClient(cfg)
        self._email_api = sib_api_v3_sdk.TransactionalEmailsApi(self._client)

    async def send_event_report(
        self, pdf: bytes, event_count: int, recipient: Optional[str] = None
    ) -> None:
        """Send the rendered report with a short summary line."""
        to = recipient or self._recipient
        send_smtp_email = sib_api_v3_sdk.SendSmtpEmail(
            to=[{"email": to}],
            sender={"email": self._sender},
            subject=f"Event Report - {event_count} events",
            html_content=f"<h1>Event Report</h1><p>{event_count} events attached.</p>",
            attachment=[
                {"name": REPORT_FILENAME, "content": base64.b64encode(pdf).decode("ascii")}
            ],
        )
        try:
            self._email_api.send_transac_email(send_smtp_email)
        except ApiException as exc:
            logger.error("Failed to send report email", extra={"error": str(exc)})
            raise
        logger.info("Report email sent", extra={"recipient": to, "events": event_count})
