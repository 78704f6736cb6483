"""Reports router: trigger emailed event report generation."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from eventpanel.models.enums import Category
from eventpanel.models.report import ReportRequest, ReportTask
from eventpanel.utils.logger import logger
from eventpanel.worker import email_event_report

router = APIRouter()


@router.post("/report/email", response_model=ReportTask, status_code=status.HTTP_202_ACCEPTED)
async def email_report(request: ReportRequest) -> ReportTask:
    """Queue a report of the events matching the table filter for email delivery."""
    category = Category.parse(request.category)
    try:
        res = email_event_report.delay(
            request.search, category.value if category else None, request.recipient
        )
    except Exception as exc:  # noqa: BLE001 broad to surface broker errors
        logger.error("Failed to queue event report", extra={"error": str(exc)})
        raise HTTPException(status_code=500, detail="Failed to queue event report") from exc
    return ReportTask(task_id=res.id)
