"""Pydantic models for event report delivery."""
from __future__ import annotations

from pydantic import BaseModel


class ReportRequest(BaseModel):
    search: str = ""
    category: str | None = None
    recipient: str | None = None


class ReportTask(BaseModel):
    task_id: str
