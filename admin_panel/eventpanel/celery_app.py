"""Celery configuration for the event panel.

Provides Celery application instance configured with Redis broker and result
backend, to be imported by both the FastAPI app and the worker process.
"""
from __future__ import annotations

from celery import Celery

from eventpanel.utils.settings import REDIS_URL

celery_app = Celery(
    "eventpanel",
    broker=REDIS_URL,
    backend=REDIS_URL,
    include=["eventpanel.worker"],
)

celery_app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
)
