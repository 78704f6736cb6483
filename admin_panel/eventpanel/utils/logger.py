"""The `eventpanel` logger.

Configured once on first import, at the level named by `LOG_LEVEL` in
`utils.settings`. Structured context goes through `extra=`; the API, the
Celery worker and the admin client all log through this one instance.
"""
from __future__ import annotations

import logging

from eventpanel.utils.settings import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure(name: str = "eventpanel", level: str = LOG_LEVEL) -> logging.Logger:
    """Attach a stream handler to `name` unless one is already present."""
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        log.addHandler(handler)
        log.propagate = False
    log.setLevel(level)
    return log


logger = configure()
