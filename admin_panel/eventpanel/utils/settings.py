"""Environment-driven configuration shared by the API, worker and admin client.

Values are read once at import time. A `.env` file in the working directory
is honoured so the same settings work for `uvicorn`, the Celery worker and
ad-hoc scripts. Every module reads configuration from here, never from
`os.environ` directly, so `.env` is always loaded first.
"""
from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))

APP_NAME = os.getenv("APP_NAME", "eventpanel")
PORT = int(os.getenv("PORT", "3000"))
CORS_ALLOW_ORIGINS = os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
EVENTS_TABLE = os.getenv("EVENTS_TABLE", "events")
PACKAGES_TABLE = os.getenv("PACKAGES_TABLE", "packages")

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

BREVO_API_KEY = os.getenv("BREVO_API_KEY")
REPORT_SENDER = os.getenv("REPORT_SENDER", "reports@eventpanel.local")
REPORT_RECIPIENT = os.getenv("REPORT_RECIPIENT", "admin@eventpanel.local")
REPORT_MOBILE = os.getenv("REPORT_MOBILE", "+1 234 567 890")
REPORT_EMAIL = os.getenv("REPORT_EMAIL", "info@daniya-flora.com")
REPORT_LOGO_PATH = os.getenv("REPORT_LOGO_PATH")

EVENTPANEL_API_BASE = os.getenv("EVENTPANEL_API_BASE", f"http://localhost:{PORT}")
EVENTPANEL_HTTP_TIMEOUT = float(os.getenv("EVENTPANEL_HTTP_TIMEOUT", "30"))
