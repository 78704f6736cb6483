from __future__ import annotations

import os
import re
import subprocess
import sys
from pathlib import Path

from eventpanel.services.email_service import EmailService
from eventpanel.utils import settings

PROJECT_DIR = Path(__file__).resolve().parents[1]
REPO_ROOT = PROJECT_DIR.parent


def test_log_level_from_dotenv_applies_whatever_is_imported_first(tmp_path):
    (tmp_path / ".env").write_text("LOG_LEVEL=DEBUG\n")
    env = {key: value for key, value in os.environ.items() if key != "LOG_LEVEL"}
    env["PYTHONPATH"] = str(PROJECT_DIR)
    script = (
        "import logging\n"
        "import eventpanel.services.event_service\n"
        "print(logging.getLevelName(logging.getLogger('eventpanel').level))\n"
    )

    result = subprocess.run(
        [sys.executable, "-c", script],
        cwd=tmp_path,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )

    assert result.stdout.strip() == "DEBUG"


async def test_email_service_reads_addresses_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "REPORT_SENDER", "desk@flora.example")
    monkeypatch.setattr(settings, "REPORT_RECIPIENT", "owner@flora.example")
    sent = []

    class _Api:
        def send_transac_email(self, email):
            sent.append(email)

    service = EmailService()
    service._email_api = _Api()

    await service.send_event_report(b"%PDF-1.4", 2)

    assert sent[0].to == [{"email": "owner@flora.example"}]
    assert sent[0].sender == {"email": "desk@flora.example"}
    assert sent[0].subject == "Event Report - 2 events"


def test_env_example_lists_every_setting():
    source = (PROJECT_DIR / "eventpanel" / "utils" / "settings.py").read_text()
    names = set(re.findall(r'os\.getenv\("([A-Z_]+)"', source))
    documented = {
        line.split("=", 1)[0].strip()
        for line in (REPO_ROOT / ".env.example").read_text().splitlines()
        if "=" in line and not line.lstrip().startswith("#")
    }

    assert names
    assert names - documented == set()
