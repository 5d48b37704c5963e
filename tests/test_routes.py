import re
import time
from unittest.mock import AsyncMock

import aiosmtplib
import pytest
from fastapi.testclient import TestClient

from morning_mail.config import Settings
from morning_mail.core.clock import PROCESS_STARTED_AT
from morning_mail.main import create_app

ISO_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_service_info(settings, ok_mailer):
    client = TestClient(create_app(settings, mailer=ok_mailer))

    resp = client.get("/")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "running"
    assert body["message"] == "Good Morning Email Cron Service"
    assert body["nextRun"] == "Daily at 8:00 AM WAT"
    assert ISO_UTC.match(body["timestamp"])
    assert ok_mailer.calls == 0


def test_status(settings, ok_mailer):
    client = TestClient(create_app(settings, mailer=ok_mailer))

    resp = client.get("/status")

    assert resp.status_code == 200
    body = resp.json()
    assert body["uptime"] >= 0
    assert body["timezone"] == "Africa/Lagos"
    assert ISO_UTC.match(body["timestamp"])
    assert ok_mailer.calls == 0


def test_status_uptime_tracks_elapsed_time(settings, ok_mailer):
    app = create_app(settings, mailer=ok_mailer)
    client = TestClient(app)

    first = client.get("/status").json()["uptime"]
    # pretend ten seconds passed between the two calls
    app.state.started_at -= 10.0
    second = client.get("/status").json()["uptime"]

    assert second - first == pytest.approx(10.0, abs=1.0)


def test_manual_trigger_success(settings, ok_mailer):
    client = TestClient(create_app(settings, mailer=ok_mailer))

    resp = client.post("/")

    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "message": "Email sent successfully",
        "messageId": "<abc123@smtp.example.com>",
    }
    assert ok_mailer.calls == 1


def test_manual_trigger_failure(settings, failing_mailer):
    client = TestClient(create_app(settings, mailer=failing_mailer))

    resp = client.post("/")

    assert resp.status_code == 500
    assert resp.json() == {
        "success": False,
        "message": "Failed to send email",
        "error": "Connection refused",
    }
    assert failing_mailer.calls == 1


def test_each_manual_trigger_sends(settings, ok_mailer):
    client = TestClient(create_app(settings, mailer=ok_mailer))

    for _ in range(3):
        assert client.post("/").status_code == 200

    assert ok_mailer.calls == 3


def test_lifespan_skips_scheduler_when_disabled(settings, ok_mailer):
    app = create_app(settings, mailer=ok_mailer)

    with TestClient(app) as client:
        assert client.get("/").status_code == 200
        assert app.state.scheduler.running is False


def test_manual_trigger_with_malformed_sender_maps_to_500(monkeypatch):
    monkeypatch.setattr(aiosmtplib, "send", AsyncMock(return_value=({}, "OK")))
    settings = Settings(
        _env_file=None,
        EMAIL_FROM="a@b.c\nBcc: x@y.z",
        SCHEDULER_ENABLED=False,
    )
    client = TestClient(create_app(settings))

    resp = client.post("/")

    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Failed to send email"
    assert body["error"]


def test_uptime_counts_from_process_start(settings, ok_mailer):
    first = create_app(settings, mailer=ok_mailer)
    second = create_app(settings, mailer=ok_mailer)

    assert first.state.started_at == PROCESS_STARTED_AT
    assert second.state.started_at == PROCESS_STARTED_AT
    uptime = TestClient(second).get("/status").json()["uptime"]
    assert uptime == pytest.approx(time.monotonic() - PROCESS_STARTED_AT, abs=1.0)
