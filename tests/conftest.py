"""Shared fixtures for the attendance reminder test suite."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from attendance_reminder.config import Settings
from attendance_reminder.emailjs_client import EmailJSError, EmailJSResponse
from attendance_reminder.service import AttendanceReminderService

FIXED_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


class FakeTransport:
    """Records every send and optionally fails."""

    def __init__(self, error: Optional[BaseException] = None) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.error = error

    async def send(self, service_id: str, template_id: str, template_params: Dict[str, Any]) -> EmailJSResponse:
        self.calls.append(
            {"service_id": service_id, "template_id": template_id, "params": template_params}
        )
        if self.error is not None:
            raise self.error
        return EmailJSResponse(status=200, text="OK")


class FakeClock:
    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        emailjs_public_key="pub",
        emailjs_private_key="priv",
        emailjs_service_id="service_abc",
        emailjs_template_id="template_xyz",
        public_base_url="https://attendance.example.com",
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def failing_transport() -> FakeTransport:
    return FakeTransport(error=EmailJSError(400, "The service ID is invalid"))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(settings: Settings, transport: FakeTransport, clock: FakeClock) -> AttendanceReminderService:
    return AttendanceReminderService(settings, transport, clock=clock)
