"""MCP server exposing attendance reminder tools."""

from __future__ import annotations

from typing import Optional

from mcp.server.fastmcp import FastMCP

from .config import load_settings
from .emailjs_client import EmailJSClient
from .errors import AttendanceReminderError
from .service import AttendanceReminderService, load_roster

mcp = FastMCP("attendance-reminder")

_settings = load_settings()
_client = EmailJSClient(
    _settings.emailjs_public_key,
    _settings.emailjs_private_key,
    timeout=_settings.emailjs_timeout,
)
_service = AttendanceReminderService(_settings, _client, roster=load_roster(_settings.roster_path))


@mcp.tool()
async def get_notification_settings() -> dict:
    """Return the current notification settings."""

    return _service.get_settings().to_dict()


@mcp.tool()
async def configure_notifications(email: str, method: Optional[str] = None) -> dict:
    """Enable reminder emails for the given address."""

    try:
        settings = _service.setup_notifications(email, method)
    except AttendanceReminderError as exc:
        raise ValueError(str(exc)) from exc
    return settings.to_dict()


@mcp.tool()
async def send_test_notification() -> dict:
    """Send a test reminder email without touching lastSent."""

    try:
        result = await _service.send_test_notification()
    except AttendanceReminderError as exc:
        raise ValueError(str(exc)) from exc
    return {"sent": result.sent, "status": result.status}


@mcp.tool()
async def trigger_notification() -> dict:
    """Send the daily reminder email now."""

    try:
        result = await _service.send_attendance_email()
    except AttendanceReminderError as exc:
        raise ValueError(str(exc)) from exc
    return {"sent": result.sent, "status": result.status, "lastSent": _service.get_settings().last_sent}


@mcp.tool()
async def get_employee_roster() -> list[dict]:
    """Return the employees included in reminder emails."""

    return _service.list_employees()


__all__ = [
    "mcp",
    "get_notification_settings",
    "configure_notifications",
    "send_test_notification",
    "trigger_notification",
    "get_employee_roster",
]
