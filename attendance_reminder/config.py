"""Configuration helpers for the attendance reminder service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

PLACEHOLDER_PUBLIC_KEY = "your_public_key_here"
PLACEHOLDER_PRIVATE_KEY = "your_private_key_here"
PLACEHOLDER_SERVICE_ID = "your_service_id_here"
PLACEHOLDER_TEMPLATE_ID = "your_template_id_here"

WEEKDAY_NAMES = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
ALL_WEEKDAYS = frozenset(range(7))


@dataclass(slots=True)
class Settings:
    """Runtime configuration values loaded from environment variables."""

    emailjs_public_key: str = PLACEHOLDER_PUBLIC_KEY
    emailjs_private_key: str = PLACEHOLDER_PRIVATE_KEY
    emailjs_service_id: str = PLACEHOLDER_SERVICE_ID
    emailjs_template_id: str = PLACEHOLDER_TEMPLATE_ID
    emailjs_timeout: float = 10.0
    port: int = 3000
    public_base_url: str = "http://localhost:3000"
    reminder_hour: int = 20
    reminder_minute: int = 0
    reminder_timezone: str = "America/New_York"
    reminder_weekdays: frozenset[int] = field(default_factory=lambda: ALL_WEEKDAYS)
    roster_path: Path = Path("employees.csv")
    log_level: str = "info"

    @property
    def emailjs_configured(self) -> bool:
        return self.emailjs_public_key != PLACEHOLDER_PUBLIC_KEY


def load_settings(env_file: str | None = None) -> Settings:
    """Load settings from the environment, optionally from a specific file."""

    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    try:
        port = int(os.getenv("PORT", "3000"))
        timeout = float(os.getenv("EMAILJS_TIMEOUT", "10"))
    except ValueError as exc:
        raise RuntimeError("PORT and EMAILJS_TIMEOUT must be numeric") from exc

    hour, minute = parse_reminder_time(os.getenv("REMINDER_TIME", "20:00"))
    try:
        weekdays = parse_weekdays(os.getenv("REMINDER_WEEKDAYS"))
    except ValueError as exc:
        raise RuntimeError(str(exc)) from exc

    return Settings(
        emailjs_public_key=os.getenv("EMAILJS_PUBLIC_KEY", PLACEHOLDER_PUBLIC_KEY),
        emailjs_private_key=os.getenv("EMAILJS_PRIVATE_KEY", PLACEHOLDER_PRIVATE_KEY),
        emailjs_service_id=os.getenv("EMAILJS_SERVICE_ID", PLACEHOLDER_SERVICE_ID),
        emailjs_template_id=os.getenv("EMAILJS_TEMPLATE_ID", PLACEHOLDER_TEMPLATE_ID),
        emailjs_timeout=timeout,
        port=port,
        public_base_url=resolve_base_url(port),
        reminder_hour=hour,
        reminder_minute=minute,
        reminder_timezone=parse_timezone(os.getenv("REMINDER_TIMEZONE", "America/New_York")),
        reminder_weekdays=weekdays,
        roster_path=Path(os.getenv("EMPLOYEE_ROSTER_PATH", "employees.csv")).expanduser(),
        log_level=os.getenv("LOG_LEVEL", "info"),
    )


def resolve_base_url(port: int) -> str:
    """Return the externally reachable URL embedded in quick-response links."""

    explicit: Optional[str] = os.getenv("PUBLIC_BASE_URL")
    if explicit:
        return explicit.rstrip("/")
    slug = os.getenv("REPL_SLUG")
    if slug:
        return f"https://{slug}.{os.getenv('REPL_OWNER', '')}.repl.co"
    return f"http://localhost:{port}"


def parse_reminder_time(value: str) -> tuple[int, int]:
    try:
        hour_text, minute_text = value.strip().split(":", 1)
        hour, minute = int(hour_text), int(minute_text)
    except ValueError as exc:
        raise RuntimeError(f"REMINDER_TIME must look like HH:MM, got {value!r}") from exc
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise RuntimeError(f"REMINDER_TIME out of range: {value!r}")
    return hour, minute


def parse_timezone(value: str) -> str:
    name = value.strip()
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise RuntimeError(f"REMINDER_TIMEZONE is not a known timezone: {value!r}") from exc
    return name


def parse_weekdays(value: str | None) -> frozenset[int]:
    """Parse ``mon,tue`` or ``0,1`` style weekday lists (Monday is 0)."""

    if not value or not value.strip():
        return ALL_WEEKDAYS
    days: set[int] = set()
    for part in value.split(","):
        token = part.strip().lower()
        if not token:
            continue
        if token.isdigit() and int(token) in ALL_WEEKDAYS:
            days.add(int(token))
        elif token[:3] in WEEKDAY_NAMES:
            days.add(WEEKDAY_NAMES.index(token[:3]))
        else:
            raise ValueError(f"Unknown weekday in REMINDER_WEEKDAYS: {part!r}")
    if not days:
        raise ValueError("REMINDER_WEEKDAYS must name at least one day")
    return frozenset(days)


__all__ = [
    "Settings",
    "load_settings",
    "resolve_base_url",
    "parse_reminder_time",
    "parse_timezone",
    "parse_weekdays",
    "WEEKDAY_NAMES",
]
