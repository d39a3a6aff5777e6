"""Core orchestration logic for the attendance reminder service."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence
from zoneinfo import ZoneInfo

from .config import Settings
from .emailjs_client import EmailJSResponse
from .errors import ConfigurationError, DispatchError, ValidationError
from .links import QuickResponseLinkGenerator
from .models import (
    DEFAULT_ROSTER,
    AttendanceSubmission,
    DispatchResult,
    Employee,
    NotificationSettings,
)
from .scheduler import Clock, DailyScheduler, utc_now
from .store import NotificationSettingsStore

logger = logging.getLogger(__name__)

TEST_SUBJECT = "🧪 Test: Daily Attendance Reminder"
DAILY_SUBJECT = "🕐 Daily Attendance Reminder"
TEST_MESSAGE = "This is a test email. Your daily notifications are working correctly!"
DAILY_MESSAGE = "Time to mark today's attendance! Click the quick link below for fast entry."
RECIPIENT_NAME = "Attendance Manager"


class EmailTransport(Protocol):
    async def send(
        self, service_id: str, template_id: str, template_params: Dict[str, Any]
    ) -> EmailJSResponse: ...


class AttendanceReminderService:
    """Owns the notification settings and runs the reminder email flow."""

    def __init__(
        self,
        settings: Settings,
        transport: EmailTransport,
        *,
        roster: Optional[Sequence[Employee]] = None,
        store: Optional[NotificationSettingsStore] = None,
        links: Optional[QuickResponseLinkGenerator] = None,
        clock: Clock = utc_now,
    ) -> None:
        self.settings = settings
        self.transport = transport
        self.roster: tuple[Employee, ...] = tuple(roster if roster is not None else DEFAULT_ROSTER)
        self.store = store or NotificationSettingsStore()
        self.links = links or QuickResponseLinkGenerator(settings.public_base_url)
        self._clock = clock

    # region Notification settings
    def setup_notifications(self, email: object, method: Optional[str] = None) -> NotificationSettings:
        return self.store.setup(email, method)

    def get_settings(self) -> NotificationSettings:
        return self.store.get_settings()

    def notifications_ready(self) -> bool:
        current = self.store.get_settings()
        return current.enabled and bool(current.email)

    # endregion

    # region Dispatch
    def build_email_params(self, is_test: bool) -> Dict[str, str]:
        current = self.store.get_settings()
        return {
            "to_email": current.email or "",
            "to_name": RECIPIENT_NAME,
            "subject": TEST_SUBJECT if is_test else DAILY_SUBJECT,
            "date": self.today_label(),
            "quick_link": self.links.generate(),
            "employees_list": ", ".join(employee.name for employee in self.roster),
            "message": TEST_MESSAGE if is_test else DAILY_MESSAGE,
        }

    def today_label(self) -> str:
        local = self._clock().astimezone(ZoneInfo(self.settings.reminder_timezone))
        return f"{local.month}/{local.day}/{local.year}"

    async def send_attendance_email(self, is_test: bool = False) -> DispatchResult:
        if not self.notifications_ready():
            logger.warning("Email notifications not configured; skipping send")
            return DispatchResult(sent=False, is_test=is_test)

        params = self.build_email_params(is_test)
        kind = "Test" if is_test else "Daily"
        try:
            response = await self.transport.send(
                self.settings.emailjs_service_id,
                self.settings.emailjs_template_id,
                params,
            )
        except Exception as exc:  # noqa: BLE001
            logger.error("%s email sending failed: %r", kind, exc)
            raise DispatchError(f"{kind} email sending failed", exc) from exc

        logger.info("%s email sent successfully: %s", kind, response.status)
        if not is_test:
            self.store.mark_sent(self._clock().isoformat())
        return DispatchResult(sent=True, is_test=is_test, status=response.status, text=response.text)

    async def send_test_notification(self) -> DispatchResult:
        if not self.notifications_ready():
            raise ConfigurationError("Notifications not configured")
        return await self.send_attendance_email(is_test=True)

    async def run_scheduled_send(self) -> None:
        try:
            result = await self.send_attendance_email(is_test=False)
        except DispatchError as exc:
            logger.error("Failed to send scheduled email: %s", exc)
            return
        if result.sent:
            logger.info("Daily attendance email sent successfully")

    # endregion

    # region Attendance and roster
    def list_employees(self) -> List[Dict[str, Any]]:
        return [employee.to_dict() for employee in self.roster]

    def submit_attendance(self, date: object, records: object) -> AttendanceSubmission:
        if (
            not isinstance(date, str)
            or not date
            or not isinstance(records, list)
            or len(records) != len(self.roster)
        ):
            raise ValidationError("Invalid attendance data")
        submission = AttendanceSubmission(date=date, records=records)
        logger.info("Quick attendance received: date=%s records=%s", date, records)
        return submission

    # endregion

    def schedule_status(self, scheduler: DailyScheduler) -> Dict[str, Any]:
        return {
            "dailyScheduleActive": scheduler.active,
            "timezone": scheduler.schedule.timezone,
            "nextRun": scheduler.schedule.describe(),
            "nextRunAt": scheduler.next_run().isoformat(),
            "lastSent": self.store.get_settings().last_sent,
        }


def load_roster_csv(path: Path) -> Iterable[Employee]:
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        for index, row in enumerate(reader, start=1):
            name = (row.get("name") or "").strip()
            if not name:
                continue
            raw_id = (row.get("id") or "").strip()
            yield Employee(id=int(raw_id) if raw_id.isdigit() else index, name=name)


def load_roster(path: Optional[Path]) -> tuple[Employee, ...]:
    if path is None or not path.exists():
        return DEFAULT_ROSTER
    roster = tuple(load_roster_csv(path))
    if not roster:
        logger.warning("Roster file %s has no employees; using the default roster", path)
        return DEFAULT_ROSTER
    logger.info("Loaded %d employees from %s", len(roster), path)
    return roster


__all__ = [
    "AttendanceReminderService",
    "EmailTransport",
    "load_roster",
    "load_roster_csv",
]
