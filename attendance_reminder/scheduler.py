"""Daily reminder scheduling on the asyncio event loop."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta, timezone
from typing import Any, Awaitable, Callable, Optional
from zoneinfo import ZoneInfo

from .config import ALL_WEEKDAYS, WEEKDAY_NAMES, Settings

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Sleep = Callable[[float], Awaitable[Any]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, frozen=True)
class DailySchedule:
    """A fixed wall-clock time in a timezone, on a subset of weekdays."""

    hour: int
    minute: int
    timezone: str
    weekdays: frozenset[int] = field(default_factory=lambda: ALL_WEEKDAYS)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DailySchedule":
        return cls(
            hour=settings.reminder_hour,
            minute=settings.reminder_minute,
            timezone=settings.reminder_timezone,
            weekdays=settings.reminder_weekdays,
        )

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def next_run(self, now: datetime) -> datetime:
        """Return the first scheduled instant strictly after ``now``."""

        tz = self.tzinfo
        local_now = now.astimezone(tz)
        for offset in range(8):
            day = local_now.date() + timedelta(days=offset)
            if day.weekday() not in self.weekdays:
                continue
            candidate = datetime.combine(day, time(self.hour, self.minute), tzinfo=tz)
            if candidate > local_now:
                return candidate
        raise ValueError("schedule has no weekdays")

    def describe(self) -> str:
        hour12 = self.hour % 12 or 12
        suffix = "AM" if self.hour < 12 else "PM"
        clock = f"{hour12}:{self.minute:02d} {suffix}"
        if self.weekdays == ALL_WEEKDAYS:
            return f"{clock} daily"
        days = ", ".join(WEEKDAY_NAMES[d].capitalize() for d in sorted(self.weekdays))
        return f"{clock} on {days}"


class DailyScheduler:
    """Run ``callback`` at every occurrence of ``schedule``.

    A failed run is logged and the next attempt is simply the next scheduled
    occurrence; missed runs are never caught up.
    """

    def __init__(
        self,
        schedule: DailySchedule,
        callback: Callable[[], Awaitable[Any]],
        *,
        clock: Clock = utc_now,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.schedule = schedule
        self._callback = callback
        self._clock = clock
        self._sleep = sleep
        self._task: Optional[asyncio.Task[None]] = None
        self._last_target: Optional[datetime] = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def next_run(self) -> datetime:
        now = self._clock()
        if self._last_target is not None and now < self._last_target:
            now = self._last_target
        return self.schedule.next_run(now)

    def start(self) -> None:
        if self.active:
            return
        self._task = asyncio.create_task(self._run_forever())
        self._task.add_done_callback(self._report_crash)
        logger.info(
            "Reminder scheduled for %s (%s)", self.schedule.describe(), self.schedule.timezone
        )

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        if not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        logger.info("Reminder schedule stopped")

    @staticmethod
    def _report_crash(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Reminder schedule stopped unexpectedly: %r", exc)

    async def run_once(self) -> None:
        """Sleep until the next occurrence, then fire the callback once."""

        target = self.next_run()
        delay = max((target - self._clock()).total_seconds(), 0.0)
        await self._sleep(delay)
        self._last_target = target
        await self.fire()

    async def fire(self) -> None:
        logger.info("Scheduled notification triggered (%s)", self.schedule.describe())
        try:
            await self._callback()
        except Exception as exc:  # noqa: BLE001
            logger.error("Scheduled reminder failed: %s", exc)

    async def _run_forever(self) -> None:
        while True:
            await self.run_once()


__all__ = ["DailySchedule", "DailyScheduler", "utc_now"]
