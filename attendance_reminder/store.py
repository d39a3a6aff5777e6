"""In-memory holder for the single notification settings record."""

from __future__ import annotations

import logging
from typing import Optional

from .errors import ValidationError
from .models import NotificationSettings

logger = logging.getLogger(__name__)


class NotificationSettingsStore:
    """Owns the process-wide settings record.

    The record is replaced wholesale by :meth:`setup`; only ``last_sent`` is
    ever changed in place. Callers share one instance on a single event loop,
    so no locking is done here.
    """

    def __init__(self) -> None:
        self._settings = NotificationSettings()

    def setup(self, email: object, method: Optional[str] = None) -> NotificationSettings:
        if not isinstance(email, str) or "@" not in email:
            raise ValidationError("Valid email is required")
        self._settings = NotificationSettings(
            email=email,
            method=method or "email",
            enabled=True,
            last_sent=None,
        )
        logger.info("Notification settings saved: %s", self._settings.to_dict())
        return self._settings

    def get_settings(self) -> NotificationSettings:
        return self._settings

    def mark_sent(self, timestamp: str) -> None:
        self._settings.last_sent = timestamp


__all__ = ["NotificationSettingsStore"]
