"""Domain errors raised by the attendance reminder service."""

from __future__ import annotations


class AttendanceReminderError(RuntimeError):
    """Base class for errors the HTTP surface maps to JSON responses."""

    status_code = 500


class ValidationError(AttendanceReminderError):
    """Raised when request input is missing or malformed."""

    status_code = 400


class ConfigurationError(AttendanceReminderError):
    """Raised when notifications are used before they are configured."""

    status_code = 400


class DispatchError(AttendanceReminderError):
    """Raised when the email transport fails to deliver a reminder."""

    def __init__(self, message: str, cause: BaseException) -> None:
        super().__init__(f"{message}: {cause}")
        self.cause = cause


__all__ = [
    "AttendanceReminderError",
    "ValidationError",
    "ConfigurationError",
    "DispatchError",
]
