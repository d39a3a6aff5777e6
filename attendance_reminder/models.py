"""Dataclasses representing the attendance reminder domain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(slots=True, frozen=True)
class Employee:
    id: int
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(slots=True)
class NotificationSettings:
    email: Optional[str] = None
    method: Optional[str] = None
    enabled: bool = False
    last_sent: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"email": self.email}
        if self.method is not None:
            data["method"] = self.method
        data["enabled"] = self.enabled
        data["lastSent"] = self.last_sent
        return data


@dataclass(slots=True)
class AttendanceSubmission:
    date: str
    records: List[Any]


@dataclass(slots=True)
class DispatchResult:
    """Outcome of one run of the reminder email flow."""

    sent: bool
    is_test: bool = False
    status: Optional[int] = None
    text: Optional[str] = None


DEFAULT_ROSTER: tuple[Employee, ...] = (
    Employee(id=1, name="John Smith"),
    Employee(id=2, name="Sarah Johnson"),
    Employee(id=3, name="Mike Davis"),
)


__all__ = [
    "Employee",
    "NotificationSettings",
    "AttendanceSubmission",
    "DispatchResult",
    "DEFAULT_ROSTER",
]
