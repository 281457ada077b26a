from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    SICK = "sick"
    EXCUSED = "excused"
    UNEXCUSED = "unexcused"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @classmethod
    def coerce(cls, value: Any) -> Optional["AttendanceStatus"]:
        """Return the matching status for a value or label, or None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        candidate = value.strip().lower()
        for status in cls:
            if candidate in (status.value, status.label.lower()):
                return status
        return None


STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.SICK: "Sick",
    AttendanceStatus.EXCUSED: "Excused",
    AttendanceStatus.UNEXCUSED: "Unexcused",
}


def new_identifier() -> str:
    return str(uuid.uuid4())


@dataclass(slots=True)
class Student:
    external_id: str
    display_name: str
    class_label: str = ""
    id: str = field(default_factory=new_identifier)

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "external_id": self.external_id,
            "display_name": self.display_name,
            "class_label": self.class_label,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Student":
        return cls(
            id=str(payload.get("id") or new_identifier()),
            external_id=str(payload.get("external_id", "")),
            display_name=str(payload.get("display_name", "")),
            class_label=str(payload.get("class_label", "")),
        )


@dataclass(slots=True)
class AttendanceEvent:
    student_id: str
    date: date
    # Loaded blobs may carry values this version does not know; they are kept
    # as raw strings and ignored when counting.
    status: AttendanceStatus | str
    id: str = field(default_factory=new_identifier)

    def to_dict(self) -> dict[str, str]:
        status = self.status.value if isinstance(self.status, AttendanceStatus) else str(self.status)
        return {
            "id": self.id,
            "student_id": self.student_id,
            "date": self.date.isoformat(),
            "status": status,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "AttendanceEvent":
        raw_status = payload.get("status", "")
        return cls(
            id=str(payload.get("id") or new_identifier()),
            student_id=str(payload["student_id"]),
            date=date.fromisoformat(str(payload["date"])[:10]),
            status=AttendanceStatus.coerce(raw_status) or str(raw_status),
        )


@dataclass(slots=True)
class AggregateRow:
    student_id: str
    present: int = 0
    sick: int = 0
    excused: int = 0
    unexcused: int = 0

    @property
    def total(self) -> int:
        return self.present + self.sick + self.excused + self.unexcused

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return self.present / self.total * 100

    def count_for(self, status: AttendanceStatus) -> int:
        return getattr(self, _COUNT_FIELDS[status])

    def add(self, status: AttendanceStatus) -> None:
        name = _COUNT_FIELDS[status]
        setattr(self, name, getattr(self, name) + 1)


_COUNT_FIELDS = {
    AttendanceStatus.PRESENT: "present",
    AttendanceStatus.SICK: "sick",
    AttendanceStatus.EXCUSED: "excused",
    AttendanceStatus.UNEXCUSED: "unexcused",
}


@dataclass(slots=True)
class AppState:
    students: list[Student] = field(default_factory=list)
    events: list[AttendanceEvent] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[dict[str, str]]]:
        return {
            "students": [student.to_dict() for student in self.students],
            "events": [event.to_dict() for event in self.events],
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "AppState":
        return cls(
            students=[Student.from_dict(item) for item in payload.get("students") or []],
            events=[AttendanceEvent.from_dict(item) for item in payload.get("events") or []],
        )


GUEST_USER_ID = "guest_local_user"


@dataclass(slots=True, frozen=True)
class UserProfile:
    id: str
    name: str
    email: str = ""

    @property
    def is_guest(self) -> bool:
        return self.id == GUEST_USER_ID

    @property
    def mode_label(self) -> str:
        return "Local (guest)" if self.is_guest else "Local profile"


GUEST_PROFILE = UserProfile(id=GUEST_USER_ID, name="Offline User", email="offline@local")
