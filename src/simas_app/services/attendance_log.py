from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Iterable

from simas_app.models import AttendanceEvent, AttendanceStatus
from simas_app.utils import coerce_date


class InvalidStatusError(ValueError):
    """Raised when a status outside the four attendance categories is recorded."""


def record_status(
    events: list[AttendanceEvent],
    student_id: str,
    day: date | str,
    status: AttendanceStatus | str,
) -> list[AttendanceEvent]:
    """Return a new event list with ``status`` set for the student on ``day``.

    An existing event for the pair keeps its id and position; otherwise a new
    event is appended. The input list is left untouched.
    """

    resolved = AttendanceStatus.coerce(status)
    if resolved is None:
        raise InvalidStatusError(f"Unknown attendance status: {status!r}")
    target_day = coerce_date(day)

    updated = list(events)
    for index, event in enumerate(updated):
        if event.student_id == student_id and event.date == target_day:
            updated[index] = replace(event, status=resolved)
            return updated

    updated.append(AttendanceEvent(student_id=student_id, date=target_day, status=resolved))
    return updated


def statuses_on(events: Iterable[AttendanceEvent], day: date | str) -> dict[str, Any]:
    target_day = coerce_date(day)
    return {event.student_id: event.status for event in events if event.date == target_day}


def daily_summary(events: Iterable[AttendanceEvent], day: date | str) -> dict[AttendanceStatus, int]:
    summary = {status: 0 for status in AttendanceStatus}
    for status in statuses_on(events, day).values():
        if isinstance(status, AttendanceStatus):
            summary[status] += 1
    return summary
