from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from simas_app.models import AggregateRow, AttendanceEvent, AttendanceStatus, ReportWindow, Student

EXPORT_HEADERS: tuple[str, ...] = (
    "No",
    "NIS",
    "Student Name",
    "Class",
    "Present",
    "Sick",
    "Excused",
    "Unexcused",
    "Attendance (%)",
)

# Excel rejects sheet titles longer than 31 characters or containing []:*?/\
SHEET_NAME_LIMIT = 31
_RESERVED_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")


@dataclass(slots=True)
class ExportSheet:
    title: str
    class_label: str
    rows: list[list[object]] = field(default_factory=list)

    @property
    def headers(self) -> tuple[str, ...]:
        return EXPORT_HEADERS


def aggregate(
    students: Sequence[Student],
    events: Iterable[AttendanceEvent],
    window: ReportWindow,
    class_filter: str | None = None,
) -> list[AggregateRow]:
    """Count each student's statuses inside ``window``, in roster order."""

    selected = [
        student for student in students if class_filter is None or student.class_label == class_filter
    ]
    rows = {student.id: AggregateRow(student_id=student.id) for student in selected}

    for event in events:
        row = rows.get(event.student_id)
        if row is None or not window.contains(event.date):
            continue
        if not isinstance(event.status, AttendanceStatus):
            continue
        row.add(event.status)

    return [rows[student.id] for student in selected]


def format_percentage(row: AggregateRow) -> str:
    return f"{row.present / max(row.total, 1) * 100:.1f}%"


def sheet_name_for(class_label: str, taken: Iterable[str] = ()) -> str:
    base = _RESERVED_SHEET_CHARS.sub("_", f"Class {class_label}".strip())
    base = base.strip("'")[:SHEET_NAME_LIMIT] or "Class"

    existing = {name.lower() for name in taken}
    candidate = base
    counter = 2
    while candidate.lower() in existing:
        suffix = f" ({counter})"
        candidate = base[: SHEET_NAME_LIMIT - len(suffix)] + suffix
        counter += 1
    return candidate


def format_for_export(rows: Iterable[AggregateRow], students: Sequence[Student]) -> dict[str, ExportSheet]:
    """Partition aggregate rows into one export sheet per class label."""

    by_id = {student.id: student for student in students}
    grouped: dict[str, list[tuple[AggregateRow, Student]]] = {}
    for row in rows:
        student = by_id.get(row.student_id)
        if student is None:
            continue
        grouped.setdefault(student.class_label, []).append((row, student))

    sheets: dict[str, ExportSheet] = {}
    for class_label in sorted(grouped):
        sheet = ExportSheet(
            title=sheet_name_for(class_label, (existing.title for existing in sheets.values())),
            class_label=class_label,
        )
        for index, (row, student) in enumerate(grouped[class_label], start=1):
            sheet.rows.append(
                [
                    index,
                    student.external_id or "-",
                    student.display_name or "Unknown",
                    student.class_label or "-",
                    row.present,
                    row.sick,
                    row.excused,
                    row.unexcused,
                    format_percentage(row),
                ]
            )
        sheets[class_label] = sheet

    return sheets
