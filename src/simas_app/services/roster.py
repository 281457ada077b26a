from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from simas_app.models import Student


def merge_imported_students(existing: Sequence[Student], incoming: Iterable[Student]) -> list[Student]:
    """Append incoming students whose NIS is not on the roster yet.

    Rows without a name or NIS are dropped first. NIS values are compared and
    stored without surrounding whitespace. Incoming order is kept, and a NIS
    repeated inside ``incoming`` is only taken once.
    """

    known = {student.external_id.strip() for student in existing}
    merged = list(existing)

    for student in incoming:
        external_id = student.external_id.strip()
        if not external_id or not student.display_name.strip():
            continue
        if external_id in known:
            continue
        known.add(external_id)
        merged.append(replace(student, external_id=external_id))

    return merged


def class_labels(students: Iterable[Student]) -> list[str]:
    return sorted({student.class_label for student in students})


def students_in_class(students: Iterable[Student], class_label: str | None) -> list[Student]:
    return [student for student in students if class_label is None or student.class_label == class_label]
