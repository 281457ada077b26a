from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from simas_app.app_logger import get_logger
from simas_app.data import StateStore
from simas_app.models import (
    AggregateRow,
    AppState,
    AttendanceStatus,
    ReportWindow,
    Student,
    UserProfile,
)
from simas_app.services import attendance_log, roster
from simas_app.services.recap import aggregate, format_for_export
from simas_app.services.spreadsheet import (
    TEMPLATE_FILENAME,
    read_student_file,
    recap_filename,
    write_recap_workbook,
    write_student_template,
)

logger = get_logger("services.attendance")


class NoActiveProfileError(RuntimeError):
    """Raised when roster or attendance data is used before a profile is opened."""


class UnknownStudentError(LookupError):
    """Raised when recording attendance for a student missing from the roster."""


@dataclass(slots=True, frozen=True)
class ImportResult:
    read: int
    added: int

    @property
    def skipped(self) -> int:
        return self.read - self.added


class AttendanceService:
    def __init__(self, store: StateStore) -> None:
        self._store = store
        self._profile: UserProfile | None = None
        self._state = AppState()

    def initialize(self) -> None:
        self._store.initialize()

    # ------------------------------------------------------------------
    # Profile lifecycle
    # ------------------------------------------------------------------
    @property
    def profile(self) -> UserProfile | None:
        return self._profile

    def open(self, profile: UserProfile) -> None:
        self._profile = profile
        self._state = self._store.load(profile.id)
        logger.info(
            "Loaded %d students and %d events for %s",
            len(self._state.students),
            len(self._state.events),
            profile.id,
        )

    def close(self) -> None:
        self._profile = None
        self._state = AppState()

    def rebind(self, store: StateStore) -> None:
        """Switch to another store, reloading the open profile from it."""
        self._store = store
        self.initialize()
        if self._profile is not None:
            self.open(self._profile)

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------
    @property
    def students(self) -> list[Student]:
        return list(self._state.students)

    def class_labels(self) -> list[str]:
        return roster.class_labels(self._state.students)

    def import_students(self, path: Path | str) -> ImportResult:
        self._require_profile()
        # Parsing happens first so a failure never touches the roster
        incoming = read_student_file(path)

        before = len(self._state.students)
        self._state.students = roster.merge_imported_students(self._state.students, incoming)
        result = ImportResult(read=len(incoming), added=len(self._state.students) - before)
        logger.info("Imported %d of %d students from %s", result.added, result.read, path)

        self._persist()
        return result

    def reset_roster(self) -> None:
        """Drop every student and, with them, the whole attendance log."""
        profile = self._require_profile()
        removed = len(self._state.students)
        self._state = AppState()
        self._store.clear(profile.id)
        logger.info("Roster reset for %s; removed %d students and their attendance", profile.id, removed)

    def export_template(self, directory: Path | str) -> Path:
        return write_student_template(Path(directory) / TEMPLATE_FILENAME)

    # ------------------------------------------------------------------
    # Daily attendance
    # ------------------------------------------------------------------
    def record_status(self, student_id: str, day: date | str, status: AttendanceStatus | str) -> None:
        self._require_profile()
        if not any(student.id == student_id for student in self._state.students):
            raise UnknownStudentError(student_id)

        self._state.events = attendance_log.record_status(self._state.events, student_id, day, status)
        self._persist()

    def statuses_for(self, day: date | str) -> dict[str, AttendanceStatus]:
        return {
            student_id: status
            for student_id, status in attendance_log.statuses_on(self._state.events, day).items()
            if isinstance(status, AttendanceStatus)
        }

    def daily_summary(self, day: date | str) -> dict[AttendanceStatus, int]:
        return attendance_log.daily_summary(self._state.events, day)

    # ------------------------------------------------------------------
    # Recap
    # ------------------------------------------------------------------
    def recap(self, window: ReportWindow, class_filter: str | None = None) -> list[AggregateRow]:
        return aggregate(self._state.students, self._state.events, window, class_filter)

    def export_recap(self, window: ReportWindow, directory: Path | str) -> Path:
        rows = aggregate(self._state.students, self._state.events, window)
        sheets = format_for_export(rows, self._state.students)
        return write_recap_workbook(Path(directory) / recap_filename(window), sheets)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _require_profile(self) -> UserProfile:
        if self._profile is None:
            raise NoActiveProfileError("Sign in before working with attendance data.")
        return self._profile

    def _persist(self) -> None:
        profile = self._require_profile()
        try:
            self._store.save(profile.id, self._state)
        except sqlite3.Error:
            # The in-memory state stays authoritative; the next change rewrites the blob
            logger.exception("Failed to persist state for %s", profile.id)
