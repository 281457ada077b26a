from __future__ import annotations

from datetime import date, timedelta

import customtkinter as ctk

from simas_app.app_logger import get_logger
from simas_app.models import AttendanceStatus, Student
from simas_app.services import AttendanceService, InvalidStatusError, UnknownStudentError
from simas_app.services.roster import students_in_class
from simas_app.ui.placeholders import EmptyState
from simas_app.ui.theme import (
    STATUS_COLORS,
    TONE_COLORS,
    VS_ACCENT,
    VS_ACCENT_HOVER,
    VS_BG,
    VS_BORDER,
    VS_CARD,
    VS_DIVIDER,
    VS_SURFACE,
    VS_SURFACE_ALT,
    VS_TEXT,
    VS_TEXT_MUTED,
)
from simas_app.utils import InvalidDate, coerce_date, format_long_date

logger = get_logger("ui.daily")

STATUS_ORDER: tuple[AttendanceStatus, ...] = tuple(AttendanceStatus)


class DailyAttendanceView(ctk.CTkFrame):
    """Record one status per student for the selected day, grouped by class."""

    def __init__(self, master, attendance_service: AttendanceService, *, on_open_roster=None) -> None:
        super().__init__(master, fg_color=VS_BG)
        self._service = attendance_service
        self._on_open_roster = on_open_roster

        self._selected_day = date.today()
        self._date_var = ctk.StringVar(value=self._selected_day.isoformat())
        self._status_var = ctk.StringVar(value="")
        self._summary_labels: dict[AttendanceStatus, ctk.CTkLabel] = {}
        self._row_selectors: dict[str, ctk.CTkSegmentedButton] = {}

        self._build_layout()

    # ------------------------------------------------------------------
    # Layout construction
    # ------------------------------------------------------------------
    def _build_layout(self) -> None:
        self.grid_rowconfigure(2, weight=1)
        self.grid_columnconfigure(0, weight=1)

        header = ctk.CTkFrame(self, fg_color=VS_SURFACE, corner_radius=16)
        header.grid(row=0, column=0, sticky="ew", padx=24, pady=(24, 12))
        header.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            header,
            text="Daily attendance",
            font=ctk.CTkFont(size=26, weight="bold"),
            text_color=VS_TEXT,
        ).grid(row=0, column=0, sticky="w", padx=24, pady=(20, 0))

        self._date_caption = ctk.CTkLabel(header, text="", text_color=VS_TEXT_MUTED)
        self._date_caption.grid(row=1, column=0, sticky="w", padx=24, pady=(0, 16))

        picker = ctk.CTkFrame(header, fg_color="transparent")
        picker.grid(row=0, column=1, rowspan=2, sticky="e", padx=24, pady=16)

        nav_button = dict(width=40, fg_color=VS_SURFACE_ALT, hover_color=VS_DIVIDER, text_color=VS_TEXT)
        ctk.CTkButton(picker, text="◀", command=lambda: self._shift_day(-1), **nav_button).grid(row=0, column=0)
        date_entry = ctk.CTkEntry(
            picker,
            textvariable=self._date_var,
            width=130,
            justify="center",
            fg_color=VS_BG,
            border_color=VS_BORDER,
            text_color=VS_TEXT,
        )
        date_entry.grid(row=0, column=1, padx=6)
        date_entry.bind("<Return>", lambda _event: self._apply_date_entry())
        date_entry.bind("<FocusOut>", lambda _event: self._apply_date_entry())
        ctk.CTkButton(picker, text="▶", command=lambda: self._shift_day(1), **nav_button).grid(row=0, column=2)
        ctk.CTkButton(
            picker,
            text="Today",
            width=80,
            command=self._go_to_today,
            fg_color=VS_ACCENT,
            hover_color=VS_ACCENT_HOVER,
            text_color=VS_TEXT,
        ).grid(row=0, column=3, padx=(8, 0))

        summary = ctk.CTkFrame(self, fg_color="transparent")
        summary.grid(row=1, column=0, sticky="ew", padx=24)
        for column, status in enumerate(STATUS_ORDER):
            summary.grid_columnconfigure(column, weight=1)
            card = ctk.CTkFrame(summary, fg_color=VS_CARD, corner_radius=12, border_width=1, border_color=VS_BORDER)
            card.grid(row=0, column=column, sticky="ew", padx=(0 if column == 0 else 6, 0))
            ctk.CTkLabel(card, text=status.label, text_color=STATUS_COLORS[status]).pack(padx=16, pady=(10, 0))
            value_label = ctk.CTkLabel(card, text="0", font=ctk.CTkFont(size=24, weight="bold"), text_color=VS_TEXT)
            value_label.pack(padx=16, pady=(0, 10))
            self._summary_labels[status] = value_label

        self._body = ctk.CTkScrollableFrame(self, fg_color=VS_SURFACE, corner_radius=16)
        self._body.grid(row=2, column=0, sticky="nsew", padx=24, pady=12)
        self._body.grid_columnconfigure(0, weight=1)

        self._status_label = ctk.CTkLabel(self, textvariable=self._status_var, text_color=VS_TEXT_MUTED, anchor="w")
        self._status_label.grid(row=3, column=0, sticky="ew", padx=28, pady=(0, 16))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        self._date_var.set(self._selected_day.isoformat())
        self._date_caption.configure(text=format_long_date(self._selected_day))
        self._render_students()
        self._refresh_summary()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _render_students(self) -> None:
        for child in self._body.winfo_children():
            child.destroy()
        self._row_selectors.clear()

        students = self._service.students
        if not students:
            EmptyState(
                self._body,
                title="No students yet",
                message="Import a student list from the Students page before recording attendance.",
                action_label="Go to Students" if self._on_open_roster else None,
                on_action=self._on_open_roster,
            ).grid(row=0, column=0, sticky="ew", padx=12, pady=12)
            return

        statuses = self._service.statuses_for(self._selected_day)
        row_index = 0
        for class_label in self._service.class_labels():
            ctk.CTkLabel(
                self._body,
                text=f"Class {class_label}" if class_label else "No class",
                font=ctk.CTkFont(size=18, weight="bold"),
                text_color=VS_TEXT,
                anchor="w",
            ).grid(row=row_index, column=0, sticky="ew", padx=12, pady=(14, 4))
            row_index += 1

            for student in students_in_class(students, class_label):
                self._render_student_row(student, statuses.get(student.id), row=row_index)
                row_index += 1

    def _render_student_row(self, student: Student, current: AttendanceStatus | None, *, row: int) -> None:
        frame = ctk.CTkFrame(self._body, fg_color=VS_SURFACE_ALT, corner_radius=10)
        frame.grid(row=row, column=0, sticky="ew", padx=12, pady=3)
        frame.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(frame, text=student.display_name, text_color=VS_TEXT, anchor="w").grid(
            row=0, column=0, sticky="w", padx=14, pady=(8, 0)
        )
        ctk.CTkLabel(frame, text=f"NIS {student.external_id}", text_color=VS_TEXT_MUTED, anchor="w").grid(
            row=1, column=0, sticky="w", padx=14, pady=(0, 8)
        )

        selector = ctk.CTkSegmentedButton(
            frame,
            values=[status.label for status in STATUS_ORDER],
            command=lambda label, sid=student.id: self._handle_status_change(sid, label),
            selected_color=VS_ACCENT,
            selected_hover_color=VS_ACCENT_HOVER,
            unselected_color=VS_SURFACE,
            text_color=VS_TEXT,
        )
        if current is not None:
            selector.set(current.label)
            selector.configure(selected_color=STATUS_COLORS[current])
        selector.grid(row=0, column=1, rowspan=2, padx=14, pady=8)
        self._row_selectors[student.id] = selector

    def _refresh_summary(self) -> None:
        for status, count in self._service.daily_summary(self._selected_day).items():
            self._summary_labels[status].configure(text=str(count))

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def _handle_status_change(self, student_id: str, label: str) -> None:
        status = AttendanceStatus.coerce(label)
        try:
            self._service.record_status(student_id, self._selected_day, status or label)
        except (InvalidStatusError, UnknownStudentError) as exc:
            logger.warning("Could not record status for %s: %s", student_id, exc)
            self._set_status("Could not record that status. Refresh the page and try again.", tone="warning")
            return

        selector = self._row_selectors.get(student_id)
        if selector is not None and status is not None:
            selector.configure(selected_color=STATUS_COLORS[status])
        self._refresh_summary()
        self._set_status(f"Saved for {self._selected_day.isoformat()}.", tone="success")

    def _shift_day(self, offset: int) -> None:
        self._select_day(self._selected_day + timedelta(days=offset))

    def _go_to_today(self) -> None:
        self._select_day(date.today())

    def _apply_date_entry(self) -> None:
        try:
            day = coerce_date(self._date_var.get())
        except InvalidDate:
            self._set_status("Enter the date as YYYY-MM-DD.", tone="warning")
            self._date_var.set(self._selected_day.isoformat())
            return
        if day != self._selected_day:
            self._select_day(day)

    def _select_day(self, day: date) -> None:
        self._selected_day = day
        self._set_status("")
        self.refresh()

    def _set_status(self, message: str, tone: str = "info") -> None:
        self._status_var.set(message)
        self._status_label.configure(text_color=TONE_COLORS.get(tone, VS_TEXT_MUTED))

