from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable

import customtkinter as ctk

from simas_app.app_logger import get_logger
from simas_app.models import ReportWindow, SemesterHalf
from simas_app.services import AttendanceService
from simas_app.services.recap import format_percentage
from simas_app.ui.placeholders import EmptyState
from simas_app.ui.theme import (
    TONE_COLORS,
    VS_ACCENT,
    VS_ACCENT_HOVER,
    VS_BG,
    VS_SURFACE,
    VS_SURFACE_ALT,
    VS_TEXT,
    VS_TEXT_MUTED,
)
from simas_app.utils import MONTH_NAMES, year_options

logger = get_logger("ui.recap")

ALL_CLASSES = "All classes"
MODE_MONTHLY = "Monthly"
MODE_SEMESTER = "Semester"
TABLE_HEADERS = ("No", "NIS", "Student Name", "Class", "Present", "Sick", "Excused", "Unexcused", "%")


class RecapView(ctk.CTkFrame):
    """Monthly or semester totals per student, with a workbook export."""

    def __init__(
        self,
        master,
        attendance_service: AttendanceService,
        *,
        export_dir_provider: Callable[[], Path],
    ) -> None:
        super().__init__(master, fg_color=VS_BG)
        self._service = attendance_service
        self._export_dir_provider = export_dir_provider

        today = date.today()
        self._mode_var = ctk.StringVar(value=MODE_MONTHLY)
        self._month_var = ctk.StringVar(value=MONTH_NAMES[today.month - 1])
        self._semester_var = ctk.StringVar(
            value=(SemesterHalf.FIRST if today.month <= 6 else SemesterHalf.SECOND).label
        )
        self._year_var = ctk.StringVar(value=str(today.year))
        self._class_var = ctk.StringVar(value=ALL_CLASSES)
        self._status_var = ctk.StringVar(value="")

        self._header_font = ctk.CTkFont(size=14, weight="bold")
        self._build_layout()

    # ------------------------------------------------------------------
    # Layout construction
    # ------------------------------------------------------------------
    def _build_layout(self) -> None:
        self.grid_rowconfigure(1, weight=1)
        self.grid_columnconfigure(0, weight=1)

        toolbar = ctk.CTkFrame(self, fg_color=VS_SURFACE, corner_radius=16)
        toolbar.grid(row=0, column=0, sticky="ew", padx=24, pady=(24, 12))
        toolbar.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            toolbar,
            text="Attendance recap",
            font=ctk.CTkFont(size=26, weight="bold"),
            text_color=VS_TEXT,
        ).grid(row=0, column=0, sticky="w", padx=24, pady=(20, 0))
        ctk.CTkLabel(
            toolbar,
            text="The export writes one sheet per class, whatever class is shown here.",
            text_color=VS_TEXT_MUTED,
        ).grid(row=1, column=0, sticky="w", padx=24, pady=(0, 16))

        filters = ctk.CTkFrame(toolbar, fg_color="transparent")
        filters.grid(row=0, column=1, rowspan=2, sticky="e", padx=24, pady=16)

        menu_style = dict(
            fg_color=VS_SURFACE_ALT,
            button_color=VS_ACCENT,
            button_hover_color=VS_ACCENT_HOVER,
            dropdown_fg_color=VS_SURFACE,
            dropdown_hover_color=VS_ACCENT,
            command=lambda *_: self.refresh(),
        )

        ctk.CTkSegmentedButton(
            filters,
            values=[MODE_MONTHLY, MODE_SEMESTER],
            variable=self._mode_var,
            command=lambda *_: self._handle_mode_change(),
            selected_color=VS_ACCENT,
            selected_hover_color=VS_ACCENT_HOVER,
        ).grid(row=0, column=0, padx=(0, 8))

        self._class_menu = ctk.CTkOptionMenu(filters, variable=self._class_var, values=[ALL_CLASSES], **menu_style)
        self._class_menu.grid(row=0, column=1, padx=4)

        self._month_menu = ctk.CTkOptionMenu(filters, variable=self._month_var, values=list(MONTH_NAMES), **menu_style)
        self._semester_menu = ctk.CTkOptionMenu(
            filters,
            variable=self._semester_var,
            values=[half.label for half in SemesterHalf],
            **menu_style,
        )
        self._month_menu.grid(row=0, column=2, padx=4)
        self._semester_menu.grid(row=0, column=2, padx=4)
        self._semester_menu.grid_remove()

        ctk.CTkOptionMenu(
            filters,
            variable=self._year_var,
            values=[str(year) for year in year_options()],
            width=90,
            **menu_style,
        ).grid(row=0, column=3, padx=4)

        ctk.CTkButton(
            filters,
            text="Export Excel",
            command=self._handle_export,
            fg_color=VS_ACCENT,
            hover_color=VS_ACCENT_HOVER,
            text_color=VS_TEXT,
            font=ctk.CTkFont(size=14, weight="bold"),
        ).grid(row=0, column=4, padx=(12, 0))

        self._table = ctk.CTkScrollableFrame(self, fg_color=VS_SURFACE, corner_radius=16)
        self._table.grid(row=1, column=0, sticky="nsew", padx=24, pady=(0, 12))
        for column in range(len(TABLE_HEADERS)):
            self._table.grid_columnconfigure(column, weight=3 if column == 2 else 1)

        self._status_label = ctk.CTkLabel(self, textvariable=self._status_var, text_color=VS_TEXT_MUTED, anchor="w")
        self._status_label.grid(row=2, column=0, sticky="ew", padx=28, pady=(0, 16))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        classes = self._service.class_labels()
        self._class_menu.configure(values=[ALL_CLASSES, *classes])
        if self._class_var.get() not in (ALL_CLASSES, *classes):
            self._class_var.set(ALL_CLASSES)
        self._render_table()

    def current_window(self) -> ReportWindow:
        year = int(self._year_var.get())
        if self._mode_var.get() == MODE_SEMESTER:
            half = next(h for h in SemesterHalf if h.label == self._semester_var.get())
            return ReportWindow.for_semester(year, half)
        return ReportWindow.for_month(year, MONTH_NAMES.index(self._month_var.get()) + 1)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _render_table(self) -> None:
        for child in self._table.winfo_children():
            child.destroy()

        students = self._service.students
        if not students:
            EmptyState(self._table, title="No students yet", message="Import a student list first.").grid(
                row=0, column=0, columnspan=len(TABLE_HEADERS), sticky="ew", padx=12, pady=12
            )
            return

        class_filter = None if self._class_var.get() == ALL_CLASSES else self._class_var.get()
        rows = self._service.recap(self.current_window(), class_filter)
        by_id = {student.id: student for student in students}

        for column, header in enumerate(TABLE_HEADERS):
            ctk.CTkLabel(self._table, text=header, font=self._header_font, text_color=VS_TEXT).grid(
                row=0, column=column, sticky="w", padx=8, pady=(8, 4)
            )

        for index, row in enumerate(rows, start=1):
            student = by_id[row.student_id]
            values = (
                index,
                student.external_id,
                student.display_name,
                student.class_label or "-",
                row.present,
                row.sick,
                row.excused,
                row.unexcused,
                format_percentage(row),
            )
            background = VS_SURFACE_ALT if index % 2 else VS_SURFACE
            for column, value in enumerate(values):
                ctk.CTkLabel(
                    self._table,
                    text=str(value),
                    text_color=VS_TEXT if column != 8 else VS_ACCENT_HOVER,
                    fg_color=background,
                    anchor="w",
                ).grid(row=index, column=column, sticky="ew", padx=0, pady=0, ipadx=8)

        self._set_status(f"{len(rows)} students · {self.current_window().label()}")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def _handle_mode_change(self) -> None:
        if self._mode_var.get() == MODE_SEMESTER:
            self._month_menu.grid_remove()
            self._semester_menu.grid()
        else:
            self._semester_menu.grid_remove()
            self._month_menu.grid()
        self.refresh()

    def _handle_export(self) -> None:
        window = self.current_window()
        try:
            path = self._service.export_recap(window, self._export_dir_provider())
        except OSError as exc:
            logger.warning("Recap export failed: %s", exc)
            self._set_status(f"Failed to export recap: {exc}", tone="warning")
            return
        self._set_status(f"Exported {window.label()} recap to {path}.", tone="success")

    def _set_status(self, message: str, tone: str = "info") -> None:
        self._status_var.set(message)
        self._status_label.configure(text_color=TONE_COLORS.get(tone, VS_TEXT_MUTED))
