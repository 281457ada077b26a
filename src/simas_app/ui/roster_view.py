from __future__ import annotations

import tkinter.messagebox as messagebox
from pathlib import Path
from typing import Callable

import customtkinter as ctk
from customtkinter import filedialog

from simas_app.app_logger import get_logger
from simas_app.services import AttendanceService, EmptyRosterImportError, RosterImportError
from simas_app.services.roster import students_in_class
from simas_app.ui.placeholders import EmptyState
from simas_app.ui.theme import (
    TONE_COLORS,
    VS_ACCENT,
    VS_ACCENT_HOVER,
    VS_BG,
    VS_DANGER,
    VS_DANGER_HOVER,
    VS_DIVIDER,
    VS_SURFACE,
    VS_SURFACE_ALT,
    VS_TEXT,
    VS_TEXT_MUTED,
)

logger = get_logger("ui.roster")


class RosterView(ctk.CTkFrame):
    """Student list management: template download, bulk import and reset."""

    def __init__(
        self,
        master,
        attendance_service: AttendanceService,
        *,
        export_dir_provider: Callable[[], Path],
        on_roster_changed: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(master, fg_color=VS_BG)
        self._service = attendance_service
        self._export_dir_provider = export_dir_provider
        self._on_roster_changed = on_roster_changed
        self._status_var = ctk.StringVar(value="")

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
            text="Students",
            font=ctk.CTkFont(size=26, weight="bold"),
            text_color=VS_TEXT,
        ).grid(row=0, column=0, sticky="w", padx=24, pady=(20, 0))

        self._count_label = ctk.CTkLabel(toolbar, text="", text_color=VS_TEXT_MUTED)
        self._count_label.grid(row=1, column=0, sticky="w", padx=24, pady=(0, 16))

        actions = ctk.CTkFrame(toolbar, fg_color="transparent")
        actions.grid(row=0, column=1, rowspan=2, sticky="e", padx=24, pady=16)

        ctk.CTkButton(
            actions,
            text="Download template",
            command=self._handle_template,
            fg_color=VS_SURFACE_ALT,
            hover_color=VS_DIVIDER,
            text_color=VS_TEXT,
        ).grid(row=0, column=0, padx=4)
        ctk.CTkButton(
            actions,
            text="Import Excel / CSV",
            command=self._handle_import,
            fg_color=VS_ACCENT,
            hover_color=VS_ACCENT_HOVER,
            text_color=VS_TEXT,
        ).grid(row=0, column=1, padx=4)
        ctk.CTkButton(
            actions,
            text="Clear data",
            command=self._handle_reset,
            fg_color=VS_DANGER,
            hover_color=VS_DANGER_HOVER,
            text_color=VS_TEXT,
        ).grid(row=0, column=2, padx=(4, 0))

        self._list = ctk.CTkScrollableFrame(self, fg_color=VS_SURFACE, corner_radius=16)
        self._list.grid(row=1, column=0, sticky="nsew", padx=24, pady=(0, 12))
        self._list.grid_columnconfigure((0, 1, 2), weight=1)

        self._status_label = ctk.CTkLabel(self, textvariable=self._status_var, text_color=VS_TEXT_MUTED, anchor="w")
        self._status_label.grid(row=2, column=0, sticky="ew", padx=28, pady=(0, 16))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        for child in self._list.winfo_children():
            child.destroy()

        students = self._service.students
        classes = self._service.class_labels()
        self._count_label.configure(text=f"{len(students)} students in {len(classes)} classes")

        if not students:
            EmptyState(
                self._list,
                title="No students yet",
                message=(
                    "Download the template, fill in NIS, Name and Class (one sheet or several), "
                    "then import it here."
                ),
            ).grid(row=0, column=0, columnspan=3, sticky="ew", padx=12, pady=12)
            return

        row_index = 0
        for class_label in classes:
            ctk.CTkLabel(
                self._list,
                text=f"Class {class_label}" if class_label else "No class",
                font=ctk.CTkFont(size=18, weight="bold"),
                text_color=VS_TEXT,
                anchor="w",
            ).grid(row=row_index, column=0, columnspan=3, sticky="ew", padx=12, pady=(14, 4))
            row_index += 1
            for student in students_in_class(students, class_label):
                for column, value in enumerate((student.external_id, student.display_name, student.class_label)):
                    ctk.CTkLabel(self._list, text=value, text_color=VS_TEXT, anchor="w").grid(
                        row=row_index, column=column, sticky="ew", padx=12, pady=1
                    )
                row_index += 1

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def _handle_template(self) -> None:
        directory = filedialog.askdirectory(
            title="Save student template to",
            initialdir=str(self._export_dir_provider()),
        )
        if not directory:
            return
        try:
            path = self._service.export_template(directory)
        except OSError as exc:
            self._set_status(f"Failed to save template: {exc}", tone="warning")
            return
        self._set_status(f"Template saved to {path}.", tone="success")

    def _handle_import(self) -> None:
        file_name = filedialog.askopenfilename(
            title="Import student list",
            filetypes=[("Excel Workbook", "*.xlsx"), ("CSV files", "*.csv"), ("All files", "*.*")],
        )
        if not file_name:
            return

        try:
            result = self._service.import_students(file_name)
        except EmptyRosterImportError as exc:
            self._set_status(str(exc), tone="warning")
            return
        except RosterImportError as exc:
            self._set_status(f"{exc} Check that it is an Excel or CSV file.", tone="warning")
            return

        message = f"Imported {result.added} new students."
        if result.skipped:
            message += f" {result.skipped} already on the list were skipped."
        self._set_status(message, tone="success")
        self._notify_changed()

    def _handle_reset(self) -> None:
        confirmed = messagebox.askyesno(
            title="Clear data",
            message="Remove every student and all recorded attendance for this profile?",
        )
        if not confirmed:
            return
        self._service.reset_roster()
        logger.info("Roster cleared from the Students page")
        self._set_status("All students and attendance were removed.", tone="success")
        self._notify_changed()

    def _notify_changed(self) -> None:
        self.refresh()
        if self._on_roster_changed is not None:
            self._on_roster_changed()

    def _set_status(self, message: str, tone: str = "info") -> None:
        self._status_var.set(message)
        self._status_label.configure(text_color=TONE_COLORS.get(tone, VS_TEXT_MUTED))
