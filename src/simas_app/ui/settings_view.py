from __future__ import annotations

from pathlib import Path
from tkinter import StringVar
from typing import Any, Callable

import customtkinter as ctk
from customtkinter import filedialog

from simas_app.config.user_settings_store import APPEARANCE_MODES, DEFAULT_SETTINGS, UserSettingsStore
from simas_app.ui.theme import (
    TONE_COLORS,
    VS_ACCENT,
    VS_ACCENT_HOVER,
    VS_BG,
    VS_BORDER,
    VS_DIVIDER,
    VS_SURFACE,
    VS_SURFACE_ALT,
    VS_TEXT,
    VS_TEXT_MUTED,
)


class SettingsView(ctk.CTkFrame):
    """Interactive settings form backed by the UserSettingsStore."""

    def __init__(
        self,
        master: Any,
        *,
        store: UserSettingsStore,
        on_settings_saved: Callable[[dict[str, Any]], None] | None = None,
    ) -> None:
        super().__init__(master, fg_color=VS_BG)
        self._store = store
        self._on_settings_saved = on_settings_saved

        self._app_data_dir_var = StringVar()
        self._export_dir_var = StringVar()
        self._appearance_var = StringVar()

        self._status_label: ctk.CTkLabel | None = None

        self._build_layout()
        self.refresh()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Reload the form inputs from the underlying store."""

        data = self._store.data
        self._app_data_dir_var.set(str(data.get("app_data_dir", DEFAULT_SETTINGS["app_data_dir"])))
        self._export_dir_var.set(str(data.get("export_dir", DEFAULT_SETTINGS["export_dir"])))
        self._appearance_var.set(str(data.get("appearance_mode", DEFAULT_SETTINGS["appearance_mode"])))
        self._set_status("")

    # ------------------------------------------------------------------
    # Layout helpers
    # ------------------------------------------------------------------
    def _build_layout(self) -> None:
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        container = ctk.CTkFrame(self, fg_color=VS_SURFACE, corner_radius=18)
        container.grid(row=0, column=0, padx=24, pady=24, sticky="nsew")
        container.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            container,
            text="Application settings",
            font=ctk.CTkFont(size=28, weight="bold"),
            text_color=VS_TEXT,
        ).grid(row=0, column=0, columnspan=2, sticky="w", padx=28, pady=(28, 8))

        ctk.CTkLabel(
            container,
            text=(
                "Choose where attendance data and exported workbooks are stored, and how the app looks. "
                "Changes apply after saving."
            ),
            justify="left",
            wraplength=640,
            text_color=VS_TEXT_MUTED,
        ).grid(row=1, column=0, columnspan=2, sticky="w", padx=28, pady=(0, 20))

        row_index = self._build_directory_field(
            container,
            row=2,
            label="App data directory",
            variable=self._app_data_dir_var,
            helper="Holds the attendance database for every profile. Choose a location with write permissions.",
        )
        row_index = self._build_directory_field(
            container,
            row=row_index,
            label="Export directory",
            variable=self._export_dir_var,
            helper="Recap workbooks are written here.",
        )
        row_index = self._build_appearance_field(container, row=row_index)

        buttons_row = ctk.CTkFrame(container, fg_color=VS_SURFACE)
        buttons_row.grid(row=row_index, column=0, columnspan=2, sticky="ew", padx=28, pady=(12, 24))
        buttons_row.grid_columnconfigure(0, weight=1)

        ctk.CTkButton(
            buttons_row,
            text="Reset to defaults",
            width=160,
            text_color=VS_TEXT,
            fg_color=VS_SURFACE_ALT,
            hover_color=VS_DIVIDER,
            command=self._handle_reset,
        ).grid(row=0, column=1, padx=(0, 8))

        ctk.CTkButton(
            buttons_row,
            text="Save changes",
            width=180,
            text_color=VS_TEXT,
            fg_color=VS_ACCENT,
            hover_color=VS_ACCENT_HOVER,
            command=self._handle_save,
        ).grid(row=0, column=2)

        self._status_label = ctk.CTkLabel(
            container,
            text="",
            text_color=VS_TEXT_MUTED,
            wraplength=640,
            justify="left",
        )
        self._status_label.grid(row=row_index + 1, column=0, columnspan=2, sticky="w", padx=28, pady=(0, 12))

    def _build_directory_field(
        self,
        parent: ctk.CTkFrame,
        *,
        row: int,
        label: str,
        variable: StringVar,
        helper: str,
    ) -> int:
        ctk.CTkLabel(parent, text=label, text_color=VS_TEXT, font=ctk.CTkFont(size=18)).grid(
            row=row, column=0, sticky="w", padx=28, pady=(0, 6)
        )

        field_container = ctk.CTkFrame(parent, fg_color=VS_SURFACE)
        field_container.grid(row=row, column=1, sticky="w", padx=(0, 28), pady=(0, 6))

        ctk.CTkEntry(
            field_container,
            textvariable=variable,
            fg_color=VS_BG,
            border_color=VS_BORDER,
            text_color=VS_TEXT,
            width=480,
        ).grid(row=0, column=0, sticky="w", padx=(0, 12))

        ctk.CTkButton(
            field_container,
            text="Browse",
            width=100,
            text_color=VS_TEXT,
            fg_color=VS_SURFACE_ALT,
            hover_color=VS_DIVIDER,
            command=lambda: self._choose_directory(variable, title=f"Select {label.lower()}"),
        ).grid(row=0, column=1)

        ctk.CTkLabel(
            parent,
            text=helper,
            text_color=VS_TEXT_MUTED,
            wraplength=540,
            font=ctk.CTkFont(size=14),
            justify="left",
        ).grid(row=row + 1, column=0, columnspan=2, sticky="w", padx=28, pady=(0, 14))
        return row + 2

    def _build_appearance_field(self, parent: ctk.CTkFrame, *, row: int) -> int:
        ctk.CTkLabel(parent, text="Appearance", text_color=VS_TEXT, font=ctk.CTkFont(size=18)).grid(
            row=row, column=0, sticky="w", padx=28, pady=(0, 14)
        )
        ctk.CTkOptionMenu(
            parent,
            variable=self._appearance_var,
            values=list(APPEARANCE_MODES),
            fg_color=VS_SURFACE_ALT,
            button_color=VS_ACCENT,
            button_hover_color=VS_ACCENT_HOVER,
        ).grid(row=row, column=1, sticky="w", padx=(0, 28), pady=(0, 14))
        return row + 1

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def _handle_reset(self) -> None:
        self._app_data_dir_var.set(str(DEFAULT_SETTINGS["app_data_dir"]))
        self._export_dir_var.set(str(DEFAULT_SETTINGS["export_dir"]))
        self._appearance_var.set(str(DEFAULT_SETTINGS["appearance_mode"]))
        self._set_status("Fields reset. Save to persist the changes.", tone="info")

    def _handle_save(self) -> None:
        errors: list[str] = []
        app_data_dir = self._validate_directory(self._app_data_dir_var.get(), "App data directory", errors)
        export_dir = self._validate_directory(self._export_dir_var.get(), "Export directory", errors)

        if errors:
            self._set_status("\n".join(errors), tone="warning")
            return

        updated = self._store.update(
            app_data_dir=str(app_data_dir),
            export_dir=str(export_dir),
            appearance_mode=self._appearance_var.get(),
        )
        self.refresh()
        self._set_status("Settings saved successfully.", tone="success")

        if self._on_settings_saved is not None:
            self._on_settings_saved(updated)

    @staticmethod
    def _validate_directory(raw: str, field_name: str, errors: list[str]) -> Path | None:
        value = raw.strip()
        if not value:
            errors.append(f"{field_name} is required.")
            return None
        candidate = Path(value).expanduser()
        try:
            candidate.mkdir(parents=True, exist_ok=True)
        except OSError:
            errors.append(f"Unable to create or access the selected {field_name.lower()}.")
            return None
        return candidate

    def _choose_directory(self, variable: StringVar, *, title: str) -> None:
        selected = filedialog.askdirectory(title=title, initialdir=variable.get().strip() or None)
        if selected:
            variable.set(str(Path(selected).expanduser()))

    def _set_status(self, message: str, *, tone: str = "info") -> None:
        if self._status_label is None:
            return
        self._status_label.configure(text=message, text_color=TONE_COLORS.get(tone, VS_TEXT_MUTED))
