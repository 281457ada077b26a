from __future__ import annotations

from typing import Callable

import customtkinter as ctk

from simas_app.ui.theme import VS_ACCENT, VS_ACCENT_HOVER, VS_SURFACE, VS_TEXT, VS_TEXT_MUTED


class EmptyState(ctk.CTkFrame):
    """Centered message shown while a view has nothing to display."""

    def __init__(
        self,
        master,
        *,
        title: str,
        message: str = "",
        action_label: str | None = None,
        on_action: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(master, fg_color=VS_SURFACE, corner_radius=14)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self,
            text=title,
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=VS_TEXT,
        ).grid(row=0, column=0, padx=24, pady=(40, 8))

        if message:
            ctk.CTkLabel(
                self,
                text=message,
                text_color=VS_TEXT_MUTED,
                wraplength=520,
                justify="center",
            ).grid(row=1, column=0, padx=24, pady=(0, 12))

        if action_label and on_action is not None:
            ctk.CTkButton(
                self,
                text=action_label,
                command=on_action,
                fg_color=VS_ACCENT,
                hover_color=VS_ACCENT_HOVER,
                text_color=VS_TEXT,
            ).grid(row=2, column=0, padx=24, pady=(0, 40))
