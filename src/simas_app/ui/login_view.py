from __future__ import annotations

from tkinter import StringVar
from typing import Callable

import customtkinter as ctk

from simas_app.models import UserProfile
from simas_app.services import IdentityService, InvalidProfileError
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
    VS_WARNING,
)


class LoginView(ctk.CTkFrame):
    """Sign-in screen: a named local profile or the offline guest profile."""

    def __init__(
        self,
        master,
        *,
        identity: IdentityService,
        app_name: str,
        app_version: str,
        on_signed_in: Callable[[UserProfile], None],
    ) -> None:
        super().__init__(master, fg_color=VS_BG)
        self._identity = identity
        self._on_signed_in = on_signed_in

        self._name_var = StringVar()
        self._email_var = StringVar()

        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        card = ctk.CTkFrame(self, fg_color=VS_SURFACE, corner_radius=18, border_width=1, border_color=VS_BORDER)
        card.grid(row=0, column=0, padx=24, pady=24)
        card.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            card,
            text=app_name,
            font=ctk.CTkFont(size=30, weight="bold"),
            text_color=VS_TEXT,
        ).grid(row=0, column=0, padx=40, pady=(36, 4))

        ctk.CTkLabel(
            card,
            text="Student attendance management.\nSign in to get started.",
            text_color=VS_TEXT_MUTED,
            justify="center",
        ).grid(row=1, column=0, padx=40, pady=(0, 24))

        for row, (caption, variable) in enumerate(
            (("Your name", self._name_var), ("Email address", self._email_var)),
            start=2,
        ):
            # Placeholders are not rendered for entries bound to a variable
            field = ctk.CTkFrame(card, fg_color="transparent")
            field.grid(row=row, column=0, padx=40, pady=6)
            ctk.CTkLabel(field, text=caption, text_color=VS_TEXT_MUTED, anchor="w").pack(fill="x")
            ctk.CTkEntry(
                field,
                textvariable=variable,
                width=320,
                height=38,
                fg_color=VS_BG,
                border_color=VS_BORDER,
                text_color=VS_TEXT,
            ).pack()

        ctk.CTkButton(
            card,
            text="Sign in",
            width=320,
            height=40,
            command=self._handle_sign_in,
            fg_color=VS_ACCENT,
            hover_color=VS_ACCENT_HOVER,
            text_color=VS_TEXT,
            font=ctk.CTkFont(size=15, weight="bold"),
        ).grid(row=4, column=0, padx=40, pady=(12, 6))

        ctk.CTkLabel(card, text="or", text_color=VS_TEXT_MUTED).grid(row=5, column=0, pady=2)

        ctk.CTkButton(
            card,
            text="Continue as guest (offline)",
            width=320,
            height=40,
            command=self._handle_guest,
            fg_color=VS_SURFACE_ALT,
            hover_color=VS_DIVIDER,
            text_color=VS_TEXT,
        ).grid(row=6, column=0, padx=40, pady=(6, 12))

        ctk.CTkLabel(
            card,
            text="Data is stored only on this computer, separately for each profile.",
            text_color=VS_WARNING,
            wraplength=320,
            font=ctk.CTkFont(size=12),
        ).grid(row=7, column=0, padx=40, pady=(4, 4))

        self._status_label = ctk.CTkLabel(card, text="", text_color=VS_TEXT_MUTED, wraplength=320)
        self._status_label.grid(row=8, column=0, padx=40, pady=(0, 8))

        ctk.CTkLabel(
            card,
            text=f"Version {app_version}",
            text_color=VS_TEXT_MUTED,
            font=ctk.CTkFont(size=11),
        ).grid(row=9, column=0, padx=40, pady=(0, 24))

    def reset(self) -> None:
        self._name_var.set("")
        self._email_var.set("")
        self._set_status("")

    def _handle_sign_in(self) -> None:
        try:
            profile = self._identity.sign_in(self._name_var.get(), self._email_var.get())
        except InvalidProfileError as exc:
            self._set_status(str(exc), tone="warning")
            return
        self._on_signed_in(profile)

    def _handle_guest(self) -> None:
        self._on_signed_in(self._identity.sign_in_as_guest())

    def _set_status(self, message: str, tone: str = "info") -> None:
        self._status_label.configure(text=message, text_color=TONE_COLORS.get(tone, VS_TEXT_MUTED))
