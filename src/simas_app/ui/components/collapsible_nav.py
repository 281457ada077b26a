from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

import customtkinter as ctk

from simas_app.ui.theme import (
    VS_ACCENT,
    VS_ACCENT_HOVER,
    VS_BORDER,
    VS_DANGER,
    VS_SIDEBAR,
    VS_SURFACE_ALT,
    VS_TEXT,
    VS_TEXT_MUTED,
)
from simas_app.ui.utils import render_badge

ICON_SIZE: tuple[int, int] = (28, 28)
BUTTON_HEIGHT = ICON_SIZE[1] + 18


@dataclass(frozen=True)
class NavigationItem:
    key: str
    label: str
    icon_text: str
    pinned_bottom: bool = False


class CollapsibleNav(ctk.CTkFrame):
    """Sidebar with one button per view plus the signed-in profile footer."""

    def __init__(
        self,
        master,
        items: Iterable[NavigationItem],
        on_select: Callable[[str], None],
        on_sign_out: Callable[[], None],
        *,
        title: str,
        width: int = 230,
    ) -> None:
        super().__init__(
            master,
            width=width,
            corner_radius=0,
            fg_color=VS_SIDEBAR,
            border_width=1,
            border_color=VS_BORDER,
        )
        self._items = list(items)
        self._on_select = on_select
        self._is_collapsed = False
        self._expanded_width = width
        self._collapsed_width = ICON_SIZE[0] + 56
        self._title = title
        self._selection_key: str | None = None
        self._buttons: dict[str, ctk.CTkButton] = {}
        self._icons = {item.key: self._make_icon(item.icon_text) for item in self._items}

        self.grid_columnconfigure(0, weight=1)
        self.grid_propagate(False)
        self.configure(width=self._expanded_width)

        self._toggle_button = ctk.CTkButton(
            self,
            text=self._title,
            height=40,
            command=self._toggle,
            corner_radius=6,
            fg_color=VS_SURFACE_ALT,
            hover_color=VS_ACCENT_HOVER,
            text_color=VS_TEXT,
            font=ctk.CTkFont(size=20, weight="bold"),
        )
        self._toggle_button.grid(row=0, column=0, padx=12, pady=(12, 10), sticky="ew")

        button_font = ctk.CTkFont(size=16, weight="bold")
        top_items = [item for item in self._items if not item.pinned_bottom]
        bottom_items = [item for item in self._items if item.pinned_bottom]

        row_index = 1
        for item in top_items:
            self._buttons[item.key] = self._make_button(item, button_font, row=row_index, pady=4)
            row_index += 1

        self.grid_rowconfigure(row_index, weight=1)
        row_index += 1

        for item in bottom_items:
            self._buttons[item.key] = self._make_button(item, button_font, row=row_index, pady=(4, 8))
            row_index += 1

        self._profile_label = ctk.CTkLabel(
            self,
            text="",
            text_color=VS_TEXT,
            font=ctk.CTkFont(size=14, weight="bold"),
            anchor="w",
            justify="left",
        )
        self._profile_label.grid(row=row_index, column=0, padx=16, pady=(8, 0), sticky="ew")

        self._mode_label = ctk.CTkLabel(self, text="", text_color=VS_TEXT_MUTED, anchor="w")
        self._mode_label.grid(row=row_index + 1, column=0, padx=16, pady=(0, 6), sticky="ew")

        self._sign_out_button = ctk.CTkButton(
            self,
            text="Sign out",
            height=34,
            command=on_sign_out,
            fg_color="transparent",
            hover_color=VS_SURFACE_ALT,
            text_color=VS_DANGER,
            border_width=1,
            border_color=VS_BORDER,
        )
        self._sign_out_button.grid(row=row_index + 2, column=0, padx=12, pady=(0, 14), sticky="ew")

        self._apply_layout()

    @staticmethod
    def _make_icon(icon_text: str) -> ctk.CTkImage:
        badge = render_badge(icon_text, ICON_SIZE, VS_SURFACE_ALT, VS_TEXT)
        return ctk.CTkImage(light_image=badge, dark_image=badge, size=ICON_SIZE)

    def _make_button(self, item: NavigationItem, font: ctk.CTkFont, *, row: int, pady) -> ctk.CTkButton:
        button = ctk.CTkButton(
            self,
            text=item.label,
            anchor="w",
            command=lambda k=item.key: self.select(k),
            height=BUTTON_HEIGHT,
            fg_color=VS_SIDEBAR,
            hover_color=VS_SURFACE_ALT,
            text_color=VS_TEXT,
            font=font,
            border_width=1,
            border_color=VS_BORDER,
        )
        button.grid(row=row, column=0, padx=12, pady=pady, sticky="ew")
        return button

    def select(self, key: str) -> None:
        if key not in self._buttons:
            return
        if self._selection_key:
            self._buttons[self._selection_key].configure(fg_color=VS_SIDEBAR)
        self._buttons[key].configure(fg_color=VS_ACCENT)
        self._selection_key = key
        self._on_select(key)

    def set_profile(self, name: str, mode_label: str) -> None:
        self._profile_label.configure(text=name)
        self._mode_label.configure(text=mode_label)

    def _toggle(self) -> None:
        self._is_collapsed = not self._is_collapsed
        self._apply_layout()
        self.update_idletasks()

    def _apply_layout(self) -> None:
        width = self._collapsed_width if self._is_collapsed else self._expanded_width
        self.configure(width=width)
        self._toggle_button.configure(text="☰" if self._is_collapsed else self._title)

        for item in self._items:
            icon = self._icons.get(item.key)
            if self._is_collapsed:
                self._buttons[item.key].configure(
                    text="",
                    image=icon,
                    anchor="center",
                    compound="center",
                )
            else:
                self._buttons[item.key].configure(
                    text=item.label,
                    image=icon,
                    anchor="w",
                    compound="left",
                )

        if self._is_collapsed:
            self._profile_label.grid_remove()
            self._mode_label.grid_remove()
            self._sign_out_button.configure(text="⏻")
        else:
            self._profile_label.grid()
            self._mode_label.grid()
            self._sign_out_button.configure(text="Sign out")
