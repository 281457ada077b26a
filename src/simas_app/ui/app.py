from __future__ import annotations

import json
import os
import re
from pathlib import Path
from tkinter import TclError

import customtkinter as ctk

from simas_app.app_logger import get_logger, setup_logging
from simas_app.config import settings as settings_module
from simas_app.config.settings import APP_VERSION, refresh_settings_from_store, user_settings_store
from simas_app.data import Database, StateStore
from simas_app.models import UserProfile
from simas_app.services import AttendanceService, IdentityService
from simas_app.ui.components.collapsible_nav import CollapsibleNav
from simas_app.ui.daily_attendance_view import DailyAttendanceView
from simas_app.ui.login_view import LoginView
from simas_app.ui.navigation import DEFAULT_VIEW, NAV_ITEMS
from simas_app.ui.recap_view import RecapView
from simas_app.ui.roster_view import RosterView
from simas_app.ui.settings_view import SettingsView
from simas_app.ui.theme import VS_BG

logger = get_logger("ui.app")

WINDOW_STATE_DIR = Path.home() / ".simas"
WINDOW_STATE_FILE = WINDOW_STATE_DIR / "window_position.json"


class SimasApp:
    def __init__(self) -> None:
        settings = settings_module.settings
        setup_logging(settings.log_level)

        try:
            from ctypes import windll
            windll.shcore.SetProcessDpiAwareness(1)
        except (ImportError, AttributeError):
            pass

        ctk.set_appearance_mode(settings.appearance_mode)

        self._root = ctk.CTk()
        self._root.title(settings.app_name)
        self._root.geometry("1280x720")
        self._root.minsize(1080, 640)
        self._root.configure(fg_color=VS_BG)
        self._root.grid_rowconfigure(0, weight=1)
        self._root.grid_columnconfigure(1, weight=1)

        self._database = Database(settings.database_path)
        self._attendance_service = AttendanceService(StateStore(self._database))
        self._attendance_service.initialize()
        self._identity = IdentityService(settings.app_data_dir)

        self._login_view = LoginView(
            self._root,
            identity=self._identity,
            app_name=settings.app_name,
            app_version=APP_VERSION,
            on_signed_in=self._handle_signed_in,
        )

        self._nav = CollapsibleNav(
            self._root,
            items=NAV_ITEMS,
            on_select=self._show_view,
            on_sign_out=self._handle_sign_out,
            title=settings.app_name,
        )

        self._content = ctk.CTkFrame(self._root, corner_radius=0, fg_color=VS_BG)
        self._content.grid_rowconfigure(0, weight=1)
        self._content.grid_columnconfigure(0, weight=1)

        self._views: dict[str, ctk.CTkFrame] = {
            "daily": DailyAttendanceView(
                self._content,
                self._attendance_service,
                on_open_roster=lambda: self._navigate("roster"),
            ),
            "recap": RecapView(
                self._content,
                self._attendance_service,
                export_dir_provider=self._export_dir,
            ),
            "roster": RosterView(
                self._content,
                self._attendance_service,
                export_dir_provider=self._export_dir,
            ),
            "settings": SettingsView(
                self._content,
                store=user_settings_store,
                on_settings_saved=self._handle_settings_saved,
            ),
        }
        for view in self._views.values():
            view.grid(row=0, column=0, sticky="nsew")
            view.grid_remove()

        profile = self._identity.current()
        if profile is None:
            self._show_login()
        else:
            self._show_shell(profile)

        self._restore_window_position()
        self._root.after(0, self._maximize_window)
        self._root.protocol("WM_DELETE_WINDOW", self._on_close)

    # ------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------
    def _show_login(self) -> None:
        self._nav.grid_remove()
        self._content.grid_remove()
        self._login_view.reset()
        self._login_view.grid(row=0, column=0, columnspan=2, sticky="nsew")

    def _show_shell(self, profile: UserProfile) -> None:
        self._attendance_service.open(profile)
        self._login_view.grid_remove()
        self._nav.set_profile(profile.name, profile.mode_label)
        self._nav.grid(row=0, column=0, sticky="nsw")
        self._content.grid(row=0, column=1, sticky="nsew")
        self._navigate(DEFAULT_VIEW)

    def _navigate(self, key: str) -> None:
        self._nav.select(key)

    def _show_view(self, key: str) -> None:
        for view in self._views.values():
            view.grid_remove()
        view = self._views.get(key)
        if view is None:
            return
        view.grid()
        view.refresh()

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------
    def _handle_signed_in(self, profile: UserProfile) -> None:
        self._show_shell(profile)

    def _handle_sign_out(self) -> None:
        self._identity.sign_out()
        self._attendance_service.close()
        self._show_login()

    def _handle_settings_saved(self, _updated: dict[str, object]) -> None:
        previous_db_path = self._database.path
        settings = refresh_settings_from_store()
        ctk.set_appearance_mode(settings.appearance_mode)
        self._identity.relocate(settings.app_data_dir)

        if settings.database_path != previous_db_path:
            logger.info("Database moved from %s to %s", previous_db_path, settings.database_path)
            self._database = Database(settings.database_path)
            self._attendance_service.rebind(StateStore(self._database))

    def _export_dir(self) -> Path:
        export_dir = settings_module.settings.export_dir
        export_dir.mkdir(parents=True, exist_ok=True)
        return export_dir

    # ------------------------------------------------------------------
    # Window geometry
    # ------------------------------------------------------------------
    def _restore_window_position(self) -> None:
        """Restore window position from the last session."""
        if not WINDOW_STATE_FILE.exists():
            return
        try:
            with WINDOW_STATE_FILE.open("r", encoding="utf-8") as handle:
                position = json.load(handle)
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable window position file %s", WINDOW_STATE_FILE)
            return

        x, y = position.get("x"), position.get("y")
        if self._is_position_on_screen(x, y):
            self._root.geometry(f"{position.get('width', 1280)}x{position.get('height', 720)}+{x}+{y}")

    @staticmethod
    def _is_position_on_screen(x, y) -> bool:
        if not isinstance(x, int) or not isinstance(y, int):
            return False
        return 0 <= x < 3000 and 0 <= y < 2000

    def _on_close(self) -> None:
        """Save window position before closing."""
        matches = re.match(r"(\d+)x(\d+)\+(\d+)\+(\d+)", self._root.geometry())
        if matches:
            width, height, x, y = map(int, matches.groups())
            try:
                WINDOW_STATE_DIR.mkdir(parents=True, exist_ok=True)
                with WINDOW_STATE_FILE.open("w", encoding="utf-8") as handle:
                    json.dump({"width": width, "height": height, "x": x, "y": y}, handle)
            except OSError:
                logger.warning("Could not save window position to %s", WINDOW_STATE_FILE)

        self._root.destroy()

    def run(self) -> None:
        self._root.mainloop()

    def _maximize_window(self) -> None:
        try:
            if os.name == "nt":
                self._root.state("zoomed")
            else:
                self._root.attributes("-zoomed", True)
        except TclError:
            # Some window managers have no zoomed state
            pass
