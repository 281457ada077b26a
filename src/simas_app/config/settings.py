from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from simas_app import __version__
from simas_app.app_logger import get_logger
from simas_app.config.user_settings_store import UserSettingsStore

BASE_DIR = Path(__file__).resolve().parents[3]
ENV_PATH = BASE_DIR / ".env"
load_dotenv(ENV_PATH)

logger = get_logger("config.settings")

APP_NAME = os.getenv("APP_NAME", "SIMAS Attendance")
APP_VERSION = __version__
user_settings_store = UserSettingsStore()


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_data_dir: Path
    database_path: Path
    export_dir: Path
    log_level: str
    appearance_mode: str


def _build_settings() -> Settings:
    app_data_dir = user_settings_store.app_data_dir
    return Settings(
        app_name=APP_NAME,
        app_data_dir=app_data_dir,
        database_path=Path(os.getenv("DATABASE_PATH", str(app_data_dir / "simas.db"))).expanduser(),
        export_dir=Path(
            os.getenv("EXPORT_DIR") or user_settings_store.get("export_dir", str(app_data_dir / "exports"))
        ).expanduser(),
        log_level=os.getenv("SIMAS_LOG_LEVEL", "INFO").upper(),
        appearance_mode=str(user_settings_store.get("appearance_mode", "dark")),
    )


settings = _build_settings()


def refresh_settings_from_store() -> Settings:
    """Rebuild the settings object from the current user store values."""

    global settings  # noqa: PLW0603 - module-level singleton

    user_settings_store.reload()
    settings = _build_settings()
    logger.debug("Settings refreshed: %s", settings)
    return settings
