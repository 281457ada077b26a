from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from simas_app.app_logger import get_logger

logger = get_logger("config.user_settings")

DEFAULT_APP_NAME = os.getenv("APP_NAME", "SIMAS Attendance")
DOCUMENTS_PATH = Path(os.path.expanduser("~")) / "Documents"
DEFAULT_POINTER_DIR = DOCUMENTS_PATH / DEFAULT_APP_NAME
DEFAULT_SETTINGS_FILENAME = "user_settings.json"
APPEARANCE_MODES: tuple[str, ...] = ("dark", "light", "system")

DEFAULT_SETTINGS: Dict[str, Any] = {
	"app_data_dir": str(DEFAULT_POINTER_DIR),
	"export_dir": str(DEFAULT_POINTER_DIR / "exports"),
	"appearance_mode": "dark",
}


@dataclass
class UserSettingsStore:
	"""Load and persist user-configurable settings in a JSON file."""

	pointer_dir: Path = field(default_factory=lambda: DEFAULT_POINTER_DIR)
	settings_filename: str = DEFAULT_SETTINGS_FILENAME
	_data: Dict[str, Any] = field(init=False, default_factory=dict)
	app_data_dir: Path = field(init=False)
	settings_file: Path = field(init=False)

	def __post_init__(self) -> None:
		self.pointer_dir.mkdir(parents=True, exist_ok=True)
		self.reload()

	# ------------------------------------------------------------------
	# Public API
	# ------------------------------------------------------------------
	@property
	def data(self) -> Dict[str, Any]:
		return dict(self._data)

	def get(self, key: str, default: Any = None) -> Any:
		return self._data.get(key, default)

	def reload(self) -> None:
		pointer_path = self.pointer_dir / self.settings_filename
		pointer_data = self._load_json(pointer_path)

		app_data_raw = pointer_data.get("app_data_dir") or str(self.pointer_dir)
		self.app_data_dir = Path(app_data_raw).expanduser()
		self.app_data_dir.mkdir(parents=True, exist_ok=True)

		self.settings_file = self.app_data_dir / self.settings_filename
		file_data = self._load_json(self.settings_file)

		combined = dict(DEFAULT_SETTINGS)
		combined["export_dir"] = str(self.app_data_dir / "exports")
		combined.update(pointer_data)
		combined.update(file_data)

		if combined.get("appearance_mode") not in APPEARANCE_MODES:
			combined["appearance_mode"] = DEFAULT_SETTINGS["appearance_mode"]

		combined["export_dir"] = str(Path(combined["export_dir"]).expanduser())
		combined["app_data_dir"] = str(self.app_data_dir)
		self._data = combined

	def update(self, **kwargs: Any) -> Dict[str, Any]:
		new_data = dict(self._data)
		app_data_dir_changed = False

		if "app_data_dir" in kwargs and kwargs["app_data_dir"]:
			new_dir = Path(kwargs.pop("app_data_dir")).expanduser()
			if new_dir != self.app_data_dir:
				app_data_dir_changed = True
			new_data["app_data_dir"] = str(new_dir)

		for key, value in kwargs.items():
			if key in DEFAULT_SETTINGS and value is not None:
				new_data[key] = value

		self._data = new_data

		if app_data_dir_changed:
			self.app_data_dir = Path(self._data["app_data_dir"]).expanduser()
			self.app_data_dir.mkdir(parents=True, exist_ok=True)
			self.settings_file = self.app_data_dir / self.settings_filename
			logger.info("App data directory moved to %s", self.app_data_dir)

		self._persist()
		return dict(self._data)

	# ------------------------------------------------------------------
	# Internal helpers
	# ------------------------------------------------------------------
	def _persist(self) -> None:
		pointer_path = self.pointer_dir / self.settings_filename

		with pointer_path.open("w", encoding="utf-8") as handle:
			json.dump({"app_data_dir": self._data["app_data_dir"]}, handle, indent=2)

		with self.settings_file.open("w", encoding="utf-8") as handle:
			json.dump(self._data, handle, indent=2)

	@staticmethod
	def _load_json(path: Path) -> Dict[str, Any]:
		if not path.exists():
			return {}
		try:
			with path.open("r", encoding="utf-8") as handle:
				payload = json.load(handle)
		except (OSError, ValueError):
			logger.warning("Ignoring unreadable settings file %s", path)
			return {}
		return payload if isinstance(payload, dict) else {}
