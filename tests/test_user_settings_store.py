from __future__ import annotations

import json
from pathlib import Path

from simas_app.config.user_settings_store import DEFAULT_SETTINGS_FILENAME, UserSettingsStore


def test_defaults_point_inside_pointer_dir(tmp_path: Path) -> None:
    store = UserSettingsStore(pointer_dir=tmp_path)

    assert store.app_data_dir == tmp_path
    assert store.get("export_dir") == str(tmp_path / "exports")
    assert store.get("appearance_mode") == "dark"


def test_update_persists_and_reloads(tmp_path: Path) -> None:
    store = UserSettingsStore(pointer_dir=tmp_path)
    store.update(appearance_mode="light", export_dir=str(tmp_path / "recaps"))

    reloaded = UserSettingsStore(pointer_dir=tmp_path)

    assert reloaded.get("appearance_mode") == "light"
    assert reloaded.get("export_dir") == str(tmp_path / "recaps")


def test_moving_app_data_dir_writes_pointer(tmp_path: Path) -> None:
    pointer_dir = tmp_path / "pointer"
    data_dir = tmp_path / "data"
    store = UserSettingsStore(pointer_dir=pointer_dir)

    store.update(app_data_dir=str(data_dir))

    pointer = json.loads((pointer_dir / DEFAULT_SETTINGS_FILENAME).read_text(encoding="utf-8"))
    assert pointer == {"app_data_dir": str(data_dir)}
    assert (data_dir / DEFAULT_SETTINGS_FILENAME).exists()
    assert UserSettingsStore(pointer_dir=pointer_dir).app_data_dir == data_dir


def test_update_ignores_unknown_keys_and_none(tmp_path: Path) -> None:
    store = UserSettingsStore(pointer_dir=tmp_path)

    updated = store.update(appearance_mode=None, chrome_path="/usr/bin/chrome")

    assert updated["appearance_mode"] == "dark"
    assert "chrome_path" not in updated


def test_invalid_values_fall_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / DEFAULT_SETTINGS_FILENAME).write_text('{"appearance_mode": "neon"}', encoding="utf-8")

    assert UserSettingsStore(pointer_dir=tmp_path).get("appearance_mode") == "dark"


def test_corrupt_settings_file_is_ignored(tmp_path: Path) -> None:
    (tmp_path / DEFAULT_SETTINGS_FILENAME).write_text("{oops", encoding="utf-8")

    assert UserSettingsStore(pointer_dir=tmp_path).get("appearance_mode") == "dark"
