from __future__ import annotations

from pathlib import Path

from simas_app.data import Database


def test_initialize_creates_tables(tmp_path: Path) -> None:
    db_path = tmp_path / "simas.db"
    database = Database(db_path)
    database.initialize()

    with database.connect() as connection:
        tables = {
            row[0]
            for row in connection.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            )
        }

    assert {"user_state", "schema_migrations"}.issubset(tables)


def test_initialize_applies_each_migration_once(tmp_path: Path) -> None:
    database = Database(tmp_path / "nested" / "simas.db")
    database.initialize()
    database.initialize()

    with database.connect() as connection:
        names = [row["name"] for row in connection.execute("SELECT name FROM schema_migrations")]

    assert names == ["0001_user_state.sql"]
    assert database.path.parent.is_dir()
