from __future__ import annotations

import json

from simas_app.app_logger import get_logger
from simas_app.data.database import Database
from simas_app.models import AppState

logger = get_logger("data.state_store")


class StateStore:
    """Whole-state persistence: one JSON blob per identity, overwritten on save."""

    def __init__(self, database: Database) -> None:
        self._database = database

    def initialize(self) -> None:
        self._database.initialize()

    def load(self, identity: str) -> AppState:
        with self._database.connect() as connection:
            row = connection.execute(
                "SELECT payload FROM user_state WHERE identity = ?",
                (identity,),
            ).fetchone()

        if not row:
            return AppState()

        try:
            return AppState.from_dict(json.loads(row["payload"]))
        except (ValueError, KeyError, TypeError):
            logger.exception("Stored state for %s is unreadable; starting empty", identity)
            return AppState()

    def save(self, identity: str, state: AppState) -> None:
        payload = json.dumps(state.to_dict(), ensure_ascii=False)
        with self._database.connect() as connection:
            connection.execute(
                """
                INSERT INTO user_state (identity, payload, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(identity) DO UPDATE
                   SET payload = excluded.payload,
                       updated_at = excluded.updated_at
                """,
                (identity, payload),
            )

    def clear(self, identity: str) -> None:
        with self._database.connect() as connection:
            connection.execute("DELETE FROM user_state WHERE identity = ?", (identity,))
