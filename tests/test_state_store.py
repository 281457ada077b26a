from __future__ import annotations

from datetime import date
from pathlib import Path

from simas_app.data import Database, StateStore
from simas_app.models import AppState, AttendanceEvent, AttendanceStatus, Student


def _store(tmp_path: Path) -> StateStore:
    store = StateStore(Database(tmp_path / "simas.db"))
    store.initialize()
    return store


def test_load_missing_identity_returns_empty_state(tmp_path: Path) -> None:
    state = _store(tmp_path).load("nobody")

    assert state.students == []
    assert state.events == []


def test_save_then_load_keeps_students_and_events(tmp_path: Path) -> None:
    store = _store(tmp_path)
    student = Student(external_id="101", display_name="Ana", class_label="7A")
    event = AttendanceEvent(student_id=student.id, date=date(2024, 3, 5), status=AttendanceStatus.SICK)

    store.save("profile-1", AppState(students=[student], events=[event]))
    loaded = store.load("profile-1")

    assert loaded.students == [student]
    assert loaded.events == [event]


def test_save_overwrites_previous_blob(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.save("profile-1", AppState(students=[Student(external_id="1", display_name="A")]))
    store.save("profile-1", AppState())

    assert store.load("profile-1").students == []


def test_identities_are_isolated(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.save("profile-1", AppState(students=[Student(external_id="1", display_name="A")]))

    assert store.load("profile-2").students == []


def test_clear_removes_blob(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.save("profile-1", AppState(students=[Student(external_id="1", display_name="A")]))
    store.clear("profile-1")

    assert store.load("profile-1").students == []


def test_corrupt_blob_loads_as_empty_state(tmp_path: Path) -> None:
    database = Database(tmp_path / "simas.db")
    store = StateStore(database)
    store.initialize()
    with database.connect() as connection:
        connection.execute(
            "INSERT INTO user_state (identity, payload) VALUES (?, ?)",
            ("profile-1", "{not json"),
        )

    state = store.load("profile-1")

    assert state.students == []
    assert state.events == []


def test_unknown_status_survives_round_trip(tmp_path: Path) -> None:
    database = Database(tmp_path / "simas.db")
    store = StateStore(database)
    store.initialize()
    with database.connect() as connection:
        connection.execute(
            "INSERT INTO user_state (identity, payload) VALUES (?, ?)",
            (
                "profile-1",
                '{"students": [], "events": [{"id": "e1", "student_id": "s1", '
                '"date": "2024-03-05", "status": "Late"}]}',
            ),
        )

    state = store.load("profile-1")

    assert state.events[0].status == "Late"
    assert state.events[0].to_dict()["status"] == "Late"
