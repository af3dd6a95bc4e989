from coffeetime.core.progression import ProgressionState, ProgressionStore
from coffeetime.core.session import SessionLog
from coffeetime.data.storage import Storage, open_storage


def test_init_db_creates_tables(tmp_path) -> None:
    db = tmp_path / "app.db"
    storage = Storage(db)
    storage.init_db()
    assert db.exists()


def test_set_get_setting(tmp_path) -> None:
    storage = Storage(tmp_path / "app.db")
    storage.init_db()
    storage.set_setting("pomodoro-xp", "40")
    storage.set_setting("pomodoro-xp", "55")
    assert storage.get_setting("pomodoro-xp") == "55"
    assert storage.get_setting("missing") is None
    assert storage.get_setting("missing", "x") == "x"


def test_insert_and_list_sessions(tmp_path) -> None:
    storage = Storage(tmp_path / "app.db")
    storage.init_db()
    first = storage.insert_session("2026-01-01T10:00:00", 25)
    second = storage.insert_session("2026-01-01T10:30:00", 50)

    rows = storage.list_sessions()
    assert [row.id for row in rows] == [first, second]
    assert rows[1].duration_minutes == 50
    assert rows[0].completed_at == "2026-01-01T10:00:00"


def test_list_sessions_limit_keeps_latest(tmp_path) -> None:
    storage = Storage(tmp_path / "app.db")
    storage.init_db()
    for minutes in (10, 20, 30):
        storage.insert_session("2026-01-01T10:00:00", minutes)

    rows = storage.list_sessions(limit=2)
    assert [row.duration_minutes for row in rows] == [20, 30]


def test_open_storage_replaces_unreadable_file(tmp_path) -> None:
    db = tmp_path / "coffeetime.db"
    db.write_bytes(b"\x00garbage, definitely not sqlite\xff" * 64)

    storage = open_storage(db)
    store = ProgressionStore(storage)
    session_log = SessionLog(storage)
    session_log.load()

    assert store.load() == ProgressionState(xp=0, level=1)
    assert store.selected_index == 0
    assert len(session_log) == 0
    assert (tmp_path / "coffeetime.db.corrupt").read_bytes().startswith(b"\x00garbage")

    store.save(ProgressionState(xp=30, level=2))
    assert ProgressionStore(Storage(db)).load() == ProgressionState(xp=30, level=2)


def test_open_storage_keeps_healthy_file(tmp_path) -> None:
    db = tmp_path / "coffeetime.db"
    first = open_storage(db)
    first.set_setting("pomodoro-level", "4")

    again = open_storage(db)

    assert again.get_setting("pomodoro-level") == "4"
    assert not (tmp_path / "coffeetime.db.corrupt").exists()
