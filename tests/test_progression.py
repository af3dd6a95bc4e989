import sqlite3

import pytest

from coffeetime.core.progression import (
    LEVEL_KEY,
    SELECTED_REWARD_KEY,
    XP_KEY,
    ProgressionState,
    ProgressionStore,
    add_xp,
    xp_progress,
    xp_to_next_level,
)
from coffeetime.data.storage import Storage


def make_store(tmp_path) -> tuple[Storage, ProgressionStore]:
    storage = Storage(tmp_path / "app.db")
    storage.init_db()
    return storage, ProgressionStore(storage)


def test_level_thresholds() -> None:
    assert xp_to_next_level(1) == 100
    assert xp_to_next_level(2) == 282
    assert xp_to_next_level(3) == 519
    assert xp_to_next_level(4) == 800
    assert xp_to_next_level(9) == 2700
    with pytest.raises(ValueError):
        xp_to_next_level(0)


def test_single_level_up_without_unlock() -> None:
    result = add_xp(0, 1, 100)
    assert result.state == ProgressionState(xp=0, level=2)
    assert result.unlocked_tiers == []
    assert result.levels_gained == 1


def test_award_crossing_two_thresholds() -> None:
    result = add_xp(0, 1, 500)
    assert result.state == ProgressionState(xp=118, level=3)
    assert result.levels_gained == 2
    assert result.unlocked_tiers == []


def test_award_below_threshold_keeps_level() -> None:
    result = add_xp(40, 2, 100)
    assert result.state == ProgressionState(xp=140, level=2)
    assert not result.leveled_up


def test_unlocks_returned_in_level_order() -> None:
    # levels 4..9 need 800 + 1118 + 1469 + 1852 + 2262 + 2700
    result = add_xp(0, 4, 10201)
    assert result.state == ProgressionState(xp=0, level=10)
    assert [tier.identifier for tier in result.unlocked_tiers] == ["glass", "takeaway"]


def test_add_xp_invariants_hold() -> None:
    for start_level in (1, 2, 5, 14):
        for amount in range(0, 6000, 137):
            result = add_xp(0, start_level, amount)
            assert 0 <= result.state.xp < xp_to_next_level(result.state.level)
            assert result.state.level >= start_level


def test_negative_award_rejected() -> None:
    with pytest.raises(ValueError):
        add_xp(0, 1, -5)


def test_xp_progress_percentage() -> None:
    assert xp_progress(ProgressionState(xp=50, level=1)) == 50.0
    assert xp_progress(ProgressionState(xp=0, level=3)) == 0.0


def test_load_defaults_on_empty_store(tmp_path) -> None:
    _, store = make_store(tmp_path)
    state = store.load()
    assert state == ProgressionState(xp=0, level=1)
    assert store.selected_index == 0


def test_save_then_load_round_trip(tmp_path) -> None:
    storage, store = make_store(tmp_path)
    store.load()
    store.save(ProgressionState(xp=42, level=6))
    store.save_selection(1)

    assert storage.get_setting(XP_KEY) == "42"
    assert storage.get_setting(LEVEL_KEY) == "6"

    again = ProgressionStore(storage)
    assert again.load() == ProgressionState(xp=42, level=6)
    assert again.selected_index == 1


def test_selection_above_level_falls_back_to_first_reward(tmp_path) -> None:
    storage, store = make_store(tmp_path)
    store.save(ProgressionState(xp=0, level=3))
    storage.set_setting(SELECTED_REWARD_KEY, "2")

    again = ProgressionStore(storage)
    again.load()
    assert again.selected_index == 0


def test_corrupt_keys_default_individually(tmp_path) -> None:
    storage, store = make_store(tmp_path)
    storage.set_setting(XP_KEY, "lots")
    storage.set_setting(LEVEL_KEY, "7")
    storage.set_setting(SELECTED_REWARD_KEY, "99")

    state = store.load()
    assert state == ProgressionState(xp=0, level=7)
    assert store.selected_index == 0


def test_non_positive_level_defaults_to_one(tmp_path) -> None:
    storage, store = make_store(tmp_path)
    storage.set_setting(LEVEL_KEY, "0")
    storage.set_setting(XP_KEY, "-3")

    assert store.load() == ProgressionState(xp=0, level=1)


class FlakyBackend:
    def __init__(self, values: dict[str, str], unreadable: set[str] = frozenset(), read_only: bool = False) -> None:
        self.values = dict(values)
        self.unreadable = unreadable
        self.read_only = read_only

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        if key in self.unreadable:
            raise sqlite3.OperationalError("disk I/O error")
        return self.values.get(key, default)

    def set_setting(self, key: str, value: str) -> None:
        if self.read_only:
            raise sqlite3.OperationalError("attempt to write a readonly database")
        self.values[key] = value


def test_read_failure_defaults_only_that_key() -> None:
    backend = FlakyBackend(
        {XP_KEY: "25", LEVEL_KEY: "6", SELECTED_REWARD_KEY: "1"},
        unreadable={XP_KEY},
    )
    store = ProgressionStore(backend)

    assert store.load() == ProgressionState(xp=0, level=6)
    assert store.selected_index == 1


def test_write_failure_keeps_in_memory_state() -> None:
    backend = FlakyBackend({}, read_only=True)
    store = ProgressionStore(backend)
    store.load()

    store.save(ProgressionState(xp=12, level=3))
    store.save_selection(0)

    assert store.state == ProgressionState(xp=12, level=3)
    assert store.selected_index == 0
    assert backend.values == {}
