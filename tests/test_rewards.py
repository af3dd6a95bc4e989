from coffeetime.core.progression import ProgressionState, ProgressionStore
from coffeetime.core.rewards import (
    REWARD_CATALOG,
    SelectionGuard,
    is_unlocked,
    tier_for_level,
)
from coffeetime.data.storage import Storage


def make_guard(tmp_path, level: int) -> tuple[ProgressionStore, SelectionGuard]:
    storage = Storage(tmp_path / "app.db")
    storage.init_db()
    store = ProgressionStore(storage)
    store.load()
    store.save(ProgressionState(xp=0, level=level))
    return store, SelectionGuard(store)


def test_catalog_requirements_strictly_increase() -> None:
    levels = [tier.level_requirement for tier in REWARD_CATALOG]
    assert levels == sorted(set(levels))
    assert levels[0] == 1


def test_catalog_lookups() -> None:
    assert tier_for_level(5).identifier == "glass"
    assert tier_for_level(6) is None
    assert is_unlocked(1, 5)
    assert not is_unlocked(2, 9)
    assert not is_unlocked(-1, 20)


def test_select_locked_reward_is_rejected(tmp_path) -> None:
    store, guard = make_guard(tmp_path, level=3)

    result = guard.select(1, current_level=3)

    assert result.accepted is False
    assert result.index == 0
    assert result.notice == "Reach level 5 to use the Iced Coffee Glass."
    assert store.selected_index == 0


def test_select_unlocked_reward_persists(tmp_path) -> None:
    store, guard = make_guard(tmp_path, level=10)

    result = guard.select(2, current_level=10)

    assert result.accepted is True
    assert result.index == 2
    assert store.selected_index == 2
    reloaded = ProgressionStore(Storage(tmp_path / "app.db"))
    reloaded.load()
    assert reloaded.selected_index == 2


def test_rejection_reverts_to_previous_selection(tmp_path) -> None:
    store, guard = make_guard(tmp_path, level=6)
    guard.select(1, current_level=6)

    result = guard.select(3, current_level=6)

    assert result.accepted is False
    assert result.index == 1
    assert store.selected_index == 1


def test_unknown_index_is_rejected(tmp_path) -> None:
    store, guard = make_guard(tmp_path, level=20)

    result = guard.select(len(REWARD_CATALOG), current_level=20)

    assert result.accepted is False
    assert result.index == 0
    assert store.selected_index == 0
