from __future__ import annotations

"""XP and leveling.

Each level ``L`` needs ``floor(100 * L ** 1.5)`` XP to reach ``L + 1``; XP
is kept relative to the current level, so after any award settles
``0 <= xp < xp_to_next_level(level)``.

:func:`add_xp` is pure. :class:`ProgressionStore` owns the persisted
snapshot and the selected cup index.
"""

import logging
import math
import sqlite3
from dataclasses import dataclass, field
from typing import Protocol

from coffeetime.core.rewards import REWARD_CATALOG, RewardTier, is_unlocked, tier_for_level


logger = logging.getLogger(__name__)

XP_KEY = "pomodoro-xp"
LEVEL_KEY = "pomodoro-level"
SELECTED_REWARD_KEY = "pomodoro-selected-reward-index"


def xp_to_next_level(level: int) -> int:
    if level < 1:
        raise ValueError("Level must be at least 1")
    # floor(100 * L ** 1.5) in integers
    return math.isqrt(10_000 * level ** 3)


@dataclass(frozen=True)
class ProgressionState:
    xp: int = 0
    level: int = 1

    @property
    def xp_to_next_level(self) -> int:
        return xp_to_next_level(self.level)


@dataclass(frozen=True)
class ProgressionResult:
    state: ProgressionState
    unlocked_tiers: list[RewardTier] = field(default_factory=list)
    levels_gained: int = 0

    @property
    def leveled_up(self) -> bool:
        return self.levels_gained > 0


def xp_progress(state: ProgressionState) -> float:
    """Percentage of the way to the next level, for the XP bar."""
    return state.xp / state.xp_to_next_level * 100


def add_xp(
    current_xp: int,
    current_level: int,
    amount: int,
    catalog: tuple[RewardTier, ...] = REWARD_CATALOG,
) -> ProgressionResult:
    """Award ``amount`` XP, crossing as many level thresholds as it covers.

    Tiers unlocked along the way are returned in ascending level order.
    """
    if amount < 0:
        raise ValueError("XP award must not be negative")

    new_xp = current_xp + amount
    level = current_level
    unlocked: list[RewardTier] = []
    while new_xp >= xp_to_next_level(level):
        new_xp -= xp_to_next_level(level)
        level += 1
        tier = tier_for_level(level, catalog)
        if tier is not None:
            unlocked.append(tier)

    return ProgressionResult(
        state=ProgressionState(xp=new_xp, level=level),
        unlocked_tiers=unlocked,
        levels_gained=level - current_level,
    )


class SettingsBackend(Protocol):
    def get_setting(self, key: str, default: str | None = None) -> str | None: ...

    def set_setting(self, key: str, value: str) -> None: ...


class ProgressionStore:
    """Persisted XP, level and selected cup, loaded once and saved on change."""

    def __init__(self, backend: SettingsBackend, catalog: tuple[RewardTier, ...] = REWARD_CATALOG) -> None:
        self._backend = backend
        self._catalog = catalog
        self._state = ProgressionState()
        self._selected_index = 0

    @property
    def state(self) -> ProgressionState:
        return self._state

    @property
    def selected_index(self) -> int:
        return self._selected_index

    def load(self) -> ProgressionState:
        xp = self._read_int(XP_KEY, default=0, minimum=0)
        level = self._read_int(LEVEL_KEY, default=1, minimum=1)
        self._state = ProgressionState(xp=xp, level=level)

        index = self._read_int(SELECTED_REWARD_KEY, default=0, minimum=0)
        if not is_unlocked(index, level, self._catalog):
            logger.warning("Stored reward index %s is not unlocked at level %s; using default", index, level)
            index = 0
        self._selected_index = index
        return self._state

    def save(self, state: ProgressionState) -> None:
        self._state = state
        self._write(XP_KEY, state.xp)
        self._write(LEVEL_KEY, state.level)

    def save_selection(self, index: int) -> None:
        self._selected_index = index
        self._write(SELECTED_REWARD_KEY, index)

    def _write(self, key: str, value: int) -> None:
        try:
            self._backend.set_setting(key, str(value))
        except sqlite3.Error:
            logger.exception("Failed to persist %s", key)

    def _read_int(self, key: str, default: int, minimum: int) -> int:
        try:
            raw = self._backend.get_setting(key)
        except sqlite3.Error:
            logger.exception("Failed to read %s; using default", key)
            return default
        if raw is None:
            return default
        try:
            value = int(raw)
        except (TypeError, ValueError):
            logger.warning("Unparsable value %r for %s; using default", raw, key)
            return default
        if value < minimum:
            logger.warning("Out of range value %s for %s; using default", value, key)
            return default
        return value
