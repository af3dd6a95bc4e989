from __future__ import annotations

"""Cup rewards unlocked by level, and the guard for choosing the active cup."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from coffeetime.core.progression import ProgressionStore


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewardTier:
    level_requirement: int
    identifier: str
    display_name: str


# Requirements must stay strictly increasing.
REWARD_CATALOG: tuple[RewardTier, ...] = (
    RewardTier(1, "mug", "Classic Mug"),
    RewardTier(5, "glass", "Iced Coffee Glass"),
    RewardTier(10, "takeaway", "Takeaway Cup"),
    RewardTier(15, "fancy", "Fancy Teacup"),
)


def tier_for_level(level: int, catalog: tuple[RewardTier, ...] = REWARD_CATALOG) -> RewardTier | None:
    """Return the tier unlocked exactly at ``level``, if any."""
    for tier in catalog:
        if tier.level_requirement == level:
            return tier
    return None


def is_unlocked(index: int, level: int, catalog: tuple[RewardTier, ...] = REWARD_CATALOG) -> bool:
    if index < 0 or index >= len(catalog):
        return False
    return catalog[index].level_requirement <= level


@dataclass(frozen=True)
class SelectionResult:
    accepted: bool
    index: int
    notice: str = ""


class SelectionGuard:
    """Routes cup selection requests through the level check.

    A rejected result carries the index the caller has to revert its widget
    to, which is always the last persisted selection.
    """

    def __init__(self, store: ProgressionStore, catalog: tuple[RewardTier, ...] = REWARD_CATALOG) -> None:
        self._store = store
        self._catalog = catalog

    def select(self, index: int, current_level: int) -> SelectionResult:
        previous = self._store.selected_index
        if index < 0 or index >= len(self._catalog):
            logger.warning("Rejected unknown reward index %s", index)
            return SelectionResult(False, previous, "Unknown reward.")

        tier = self._catalog[index]
        if tier.level_requirement > current_level:
            logger.info("Reward %s locked until level %s", tier.identifier, tier.level_requirement)
            return SelectionResult(
                False,
                previous,
                f"Reach level {tier.level_requirement} to use the {tier.display_name}.",
            )

        self._store.save_selection(index)
        return SelectionResult(True, index)
