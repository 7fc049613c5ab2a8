"""Pet-side bookkeeping for arena results.

The arena core only produces a `RunResult`; this module is the collaborator
that folds it into persistent pet progress.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .areas import AreaDef
from .config import RunResult
from .equipment import EQUIPMENT_BY_ID, Equipment

__all__ = [
    "LevelUp",
    "PetProgress",
    "ProgressUpdate",
    "apply_run_result",
    "coins_for_level",
    "is_area_unlocked",
    "xp_for_level",
]


def xp_for_level(level: int) -> int:
    """XP needed to go from `level` to `level + 1`."""
    return 50 + int(level) * 10


def coins_for_level(level: int) -> int:
    return 10 + int(level) * 2


@dataclass(slots=True)
class PetProgress:
    level: int = 1
    xp: int = 0
    coins: int = 0
    inventory: list[Equipment] = field(default_factory=list)
    area_progress: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class LevelUp:
    level: int
    coins: int


@dataclass(frozen=True, slots=True)
class ProgressUpdate:
    xp_gained: int
    coins_gained: int
    level_ups: tuple[LevelUp, ...]
    item: Equipment | None


def is_area_unlocked(area: AreaDef, progress: PetProgress) -> bool:
    if area.unlock is None:
        return True
    reached = int(progress.area_progress.get(area.unlock.area_id, 0))
    return reached >= int(area.unlock.level_required)


def apply_run_result(progress: PetProgress, area: AreaDef, result: RunResult) -> ProgressUpdate:
    rewards = result.rewards
    xp_gained = max(0, int(rewards.xp))
    coins_gained = max(0, int(rewards.coins))

    progress.xp += xp_gained
    progress.coins += coins_gained

    level_ups: list[LevelUp] = []
    while progress.xp >= xp_for_level(progress.level):
        progress.xp -= xp_for_level(progress.level)
        progress.level += 1
        bonus = coins_for_level(progress.level)
        progress.coins += bonus
        level_ups.append(LevelUp(level=progress.level, coins=bonus))

    item: Equipment | None = None
    if rewards.equipment_id is not None:
        item = EQUIPMENT_BY_ID.get(rewards.equipment_id)
        if item is not None:
            progress.inventory.append(item)

    best = int(progress.area_progress.get(area.id, 0))
    progress.area_progress[area.id] = max(best, int(result.waves_completed))
    return ProgressUpdate(
        xp_gained=xp_gained,
        coins_gained=coins_gained,
        level_ups=tuple(level_ups),
        item=item,
    )
