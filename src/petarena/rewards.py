from __future__ import annotations

from .config import RewardBundle
from .crand import Crand
from .equipment import roll_equipment

__all__ = [
    "COINS_PER_LEVEL",
    "DROP_BASE_CHANCE",
    "DROP_CHANCE_PER_DIFFICULTY",
    "XP_PER_LEVEL",
    "calculate_rewards",
    "equipment_drop_chance",
]

XP_PER_LEVEL = 50
COINS_PER_LEVEL = 20
DROP_BASE_CHANCE = 0.3
DROP_CHANCE_PER_DIFFICULTY = 0.05


def equipment_drop_chance(levels_completed: int, total_levels: int, difficulty: float) -> float:
    if total_levels <= 0 or levels_completed <= 0:
        return 0.0
    fraction = min(1.0, float(levels_completed) / float(total_levels))
    return fraction * (DROP_BASE_CHANCE + max(0.0, float(difficulty)) * DROP_CHANCE_PER_DIFFICULTY)


def calculate_rewards(
    *,
    score: int,
    levels_completed: int,
    total_levels: int,
    difficulty: float,
    rng: Crand,
) -> RewardBundle:
    """Convert a finished run into XP, coins and at most one equipment drop."""

    score = max(0, int(score))
    levels = max(0, int(levels_completed))
    difficulty = max(0.0, float(difficulty))

    xp = score + int(levels * XP_PER_LEVEL * difficulty)
    coins = score // 2 + int(levels * COINS_PER_LEVEL * difficulty)

    equipment_id: str | None = None
    if rng.chance(equipment_drop_chance(levels, total_levels, difficulty)):
        item = roll_equipment(difficulty, rng)
        if item is not None:
            equipment_id = item.id
    return RewardBundle(xp=max(0, xp), coins=max(0, coins), equipment_id=equipment_id)
