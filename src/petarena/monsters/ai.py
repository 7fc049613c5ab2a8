from __future__ import annotations

from petkit.geom import Vec2

from ..constants import MONSTER_BASE_SPEED, MONSTER_SPEED_PER_DIFFICULTY, PLAYER_SIZE
from .state import MonsterState

__all__ = ["contact_distance", "monster_base_speed", "monster_move_toward"]

WALK_PHASE_RATE = 8.0


def monster_base_speed(difficulty: float) -> float:
    return MONSTER_BASE_SPEED + MONSTER_SPEED_PER_DIFFICULTY * max(0.0, float(difficulty))


def contact_distance(monster: MonsterState) -> float:
    return (PLAYER_SIZE + monster.size) * 0.5


def monster_move_toward(
    monster: MonsterState,
    target: Vec2,
    dt: float,
    *,
    base_speed: float,
    can_move: bool = True,
) -> None:
    """Chase `target`, halting at contact range and flagging the attack pose."""

    reach = contact_distance(monster)
    delta = target - monster.pos
    distance = delta.length()
    monster.is_attacking = distance <= reach
    if not can_move or monster.is_attacking or dt <= 0.0:
        return

    step = float(base_speed) * float(monster.speed_multiplier) * float(dt)
    travel = min(step, distance - reach)
    if travel <= 0.0:
        return
    monster.pos = monster.pos + delta * (travel / distance)
    monster.walk_phase += float(dt) * WALK_PHASE_RATE
    if monster.pos.distance_to(target) <= reach + 1e-6:
        monster.is_attacking = True
