from __future__ import annotations

from enum import IntEnum

from .state import DotState, MonsterState

__all__ = [
    "DamageSource",
    "HIT_FLASH_MS",
    "apply_dot",
    "monster_apply_damage",
    "tick_dot",
]

HIT_FLASH_MS = 120.0


class DamageSource(IntEnum):
    DIRECT = 0
    SPLASH = 1
    DOT = 2
    PHASE = 3


def monster_apply_damage(monster: MonsterState, *, damage: float, source: DamageSource = DamageSource.DIRECT) -> bool:
    """Apply damage to a monster, returning True if the hit killed it.

    Health is clamped to `[0, max_health]`. A monster already at zero health is
    left untouched and the call reports no kill, so a kill is credited once.
    """

    if monster.health <= 0.0:
        return False
    amount = max(0.0, float(damage))
    if amount <= 0.0:
        return False
    monster.health = min(monster.max_health, max(0.0, monster.health - amount))
    if source is not DamageSource.DOT:
        monster.hit_flash_ms = HIT_FLASH_MS
    return monster.health <= 0.0


def apply_dot(monster: MonsterState, *, damage_per_tick: float, duration_s: float) -> None:
    """Attach (or refresh) a damage-over-time debuff; the stronger tick wins."""
    if monster.health <= 0.0:
        return
    current = monster.dot
    if current is None:
        monster.dot = DotState(remaining_s=float(duration_s), damage_per_tick=float(damage_per_tick))
        return
    current.remaining_s = max(current.remaining_s, float(duration_s))
    current.damage_per_tick = max(current.damage_per_tick, float(damage_per_tick))


def tick_dot(monster: MonsterState, dt_ms: float, *, tick_ms: float) -> float:
    """Advance the DOT accumulator; returns the damage due this step (0 when none).

    Ticks fire on whole `tick_ms` boundaries of accumulated time, so frame jitter
    never adds or drops a tick.
    """

    dot = monster.dot
    if dot is None:
        return 0.0
    dot.accumulator_ms += max(0.0, float(dt_ms))
    total = 0.0
    while dot.accumulator_ms >= tick_ms and dot.remaining_s > 0.0:
        dot.accumulator_ms -= tick_ms
        dot.remaining_s -= tick_ms / 1000.0
        total += dot.damage_per_tick
    if dot.remaining_s <= 1e-9:
        monster.dot = None
    return total
