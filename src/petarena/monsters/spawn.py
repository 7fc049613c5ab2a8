"""Spawn planning for arena runs.

Everything here is pure: functions return `MonsterInit` plans and the world
materializes them into the `MonsterStore`. Randomness comes only from the
`Crand` passed in, so a seed reproduces the same spawn sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
import math

from petkit.geom import Vec2

from ..areas import BossArchetype
from ..constants import (
    BASE_SPAWN_DELAY_MS,
    BOSS_SIZE,
    BOSS_SPEED_SCALE,
    ELITE_CHANCE_PER_LEVEL,
    ELITE_HEALTH_SCALE,
    ELITE_SPEED_SCALE,
    GAME_HEIGHT,
    GAME_WIDTH,
    LEVEL_DURATION,
    MAX_ELITE_CHANCE,
    MAX_LEVEL,
    MIN_SPAWN_DELAY_MS,
    MINION_HEALTH,
    MINION_SPAWN_RADIUS,
    MONSTER_SIZE,
    SPAWN_CHECK_INTERVAL_MS,
    SPAWN_DELAY_PER_LEVEL_MS,
)
from ..crand import Crand
from .boss import MinionWave, boss_max_health
from .state import Boss, Elite, Minion, MinionRequirement, MonsterKind, Regular, SpawnSide

__all__ = [
    "MonsterInit",
    "SpawnDirector",
    "boss_due",
    "build_boss_spawn",
    "build_minion_wave",
    "build_regular_spawn",
    "elite_chance",
    "level_for_elapsed",
    "monster_health",
    "spawn_batch_size",
    "spawn_delay_ms",
    "tick_regular_spawns",
]


@dataclass(frozen=True, slots=True)
class MonsterInit:
    pos: Vec2
    health: float
    kind: MonsterKind
    speed_multiplier: float = 1.0
    spawn_side: SpawnSide = SpawnSide.TOP
    spawn_level: int = 1


def level_for_elapsed(elapsed_s: float) -> int:
    return max(1, min(MAX_LEVEL, int(float(elapsed_s) // LEVEL_DURATION) + 1))


def spawn_delay_ms(level: int) -> float:
    return max(MIN_SPAWN_DELAY_MS, BASE_SPAWN_DELAY_MS - SPAWN_DELAY_PER_LEVEL_MS * float(level))


def spawn_batch_size(level: int) -> int:
    if level >= 5:
        return 3
    if level >= 3:
        return 2
    return 1


def monster_health(level: int, difficulty: float) -> float:
    return 20.0 + 10.0 * float(level) + 5.0 * float(difficulty)


def elite_chance(level: int) -> float:
    return min(MAX_ELITE_CHANCE, ELITE_CHANCE_PER_LEVEL * float(level))


def _rand_edge_pos(rng: Crand, side: SpawnSide) -> Vec2:
    half = MONSTER_SIZE * 0.5
    match side:
        case SpawnSide.LEFT:
            return Vec2(0.0, rng.uniform(half, GAME_HEIGHT * 0.6))
        case SpawnSide.RIGHT:
            return Vec2(GAME_WIDTH, rng.uniform(half, GAME_HEIGHT * 0.6))
        case _:
            return Vec2(rng.uniform(half, GAME_WIDTH - half), 0.0)


def build_regular_spawn(rng: Crand, *, level: int, difficulty: float) -> MonsterInit:
    side = SpawnSide(rng.rand() % 3)
    pos = _rand_edge_pos(rng, side)
    health = monster_health(level, difficulty)
    if rng.chance(elite_chance(level)):
        return MonsterInit(
            pos=pos,
            health=health * ELITE_HEALTH_SCALE,
            kind=Elite(),
            speed_multiplier=ELITE_SPEED_SCALE,
            spawn_side=side,
            spawn_level=int(level),
        )
    return MonsterInit(pos=pos, health=health, kind=Regular(), spawn_side=side, spawn_level=int(level))


@dataclass(slots=True)
class SpawnDirector:
    """Regular-spawn timers.

    `last_spawn_ms` starts at 0 so the first batch waits a full spawn delay.
    """

    check_accum_ms: float = 0.0
    last_spawn_ms: float = 0.0
    boss_spawned: bool = False

    def reset(self) -> None:
        self.check_accum_ms = 0.0
        self.last_spawn_ms = 0.0
        self.boss_spawned = False


def tick_regular_spawns(
    director: SpawnDirector,
    dt_ms: float,
    rng: Crand,
    *,
    elapsed_ms: float,
    level: int,
    difficulty: float,
    boss_alive: bool,
) -> tuple[MonsterInit, ...]:
    """Run the 100 ms spawn check; returns the batch due this step, if any.

    At most one batch per call. While a boss is alive no regular monsters spawn;
    the delay clock keeps running, so spawning resumes promptly after the kill.
    """

    director.check_accum_ms += max(0.0, float(dt_ms))
    if director.check_accum_ms < SPAWN_CHECK_INTERVAL_MS:
        return ()
    director.check_accum_ms %= SPAWN_CHECK_INTERVAL_MS
    if boss_alive:
        return ()
    if float(elapsed_ms) - director.last_spawn_ms < spawn_delay_ms(level):
        return ()

    director.last_spawn_ms = float(elapsed_ms)
    return tuple(build_regular_spawn(rng, level=level, difficulty=difficulty) for _ in range(spawn_batch_size(level)))


def boss_due(director: SpawnDirector, *, level: int, boss_exists: bool) -> bool:
    return level >= MAX_LEVEL and not director.boss_spawned and not boss_exists


def build_boss_spawn(archetype: BossArchetype, *, difficulty: float) -> MonsterInit:
    return MonsterInit(
        pos=Vec2(GAME_WIDTH * 0.5, BOSS_SIZE),
        health=boss_max_health(archetype, difficulty),
        kind=Boss(BossArchetype(archetype)),
        speed_multiplier=BOSS_SPEED_SCALE,
        spawn_side=SpawnSide.TOP,
        spawn_level=MAX_LEVEL,
    )


def build_minion_wave(
    wave: MinionWave,
    *,
    center: Vec2,
    level: int,
    difficulty: float,
) -> tuple[MonsterInit, ...]:
    """Minions in a ring around `center`, clamped inside the arena."""
    count = max(0, int(wave.count))
    half = MONSTER_SIZE * 0.5
    health = MINION_HEALTH + 2.0 * float(difficulty)
    out: list[MonsterInit] = []
    for index in range(count):
        angle = math.tau * float(index) / float(max(1, count))
        pos = (center + Vec2.from_polar(angle, MINION_SPAWN_RADIUS)).clamp_rect(
            half,
            half,
            GAME_WIDTH - half,
            GAME_HEIGHT - half,
        )
        out.append(
            MonsterInit(
                pos=pos,
                health=health,
                kind=Minion(MinionRequirement(wave.requirement)),
                spawn_side=SpawnSide.TOP,
                spawn_level=int(level),
            )
        )
    return tuple(out)
