from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from petkit.geom import Vec2

from ..areas import BossArchetype
from ..constants import BOSS_SIZE, MONSTER_SIZE

__all__ = [
    "Boss",
    "DotState",
    "Elite",
    "Minion",
    "MinionRequirement",
    "MonsterKind",
    "MonsterState",
    "MonsterStore",
    "Regular",
    "SpawnSide",
]


class SpawnSide(IntEnum):
    TOP = 0
    LEFT = 1
    RIGHT = 2


class MinionRequirement(IntEnum):
    ANY = 0
    CHARGED = 1
    UNCHARGED = 2


@dataclass(frozen=True, slots=True)
class Regular:
    pass


@dataclass(frozen=True, slots=True)
class Elite:
    pass


@dataclass(frozen=True, slots=True)
class Minion:
    requirement: MinionRequirement = MinionRequirement.ANY


@dataclass(frozen=True, slots=True)
class Boss:
    archetype: BossArchetype


MonsterKind = Regular | Elite | Minion | Boss


@dataclass(slots=True)
class DotState:
    remaining_s: float
    damage_per_tick: float
    accumulator_ms: float = 0.0


@dataclass(slots=True)
class MonsterState:
    id: int
    pos: Vec2
    health: float
    max_health: float
    kind: MonsterKind
    speed_multiplier: float = 1.0
    is_attacking: bool = False
    dot: DotState | None = None
    spawn_side: SpawnSide = SpawnSide.TOP
    spawn_level: int = 1
    hit_flash_ms: float = 0.0
    walk_phase: float = 0.0

    @property
    def alive(self) -> bool:
        return self.health > 0.0

    @property
    def is_boss(self) -> bool:
        return isinstance(self.kind, Boss)

    @property
    def size(self) -> float:
        return BOSS_SIZE if isinstance(self.kind, Boss) else MONSTER_SIZE

    @property
    def radius(self) -> float:
        return self.size * 0.5


class MonsterStore:
    def __init__(self) -> None:
        self._entries: list[MonsterState] = []
        self._next_id = 1

    @property
    def entries(self) -> list[MonsterState]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def reset(self) -> None:
        self._entries.clear()
        self._next_id = 1

    def clear(self) -> None:
        self._entries.clear()

    def spawn(
        self,
        *,
        pos: Vec2,
        health: float,
        kind: MonsterKind,
        speed_multiplier: float = 1.0,
        spawn_side: SpawnSide = SpawnSide.TOP,
        spawn_level: int = 1,
    ) -> MonsterState:
        health = max(1.0, float(health))
        monster = MonsterState(
            id=self._next_id,
            pos=pos,
            health=health,
            max_health=health,
            kind=kind,
            speed_multiplier=float(speed_multiplier),
            spawn_side=SpawnSide(spawn_side),
            spawn_level=int(spawn_level),
        )
        self._next_id += 1
        self._entries.append(monster)
        return monster

    def get(self, monster_id: int) -> MonsterState | None:
        for monster in self._entries:
            if monster.id == monster_id:
                return monster
        return None

    def alive(self) -> list[MonsterState]:
        return [monster for monster in self._entries if monster.health > 0.0]

    def boss(self) -> MonsterState | None:
        for monster in self._entries:
            if isinstance(monster.kind, Boss) and monster.health > 0.0:
                return monster
        return None

    def has_boss(self) -> bool:
        return any(isinstance(monster.kind, Boss) for monster in self._entries)

    def minions(self) -> list[MonsterState]:
        return [monster for monster in self._entries if isinstance(monster.kind, Minion) and monster.health > 0.0]

    def purge_dead(self) -> list[MonsterState]:
        """Remove monsters at or below zero health and return them in store order."""
        dead = [monster for monster in self._entries if monster.health <= 0.0]
        if dead:
            self._entries = [monster for monster in self._entries if monster.health > 0.0]
        return dead

    def remove_minions(self) -> list[MonsterState]:
        removed = [monster for monster in self._entries if isinstance(monster.kind, Minion)]
        if removed:
            self._entries = [monster for monster in self._entries if not isinstance(monster.kind, Minion)]
        return removed
