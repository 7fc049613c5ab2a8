from __future__ import annotations

from .boss import BossSignal, BossState, HitVerdict, register_boss_hit, resolve_hit_gate
from .damage import DamageSource, monster_apply_damage
from .spawn import MonsterInit, SpawnDirector
from .state import (
    Boss,
    DotState,
    Elite,
    Minion,
    MinionRequirement,
    MonsterKind,
    MonsterState,
    MonsterStore,
    Regular,
    SpawnSide,
)

__all__ = [
    "Boss",
    "BossSignal",
    "BossState",
    "DamageSource",
    "DotState",
    "Elite",
    "HitVerdict",
    "Minion",
    "MinionRequirement",
    "MonsterInit",
    "MonsterKind",
    "MonsterState",
    "MonsterStore",
    "Regular",
    "SpawnDirector",
    "SpawnSide",
    "monster_apply_damage",
    "register_boss_hit",
    "resolve_hit_gate",
]
