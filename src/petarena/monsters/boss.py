from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from ..areas import BossArchetype
from ..constants import (
    SHIELD_HIT_THRESHOLD,
    SUMMONER_CHARGED_HITS,
    SUMMONER_MINION_COUNT,
    SUMMONER_PHASE_DAMAGE_FRACTION,
    VULNERABLE_DURATION_MS,
    WAVE_GATED_HEALTH_FRACTION,
    WAVE_GATED_MINION_COUNT,
)
from .state import Boss, Minion, MinionRequirement, MonsterState

__all__ = [
    "BOSS_BASE_HEALTH",
    "BossSignal",
    "BossState",
    "HitVerdict",
    "MinionWave",
    "boss_can_move",
    "boss_max_health",
    "minion_wave_for",
    "register_boss_hit",
    "resolve_hit_gate",
    "resolve_minion_wave_cleared",
    "tick_boss_timer",
]


class HitVerdict(IntEnum):
    DAMAGE = 0
    # The hit lands (projectile consumed, hit recorded) but deals no damage.
    ABSORB = 1
    IGNORE = 2


class BossSignal(IntEnum):
    SHIELD_DOWN = 1
    SHIELD_UP = 2
    MINION_WAVE = 3
    PHASE = 4


BOSS_BASE_HEALTH: dict[BossArchetype, float] = {
    BossArchetype.SHIELDED: 300.0,
    BossArchetype.MINION_SUMMONER: 450.0,
    BossArchetype.WAVE_GATED: 500.0,
    BossArchetype.BRUTE: 400.0,
}


def boss_max_health(archetype: BossArchetype, difficulty: float) -> float:
    base = BOSS_BASE_HEALTH.get(BossArchetype(archetype), BOSS_BASE_HEALTH[BossArchetype.BRUTE])
    return base * (1.0 + 0.5 * max(0.0, float(difficulty)))


@dataclass(frozen=True, slots=True)
class MinionWave:
    count: int
    requirement: MinionRequirement


def minion_wave_for(archetype: BossArchetype) -> MinionWave | None:
    match archetype:
        case BossArchetype.MINION_SUMMONER:
            return MinionWave(SUMMONER_MINION_COUNT, MinionRequirement.CHARGED)
        case BossArchetype.WAVE_GATED:
            return MinionWave(WAVE_GATED_MINION_COUNT, MinionRequirement.ANY)
        case _:
            return None


@dataclass(slots=True)
class BossState:
    """Scripted-fight counters for the one live boss; discarded on its death."""

    archetype: BossArchetype
    shield_hits: int = 0
    vulnerable: bool = False
    vulnerable_timer_ms: float = 0.0
    charged_hits: int = 0
    minions_spawned: bool = False
    wave_spawned: bool = False
    wave_cleared: bool = False
    phase: int = 0


def _minion_gate(requirement: MinionRequirement, charged: bool) -> HitVerdict:
    match requirement:
        case MinionRequirement.CHARGED:
            return HitVerdict.DAMAGE if charged else HitVerdict.ABSORB
        case MinionRequirement.UNCHARGED:
            return HitVerdict.ABSORB if charged else HitVerdict.DAMAGE
        case _:
            return HitVerdict.DAMAGE


def resolve_hit_gate(monster: MonsterState, boss_state: BossState | None, *, charged: bool) -> HitVerdict:
    """Decide whether a hit on `monster` deals damage. Pure: no counters move."""

    if monster.health <= 0.0:
        return HitVerdict.IGNORE
    kind = monster.kind
    if isinstance(kind, Minion):
        return _minion_gate(kind.requirement, charged)
    if not isinstance(kind, Boss):
        return HitVerdict.DAMAGE
    if boss_state is None:
        return HitVerdict.DAMAGE

    match kind.archetype:
        case BossArchetype.SHIELDED:
            if not boss_state.vulnerable:
                return HitVerdict.ABSORB
            return HitVerdict.ABSORB if charged else HitVerdict.DAMAGE
        case BossArchetype.MINION_SUMMONER:
            return HitVerdict.ABSORB
        case BossArchetype.WAVE_GATED:
            if not boss_state.wave_spawned:
                return HitVerdict.ABSORB if charged else HitVerdict.DAMAGE
            if not boss_state.wave_cleared:
                return HitVerdict.ABSORB
            return HitVerdict.DAMAGE if charged else HitVerdict.ABSORB
        case _:
            return HitVerdict.DAMAGE


def register_boss_hit(
    monster: MonsterState,
    boss_state: BossState | None,
    *,
    charged: bool,
    verdict: HitVerdict,
) -> BossSignal | None:
    """Advance archetype counters after a direct projectile hit was resolved.

    Called once per direct hit, after any damage from a DAMAGE verdict has been
    applied. Splash and DOT never come through here.
    """

    if boss_state is None or verdict is HitVerdict.IGNORE:
        return None
    if not isinstance(monster.kind, Boss) or monster.health <= 0.0:
        return None

    match boss_state.archetype:
        case BossArchetype.SHIELDED:
            if boss_state.vulnerable or not charged:
                return None
            boss_state.shield_hits += 1
            if boss_state.shield_hits >= SHIELD_HIT_THRESHOLD:
                boss_state.vulnerable = True
                boss_state.vulnerable_timer_ms = VULNERABLE_DURATION_MS
                return BossSignal.SHIELD_DOWN
            return None
        case BossArchetype.MINION_SUMMONER:
            if not charged or boss_state.minions_spawned:
                return None
            boss_state.charged_hits += 1
            if boss_state.charged_hits >= SUMMONER_CHARGED_HITS:
                boss_state.minions_spawned = True
                return BossSignal.MINION_WAVE
            return None
        case BossArchetype.WAVE_GATED:
            if boss_state.wave_spawned:
                return None
            if monster.health <= monster.max_health * WAVE_GATED_HEALTH_FRACTION:
                boss_state.wave_spawned = True
                boss_state.minions_spawned = True
                return BossSignal.MINION_WAVE
            return None
        case _:
            return None


def tick_boss_timer(boss_state: BossState | None, dt_ms: float) -> BossSignal | None:
    """Count down the vulnerability window; expiry re-arms the shield."""
    if boss_state is None or not boss_state.vulnerable:
        return None
    boss_state.vulnerable_timer_ms = max(0.0, boss_state.vulnerable_timer_ms - float(dt_ms))
    if boss_state.vulnerable_timer_ms > 0.0:
        return None
    boss_state.vulnerable = False
    boss_state.shield_hits = 0
    return BossSignal.SHIELD_UP


def resolve_minion_wave_cleared(
    boss: MonsterState,
    boss_state: BossState,
    *,
    minions_alive: int,
) -> float:
    """Close out a finished minion wave; returns phase damage owed to the boss.

    Only summoners take phase damage. A wave-gated boss just opens its final
    (charged-only) phase.
    """

    if not boss_state.minions_spawned or minions_alive > 0:
        return 0.0
    boss_state.minions_spawned = False
    match boss_state.archetype:
        case BossArchetype.MINION_SUMMONER:
            boss_state.charged_hits = 0
            boss_state.phase += 1
            phase_damage = boss.max_health * SUMMONER_PHASE_DAMAGE_FRACTION
            # Three phases must finish the boss even with float drift.
            if boss.health - phase_damage <= 1e-6:
                phase_damage = boss.health
            return phase_damage
        case BossArchetype.WAVE_GATED:
            boss_state.wave_cleared = True
            boss_state.phase += 1
            return 0.0
        case _:
            return 0.0


def boss_can_move(boss_state: BossState | None) -> bool:
    if boss_state is None:
        return True
    match boss_state.archetype:
        case BossArchetype.SHIELDED:
            return not boss_state.vulnerable
        case BossArchetype.WAVE_GATED:
            return not (boss_state.wave_spawned and not boss_state.wave_cleared)
        case _:
            return True
