from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from petkit.geom import Vec2

from ..constants import MAX_LEVEL
from ..effects import DamageNumber, Particle
from ..monsters.state import MonsterKind
from ..projectiles.types import ProjectileKind
from .state_types import Facing, RunPhase

if TYPE_CHECKING:
    from .session import CombatSession

__all__ = [
    "BossView",
    "DamageNumberView",
    "MonsterView",
    "ParticleView",
    "ProjectileView",
    "WorldSnapshot",
    "build_snapshot",
]


@dataclass(frozen=True, slots=True)
class MonsterView:
    id: int
    pos: Vec2
    health: float
    max_health: float
    kind: MonsterKind
    size: float
    is_attacking: bool
    has_dot: bool
    hit_flash: bool
    walk_phase: float


@dataclass(frozen=True, slots=True)
class ProjectileView:
    id: int
    pos: Vec2
    angle: float
    kind: ProjectileKind
    charge_level: int
    explosion_radius: float | None


@dataclass(frozen=True, slots=True)
class BossView:
    shield_hits: int
    vulnerable: bool
    vulnerable_timer_ms: float
    charged_hits: int
    minions_alive: int
    phase: int


@dataclass(frozen=True, slots=True)
class ParticleView:
    pos: Vec2
    size: float
    color: tuple[float, float, float, float]
    shape: int
    life: float
    rotation: float


@dataclass(frozen=True, slots=True)
class DamageNumberView:
    pos: Vec2
    damage: int
    critical: bool
    life: float


@dataclass(frozen=True, slots=True)
class WorldSnapshot:
    """Read-only copy of everything the presentation layer may draw."""

    phase: RunPhase
    tick: int
    time_left: int
    level: int
    max_level: int
    score: int
    kills: int
    avatar_pos: Vec2
    facing: Facing
    aim_angle: float
    avatar_moving: bool
    charge_level: int
    charge_held_ms: float
    monsters: tuple[MonsterView, ...]
    projectiles: tuple[ProjectileView, ...]
    boss: BossView | None
    boss_defeated: bool
    particles: tuple[ParticleView, ...]
    damage_numbers: tuple[DamageNumberView, ...]


def _particle_view(particle: Particle) -> ParticleView:
    color = particle.color
    return ParticleView(
        pos=particle.pos,
        size=particle.size,
        color=(color.r, color.g, color.b, color.a),
        shape=int(particle.shape),
        life=particle.life,
        rotation=particle.rotation,
    )


def _number_view(number: DamageNumber) -> DamageNumberView:
    return DamageNumberView(pos=number.pos, damage=number.damage, critical=number.critical, life=number.life)


def build_snapshot(session: CombatSession) -> WorldSnapshot:
    world = session.world
    now_ms = world.elapsed_ms
    boss_view: BossView | None = None
    if world.boss_state is not None:
        state = world.boss_state
        boss_view = BossView(
            shield_hits=state.shield_hits,
            vulnerable=state.vulnerable,
            vulnerable_timer_ms=state.vulnerable_timer_ms,
            charged_hits=state.charged_hits,
            minions_alive=len(world.monsters.minions()),
            phase=state.phase,
        )
    return WorldSnapshot(
        phase=session.phase,
        tick=session.tick,
        time_left=session.time_left,
        level=world.level,
        max_level=MAX_LEVEL,
        score=world.score,
        kills=world.kills,
        avatar_pos=world.avatar.pos,
        facing=world.avatar.facing,
        aim_angle=world.avatar.aim_angle,
        avatar_moving=world.avatar.moving,
        charge_level=world.charge.level(now_ms),
        charge_held_ms=world.charge.held_ms(now_ms),
        monsters=tuple(
            MonsterView(
                id=monster.id,
                pos=monster.pos,
                health=monster.health,
                max_health=monster.max_health,
                kind=monster.kind,
                size=monster.size,
                is_attacking=monster.is_attacking,
                has_dot=monster.dot is not None,
                hit_flash=monster.hit_flash_ms > 0.0,
                walk_phase=monster.walk_phase,
            )
            for monster in world.monsters.entries
            if monster.health > 0.0
        ),
        projectiles=tuple(
            ProjectileView(
                id=projectile.id,
                pos=projectile.pos,
                angle=projectile.angle,
                kind=projectile.kind,
                charge_level=projectile.charge_level,
                explosion_radius=projectile.explosion_radius,
            )
            for projectile in world.projectiles.entries
            if projectile.active
        ),
        boss=boss_view,
        boss_defeated=world.boss_defeated,
        particles=tuple(_particle_view(particle) for particle in session.fx.particles),
        damage_numbers=tuple(_number_view(number) for number in session.fx.damage_numbers),
    )
