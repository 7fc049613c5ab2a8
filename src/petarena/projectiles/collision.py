from __future__ import annotations

from dataclasses import dataclass, field
import math

from petkit.geom import Bounds, Vec2

from ..monsters.boss import BossSignal, BossState, HitVerdict, register_boss_hit, resolve_hit_gate
from ..monsters.damage import DamageSource, apply_dot, monster_apply_damage
from ..monsters.state import MonsterState, MonsterStore
from .behaviors import advance_projectile, projectile_out_of_play
from .pool import ProjectileStore
from .types import AcornPayload, BananaPayload, Projectile, WaterballPayload

__all__ = [
    "ProjectileHit",
    "ProjectileStepResult",
    "SplashHit",
    "find_bounce_target",
    "update_projectiles",
]


@dataclass(frozen=True, slots=True)
class ProjectileHit:
    projectile_id: int
    monster_id: int
    pos: Vec2
    verdict: HitVerdict
    damage: float
    charged: bool
    killed: bool


@dataclass(frozen=True, slots=True)
class SplashHit:
    monster_id: int
    pos: Vec2
    damage: float
    killed: bool


@dataclass(slots=True)
class ProjectileStepResult:
    hits: list[ProjectileHit] = field(default_factory=list)
    splashes: list[SplashHit] = field(default_factory=list)
    boss_signals: list[BossSignal] = field(default_factory=list)
    spawned: int = 0
    caught: int = 0
    expired: int = 0


def find_bounce_target(
    monsters: MonsterStore,
    origin: Vec2,
    *,
    radius: float,
    exclude: set[int],
) -> MonsterState | None:
    best: MonsterState | None = None
    best_dist_sq = float(radius) * float(radius)
    for monster in monsters.entries:
        if monster.health <= 0.0 or monster.id in exclude:
            continue
        dist_sq = Vec2.distance_sq(origin, monster.pos)
        if dist_sq <= best_dist_sq:
            best = monster
            best_dist_sq = dist_sq
    return best


def _apply_waterball(
    projectile: Projectile,
    payload: WaterballPayload,
    target: MonsterState,
    monsters: MonsterStore,
    boss_state: BossState | None,
    result: ProjectileStepResult,
) -> None:
    apply_dot(target, damage_per_tick=payload.dot_damage, duration_s=payload.dot_duration_s)
    splash_damage = projectile.damage * payload.splash_fraction
    radius_sq = payload.splash_radius * payload.splash_radius
    for other in monsters.entries:
        if other.id == target.id or other.health <= 0.0:
            continue
        if Vec2.distance_sq(target.pos, other.pos) > radius_sq:
            continue
        if resolve_hit_gate(other, boss_state, charged=projectile.charged) is not HitVerdict.DAMAGE:
            continue
        killed = monster_apply_damage(other, damage=splash_damage, source=DamageSource.SPLASH)
        result.splashes.append(SplashHit(other.id, other.pos, splash_damage, killed))


def _split_banana(projectile: Projectile, payload: BananaPayload, store: ProjectileStore) -> int:
    if payload.has_split or payload.split_count <= 0:
        return 0
    payload.has_split = True
    speed = projectile.vel.length()
    base_angle = projectile.vel.to_angle()
    step = math.tau / float(payload.split_count)
    for index in range(payload.split_count):
        store.spawn(
            pos=projectile.pos,
            vel=Vec2.from_polar(base_angle + step * float(index), speed),
            damage=projectile.damage * payload.split_damage_fraction,
            max_range=payload.split_range,
            kind=projectile.kind,
            payload=BananaPayload(
                split_count=0,
                split_damage_fraction=payload.split_damage_fraction,
                split_range=payload.split_range,
                has_split=True,
            ),
            charged=projectile.charged,
            charge_level=projectile.charge_level,
            hit_ids=projectile.hit_ids,
        )
    return payload.split_count


def _bounce_acorn(projectile: Projectile, payload: AcornPayload, monsters: MonsterStore) -> bool:
    if payload.bounces_left <= 0:
        return False
    target = find_bounce_target(monsters, projectile.pos, radius=payload.bounce_radius, exclude=projectile.hit_ids)
    if target is None:
        return False
    speed = projectile.vel.length()
    projectile.vel = projectile.pos.direction_to(target.pos) * speed
    projectile.traveled = 0.0
    payload.bounce_count += 1
    return True


def _collide(
    projectile: Projectile,
    store: ProjectileStore,
    monsters: MonsterStore,
    boss_state: BossState | None,
    result: ProjectileStepResult,
) -> None:
    for monster in monsters.entries:
        if monster.health <= 0.0 or monster.id in projectile.hit_ids:
            continue
        radius = projectile.explosion_radius if projectile.explosion_radius is not None else monster.radius
        if Vec2.distance_sq(projectile.pos, monster.pos) > radius * radius:
            continue

        verdict = resolve_hit_gate(monster, boss_state, charged=projectile.charged)
        if verdict is HitVerdict.IGNORE:
            continue
        projectile.hit_ids.add(monster.id)

        killed = False
        dealt = 0.0
        if verdict is HitVerdict.DAMAGE:
            dealt = projectile.damage
            killed = monster_apply_damage(monster, damage=dealt, source=DamageSource.DIRECT)
            match projectile.payload:
                case WaterballPayload() as payload:
                    _apply_waterball(projectile, payload, monster, monsters, boss_state, result)
                case BananaPayload() as payload:
                    result.spawned += _split_banana(projectile, payload, store)
                case _:
                    pass
        signal = register_boss_hit(monster, boss_state, charged=projectile.charged, verdict=verdict)
        if signal is not None:
            result.boss_signals.append(signal)
        result.hits.append(
            ProjectileHit(
                projectile_id=projectile.id,
                monster_id=monster.id,
                pos=monster.pos,
                verdict=verdict,
                damage=dealt,
                charged=projectile.charged,
                killed=killed,
            )
        )

        if projectile.piercing:
            continue
        match projectile.payload:
            case AcornPayload() as payload if verdict is HitVerdict.DAMAGE:
                if _bounce_acorn(projectile, payload, monsters):
                    return
        projectile.expire()
        result.expired += 1
        return


def update_projectiles(
    store: ProjectileStore,
    monsters: MonsterStore,
    dt: float,
    *,
    avatar_pos: Vec2,
    boss_state: BossState | None,
    bounds: Bounds,
) -> ProjectileStepResult:
    """Advance and collide every projectile that was in flight at step start.

    Sub-projectiles spawned by a split join the store immediately but first move
    on the next step. Expired entries are pruned before returning.
    """

    result = ProjectileStepResult()
    if dt <= 0.0:
        return result

    for projectile in store.iter_active():
        advance_projectile(projectile, dt, avatar_pos=avatar_pos)
        if not projectile.active:
            result.caught += 1
            continue
        if projectile_out_of_play(projectile, bounds):
            projectile.expire()
            result.expired += 1
            continue
        _collide(projectile, store, monsters, boss_state, result)

    store.prune()
    return result
