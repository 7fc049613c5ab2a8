from __future__ import annotations

from petkit.geom import Bounds, Vec2

from ..constants import PROJECTILE_BOUNDS_MARGIN
from .types import BoomerangPayload, Projectile

__all__ = [
    "BOOMERANG_SAFETY_RANGE_SCALE",
    "advance_projectile",
    "projectile_out_of_play",
]

BOOMERANG_SAFETY_RANGE_SCALE = 3.0


def _advance_boomerang(projectile: Projectile, payload: BoomerangPayload, dt: float, avatar_pos: Vec2) -> float:
    speed = projectile.vel.length()
    if not payload.returning:
        projectile.vel = projectile.vel.rotated(payload.arc_sign * payload.arc_rate * dt)
        step = speed * dt
        projectile.pos = projectile.pos + projectile.vel * dt
        payload.arc_progress += step
        if payload.arc_progress >= projectile.max_range * 0.5:
            payload.returning = True
        return step

    # Homing leg: steer straight at the avatar's current position every step.
    to_avatar = avatar_pos - projectile.pos
    distance = to_avatar.length()
    step = speed * dt
    if distance <= payload.catch_radius or distance <= step:
        projectile.pos = avatar_pos
        projectile.expire()
        return min(step, distance)
    projectile.vel = to_avatar * (speed / distance)
    projectile.pos = projectile.pos + projectile.vel * dt
    if projectile.pos.distance_to(avatar_pos) <= payload.catch_radius:
        projectile.expire()
    return step


def advance_projectile(projectile: Projectile, dt: float, *, avatar_pos: Vec2) -> float:
    """Move one projectile by `dt` seconds; returns distance covered.

    A boomerang caught by the avatar is expired here.
    """

    if not projectile.active or dt <= 0.0:
        return 0.0
    match projectile.payload:
        case BoomerangPayload() as payload:
            step = _advance_boomerang(projectile, payload, dt, avatar_pos)
        case _:
            step = projectile.vel.length() * dt
            projectile.pos = projectile.pos + projectile.vel * dt
    projectile.traveled += step
    return step


def projectile_out_of_play(projectile: Projectile, bounds: Bounds) -> bool:
    if not bounds.contains(projectile.pos, margin=PROJECTILE_BOUNDS_MARGIN):
        return True
    if isinstance(projectile.payload, BoomerangPayload):
        return projectile.traveled >= projectile.max_range * BOOMERANG_SAFETY_RANGE_SCALE
    return projectile.traveled >= projectile.max_range
