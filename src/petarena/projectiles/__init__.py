from __future__ import annotations

from .behaviors import advance_projectile, projectile_out_of_play
from .collision import ProjectileHit, ProjectileStepResult, SplashHit, find_bounce_target, update_projectiles
from .pool import ProjectileStore
from .types import (
    AcornPayload,
    BananaPayload,
    BoomerangPayload,
    DefaultPayload,
    Projectile,
    ProjectileKind,
    ProjectilePayload,
    WaterballPayload,
)

__all__ = [
    "AcornPayload",
    "BananaPayload",
    "BoomerangPayload",
    "DefaultPayload",
    "Projectile",
    "ProjectileHit",
    "ProjectileKind",
    "ProjectilePayload",
    "ProjectileStepResult",
    "ProjectileStore",
    "SplashHit",
    "WaterballPayload",
    "advance_projectile",
    "find_bounce_target",
    "projectile_out_of_play",
    "update_projectiles",
]
