from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from petkit.geom import Vec2

__all__ = [
    "AcornPayload",
    "BananaPayload",
    "BoomerangPayload",
    "DefaultPayload",
    "Projectile",
    "ProjectileKind",
    "ProjectilePayload",
    "WaterballPayload",
]


class ProjectileKind(IntEnum):
    DEFAULT = 0
    WATERBALL = 1
    BANANA = 2
    ACORN = 3
    BOOMERANG = 4


@dataclass(slots=True)
class DefaultPayload:
    pass


@dataclass(slots=True)
class WaterballPayload:
    dot_damage: float
    dot_duration_s: float
    splash_radius: float
    splash_fraction: float


@dataclass(slots=True)
class BananaPayload:
    split_count: int
    split_damage_fraction: float
    split_range: float
    has_split: bool = False


@dataclass(slots=True)
class AcornPayload:
    max_bounces: int
    bounce_radius: float
    bounce_count: int = 0

    @property
    def bounces_left(self) -> int:
        return max(0, int(self.max_bounces) - int(self.bounce_count))


@dataclass(slots=True)
class BoomerangPayload:
    # +1 curves clockwise, -1 counter-clockwise.
    arc_sign: float
    arc_rate: float
    catch_radius: float
    returning: bool = False
    # Outbound distance covered so far, used to decide when to turn back.
    arc_progress: float = 0.0


ProjectilePayload = DefaultPayload | WaterballPayload | BananaPayload | AcornPayload | BoomerangPayload


@dataclass(slots=True)
class Projectile:
    id: int
    pos: Vec2
    vel: Vec2
    damage: float
    max_range: float
    kind: ProjectileKind = ProjectileKind.DEFAULT
    payload: ProjectilePayload = field(default_factory=DefaultPayload)
    traveled: float = 0.0
    charged: bool = False
    charge_level: int = 0
    piercing: bool = False
    explosion_radius: float | None = None
    hit_ids: set[int] = field(default_factory=set)
    active: bool = True

    @property
    def speed(self) -> float:
        return self.vel.length()

    @property
    def angle(self) -> float:
        return self.vel.to_angle()

    def expire(self) -> None:
        self.active = False
