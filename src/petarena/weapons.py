from __future__ import annotations

from dataclasses import dataclass

from petkit.color import RGBA
from petkit.geom import Vec2

from .charge import ChargeRelease, charged_shot_profile
from .constants import ATTACK_RANGE, CHARGE_SPEED_SCALE, PROJECTILE_SPEED
from .projectiles.pool import ProjectileStore
from .projectiles.types import (
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
    "CHARACTERS",
    "CHARACTER_BY_ID",
    "Character",
    "WEAPON_PROFILES",
    "WeaponProfile",
    "build_shot",
    "character_by_id",
    "projectile_kind_for_character",
]


@dataclass(frozen=True, slots=True)
class Character:
    id: str
    name: str
    italian_name: str
    color: RGBA
    projectile: ProjectileKind = ProjectileKind.DEFAULT


CHARACTERS: tuple[Character, ...] = (
    Character("tralalero", "Shark with Legs", "Tralalero Tralala", RGBA.from_hex("#4a90d9")),
    Character(
        "bombardiro",
        "Bomber Crocodile",
        "Bombardiro Crocodilo",
        RGBA.from_hex("#2d5a27"),
        ProjectileKind.WATERBALL,
    ),
    Character("tungtung", "Spoon Creature", "Tung Tung Tung Sahur", RGBA.from_hex("#c0c0c0")),
    Character(
        "brrpatapim",
        "Cold Bird",
        "Brr Brr Patapim",
        RGBA.from_hex("#87ceeb"),
        ProjectileKind.ACORN,
    ),
    Character("lirili", "Cat Fish", "Lirili Larila", RGBA.from_hex("#ff9f43")),
    Character(
        "capuchino",
        "Coffee Monkey",
        "Capuchino Assassino",
        RGBA.from_hex("#6f4e37"),
        ProjectileKind.BANANA,
    ),
    Character(
        "bombombini",
        "Explosive Penguin",
        "Bombombini Gusini",
        RGBA.from_hex("#1a1a2e"),
        ProjectileKind.BOOMERANG,
    ),
    Character("trippatroppa", "Dancing Elephant", "Trippa Troppa Truppa", RGBA.from_hex("#9e9e9e")),
)

CHARACTER_BY_ID: dict[str, Character] = {character.id: character for character in CHARACTERS}


def character_by_id(character_id: str) -> Character | None:
    return CHARACTER_BY_ID.get(str(character_id))


def projectile_kind_for_character(character_id: str | None) -> ProjectileKind:
    if character_id is None:
        return ProjectileKind.DEFAULT
    character = CHARACTER_BY_ID.get(str(character_id))
    if character is None:
        return ProjectileKind.DEFAULT
    return character.projectile


@dataclass(frozen=True, slots=True)
class WeaponProfile:
    kind: ProjectileKind
    speed_scale: float = 1.0
    range_scale: float = 1.0
    piercing: bool = False


WATERBALL_DOT_FRACTION = 0.2
WATERBALL_DOT_DURATION_S = 3.0
WATERBALL_SPLASH_RADIUS = 60.0
WATERBALL_SPLASH_FRACTION = 0.5

BANANA_SPLIT_COUNT = 3
BANANA_SPLIT_DAMAGE_FRACTION = 0.5
BANANA_SPLIT_RANGE = 120.0

ACORN_MAX_BOUNCES = 3
ACORN_BOUNCE_RADIUS = 200.0

BOOMERANG_ARC_RATE = 1.5  # radians per second while outbound
BOOMERANG_CATCH_RADIUS = 25.0

WEAPON_PROFILES: dict[ProjectileKind, WeaponProfile] = {
    ProjectileKind.DEFAULT: WeaponProfile(ProjectileKind.DEFAULT),
    ProjectileKind.WATERBALL: WeaponProfile(ProjectileKind.WATERBALL, speed_scale=0.85),
    ProjectileKind.BANANA: WeaponProfile(ProjectileKind.BANANA),
    ProjectileKind.ACORN: WeaponProfile(ProjectileKind.ACORN, speed_scale=1.15),
    ProjectileKind.BOOMERANG: WeaponProfile(ProjectileKind.BOOMERANG, piercing=True),
}


def _payload_for(kind: ProjectileKind, damage: float) -> ProjectilePayload:
    match kind:
        case ProjectileKind.WATERBALL:
            return WaterballPayload(
                dot_damage=max(1.0, float(damage) * WATERBALL_DOT_FRACTION),
                dot_duration_s=WATERBALL_DOT_DURATION_S,
                splash_radius=WATERBALL_SPLASH_RADIUS,
                splash_fraction=WATERBALL_SPLASH_FRACTION,
            )
        case ProjectileKind.BANANA:
            return BananaPayload(
                split_count=BANANA_SPLIT_COUNT,
                split_damage_fraction=BANANA_SPLIT_DAMAGE_FRACTION,
                split_range=BANANA_SPLIT_RANGE,
            )
        case ProjectileKind.ACORN:
            return AcornPayload(max_bounces=ACORN_MAX_BOUNCES, bounce_radius=ACORN_BOUNCE_RADIUS)
        case ProjectileKind.BOOMERANG:
            return BoomerangPayload(
                arc_sign=1.0,
                arc_rate=BOOMERANG_ARC_RATE,
                catch_radius=BOOMERANG_CATCH_RADIUS,
            )
        case _:
            return DefaultPayload()


def build_shot(
    store: ProjectileStore,
    *,
    kind: ProjectileKind | int,
    origin: Vec2,
    angle: float,
    power: float,
    charge: ChargeRelease | None = None,
) -> Projectile:
    """Spawn one attack projectile.

    Unknown kinds degrade to the default shot. A `charge` scales damage and range
    and may add piercing and an explosion radius on top of the kind's profile.
    """

    try:
        resolved = ProjectileKind(int(kind))
    except ValueError:
        resolved = ProjectileKind.DEFAULT
    profile = WEAPON_PROFILES.get(resolved, WEAPON_PROFILES[ProjectileKind.DEFAULT])

    damage = float(power)
    max_range = ATTACK_RANGE * profile.range_scale
    speed = PROJECTILE_SPEED * profile.speed_scale
    piercing = profile.piercing
    explosion_radius: float | None = None
    charge_level = 0
    if charge is not None:
        shot = charged_shot_profile(charge.level)
        charge_level = shot.level
        damage *= shot.damage_multiplier
        max_range = shot.range * profile.range_scale
        speed *= CHARGE_SPEED_SCALE
        piercing = piercing or shot.piercing
        explosion_radius = shot.explosion_radius

    return store.spawn(
        pos=origin,
        vel=Vec2.from_polar(float(angle), speed),
        damage=damage,
        max_range=max_range,
        kind=profile.kind,
        payload=_payload_for(profile.kind, damage),
        charged=charge is not None,
        charge_level=charge_level,
        piercing=piercing,
        explosion_radius=explosion_radius,
    )
