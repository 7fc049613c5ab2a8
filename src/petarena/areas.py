from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

from .attributes import Attribute

__all__ = [
    "AREAS",
    "AREA_BY_ID",
    "AreaDef",
    "AreaType",
    "BossArchetype",
    "UnlockRequirement",
    "area_by_id",
    "boss_archetype_for",
]


class AreaType(StrEnum):
    SCRAPYARD = "scrapyard"
    FOREST = "forest"
    MOUNTAIN = "mountain"
    OCEAN = "ocean"


class BossArchetype(IntEnum):
    SHIELDED = 0
    MINION_SUMMONER = 1
    WAVE_GATED = 2
    BRUTE = 3


_ARCHETYPE_BY_TYPE: dict[AreaType, BossArchetype] = {
    AreaType.SCRAPYARD: BossArchetype.SHIELDED,
    AreaType.FOREST: BossArchetype.MINION_SUMMONER,
    AreaType.MOUNTAIN: BossArchetype.WAVE_GATED,
    AreaType.OCEAN: BossArchetype.BRUTE,
}

_WEAKNESS_BY_TYPE: dict[AreaType, Attribute] = {
    AreaType.SCRAPYARD: Attribute.CLARITY,
    AreaType.FOREST: Attribute.SPEED,
    AreaType.MOUNTAIN: Attribute.STRENGTH,
    AreaType.OCEAN: Attribute.WISDOM,
}


def boss_archetype_for(area_type: AreaType) -> BossArchetype:
    return _ARCHETYPE_BY_TYPE[AreaType(area_type)]


@dataclass(frozen=True, slots=True)
class UnlockRequirement:
    area_id: str
    level_required: int


@dataclass(frozen=True, slots=True, kw_only=True)
class AreaDef:
    id: str
    name: str
    type: AreaType
    description: str
    weakness: Attribute
    required_level: int
    difficulty: int
    boss: BossArchetype
    unlock: UnlockRequirement | None = None


def _area(
    area_id: str,
    name: str,
    area_type: AreaType,
    description: str,
    *,
    required_level: int,
    difficulty: int,
    starter: str | None = None,
) -> AreaDef:
    return AreaDef(
        id=area_id,
        name=name,
        type=area_type,
        description=description,
        weakness=_WEAKNESS_BY_TYPE[area_type],
        required_level=int(required_level),
        difficulty=int(difficulty),
        boss=_ARCHETYPE_BY_TYPE[area_type],
        unlock=UnlockRequirement(starter, 5) if starter is not None else None,
    )


def _tier(area_type: AreaType, entries: tuple[tuple[str, str], ...]) -> tuple[AreaDef, ...]:
    # Each area type has four tiers; tiers 2-4 unlock after progress 5 in the starter.
    levels = (1, 10, 25, 50)
    difficulties = (1, 3, 5, 8)
    starter = f"{area_type.value}_1"
    out: list[AreaDef] = []
    for index, (name, description) in enumerate(entries):
        out.append(
            _area(
                f"{area_type.value}_{index + 1}",
                name,
                area_type,
                description,
                required_level=levels[index],
                difficulty=difficulties[index],
                starter=None if index == 0 else starter,
            )
        )
    return tuple(out)


AREAS: tuple[AreaDef, ...] = (
    *_tier(
        AreaType.SCRAPYARD,
        (
            ("Scrapyard", "A junkyard filled with rusty robots"),
            ("Robot Factory", "An abandoned factory with malfunctioning machines"),
            ("Cyber Wasteland", "A desolate land of broken technology"),
            ("AI Core", "The heart of all machines"),
        ),
    ),
    *_tier(
        AreaType.FOREST,
        (
            ("Enchanted Forest", "A mystical forest with swift creatures"),
            ("Dark Woods", "A shadowy forest with agile predators"),
            ("Ancient Grove", "An ancient forest with legendary beasts"),
            ("World Tree", "The heart of all forests"),
        ),
    ),
    *_tier(
        AreaType.MOUNTAIN,
        (
            ("Rocky Hills", "Rocky terrain with tough monsters"),
            ("Caverns", "Deep caves with powerful creatures"),
            ("Frozen Peak", "Icy mountains with fierce beasts"),
            ("Dragon's Lair", "The ultimate challenge"),
        ),
    ),
    *_tier(
        AreaType.OCEAN,
        (
            ("Shallow Waters", "Calm waters with cunning fish"),
            ("Coral Reef", "Colorful reef with tricky creatures"),
            ("Deep Abyss", "The dark depths of the ocean"),
            ("Atlantis", "The legendary underwater city"),
        ),
    ),
)

AREA_BY_ID: dict[str, AreaDef] = {area.id: area for area in AREAS}


def area_by_id(area_id: str) -> AreaDef | None:
    return AREA_BY_ID.get(str(area_id))
