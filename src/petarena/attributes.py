from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .constants import (
    ATTACK_COOLDOWN_PER_SPEED_MS,
    AUTO_ATTACK_COOLDOWN_MS,
    MIN_ATTACK_COOLDOWN_MS,
)

__all__ = [
    "Attribute",
    "Attributes",
    "EquipmentBonuses",
    "attack_cooldown_ms",
    "effective_power",
]

BASE_POWER = 10
POWER_ATTRIBUTE_DIVISOR = 5


class Attribute(StrEnum):
    SPEED = "speed"
    WISDOM = "wisdom"
    STRENGTH = "strength"
    CLARITY = "clarity"


@dataclass(frozen=True, slots=True)
class Attributes:
    speed: int = 0
    wisdom: int = 0
    strength: int = 0
    clarity: int = 0

    def get(self, attribute: Attribute) -> int:
        return int(getattr(self, attribute.value))


@dataclass(frozen=True, slots=True)
class EquipmentBonuses:
    speed: int = 0
    wisdom: int = 0
    strength: int = 0
    clarity: int = 0
    attack_power: int = 0
    defense: int = 0

    def get(self, attribute: Attribute) -> int:
        return int(getattr(self, attribute.value))

    def __add__(self, other: EquipmentBonuses) -> EquipmentBonuses:
        return EquipmentBonuses(
            speed=self.speed + other.speed,
            wisdom=self.wisdom + other.wisdom,
            strength=self.strength + other.strength,
            clarity=self.clarity + other.clarity,
            attack_power=self.attack_power + other.attack_power,
            defense=self.defense + other.defense,
        )


def _attribute_total(base: Attributes, bonuses: EquipmentBonuses, attribute: Attribute) -> int:
    return max(0, base.get(attribute) + bonuses.get(attribute))


def effective_power(base: Attributes, bonuses: EquipmentBonuses, weakness: Attribute) -> int:
    """Damage dealt by a single uncharged shot.

    Strength always contributes; the attribute the area is weak against
    contributes a second term (so strength counts twice in strength-weak areas).
    """
    strength_term = _attribute_total(base, bonuses, Attribute.STRENGTH) // POWER_ATTRIBUTE_DIVISOR
    weakness_term = _attribute_total(base, bonuses, weakness) // POWER_ATTRIBUTE_DIVISOR
    return BASE_POWER + strength_term + weakness_term + max(0, int(bonuses.attack_power))


def attack_cooldown_ms(base: Attributes, bonuses: EquipmentBonuses) -> float:
    speed = _attribute_total(base, bonuses, Attribute.SPEED)
    cooldown = AUTO_ATTACK_COOLDOWN_MS - float(speed) * ATTACK_COOLDOWN_PER_SPEED_MS
    return max(MIN_ATTACK_COOLDOWN_MS, cooldown)
