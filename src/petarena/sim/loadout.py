from __future__ import annotations

from dataclasses import dataclass

from ..areas import AreaDef, BossArchetype
from ..attributes import Attribute, Attributes, EquipmentBonuses, attack_cooldown_ms, effective_power
from ..equipment import Equipped, equipment_bonuses
from ..projectiles.types import ProjectileKind
from ..weapons import projectile_kind_for_character

__all__ = ["RunLoadout"]


@dataclass(frozen=True, slots=True, kw_only=True)
class RunLoadout:
    """Everything the arena reads from the pet layer; immutable for a run."""

    area_id: str
    difficulty: float
    weakness: Attribute
    boss_archetype: BossArchetype
    attributes: Attributes
    bonuses: EquipmentBonuses
    projectile_kind: ProjectileKind = ProjectileKind.DEFAULT

    @classmethod
    def for_area(
        cls,
        area: AreaDef,
        *,
        attributes: Attributes,
        equipped: Equipped | None = None,
        character_id: str | None = None,
    ) -> RunLoadout:
        return cls(
            area_id=area.id,
            difficulty=float(area.difficulty),
            weakness=area.weakness,
            boss_archetype=area.boss,
            attributes=attributes,
            bonuses=equipment_bonuses(equipped or Equipped()),
            projectile_kind=projectile_kind_for_character(character_id),
        )

    def power(self) -> int:
        return effective_power(self.attributes, self.bonuses, self.weakness)

    def attack_cooldown_ms(self) -> float:
        return attack_cooldown_ms(self.attributes, self.bonuses)
