from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .attributes import EquipmentBonuses
from .crand import Crand

__all__ = [
    "EQUIPMENT_BY_ID",
    "EQUIPMENT_POOL",
    "Equipment",
    "EquipmentSlot",
    "Equipped",
    "Rarity",
    "equipment_bonuses",
    "rarity_weights",
    "roll_equipment",
]


class EquipmentSlot(StrEnum):
    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"


class Rarity(StrEnum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


@dataclass(frozen=True, slots=True)
class Equipment:
    id: str
    name: str
    slot: EquipmentSlot
    rarity: Rarity
    bonuses: EquipmentBonuses
    description: str = ""


@dataclass(frozen=True, slots=True)
class Equipped:
    weapon: Equipment | None = None
    armor: Equipment | None = None
    accessory: Equipment | None = None

    def items(self) -> tuple[Equipment, ...]:
        return tuple(item for item in (self.weapon, self.armor, self.accessory) if item is not None)

    def with_item(self, item: Equipment) -> Equipped:
        match item.slot:
            case EquipmentSlot.WEAPON:
                return Equipped(weapon=item, armor=self.armor, accessory=self.accessory)
            case EquipmentSlot.ARMOR:
                return Equipped(weapon=self.weapon, armor=item, accessory=self.accessory)
            case EquipmentSlot.ACCESSORY:
                return Equipped(weapon=self.weapon, armor=self.armor, accessory=item)


def _item(
    item_id: str,
    name: str,
    slot: EquipmentSlot,
    rarity: Rarity,
    description: str,
    **bonuses: int,
) -> Equipment:
    return Equipment(
        id=item_id,
        name=name,
        slot=slot,
        rarity=rarity,
        bonuses=EquipmentBonuses(**bonuses),
        description=description,
    )


_W = EquipmentSlot.WEAPON
_A = EquipmentSlot.ARMOR
_X = EquipmentSlot.ACCESSORY

EQUIPMENT_POOL: tuple[Equipment, ...] = (
    _item("wooden_sword", "Wooden Sword", _W, Rarity.COMMON, "A basic training sword", attack_power=5),
    _item("iron_sword", "Iron Sword", _W, Rarity.UNCOMMON, "A sturdy iron blade", attack_power=10, strength=2),
    _item("fiery_sword", "Fiery Sword", _W, Rarity.RARE, "A blade engulfed in flames", attack_power=20, strength=5),
    _item("lightning_blade", "Lightning Blade", _W, Rarity.EPIC, "Crackling with electricity", attack_power=35, speed=10),
    _item(
        "excalibur", "Excalibur", _W, Rarity.LEGENDARY, "The legendary sword of kings",
        attack_power=50, strength=15, clarity=10,
    ),
    _item("leather_armor", "Leather Armor", _A, Rarity.COMMON, "Basic protection", defense=5),
    _item("chainmail", "Chainmail", _A, Rarity.UNCOMMON, "Linked metal rings", defense=10, strength=2),
    _item("golden_armor", "Golden Armor", _A, Rarity.RARE, "Gleaming protective gear", defense=20, clarity=5),
    _item(
        "dragon_armor", "Dragon Armor", _A, Rarity.EPIC, "Forged from dragon scales",
        defense=35, strength=8, wisdom=5,
    ),
    _item(
        "cosmic_armor", "Cosmic Armor", _A, Rarity.LEGENDARY, "Armor from the stars",
        defense=50, speed=10, wisdom=10, clarity=10,
    ),
    _item("lucky_charm", "Lucky Charm", _X, Rarity.COMMON, "Brings good fortune", speed=3),
    _item("wisdom_ring", "Wisdom Ring", _X, Rarity.UNCOMMON, "Enhances mental clarity", wisdom=8, clarity=4),
    _item("power_amulet", "Power Amulet", _X, Rarity.RARE, "Amplifies your strength", strength=12, attack_power=8),
    _item("speed_boots", "Speed Boots", _X, Rarity.EPIC, "Move like the wind", speed=20, attack_power=5),
    _item(
        "crown_champions", "Crown of Champions", _X, Rarity.LEGENDARY, "The ultimate prize",
        speed=15, wisdom=15, strength=15, clarity=15,
    ),
)

EQUIPMENT_BY_ID: dict[str, Equipment] = {item.id: item for item in EQUIPMENT_POOL}


def equipment_bonuses(items: Equipped | Iterable[Equipment]) -> EquipmentBonuses:
    if isinstance(items, Equipped):
        items = items.items()
    total = EquipmentBonuses()
    for item in items:
        total = total + item.bonuses
    return total


def rarity_weights(difficulty: float) -> tuple[tuple[Rarity, float], ...]:
    """Rarity roll weights; higher difficulty shifts weight towards rare items."""
    d = max(0.0, float(difficulty))
    return (
        (Rarity.COMMON, 50.0 + max(0.0, 30.0 - d * 5.0)),
        (Rarity.UNCOMMON, 30.0),
        (Rarity.RARE, 15.0 + d),
        (Rarity.EPIC, 4.0 + d),
        (Rarity.LEGENDARY, float(1 + int(d) // 3)),
    )


def roll_equipment(difficulty: float, rng: Crand) -> Equipment | None:
    weights = rarity_weights(difficulty)
    total = sum(weight for _, weight in weights)
    roll = rng.unit() * total
    selected = Rarity.COMMON
    for rarity, weight in weights:
        roll -= weight
        if roll <= 0.0:
            selected = rarity
            break
    pool = [item for item in EQUIPMENT_POOL if item.rarity == selected]
    if not pool:
        return None
    return rng.choice(pool)
