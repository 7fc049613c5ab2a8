from __future__ import annotations

import pytest

from petarena.areas import AREAS, BossArchetype, area_by_id, boss_archetype_for
from petarena.attributes import Attribute, Attributes, EquipmentBonuses, attack_cooldown_ms, effective_power
from petarena.equipment import (
    EQUIPMENT_BY_ID,
    EQUIPMENT_POOL,
    EquipmentSlot,
    Equipped,
    Rarity,
    equipment_bonuses,
    rarity_weights,
    roll_equipment,
)
from petarena.crand import Crand
from petarena.projectiles.types import ProjectileKind
from petarena.sim.loadout import RunLoadout


def test_effective_power_adds_strength_weakness_and_flat_bonus() -> None:
    base = Attributes(strength=10, clarity=7)

    assert effective_power(base, EquipmentBonuses(), Attribute.CLARITY) == 10 + 2 + 1
    assert effective_power(base, EquipmentBonuses(attack_power=5, clarity=3), Attribute.CLARITY) == 10 + 2 + 2 + 5


def test_effective_power_counts_strength_twice_in_strength_weak_area() -> None:
    base = Attributes(strength=10)

    assert effective_power(base, EquipmentBonuses(), Attribute.STRENGTH) == 14


def test_attack_cooldown_shrinks_with_speed_and_is_floored() -> None:
    assert attack_cooldown_ms(Attributes(), EquipmentBonuses()) == pytest.approx(500.0)
    assert attack_cooldown_ms(Attributes(speed=100), EquipmentBonuses()) == pytest.approx(200.0)
    assert attack_cooldown_ms(Attributes(speed=100), EquipmentBonuses(speed=100)) == pytest.approx(150.0)


def test_equipped_with_item_replaces_slot() -> None:
    equipped = Equipped().with_item(EQUIPMENT_BY_ID["wooden_sword"]).with_item(EQUIPMENT_BY_ID["lucky_charm"])
    equipped = equipped.with_item(EQUIPMENT_BY_ID["iron_sword"])

    assert equipped.weapon is EQUIPMENT_BY_ID["iron_sword"]
    assert equipped.armor is None
    bonuses = equipment_bonuses(equipped)
    assert bonuses.attack_power == 10
    assert bonuses.strength == 2
    assert bonuses.speed == 3


def test_equipment_pool_covers_every_slot_and_rarity() -> None:
    slots = {item.slot for item in EQUIPMENT_POOL}
    rarities = {item.rarity for item in EQUIPMENT_POOL}

    assert slots == set(EquipmentSlot)
    assert rarities == set(Rarity)


def test_rarity_weights_shift_towards_rare_items_with_difficulty() -> None:
    easy = dict(rarity_weights(1))
    hard = dict(rarity_weights(8))

    assert hard[Rarity.COMMON] < easy[Rarity.COMMON]
    assert hard[Rarity.EPIC] > easy[Rarity.EPIC]
    assert hard[Rarity.LEGENDARY] > easy[Rarity.LEGENDARY]


def test_roll_equipment_is_deterministic_for_a_seed() -> None:
    rng_a = Crand(42)
    rng_b = Crand(42)
    first = [roll_equipment(3, rng_a) for _ in range(5)]
    second = [roll_equipment(3, rng_b) for _ in range(5)]

    assert first == second
    assert all(item is not None for item in first)


def test_area_table_carries_archetype_and_weakness() -> None:
    assert len(AREAS) == 16
    scrapyard = area_by_id("scrapyard_1")
    assert scrapyard is not None
    assert scrapyard.boss is BossArchetype.SHIELDED
    assert scrapyard.weakness is Attribute.CLARITY
    assert scrapyard.unlock is None

    lair = area_by_id("mountain_4")
    assert lair is not None
    assert lair.difficulty == 8
    assert lair.boss is boss_archetype_for(lair.type)
    assert lair.unlock is not None
    assert lair.unlock.area_id == "mountain_1"
    assert area_by_id("nowhere") is None


def test_run_loadout_resolves_power_and_projectile_kind() -> None:
    area = area_by_id("mountain_1")
    assert area is not None

    loadout = RunLoadout.for_area(
        area,
        attributes=Attributes(strength=10),
        equipped=Equipped(weapon=EQUIPMENT_BY_ID["wooden_sword"]),
        character_id="capuchino",
    )

    assert loadout.boss_archetype is BossArchetype.WAVE_GATED
    assert loadout.power() == 10 + 2 + 2 + 5
    assert loadout.projectile_kind is ProjectileKind.BANANA
    assert RunLoadout.for_area(area, attributes=Attributes(), character_id="missing").projectile_kind is (
        ProjectileKind.DEFAULT
    )
