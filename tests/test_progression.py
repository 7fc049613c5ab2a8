from __future__ import annotations

from petarena.areas import area_by_id
from petarena.config import RewardBundle, RunResult
from petarena.progression import PetProgress, apply_run_result, is_area_unlocked, xp_for_level


def test_apply_run_result_levels_up_and_collects_item() -> None:
    area = area_by_id("scrapyard_1")
    assert area is not None
    progress = PetProgress()
    result = RunResult(
        success=False,
        waves_completed=4,
        total_waves=6,
        score=100,
        area_id=area.id,
        rewards=RewardBundle(xp=130, coins=70, equipment_id="wisdom_ring"),
    )

    update = apply_run_result(progress, area, result)

    assert xp_for_level(1) == 60
    assert [level_up.level for level_up in update.level_ups] == [2, 3]
    assert progress.level == 3
    assert progress.xp == 0
    assert progress.coins == 70 + 14 + 16
    assert update.item is not None and update.item.id == "wisdom_ring"
    assert progress.inventory == [update.item]
    assert progress.area_progress == {"scrapyard_1": 4}


def test_area_progress_keeps_the_best_run() -> None:
    area = area_by_id("forest_1")
    assert area is not None
    progress = PetProgress(area_progress={"forest_1": 5})

    apply_run_result(progress, area, RunResult(waves_completed=2, area_id=area.id))

    assert progress.area_progress["forest_1"] == 5


def test_higher_tiers_unlock_after_starter_progress() -> None:
    starter = area_by_id("ocean_1")
    tier_two = area_by_id("ocean_2")
    assert starter is not None and tier_two is not None
    progress = PetProgress()

    assert is_area_unlocked(starter, progress)
    assert not is_area_unlocked(tier_two, progress)
    progress.area_progress["ocean_1"] = 4
    assert not is_area_unlocked(tier_two, progress)
    progress.area_progress["ocean_1"] = 5
    assert is_area_unlocked(tier_two, progress)
