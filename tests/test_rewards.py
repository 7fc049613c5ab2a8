from __future__ import annotations

import pytest

from petarena.crand import Crand
from petarena.equipment import EQUIPMENT_BY_ID
from petarena.rewards import calculate_rewards, equipment_drop_chance


def test_rewards_follow_score_levels_and_difficulty() -> None:
    rewards = calculate_rewards(score=101, levels_completed=3, total_levels=6, difficulty=2, rng=Crand(0))

    assert rewards.xp == 101 + 3 * 50 * 2
    assert rewards.coins == 50 + 3 * 20 * 2


def test_zero_levels_never_drop_equipment() -> None:
    for seed in range(50):
        rewards = calculate_rewards(score=0, levels_completed=0, total_levels=6, difficulty=8, rng=Crand(seed))
        assert rewards.equipment_id is None
        assert rewards.xp == 0
        assert rewards.coins == 0


@pytest.mark.parametrize("score", [-500, 0, 7, 12345])
@pytest.mark.parametrize("levels", [-1, 0, 6])
def test_rewards_are_non_negative_integers(score: int, levels: int) -> None:
    rewards = calculate_rewards(score=score, levels_completed=levels, total_levels=6, difficulty=3, rng=Crand(9))

    assert isinstance(rewards.xp, int) and rewards.xp >= 0
    assert isinstance(rewards.coins, int) and rewards.coins >= 0
    assert rewards.equipment_id is None or rewards.equipment_id in EQUIPMENT_BY_ID


def test_drop_chance_scales_with_completion_and_difficulty() -> None:
    assert equipment_drop_chance(0, 6, 8) == 0.0
    assert equipment_drop_chance(6, 6, 1) == pytest.approx(0.35)
    assert equipment_drop_chance(3, 6, 1) == pytest.approx(0.175)
    assert equipment_drop_chance(6, 6, 8) == pytest.approx(0.7)


def test_full_clears_eventually_drop_items() -> None:
    rng = Crand(2024)
    drops = [
        calculate_rewards(score=300, levels_completed=6, total_levels=6, difficulty=8, rng=rng).equipment_id
        for _ in range(100)
    ]

    assert any(drop is not None for drop in drops)
    assert any(drop is None for drop in drops)
