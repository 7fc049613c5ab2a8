from __future__ import annotations

import pytest

from petkit.geom import Vec2

from petarena.areas import BossArchetype
from petarena.constants import GAME_HEIGHT, GAME_WIDTH, MAX_LEVEL
from petarena.crand import Crand
from petarena.monsters.boss import MinionWave, boss_max_health
from petarena.monsters.spawn import (
    SpawnDirector,
    boss_due,
    build_boss_spawn,
    build_minion_wave,
    build_regular_spawn,
    elite_chance,
    level_for_elapsed,
    monster_health,
    spawn_batch_size,
    spawn_delay_ms,
    tick_regular_spawns,
)
from petarena.monsters.state import Boss, Elite, Minion, MinionRequirement, Regular, SpawnSide


def test_level_for_elapsed_is_clamped_to_run_levels() -> None:
    assert level_for_elapsed(0.0) == 1
    assert level_for_elapsed(29.9) == 1
    assert level_for_elapsed(30.0) == 2
    assert level_for_elapsed(150.0) == MAX_LEVEL
    assert level_for_elapsed(500.0) == MAX_LEVEL


def test_spawn_pacing_scales_with_level() -> None:
    assert spawn_delay_ms(1) == pytest.approx(1750.0)
    assert spawn_delay_ms(6) == pytest.approx(600.0)
    assert [spawn_batch_size(level) for level in range(1, 7)] == [1, 1, 2, 2, 3, 3]
    assert elite_chance(2) == pytest.approx(0.1)
    assert elite_chance(50) == pytest.approx(0.5)
    assert monster_health(2, 3) == pytest.approx(55.0)


def test_build_regular_spawn_is_deterministic_and_on_an_edge() -> None:
    rng_a = Crand(7)
    rng_b = Crand(7)
    first = [build_regular_spawn(rng_a, level=4, difficulty=1) for _ in range(20)]
    second = [build_regular_spawn(rng_b, level=4, difficulty=1) for _ in range(20)]

    assert first == second
    for init in first:
        match init.spawn_side:
            case SpawnSide.TOP:
                assert init.pos.y == 0.0
            case SpawnSide.LEFT:
                assert init.pos.x == 0.0
            case SpawnSide.RIGHT:
                assert init.pos.x == GAME_WIDTH
        if isinstance(init.kind, Elite):
            assert init.health == pytest.approx(monster_health(4, 1) * 3.0)
            assert init.speed_multiplier == pytest.approx(2.0)
        else:
            assert isinstance(init.kind, Regular)
            assert init.health == pytest.approx(monster_health(4, 1))


def test_tick_regular_spawns_waits_for_check_interval_and_delay() -> None:
    director = SpawnDirector()
    rng = Crand(1)

    assert tick_regular_spawns(director, 50.0, rng, elapsed_ms=50.0, level=1, difficulty=1, boss_alive=False) == ()
    assert tick_regular_spawns(director, 50.0, rng, elapsed_ms=100.0, level=1, difficulty=1, boss_alive=False) == ()

    batch = tick_regular_spawns(director, 100.0, rng, elapsed_ms=1800.0, level=1, difficulty=1, boss_alive=False)

    assert len(batch) == 1
    assert director.last_spawn_ms == pytest.approx(1800.0)
    # The next batch waits a full delay again.
    assert tick_regular_spawns(director, 100.0, rng, elapsed_ms=1900.0, level=1, difficulty=1, boss_alive=False) == ()


def test_no_regular_spawns_while_boss_alive() -> None:
    director = SpawnDirector()

    batch = tick_regular_spawns(director, 100.0, Crand(1), elapsed_ms=170_000.0, level=6, difficulty=1, boss_alive=True)

    assert batch == ()
    assert director.last_spawn_ms == 0.0


def test_boss_spawns_once_in_final_level() -> None:
    director = SpawnDirector()

    assert not boss_due(director, level=5, boss_exists=False)
    assert boss_due(director, level=6, boss_exists=False)
    assert not boss_due(director, level=6, boss_exists=True)
    director.boss_spawned = True
    assert not boss_due(director, level=6, boss_exists=False)

    init = build_boss_spawn(BossArchetype.WAVE_GATED, difficulty=2)
    assert init.kind == Boss(BossArchetype.WAVE_GATED)
    assert init.health == pytest.approx(boss_max_health(BossArchetype.WAVE_GATED, 2))
    assert init.health == pytest.approx(1000.0)


def test_minion_wave_ring_stays_inside_the_arena() -> None:
    wave = MinionWave(5, MinionRequirement.CHARGED)

    inits = build_minion_wave(wave, center=Vec2(10.0, 10.0), level=6, difficulty=1)

    assert len(inits) == 5
    for init in inits:
        assert init.kind == Minion(MinionRequirement.CHARGED)
        assert 0.0 <= init.pos.x <= GAME_WIDTH
        assert 0.0 <= init.pos.y <= GAME_HEIGHT
        assert init.health == pytest.approx(17.0)
