from __future__ import annotations

import math

import pytest

from petkit.geom import Vec2

from petarena.areas import BossArchetype, area_by_id
from petarena.attributes import Attributes
from petarena.autopilot import Autopilot
from petarena.charge import ChargeRelease
from petarena.config import RunResult
from petarena.constants import MAX_LEVEL, VULNERABLE_DURATION_MS
from petarena.monsters.boss import BossState
from petarena.monsters.spawn import build_boss_spawn
from petarena.monsters.state import Boss, Minion, MonsterState, Regular
from petarena.projectiles.types import ProjectileKind
from petarena.sim import CombatSession, PlayerInput, RunPhase, WorldState
from petarena.sim.input import MoveKey
from petarena.sim.loadout import RunLoadout
from petarena.weapons import build_shot

DT = 1.0 / 60.0
IDLE = PlayerInput()


def _session(area_id: str = "scrapyard_1", *, seed: int = 3, **kwargs) -> CombatSession:  # noqa: ANN003
    area = area_by_id(area_id)
    assert area is not None
    return CombatSession.build(area=area, attributes=Attributes(), seed=seed, **kwargs)


def _world(area_id: str = "scrapyard_1") -> WorldState:
    area = area_by_id(area_id)
    assert area is not None
    return WorldState.build(RunLoadout.for_area(area, attributes=Attributes()), seed=1)


def _hold_fire(world: WorldState) -> None:
    world.avatar.attack_cooldown_ms = 1e9


def _spawn_boss(world: WorldState, archetype: BossArchetype) -> MonsterState:
    boss = world.materialize(build_boss_spawn(archetype, difficulty=world.loadout.difficulty))
    world.boss_state = BossState(archetype=archetype)
    world.director.boss_spawned = True
    return boss


def test_start_resets_state_and_spawns_nothing_at_tick_zero() -> None:
    session = _session()

    assert session.phase is RunPhase.READY
    session.start()

    assert session.phase is RunPhase.PLAYING
    assert session.tick == 0
    assert len(session.world.monsters) == 0
    assert len(session.world.projectiles) == 0
    assert session.world.score == 0
    assert session.world.elapsed_ms == 0.0


def test_no_monsters_before_first_spawn_delay() -> None:
    session = _session()
    session.start()

    for _ in range(100):
        session.step_tick(IDLE)
    assert session.world.levels[1].spawned == 0

    for _ in range(30):
        session.step_tick(IDLE)
    assert session.world.levels[1].spawned >= 1


def test_kill_is_purged_on_the_same_tick_and_stops_colliding() -> None:
    world = _world()
    _hold_fire(world)
    monster = world.monsters.spawn(pos=Vec2(450.0, 300.0), health=20.0, kind=Regular())
    first = world.projectiles.spawn(pos=Vec2(450.0, 300.0), vel=Vec2(), damage=25.0, max_range=300.0)
    second = world.projectiles.spawn(pos=Vec2(450.0, 300.0), vel=Vec2(), damage=25.0, max_range=300.0)

    events = world.step(DT, IDLE)

    assert [death.monster_id for death in events.deaths] == [monster.id]
    assert world.monsters.get(monster.id) is None
    assert len(events.hits) == 1
    assert first.active is False
    assert second.active is True
    assert second.hit_ids == set()
    assert world.kills == 1
    assert world.score == 10


def test_shielded_boss_turns_vulnerable_after_three_charged_hits() -> None:
    world = _world("scrapyard_1")
    boss = _spawn_boss(world, BossArchetype.SHIELDED)
    assert world.boss_state is not None

    for index in range(3):
        _hold_fire(world)
        build_shot(
            world.projectiles,
            kind=ProjectileKind.DEFAULT,
            origin=boss.pos,
            angle=math.pi / 2.0,
            power=10,
            charge=ChargeRelease(level=1, aim_angle=math.pi / 2.0),
        )
        world.step(DT, IDLE)
        assert world.boss_state.shield_hits == index + 1 or world.boss_state.vulnerable

    assert world.boss_state.vulnerable is True
    assert world.boss_state.vulnerable_timer_ms == pytest.approx(VULNERABLE_DURATION_MS)
    assert boss.health == pytest.approx(boss.max_health)


def test_shielded_boss_ignores_uncharged_hits_before_threshold() -> None:
    world = _world("scrapyard_1")
    boss = _spawn_boss(world, BossArchetype.SHIELDED)

    for _ in range(10):
        _hold_fire(world)
        build_shot(world.projectiles, kind=ProjectileKind.DEFAULT, origin=boss.pos, angle=math.pi / 2.0, power=50)
        world.step(DT, IDLE)

    assert boss.health == pytest.approx(boss.max_health)
    assert world.boss_state is not None
    assert world.boss_state.shield_hits == 0


def test_summoner_hit_spawns_a_charged_only_minion_wave() -> None:
    world = _world("forest_1")
    boss = _spawn_boss(world, BossArchetype.MINION_SUMMONER)

    for _ in range(3):
        _hold_fire(world)
        build_shot(
            world.projectiles,
            kind=ProjectileKind.DEFAULT,
            origin=boss.pos,
            angle=math.pi / 2.0,
            power=10,
            charge=ChargeRelease(level=1, aim_angle=math.pi / 2.0),
        )
        world.step(DT, IDLE)

    minions = world.monsters.minions()
    assert len(minions) == 5
    assert world.boss_state is not None
    assert world.boss_state.minions_spawned is True

    for minion in minions:
        minion.health = 0.0
    events = world.step(DT, IDLE)

    assert boss.health == pytest.approx(boss.max_health * 2.0 / 3.0)
    assert world.boss_state.phase == 1
    assert len(events.deaths) == 5


def test_boss_death_removes_surviving_minions_and_sets_defeated() -> None:
    world = _world("mountain_1")
    boss = _spawn_boss(world, BossArchetype.WAVE_GATED)
    world.boss_state = BossState(archetype=BossArchetype.WAVE_GATED, wave_spawned=True, wave_cleared=True)
    world.monsters.spawn(pos=Vec2(100.0, 100.0), health=15.0, kind=Minion())
    survivor = world.monsters.spawn(pos=Vec2(800.0, 100.0), health=35.0, kind=Regular())
    _hold_fire(world)
    boss.health = 1.0
    build_shot(
        world.projectiles,
        kind=ProjectileKind.DEFAULT,
        origin=boss.pos,
        angle=math.pi / 2.0,
        power=10,
        charge=ChargeRelease(level=1, aim_angle=math.pi / 2.0),
    )

    events = world.step(DT, IDLE)

    assert events.boss_defeated is True
    assert world.boss_defeated is True
    assert world.boss_state is None
    assert world.monsters.boss() is None
    assert world.monsters.minions() == []
    assert [monster.id for monster in world.monsters.entries] == [survivor.id]
    assert events.minions_removed == 1


def test_timeout_with_boss_alive_is_a_defeat_at_current_level() -> None:
    results: list[RunResult] = []
    session = _session("scrapyard_1", on_complete=results.append)
    session.start()
    world = session.world
    world.level = MAX_LEVEL
    _spawn_boss(world, BossArchetype.SHIELDED)
    session.time_left = 1

    for _ in range(120):
        if not session.playing:
            break
        session.step_tick(IDLE)

    assert session.phase is RunPhase.FINISHED
    result = session.result
    assert result is not None
    assert result.success is False
    assert result.cancelled is False
    assert result.waves_completed == MAX_LEVEL
    assert results == [result]


def test_timeout_after_boss_kill_is_a_victory() -> None:
    session = _session("scrapyard_1")
    session.start()
    world = session.world
    world.level = MAX_LEVEL
    world.boss_defeated = True
    world.director.boss_spawned = True
    session.time_left = 1

    for _ in range(120):
        if not session.playing:
            break
        session.step_tick(IDLE)

    result = session.result
    assert result is not None
    assert result.success is True
    assert result.waves_completed == MAX_LEVEL
    assert result.total_waves == MAX_LEVEL
    assert result.rewards.xp >= result.score


def test_cancel_clears_input_and_finishes_once() -> None:
    results: list[RunResult] = []
    session = _session(on_complete=results.append)
    session.start()
    session.input.press(MoveKey.LEFT)
    session.input.attack_press()
    for _ in range(10):
        session.step_tick()
    assert session.world.charge.active is True

    result = session.cancel()

    assert result is not None
    assert result.cancelled is True
    assert result.success is False
    assert result.waves_completed == 0
    assert session.phase is RunPhase.FINISHED
    assert session.input.pressed == set()
    assert session.input.attack_down is False
    assert session.world.charge.active is False
    assert session.cancel() is result
    assert results == [result]
    assert session.step_tick(IDLE).shots_fired == 0


def test_cancel_before_start_produces_no_result() -> None:
    session = _session()

    assert session.cancel() is None
    assert session.phase is RunPhase.FINISHED
    session.start()
    assert session.phase is RunPhase.FINISHED


def test_charge_release_fires_along_the_angle_locked_at_press() -> None:
    world = _world()
    _hold_fire(world)
    start_angle = world.avatar.aim_angle

    world.step(DT, PlayerInput(attack_pressed=True))
    right = Vec2(world.avatar.pos.x + 300.0, world.avatar.pos.y)
    for _ in range(70):
        world.step(DT, PlayerInput(aim_target=right))
    events = world.step(DT, PlayerInput(aim_target=right, attack_released=True))

    assert events.charged_release is not None
    assert events.charged_release.level == 2
    charged = [projectile for projectile in world.projectiles.entries if projectile.charged]
    assert len(charged) == 1
    assert charged[0].angle == pytest.approx(start_angle)
    assert charged[0].piercing is True
    assert world.avatar.aim_angle == pytest.approx(0.0, abs=0.05)


def test_short_release_fires_no_charged_shot() -> None:
    world = _world()
    _hold_fire(world)

    world.step(DT, PlayerInput(attack_pressed=True))
    for _ in range(10):
        world.step(DT, IDLE)
    events = world.step(DT, PlayerInput(attack_released=True))

    assert events.charged_release is None
    assert not any(projectile.charged for projectile in world.projectiles.entries)
    assert world.charge.active is False


def test_auto_attack_pauses_while_charging() -> None:
    world = _world()

    events = world.step(DT, PlayerInput(attack_pressed=True))
    assert events.shots_fired == 0
    shots = sum(world.step(DT, IDLE).shots_fired for _ in range(60))
    assert shots == 0

    # Without a charge the first tick fires immediately.
    fresh = _world()
    assert fresh.step(DT, IDLE).shots_fired == 1


def test_avatar_movement_is_clamped_to_the_arena() -> None:
    world = _world()
    _hold_fire(world)

    for _ in range(600):
        world.step(DT, PlayerInput(move=Vec2(-1.0, 1.0)))

    assert world.avatar.pos.x == pytest.approx(15.0)
    assert world.avatar.pos.y == pytest.approx(685.0)


def test_update_runs_whole_ticks_from_frame_time() -> None:
    session = _session()
    session.start()

    events = session.update(1.0 / 30.0)

    assert len(events) == 2
    assert session.tick == 2


def test_autopilot_run_keeps_health_in_range_and_is_deterministic() -> None:
    def run(seed: int) -> tuple[int, int, int]:
        session = _session("ocean_1", seed=seed, character_id="bombardiro")
        session.start()
        pilot = Autopilot()
        for _ in range(1800):
            session.step_tick(pilot.next_input(session.snapshot()))
            for monster in session.world.monsters.entries:
                assert 0.0 <= monster.health <= monster.max_health
        return session.world.score, session.world.kills, len(session.world.monsters)

    first = run(11)
    assert first == run(11)
    assert first[1] > 0


def test_snapshot_is_a_detached_copy() -> None:
    session = _session()
    session.start()
    for _ in range(130):
        session.step_tick(IDLE)

    snapshot = session.snapshot()

    assert snapshot.phase is RunPhase.PLAYING
    assert snapshot.tick == 130
    assert isinstance(snapshot.monsters, tuple)
    assert len(snapshot.monsters) == len(session.world.monsters.alive())
    assert all(not isinstance(view.kind, Boss) for view in snapshot.monsters)
    assert snapshot.boss is None


def test_attack_edges_survive_frames_shorter_than_a_tick() -> None:
    session = _session()
    session.start()
    fast_frame = 1.0 / 144.0

    session.input.attack_press()
    assert session.update(fast_frame) == []
    for _ in range(10):
        session.update(fast_frame)
    assert session.world.charge.active is True

    for _ in range(150):
        session.update(fast_frame)
    session.input.attack_release()
    releases = [events.charged_release for events in session.update(0.005)]
    for _ in range(10):
        releases.extend(events.charged_release for events in session.update(1.0 / 60.0))

    assert session.world.charge.active is False
    fired = [release for release in releases if release is not None]
    assert len(fired) == 1
    assert fired[0].level >= 1


def test_autopilot_aims_at_the_nearest_monster_or_nowhere() -> None:
    session = _session()
    session.start()
    pilot = Autopilot()

    assert pilot.next_input(session.snapshot()).aim_target is None

    near = session.world.monsters.spawn(pos=Vec2(450.0, 500.0), health=50.0, kind=Regular())
    session.world.monsters.spawn(pos=Vec2(100.0, 50.0), health=50.0, kind=Regular())

    frame = pilot.next_input(session.snapshot())

    assert frame.aim_target == near.pos
    assert pilot.target_id == near.id
