from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Callable

from petkit.color import RGBA

from ..areas import AreaDef
from ..attributes import Attributes
from ..config import RunResult
from ..constants import (
    FX_UPDATE_INTERVAL_MS,
    GAME_DURATION,
    MAX_LEVEL,
    RUN_CLOCK_INTERVAL_MS,
    TICK_RATE,
)
from ..crand import Crand
from ..debug_log import combat_log
from ..effects import FxState
from ..equipment import Equipped
from ..monsters.boss import HitVerdict
from ..monsters.state import Boss, Elite
from ..rewards import calculate_rewards
from .clock import FixedStepClock, IntervalTimer
from .input import InputTracker, PlayerInput
from .loadout import RunLoadout
from .snapshot import WorldSnapshot, build_snapshot
from .state_types import RunPhase
from .world_state import WorldEvents, WorldState

__all__ = ["CombatSession", "EndReason"]

EXPLOSION_COLOR = RGBA.from_hex("#ff9800")
ELITE_EXPLOSION_COLOR = RGBA.from_hex("#9c27b0")
# Reward rolls draw from a stream derived from the run seed, not the spawn stream.
REWARD_SEED_SALT = 0x5A17


class EndReason(StrEnum):
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class CombatSession:
    """Owns one arena run: the ready/playing/finished lifecycle and its clocks."""

    world: WorldState
    area_id: str
    seed: int = 0
    on_complete: Callable[[RunResult], None] | None = None

    phase: RunPhase = RunPhase.READY
    time_left: int = GAME_DURATION
    clock: FixedStepClock = field(default_factory=lambda: FixedStepClock(tick_rate=TICK_RATE))
    run_clock: IntervalTimer = field(default_factory=lambda: IntervalTimer(RUN_CLOCK_INTERVAL_MS))
    fx_timer: IntervalTimer = field(default_factory=lambda: IntervalTimer(FX_UPDATE_INTERVAL_MS))
    fx: FxState = field(default_factory=FxState)
    input: InputTracker = field(default_factory=InputTracker)
    result: RunResult | None = None
    tick: int = 0

    @classmethod
    def build(
        cls,
        *,
        area: AreaDef,
        attributes: Attributes,
        equipped: Equipped | None = None,
        character_id: str | None = None,
        seed: int = 0,
        on_complete: Callable[[RunResult], None] | None = None,
    ) -> CombatSession:
        loadout = RunLoadout.for_area(area, attributes=attributes, equipped=equipped, character_id=character_id)
        return cls(
            world=WorldState.build(loadout, seed=seed),
            area_id=area.id,
            seed=int(seed),
            on_complete=on_complete,
        )

    @property
    def playing(self) -> bool:
        return self.phase is RunPhase.PLAYING

    @property
    def finished(self) -> bool:
        return self.phase is RunPhase.FINISHED

    def start(self) -> None:
        if self.phase is not RunPhase.READY:
            return
        self.world.reset()
        self.world.rng.srand(self.seed)
        self.clock.reset()
        self.run_clock.reset()
        self.fx_timer.reset()
        self.fx.reset()
        self.input.clear()
        self.time_left = GAME_DURATION
        self.tick = 0
        self.phase = RunPhase.PLAYING
        combat_log(
            "run_start",
            area=self.area_id,
            seed=self.seed,
            power=self.world.loadout.power(),
            cooldown_ms=self.world.loadout.attack_cooldown_ms(),
        )

    def step_tick(self, frame: PlayerInput | None = None) -> WorldEvents:
        """Run exactly one fixed tick, plus the coarse run and effects timers."""

        if self.phase is not RunPhase.PLAYING:
            return WorldEvents()
        if frame is None:
            frame = self.input.drain()
        dt = self.clock.dt_tick
        events = self.world.step(dt, frame)
        self.tick += 1
        self._queue_fx(events)

        dt_ms = dt * 1000.0
        for _ in range(self.fx_timer.advance(dt_ms)):
            self.fx.update()
        fired = self.run_clock.advance(dt_ms)
        if fired:
            self.time_left = max(0, self.time_left - fired)
            if self.time_left <= 0:
                self._finish(EndReason.TIMEOUT)
        return events

    def update(self, dt_frame: float, frame: PlayerInput | None = None) -> list[WorldEvents]:
        """Feed one display frame; runs as many fixed ticks as have accumulated.

        Attack edges from `frame` apply to the first tick of the frame only.
        Tracked edges stay pending across frames too short to produce a tick.
        """

        if self.phase is not RunPhase.PLAYING:
            return []
        ticks = self.clock.advance(dt_frame)
        if ticks <= 0:
            return []
        if frame is None:
            frame = self.input.drain()
        out: list[WorldEvents] = []
        for index in range(ticks):
            if self.phase is not RunPhase.PLAYING:
                break
            if index == 1:
                frame = replace(frame, attack_pressed=False, attack_released=False)
            out.append(self.step_tick(frame))
        return out

    def cancel(self) -> RunResult | None:
        """Abort the run as a defeat; input tracking is cleared immediately."""
        self.input.clear()
        self.world.charge.clear()
        if self.phase is RunPhase.FINISHED:
            return self.result
        if self.phase is RunPhase.READY:
            self.phase = RunPhase.FINISHED
            return None
        return self._finish(EndReason.CANCELLED)

    def snapshot(self) -> WorldSnapshot:
        return build_snapshot(self)

    def _queue_fx(self, events: WorldEvents) -> None:
        world = self.world
        for hit in events.hits:
            if hit.verdict is HitVerdict.DAMAGE:
                self.fx.spawn_damage_number(hit.pos, hit.damage, critical=hit.charged)
        for splash in events.splashes:
            self.fx.spawn_damage_number(splash.pos, splash.damage)
        for tick in events.dot_ticks:
            self.fx.spawn_damage_number(tick.pos, tick.damage)
        for death in events.deaths:
            self.fx.spawn_blood_splatter(death.pos)
            self.fx.spawn_xp_gem(death.pos)
            if isinstance(death.kind, Boss):
                self.fx.spawn_explosion(death.pos, EXPLOSION_COLOR, count=40)
            elif isinstance(death.kind, Elite):
                self.fx.spawn_explosion(death.pos, ELITE_EXPLOSION_COLOR)
        if events.charged_release is not None and events.charged_release.level >= 3:
            self.fx.spawn_explosion(world.avatar.pos, EXPLOSION_COLOR, count=12)

    def _finish(self, reason: EndReason) -> RunResult:
        if self.result is not None:
            return self.result
        world = self.world
        if reason is EndReason.TIMEOUT:
            success = bool(world.boss_defeated)
            waves = MAX_LEVEL if success else int(world.level)
        else:
            success = False
            waves = max(0, int(world.level) - 1)

        rewards = calculate_rewards(
            score=world.score,
            levels_completed=waves,
            total_levels=MAX_LEVEL,
            difficulty=world.loadout.difficulty,
            rng=Crand(self.seed ^ REWARD_SEED_SALT),
        )
        result = RunResult(
            success=success,
            waves_completed=waves,
            total_waves=MAX_LEVEL,
            score=int(world.score),
            kills=int(world.kills),
            area_id=self.area_id,
            cancelled=reason is EndReason.CANCELLED,
            rewards=rewards,
        )
        self.result = result
        self.phase = RunPhase.FINISHED
        self.input.clear()
        world.charge.clear()
        combat_log(
            "run_finish",
            reason=reason.value,
            success=success,
            waves=waves,
            levels_cleared=world.levels_cleared(),
            score=result.score,
            kills=result.kills,
            xp=rewards.xp,
            coins=rewards.coins,
            drop=rewards.equipment_id or "none",
            ticks=self.tick,
        )
        if self.on_complete is not None:
            self.on_complete(result)
        return result
