from __future__ import annotations

from dataclasses import dataclass, field

from petkit.geom import Bounds, Vec2
from petkit.math import angle_approach, smoothing_factor

from ..charge import ChargeRelease, ChargeState
from ..constants import (
    AIM_SMOOTHING,
    AVATAR_MOVE_SPEED,
    DOT_TICK_MS,
    GAME_HEIGHT,
    GAME_WIDTH,
    KILL_SCORE,
    PLAYER_SIZE,
    TICK_RATE,
)
from ..crand import Crand
from ..debug_log import combat_log
from ..monsters.ai import monster_base_speed, monster_move_toward
from ..monsters.boss import (
    BossSignal,
    BossState,
    HitVerdict,
    boss_can_move,
    minion_wave_for,
    resolve_hit_gate,
    resolve_minion_wave_cleared,
    tick_boss_timer,
)
from ..monsters.damage import DamageSource, monster_apply_damage, tick_dot
from ..monsters.spawn import (
    MonsterInit,
    SpawnDirector,
    boss_due,
    build_boss_spawn,
    build_minion_wave,
    level_for_elapsed,
    tick_regular_spawns,
)
from ..monsters.state import Boss, Elite, MonsterKind, MonsterState, MonsterStore, Regular
from ..projectiles.collision import ProjectileHit, SplashHit, update_projectiles
from ..projectiles.pool import ProjectileStore
from ..weapons import build_shot
from .input import PlayerInput
from .loadout import RunLoadout
from .state_types import Avatar, LevelRecord, facing_for_angle

__all__ = [
    "DotTick",
    "MonsterDeath",
    "WorldEvents",
    "WorldState",
]

ARENA_BOUNDS = Bounds(GAME_WIDTH, GAME_HEIGHT)
MOVE_EPSILON = 1e-6
AIM_DEADZONE = 1.0


@dataclass(frozen=True, slots=True)
class DotTick:
    monster_id: int
    pos: Vec2
    damage: float


@dataclass(frozen=True, slots=True)
class MonsterDeath:
    monster_id: int
    pos: Vec2
    kind: MonsterKind
    score: int


@dataclass(slots=True)
class WorldEvents:
    shots_fired: int = 0
    charged_release: ChargeRelease | None = None
    hits: list[ProjectileHit] = field(default_factory=list)
    splashes: list[SplashHit] = field(default_factory=list)
    dot_ticks: list[DotTick] = field(default_factory=list)
    deaths: list[MonsterDeath] = field(default_factory=list)
    spawned: list[int] = field(default_factory=list)
    boss_signals: list[BossSignal] = field(default_factory=list)
    boss_spawned: bool = False
    boss_defeated: bool = False
    minions_removed: int = 0
    level_advanced: int | None = None
    caught: int = 0


def _counts_toward_quota(kind: MonsterKind) -> bool:
    return isinstance(kind, (Regular, Elite))


@dataclass(slots=True)
class WorldState:
    """Mutable simulation state for one arena run, advanced in place by `step`."""

    loadout: RunLoadout
    rng: Crand
    avatar: Avatar = field(default_factory=Avatar)
    monsters: MonsterStore = field(default_factory=MonsterStore)
    projectiles: ProjectileStore = field(default_factory=ProjectileStore)
    charge: ChargeState = field(default_factory=ChargeState)
    director: SpawnDirector = field(default_factory=SpawnDirector)
    boss_state: BossState | None = None
    boss_defeated: bool = False
    elapsed_ms: float = 0.0
    level: int = 1
    score: int = 0
    kills: int = 0
    levels: dict[int, LevelRecord] = field(default_factory=dict)

    @classmethod
    def build(cls, loadout: RunLoadout, *, seed: int) -> WorldState:
        world = cls(loadout=loadout, rng=Crand(int(seed)))
        world.reset()
        return world

    def reset(self) -> None:
        self.avatar.reset()
        self.monsters.reset()
        self.projectiles.reset()
        self.charge.clear()
        self.director.reset()
        self.boss_state = None
        self.boss_defeated = False
        self.elapsed_ms = 0.0
        self.level = 1
        self.score = 0
        self.kills = 0
        self.levels = {1: LevelRecord(level=1)}

    def level_record(self, level: int) -> LevelRecord:
        record = self.levels.get(level)
        if record is None:
            record = LevelRecord(level=level)
            self.levels[level] = record
        return record

    def levels_cleared(self) -> int:
        return sum(1 for record in self.levels.values() if record.cleared)

    def materialize(self, init: MonsterInit) -> MonsterState:
        monster = self.monsters.spawn(
            pos=init.pos,
            health=init.health,
            kind=init.kind,
            speed_multiplier=init.speed_multiplier,
            spawn_side=init.spawn_side,
            spawn_level=init.spawn_level,
        )
        if _counts_toward_quota(init.kind):
            self.level_record(init.spawn_level).spawned += 1
        return monster

    # Step stages, in tick order.

    def _intake_attack(self, frame: PlayerInput, events: WorldEvents) -> None:
        if frame.attack_pressed:
            self.charge.begin(self.elapsed_ms, self.avatar.aim_angle)
        if not frame.attack_released:
            return
        release = self.charge.release(self.elapsed_ms)
        if release is None:
            return
        build_shot(
            self.projectiles,
            kind=self.loadout.projectile_kind,
            origin=self.avatar.pos,
            angle=release.aim_angle,
            power=self.loadout.power(),
            charge=release,
        )
        self.avatar.attack_cooldown_ms = self.loadout.attack_cooldown_ms()
        events.shots_fired += 1
        events.charged_release = release

    def _update_aim(self, frame: PlayerInput, dt: float) -> None:
        avatar = self.avatar
        target = frame.aim_target
        if target is not None and avatar.pos.distance_to(target) > AIM_DEADZONE:
            avatar.target_aim_angle = (target - avatar.pos).to_angle()
        elif frame.move.length_sq() > MOVE_EPSILON:
            avatar.target_aim_angle = frame.move.to_angle()
        avatar.aim_angle = angle_approach(
            avatar.aim_angle,
            avatar.target_aim_angle,
            smoothing_factor(AIM_SMOOTHING, dt, tick_rate=TICK_RATE),
        )
        avatar.facing = facing_for_angle(avatar.aim_angle)

    def _move_avatar(self, frame: PlayerInput, dt: float) -> None:
        avatar = self.avatar
        move = Vec2(
            max(-1.0, min(1.0, float(frame.move.x))),
            max(-1.0, min(1.0, float(frame.move.y))),
        )
        avatar.moving = move.length_sq() > MOVE_EPSILON
        if not avatar.moving:
            return
        avatar.pos = ARENA_BOUNDS.clamp(avatar.pos + move * (AVATAR_MOVE_SPEED * dt), inset=PLAYER_SIZE * 0.5)
        avatar.walk_phase += dt * 8.0

    def _auto_attack(self, dt_ms: float, events: WorldEvents) -> None:
        avatar = self.avatar
        avatar.attack_cooldown_ms = max(0.0, avatar.attack_cooldown_ms - dt_ms)
        if self.charge.active or avatar.attack_cooldown_ms > 0.0:
            return
        build_shot(
            self.projectiles,
            kind=self.loadout.projectile_kind,
            origin=avatar.pos,
            angle=avatar.aim_angle,
            power=self.loadout.power(),
        )
        avatar.attack_cooldown_ms = self.loadout.attack_cooldown_ms()
        events.shots_fired += 1

    def _tick_boss_timer(self, dt_ms: float, events: WorldEvents) -> None:
        signal = tick_boss_timer(self.boss_state, dt_ms)
        if signal is BossSignal.SHIELD_UP:
            events.boss_signals.append(signal)
            combat_log("boss_shield_up", elapsed_ms=self.elapsed_ms)

    def _update_monsters(self, dt: float, dt_ms: float, events: WorldEvents) -> None:
        speed = monster_base_speed(self.loadout.difficulty)
        target = self.avatar.pos
        for monster in self.monsters.entries:
            if monster.health <= 0.0:
                continue
            can_move = boss_can_move(self.boss_state) if monster.is_boss else True
            monster_move_toward(monster, target, dt, base_speed=speed, can_move=can_move)
            if monster.hit_flash_ms > 0.0:
                monster.hit_flash_ms = max(0.0, monster.hit_flash_ms - dt_ms)

            damage = tick_dot(monster, dt_ms, tick_ms=DOT_TICK_MS)
            if damage <= 0.0:
                continue
            if resolve_hit_gate(monster, self.boss_state, charged=False) is not HitVerdict.DAMAGE:
                continue
            monster_apply_damage(monster, damage=damage, source=DamageSource.DOT)
            events.dot_ticks.append(DotTick(monster.id, monster.pos, damage))

    def _update_projectiles(self, dt: float, events: WorldEvents) -> None:
        result = update_projectiles(
            self.projectiles,
            self.monsters,
            dt,
            avatar_pos=self.avatar.pos,
            boss_state=self.boss_state,
            bounds=ARENA_BOUNDS,
        )
        events.hits.extend(result.hits)
        events.splashes.extend(result.splashes)
        events.caught += result.caught
        for signal in result.boss_signals:
            events.boss_signals.append(signal)
            if signal is BossSignal.SHIELD_DOWN:
                combat_log("boss_shield_down", elapsed_ms=self.elapsed_ms)
            elif signal is BossSignal.MINION_WAVE:
                self._spawn_minion_wave(events)

    def _spawn_minion_wave(self, events: WorldEvents) -> None:
        boss = self.monsters.boss()
        if boss is None or self.boss_state is None:
            return
        wave = minion_wave_for(self.boss_state.archetype)
        if wave is None:
            return
        inits = build_minion_wave(wave, center=boss.pos, level=self.level, difficulty=self.loadout.difficulty)
        for init in inits:
            events.spawned.append(self.materialize(init).id)
        combat_log(
            "boss_minion_wave",
            count=len(inits),
            requirement=wave.requirement.name.lower(),
            phase=self.boss_state.phase,
        )

    def _resolve_deaths(self, events: WorldEvents) -> None:
        boss = self.monsters.boss()
        if boss is not None and self.boss_state is not None:
            phase_before = self.boss_state.phase
            phase_damage = resolve_minion_wave_cleared(
                boss,
                self.boss_state,
                minions_alive=len(self.monsters.minions()),
            )
            if phase_damage > 0.0:
                monster_apply_damage(boss, damage=phase_damage, source=DamageSource.PHASE)
            if self.boss_state.phase != phase_before:
                events.boss_signals.append(BossSignal.PHASE)
                combat_log(
                    "boss_phase",
                    phase=self.boss_state.phase,
                    damage=phase_damage,
                    health=boss.health,
                )

        for monster in self.monsters.purge_dead():
            score = KILL_SCORE * self.level
            self.score += score
            self.kills += 1
            if _counts_toward_quota(monster.kind):
                self.level_record(monster.spawn_level).killed += 1
            events.deaths.append(MonsterDeath(monster.id, monster.pos, monster.kind, score))
            if isinstance(monster.kind, Boss):
                self.boss_defeated = True
                self.boss_state = None
                events.boss_defeated = True
                combat_log("boss_defeated", elapsed_ms=self.elapsed_ms, score=self.score)

        if events.boss_defeated:
            removed = self.monsters.remove_minions()
            events.minions_removed = len(removed)

    def _advance_level_and_spawn(self, dt_ms: float, events: WorldEvents) -> None:
        level = level_for_elapsed(self.elapsed_ms / 1000.0)
        if level > self.level:
            for previous in range(self.level, level):
                self.level_record(previous).timer_elapsed = True
            self.level = level
            self.level_record(level)
            events.level_advanced = level
            combat_log("level_advance", level=level, elapsed_ms=self.elapsed_ms, score=self.score)

        if boss_due(self.director, level=self.level, boss_exists=self.monsters.has_boss()):
            init = build_boss_spawn(self.loadout.boss_archetype, difficulty=self.loadout.difficulty)
            boss = self.materialize(init)
            self.director.boss_spawned = True
            self.boss_state = BossState(archetype=self.loadout.boss_archetype)
            events.boss_spawned = True
            events.spawned.append(boss.id)
            combat_log(
                "boss_spawn",
                archetype=self.loadout.boss_archetype.name.lower(),
                health=boss.max_health,
                elapsed_ms=self.elapsed_ms,
            )

        batch = tick_regular_spawns(
            self.director,
            dt_ms,
            self.rng,
            elapsed_ms=self.elapsed_ms,
            level=self.level,
            difficulty=self.loadout.difficulty,
            boss_alive=self.monsters.boss() is not None,
        )
        for init in batch:
            events.spawned.append(self.materialize(init).id)

    def step(self, dt: float, frame: PlayerInput) -> WorldEvents:
        """Advance one fixed tick.

        Order matters: the avatar moves before monsters, monsters before
        projectiles, and kills are only purged after every projectile has
        resolved, so a monster killed this tick never acts after its death.
        """

        events = WorldEvents()
        dt = float(dt)
        if dt <= 0.0:
            return events
        dt_ms = dt * 1000.0
        self.elapsed_ms += dt_ms

        self._intake_attack(frame, events)
        self._update_aim(frame, dt)
        self._move_avatar(frame, dt)
        self._auto_attack(dt_ms, events)
        self._tick_boss_timer(dt_ms, events)
        self._update_monsters(dt, dt_ms, events)
        self._update_projectiles(dt, events)
        self._resolve_deaths(events)
        self._advance_level_and_spawn(dt_ms, events)
        return events
