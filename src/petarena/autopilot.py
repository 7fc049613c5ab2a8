from __future__ import annotations

from dataclasses import dataclass

from petkit.geom import Vec2

from .constants import GAME_WIDTH, PLAYER_START_Y
from .sim.input import PlayerInput
from .sim.snapshot import MonsterView, WorldSnapshot

__all__ = ["Autopilot"]

TARGET_SWITCH_MARGIN = 64.0
STRAFE_PERIOD_TICKS = 120
CHARGE_HOLD_TICKS = 95  # just past a full level-3 charge at 60 Hz
CHARGE_PERIOD_TICKS = 240
STRAFE_MARGIN = 120.0


@dataclass(slots=True)
class Autopilot:
    """Scripted player for headless runs.

    Aims at the nearest monster (sticky unless another is clearly closer),
    strafes along the bottom of the arena and mixes in charged shots; against a
    boss it charges whenever the boss is not in a vulnerable window.
    """

    target_id: int | None = None
    charge_ticks: int = 0
    next_charge_tick: int = CHARGE_PERIOD_TICKS

    def _select_target(self, snapshot: WorldSnapshot) -> MonsterView | None:
        origin = snapshot.avatar_pos
        candidate: MonsterView | None = None
        best = 0.0
        current: MonsterView | None = None
        for monster in snapshot.monsters:
            d = Vec2.distance_sq(origin, monster.pos)
            if candidate is None or d < best:
                candidate = monster
                best = d
            if monster.id == self.target_id:
                current = monster
        if current is None or candidate is None:
            return candidate
        if candidate.pos.distance_to(origin) + TARGET_SWITCH_MARGIN < current.pos.distance_to(origin):
            return candidate
        return current

    def _wants_charge(self, snapshot: WorldSnapshot) -> bool:
        boss = snapshot.boss
        if boss is not None:
            return not boss.vulnerable and boss.minions_alive == 0
        return snapshot.tick >= self.next_charge_tick

    def next_input(self, snapshot: WorldSnapshot) -> PlayerInput:
        target = self._select_target(snapshot)
        self.target_id = target.id if target is not None else None

        # Strafe left/right along the starting row.
        phase = (snapshot.tick // STRAFE_PERIOD_TICKS) % 2
        x = snapshot.avatar_pos.x
        move_x = 1.0 if phase == 0 else -1.0
        if x < STRAFE_MARGIN:
            move_x = 1.0
        elif x > GAME_WIDTH - STRAFE_MARGIN:
            move_x = -1.0
        move_y = 0.0
        if snapshot.avatar_pos.y < PLAYER_START_Y - 1.0:
            move_y = 1.0
        elif snapshot.avatar_pos.y > PLAYER_START_Y + 1.0:
            move_y = -1.0

        aim = target.pos if target is not None else None

        pressed = False
        released = False
        if self.charge_ticks > 0:
            self.charge_ticks += 1
            if self.charge_ticks > CHARGE_HOLD_TICKS:
                released = True
                self.charge_ticks = 0
                self.next_charge_tick = snapshot.tick + CHARGE_PERIOD_TICKS
        elif target is not None and self._wants_charge(snapshot):
            pressed = True
            self.charge_ticks = 1

        return PlayerInput(
            move=Vec2(move_x, move_y),
            aim_target=aim,
            attack_pressed=pressed,
            attack_released=released,
        )
