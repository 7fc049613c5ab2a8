from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from petkit.geom import Vec2

__all__ = ["InputTracker", "MoveKey", "PlayerInput"]


class MoveKey(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


@dataclass(frozen=True, slots=True)
class PlayerInput:
    """One frame of player intent.

    `move` components are in [-1, 1] per axis (diagonals are not normalized).
    `aim_target` is the pointer in arena coordinates, or None to aim along the
    movement direction. `attack_pressed`/`attack_released` are edges.
    """

    move: Vec2 = field(default_factory=Vec2)
    aim_target: Vec2 | None = None
    attack_pressed: bool = False
    attack_released: bool = False


@dataclass(slots=True)
class InputTracker:
    """Held movement keys plus pending attack edges, drained into `PlayerInput`."""

    pressed: set[MoveKey] = field(default_factory=set)
    aim_target: Vec2 | None = None
    attack_down: bool = False
    _pending_press: bool = False
    _pending_release: bool = False

    def press(self, key: MoveKey) -> None:
        self.pressed.add(MoveKey(key))

    def release(self, key: MoveKey) -> None:
        self.pressed.discard(MoveKey(key))

    def set_aim(self, target: Vec2 | None) -> None:
        self.aim_target = target

    def attack_press(self) -> None:
        if self.attack_down:
            return
        self.attack_down = True
        self._pending_press = True

    def attack_release(self) -> None:
        if not self.attack_down:
            return
        self.attack_down = False
        self._pending_release = True

    def move_vector(self) -> Vec2:
        x = float(MoveKey.RIGHT in self.pressed) - float(MoveKey.LEFT in self.pressed)
        y = float(MoveKey.DOWN in self.pressed) - float(MoveKey.UP in self.pressed)
        return Vec2(x, y)

    def drain(self) -> PlayerInput:
        frame = PlayerInput(
            move=self.move_vector(),
            aim_target=self.aim_target,
            attack_pressed=self._pending_press,
            attack_released=self._pending_release,
        )
        self._pending_press = False
        self._pending_release = False
        return frame

    def clear(self) -> None:
        self.pressed.clear()
        self.aim_target = None
        self.attack_down = False
        self._pending_press = False
        self._pending_release = False
