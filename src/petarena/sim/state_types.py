from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
import math

from petkit.geom import Vec2

from ..constants import PLAYER_START_X, PLAYER_START_Y

__all__ = ["Avatar", "Facing", "LevelRecord", "RunPhase", "facing_for_angle"]

AIM_START_ANGLE = -math.pi / 2.0


class RunPhase(IntEnum):
    READY = 0
    PLAYING = 1
    FINISHED = 2


class Facing(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


def facing_for_angle(angle: float) -> Facing:
    """Quantize an aim angle (screen space, +y down) to four directions."""
    x = math.cos(angle)
    y = math.sin(angle)
    if abs(x) >= abs(y):
        return Facing.RIGHT if x >= 0.0 else Facing.LEFT
    return Facing.DOWN if y > 0.0 else Facing.UP


@dataclass(slots=True)
class Avatar:
    pos: Vec2 = field(default_factory=lambda: Vec2(PLAYER_START_X, PLAYER_START_Y))
    facing: Facing = Facing.UP
    aim_angle: float = AIM_START_ANGLE
    target_aim_angle: float = AIM_START_ANGLE
    attack_cooldown_ms: float = 0.0
    walk_phase: float = 0.0
    moving: bool = False

    def reset(self) -> None:
        self.pos = Vec2(PLAYER_START_X, PLAYER_START_Y)
        self.facing = Facing.UP
        self.aim_angle = AIM_START_ANGLE
        self.target_aim_angle = AIM_START_ANGLE
        self.attack_cooldown_ms = 0.0
        self.walk_phase = 0.0
        self.moving = False


@dataclass(slots=True)
class LevelRecord:
    """Per-level quota bookkeeping: regular and elite monsters only."""

    level: int
    spawned: int = 0
    killed: int = 0
    timer_elapsed: bool = False

    @property
    def cleared(self) -> bool:
        return self.timer_elapsed and self.killed >= self.spawned
