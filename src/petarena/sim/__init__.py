from __future__ import annotations

from .clock import FixedStepClock, IntervalTimer
from .input import InputTracker, MoveKey, PlayerInput
from .loadout import RunLoadout
from .session import CombatSession, EndReason
from .snapshot import WorldSnapshot
from .state_types import Avatar, Facing, LevelRecord, RunPhase
from .world_state import WorldEvents, WorldState

__all__ = [
    "Avatar",
    "CombatSession",
    "EndReason",
    "Facing",
    "FixedStepClock",
    "InputTracker",
    "IntervalTimer",
    "LevelRecord",
    "MoveKey",
    "PlayerInput",
    "RunLoadout",
    "RunPhase",
    "WorldEvents",
    "WorldSnapshot",
    "WorldState",
]
