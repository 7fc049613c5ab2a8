from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    ATTACK_RANGE,
    CHARGE_EXPLOSION_LEVEL,
    CHARGE_EXPLOSION_RADIUS,
    CHARGE_LEVEL_INTERVAL_MS,
    CHARGE_PIERCE_LEVEL,
    CHARGE_RANGE_STEP,
    CHARGE_THRESHOLD_MS,
    MAX_CHARGE_LEVEL,
)

__all__ = [
    "ChargeRelease",
    "ChargeState",
    "ChargedShotProfile",
    "charge_level",
    "charged_shot_profile",
]


def charge_level(held_ms: float) -> int:
    """Charge level reached after holding the attack control for `held_ms`.

    0 below the threshold, then one level per interval, saturating at the cap.
    """
    held = float(held_ms)
    if held < CHARGE_THRESHOLD_MS:
        return 0
    level = 1 + int((held - CHARGE_THRESHOLD_MS) // CHARGE_LEVEL_INTERVAL_MS)
    return min(MAX_CHARGE_LEVEL, level)


@dataclass(frozen=True, slots=True)
class ChargedShotProfile:
    level: int
    damage_multiplier: float
    range: float
    piercing: bool
    explosion_radius: float | None


def charged_shot_profile(level: int) -> ChargedShotProfile:
    level = max(1, min(MAX_CHARGE_LEVEL, int(level)))
    return ChargedShotProfile(
        level=level,
        damage_multiplier=float(level),
        range=ATTACK_RANGE * (1.0 + CHARGE_RANGE_STEP * float(level - 1)),
        piercing=level >= CHARGE_PIERCE_LEVEL,
        explosion_radius=CHARGE_EXPLOSION_RADIUS if level >= CHARGE_EXPLOSION_LEVEL else None,
    )


@dataclass(frozen=True, slots=True)
class ChargeRelease:
    level: int
    aim_angle: float


@dataclass(slots=True)
class ChargeState:
    """Held-attack tracking; the aim is locked when the charge begins."""

    start_ms: float | None = None
    locked_angle: float = 0.0

    @property
    def active(self) -> bool:
        return self.start_ms is not None

    def held_ms(self, now_ms: float) -> float:
        if self.start_ms is None:
            return 0.0
        return max(0.0, float(now_ms) - float(self.start_ms))

    def level(self, now_ms: float) -> int:
        if self.start_ms is None:
            return 0
        return charge_level(self.held_ms(now_ms))

    def begin(self, now_ms: float, aim_angle: float) -> None:
        if self.start_ms is not None:
            return
        self.start_ms = float(now_ms)
        self.locked_angle = float(aim_angle)

    def release(self, now_ms: float) -> ChargeRelease | None:
        """Resolve a release; returns `None` for a stray or under-threshold release."""
        if self.start_ms is None:
            return None
        level = charge_level(self.held_ms(now_ms))
        angle = self.locked_angle
        self.clear()
        if level <= 0:
            return None
        return ChargeRelease(level=level, aim_angle=angle)

    def clear(self) -> None:
        self.start_ms = None
        self.locked_angle = 0.0
