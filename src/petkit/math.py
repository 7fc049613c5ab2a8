from __future__ import annotations

import math


def clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def wrap_angle(angle: float) -> float:
    """Wrap an angle into [-pi, pi)."""
    return (float(angle) + math.pi) % math.tau - math.pi


def angle_approach(current: float, target: float, factor: float) -> float:
    # Moves `current` by `factor` of the shortest arc towards `target`.
    delta = wrap_angle(float(target) - float(current))
    return wrap_angle(float(current) + delta * clamp(float(factor), 0.0, 1.0))


def smoothing_factor(per_tick: float, dt: float, *, tick_rate: float = 60.0) -> float:
    """Convert a per-tick exponential smoothing factor to an arbitrary `dt`."""
    per_tick = clamp(float(per_tick), 0.0, 1.0)
    if dt <= 0.0:
        return 0.0
    return 1.0 - (1.0 - per_tick) ** (float(dt) * float(tick_rate))
