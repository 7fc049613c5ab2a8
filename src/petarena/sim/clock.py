from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["FixedStepClock", "IntervalTimer"]

_TICK_EPSILON = 1e-9


@dataclass(slots=True)
class FixedStepClock:
    """Turns variable frame time into a whole number of fixed ticks."""

    tick_rate: int = 60
    max_frame: float = 0.1
    pending: float = field(default=0.0, repr=False)

    def __post_init__(self) -> None:
        self.tick_rate = int(self.tick_rate)
        if self.tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {self.tick_rate}")

    @property
    def dt_tick(self) -> float:
        return 1.0 / self.tick_rate

    def reset(self) -> None:
        self.pending = 0.0

    def advance(self, dt: float) -> int:
        if dt <= 0.0:
            return 0
        # Hitches longer than max_frame are dropped, not replayed.
        self.pending += min(float(dt), self.max_frame)
        ticks = int((self.pending + _TICK_EPSILON) * self.tick_rate)
        if ticks > 0:
            self.pending = max(0.0, self.pending - ticks * self.dt_tick)
        return ticks


@dataclass(slots=True)
class IntervalTimer:
    """Fires once per whole `interval_ms` of accumulated simulated time."""

    interval_ms: float
    accum_ms: float = 0.0

    def __post_init__(self) -> None:
        if float(self.interval_ms) <= 0.0:
            raise ValueError(f"interval_ms must be positive, got {self.interval_ms}")
        self.interval_ms = float(self.interval_ms)

    def reset(self) -> None:
        self.accum_ms = 0.0

    def advance(self, dt_ms: float) -> int:
        if dt_ms <= 0.0:
            return 0
        self.accum_ms += float(dt_ms)
        fired = int((self.accum_ms + 1e-6) // self.interval_ms)
        if fired > 0:
            self.accum_ms = max(0.0, self.accum_ms - self.interval_ms * float(fired))
        return fired
