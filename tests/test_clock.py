from __future__ import annotations

import pytest

from petarena.sim.clock import FixedStepClock, IntervalTimer


def test_fixed_step_clock_accumulates_partial_frames() -> None:
    clock = FixedStepClock(tick_rate=60)

    assert clock.advance(1.0 / 120.0) == 0
    assert clock.advance(1.0 / 120.0) == 1
    assert clock.advance(1.0 / 30.0) == 2


def test_fixed_step_clock_clamps_long_hitches() -> None:
    clock = FixedStepClock(tick_rate=60)

    assert clock.advance(5.0) == 6
    assert clock.advance(-1.0) == 0


def test_fixed_step_clock_rejects_non_positive_tick_rate() -> None:
    with pytest.raises(ValueError):
        FixedStepClock(tick_rate=0)


def test_interval_timer_fires_on_whole_intervals_and_keeps_remainder() -> None:
    timer = IntervalTimer(1000.0)

    assert timer.advance(999.0) == 0
    assert timer.advance(1.0) == 1
    assert timer.advance(2500.0) == 2
    assert timer.accum_ms == pytest.approx(500.0)

    timer.reset()
    assert timer.accum_ms == 0.0


def test_interval_timer_sixty_ticks_make_one_second() -> None:
    timer = IntervalTimer(1000.0)

    fired = sum(timer.advance(1000.0 / 60.0) for _ in range(60))

    assert fired == 1
