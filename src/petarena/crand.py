from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

CRAND_MAX = 0x7FFF


class Crand:
    """MSVCRT-compatible `rand()` LCG.

    Matches:
      seed = seed * 214013 + 2531011
      return (seed >> 16) & 0x7fff

    Every random decision the arena makes (spawn sides, elite rolls, drops)
    draws from one of these, so a seed fully determines a scripted run.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = seed & 0xFFFFFFFF

    @property
    def state(self) -> int:
        return self._state

    def srand(self, seed: int) -> None:
        self._state = seed & 0xFFFFFFFF

    def rand(self) -> int:
        self._state = (self._state * 0x343FD + 0x269EC3) & 0xFFFFFFFF
        return (self._state >> 16) & CRAND_MAX

    def unit(self) -> float:
        """Uniform float in [0, 1)."""
        return float(self.rand()) / float(CRAND_MAX + 1)

    def uniform(self, low: float, high: float) -> float:
        return float(low) + (float(high) - float(low)) * self.unit()

    def chance(self, probability: float) -> bool:
        return self.unit() < float(probability)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self.rand() % len(items)]
