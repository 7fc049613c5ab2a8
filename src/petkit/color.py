from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import TYPE_CHECKING

from .math import clamp

if TYPE_CHECKING:
    import pyray as rl


@dataclass(slots=True, frozen=True)
class RGBA:
    """Linear 0..1 color; converted to 8-bit only at draw time."""

    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    @classmethod
    def from_hex(cls, value: str) -> RGBA:
        digits = value.strip().removeprefix("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"expected #rrggbb or #rrggbbaa, got {value!r}")
        try:
            channels = bytes.fromhex(digits.ljust(8, "f"))
        except ValueError as exc:
            raise ValueError(f"expected #rrggbb or #rrggbbaa, got {value!r}") from exc
        return cls(*(channel / 255.0 for channel in channels))

    def with_alpha(self, alpha: float) -> RGBA:
        return RGBA(self.r, self.g, self.b, float(alpha))

    def to_rl(self) -> rl.Color:
        import pyray as rl

        return rl.Color(*(int(clamp(channel, 0.0, 1.0) * 255.0 + 0.5) for channel in astuple(self)))
