"""Arena-space vectors and bounds.

Screen space: +x right, +y down, angles in radians measured from +x, so
`-pi/2` points up the screen.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import TYPE_CHECKING

from .math import clamp

if TYPE_CHECKING:
    import pyray as rl


@dataclass(slots=True, frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_angle(cls, theta: float) -> Vec2:
        return cls(math.cos(theta), math.sin(theta))

    @classmethod
    def from_polar(cls, theta: float, radius: float = 1.0) -> Vec2:
        return cls(math.cos(theta) * radius, math.sin(theta) * radius)

    @staticmethod
    def distance_sq(a: Vec2, b: Vec2) -> float:
        dx = b.x - a.x
        dy = b.y - a.y
        return dx * dx + dy * dy

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec2:
        inv = 1.0 / scalar
        return Vec2(self.x * inv, self.y * inv)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def length_sq(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        """Unit vector, or the zero vector when there is no direction."""
        magnitude = self.length()
        if magnitude <= 0.0:
            return Vec2()
        return self / magnitude

    def distance_to(self, other: Vec2) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def direction_to(self, other: Vec2, *, epsilon: float = 1e-6) -> Vec2:
        delta = other - self
        magnitude = delta.length()
        if magnitude <= epsilon:
            return Vec2()
        return delta / magnitude

    def to_angle(self) -> float:
        return math.atan2(self.y, self.x)

    def rotated(self, theta: float) -> Vec2:
        c = math.cos(theta)
        s = math.sin(theta)
        return Vec2(self.x * c - self.y * s, self.x * s + self.y * c)

    def clamp_rect(self, min_x: float, min_y: float, max_x: float, max_y: float) -> Vec2:
        return Vec2(clamp(self.x, min_x, max_x), clamp(self.y, min_y, max_y))

    def to_rl(self) -> rl.Vector2:
        import pyray as rl

        return rl.Vector2(self.x, self.y)


@dataclass(slots=True, frozen=True)
class Bounds:
    """Playfield rectangle anchored at the origin (edges inclusive)."""

    width: float
    height: float

    @property
    def center(self) -> Vec2:
        return Vec2(self.width * 0.5, self.height * 0.5)

    def contains(self, point: Vec2, *, margin: float = 0.0) -> bool:
        if point.x < -margin or point.y < -margin:
            return False
        return point.x <= self.width + margin and point.y <= self.height + margin

    def clamp(self, point: Vec2, *, inset: float = 0.0) -> Vec2:
        return point.clamp_rect(inset, inset, self.width - inset, self.height - inset)
