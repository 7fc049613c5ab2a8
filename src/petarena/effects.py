from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
import math

from petkit.color import RGBA
from petkit.geom import Vec2

from .crand import Crand

__all__ = [
    "BLOOD_COLOR",
    "XP_GEM_COLOR",
    "DamageNumber",
    "FxState",
    "Particle",
    "ParticleShape",
]

# Per-update motion constants; FxState.update runs on the 30 Hz effects timer.
PARTICLE_GRAVITY = 0.15
PARTICLE_LIFE_DECAY = 0.02
DAMAGE_NUMBER_LIFE_DECAY = 0.015
MAX_PARTICLES = 512
MAX_DAMAGE_NUMBERS = 64

BLOOD_COLOR = RGBA.from_hex("#ff0000")
XP_GEM_COLOR = RGBA.from_hex("#00e676")


class ParticleShape(IntEnum):
    CIRCLE = 0
    SQUARE = 1
    SPARK = 2


@dataclass(slots=True)
class Particle:
    pos: Vec2
    vel: Vec2
    size: float
    color: RGBA
    shape: ParticleShape = ParticleShape.CIRCLE
    life: float = 1.0
    rotation: float = 0.0
    rotation_speed: float = 0.0


@dataclass(slots=True)
class DamageNumber:
    pos: Vec2
    vel: Vec2
    damage: int
    critical: bool = False
    life: float = 1.0


@dataclass(slots=True)
class FxState:
    """Cosmetic particles and floating numbers.

    Owns its own `Crand` so effect jitter never perturbs the simulation's
    random stream.
    """

    rng: Crand = field(default_factory=lambda: Crand(0x5EED))
    particles: list[Particle] = field(default_factory=list)
    damage_numbers: list[DamageNumber] = field(default_factory=list)

    def reset(self) -> None:
        self.particles.clear()
        self.damage_numbers.clear()

    def _jitter(self, scale: float) -> float:
        return (self.rng.unit() - 0.5) * scale

    def _push(self, particle: Particle) -> None:
        if len(self.particles) >= MAX_PARTICLES:
            del self.particles[0]
        self.particles.append(particle)

    def spawn_blood_splatter(self, pos: Vec2, *, count: int = 12) -> None:
        for index in range(count):
            angle = math.tau * float(index) / float(count) + self._jitter(0.5)
            speed = 2.0 + self.rng.unit() * 3.0
            vel = Vec2.from_polar(angle, speed) + Vec2(0.0, -2.0)
            self._push(Particle(pos=pos, vel=vel, size=2.0 + self.rng.unit() * 3.0, color=BLOOD_COLOR))

    def spawn_explosion(self, pos: Vec2, color: RGBA, *, count: int = 20) -> None:
        for index in range(count):
            angle = math.tau * float(index) / float(count)
            speed = 3.0 + self.rng.unit() * 4.0
            shape = ParticleShape.SQUARE if self.rng.unit() > 0.5 else ParticleShape.SPARK
            self._push(
                Particle(
                    pos=pos,
                    vel=Vec2.from_polar(angle, speed),
                    size=3.0 + self.rng.unit() * 4.0,
                    color=color,
                    shape=shape,
                    rotation=self.rng.unit() * math.tau,
                    rotation_speed=self._jitter(0.3),
                )
            )

    def spawn_xp_gem(self, pos: Vec2) -> None:
        vel = Vec2(self._jitter(2.0), -2.0 - self.rng.unit() * 2.0)
        self._push(Particle(pos=pos, vel=vel, size=8.0, color=XP_GEM_COLOR))

    def spawn_damage_number(self, pos: Vec2, damage: float, *, critical: bool = False) -> None:
        if len(self.damage_numbers) >= MAX_DAMAGE_NUMBERS:
            del self.damage_numbers[0]
        self.damage_numbers.append(
            DamageNumber(
                pos=pos,
                vel=Vec2(self._jitter(2.0), -3.0),
                damage=int(round(float(damage))),
                critical=bool(critical),
            )
        )

    def update(self) -> None:
        alive: list[Particle] = []
        for particle in self.particles:
            particle.pos = particle.pos + particle.vel
            particle.vel = Vec2(particle.vel.x, particle.vel.y + PARTICLE_GRAVITY)
            particle.life -= PARTICLE_LIFE_DECAY
            particle.rotation += particle.rotation_speed
            if particle.life > 0.0:
                alive.append(particle)
        self.particles = alive

        numbers: list[DamageNumber] = []
        for number in self.damage_numbers:
            number.pos = number.pos + number.vel
            number.life -= DAMAGE_NUMBER_LIFE_DECAY
            if number.life > 0.0:
                numbers.append(number)
        self.damage_numbers = numbers
