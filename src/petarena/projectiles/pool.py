from __future__ import annotations

from petkit.geom import Vec2

from .types import DefaultPayload, Projectile, ProjectileKind, ProjectilePayload

__all__ = ["ProjectileStore"]


class ProjectileStore:
    """In-flight projectiles in spawn order.

    Unlike a fixed-size pool, expired entries are dropped by `prune()` at the end
    of every projectile pass; ids keep increasing for the lifetime of a run.
    """

    def __init__(self) -> None:
        self._entries: list[Projectile] = []
        self._next_id = 1

    @property
    def entries(self) -> list[Projectile]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def reset(self) -> None:
        self._entries.clear()
        self._next_id = 1

    def clear(self) -> None:
        self._entries.clear()

    def spawn(
        self,
        *,
        pos: Vec2,
        vel: Vec2,
        damage: float,
        max_range: float,
        kind: ProjectileKind = ProjectileKind.DEFAULT,
        payload: ProjectilePayload | None = None,
        charged: bool = False,
        charge_level: int = 0,
        piercing: bool = False,
        explosion_radius: float | None = None,
        hit_ids: set[int] | None = None,
    ) -> Projectile:
        projectile = Projectile(
            id=self._next_id,
            pos=pos,
            vel=vel,
            damage=float(damage),
            max_range=float(max_range),
            kind=ProjectileKind(kind),
            payload=payload if payload is not None else DefaultPayload(),
            charged=bool(charged),
            charge_level=int(charge_level),
            piercing=bool(piercing),
            explosion_radius=None if explosion_radius is None else float(explosion_radius),
            hit_ids=set(hit_ids) if hit_ids else set(),
        )
        self._next_id += 1
        self._entries.append(projectile)
        return projectile

    def iter_active(self) -> list[Projectile]:
        return [entry for entry in self._entries if entry.active]

    def prune(self) -> int:
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry.active]
        return before - len(self._entries)
