from __future__ import annotations

__all__ = ["arena_view"]
