from __future__ import annotations

__all__ = [
    "color",
    "geom",
    "math",
    "view",
]
