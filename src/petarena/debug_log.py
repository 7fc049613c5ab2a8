"""Opt-in combat trace.

One line per event: `<utc timestamp> event=<name> key=value ...` with keys
sorted, appended to a per-run file. Calls are no-ops until a trace is opened,
so the simulation can log unconditionally.
"""

from __future__ import annotations

import datetime as dt
import os
from pathlib import Path
from threading import Lock

from .paths import default_log_dir

__all__ = [
    "close_combat_log",
    "combat_log",
    "combat_log_path",
    "init_combat_log",
]


def _render(value: object) -> str:
    match value:
        case bool():
            text = "1" if value else "0"
        case float():
            text = f"{value:.3f}"
        case _:
            text = str(value)
    return text.replace("\n", "\\n").replace(" ", "_")


class _CombatTrace:
    def __init__(self) -> None:
        self._lock = Lock()
        self._path: Path | None = None

    @property
    def path(self) -> Path | None:
        with self._lock:
            return self._path

    def open(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            self._path = path

    def close(self) -> None:
        with self._lock:
            self._path = None

    def write(self, event: str, fields: dict[str, object]) -> None:
        stamp = dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds")
        parts = [stamp, f"event={event.strip()}"]
        parts.extend(f"{key}={_render(fields[key])}" for key in sorted(fields))
        with self._lock:
            if self._path is None:
                return
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(" ".join(parts) + "\n")


_TRACE = _CombatTrace()


def combat_log_path() -> Path | None:
    return _TRACE.path


def init_combat_log(
    *,
    base_dir: Path | None = None,
    area_id: str,
    character_id: str,
    seed: int,
) -> Path:
    """Start a run trace under `<base_dir>/combat/`; returns the file path."""
    root = Path(base_dir) if base_dir is not None else default_log_dir()
    started = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%S.%fZ")
    path = root / "combat" / f"run-{area_id}-pid{os.getpid()}-{started}.log"
    _TRACE.open(path)
    combat_log("init", area=area_id, character=character_id, seed=int(seed), pid=os.getpid())
    return path


def combat_log(event: str, **fields: object) -> None:
    _TRACE.write(str(event), fields)


def close_combat_log() -> None:
    _TRACE.close()
