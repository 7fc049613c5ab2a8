from __future__ import annotations

import os
from pathlib import Path

from platformdirs import PlatformDirs

__all__ = ["APP_NAME", "default_log_dir"]

APP_NAME = "pet-arena"


def _app_dirs() -> PlatformDirs:
    return PlatformDirs(appname=APP_NAME, appauthor=False)


def default_log_dir() -> Path:
    override = os.environ.get("PETARENA_LOG_DIR")
    if override:
        return Path(override).expanduser().resolve()
    return Path(_app_dirs().user_log_path)
