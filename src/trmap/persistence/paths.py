from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import PlatformDirs

logger = logging.getLogger(__name__)

APP_NAME = "trmap"

# Environment variable override (useful for tests and power users)
ENV_DATA_DIR = "TRMAP_DATA_DIR"


def default_store_root() -> Path:
    """Return the directory FileStore uses when none is configured.

    Honours TRMAP_DATA_DIR, otherwise the platform user data dir
    (e.g. ``~/.local/share/trmap/maps`` on Linux).
    """
    override = os.getenv(ENV_DATA_DIR)
    if override:
        return Path(override).expanduser().resolve()
    dirs = PlatformDirs(appname=APP_NAME, appauthor=False)
    return Path(dirs.user_data_dir).expanduser().resolve() / "maps"


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path
