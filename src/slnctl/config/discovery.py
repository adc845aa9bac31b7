"""Locating ``slnctl.toml``.

The file is searched for in the starting directory and each of its parents,
the same way git finds its repository. ``SLNCTL_CONFIG`` short-circuits the
search.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "slnctl.toml"
CONFIG_ENV_VAR = "SLNCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None.

    When ``SLNCTL_CONFIG`` is set it wins outright: its file is returned if it
    exists, and no walk-up happens either way.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
