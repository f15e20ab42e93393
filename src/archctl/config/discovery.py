"""Locate ``archctl.toml``.

The file is found the way git finds ``.git/``: start in the working
directory and try each parent.  ``ARCHCTL_CONFIG`` short-circuits the
search; ``--config`` bypasses it entirely (see ``ArchSettings.from_cli``).
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "archctl.toml"
CONFIG_ENV_VAR = "ARCHCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``archctl.toml`` at or above *start* (default: cwd).

    When ``ARCHCTL_CONFIG`` is set it is the only candidate considered.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None

