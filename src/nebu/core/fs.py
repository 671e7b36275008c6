"""Filesystem helpers."""

from __future__ import annotations

import os
from pathlib import Path


def expand_home_dir(path: str | os.PathLike[str]) -> Path:
    """Expand a leading ``~`` to the user's home directory.

    Only ``~`` and ``~/...`` are expanded; ``~user`` forms and ``~`` in other
    positions are left alone.
    """
    raw = os.fspath(path)
    if raw == "~":
        return Path.home()
    if raw.startswith("~/") or raw.startswith("~" + os.sep):
        return Path.home() / raw[2:]
    return Path(raw)
