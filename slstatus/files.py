"""Components that read files and directories."""

from __future__ import annotations

import os

from .util import warn

_MAX_LINE = 1022


def cat(path: str) -> str | None:
    """Return the first line of a file, or None if it is empty or unreadable."""
    try:
        with open(path, "rb") as handle:
            line = handle.readline(_MAX_LINE)
    except OSError:
        warn(f"fopen '{path}':")
        return None
    if line.endswith(b"\n"):
        line = line[:-1]
    text = line.decode("utf-8", errors="replace")
    return text or None


def num_files(path: str) -> str | None:
    """Return the number of entries in a directory."""
    try:
        with os.scandir(path) as entries:
            count = sum(1 for _ in entries)
    except OSError:
        warn(f"opendir '{path}':")
        return None
    return str(count)