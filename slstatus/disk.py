"""Components that report file system usage."""

from __future__ import annotations

import os

from .util import fmt_human, warn


def _statvfs(path: str):
    try:
        return os.statvfs(path)
    except OSError:
        warn(f"statvfs '{path}':")
        return None


def disk_free(path: str) -> str | None:
    """Return the space available to unprivileged users."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * fs.f_bavail, 1024)


def disk_perc(path: str) -> str | None:
    """Return the used share of the file system in percent."""
    fs = _statvfs(path)
    if fs is None or fs.f_blocks == 0:
        return None
    return str(int(100 * (1 - fs.f_bavail / fs.f_blocks)))


def disk_total(path: str) -> str | None:
    """Return the total size of the file system."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * fs.f_blocks, 1024)


def disk_used(path: str) -> str | None:
    """Return the space in use on the file system."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * (fs.f_blocks - fs.f_bfree), 1024)