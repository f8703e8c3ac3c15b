"""Component that runs a shell command."""

from __future__ import annotations

import subprocess

from .util import warn

_MAX_LINE = 1022


def run_command(cmd: str) -> str | None:
    """Run ``cmd`` through the shell and return the first line of its output."""
    try:
        proc = subprocess.Popen(cmd, shell=True, stdout=subprocess.PIPE)
    except OSError:
        warn(f"popen '{cmd}':")
        return None
    with proc:
        line = proc.stdout.readline(_MAX_LINE)
    if line.endswith(b"\n"):
        line = line[:-1]
    text = line.decode("utf-8", errors="replace")
    return text or None