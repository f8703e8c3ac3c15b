"""Components that report general system and user information."""

from __future__ import annotations

import os
import pwd
import socket
import sys
import time

from .util import read_int, warn

ENTROPY_AVAIL = "/proc/sys/kernel/random/entropy_avail"

_BUFSIZE = 1024
_UPTIME_CLOCK = getattr(
    time, "CLOCK_BOOTTIME", getattr(time, "CLOCK_UPTIME", time.CLOCK_MONOTONIC)
)


def datetime(fmt: str) -> str | None:
    """Return the local time formatted with strftime."""
    result = time.strftime(fmt, time.localtime())
    if not result or len(result.encode()) >= _BUFSIZE:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def hostname(unused: str | None = None) -> str | None:
    """Return the host name."""
    try:
        return socket.gethostname()
    except OSError:
        warn("gethostname:")
        return None


def kernel_release(unused: str | None = None) -> str | None:
    """Return the kernel release, as ``uname -r`` prints it."""
    try:
        return os.uname().release
    except OSError:
        warn("uname:")
        return None


def load_avg(unused: str | None = None) -> str | None:
    """Return the 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def uptime(unused: str | None = None) -> str | None:
    """Return the system uptime as hours and minutes."""
    try:
        seconds = int(time.clock_gettime(_UPTIME_CLOCK))
    except OSError:
        warn(f"clock_gettime {_UPTIME_CLOCK}")
        return None
    hours, rest = divmod(seconds, 3600)
    return f"{hours}h {rest // 60}m"


def gid(unused: str | None = None) -> str:
    """Return the real group id of the current user."""
    return str(os.getgid())


def uid(unused: str | None = None) -> str:
    """Return the effective user id."""
    return str(os.geteuid())


def username(unused: str | None = None) -> str | None:
    """Return the name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError:
        warn(f"getpwuid '{euid}': no such user")
        return None


def entropy(unused: str | None = None, path: str = ENTROPY_AVAIL) -> str | None:
    """Return the available kernel entropy."""
    if sys.platform.startswith(("openbsd", "freebsd")):
        return "\u221e"
    value = read_int(path)
    return None if value is None else str(value)


def temp(file: str) -> str | None:
    """Return the temperature in degrees Celsius from a millidegree sensor file."""
    value = read_int(file)
    return None if value is None else str(value // 1000)