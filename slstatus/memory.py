"""Components that report RAM and swap usage from /proc/meminfo."""

from __future__ import annotations

from .util import find_field, fmt_human, read_text

MEMINFO = "/proc/meminfo"

_RAM_KEYS = (
    "MemTotal:",
    "MemFree:",
    "Buffers:",
    "Cached:",
    "Shmem:",
    "SReclaimable:",
)
_SWAP_KEYS = ("SwapTotal:", "SwapFree:", "SwapCached:")


def _fields(path: str, keys: tuple[str, ...]) -> tuple[int, ...] | None:
    """Return the values of all ``keys``, or None if any is missing."""
    text = read_text(path)
    if text is None:
        return None
    values = tuple(find_field(text, key) for key in keys)
    if any(value is None for value in values):
        return None
    return values


def _ram_used_kib(path: str) -> tuple[int, int] | None:
    fields = _fields(path, _RAM_KEYS)
    if fields is None:
        return None
    total, free, buffers, cached, shmem, sreclaimable = fields
    return total, total - free - buffers - cached - sreclaimable + shmem


def ram_free(unused: str | None = None, path: str = MEMINFO) -> str | None:
    """Return the amount of free memory."""
    fields = _fields(path, ("MemFree:",))
    if fields is None:
        return None
    return fmt_human(fields[0] * 1024, 1024)


def ram_perc(unused: str | None = None, path: str = MEMINFO) -> str | None:
    """Return memory usage in percent."""
    result = _ram_used_kib(path)
    if result is None:
        return None
    total, used = result
    if total == 0:
        return None
    return str(100 * used // total)


def ram_total(unused: str | None = None, path: str = MEMINFO) -> str | None:
    """Return the total amount of memory."""
    fields = _fields(path, ("MemTotal:",))
    if fields is None:
        return None
    return fmt_human(fields[0] * 1024, 1024)


def ram_used(unused: str | None = None, path: str = MEMINFO) -> str | None:
    """Return the amount of memory in use."""
    result = _ram_used_kib(path)
    if result is None:
        return None
    return fmt_human(result[1] * 1024, 1024)


def _swap(path: str) -> tuple[int, int, int] | None:
    fields = _fields(path, _SWAP_KEYS)
    if fields is None:
        return None
    total, free, cached = fields
    return total, free, cached


def swap_free(unused: str | None = None, path: str = MEMINFO) -> str | None:
    """Return the amount of free swap."""
    fields = _fields(path, ("SwapFree:",))
    if fields is None:
        return None
    return fmt_human(fields[0] * 1024, 1024)


def swap_perc(unused: str | None = None, path: str = MEMINFO) -> str | None:
    """Return swap usage in percent."""
    info = _swap(path)
    if info is None:
        return None
    total, free, cached = info
    if total == 0:
        return None
    return str(int(100 * (total - free - cached) / total))


def swap_total(unused: str | None = None, path: str = MEMINFO) -> str | None:
    """Return the total amount of swap."""
    fields = _fields(path, ("SwapTotal:",))
    if fields is None:
        return None
    return fmt_human(fields[0] * 1024, 1024)


def swap_used(unused: str | None = None, path: str = MEMINFO) -> str | None:
    """Return the amount of swap in use."""
    info = _swap(path)
    if info is None:
        return None
    total, free, cached = info
    return fmt_human((total - free - cached) * 1024, 1024)