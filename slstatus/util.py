"""Shared helpers: diagnostics, human-readable sizes and small file parsers."""

from __future__ import annotations

import re
import sys

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def warn(message: str) -> None:
    """Print a diagnostic to stderr.

    A message ending in ':' is followed by the reason of the exception
    currently being handled, if there is one.
    """
    if message.endswith(":"):
        exc = sys.exc_info()[1]
        if exc is not None:
            reason = getattr(exc, "strerror", None) or str(exc)
            message = f"{message} {reason}"
    print(message, file=sys.stderr)


def die(message: str) -> None:
    """Print a diagnostic and exit with status 1."""
    warn(message)
    raise SystemExit(1)


def fmt_human(num: float, base: int) -> str:
    """Format a quantity with SI (base 1000) or IEC (base 1024) prefixes."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        raise ValueError(f"fmt_human: invalid base {base}") from None
    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"


def read_text(path: str) -> str | None:
    """Return the contents of a file, or None if it cannot be read."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return handle.read()
    except OSError:
        warn(f"fopen '{path}':")
        return None


def _parse_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def read_int(path: str) -> int | None:
    """Return the integer at the start of a file, or None."""
    text = read_text(path)
    if text is None:
        return None
    return _parse_int(text)


def find_field(text: str, key: str) -> int | None:
    """Return the integer after the first line starting with ``key``."""
    for line in text.splitlines():
        if line.startswith(key):
            return _parse_int(line[len(key):])
    return None