"""Components that report battery charge and state."""

from __future__ import annotations

import os
import re

from .util import read_int, read_text

POWER_SUPPLY = "/sys/class/power_supply"

_STATE_SYMBOLS = {
    "Charging": "+",
    "Discharging": "-",
    "Full": "o",
    "Not charging": "o",
}
_STATE = re.compile(r"[a-zA-Z ]{1,12}")


def _read_state(bat: str, root: str) -> str | None:
    text = read_text(os.path.join(root, bat, "status"))
    if text is None:
        return None
    match = _STATE.match(text)
    return match.group(0) if match else None


def _pick(bat: str, root: str, *names: str) -> str | None:
    for name in names:
        path = os.path.join(root, bat, name)
        if os.access(path, os.R_OK):
            return path
    return None


def _read_first(bat: str, root: str, *names: str) -> int | None:
    path = _pick(bat, root, *names)
    return None if path is None else read_int(path)


def battery_perc(bat: str, root: str = POWER_SUPPLY) -> str | None:
    """Return the battery capacity in percent."""
    capacity = read_int(os.path.join(root, bat, "capacity"))
    return None if capacity is None else str(capacity)


def battery_state(bat: str, root: str = POWER_SUPPLY) -> str | None:
    """Return '+' when charging, '-' when discharging, 'o' when full, else '?'."""
    state = _read_state(bat, root)
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat: str, root: str = POWER_SUPPLY) -> str | None:
    """Return the remaining time while discharging, an empty string otherwise."""
    state = _read_state(bat, root)
    if state is None:
        return None
    charge_now = _read_first(bat, root, "charge_now", "energy_now")
    if charge_now is None:
        return None
    if state != "Discharging":
        return ""
    current_now = _read_first(bat, root, "current_now", "power_now")
    if not current_now:
        return None
    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"