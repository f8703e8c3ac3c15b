"""The status line layout: which components are shown and how."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from .battery import battery_perc, battery_remaining, battery_state
from .commands import run_command
from .cpu import cpu_perc
from .network import ipv4, netspeed_rx
from .system import datetime, temp

# Interval between updates, in milliseconds.
INTERVAL_MS = 1000

# Text shown when a component cannot produce a value.
UNKNOWN_STR = ""

# Maximum length of the status line, in bytes, including the terminator.
MAXLEN = 2048

Component = Callable[[Optional[str]], Optional[str]]

_CONVERSION = re.compile(r"%([%s])")


@dataclass(frozen=True)
class StatusItem:
    """One component of the status line with its format and argument."""

    func: Component
    fmt: str
    arg: Optional[str] = None

    def render(self, unknown: str = UNKNOWN_STR) -> str:
        """Run the component and place its value into the format."""
        value = self.func(self.arg)
        if value is None:
            value = unknown

        def substitute(match: re.Match) -> str:
            return "%" if match.group(1) == "%" else value

        return _CONVERSION.sub(substitute, self.fmt)


def default_items() -> list[StatusItem]:
    """Return the configured status line components, left to right."""
    return [
        StatusItem(cpu_perc, "^b#ff5555^^c#282a36^  %s%% ^d^", None),
        StatusItem(
            run_command,
            "^b#ff5555^^c#282a36^%sMHz ^d^",
            "grep 'cpu MHz' /proc/cpuinfo | head  -1 | awk '{print int($4)}'",
        ),
        StatusItem(
            temp,
            "^b#ff5555^^c#282a36^ %s°C ^d^",
            "/sys/class/hwmon/hwmon5/temp1_input",
        ),
        StatusItem(
            run_command,
            "^b#6272a4^^c#282a36^  %s ^d^",
            "free -m | awk '/^Mem/ { printf(\"%.2f GiB\", $3/1024) }'",
        ),
        StatusItem(
            run_command,
            "^b#50fa7b^^c#282a36^  %s ^d^",
            "/usr/local/bin/net-status.sh",
        ),
        StatusItem(netspeed_rx, "^b#50fa7b^^c#282a36^  %s/s ^d^", "wlp2s0"),
        StatusItem(ipv4, "^b#50fa7b^^c#282a36^ 󰩠 %s ^d^", "wlp2s0"),
        StatusItem(
            run_command,
            "^b#bd93f9^^c#282a36^  %s ^d^",
            "wpctl get-volume @DEFAULT_AUDIO_SINK@ | awk '{if($3==\"[MUTED]\") "
            "print \"MUTE\"; else print int($2*100)\"%\"}'",
        ),
        StatusItem(
            run_command,
            "^b#bd93f9^^c#282a36^ %s ^d^",
            "brightnessctl -m | cut -d, -f4",
        ),
        StatusItem(
            run_command,
            "^b#bd93f9^^c#282a36^%s ^d^",
            "bluetoothctl info | grep -q 'Name' && echo ' 󰥰 ' || "
            "(bluetoothctl show | grep -q 'Powered: yes' && echo '  ' || echo ' 󰂲 ')",
        ),
        StatusItem(battery_state, "^b#f1fa8c^^c#282a36^  %s ^d^", "BAT0"),
        StatusItem(battery_perc, "^b#f1fa8c^^c#282a36^%s%% ^d^", "BAT0"),
        StatusItem(
            run_command,
            "^b#f1fa8c^^c#282a36^ %sW ^d^",
            "awk '{print $1*10^-6}' /sys/class/power_supply/BAT0/power_now | cut -c1-4",
        ),
        StatusItem(battery_remaining, "^b#f1fa8c^^c#282a36^(%s) ^d^", "BAT0"),
        # Pomodoro timer state, written by an external script.
        StatusItem(run_command, "%s", "cat /tmp/slstatus_pomodoro 2>/dev/null"),
        # Caffeine indicator: an icon or nothing.
        StatusItem(run_command, "%s", "cat /tmp/slstatus_caffeine 2>/dev/null"),
        StatusItem(datetime, "^b#21222c^^c#f8f8f2^ %s ^d^", "%H:%M:%S"),
    ]