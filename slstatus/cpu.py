"""Components that report processor frequency and usage."""

from __future__ import annotations

from dataclasses import dataclass

from .util import fmt_human, read_int, read_text

CPU_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"
PROC_STAT = "/proc/stat"

# user nice system idle iowait irq softirq
_FIELDS = 7
_BUSY = (0, 1, 2, 5, 6)


@dataclass
class CpuUsage:
    """Tracks successive /proc/stat samples to compute CPU usage."""

    last: tuple[float, ...] | None = None

    def percent(self, path: str = PROC_STAT) -> str | None:
        """Return usage since the previous sample, or None on the first one."""
        text = read_text(path)
        if text is None:
            return None
        tokens = text.split()[1:1 + _FIELDS]
        try:
            current = tuple(float(token) for token in tokens)
        except ValueError:
            return None
        if len(current) != _FIELDS:
            return None

        previous = self.last or (0.0,) * _FIELDS
        self.last = current
        if previous[0] == 0:
            return None

        total = sum(previous) - sum(current)
        if total == 0:
            return None
        busy = sum(previous[i] for i in _BUSY) - sum(current[i] for i in _BUSY)
        return str(int(100 * busy / total))


_usage = CpuUsage()


def cpu_freq(unused: str | None = None, path: str = CPU_FREQ) -> str | None:
    """Return the current frequency of the first CPU."""
    khz = read_int(path)
    if khz is None:
        return None
    return fmt_human(khz * 1000, 1000)


def cpu_perc(unused: str | None = None) -> str | None:
    """Return CPU usage in percent since the previous call."""
    return _usage.percent()