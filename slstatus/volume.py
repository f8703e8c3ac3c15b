"""Component that reports the OSS mixer master volume."""

from __future__ import annotations

import fcntl
import os
import struct

from .util import warn

SOUND_DEVICE_NAMES = (
    "vol", "bass", "treble", "synth", "pcm", "speaker", "line", "mic",
    "cd", "mix", "pcm2", "rec", "igain", "ogain", "line1", "line2",
    "line3", "dig1", "dig2", "dig3", "phin", "phout", "video", "radio",
    "monitor",
)
SOUND_MIXER_DEVMASK = 0xFE

_IOC_READ = 2
_INT = struct.Struct("i")


def _mixer_read(nr: int) -> int:
    return (_IOC_READ << 30) | (_INT.size << 16) | (ord("M") << 8) | nr


def _ioctl_int(fd: int, request: int) -> int:
    return _INT.unpack(fcntl.ioctl(fd, request, _INT.pack(0)))[0]


def vol_perc(card: str) -> str | None:
    """Return the master volume of a mixer device in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError:
        warn(f"open '{card}':")
        return None
    value = None
    try:
        try:
            devmask = _ioctl_int(fd, _mixer_read(SOUND_MIXER_DEVMASK))
        except OSError:
            warn("ioctl 'SOUND_MIXER_READ_DEVMASK':")
            return None
        for index, name in enumerate(SOUND_DEVICE_NAMES):
            if devmask & (1 << index) and name == "vol":
                try:
                    value = _ioctl_int(fd, _mixer_read(index))
                except OSError:
                    warn(f"ioctl 'MIXER_READ({index})':")
                    return None
    finally:
        os.close(fd)
    return None if value is None else str(value & 0xFF)