"""Components that report network addresses, link state and throughput."""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass

import psutil

from .util import fmt_human, read_int, warn

NET_CLASS = "/sys/class/net"
INTERVAL_MS = 1000


def _ip(interface: str, family: int) -> str | None:
    try:
        addresses = psutil.net_if_addrs()
    except OSError:
        warn("getifaddrs:")
        return None
    for addr in addresses.get(interface, ()):
        if addr.family == family and addr.address:
            return addr.address
    return None


def ipv4(interface: str) -> str | None:
    """Return the first IPv4 address of an interface."""
    return _ip(interface, socket.AF_INET)


def ipv6(interface: str) -> str | None:
    """Return the first IPv6 address of an interface."""
    return _ip(interface, socket.AF_INET6)


def up(interface: str) -> str | None:
    """Return 'up' or 'down' for an interface, or None if it does not exist."""
    try:
        stats = psutil.net_if_stats()
    except OSError:
        warn("getifaddrs:")
        return None
    info = stats.get(interface)
    if info is None:
        return None
    return "up" if info.isup else "down"


@dataclass
class NetSpeed:
    """Turns successive byte counter readings into a transfer rate."""

    counter: str
    interval: int = INTERVAL_MS
    last: int = 0

    def rate(self, interface: str, root: str = NET_CLASS) -> str | None:
        """Return bytes per second since the previous reading, or None on the first."""
        path = os.path.join(root, interface, "statistics", self.counter)
        value = read_int(path)
        if value is None:
            return None
        previous, self.last = self.last, value
        if previous == 0:
            return None
        return fmt_human((value - previous) * 1000 // self.interval, 1024)


_rx = NetSpeed("rx_bytes")
_tx = NetSpeed("tx_bytes")


def netspeed_rx(interface: str) -> str | None:
    """Return the receive rate of an interface."""
    return _rx.rate(interface)


def netspeed_tx(interface: str) -> str | None:
    """Return the transmit rate of an interface."""
    return _tx.rate(interface)