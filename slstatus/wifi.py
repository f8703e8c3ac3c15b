"""Components that report the WiFi ESSID and signal strength over nl80211."""

from __future__ import annotations

import socket
import struct
import sys
from typing import Callable

from .util import warn

NLMSG_HDRLEN = 16
GENL_HDRLEN = 4
NLA_HDRLEN = 4

NETLINK_GENERIC = 16
NLM_F_REQUEST = 0x1
NLM_F_DUMP = 0x300
NLMSG_DONE = 3

GENL_ID_CTRL = 0x10
CTRL_CMD_GETFAMILY = 3
CTRL_ATTR_FAMILY_ID = 1
CTRL_ATTR_FAMILY_NAME = 2

NL80211_CMD_GET_INTERFACE = 5
NL80211_CMD_GET_STATION = 17
NL80211_ATTR_IFINDEX = 3
NL80211_ATTR_STA_INFO = 21
NL80211_ATTR_SSID = 52
NL80211_STA_INFO_SIGNAL_AVG = 13

_FAMILY_NAME = b"nl80211\0"
_RESP_SIZE = 4096
_NLMSGHDR = struct.Struct("=IHHII")
_GENLMSGHDR = struct.Struct("=BBH")
_NLATTR = struct.Struct("=HH")


def _align(length: int) -> int:
    return (length + 3) & ~3


def rssi_to_perc(rssi: int) -> int:
    """Map a signal strength in dBm onto 0..100 percent."""
    if rssi >= -50:
        return 100
    if rssi <= -100:
        return 0
    return 2 * (rssi + 100)


def _attr_span(attr: int, data: bytes, start: int, end: int) -> tuple[int, int] | None:
    """Return the offset and length of the payload of ``attr`` in data[start:end]."""
    pos = start
    while pos < end:
        if end - pos < NLA_HDRLEN:
            return None
        length, kind = _NLATTR.unpack_from(data, pos)
        if length < NLA_HDRLEN:
            return None
        if kind == attr:
            return pos + NLA_HDRLEN, length - NLA_HDRLEN
        pos += _align(length)
    return None


def find_attr(attr: int, data: bytes) -> bytes | None:
    """Return the payload of the first netlink attribute of type ``attr``."""
    span = _attr_span(attr, data, 0, len(data))
    if span is None:
        return None
    offset, length = span
    return bytes(data[offset:offset + length])


def _request(msg_type: int, flags: int, seq: int, cmd: int,
             attr: int, payload: bytes) -> bytes:
    attribute = _NLATTR.pack(NLA_HDRLEN + len(payload), attr) + payload
    attribute += b"\0" * (_align(len(attribute)) - len(attribute))
    body = _GENLMSGHDR.pack(cmd, 1, 0) + attribute
    return _NLMSGHDR.pack(NLMSG_HDRLEN + len(body), msg_type, flags, seq, 0) + body


def _ifindex(interface: str) -> int | None:
    try:
        return socket.if_nametoindex(interface)
    except OSError:
        warn("ioctl 'SIOCGIFINDEX':")
        return None


def _open_socket() -> socket.socket:
    family = getattr(socket, "AF_NETLINK", 16)
    return socket.socket(family, socket.SOCK_RAW, NETLINK_GENERIC)


class _Nl80211:
    """A generic netlink connection that speaks to the nl80211 family."""

    def __init__(self, connect: Callable[[], socket.socket]) -> None:
        self._connect = connect
        self._sock = None
        self._seq = 1
        self._family = 0

    def _next_seq(self) -> int:
        seq = self._seq
        self._seq += 1
        return seq

    def _socket(self):
        if self._sock is None:
            try:
                self._sock = self._connect()
            except OSError:
                warn("socket 'AF_NETLINK':")
                return None
        return self._sock

    def _send(self, request: bytes) -> bool:
        if self._sock is None:
            warn("send 'AF_NETLINK': no socket")
            return False
        try:
            sent = self._sock.send(request)
        except OSError:
            warn("send 'AF_NETLINK':")
            return False
        if sent != len(request):
            warn("send 'AF_NETLINK': short write")
            return False
        return True

    def _recv(self) -> bytes | None:
        try:
            return self._sock.recv(_RESP_SIZE)
        except OSError:
            warn("recv 'AF_NETLINK':")
            return None

    def family(self) -> int:
        """Return the nl80211 family id, or 0 if it cannot be resolved."""
        if self._family:
            return self._family
        request = _request(GENL_ID_CTRL, NLM_F_REQUEST, self._next_seq(),
                           CTRL_CMD_GETFAMILY, CTRL_ATTR_FAMILY_NAME, _FAMILY_NAME)
        if self._socket() is None or not self._send(request):
            return 0
        resp = self._recv()
        if resp is None or len(resp) <= len(request):
            return 0
        payload = find_attr(CTRL_ATTR_FAMILY_ID, resp[len(request):])
        if payload is not None and len(payload) == 2:
            self._family = struct.unpack("=H", payload)[0]
        return self._family

    def essid(self, interface: str) -> str | None:
        fam = self.family()
        idx = _ifindex(interface)
        if not fam:
            print("nl80211 family not found", file=sys.stderr)
            return None
        if idx is None:
            print(f"interface {interface} not found", file=sys.stderr)
            return None
        request = _request(fam, NLM_F_REQUEST, self._next_seq(),
                           NL80211_CMD_GET_INTERFACE, NL80211_ATTR_IFINDEX,
                           struct.pack("=I", idx))
        if not self._send(request):
            return None
        resp = self._recv()
        if resp is None or len(resp) <= NLMSG_HDRLEN + GENL_HDRLEN:
            return None
        payload = find_attr(NL80211_ATTR_SSID, resp[NLMSG_HDRLEN + GENL_HDRLEN:])
        if payload is None:
            return None
        return payload.split(b"\0", 1)[0].decode("utf-8", errors="replace")

    def signal(self, interface: str) -> str | None:
        fam = self.family()
        idx = _ifindex(interface)
        if idx is None:
            print(f"interface {interface} not found", file=sys.stderr)
            return None
        request = _request(fam, NLM_F_REQUEST | NLM_F_DUMP, self._next_seq(),
                           NL80211_CMD_GET_STATION, NL80211_ATTR_IFINDEX,
                           struct.pack("=i", idx))
        if not self._send(request):
            return None

        strength = None
        while True:
            resp = self._recv()
            if resp is None or len(resp) < NLMSG_HDRLEN:
                return None
            offset = 0
            while len(resp) - offset >= NLMSG_HDRLEN:
                length, msg_type = struct.unpack_from("=IH", resp, offset)
                if length < NLMSG_HDRLEN:
                    return strength
                end = min(len(resp), offset + length)
                if strength is None and length > NLMSG_HDRLEN + GENL_HDRLEN:
                    sta = _attr_span(NL80211_ATTR_STA_INFO, resp,
                                     offset + NLMSG_HDRLEN + GENL_HDRLEN, end)
                    sig = None
                    if sta is not None:
                        sig = _attr_span(NL80211_STA_INFO_SIGNAL_AVG, resp, sta[0], end)
                    if sig is not None and sig[1] == 1:
                        rssi = struct.unpack_from("b", resp, sig[0])[0]
                        strength = str(rssi_to_perc(rssi))
                if msg_type == NLMSG_DONE:
                    return strength
                offset = end


_client = _Nl80211(_open_socket)


def wifi_essid(interface: str) -> str | None:
    """Return the ESSID the interface is associated with."""
    return _client.essid(interface)


def wifi_perc(interface: str) -> str | None:
    """Return the average signal strength of the station in percent."""
    return _client.signal(interface)