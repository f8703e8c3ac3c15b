"""Command line entry point: renders the status line periodically."""

from __future__ import annotations

import os
import signal
import socket
import struct
import sys
import time

from .config import INTERVAL_MS, MAXLEN, UNKNOWN_STR, StatusItem, default_items
from .util import die, warn

VERSION = "1.1"
_PROG = "slstatus"

_X_OPCODE_CHANGE_PROPERTY = 18
_X_ATOM_STRING = 31
_X_ATOM_WM_NAME = 39
_XAUTH_NAME = b"MIT-MAGIC-COOKIE-1"


def _usage() -> None:
    die(f"usage: {_PROG} [-v] [-s] [-1]")


def parse_args(argv: list[str]) -> tuple[bool, bool]:
    """Parse the options; return (write to stdout, run only once)."""
    stdout_only = False
    once = False
    args = list(argv)
    while args and args[0].startswith("-") and len(args[0]) > 1:
        arg = args.pop(0)
        if arg == "--":
            break
        for flag in arg[1:]:
            if flag == "v":
                die(f"{_PROG}-{VERSION}")
            elif flag == "1":
                once = True
                stdout_only = True
            elif flag == "s":
                stdout_only = True
            else:
                _usage()
    if args:
        _usage()
    return stdout_only, once


def render_status(items: list[StatusItem], unknown: str = UNKNOWN_STR,
                  maxlen: int = MAXLEN) -> str:
    """Join the rendered items, stopping before the line would exceed maxlen."""
    parts: list[str] = []
    length = 0
    for item in items:
        piece = item.render(unknown)
        size = len(piece.encode("utf-8"))
        if length + size >= maxlen:
            warn("vsnprintf: Output truncated")
            break
        parts.append(piece)
        length += size
    return "".join(parts)


def _pad(data: bytes) -> bytes:
    return data + b"\0" * (-len(data) % 4)


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    chunks = []
    while size > 0:
        chunk = sock.recv(size)
        if not chunk:
            raise OSError("connection closed by X server")
        chunks.append(chunk)
        size -= len(chunk)
    return b"".join(chunks)


def _xauth_entries(path: str):
    with open(path, "rb") as handle:
        data = handle.read()
    pos = 0

    def counted() -> bytes:
        nonlocal pos
        (size,) = struct.unpack_from(">H", data, pos)
        value = data[pos + 2:pos + 2 + size]
        pos += 2 + size
        return value

    while pos + 2 <= len(data):
        (family,) = struct.unpack_from(">H", data, pos)
        pos += 2
        try:
            address, number, name, cookie = counted(), counted(), counted(), counted()
        except struct.error:
            return
        yield family, address, number, name, cookie


def _xauth_cookie(number: str) -> tuple[bytes, bytes]:
    path = os.environ.get("XAUTHORITY") or os.path.expanduser("~/.Xauthority")
    hostname = socket.gethostname().encode()
    try:
        candidates = [
            entry for entry in _xauth_entries(path)
            if entry[2] in (number.encode(), b"") and entry[3] == _XAUTH_NAME
        ]
    except OSError:
        return b"", b""
    if not candidates:
        return b"", b""
    for entry in candidates:
        if entry[1] == hostname:
            return entry[3], entry[4]
    return candidates[0][3], candidates[0][4]


class _XDisplay:
    """A minimal X11 connection able to set the root window name."""

    def __init__(self, sock: socket.socket, root: int) -> None:
        self._sock = sock
        self._root = root

    @classmethod
    def open(cls, display: str | None = None) -> "_XDisplay":
        display = display if display is not None else os.environ.get("DISPLAY", "")
        host, sep, rest = display.rpartition(":")
        number = rest.split(".")[0]
        if not sep or not number.isdigit():
            raise OSError(f"invalid display '{display}'")
        if host in ("", "unix"):
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            address = f"/tmp/.X11-unix/X{number}"
        else:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            address = (host, 6000 + int(number))
        try:
            sock.connect(address)
            root = cls._handshake(sock, number)
        except (OSError, struct.error):
            sock.close()
            raise OSError(f"cannot open display '{display}'") from None
        return cls(sock, root)

    @staticmethod
    def _handshake(sock: socket.socket, number: str) -> int:
        name, cookie = _xauth_cookie(number)
        request = struct.pack("<BxHHHH2x", 0x6C, 11, 0, len(name), len(cookie))
        sock.sendall(request + _pad(name) + _pad(cookie))
        head = _recv_exact(sock, 8)
        (extra,) = struct.unpack_from("<H", head, 6)
        body = _recv_exact(sock, extra * 4)
        if head[0] != 1:
            reason = body[:head[1]].decode("latin-1", errors="replace")
            raise OSError(reason or "X server refused connection")
        (vendor_len,) = struct.unpack_from("<H", body, 16)
        nformats = body[21]
        offset = 32 + vendor_len + (-vendor_len % 4) + 8 * nformats
        (root,) = struct.unpack_from("<I", body, offset)
        return root

    def store_name(self, name: bytes) -> None:
        """Replace WM_NAME of the root window."""
        data = _pad(name)
        request = struct.pack(
            "<BBHIIIB3xI",
            _X_OPCODE_CHANGE_PROPERTY, 0, 6 + len(data) // 4,
            self._root, _X_ATOM_WM_NAME, _X_ATOM_STRING, 8, len(name),
        )
        self._sock.sendall(request + data)

    def close(self) -> None:
        self._sock.close()


class _Wakeup(Exception):
    """Raised from a signal handler to cut a sleep short."""


def main(argv: list[str] | None = None) -> int:
    """Run the status monitor."""
    stdout_only, once = parse_args(sys.argv[1:] if argv is None else argv)
    state = {"done": once, "sleeping": False}

    def on_signal(signo, frame) -> None:
        if signo != signal.SIGUSR1:
            state["done"] = True
        if state["sleeping"]:
            raise _Wakeup

    handled = (signal.SIGINT, signal.SIGTERM, signal.SIGUSR1)
    previous = {signo: signal.signal(signo, on_signal) for signo in handled}

    display = None
    try:
        if not stdout_only:
            try:
                display = _XDisplay.open()
            except OSError:
                die("XOpenDisplay: Failed to open display")

        items = default_items()
        while True:
            start = time.monotonic()
            status = render_status(items, UNKNOWN_STR, MAXLEN)

            if stdout_only:
                try:
                    print(status, flush=True)
                except OSError:
                    die("puts:")
            else:
                try:
                    display.store_name(status.encode("utf-8"))
                except OSError:
                    die("XStoreName: Allocation failed")

            if state["done"]:
                break
            wait = INTERVAL_MS / 1000 - (time.monotonic() - start)
            if wait >= 0:
                state["sleeping"] = True
                try:
                    time.sleep(wait)
                except _Wakeup:
                    pass
                finally:
                    state["sleeping"] = False
            if state["done"]:
                break

        if display is not None:
            try:
                display.store_name(b"")
            except OSError:
                pass
    finally:
        if display is not None:
            display.close()
        for signo, handler in previous.items():
            signal.signal(signo, handler)
    return 0


if __name__ == "__main__":
    sys.exit(main())