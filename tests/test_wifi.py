import struct
from unittest import mock

import pytest

from slstatus import wifi


def attr(kind, payload):
    raw = struct.pack("=HH", 4 + len(payload), kind) + payload
    return raw + b"\0" * ((-len(raw)) % 4)


def genl(cmd):
    return struct.pack("=BBH", cmd, 1, 0)


def nlmsg(msg_type, body):
    return struct.pack("=IHHII", 16 + len(body), msg_type, 0, 0, 0) + body


class FakeSocket:
    def __init__(self, responses):
        self.responses = list(responses)
        self.sent = []

    def send(self, data, flags=0):
        self.sent.append(bytes(data))
        return len(data)

    def recv(self, size, flags=0):
        return self.responses.pop(0)


FAMILY_ID = 0x1C


def family_response():
    body = genl(1) + attr(2, b"nl80211\0") + attr(1, struct.pack("=H", FAMILY_ID))
    return nlmsg(0x10, body)


def station_message(rssi):
    inner = attr(13, struct.pack("b", rssi))
    return nlmsg(FAMILY_ID, genl(17) + attr(21, inner))


def done_message():
    return nlmsg(3, b"\0\0\0\0")


@pytest.mark.parametrize("rssi", [-50, -30, 0])
def test_rssi_strong_signal_is_full(rssi):
    assert wifi.rssi_to_perc(rssi) == 100


@pytest.mark.parametrize("rssi", [-100, -110])
def test_rssi_weak_signal_is_zero(rssi):
    assert wifi.rssi_to_perc(rssi) == 0


def test_rssi_is_monotonic_and_bounded():
    values = [wifi.rssi_to_perc(r) for r in range(-120, 0)]
    assert values == sorted(values)
    assert all(0 <= v <= 100 for v in values)


def test_find_attr_returns_payloads():
    data = attr(1, b"abc") + attr(2, b"\x05\x00")
    assert wifi.find_attr(1, data) == b"abc"
    assert wifi.find_attr(2, data) == b"\x05\x00"


def test_find_attr_missing():
    data = attr(1, b"abc")
    assert wifi.find_attr(9, data) is None
    assert wifi.find_attr(1, b"") is None


def test_find_attr_stops_on_malformed_length():
    assert wifi.find_attr(1, b"\x00\x00\x01\x00") is None


def test_family_is_resolved_and_cached():
    fake = FakeSocket([family_response()])
    client = wifi._Nl80211(lambda: fake)
    assert client.family() == FAMILY_ID
    assert client.family() == FAMILY_ID
    assert len(fake.sent) == 1
    request = fake.sent[0]
    length, msg_type = struct.unpack_from("=IH", request)
    assert length == len(request)
    assert msg_type == 0x10
    assert b"nl80211\x00" in request


def test_family_short_response_fails():
    fake = FakeSocket([b"\0" * 8])
    client = wifi._Nl80211(lambda: fake)
    assert client.family() == 0


def test_family_socket_failure():
    def fail():
        raise OSError("no netlink")

    client = wifi._Nl80211(fail)
    assert client.family() == 0


def test_essid():
    reply = nlmsg(FAMILY_ID, genl(7) + attr(3, struct.pack("=I", 3))
                  + attr(52, b"home-network"))
    fake = FakeSocket([family_response(), reply])
    client = wifi._Nl80211(lambda: fake)
    with mock.patch("socket.if_nametoindex", return_value=3):
        assert client.essid("wlan0") == "home-network"
    length, msg_type = struct.unpack_from("=IH", fake.sent[1])
    assert length == len(fake.sent[1])
    assert msg_type == FAMILY_ID


def test_essid_without_family():
    fake = FakeSocket([b"\0" * 8])
    client = wifi._Nl80211(lambda: fake)
    with mock.patch("socket.if_nametoindex", return_value=3):
        assert client.essid("wlan0") is None


def test_essid_unknown_interface():
    fake = FakeSocket([family_response()])
    client = wifi._Nl80211(lambda: fake)
    with mock.patch("socket.if_nametoindex", side_effect=OSError("no device")):
        assert client.essid("nosuch0") is None


def test_signal_strong():
    fake = FakeSocket([family_response(), station_message(-40) + done_message()])
    client = wifi._Nl80211(lambda: fake)
    with mock.patch("socket.if_nametoindex", return_value=3):
        assert client.signal("wlan0") == "100"
    _, _, flags = struct.unpack_from("=IHH", fake.sent[1])
    assert flags == wifi.NLM_F_REQUEST | wifi.NLM_F_DUMP


def test_signal_weak_across_reads():
    fake = FakeSocket([family_response(), station_message(-100), done_message()])
    client = wifi._Nl80211(lambda: fake)
    with mock.patch("socket.if_nametoindex", return_value=3):
        assert client.signal("wlan0") == "0"


def test_signal_missing_attribute():
    empty = nlmsg(FAMILY_ID, genl(17) + attr(3, struct.pack("=I", 3)))
    fake = FakeSocket([family_response(), empty + done_message()])
    client = wifi._Nl80211(lambda: fake)
    with mock.patch("socket.if_nametoindex", return_value=3):
        assert client.signal("wlan0") is None


def test_public_functions_unknown_interface():
    with mock.patch("socket.if_nametoindex", side_effect=OSError("no device")):
        assert wifi.wifi_essid("nosuch0") is None
        assert wifi.wifi_perc("nosuch0") is None