import struct
from unittest import mock

import pytest

from slstatus.volume import vol_perc


@pytest.fixture
def card(tmp_path):
    path = tmp_path / "mixer"
    path.write_bytes(b"")
    return str(path)


def test_missing_device(tmp_path):
    assert vol_perc(str(tmp_path / "no-mixer")) is None


def test_regular_file_is_not_a_mixer(card):
    assert vol_perc(card) is None


def test_reads_left_channel(card):
    replies = [struct.pack("i", 0b1), struct.pack("i", 0x3250)]
    with mock.patch("fcntl.ioctl", side_effect=replies) as ioctl:
        assert vol_perc(card) == str(0x50)
    assert ioctl.call_count == 2


def test_no_vol_control(card):
    with mock.patch("fcntl.ioctl", return_value=struct.pack("i", 0b10)) as ioctl:
        assert vol_perc(card) is None
    assert ioctl.call_count == 1


def test_volume_read_fails(card):
    replies = [struct.pack("i", 0b1), OSError(25, "Inappropriate ioctl")]
    with mock.patch("fcntl.ioctl", side_effect=replies):
        assert vol_perc(card) is None