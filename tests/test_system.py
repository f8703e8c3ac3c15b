import os
import pwd
import re
import socket
import time

from slstatus import system


def test_datetime_matches_strftime():
    assert system.datetime("%Y") == time.strftime("%Y")


def test_datetime_literal_text():
    assert system.datetime("plain") == "plain"


def test_datetime_empty_result():
    assert system.datetime("") is None


def test_datetime_too_long():
    assert system.datetime("%Y" * 600) is None


def test_hostname():
    assert system.hostname() == socket.gethostname()


def test_kernel_release():
    assert system.kernel_release() == os.uname().release


def test_load_avg_format():
    value = system.load_avg()
    parts = value.split(" ")
    assert len(parts) == 3
    for part in parts:
        assert re.fullmatch(r"\d+\.\d\d", part) is not None
        assert float(part) >= 0.0


def test_uptime_format():
    match = re.fullmatch(r"(\d+)h (\d+)m", system.uptime())
    assert match
    assert int(match.group(2)) < 60


def test_ids():
    assert system.gid() == str(os.getgid())
    assert system.uid() == str(os.geteuid())


def test_username():
    assert system.username() == pwd.getpwuid(os.geteuid()).pw_name


def test_entropy_from_file(tmp_path):
    path = tmp_path / "entropy_avail"
    path.write_text("256\n")
    assert system.entropy(path=str(path)) == "256"


def test_entropy_missing(tmp_path):
    assert system.entropy(path=str(tmp_path / "missing")) is None


def test_temp_millidegrees(tmp_path):
    path = tmp_path / "temp1_input"
    path.write_text("45000\n")
    assert system.temp(str(path)) == "45"


def test_temp_missing(tmp_path):
    assert system.temp(str(tmp_path / "missing")) is None