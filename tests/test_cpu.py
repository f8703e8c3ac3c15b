from slstatus.cpu import CpuUsage, cpu_freq
from slstatus.util import fmt_human


def write_stat(path, values):
    path.write_text("cpu  " + " ".join(str(v) for v in values) + " 0 0 0\ncpu0 1 2 3\n")


def test_first_sample_is_unknown(tmp_path):
    stat = tmp_path / "stat"
    write_stat(stat, [100, 0, 100, 800, 0, 0, 0])
    assert CpuUsage().percent(str(stat)) is None


def test_usage_between_samples(tmp_path):
    stat = tmp_path / "stat"
    usage = CpuUsage()
    write_stat(stat, [100, 0, 100, 800, 0, 0, 0])
    usage.percent(str(stat))
    write_stat(stat, [125, 0, 100, 875, 0, 0, 0])
    assert usage.percent(str(stat)) == "25"


def test_idle_and_iowait_are_not_busy(tmp_path):
    stat = tmp_path / "stat"
    usage = CpuUsage()
    write_stat(stat, [100, 0, 100, 800, 50, 0, 0])
    usage.percent(str(stat))
    write_stat(stat, [100, 0, 100, 900, 150, 0, 0])
    assert usage.percent(str(stat)) == "0"


def test_fully_busy(tmp_path):
    stat = tmp_path / "stat"
    usage = CpuUsage()
    write_stat(stat, [100, 10, 100, 800, 0, 5, 5])
    usage.percent(str(stat))
    write_stat(stat, [200, 20, 200, 800, 0, 10, 10])
    assert usage.percent(str(stat)) == "100"


def test_unchanged_sample(tmp_path):
    stat = tmp_path / "stat"
    usage = CpuUsage()
    write_stat(stat, [100, 0, 100, 800, 0, 0, 0])
    usage.percent(str(stat))
    assert usage.percent(str(stat)) is None


def test_missing_stat(tmp_path):
    assert CpuUsage().percent(str(tmp_path / "missing")) is None


def test_malformed_stat(tmp_path):
    stat = tmp_path / "stat"
    stat.write_text("cpu 1 2\n")
    assert CpuUsage().percent(str(stat)) is None


def test_cpu_freq_in_khz(tmp_path):
    freq = tmp_path / "scaling_cur_freq"
    freq.write_text("2400000\n")
    assert cpu_freq(path=str(freq)) == fmt_human(2_400_000_000, 1000)


def test_cpu_freq_missing(tmp_path):
    assert cpu_freq(path=str(tmp_path / "missing")) is None