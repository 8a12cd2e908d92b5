import io
import random

import pytest

from xdccfetch.output import (
    NICK_CHARS,
    NUM_AVERAGE_SPEED_VALUES,
    DownloadProgress,
    Logger,
    SpeedAverage,
    format_eta,
    format_size,
    progress_bar,
    random_nick,
)
from xdccfetch.settings import Config, LogLevel


class _ZeroRandom(random.Random):
    """A random source that always yields its lowest value."""

    def random(self):
        return 0.0

    def getrandbits(self, k):
        return 0


def test_format_size_small_values_stay_bytes():
    assert format_size(0) == "0.000 Byte"
    assert format_size(1024) == "1024.000 Byte"


@pytest.mark.parametrize(
    "size,unit",
    [(2048, "KByte"), (3 * 1024**2, "MByte"), (5 * 1024**3, "GByte"), (7 * 1024**5, "PByte")],
)
def test_format_size_units(size, unit):
    assert format_size(size).endswith(" " + unit)


def test_format_size_beyond_largest_unit_prints_raw_bytes():
    size = 2 * 1024**6
    assert format_size(size) == f"{size} Byte"


def test_format_eta_short():
    assert format_eta(30) == "30s"
    assert format_eta(60) == "60s"


def test_format_eta_minutes():
    assert format_eta(120) == "2m0s"


def test_format_eta_days():
    assert format_eta(90000) == "1d1h0m0s"


@pytest.mark.parametrize("bars,fraction", [(10, 0.5), (20, 0.0), (7, 1.0), (13, 0.33)])
def test_progress_bar_shape(bars, fraction):
    bar = progress_bar(bars, fraction)
    assert len(bar) == bars + 2
    assert bar[0] == "[" and bar[-1] == "]"
    assert bar.count("#") == int(bars * fraction)
    assert "-#" not in bar


def test_progress_bar_negative_width():
    assert progress_bar(-5, 0.5) == "[]"


def test_random_nick_length_and_charset():
    nick = random_nick(12, random.Random(1))
    assert len(nick) == 12
    assert set(nick) <= set(NICK_CHARS)


def test_random_nick_takes_characters_from_rng():
    assert random_nick(5, _ZeroRandom()) == NICK_CHARS[0] * 5


def test_speed_average_before_filled_returns_current():
    avg = SpeedAverage()
    avg.record(100)
    assert avg.filled is False
    assert avg.average(55) == 55


def test_speed_average_constant_speed():
    avg = SpeedAverage()
    for _ in range(NUM_AVERAGE_SPEED_VALUES):
        avg.record(400)
    assert avg.filled is True
    assert avg.index == 0
    assert avg.average(1) == 400


def test_render_pads_to_terminal_width():
    progress = DownloadProgress(complete_file_size=1000)
    progress.size_received = 500
    line = progress.render(columns=120)
    assert len(line) == 119
    assert "50.00%" in line
    assert line.startswith("[")


def test_render_without_speed_history_shows_dashes():
    progress = DownloadProgress(complete_file_size=1000)
    line = progress.render(columns=120)
    assert "---" in line
    assert progress.average_speed == 0


def test_render_updates_samples():
    progress = DownloadProgress(complete_file_size=10_000)
    progress.size_received = 300
    progress.render(columns=100)
    progress.size_received = 700
    progress.render(columns=100)
    assert progress.size_last == 300
    assert progress.size_now == 700
    assert progress.average_speed == 400


def _logger(level):
    out, err = io.StringIO(), io.StringIO()
    return Logger(Config(log_level=level), out=out, err=err), out, err


def test_logger_info_goes_to_stdout():
    logger, out, err = _logger(LogLevel.INFO)
    logger.info("hello")
    assert out.getvalue() == "[Info] - hello\n"
    assert err.getvalue() == ""


def test_logger_errors_and_warnings_go_to_stderr():
    logger, out, err = _logger(LogLevel.INFO)
    logger.warn("careful")
    logger.error("broken")
    assert err.getvalue() == "[Warning] - careful\n[Error] - broken\n"
    assert out.getvalue() == ""


def test_logger_quiet_suppresses_everything():
    logger, out, err = _logger(LogLevel.QUIET)
    logger.error("broken")
    logger.info("hello")
    assert out.getvalue() == "" and err.getvalue() == ""


def test_logger_error_level_hides_warnings():
    logger, out, err = _logger(LogLevel.ERR)
    logger.warn("careful")
    logger.info("hello")
    logger.error("broken")
    assert err.getvalue() == "[Error] - broken\n"
    assert out.getvalue() == ""


def test_logger_colored_output_wraps_line():
    out = io.StringIO()
    logger = Logger(Config(), out=out, err=io.StringIO(), color=True)
    logger.info("hi")
    assert out.getvalue() == "\x1b[32m[Info] - hi\x1b[0m\n"


def test_logger_unknown_level_prints_plain():
    logger, out, _ = _logger(LogLevel.INFO)
    logger.log(99, "raw")
    assert out.getvalue() == "raw\n"