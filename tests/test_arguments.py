import pytest

from xdccfetch.arguments import (
    ArgumentError,
    DccDownload,
    build_parser,
    parse_arguments,
    parse_channels,
    parse_dcc_download,
    parse_dcc_downloads,
)
from xdccfetch.settings import NO_SPEED_LIMIT, Config, Flag, LogLevel, size_of

POSITIONAL = ["irc.sample.net", "#sample-channel", "sample-xdccget-bot xdcc send #42"]


def test_parse_dcc_download_splits_at_first_space():
    assert parse_dcc_download("sample-xdccget-bot xdcc send #42") == (
        "sample-xdccget-bot",
        "xdcc send #42",
    )


def test_parse_dcc_download_without_space():
    nick, cmd = parse_dcc_download("bot")
    assert nick == ""
    assert cmd == "ot"


def test_parse_dcc_download_round_trip():
    nick, cmd = parse_dcc_download("alpha xdcc send #1")
    assert f"{nick} {cmd}" == "alpha xdcc send #1"


def test_parse_channels_trims_entries():
    assert parse_channels("#a, \t#b ,#c") == ["#a", "#b", "#c"]


def test_parse_channels_empty():
    assert parse_channels("") == []


def test_parse_dcc_downloads_multiple():
    downloads = parse_dcc_downloads("bot1 xdcc send #1 , bot2 xdcc send #2")
    assert downloads == [
        DccDownload("bot1", "xdcc send #1"),
        DccDownload("bot2", "xdcc send #2"),
    ]
    assert all(d.md5 is None for d in downloads)


def test_parse_dcc_downloads_empty():
    assert parse_dcc_downloads("") == []


def test_parse_arguments_positional():
    config = parse_arguments(POSITIONAL, Config())
    assert config.args == POSITIONAL
    assert config.port == 6667


def test_parse_arguments_missing_positional():
    with pytest.raises(ArgumentError):
        parse_arguments(POSITIONAL[:2], Config())


def test_parse_arguments_too_many_positional():
    with pytest.raises(ArgumentError):
        parse_arguments(POSITIONAL + ["extra"], Config())


def test_parse_arguments_unknown_option():
    with pytest.raises(ArgumentError):
        parse_arguments(["--no-such-option"] + POSITIONAL, Config())


def test_parse_arguments_port_decimal_and_hex():
    assert parse_arguments(["-p", "6697"] + POSITIONAL).port == 6697
    assert parse_arguments(["--port=0x1A0B"] + POSITIONAL).port == 6667


def test_parse_arguments_port_garbage_is_zero():
    assert parse_arguments(["-p", "abc"] + POSITIONAL).port == 0


def test_parse_arguments_log_level_last_wins():
    assert parse_arguments(["-q", "-v"] + POSITIONAL).log_level == LogLevel.WARN
    assert parse_arguments(["-v", "-q"] + POSITIONAL).log_level == LogLevel.QUIET
    assert parse_arguments(["-q", "-i"] + POSITIONAL).log_level == LogLevel.INFO


def test_parse_arguments_flags():
    config = parse_arguments(
        ["-c", "-4", "--accept-all-nicks", "--dont-confirm-offsets"] + POSITIONAL
    )
    assert config.has_flag(Flag.VERIFY_CHECKSUM)
    assert config.has_flag(Flag.USE_IPV4)
    assert config.has_flag(Flag.ACCEPT_ALL_NICKS)
    assert config.has_flag(Flag.DONT_CONFIRM_OFFSETS)
    assert not config.has_flag(Flag.USE_IPV6)


def test_parse_arguments_strings():
    config = parse_arguments(
        ["-d", "/tmp/dl", "-n", "mynick", "-l", "identify placeholder"] + POSITIONAL
    )
    assert config.target_dir == "/tmp/dl"
    assert config.nick == "mynick"
    assert config.login_command == "identify placeholder"


def test_parse_arguments_throttle():
    config = parse_arguments(["--throttle", " 1MByte\t"] + POSITIONAL)
    assert config.max_transfer_speed == size_of(1, "MByte")


def test_parse_arguments_throttle_invalid_means_no_limit():
    config = parse_arguments(["--throttle", "fast"] + POSITIONAL)
    assert config.max_transfer_speed == NO_SPEED_LIMIT


def test_parse_arguments_delay():
    config = parse_arguments(["--delay", "30"] + POSITIONAL)
    assert config.send_delay.delay_seconds == 30
    assert config.send_delay.send_at >= 30


def test_parse_arguments_listen_ip_and_port():
    config = parse_arguments(
        ["--listen-ip", "85.48.89.195", "--listen-port", "55554"] + POSITIONAL
    )
    assert config.listen_ip == "85.48.89.195"
    assert config.listen_port == 55554


def test_parse_arguments_invalid_listen_ip():
    with pytest.raises(ArgumentError):
        parse_arguments(["--listen-ip", "not.an.ip"] + POSITIONAL)


def test_options_may_follow_positionals():
    config = parse_arguments(POSITIONAL + ["-n", "late"])
    assert config.nick == "late"
    assert config.args == POSITIONAL


def test_build_parser_reads_positionals():
    ns = build_parser().parse_args(POSITIONAL)
    assert (ns.server, ns.channels, ns.commands) == tuple(POSITIONAL)