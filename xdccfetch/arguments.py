"""Command line parsing and splitting of channel and bot-command lists."""

from __future__ import annotations

import argparse
import ipaddress
import re
import sys
from dataclasses import dataclass
from typing import List, NoReturn, Optional, Sequence, Tuple

from xdccfetch.settings import (
    Config,
    Flag,
    LogLevel,
    set_delay,
    set_max_transfer_speed,
)

PROGRAM_VERSION = "xdccget 1.1"
DESCRIPTION = "xdccget -- download from cmd with xdcc"
USAGE = "%(prog)s [options] <server> <channel(s)> <bot cmds>"

_TRIM_CHARS = " \t"
_ULONG_MAX = 2**64 - 1
_ULONG_PATTERN = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)?")


class ArgumentError(Exception):
    """Raised when the command line cannot be parsed."""


@dataclass
class DccDownload:
    """One requested download: the bot to ask and the command to send it."""

    bot_nick: str
    xdcc_cmd: str
    md5: Optional[str] = None


def _parse_port(text: str) -> int:
    """Read an unsigned number in C notation (decimal, 0x hex, 0 octal) as a 16-bit port.

    Text that does not start with a number yields 0.
    """
    match = _ULONG_PATTERN.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    if digits[:2].lower() == "0x":
        value = int(digits, 16)
    elif digits.startswith("0") and len(digits) > 1:
        value = int(digits, 8)
    else:
        value = int(digits, 10)
    value = min(value, _ULONG_MAX)
    if sign == "-":
        value = (-value) % (_ULONG_MAX + 1)
    return value & 0xFFFF


def _split_trimmed(text: str) -> List[str]:
    if not text:
        return []
    return [part.strip(_TRIM_CHARS) for part in text.split(",")]


def parse_dcc_download(text: str) -> Tuple[str, str]:
    """Split ``"<bot> <xdcc command>"`` at its first space into nick and command.

    Without a space (or with one at the very start) the nick is empty and the
    command is everything after the first character.
    """
    space = text.find(" ")
    if space < 0:
        space = 0
    return text[:space], text[space + 1 :]


def parse_channels(text: str) -> List[str]:
    """Split a comma separated channel list, trimming blanks and tabs."""
    return _split_trimmed(text)


def parse_dcc_downloads(text: str) -> List[DccDownload]:
    """Split a comma separated list of ``"<bot> <xdcc command>"`` entries."""
    return [
        DccDownload(*parse_dcc_download(entry)) for entry in _split_trimmed(text)
    ]


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    """Return the parser for the options and the three positional arguments."""
    parser = _Parser(prog="xdccget", usage=USAGE, description=DESCRIPTION)
    parser.add_argument("--version", action="version", version=PROGRAM_VERSION)
    parser.add_argument(
        "-v", "--verbose", dest="log_level", action="store_const",
        const=LogLevel.WARN, help="Produce verbose output",
    )
    parser.add_argument(
        "-q", "--quiet", dest="log_level", action="store_const",
        const=LogLevel.QUIET, help="Don't produce any output",
    )
    parser.add_argument(
        "-i", "--information", dest="log_level", action="store_const",
        const=LogLevel.INFO, help="Produce information output.",
    )
    parser.add_argument(
        "-c", "--checksum-verify", action="store_true",
        help="Stay connected after download completed to verify checksums.",
    )
    parser.add_argument(
        "-4", "--ipv4", action="store_true",
        help="Use ipv4 to connect to irc server.",
    )
    parser.add_argument(
        "-6", "--ipv6", action="store_true",
        help="Use ipv6 to connect to irc server.",
    )
    parser.add_argument(
        "-p", "--port", metavar="<port number>",
        help="Use the following port to connect to server. default is 6667.",
    )
    parser.add_argument(
        "-d", "--directory", metavar="<download-directory>",
        help="Directory, where to place the files.",
    )
    parser.add_argument(
        "-n", "--nick", metavar="<nickname>",
        help="Use this specific nickname while connecting to the irc-server.",
    )
    parser.add_argument(
        "-l", "--login", metavar="<login-command>",
        help="Use this login-command to authorize your nick to the irc-server after connecting.",
    )
    parser.add_argument(
        "--accept-all-nicks", action="store_true",
        help="Accept DCC send requests from ALL bots and do not verify any "
        "nicknames of incoming dcc requests.",
    )
    parser.add_argument(
        "--dont-confirm-offsets", action="store_true",
        help="Do not send file offsets to the bots. Can be used on bots where "
        "the transfer gets stucked after a short while.",
    )
    parser.add_argument(
        "--throttle", metavar="<speed>",
        help="Limit the maximum transfer speed for the downloads to the specified "
        "value per second. Valid suffixes are KByte, MByte and TByte.",
    )
    parser.add_argument(
        "--delay", metavar="<time in seconds>",
        help="Delay the sending of the xdcc send command to specified seconds.",
    )
    parser.add_argument(
        "--listen-ip", metavar="<ipv4 address>",
        help="When using passive dcc use this listen ip address "
        "(normally your external ip address).",
    )
    parser.add_argument(
        "--listen-port", metavar="<port number>",
        help="When using passive dcc use this listen port (needs to enabled in your router).",
    )
    parser.add_argument("server", metavar="<server>")
    parser.add_argument("channels", metavar="<channel(s)>")
    parser.add_argument("commands", metavar="<bot cmds>")
    return parser


def _validate_ipv4(text: str) -> str:
    try:
        ipaddress.IPv4Address(text)
    except ValueError:
        raise ArgumentError(
            f"the listen ip {text} is not valid ipv4 address."
        ) from None
    return text.strip(_TRIM_CHARS)


def parse_arguments(
    argv: Optional[Sequence[str]] = None, config: Optional[Config] = None
) -> Config:
    """Apply the command line to ``config`` and return it.

    Raises ArgumentError on unknown options, a bad listen ip, or when there
    are not exactly three positional arguments.
    """
    if argv is None:
        argv = sys.argv[1:]
    if config is None:
        config = Config()

    ns = build_parser().parse_args(list(argv))

    if ns.log_level is not None:
        config.log_level = ns.log_level
    if ns.checksum_verify:
        config.set_flag(Flag.VERIFY_CHECKSUM)
    if ns.ipv4:
        config.set_flag(Flag.USE_IPV4)
    if ns.ipv6:
        config.set_flag(Flag.USE_IPV6)
    if ns.accept_all_nicks:
        config.set_flag(Flag.ACCEPT_ALL_NICKS)
    if ns.dont_confirm_offsets:
        config.set_flag(Flag.DONT_CONFIRM_OFFSETS)
    if ns.directory is not None:
        config.target_dir = ns.directory
    if ns.nick is not None:
        config.nick = ns.nick
    if ns.login is not None:
        config.login_command = ns.login
    if ns.port is not None:
        config.port = _parse_port(ns.port)
    if ns.throttle is not None:
        set_max_transfer_speed(config, ns.throttle.strip(_TRIM_CHARS))
    if ns.delay is not None:
        set_delay(config, ns.delay.strip(_TRIM_CHARS))
    if ns.listen_ip is not None:
        config.listen_ip = _validate_ipv4(ns.listen_ip)
    if ns.listen_port is not None:
        config.listen_port = _parse_port(ns.listen_port)

    config.args = [ns.server, ns.channels, ns.commands]
    return config