"""Runtime configuration, flags and value parsers shared by the whole program."""

from __future__ import annotations

import enum
import os
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

NO_SPEED_LIMIT = 0
DEFAULT_PORT = 6667
SIZE_UNITS = ("Byte", "KByte", "MByte", "GByte", "TByte", "PByte")
CONFIG_DIR_NAME = ".xdccget"

# Mirrors "%d%100s": an optional signed integer, then a word of at most 100 chars.
_SPEED_PATTERN = re.compile(r"\s*([+-]?\d+)\s*(\S{1,100})")
_DELAY_PATTERN = re.compile(r"\s*\+?(\d+)")


class LogLevel(enum.IntEnum):
    """Verbosity levels; a message is shown when its level is <= the configured one."""

    ERR = 0
    QUIET = 1
    WARN = 2
    INFO = 3


class Flag(enum.IntEnum):
    """Bit numbers of the boolean options kept in ``Config.flags``."""

    OUTPUT = 1
    ALLOW_ALL_CERTS = 2
    USE_IPV4 = 3
    USE_IPV6 = 4
    VERIFY_CHECKSUM = 5
    SENDED = 6
    ACCEPT_ALL_NICKS = 7
    DONT_CONFIRM_OFFSETS = 8


@dataclass
class SendDelay:
    """Delay before the xdcc send command goes out."""

    delay_seconds: int
    send_at: int


@dataclass
class Config:
    """Everything the command line and the config file can set."""

    log_level: LogLevel = LogLevel.INFO
    downloads: list = field(default_factory=list)
    max_transfer_speed: int = NO_SPEED_LIMIT
    send_delay: Optional[SendDelay] = None
    flags: int = 0
    irc_server: Optional[str] = None
    channels: list = field(default_factory=list)
    target_dir: Optional[str] = None
    nick: Optional[str] = None
    login_command: Optional[str] = None
    listen_ip: Optional[str] = None
    listen_port: int = 0
    args: list = field(default_factory=list)
    port: int = DEFAULT_PORT

    def set_flag(self, flag: Flag) -> None:
        self.flags |= 1 << int(flag)

    def clear_flag(self, flag: Flag) -> None:
        self.flags &= ~(1 << int(flag))

    def has_flag(self, flag: Flag) -> bool:
        return bool((self.flags >> int(flag)) & 1)


def size_of(value: int, unit: str) -> int:
    """Return ``value`` expressed in ``unit`` as a number of bytes.

    Raises ValueError if the unit is not one of SIZE_UNITS.
    """
    try:
        exponent = SIZE_UNITS.index(unit)
    except ValueError:
        raise ValueError(f"unknown size unit {unit!r}") from None
    return value * 1024**exponent


def parse_transfer_speed(value: str) -> int:
    """Parse a speed such as ``1MByte``; anything invalid means no limit."""
    match = _SPEED_PATTERN.match(value)
    if match is None:
        return NO_SPEED_LIMIT
    amount, unit = int(match.group(1)), match.group(2)
    try:
        speed = size_of(amount, unit)
    except ValueError:
        return NO_SPEED_LIMIT
    return speed if speed > 0 else NO_SPEED_LIMIT


def set_max_transfer_speed(config: Config, value: str) -> None:
    config.max_transfer_speed = parse_transfer_speed(value)


def set_delay(config: Config, value: str, now: Optional[float] = None) -> None:
    """Schedule the send command ``value`` seconds after ``now``.

    A value that does not start with a number counts as no delay.
    """
    match = _DELAY_PATTERN.match(value)
    seconds = int(match.group(1)) if match else 0
    if now is None:
        now = time.time()
    config.send_delay = SendDelay(delay_seconds=seconds, send_at=int(now) + seconds)


def config_directory(home: Optional[str] = None) -> str:
    """Return the configuration directory path, ending in a path separator."""
    if home is None:
        home = str(Path.home())
    return f"{home}{os.sep}{CONFIG_DIR_NAME}{os.sep}"