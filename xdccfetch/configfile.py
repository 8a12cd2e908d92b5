"""Reading, writing and applying the ``key=value`` configuration file."""

from __future__ import annotations

import ipaddress
import os
from pathlib import Path
from typing import Callable, Dict, Optional

from xdccfetch.arguments import _parse_port
from xdccfetch.files import file_exists, open_file, read_text_file
from xdccfetch.settings import (
    Config,
    Flag,
    LogLevel,
    config_directory,
    set_max_transfer_speed,
)

CONFIG_FILE_NAME = "config"

_LINE_TRIM = " \r\t"
_FIELD_TRIM = " \t"

_LOG_LEVELS = {
    "information": LogLevel.INFO,
    "warn": LogLevel.WARN,
    "error": LogLevel.ERR,
    "quiet": LogLevel.QUIET,
}


def _set_download_dir(config: Config, value: str) -> None:
    config.target_dir = value


def _set_log_level(config: Config, value: str) -> None:
    level = _LOG_LEVELS.get(value)
    if level is not None:
        config.log_level = level


def _switch(flag: Flag, set_when_true: bool) -> Callable[[Config, str], None]:
    def apply(config: Config, value: str) -> None:
        if (value == "true") == set_when_true:
            config.set_flag(flag)
        else:
            config.clear_flag(flag)

    return apply


def _set_listen_ip(config: Config, value: str) -> None:
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        raise ValueError(
            f"the listen ip {value} in config file is not valid ipv4 address."
        ) from None
    config.listen_ip = value


def _set_listen_port(config: Config, value: str) -> None:
    config.listen_port = _parse_port(value)


_HANDLERS: Dict[str, Callable[[Config, str], None]] = {
    "downloadDir": _set_download_dir,
    "logLevel": _set_log_level,
    "allowAllCerts": _switch(Flag.ALLOW_ALL_CERTS, True),
    "verifyChecksums": _switch(Flag.VERIFY_CHECKSUM, True),
    "confirmFileOffsets": _switch(Flag.DONT_CONFIRM_OFFSETS, False),
    "maxTransferSpeed": set_max_transfer_speed,
    "listenIp": _set_listen_ip,
    "listenPort": _set_listen_port,
}


def default_config_content(home: Optional[str] = None) -> str:
    """Return the text of a freshly created configuration file."""
    if home is None:
        home = str(Path.home())
    download_dir = f"{home}{os.sep}Downloads"
    lines = [
        "# default directory where to store the downloads",
        f"downloadDir={download_dir}",
        "# default logging level, valid options: information, warn, error, quiet",
        "logLevel=information",
        "# allow all certificates and dont validate them",
        "allowAllCerts=true",
        "# stay connected after downloads finished to automatically verify checksums",
        "verifyChecksums=false",
        "# Do not send file offsets to the bots if set to false. Can be used on bots "
        "where the transfer gets stucked after a short while.",
        "confirmFileOffsets=false",
        "# Limit the maximum transfer speed for the downloads in each xdccget instance "
        "to the specified value per seconds. valid suffixes are KByte, MByte and TByte",
        "#maxTransferSpeed=1MByte",
        "# Sets the listen ip for passive dcc transfers. Should normally your external "
        "ip address.",
        "#listenIp=198.51.100.195",
        "# Sets the listen port for passive dcc transfers. This port needs to be "
        "forwared in your router, such that external TCP acknowledgements are not "
        "blocked.",
        "#listenPort=55554",
    ]
    return "".join(f"{line}\n" for line in lines)


def parse_config_line(config: Config, line: str) -> None:
    """Apply one ``key=value`` line; lines without exactly one ``=`` are ignored.

    Raises ValueError if ``listenIp`` is not a valid IPv4 address.
    """
    parts = line.split("=") if line else []
    if len(parts) != 2:
        return
    key, value = (part.strip(_FIELD_TRIM) for part in parts)
    handler = _HANDLERS.get(key)
    if handler is not None:
        handler(config, value)


def parse_config_string(config: Config, content: str) -> None:
    """Apply every non-empty, non-comment line of ``content``."""
    for raw in content.split("\n"):
        line = raw.strip(_LINE_TRIM)
        if not line or line.startswith("#"):
            continue
        parse_config_line(config, line)


def write_default_config(config_dir: str, home: Optional[str] = None) -> str:
    """Create ``config_dir`` if needed and write the default file into it.

    Returns the path of the written file.
    """
    if not os.path.isdir(config_dir):
        try:
            os.mkdir(config_dir, 0o755)
        except OSError:
            pass  # opening the file below reports the failure
    path = f"{config_dir}{CONFIG_FILE_NAME}"
    with open_file(path, "w") as handle:
        handle.write(default_config_content(home).encode("utf-8"))
    return path


def parse_config_file(config: Config, home: Optional[str] = None) -> Config:
    """Read the configuration file, creating the default one first if missing."""
    config_dir = config_directory(home)
    path = f"{config_dir}{CONFIG_FILE_NAME}"
    if not file_exists(path):
        write_default_config(config_dir, home)
    parse_config_string(config, read_text_file(path))
    return config