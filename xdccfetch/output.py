"""Console output: sizes, ETAs, the progress line and levelled logging."""

from __future__ import annotations

import random
import shutil
import sys
from dataclasses import dataclass, field
from typing import Optional, TextIO

from xdccfetch.settings import SIZE_UNITS, Config, LogLevel

NUM_AVERAGE_SPEED_VALUES = 8
NICK_CHARS = "abcdefghiklmnopqrstuvwxyzABCDEFGHIJHKLMOPQRSTUVWXYZ"

# Width taken by everything on the progress line except the bar itself:
# percentage (8), two sizes (14 each), "/" (1), "|" (1), speed (14), "/s|" (3), ETA (13).
_FIXED_LINE_WIDTH = 8 + 14 + 1 + 14 + 1 + 14 + 3 + 13

COLOR_RESET = "\x1b[0m"
COLOR_RED = "\x1b[31m"
COLOR_GREEN = "\x1b[32m"
COLOR_YELLOW = "\x1b[33m"


def format_size(size: int) -> str:
    """Render a byte count with three decimals and the largest fitting unit."""
    scaled = float(size)
    unit_index = 0
    while scaled > 1024:
        scaled /= 1024
        unit_index += 1
    if unit_index >= len(SIZE_UNITS):
        return f"{size} Byte"
    return f"{scaled:0.3f} {SIZE_UNITS[unit_index]}"


def format_eta(seconds: float) -> str:
    """Render a remaining time as e.g. ``42s`` or ``1d3h12m5s``."""
    if seconds <= 60:
        return f"{seconds:.0f}s"
    mins = seconds / 60
    hours = mins / 60
    remain_mins = mins - int(hours) * 60
    days = hours / 24
    remain_hours = hours - int(days) * 24
    remain_seconds = seconds - int(mins) * 60

    parts = []
    if days >= 1:
        parts.append(f"{days:.0f}d")
    if remain_hours >= 1:
        parts.append(f"{remain_hours:.0f}h")
    parts.append(f"{remain_mins:.0f}m{remain_seconds:.0f}s")
    return "".join(parts)


def progress_bar(num_bars: int, fraction: float) -> str:
    """Return ``[###---]`` with ``num_bars`` cells, ``fraction`` of them filled."""
    num_bars = max(num_bars, 0)
    filled = max(0, min(num_bars, int(num_bars * fraction)))
    return "[" + "#" * filled + "-" * (num_bars - filled) + "]"


def random_nick(length: int, rng: Optional[random.Random] = None) -> str:
    """Return a random nickname of ``length`` letters."""
    chooser = rng if rng is not None else random
    return "".join(chooser.choice(NICK_CHARS) for _ in range(length))


def terminal_columns() -> int:
    """Return the width of the controlling terminal."""
    return shutil.get_terminal_size().columns


@dataclass
class SpeedAverage:
    """Ring buffer of the last transfer speeds, smoothed into one value."""

    values: list = field(default_factory=lambda: [0] * NUM_AVERAGE_SPEED_VALUES)
    index: int = 0
    filled: bool = False

    def record(self, speed: int) -> None:
        self.values[self.index] = speed
        self.index = (self.index + 1) % NUM_AVERAGE_SPEED_VALUES
        if not self.filled and self.index == 0:
            self.filled = True

    def average(self, current: int) -> int:
        """Return the smoothed speed, or ``current`` until the buffer is full."""
        if not self.filled:
            return current
        total = 0
        for position, value in enumerate(self.values):
            total += value
            if position > 0:
                total //= 2
        return total


@dataclass
class DownloadProgress:
    """State of one running download, rendered once per second."""

    complete_file_size: int
    complete_path: Optional[str] = None
    size_received: int = 0
    size_now: int = 0
    size_last: int = 0
    average_speed: int = 0
    speed: SpeedAverage = field(default_factory=SpeedAverage)

    def render(self, columns: Optional[int] = None) -> str:
        """Advance the speed sample and return the progress line, padded to the terminal."""
        if columns is None:
            columns = terminal_columns()
        bar_len = columns - _FIXED_LINE_WIDTH

        self.size_last = self.size_now
        self.size_now = self.size_received
        current_speed = self.size_now - self.size_last

        average = 0
        if self.size_received > 0:
            self.speed.record(current_speed)
            average = self.speed.average(current_speed)
            self.average_speed = average

        fraction = (
            0.0
            if self.complete_file_size == 0
            else self.size_received / self.complete_file_size
        )

        tail = (
            f" {fraction * 100:.2f}% "
            f"{format_size(self.size_received)}/{format_size(self.complete_file_size)}"
            f"|{format_size(average)}/s|"
        )
        remaining = self.complete_file_size - self.size_received
        if remaining > 0 and average > 0:
            tail += format_eta(remaining / average)
        else:
            tail += "---"

        printed = bar_len + 2 + len(tail)
        padding = " " * max(0, columns - 1 - printed)
        return progress_bar(bar_len, fraction) + tail + padding


class Logger:
    """Writes ``[Info]``, ``[Warning]`` and ``[Error]`` lines according to the configured level."""

    def __init__(
        self,
        config: Optional[Config] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        color: bool = False,
    ) -> None:
        self.config = config if config is not None else Config()
        self._out = out
        self._err = err
        self.color = color

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def _line(self, stream: TextIO, color: str, prefix: str, message: str) -> None:
        if self.color:
            stream.write(f"{color}[{prefix}] - {message}{COLOR_RESET}\n")
        else:
            stream.write(f"[{prefix}] - {message}\n")

    def log(self, level: int, message: str) -> None:
        configured = self.config.log_level
        if configured == LogLevel.QUIET:
            return
        if level == LogLevel.INFO:
            if configured >= LogLevel.INFO:
                self._line(self.out, COLOR_GREEN, "Info", message)
        elif level == LogLevel.WARN:
            if configured >= LogLevel.WARN:
                self._line(self.err, COLOR_YELLOW, "Warning", message)
        elif level == LogLevel.ERR:
            if configured >= LogLevel.ERR:
                self._line(self.err, COLOR_RED, "Error", message)
        else:
            self.out.write(f"{message}\n")

    def info(self, message: str) -> None:
        self.log(LogLevel.INFO, message)

    def warn(self, message: str) -> None:
        self.log(LogLevel.WARN, message)

    def error(self, message: str) -> None:
        self.log(LogLevel.ERR, message)