"""Conversion between mIRC formatting codes and ``[B]``/``[COLOR=...]`` tags."""

from __future__ import annotations

from typing import List, Optional

_BOLD = 1 << 1
_UNDERLINE = 1 << 2
_REVERSE = 1 << 3
_COLOR = 1 << 4

MAX_COLORS = 15

COLOR_NAMES = (
    "WHITE",
    "BLACK",
    "DARKBLUE",
    "DARKGREEN",
    "RED",
    "BROWN",
    "PURPLE",
    "OLIVE",
    "YELLOW",
    "GREEN",
    "TEAL",
    "CYAN",
    "BLUE",
    "MAGENTA",
    "DARKGRAY",
    "LIGHTGRAY",
)

_TOGGLES = {
    "\x02": (_BOLD, "[B]", "[/B]"),
    "\x1f": (_UNDERLINE, "[U]", "[/U]"),
    "\x16": (_REVERSE, "[I]", "[/I]"),
}

_CLOSE_ORDER = (
    (_BOLD, "[/B]"),
    (_UNDERLINE, "[/U]"),
    (_REVERSE, "[/I]"),
    (_COLOR, "[/COLOR]"),
)

_TAG_CODES = {
    "/COLOR": "\x0f",
    "B": "\x02",
    "/B": "\x02",
    "U": "\x1f",
    "/U": "\x1f",
    "I": "\x16",
    "/I": "\x16",
}


def _is_digit(text: str, pos: int) -> bool:
    return pos < len(text) and "0" <= text[pos] <= "9"


def _read_number(text: str, pos: int):
    """Read one or two digits at ``pos``; return the value and the next position."""
    value = ord(text[pos]) - ord("0")
    pos += 1
    if _is_digit(text, pos):
        value = value * 10 + ord(text[pos]) - ord("0")
        pos += 1
    return value, pos


class _TagWriter:
    def __init__(self) -> None:
        self.mask = 0
        self.parts: List[str] = []

    def toggle(self, bit: int, start: str, end: str) -> None:
        if self.mask & bit:
            self.mask &= ~bit
            self.parts.append(end)
        else:
            self.mask |= bit
            self.parts.append(start)

    def color(self, color: int, background: int) -> None:
        if background != 0:
            start = f"[COLOR={COLOR_NAMES[color]}/{COLOR_NAMES[background]}]"
        else:
            start = f"[COLOR={COLOR_NAMES[color]}]"
        if self.mask & _COLOR:
            self.parts.append("[/COLOR]")
        self.mask |= _COLOR
        self.parts.append(start)

    def close_all(self) -> None:
        for bit, end in _CLOSE_ORDER:
            if self.mask & bit:
                self.mask &= ~bit
                self.parts.append(end)


def _irc_to_code(source: str, strip: bool) -> str:
    writer = _TagWriter()
    background = 0
    pos = 0
    while pos < len(source):
        char = source[pos]
        pos += 1
        if char in _TOGGLES:
            if not strip:
                writer.toggle(*_TOGGLES[char])
        elif char == "\x0f":
            if not strip:
                writer.close_all()
        elif char == "\x03":
            if not _is_digit(source, pos):
                continue
            color, pos = _read_number(source, pos)
            new_background = -1
            if pos < len(source) and source[pos] == "," and _is_digit(source, pos + 1):
                new_background, pos = _read_number(source, pos + 1)
            if color <= MAX_COLORS and new_background <= MAX_COLORS and not strip:
                if new_background != -1:
                    background = new_background
                writer.color(color, background)
        else:
            writer.parts.append(char)
    writer.close_all()
    return "".join(writer.parts)


def strip_from_mirc(message: str) -> str:
    """Remove all mIRC bold, underline, reverse, reset and colour codes."""
    return _irc_to_code(message, strip=True)


def convert_from_mirc(message: str) -> str:
    """Turn mIRC codes into ``[B]``, ``[U]``, ``[I]`` and ``[COLOR=...]`` tags."""
    return _irc_to_code(message, strip=False)


def _color_index(name: str) -> int:
    try:
        return COLOR_NAMES.index(name)
    except ValueError:
        return -1


def _tag_replacement(tag: str) -> Optional[str]:
    if tag in _TAG_CODES:
        return _TAG_CODES[tag]
    if not tag.startswith("COLOR="):
        return None
    spec = tag[len("COLOR="):]
    if "/" in spec:
        fore, back = spec.split("/", 1)
        background = _color_index(back)
    else:
        fore, background = spec, -2
    color = _color_index(fore)
    if color == -1:
        return None
    if background == -2:
        return f"\x03{color:02d}"
    if background >= 0:
        return f"\x03{color:02d},{background:02d}"
    return None


def convert_to_mirc(source: str) -> str:
    """Turn ``[B]``, ``[U]``, ``[I]`` and ``[COLOR=...]`` tags into mIRC codes.

    Unknown or malformed tags are copied unchanged.
    """
    parts: List[str] = []
    cur = 0
    while True:
        open_pos = source.find("[", cur)
        if open_pos < 0:
            break
        close_pos = -1
        replacement = None
        if open_pos + 1 < len(source):
            close_pos = source.find("]", open_pos)
            if close_pos >= 0 and 1 < close_pos - open_pos < 31:
                replacement = _tag_replacement(source[open_pos + 1:close_pos])
        if replacement is not None:
            parts.append(source[cur:open_pos])
            parts.append(replacement)
            cur = close_pos + 1
        elif close_pos < 0:
            parts.append(source[cur:])
            cur = len(source)
            break
        else:
            parts.append(source[cur:close_pos + 1])
            cur = close_pos + 1
    parts.append(source[cur:])
    return "".join(parts)