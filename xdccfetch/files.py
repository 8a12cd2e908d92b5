"""Small file helpers that raise FileError instead of failing silently."""

from __future__ import annotations

import io
import os
from typing import BinaryIO, Iterator

DEFAULT_CHUNK_SIZE = io.DEFAULT_BUFFER_SIZE

_BINARY = getattr(os, "O_BINARY", 0)


class FileError(Exception):
    """Raised when a file cannot be opened, read, written or examined."""


def file_exists(path: str) -> bool:
    return os.path.exists(path)


def dir_exists(path: str) -> bool:
    return os.path.isdir(path)


def file_size(path: str) -> int:
    try:
        return os.stat(path).st_size
    except OSError as exc:
        raise FileError(f"Cant stat the file {path}.") from exc


def open_file(path: str, mode: str) -> BinaryIO:
    """Open ``path`` in binary mode.

    ``"w"`` creates the file (owner read/write) without truncating it,
    ``"a"`` appends to an existing file and ``"r"`` reads.
    """
    try:
        if mode == "w":
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | _BINARY, 0o600)
            return os.fdopen(fd, "wb")
        if mode == "a":
            fd = os.open(path, os.O_WRONLY | os.O_APPEND | _BINARY)
            return os.fdopen(fd, "ab")
        if mode == "r":
            return open(path, "rb")
    except OSError as exc:
        raise FileError(f"Cant open the file {path}.") from exc
    raise FileError(f"Cant open the file {path}: unknown mode {mode!r}.")


def read_chunks(path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield the content of ``path`` in chunks of at most ``chunk_size`` bytes."""
    with open_file(path, "r") as handle:
        while True:
            try:
                chunk = handle.read(chunk_size)
            except OSError as exc:
                raise FileError(f"Cant read the file {path}.") from exc
            if not chunk:
                return
            yield chunk
            if len(chunk) < chunk_size:
                return


def read_text_file(path: str) -> str:
    """Return the text of ``path``; each chunk ends at its first NUL byte."""
    data = b"".join(chunk.split(b"\0", 1)[0] for chunk in read_chunks(path))
    return data.decode("utf-8", errors="replace")