"""Checksums used to verify downloaded files."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Optional

from xdccfetch.files import read_chunks

MD5_DIGEST_LENGTH = 16


def _hex_value(char: str) -> int:
    """Value of one hex digit; anything else counts as zero."""
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "a" <= char <= "f":
        return ord(char) - ord("a") + 10
    if "A" <= char <= "F":
        return ord(char) - ord("A") + 10
    return 0


@dataclass(frozen=True)
class HashAlgorithm:
    """A named digest algorithm with a fixed digest size."""

    name: str
    hash_size: int

    def _new(self):
        return hashlib.new(self.name.lower())

    def hash_file(self, path: str) -> bytes:
        """Return the digest of the file at ``path``."""
        digest = self._new()
        for chunk in read_chunks(path):
            digest.update(chunk)
        return digest.digest()

    def hash_string(self, text: str, iterations: int = 1) -> bytes:
        """Return the digest of ``text`` fed ``iterations`` times."""
        digest = self._new()
        data = text.encode("utf-8")
        for _ in range(iterations):
            digest.update(data)
        return digest.digest()

    def from_hex(self, hex_string: str) -> bytes:
        """Decode a hex digest; invalid digits count as zero.

        Raises ValueError if the string is too short for the digest size.
        """
        needed = 2 * self.hash_size
        if len(hex_string) < needed:
            raise ValueError(
                f"hash string needs {needed} hex digits, got {len(hex_string)}"
            )
        pairs = zip(hex_string[0:needed:2], hex_string[1:needed:2])
        return bytes((_hex_value(high) << 4) | _hex_value(low) for high, low in pairs)

    def equals(self, first: bytes, second: bytes) -> bool:
        """Compare the first ``hash_size`` bytes of two digests."""
        return first[: self.hash_size] == second[: self.hash_size]


def create_hash_algorithm(name: str) -> Optional[HashAlgorithm]:
    """Return the algorithm called ``name``, or None if it is not supported."""
    if name == "MD5":
        return HashAlgorithm("MD5", MD5_DIGEST_LENGTH)
    return None