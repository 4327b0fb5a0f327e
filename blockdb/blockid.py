"""Identifiers for fixed-size blocks within database files."""

from __future__ import annotations

from dataclasses import dataclass

_HASH_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class BlockId:
    """A block number within a named file."""

    filename: str
    blknum: int

    def __str__(self) -> str:
        return f"[file {self.filename}, block {self.blknum}]"

    def hash_code(self) -> int:
        """Return a stable 32-bit hash of the block's string form."""
        h = 0
        for byte in str(self).encode("utf-8"):
            h = (31 * h + byte) & _HASH_MASK
        return h