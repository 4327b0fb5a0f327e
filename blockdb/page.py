"""In-memory pages holding block contents with typed accessors."""

from __future__ import annotations

import struct

INT_SIZE = 4

_INT = struct.Struct(">I")


def max_length(strlen: int) -> int:
    """Return the number of bytes needed to store a string of ``strlen`` bytes."""
    return INT_SIZE + strlen


class Page:
    """A fixed-size byte area with big-endian integer and length-prefixed byte fields."""

    def __init__(self, block_size: int) -> None:
        self._data = bytearray(block_size)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> Page:
        """Wrap existing data; a bytearray is shared rather than copied."""
        page = cls.__new__(cls)
        page._data = data if isinstance(data, bytearray) else bytearray(data)
        return page

    def _check(self, offset: int, size: int, message: str) -> None:
        if offset < 0 or offset + size > len(self._data):
            raise IndexError(message)

    def get_int(self, offset: int) -> int:
        """Read a signed 32-bit big-endian integer."""
        self._check(offset, INT_SIZE, "offset out of range")
        (raw,) = _INT.unpack_from(self._data, offset)
        return raw - (1 << 32) if raw & 0x80000000 else raw

    def set_int(self, offset: int, value: int) -> None:
        """Write a 32-bit big-endian integer, wrapping to 32 bits."""
        self._check(offset, INT_SIZE, "offset out of range")
        _INT.pack_into(self._data, offset, value & 0xFFFFFFFF)

    def get_bytes(self, offset: int) -> bytes:
        """Read a length-prefixed byte string."""
        self._check(offset, INT_SIZE, "offset out of range")
        (length,) = _INT.unpack_from(self._data, offset)
        start = offset + INT_SIZE
        if start + length > len(self._data):
            raise IndexError("byte array out of range")
        return bytes(self._data[start : start + length])

    def set_bytes(self, offset: int, data: bytes) -> None:
        """Write a length-prefixed byte string."""
        self._check(offset, INT_SIZE + len(data), "offset out of range")
        _INT.pack_into(self._data, offset, len(data))
        start = offset + INT_SIZE
        self._data[start : start + len(data)] = data

    def get_string(self, offset: int) -> str:
        """Read a length-prefixed UTF-8 string, dropping trailing NUL bytes."""
        raw = self.get_bytes(offset).rstrip(b"\x00")
        return raw.decode("utf-8", errors="replace")

    def set_string(self, offset: int, text: str) -> None:
        """Write a string as length-prefixed UTF-8."""
        self.set_bytes(offset, text.encode("utf-8"))

    def contents(self) -> bytearray:
        """Return the underlying mutable byte area."""
        return self._data