"""Block-level access to files in a database directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

from .blockid import BlockId


class FileMgr:
    """Reads and writes fixed-size blocks of files under one directory."""

    def __init__(self, db_directory: str | os.PathLike[str], block_size: int) -> None:
        self._dir = Path(db_directory)
        self._block_size = block_size
        self._is_new = not self._dir.exists()
        if self._is_new:
            self._dir.mkdir(parents=True)
        for entry in self._dir.iterdir():
            if entry.name.startswith("temp") and not entry.is_dir():
                try:
                    entry.unlink()
                except OSError:
                    pass
        self._open_files: dict[str, BinaryIO] = {}
        self._write_count = 0
        self._read_count = 0

    def _get_file(self, filename: str) -> BinaryIO:
        handle = self._open_files.get(filename)
        if handle is None:
            fd = os.open(self._dir / filename, os.O_RDWR | os.O_CREAT, 0o666)
            handle = os.fdopen(fd, "r+b", buffering=0)
            self._open_files[filename] = handle
        return handle

    def read(self, blk: BlockId, buffer: bytearray) -> None:
        """Fill ``buffer`` from the block's position in its file.

        Raises EOFError if the file ends before the buffer is full; the bytes
        that were available are still copied into the buffer.
        """
        handle = self._get_file(blk.filename)
        handle.seek(blk.blknum * self._block_size)
        view = memoryview(buffer)
        filled = 0
        while filled < len(view):
            count = handle.readinto(view[filled:])
            if not count:
                raise EOFError(f"unexpected end of file reading {blk}")
            filled += count
        self._read_count += 1

    def write(self, blk: BlockId, data: bytes | bytearray) -> None:
        """Write ``data`` at the block's position in its file."""
        self._write_at(blk, data)
        self._write_count += 1

    def _write_at(self, blk: BlockId, data: bytes | bytearray) -> None:
        handle = self._get_file(blk.filename)
        handle.seek(blk.blknum * self._block_size)
        view = memoryview(data)
        while view:
            written = handle.write(view)
            view = view[written:]

    def append(self, filename: str) -> BlockId:
        """Extend the file by one zeroed block and return its id."""
        blk = BlockId(filename, self.length(filename))
        self._write_at(blk, bytes(self._block_size))
        return blk

    def length(self, filename: str) -> int:
        """Return the number of whole blocks in the file."""
        handle = self._get_file(filename)
        return os.fstat(handle.fileno()).st_size // self._block_size

    def close(self) -> None:
        """Close every open file."""
        for handle in self._open_files.values():
            handle.close()
        self._open_files.clear()

    def __enter__(self) -> FileMgr:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def write_count(self) -> int:
        return self._write_count

    @property
    def read_count(self) -> int:
        return self._read_count

    @property
    def is_new(self) -> bool:
        return self._is_new

    @property
    def block_size(self) -> int:
        return self._block_size