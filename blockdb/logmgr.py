"""Write-ahead log storage: appending records and reading them back."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .blockid import BlockId
from .filemgr import FileMgr
from .page import INT_SIZE, Page

_logger = logging.getLogger(__name__)


class LogIterator(Iterator[bytes]):
    """Yields the records of one log block, most recently appended first."""

    def __init__(self, file_mgr: FileMgr, blk: BlockId) -> None:
        self._fm = file_mgr
        self._blk = blk
        self._page = Page(file_mgr.block_size)
        self._current_pos = 0
        self._boundary = 0
        self._move_to_block(blk)

    def _move_to_block(self, blk: BlockId) -> None:
        try:
            self._fm.read(blk, self._page.contents())
        except EOFError:
            pass
        self._boundary = self._page.get_int(0)
        _logger.debug("log iterator at %s, boundary %d", blk, self._boundary)
        self._current_pos = self._boundary

    def has_next(self) -> bool:
        """Return True while unread records remain in the block."""
        return 0 <= self._current_pos < self._fm.block_size

    def __iter__(self) -> LogIterator:
        return self

    def __next__(self) -> bytes:
        if not self.has_next():
            raise StopIteration
        record = self._page.get_bytes(self._current_pos)
        next_pos = self._current_pos + INT_SIZE + len(record)
        self._current_pos = -1 if next_pos >= self._fm.block_size else next_pos
        return record


class LogMgr:
    """Appends log records to a log file, filling each block from the end."""

    def __init__(self, file_mgr: FileMgr, logfile: str) -> None:
        self._fm = file_mgr
        self._logfile = logfile
        self._logpage = Page(file_mgr.block_size)
        self._latest_lsn = 0
        self._last_saved_lsn = 0
        logsize = file_mgr.length(logfile)
        if logsize == 0:
            self._current_blk = self._append_new_block()
        else:
            self._current_blk = BlockId(logfile, logsize - 1)
            try:
                file_mgr.read(self._current_blk, self._logpage.contents())
            except EOFError:
                pass

    def _append_new_block(self) -> BlockId:
        blk = self._fm.append(self._logfile)
        self._logpage.set_int(0, self._fm.block_size)
        self._fm.write(blk, self._logpage.contents())
        return blk

    def _flush(self) -> None:
        self._fm.write(self._current_blk, self._logpage.contents())
        self._last_saved_lsn = self._latest_lsn

    def flush(self, lsn: int) -> None:
        """Make sure the record with the given LSN is on disk."""
        if lsn > self._last_saved_lsn:
            self._flush()

    def iterator(self) -> LogIterator:
        """Flush the log and iterate over the current block, newest record first."""
        self._flush()
        return LogIterator(self._fm, self._current_blk)

    def append(self, record: bytes) -> int:
        """Add a record to the log buffer and return its LSN."""
        boundary = self._logpage.get_int(0)
        bytes_needed = len(record) + INT_SIZE
        if boundary - bytes_needed < 0:
            self._flush()
            self._current_blk = self._append_new_block()
            boundary = self._logpage.get_int(0)
        recpos = boundary - bytes_needed
        self._logpage.set_bytes(recpos, record)
        self._logpage.set_int(0, recpos)
        self._latest_lsn += 1
        return self._latest_lsn