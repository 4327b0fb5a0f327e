"""Buffers caching blocks in memory and the pool that manages them."""

from __future__ import annotations

import threading
import time

from .blockid import BlockId
from .filemgr import FileMgr
from .logmgr import LogMgr
from .page import Page

MAX_WAIT = 0.005
_RETRY_INTERVAL = 0.01


class Buffer:
    """A page of memory that may hold the contents of one block."""

    def __init__(self, file_mgr: FileMgr, log_mgr: LogMgr) -> None:
        self._fm = file_mgr
        self._lm = log_mgr
        self._contents = Page(file_mgr.block_size)
        self._blk: BlockId | None = None
        self._pins = 0
        self._txnum = -1
        self._lsn = -1

    @property
    def contents(self) -> Page:
        """The page held by the buffer."""
        return self._contents

    @property
    def block(self) -> BlockId | None:
        """The block assigned to the buffer, if any."""
        return self._blk

    def set_modified(self, txnum: int, lsn: int) -> None:
        """Record that a transaction modified the buffer; a negative LSN is ignored."""
        self._txnum = txnum
        if lsn >= 0:
            self._lsn = lsn

    @property
    def is_pinned(self) -> bool:
        return self._pins > 0

    @property
    def modifying_tx(self) -> int:
        """The transaction that last modified the buffer, or -1."""
        return self._txnum

    def assign_to_block(self, blk: BlockId) -> None:
        """Flush current contents, then load the given block."""
        self.flush()
        self._blk = blk
        try:
            self._fm.read(blk, self._contents.contents())
        except EOFError:
            pass
        self._pins = 0

    def flush(self) -> None:
        """Write the page to disk if a transaction modified it."""
        if self._txnum >= 0 and self._blk is not None:
            self._lm.flush(self._lsn)
            self._fm.write(self._blk, self._contents.contents())
            self._txnum = -1

    def pin(self) -> None:
        self._pins += 1

    def unpin(self) -> None:
        self._pins -= 1


class BufferAbortError(TimeoutError):
    """Raised when no buffer becomes free within the wait limit."""


class BufferMgr:
    """Pins blocks to a fixed pool of buffers."""

    def __init__(
        self,
        file_mgr: FileMgr,
        log_mgr: LogMgr,
        num_buffers: int,
        max_wait: float = MAX_WAIT,
    ) -> None:
        self._pool = [Buffer(file_mgr, log_mgr) for _ in range(num_buffers)]
        self._num_available = num_buffers
        self._max_wait = max_wait
        self._lock = threading.Lock()

    @property
    def available(self) -> int:
        """The number of unpinned buffers."""
        return self._num_available

    def flush_all(self, txnum: int) -> None:
        """Flush every buffer modified by the given transaction."""
        with self._lock:
            for buff in self._pool:
                if buff.modifying_tx == txnum:
                    buff.flush()

    def unpin(self, buffer: Buffer) -> None:
        """Unpin a buffer, making it available once no pins remain."""
        with self._lock:
            buffer.unpin()
            if not buffer.is_pinned:
                self._num_available = min(len(self._pool), self._num_available + 1)

    def pin(self, blk: BlockId) -> Buffer:
        """Pin a buffer to the block, waiting up to the limit for one to free up."""
        start = time.monotonic()
        while True:
            with self._lock:
                buff = self._try_to_pin(blk)
            if buff is not None:
                return buff
            if time.monotonic() - start >= self._max_wait:
                raise BufferAbortError("buffer allocation timeout")
            time.sleep(_RETRY_INTERVAL)

    def _try_to_pin(self, blk: BlockId) -> Buffer | None:
        buff = self._find_existing_buffer(blk)
        if buff is None:
            buff = self._choose_unpinned_buffer()
            if buff is None:
                return None
            buff.assign_to_block(blk)
        if not buff.is_pinned:
            self._num_available = max(0, self._num_available - 1)
        buff.pin()
        return buff

    def _find_existing_buffer(self, blk: BlockId) -> Buffer | None:
        return next((b for b in self._pool if b.block == blk), None)

    def _choose_unpinned_buffer(self) -> Buffer | None:
        return next((b for b in self._pool if not b.is_pinned), None)