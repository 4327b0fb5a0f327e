"""Per-transaction bookkeeping of block locks."""

from __future__ import annotations

import threading
from enum import Enum

from .blockid import BlockId
from .locktable import LockTable

_SHARED_LOCK_TABLE = LockTable()


class _LockMode(Enum):
    SHARED = "S"
    EXCLUSIVE = "X"


class ConcurrencyMgr:
    """Tracks the locks one transaction holds in a lock table.

    Managers created without a table share one process-wide table.
    """

    def __init__(self, lock_table: LockTable | None = None) -> None:
        self._table = lock_table if lock_table is not None else _SHARED_LOCK_TABLE
        self._locks: dict[BlockId, _LockMode] = {}
        self._mutex = threading.Lock()

    def s_lock(self, blk: BlockId) -> None:
        """Obtain a shared lock unless some lock on the block is already held."""
        with self._mutex:
            if blk in self._locks:
                return
        self._table.s_lock(blk)
        with self._mutex:
            self._locks[blk] = _LockMode.SHARED

    def x_lock(self, blk: BlockId) -> None:
        """Obtain an exclusive lock, taking a shared lock first if needed."""
        if self.has_x_lock(blk):
            return
        self.s_lock(blk)
        try:
            self._table.x_lock(blk)
        except Exception:
            self._table.unlock(blk)
            raise
        with self._mutex:
            self._locks[blk] = _LockMode.EXCLUSIVE

    def release(self) -> None:
        """Release every lock held by this manager."""
        with self._mutex:
            for blk in self._locks:
                self._table.unlock(blk)
            self._locks.clear()

    def has_x_lock(self, blk: BlockId) -> bool:
        """Return True if this manager holds an exclusive lock on the block."""
        with self._mutex:
            return self._locks.get(blk) is _LockMode.EXCLUSIVE

    def unlock(self, blk: BlockId) -> None:
        """Forget this manager's record of a lock on the block."""
        with self._mutex:
            self._locks.pop(blk, None)