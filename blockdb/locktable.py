"""A table of shared and exclusive block locks with timed waits."""

from __future__ import annotations

import threading
import time

from .blockid import BlockId

MAX_TIME = 10.0


class LockAbortError(TimeoutError):
    """Raised when a lock cannot be obtained within the wait limit."""

    def __init__(self, message: str = "lock aborted due to timeout") -> None:
        super().__init__(message)


class LockTable:
    """Grants shared and exclusive locks on blocks.

    A positive count is the number of shared locks on a block; -1 marks an
    exclusive lock. A request that cannot be granted waits up to ``max_time``
    seconds and then raises LockAbortError.
    """

    def __init__(self, max_time: float = MAX_TIME) -> None:
        self._locks: dict[BlockId, int] = {}
        self._cond = threading.Condition()
        self._max_time = max_time

    def _wait_until(self, granted, deadline: float) -> None:
        while not granted():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise LockAbortError()
            self._cond.wait(remaining)

    def s_lock(self, blk: BlockId) -> None:
        """Acquire a shared lock, waiting while another holds it exclusively."""
        deadline = time.monotonic() + self._max_time
        with self._cond:
            self._wait_until(lambda: not self._has_x_lock(blk), deadline)
            self._locks[blk] = self._locks.get(blk, 0) + 1

    def x_lock(self, blk: BlockId) -> None:
        """Acquire an exclusive lock, waiting while other shared locks exist.

        The caller is expected to hold a shared lock on the block already.
        """
        deadline = time.monotonic() + self._max_time
        with self._cond:
            self._wait_until(lambda: not self._has_other_s_locks(blk), deadline)
            self._locks[blk] = -1

    def unlock(self, blk: BlockId) -> None:
        """Release one lock on the block; unknown blocks are ignored."""
        with self._cond:
            count = self._locks.get(blk)
            if count is None:
                return
            if count > 1:
                self._locks[blk] = count - 1
            else:
                del self._locks[blk]
            self._cond.notify_all()

    def _has_x_lock(self, blk: BlockId) -> bool:
        return self._locks.get(blk, 0) < 0

    def _has_other_s_locks(self, blk: BlockId) -> bool:
        return self._locks.get(blk, 0) > 1