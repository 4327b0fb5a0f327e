import threading
import time

import pytest

from blockdb.blockid import BlockId
from blockdb.concurrency import ConcurrencyMgr
from blockdb.locktable import LockAbortError, LockTable


def test_single_mgr_s_lock_then_x_lock():
    cm = ConcurrencyMgr(LockTable())
    blk = BlockId("testfile", 1)

    cm.s_lock(blk)
    assert cm.has_x_lock(blk) is False

    cm.x_lock(blk)
    assert cm.has_x_lock(blk) is True

    cm.release()
    assert cm.has_x_lock(blk) is False


def test_two_mgr_conflict_resolves_after_release():
    table = LockTable()
    cm1 = ConcurrencyMgr(table)
    cm2 = ConcurrencyMgr(table)
    blk = BlockId("testfile", 2)

    cm1.x_lock(blk)
    result = {}

    def worker():
        try:
            cm2.s_lock(blk)
            result["error"] = None
        except Exception as exc:  # noqa: BLE001
            result["error"] = exc

    thread = threading.Thread(target=worker)
    thread.start()
    time.sleep(0.3)
    assert thread.is_alive()
    cm1.release()
    thread.join(timeout=5)

    assert not thread.is_alive()
    assert result["error"] is None
    assert cm2.has_x_lock(blk) is False

    cm2.x_lock(blk)
    assert cm2.has_x_lock(blk) is True
    cm2.release()
    assert cm2.has_x_lock(blk) is False


def test_release_clears_all():
    cm = ConcurrencyMgr(LockTable())
    blk1 = BlockId("testfile", 10)
    blk2 = BlockId("testfile", 20)

    cm.s_lock(blk1)
    cm.x_lock(blk2)
    assert cm.has_x_lock(blk2) is True

    cm.release()

    assert cm.has_x_lock(blk1) is False
    assert cm.has_x_lock(blk2) is False


def test_release_frees_blocks_for_others():
    table = LockTable(0.1)
    cm1 = ConcurrencyMgr(table)
    cm2 = ConcurrencyMgr(table)
    blk = BlockId("testfile", 30)

    cm1.x_lock(blk)
    with pytest.raises(LockAbortError):
        cm2.s_lock(blk)

    cm1.release()
    cm2.x_lock(blk)
    assert cm2.has_x_lock(blk) is True


def test_x_lock_fails_when_others_share_block():
    table = LockTable(0.1)
    cm1 = ConcurrencyMgr(table)
    cm2 = ConcurrencyMgr(table)
    blk = BlockId("testfile", 40)

    cm1.s_lock(blk)
    cm2.s_lock(blk)
    with pytest.raises(LockAbortError):
        cm2.x_lock(blk)
    assert cm2.has_x_lock(blk) is False


def test_repeated_locks_are_idempotent():
    table = LockTable(0.1)
    cm = ConcurrencyMgr(table)
    other = ConcurrencyMgr(table)
    blk = BlockId("testfile", 50)

    cm.s_lock(blk)
    cm.s_lock(blk)
    cm.x_lock(blk)
    cm.x_lock(blk)
    assert cm.has_x_lock(blk) is True

    cm.release()
    other.x_lock(blk)
    assert other.has_x_lock(blk) is True


def test_unlock_forgets_lock():
    cm = ConcurrencyMgr(LockTable())
    blk = BlockId("testfile", 60)
    cm.x_lock(blk)
    cm.unlock(blk)
    assert cm.has_x_lock(blk) is False


def test_default_managers_share_a_table():
    cm1 = ConcurrencyMgr()
    cm2 = ConcurrencyMgr()
    blk = BlockId("shared-default-table", 1)

    cm1.x_lock(blk)
    result = {}

    def worker():
        try:
            cm2.s_lock(blk)
            result["error"] = None
        except Exception as exc:  # noqa: BLE001
            result["error"] = exc

    thread = threading.Thread(target=worker)
    thread.start()
    time.sleep(0.2)
    assert thread.is_alive()
    cm1.release()
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert result["error"] is None

    cm2.x_lock(blk)
    assert cm2.has_x_lock(blk) is True
    cm2.release()
    assert cm2.has_x_lock(blk) is False