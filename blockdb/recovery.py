"""Log record types used for recovery."""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import Protocol, runtime_checkable

from .page import INT_SIZE, Page

_OP = struct.Struct("<i")


class LogOp(IntEnum):
    """Kinds of log record."""

    CHECKPOINT = 0
    START = 1
    COMMIT = 2
    ROLLBACK = 3
    SETINT = 4
    SETSTRING = 5


@runtime_checkable
class Transaction(Protocol):
    """Operations a transaction offers for undoing logged changes."""

    def undo_set_int(self, tx_id: int, offset: int, old_value: int) -> None: ...

    def undo_set_string(self, tx_id: int, offset: int, old_value: str) -> None: ...


@runtime_checkable
class LogRecord(Protocol):
    """A record read back from the log."""

    def op(self) -> LogOp: ...

    def tx_number(self) -> int: ...

    def undo(self, tx: Transaction) -> None: ...


@runtime_checkable
class LogManager(Protocol):
    """Anything that can append a record to the log and return its LSN."""

    def append(self, record: bytes) -> int: ...


class CheckpointRecord:
    """A checkpoint marker; it belongs to no transaction and undoes nothing."""

    def op(self) -> LogOp:
        return LogOp.CHECKPOINT

    def tx_number(self) -> int:
        return -1

    def undo(self, tx: Transaction) -> None:
        """Checkpoints have nothing to undo."""

    def __str__(self) -> str:
        return "<CHECKPOINT>"


def write_checkpoint_to_log(log_mgr: LogManager) -> int:
    """Append a checkpoint record to the log and return its LSN."""
    page = Page(INT_SIZE)
    page.set_int(0, LogOp.CHECKPOINT)
    return log_mgr.append(bytes(page.contents()))


def create_log_record(data: bytes) -> LogRecord:
    """Build a log record from its serialized form.

    Raises ValueError for data too short to hold an operation code or for an
    operation with no record type.
    """
    if len(data) < INT_SIZE:
        raise ValueError("invalid log record data")
    (op,) = _OP.unpack_from(data, 0)
    if op == LogOp.CHECKPOINT:
        return CheckpointRecord()
    raise ValueError("unknown log record type")