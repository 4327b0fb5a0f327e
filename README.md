# blockdb

These are the storage layers that sit under a relational database engine, written in plain Python with no third-party dependencies.

## Modules

- `blockdb.blockid.BlockId` is a frozen dataclass holding `filename` and `blknum`. Its string form is `[file <name>, block <n>]`. `hash_code()` gives a stable 32-bit hash of that string.
- `blockdb.page.Page` is a fixed-size byte page.
  - `get_int` and `set_int` read and write signed 32-bit big-endian integers.
  - `get_bytes` and `set_bytes` handle byte strings with a length prefix. `get_string` and `set_string` handle UTF-8 text with a length prefix.
  - Any access outside the page raises `IndexError`.
  - `contents()` returns the underlying `bytearray`.
  - `Page.from_bytes` wraps existing data.
  - `max_length(n)` gives the bytes needed to store an `n`-byte string.
- `blockdb.filemgr.FileMgr(db_directory, block_size)` reads, writes and appends whole blocks of files under one directory.
  - It creates the directory if it is missing. In that case `is_new` is `True`.
  - On opening, it deletes every file whose name starts with `temp`.
  - `read` raises `EOFError` when the file ends before the buffer is full.
  - The `read_count` and `write_count` properties count calls to `read` and `write`.
  - It is a context manager. `close()` closes the open files.
- `blockdb.logmgr.LogMgr(file_mgr, logfile)` is an append-only log.
  - `append(record)` packs a record into the current block, working from the end of the block toward the start, and returns its LSN.
  - `flush(lsn)` writes the block to disk if that LSN has not yet been saved.
  - `iterator()` flushes the log and returns a `LogIterator`. The iterator yields the records of the current block, newest first.
- `blockdb.buffer`:
  - `Buffer` holds one block's page. Its members are `contents`, `block`, `set_modified`, `modifying_tx`, `pin`/`unpin`/`is_pinned` and `flush`.
  - `BufferMgr(file_mgr, log_mgr, num_buffers, max_wait=0.005)` pins blocks to a fixed pool of buffers. `available` gives the number of unpinned buffers. `flush_all(txnum)` writes out the buffers that a transaction has modified. If no buffer becomes free within `max_wait` seconds, `pin` raises `BufferAbortError`, which is a `TimeoutError`.
- `blockdb.locktable.LockTable(max_time=10.0)` grants shared (`s_lock`) and exclusive (`x_lock`) locks on blocks. A request waits up to `max_time` seconds and then raises `LockAbortError`. `x_lock` expects the caller to hold a shared lock on the block already.
- `blockdb.concurrency.ConcurrencyMgr(lock_table=None)` records the locks one transaction holds. `x_lock` takes a shared lock first. `release()` gives back every lock. Managers created without a table share one lock table for the whole process.
- `blockdb.recovery` defines:
  - `LogOp`;
  - the `LogRecord`, `Transaction` and `LogManager` protocols;
  - `CheckpointRecord`;
  - `write_checkpoint_to_log(log_mgr)`, which appends a 4-byte little-endian checkpoint code and returns its LSN;
  - `create_log_record(data)`, which raises `ValueError` for data that is too short or of an unknown type.

## Example

```python
from blockdb.blockid import BlockId
from blockdb.filemgr import FileMgr
from blockdb.logmgr import LogMgr
from blockdb.buffer import BufferMgr

with FileMgr("dbdir", 400) as fm:
    lm = LogMgr(fm, "logfile")
    bm = BufferMgr(fm, lm, 3)

    blk = fm.append("data.tbl")
    buff = bm.pin(blk)
    buff.contents.set_string(80, "hello")
    lsn = lm.append(b"set string")
    buff.set_modified(1, lsn)
    bm.unpin(buff)
    bm.flush_all(1)

    for record in lm.iterator():
        print(record)
```

## What it does not do

This is a set of storage components, not a complete database.

- There is no SQL, no query processing, no record or table layer, and no command or server.
- There is no transaction manager and no recovery manager. `create_log_record` recognises only checkpoint records. The other `LogOp` codes have no record classes.
- `LogIterator` reads only the block it starts on. It does not move back through earlier log blocks.

## Installation

```
pip install .
```

## Tests

```
pip install .[test]
pytest
```