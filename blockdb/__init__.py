"""Pages, block file and log managers, a buffer pool, block locks and checkpoint log records."""

__version__ = "0.1.0"