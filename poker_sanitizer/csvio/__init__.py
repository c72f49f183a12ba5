"""CSV record store (read / atomic write)."""

from .store import (
    RecordFormatError,
    RecordReadError,
    RecordStoreError,
    RecordWriteError,
    read_csv,
    write_csv,
)

__all__ = [
    "RecordStoreError",
    "RecordReadError",
    "RecordFormatError",
    "RecordWriteError",
    "read_csv",
    "write_csv",
]
