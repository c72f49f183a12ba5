from __future__ import annotations

import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..models.record import Record

"""Record store: CSV <-> Record sequence.

Read side: the whole file is loaded with pandas, the first row is the header
and is dropped, every other row becomes one Record with its fields kept
verbatim (``dtype=str``, NA detection disabled so "NA" / "" stay text).

Write side: rows are serialised without header/index to a temporary file
next to the target and moved into place with ``os.replace`` so a failed run
never leaves a half-written output.
"""

__all__ = [
    "RecordStoreError",
    "RecordReadError",
    "RecordFormatError",
    "RecordWriteError",
    "read_csv",
    "write_csv",
]


class RecordStoreError(Exception):
    """Base class for record store failures."""

class RecordReadError(RecordStoreError):
    """Raised when the input file cannot be opened or read."""

class RecordFormatError(RecordStoreError):
    """Raised when the input is not parseable as comma-separated rows."""

class RecordWriteError(RecordStoreError):
    """Raised when the output file cannot be written."""


def read_csv(path: Path | str) -> list[Record]:
    """Read a CSV file into Records, skipping the header row.

    Returns an empty list for an empty or header-only file.

    Raises:
        RecordReadError: file missing / unreadable
        RecordFormatError: ragged rows, unterminated quotes, undecodable bytes
    """
    path = Path(path)
    try:
        df = pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            na_values=[],
            skip_blank_lines=True,
            encoding="utf-8",
        )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise RecordFormatError(f"malformed csv '{path}': {e}") from e
    except OSError as e:
        raise RecordReadError(f"cannot read '{path}': {e}") from e

    data = df.iloc[1:]
    # no NA markers are configured, so NaN only marks fields missing from a short row
    if data.isna().any(axis=None):
        bad = [i + 1 for i, flag in enumerate(data.isna().any(axis=1).tolist()) if flag]
        raise RecordFormatError(f"malformed csv '{path}': ragged data rows {bad[:10]}")

    return [Record.from_raw(row) for row in data.itertuples(index=False, name=None)]


def _serialise_row(row: list[str]) -> str:
    if not row:
        return "\n"
    return pd.DataFrame([row], dtype=str).to_csv(header=False, index=False, lineterminator="\n")


def write_csv(path: Path | str, records: Sequence[Record]) -> Path:
    """Write Records (``Record.raw()`` per row, no header) atomically to ``path``.

    Any existing file at ``path`` is replaced only once the new content is
    fully written. An empty ``records`` writes an empty file.

    Raises:
        RecordWriteError: target directory missing / not writable
    """
    target = Path(path)
    rows = [r.raw() for r in records]
    # one frame per row: a shared frame would pad shorter rows
    content = "".join(_serialise_row(row) for row in rows)

    tmp: str | None = None
    try:
        fd, tmp = tempfile.mkstemp(prefix=".tmp_", suffix=".csv", dir=target.parent)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.chmod(tmp, 0o644)
        os.replace(tmp, target)
    except OSError as e:
        raise RecordWriteError(f"cannot write '{target}': {e}") from e
    finally:
        if tmp is not None and os.path.exists(tmp):
            os.remove(tmp)
    return target
