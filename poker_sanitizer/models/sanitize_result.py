from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

"""Result model for one sanitize run (feeds the SUMMARY line)."""

__all__ = [
    "SanitizeResult",
]


@dataclass(frozen=True)
class SanitizeResult:
    """Aggregated outcome of sanitizing one input file.

    ``total_records`` counts data rows read (header excluded);
    ``kept_records + discarded_records + malformed_records == total_records``.
    """
    total_records: int
    kept_records: int
    discarded_records: int
    malformed_records: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    output_path: Path | None = None  # None when nothing was written
    output_written: bool = False

    @property
    def partial(self) -> bool:
        """True when malformed rows were dropped (``skip`` policy)."""
        return self.malformed_records > 0
