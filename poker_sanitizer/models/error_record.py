from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

Used when the ``skip`` malformed-record policy drops a row: the row number
and the reason are recorded, never the raw row text (it may carry personal
data). ``row=-1`` marks file-level errors where no row applies.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: input CSV file name
        row: data row number (1-based, header excluded). -1 for file-level errors
        error_type: error classification in UPPER_SNAKE_CASE
        message: human readable reason
    """
    timestamp: str
    file: str
    row: int
    error_type: str
    message: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # fixed key set: dataclass fields only
        return json.dumps(asdict(self), ensure_ascii=False)
