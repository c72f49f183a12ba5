from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from .cell import Cell
from .rule import DEFAULT_RULE, PersonalDataRule

"""Record model for the hand-history sanitizer.

A Record is one parsed row of the CSV export. Column layout (positional):

- column 0: ``actor@domain "action"`` (e.g. ``bob@example.com "raise"``)
- column 1: RFC 3339 timestamp
- remaining columns: opaque payload (one of which may carry the player's hand)

Actor / Action / Timestamp are derived on demand and never stored.
"""

__all__ = [
    "MalformedRecordError",
    "Record",
    "REQUIRED_COLUMNS",
    "parse_rfc3339",
]

ACTOR_COLUMN = 0
TIMESTAMP_COLUMN = 1
REQUIRED_COLUMNS = 2

# RFC 3339 date-time: full date, literal T, full time with mandatory offset
_RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$"
)


class MalformedRecordError(ValueError):
    """Raised when a record violates the positional column contract."""


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC 3339 date-time into an aware datetime.

    Raises:
        MalformedRecordError: value is not an RFC 3339 date-time
    """
    if not _RFC3339_RE.match(value):
        raise MalformedRecordError(f"timestamp is not RFC 3339: {value!r}")
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:  # e.g. month 13 passes the shape check
        raise MalformedRecordError(f"timestamp is not RFC 3339: {value!r} ({e})") from e


@dataclass(frozen=True)
class Record:
    """One row of the hand-history export as an ordered tuple of Cells.

    Build from raw fields with :meth:`from_raw`; :meth:`raw` returns the exact
    field values used for construction (round-trip identity).
    """
    cells: tuple[Cell, ...]

    @classmethod
    def from_raw(cls, fields: Iterable[str]) -> Record:
        return cls(cells=tuple(Cell(f) for f in fields))

    def raw(self) -> list[str]:
        return [c.text for c in self.cells]

    def __len__(self) -> int:
        return len(self.cells)

    def contains_personal_data(self, rule: PersonalDataRule = DEFAULT_RULE) -> bool:
        return any(c.contains_personal_data(rule) for c in self.cells)

    def _require_columns(self) -> None:
        if len(self.cells) < REQUIRED_COLUMNS:
            raise MalformedRecordError(
                f"record has {len(self.cells)} column(s), "
                f"expected at least {REQUIRED_COLUMNS} (actor, timestamp)"
            )

    def timestamp(self) -> datetime:
        self._require_columns()
        return parse_rfc3339(self.cells[TIMESTAMP_COLUMN].text)

    def actor(self) -> str:
        """Identity part of column 0: text before the first ``@``, unquoted and trimmed."""
        self._require_columns()
        head = self.cells[ACTOR_COLUMN].text.split("@", 1)[0]
        return head.strip('"').strip(" ")

    def action(self) -> str:
        """Action label of column 0: the last ``"``-delimited segment.

        A trailing quote (``bob@x "raise"``) would leave an empty final
        segment, so empty segments are skipped; whitespace-only segments are
        returned as they are. Without any ``"`` the whole text is returned.
        """
        self._require_columns()
        for segment in reversed(self.cells[ACTOR_COLUMN].text.split('"')):
            if segment:
                return segment
        return ""

    def validate(self) -> None:
        """Check the positional contract (actor + timestamp columns, parseable timestamp).

        Raises:
            MalformedRecordError: contract violated
        """
        self.timestamp()
