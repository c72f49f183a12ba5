from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import MALFORMED_FAIL, MALFORMED_SKIP
from ..csvio.store import RecordStoreError, read_csv, write_csv
from ..logging.error_log import DEFAULT_LOGS_DIR, ErrorLogBuffer, ErrorRecord
from ..models.record import MalformedRecordError, Record
from ..models.rule import DEFAULT_RULE, PersonalDataRule
from ..models.sanitize_result import SanitizeResult
from .progress import RecordProgress

"""Sanitizer orchestration.

read_csv -> positional contract check -> personal-data filter -> write_csv

The filter keeps exactly the records without personal data, in input order.
An empty input is a successful no-op: nothing is written.

Malformed records (missing actor/timestamp column, non RFC 3339 timestamp)
are handled per policy:
- ``fail``: the whole run aborts with SanitizeError, no output is written
- ``skip``: the row is dropped, reported to the JSON Lines error log and the
  run continues
"""

__all__ = [
    "SanitizeError",
    "default_output_path",
    "filter_personal_data",
    "sanitize_records",
    "sanitize_file",
]

logger = logging.getLogger(__name__)

ERROR_TYPE_MALFORMED = "MALFORMED_RECORD"


class SanitizeError(Exception):
    """Fatal error for a sanitize run (read/format/write failure or malformed record)."""


def default_output_path(input_path: Path | str) -> Path:
    """``data/hands.csv`` -> ``data/hands_sanitized.csv``.

    Raises:
        ValueError: file name does not contain exactly one period
    """
    p = Path(input_path)
    if p.name.count(".") != 1:
        raise ValueError(f"cannot derive output name, expected exactly one '.' in: {p.name}")
    return p.with_name(f"{p.stem}_sanitized{p.suffix}")


def filter_personal_data(
    records: Iterable[Record], rule: PersonalDataRule = DEFAULT_RULE
) -> tuple[list[Record], list[Record]]:
    """Partition records into (kept, discarded), preserving relative order.

    Every discarded record is reported with an INFO notice.
    """
    kept: list[Record] = []
    discarded: list[Record] = []
    for record in records:
        if record.contains_personal_data(rule):
            logger.info(f"discarding unsanitized row: {record.raw()}")
            discarded.append(record)
        else:
            kept.append(record)
    return kept, discarded


def _check_contract(
    records: Sequence[Record],
    malformed_policy: str,
    error_log: ErrorLogBuffer | None,
    source_name: str,
) -> list[Record]:
    valid: list[Record] = []
    with RecordProgress(len(records)) as progress:
        for row, record in enumerate(records, start=1):
            progress.advance()
            try:
                record.validate()
            except MalformedRecordError as e:
                if malformed_policy != MALFORMED_SKIP:
                    raise SanitizeError(f"malformed record at row {row}: {e}") from e
                logger.warning(f"skipping malformed row {row}: {e}")
                if error_log is not None:
                    error_log.append(ErrorRecord.create(source_name, row, ERROR_TYPE_MALFORMED, str(e)))
                continue
            valid.append(record)
    return valid


def sanitize_records(
    records: Sequence[Record],
    output_path: Path | str,
    *,
    rule: PersonalDataRule = DEFAULT_RULE,
    malformed_policy: str = MALFORMED_FAIL,
    error_log: ErrorLogBuffer | None = None,
    source_name: str = "",
) -> SanitizeResult:
    """Drop records carrying personal data and write the rest to ``output_path``.

    Args:
        records: parsed data rows (header already removed)
        output_path: target CSV, replaced atomically
        rule: personal-data signatures
        malformed_policy: ``fail`` or ``skip``
        error_log: buffer receiving skipped-row reports (``skip`` policy)
        source_name: input file name used in error log entries

    Returns:
        SanitizeResult with per-category counts

    Raises:
        SanitizeError: malformed record under ``fail`` policy, or write failure
    """
    start_time = datetime.now(UTC)
    output = Path(output_path)

    if not records:
        logger.info("no records to sanitize, nothing written")
        return _result(start_time, total=0, kept=0, discarded=0, malformed=0, output=None)

    valid = _check_contract(records, malformed_policy, error_log, source_name)
    kept, discarded = filter_personal_data(valid, rule)
    malformed = len(records) - len(valid)

    if error_log is not None and len(error_log) > 0:
        try:
            log_path = error_log.flush()
        except OSError as e:
            raise SanitizeError(f"cannot write error log: {e}") from e
        logger.warning(f"{malformed} malformed row(s) reported to {log_path}")

    try:
        write_csv(output, kept)
    except RecordStoreError as e:
        raise SanitizeError(str(e)) from e
    logger.debug(f"wrote {len(kept)} row(s) to {output}")

    return _result(
        start_time,
        total=len(records),
        kept=len(kept),
        discarded=len(discarded),
        malformed=malformed,
        output=output,
    )


def sanitize_file(
    input_path: Path | str,
    output_path: Path | str,
    *,
    rule: PersonalDataRule = DEFAULT_RULE,
    malformed_policy: str = MALFORMED_FAIL,
    error_log_dir: Path | str = DEFAULT_LOGS_DIR,
) -> SanitizeResult:
    """Read ``input_path``, sanitize, write ``output_path``.

    Raises:
        SanitizeError: read / format / write failure or malformed record (``fail``)
    """
    source = Path(input_path)
    logger.info(f"sanitizing file '{source}'")
    try:
        records = read_csv(source)
    except RecordStoreError as e:
        raise SanitizeError(str(e)) from e
    logger.debug(f"read {len(records)} record(s) from {source}")

    return sanitize_records(
        records,
        output_path,
        rule=rule,
        malformed_policy=malformed_policy,
        error_log=ErrorLogBuffer(error_log_dir),
        source_name=source.name,
    )


def _result(
    start_time: datetime,
    *,
    total: int,
    kept: int,
    discarded: int,
    malformed: int,
    output: Path | None,
) -> SanitizeResult:
    end_time = datetime.now(UTC)
    return SanitizeResult(
        total_records=total,
        kept_records=kept,
        discarded_records=discarded,
        malformed_records=malformed,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        output_path=output,
        output_written=output is not None,
    )
