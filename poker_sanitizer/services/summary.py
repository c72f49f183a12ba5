from __future__ import annotations

from ..models.sanitize_result import SanitizeResult

"""SUMMARY line rendering.

Format::

    SUMMARY records={total} kept={kept} discarded={discarded} malformed={malformed} written={yes|no} elapsed_sec={elapsed}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for tiny durations
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(result: SanitizeResult) -> str:
    """Render the SUMMARY line for a sanitize run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = SanitizeResult(
        ...     total_records=3, kept_records=2, discarded_records=1,
        ...     malformed_records=0, start_time=t, end_time=t,
        ...     elapsed_seconds=2.0, output_written=True,
        ... )
        >>> render_summary_line(result)
        'SUMMARY records=3 kept=2 discarded=1 malformed=0 written=yes elapsed_sec=2'
    """
    return (
        f"SUMMARY records={result.total_records} "
        f"kept={result.kept_records} "
        f"discarded={result.discarded_records} "
        f"malformed={result.malformed_records} "
        f"written={'yes' if result.output_written else 'no'} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
