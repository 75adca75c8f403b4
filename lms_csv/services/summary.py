from __future__ import annotations

from ..models.validation_result import BatchResult

"""Summary line rendering and error list truncation for CLI output.

SUMMARY format:
SUMMARY files={n} valid={valid} invalid={invalid} rows={rows} warnings={w} elapsed_sec={s}
"""

__all__ = [
    "render_summary_line",
    "format_error_list",
]


def _format_number(value: float) -> str:
    # integers without decimals, very small numbers without scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(result: BatchResult) -> str:
    """Render the SUMMARY line for a batch run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = BatchResult(
        ...     valid_files=1, invalid_files=1, total_rows=40, total_warnings=3,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=2 valid=1 invalid=1 rows=40 warnings=3 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"valid={result.valid_files} "
        f"invalid={result.invalid_files} "
        f"rows={result.total_rows} "
        f"warnings={result.total_warnings} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)}"
    )


def format_error_list(errors: list[str], limit: int) -> list[str]:
    """Cap a list of messages for display: first ``limit`` plus a remainder line.

    A limit of 0 or less shows everything.
    """
    if limit <= 0 or len(errors) <= limit:
        return list(errors)
    remaining = len(errors) - limit
    noun = "error" if remaining == 1 else "errors"
    return [*errors[:limit], f"... and {remaining} more {noun}"]
