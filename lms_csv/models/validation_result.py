from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

"""Validation result models.

ValidationVerdict is the outcome of one validate_csv() call. FileStat and
BatchResult aggregate verdicts when the CLI validates a directory of files.
"""

__all__ = [
    "ValidationVerdict",
    "FileStat",
    "BatchResult",
]


@dataclass(frozen=True)
class ValidationVerdict:
    """Outcome of validating one uploaded CSV file.

    ``valid`` is derived from ``errors``; warnings never affect it.
    """
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggested_filename: str | None = None  # None on structural failure
    row_count: int = 0  # data rows examined, 0 on structural failure

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the external camelCase response shape."""
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "suggestedFilename": self.suggested_filename,
            "rowCount": self.row_count,
        }


@dataclass(frozen=True)
class FileStat:
    """Per-file statistics collected by the batch runner."""
    file_name: str
    status: str  # valid/invalid
    row_count: int
    error_count: int
    warning_count: int
    elapsed_seconds: float
    verdict: ValidationVerdict | None = None


@dataclass(frozen=True)
class BatchResult:
    """Aggregated results of validating several files."""
    valid_files: int
    invalid_files: int
    total_rows: int
    total_warnings: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.valid_files + self.invalid_files
