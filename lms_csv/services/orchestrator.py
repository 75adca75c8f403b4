from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from ..csvfile.reader import BOM_WARNING, CsvParseError, has_bom, parse_csv
from ..logging.audit_log import AuditLogBuffer
from ..models.audit_record import AuditRecord, compute_sha256
from ..models.config_models import PortalConfig
from ..models.finding import Finding
from ..models.validation_result import BatchResult, FileStat, ValidationVerdict
from .assembler import assemble
from .business_date import BusinessDateProvider, make_business_date_provider
from .progress import ProgressTracker
from .validator import validate

logger = logging.getLogger(__name__)

"""Validation orchestration.

validate_csv() is the single-file entry point: raw bytes -> parse -> validate
-> assemble. It never raises for any byte input; every failure is reported in
the verdict.

validate_files() runs validate_csv() over a list of files for the CLI,
recording one audit record per file and aggregating a BatchResult.
"""

__all__ = [
    "ProcessingError",
    "ACTION_VALIDATED",
    "ACTION_VALIDATION_FAILED",
    "validate_csv",
    "scan_csv_files",
    "validate_files",
]

ACTION_VALIDATED = "CSV_VALIDATED"
ACTION_VALIDATION_FAILED = "CSV_VALIDATION_FAILED"


class ProcessingError(Exception):
    """Fatal error that prevents a batch run (unreadable directory, etc.)."""


def validate_csv(
    file_content: bytes,
    original_filename: str,
    *,
    business_date: BusinessDateProvider | None = None,
) -> ValidationVerdict:
    """Validate an uploaded CSV file against the LMS column contract.

    Args:
        file_content: Raw file bytes (already decoded from upload transport)
        original_filename: Name the file was uploaded under (informational)
        business_date: Provider of the current business date; defaults to
            today in the business timezone

    Returns:
        ValidationVerdict with errors, warnings, suggested filename and row count
    """
    notes: list[Finding] = []
    if has_bom(file_content):
        notes.append(Finding.warning(BOM_WARNING))

    try:
        parsed = parse_csv(file_content)
    except CsvParseError as e:
        logger.debug(f"{original_filename}: parse failure: {e}")
        return assemble([Finding.error(str(e))], [], notes=notes)

    outcome = validate(parsed.rows)
    verdict = assemble(
        outcome.structural,
        outcome.row_findings,
        row_count=outcome.row_count,
        notes=notes,
        business_date=business_date,
    )
    logger.debug(
        f"{original_filename}: valid={verdict.valid} rows={verdict.row_count} "
        f"errors={len(verdict.errors)} warnings={len(verdict.warnings)}"
    )
    return verdict


def scan_csv_files(directory: Path) -> list[Path]:
    """Scan directory for .csv files (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".csv")
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def validate_files(
    file_paths: list[Path],
    config: PortalConfig,
    *,
    audit_log: AuditLogBuffer | None = None,
    on_result: Callable[[Path, ValidationVerdict], None] | None = None,
) -> BatchResult:
    """Validate every file and aggregate the results.

    Args:
        file_paths: Files to validate
        config: Portal configuration (business timezone, size cap)
        audit_log: Audit buffer; one record per file is appended and flushed once
        on_result: Callback invoked after each file (used by the CLI for output)

    Raises:
        ProcessingError: If a file cannot be read
    """
    start_time = datetime.now(UTC)
    provider = make_business_date_provider(config.business_timezone)

    file_stats: list[FileStat] = []
    valid_count = 0
    invalid_count = 0
    total_rows = 0
    total_warnings = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            file_start = datetime.now(UTC)

            try:
                content = file_path.read_bytes()
            except OSError as e:
                raise ProcessingError(f"Error reading file {file_path}: {e}") from e

            if len(content) > config.max_file_size_bytes:
                verdict = ValidationVerdict(
                    errors=[f"File size exceeds maximum of {config.max_file_size_mb}MB"],
                )
            else:
                verdict = validate_csv(content, file_path.name, business_date=provider)

            file_elapsed = (datetime.now(UTC) - file_start).total_seconds()

            if verdict.valid:
                valid_count += 1
            else:
                invalid_count += 1
            total_rows += verdict.row_count
            total_warnings += len(verdict.warnings)

            if audit_log is not None:
                audit_log.append(
                    AuditRecord.create(
                        ACTION_VALIDATED if verdict.valid else ACTION_VALIDATION_FAILED,
                        details={
                            "filename": file_path.name,
                            "sha256": compute_sha256(content),
                            "rowCount": verdict.row_count,
                            "errorCount": len(verdict.errors),
                            "warningCount": len(verdict.warnings),
                            "suggestedFilename": verdict.suggested_filename,
                        },
                    )
                )

            progress.set_postfix(valid=valid_count, invalid=invalid_count, rows=total_rows)
            progress.finish_file()

            file_stats.append(
                FileStat(
                    file_name=file_path.name,
                    status="valid" if verdict.valid else "invalid",
                    row_count=verdict.row_count,
                    error_count=len(verdict.errors),
                    warning_count=len(verdict.warnings),
                    elapsed_seconds=file_elapsed,
                    verdict=verdict,
                )
            )
            if on_result is not None:
                on_result(file_path, verdict)

    if audit_log is not None:
        try:
            audit_log.flush()
        except OSError as e:
            # the validation results are still reported
            logger.warning(f"audit log flush failed: {e}")

    end_time = datetime.now(UTC)
    return BatchResult(
        valid_files=valid_count,
        invalid_files=invalid_count,
        total_rows=total_rows,
        total_warnings=total_warnings,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
