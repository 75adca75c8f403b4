from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from lms_csv.config.loader import ConfigError, load_config, resolve_config_path
from lms_csv.logging.audit_log import AuditLogBuffer
from lms_csv.logging.init import log_summary, setup_logging
from lms_csv.models.validation_result import ValidationVerdict
from lms_csv.services.orchestrator import ProcessingError, scan_csv_files, validate_files
from lms_csv.services.summary import format_error_list, render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then config (--config > LMS_CSV_CONFIG > config/portal.yml)
- Validate the given paths, or every .csv in source_directory (non-recursive)
- Print per-file results with a capped error list, append audit records
- With --json, stdout holds only the JSON document; log lines go to stderr
- Print the SUMMARY line and exit 0 (all valid), 2 (any invalid) or 1 (fatal)
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_INVALID_FILES = 2


def _load_env_file(path: Path, override: bool = False) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Validate LMS daily CSV uploads")
    p.add_argument("paths", nargs="*", help="CSV files to validate (default: all .csv in source_directory)")
    p.add_argument("--config", help="Path to YAML config")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--json", action="store_true", help="Print verdicts as JSON instead of log lines")
    p.add_argument("--max-errors", type=int, default=None, help="Errors shown per file (0 = all)")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    # only read sys.argv when called without arguments (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    # keep stdout for the JSON document
    logger = setup_logging(sys.stderr if args.json else None)
    _load_env_file(Path(".env"))

    try:
        cfg = load_config(resolve_config_path(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    if args.paths:
        file_paths = [Path(p) for p in args.paths]
        missing = [p for p in file_paths if not p.is_file()]
        if missing:
            logger.error(f"file not found: {missing[0]}")
            return EXIT_FATAL
    else:
        directory = Path(cfg.source_directory)
        if not directory.exists():
            logger.error(f"directory not found: {directory}")
            return EXIT_FATAL
        logger.info(f"Validating files from: {directory}")
        try:
            file_paths = scan_csv_files(directory)
        except ProcessingError as e:
            logger.error(f"processing: {e}")
            return EXIT_FATAL

    max_errors = args.max_errors if args.max_errors is not None else cfg.max_displayed_errors
    json_output: dict[str, dict] = {}

    def _report(path: Path, verdict: ValidationVerdict) -> None:
        if args.json:
            json_output[path.name] = verdict.to_dict()
            return
        if verdict.valid:
            logger.info(f"{path.name}: valid rows={verdict.row_count} suggested={verdict.suggested_filename}")
        else:
            logger.error(f"{path.name}: invalid rows={verdict.row_count} errors={len(verdict.errors)}")
            for line in format_error_list(verdict.errors, max_errors):
                logger.error(f"  {line}")
        for line in verdict.warnings:
            logger.warning(f"  {line}")

    audit_log = AuditLogBuffer(cfg.audit_log_directory)
    try:
        result = validate_files(file_paths, cfg, audit_log=audit_log, on_result=_report)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if args.json:
        print(json.dumps(json_output, ensure_ascii=False, indent=2))

    # render_summary_line includes the label; log_summary adds it again
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))

    if result.invalid_files > 0:
        return EXIT_INVALID_FILES
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
