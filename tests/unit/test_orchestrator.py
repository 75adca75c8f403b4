from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from lms_csv.logging.audit_log import AuditLogBuffer
from lms_csv.models.config_models import PortalConfig
from lms_csv.services.orchestrator import (
    ACTION_VALIDATED,
    ACTION_VALIDATION_FAILED,
    ProcessingError,
    scan_csv_files,
    validate_csv,
    validate_files,
)


def test_validate_csv_never_raises_on_garbage(business_date):
    for content in [b"", b"\x00\x01\x02", b'"""', b"\xff" * 10, b",,,\n,,,", b"\r\r\r"]:
        verdict = validate_csv(content, "junk.csv", business_date=business_date)
        assert verdict.valid is False
        assert verdict.row_count == 0
        assert verdict.suggested_filename is None


def test_validate_csv_empty_file(business_date):
    verdict = validate_csv(b"\n\n", "empty.csv", business_date=business_date)
    assert verdict.errors == ["File is empty"]


def test_validate_csv_bom_warning_kept_on_structural_failure(business_date):
    verdict = validate_csv(b"\xef\xbb\xbfa,b\n1,2", "x.csv", business_date=business_date)
    assert verdict.errors == ["Header row has 2 columns, expected 13 columns"]
    assert verdict.warnings == [
        "File contains BOM (Byte Order Mark). BOM will be removed during processing."
    ]


def test_validate_csv_uses_default_provider(csv_bytes, csv_row):
    with patch(
        "lms_csv.services.assembler.make_business_date_provider",
        return_value=lambda: "2031-12-01",
    ):
        verdict = validate_csv(csv_bytes(csv_row()), "a.csv")
    assert verdict.suggested_filename == "20311201.csv"


def test_scan_csv_files(temp_workdir: Path):
    data = temp_workdir / "data"
    (data / "b.csv").write_bytes(b"")
    (data / "a.CSV").write_bytes(b"")
    (data / "notes.txt").write_bytes(b"")
    (data / "sub.csv").mkdir()
    assert [p.name for p in scan_csv_files(data)] == ["a.CSV", "b.csv"]


def test_scan_csv_files_missing_directory(temp_workdir: Path):
    with pytest.raises(ProcessingError, match="Directory not found"):
        scan_csv_files(temp_workdir / "nope")


def test_scan_csv_files_not_a_directory(temp_workdir: Path):
    f = temp_workdir / "file.csv"
    f.write_bytes(b"")
    with pytest.raises(ProcessingError, match="Path is not a directory"):
        scan_csv_files(f)


def test_validate_files_aggregates_and_audits(temp_workdir: Path, valid_csv_file: Path, invalid_csv_file: Path):
    cfg = PortalConfig(source_directory="./data")
    audit = AuditLogBuffer(temp_workdir / "logs")
    seen: list[str] = []

    result = validate_files(
        [valid_csv_file, invalid_csv_file],
        cfg,
        audit_log=audit,
        on_result=lambda path, verdict: seen.append(path.name),
    )

    assert seen == ["good.csv", "bad.csv"]
    assert result.valid_files == 1
    assert result.invalid_files == 1
    assert result.total_rows == 4
    assert [s.status for s in result.file_stats] == ["valid", "invalid"]
    assert result.file_stats[1].error_count == 4

    lines = audit.file_path.read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]
    assert [r["action"] for r in records] == [ACTION_VALIDATED, ACTION_VALIDATION_FAILED]
    assert records[0]["details"]["filename"] == "good.csv"
    assert len(records[0]["details"]["sha256"]) == 64


def test_validate_files_size_cap(temp_workdir: Path):
    big = temp_workdir / "data" / "big.csv"
    big.write_bytes(b"x" * (1024 * 1024 + 1))
    cfg = PortalConfig(source_directory="./data", max_file_size_mb=1)
    result = validate_files([big], cfg)
    assert result.invalid_files == 1
    assert result.file_stats[0].verdict.errors == ["File size exceeds maximum of 1MB"]


def test_validate_files_unreadable_file(temp_workdir: Path):
    cfg = PortalConfig(source_directory="./data")
    with pytest.raises(ProcessingError, match="Error reading file"):
        validate_files([temp_workdir / "data" / "missing.csv"], cfg)


def test_validate_files_empty_list():
    result = validate_files([], PortalConfig(source_directory="./data"))
    assert result.total_files == 0
    assert result.file_stats == []
