# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from lms_csv.models.column_contract import REQUIRED_COLUMNS

HEADER_LINE = ",".join(REQUIRED_COLUMNS)


def make_row(
    appli_no: str = "A1001",
    licence_type: str = "DL",
    trn: str = "123456789",
    fname: str = "Jane",
    mname: str = "Q",
    lname: str = "Doe",
    file_status: str = "OPEN",
    status_date: str = "2024-03-05",
    comments: str = "none",
    entdte: str = "2024-03-01",
    status_num: str = "3",
    app_file_locn: str = "KGN",
    app_file_dept: str = "LIC",
) -> str:
    """One CSV data line that satisfies every field rule unless overridden."""
    return ",".join(
        [
            appli_no, licence_type, trn, fname, mname, lname, file_status,
            status_date, comments, entdte, status_num, app_file_locn, app_file_dept,
        ]
    )


def make_csv(*rows: str, header: str = HEADER_LINE, newline: str = "\n") -> bytes:
    return newline.join([header, *rows]).encode("utf-8")


def fixed_business_date() -> str:
    return "2024-03-05"


@pytest.fixture()
def csv_row():
    return make_row


@pytest.fixture()
def csv_bytes():
    return make_csv


@pytest.fixture()
def business_date():
    return fixed_business_date


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("LMS_CSV_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
business_timezone: America/Bogota
max_file_size_mb: 150
max_displayed_errors: 2
audit_log_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "portal.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def valid_csv_file(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "good.csv"
    f.write_bytes(make_csv(make_row(), make_row(appli_no="A1002")))
    return f


@pytest.fixture()
def invalid_csv_file(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "bad.csv"
    f.write_bytes(
        make_csv(
            make_row(trn="12345"),
            make_row(appli_no="", status_date="2024-13-01", status_num="x"),
        )
    )
    return f
