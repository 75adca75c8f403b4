from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from ..models.column_contract import LMS_CONTRACT, ColumnContract
from ..models.finding import Finding
from ..models.row_view import RowView

"""Schema & row validation for LMS daily CSV files.

Document-level (structural) checks run first and stop at the first failing
check. When the header is sound every data row is validated independently and
all findings are collected, so the caller sees the complete defect list in one
pass.

Row numbers are 1-based and counted from the header (header = row 1).
"""

__all__ = [
    "DateGrammar",
    "DATE_GRAMMARS",
    "ValidationOutcome",
    "validate_date_field",
    "validate_tax_ref",
    "validate_status_number",
    "validate_header",
    "validate_row",
    "validate_rows",
    "validate",
]

logger = logging.getLogger(__name__)

TAX_REF_LENGTH = 9
NULL_TOKEN = "NULL"

# ASCII digits only; str.isdigit() would accept other scripts
_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class DateGrammar:
    """One accepted date notation.

    A deprecated grammar still validates but yields a warning.
    """
    name: str
    pattern: re.Pattern[str]
    deprecated: bool = False

    def match(self, value: str) -> tuple[str, str] | None:
        m = self.pattern.fullmatch(value)
        if m is None:
            return None
        return m.group("month"), m.group("day")


# Tried in order. Day range is 1-31 regardless of month (2024-02-31 passes).
DATE_GRAMMARS: tuple[DateGrammar, ...] = (
    DateGrammar(
        name="iso",
        pattern=re.compile(
            r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
            r"(?:\s+[0-9]{2}:[0-9]{2}:[0-9]{2}(?:\.[0-9]{3})?)?"
        ),
    ),
    DateGrammar(
        name="legacy",
        pattern=re.compile(r"(?P<month>[0-9]{1,2})/(?P<day>[0-9]{1,2})/(?P<year>[0-9]{4})"),
        deprecated=True,
    ),
)


@dataclass
class ValidationOutcome:
    """Findings of one validate() call.

    ``completed`` is False when a structural check stopped validation early.
    """
    structural: list[Finding] = field(default_factory=list)
    row_findings: list[Finding] = field(default_factory=list)
    row_count: int = 0

    @property
    def completed(self) -> bool:
        return not self.structural

    @property
    def errors(self) -> list[Finding]:
        return [f for f in (*self.structural, *self.row_findings) if f.is_error]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in (*self.structural, *self.row_findings) if not f.is_error]


def _blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def validate_date_field(value: str | None, field_name: str, row_number: int) -> Finding | None:
    """Validate an optional date field.

    Empty values and the literal NULL (any case) are accepted. Otherwise the
    value must match one of DATE_GRAMMARS with month 1-12 and day 1-31.
    """
    if _blank(value) or value.strip().upper() == NULL_TOKEN:
        return None

    trimmed = value.strip()
    for grammar in DATE_GRAMMARS:
        parts = grammar.match(trimmed)
        if parts is None:
            continue
        month, day = parts
        if not 1 <= int(month) <= 12:
            return Finding.error(f"{field_name} has invalid month: {month}", row_number)
        if not 1 <= int(day) <= 31:
            return Finding.error(f"{field_name} has invalid day: {day}", row_number)
        if grammar.deprecated:
            return Finding.warning(
                f"{field_name} uses deprecated date format (M/D/YYYY). "
                "Please use ISO 8601 format (YYYY-MM-DD)",
                row_number,
            )
        return None

    return Finding.error(
        f'{field_name} has invalid date format: "{trimmed}". Use YYYY-MM-DD format', row_number
    )


def validate_tax_ref(value: str | None, row_number: int) -> Finding | None:
    """trn: required, numeric, exactly 9 digits."""
    if _blank(value):
        return Finding.error("trn is required", row_number)
    trimmed = value.strip()
    if not _DIGITS.fullmatch(trimmed):
        return Finding.error(f'trn must be numeric, got: "{trimmed}"', row_number)
    if len(trimmed) != TAX_REF_LENGTH:
        return Finding.error(f"trn must be {TAX_REF_LENGTH} digits, got {len(trimmed)} digits", row_number)
    return None


def validate_status_number(value: str | None, row_number: int) -> Finding | None:
    """status_num: optional integer."""
    if _blank(value):
        return None
    trimmed = value.strip()
    if not _DIGITS.fullmatch(trimmed):
        return Finding.error(f'status_num must be an integer, got: "{trimmed}"', row_number)
    return None


def _check_identifier(row: RowView) -> Finding | None:
    if _blank(row.identifier()):
        return Finding.error("appli_no is required", row.row_number)
    return None


def _check_tax_ref(row: RowView) -> Finding | None:
    return validate_tax_ref(row.tax_ref(), row.row_number)


def _check_department(row: RowView) -> Finding | None:
    if _blank(row.department_code()):
        return Finding.error("app_file_dept is required", row.row_number)
    return None


def _check_status_date(row: RowView) -> Finding | None:
    return validate_date_field(row.status_date(), "statusDate", row.row_number)


def _check_entry_date(row: RowView) -> Finding | None:
    return validate_date_field(row.entry_date(), "entdte", row.row_number)


def _check_status_number(row: RowView) -> Finding | None:
    return validate_status_number(row.status_number(), row.row_number)


# Findings of one row are reported in this order
ROW_RULES: tuple[Callable[[RowView], Finding | None], ...] = (
    _check_identifier,
    _check_tax_ref,
    _check_department,
    _check_status_date,
    _check_entry_date,
    _check_status_number,
)


def validate_header(rows: list[list[str]], contract: ColumnContract = LMS_CONTRACT) -> list[Finding]:
    """Run the structural checks. Returns the findings of the first failing check.

    Order: empty document, column count, duplicate names, column names,
    missing data rows.
    """
    if not rows:
        return [Finding.error("File contains no data rows")]

    header = rows[0]
    if len(header) != len(contract):
        return [Finding.error(f"Header row has {len(header)} columns, expected {len(contract)} columns")]

    seen: set[str] = set()
    for name in header:
        if name in seen:
            return [Finding.error(f'Duplicate column name: "{name}"')]
        seen.add(name)

    mismatches = contract.mismatches(header)
    if mismatches:
        return [
            Finding.error("Column header mismatch:"),
            *(
                Finding.error(f'Column {i + 1}: expected "{expected}", got "{actual}"')
                for i, expected, actual in mismatches
            ),
        ]

    if len(rows) == 1:
        return [Finding.error("File contains header but no data rows")]

    return []


def validate_row(row: RowView, expected_columns: int) -> list[Finding]:
    """Validate one data row. A column count mismatch skips the field rules."""
    if len(row) != expected_columns:
        return [Finding.error(f"has {len(row)} columns, expected {expected_columns}", row.row_number)]
    findings: list[Finding] = []
    for rule in ROW_RULES:
        finding = rule(row)
        if finding is not None:
            findings.append(finding)
    return findings


def validate_rows(
    data_rows: list[list[str]], expected_columns: int, contract: ColumnContract = LMS_CONTRACT
) -> list[Finding]:
    findings: list[Finding] = []
    for offset, fields in enumerate(data_rows):
        # +2: header is row 1
        view = RowView(row_number=offset + 2, fields=tuple(fields), contract=contract)
        findings.extend(validate_row(view, expected_columns))
    return findings


def validate(rows: list[list[str]], contract: ColumnContract = LMS_CONTRACT) -> ValidationOutcome:
    """Validate a parsed document (row 0 = header)."""
    structural = validate_header(rows, contract)
    if structural:
        logger.debug(f"structural failure: {structural[0].render()}")
        return ValidationOutcome(structural=structural)

    header, data_rows = rows[0], rows[1:]
    row_findings = validate_rows(data_rows, len(header), contract)
    logger.debug(f"validated rows={len(data_rows)} findings={len(row_findings)}")
    return ValidationOutcome(row_findings=row_findings, row_count=len(data_rows))
