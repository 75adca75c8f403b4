from __future__ import annotations

from collections.abc import Iterable

from ..models.finding import Finding
from ..models.validation_result import ValidationVerdict
from .business_date import BusinessDateProvider, make_business_date_provider, suggested_filename

"""Result assembly: findings -> ValidationVerdict.

Findings keep their insertion order. The suggested filename is only computed
when every check ran; a structural failure yields no filename and rowCount 0.
"""

__all__ = [
    "assemble",
]


def assemble(
    structural: list[Finding],
    row_findings: list[Finding],
    *,
    row_count: int = 0,
    notes: Iterable[Finding] = (),
    business_date: BusinessDateProvider | None = None,
) -> ValidationVerdict:
    """Combine document-level and row-level findings into a verdict.

    Args:
        structural: Findings of the structural checks (empty when the header passed)
        row_findings: Findings of the per-row checks
        row_count: Number of data rows examined
        notes: Decoder notes (e.g. BOM removal), reported before everything else
        business_date: Provider of the current business date (YYYY-MM-DD)
    """
    findings = [*notes, *structural, *row_findings]
    errors = [f.render() for f in findings if f.is_error]
    warnings = [f.render() for f in findings if not f.is_error]

    if structural:
        return ValidationVerdict(errors=errors, warnings=warnings, suggested_filename=None, row_count=0)

    provider = business_date or make_business_date_provider()
    return ValidationVerdict(
        errors=errors,
        warnings=warnings,
        suggested_filename=suggested_filename(provider()),
        row_count=row_count,
    )
