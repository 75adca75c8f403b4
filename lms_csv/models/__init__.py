"""Domain models for the LMS daily CSV upload validator.

This package contains the model classes shared by the parser, the validator,
the audit log and the CLI.
"""

from .audit_record import AuditRecord
from .column_contract import LMS_CONTRACT, REQUIRED_COLUMNS, ColumnContract
from .config_models import PortalConfig
from .finding import Finding, Severity
from .row_view import RowView
from .validation_result import BatchResult, FileStat, ValidationVerdict

__all__ = [
    # Configuration models
    "PortalConfig",
    # Contract
    "ColumnContract",
    "LMS_CONTRACT",
    "REQUIRED_COLUMNS",
    # Validation models
    "Finding",
    "Severity",
    "RowView",
    "ValidationVerdict",
    "FileStat",
    "BatchResult",
    # Audit
    "AuditRecord",
]
