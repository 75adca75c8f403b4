from __future__ import annotations

from dataclasses import dataclass

"""Config dataclass for the LMS CSV validator.

Populated by lms_csv.config.loader after schema validation and defaulting.
"""

__all__ = [
    "PortalConfig",
]


@dataclass(frozen=True)
class PortalConfig:
    """Root configuration object."""
    source_directory: str  # Directory scanned for *.csv files by the CLI
    business_timezone: str = "America/Bogota"  # Timezone used for the business date
    max_file_size_mb: int = 150  # Upload size cap
    max_displayed_errors: int = 20  # Errors shown per file before "... and N more"
    audit_log_directory: str = "./logs"  # Where audit-YYYYMMDD.log is appended

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024
