from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Finding model: one tagged validation outcome.

Each rule produces a Finding with its severity already set, so errors and
warnings are separated by tag rather than by inspecting message text.
"""

__all__ = [
    "Severity",
    "Finding",
]


class Severity(Enum):
    """Finding severity.

    - ERROR: blocks acceptance of the file
    - WARNING: reported to the user, never affects validity
    """
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Finding:
    """A single validation message.

    Attributes:
        severity: ERROR or WARNING
        message: Human readable text without the row prefix
        row: 1-based row number counted from the header (header = 1).
            None for document-level findings.
    """
    severity: Severity
    message: str
    row: int | None = None

    @staticmethod
    def error(message: str, row: int | None = None) -> Finding:
        return Finding(Severity.ERROR, message, row)

    @staticmethod
    def warning(message: str, row: int | None = None) -> Finding:
        return Finding(Severity.WARNING, message, row)

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def render(self) -> str:
        """Render the user-facing text (``Row N: ...`` when row-scoped)."""
        if self.row is None:
            return self.message
        return f"Row {self.row}: {self.message}"

    def __str__(self) -> str:
        return self.render()
