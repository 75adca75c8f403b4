from __future__ import annotations

from dataclasses import dataclass

"""Required column contract for LMS daily CSV uploads.

The contract is fixed configuration: it is never derived from an uploaded file.
Column names are compared case-sensitively and by position.
"""

__all__ = [
    "ColumnContract",
    "REQUIRED_COLUMNS",
    "LMS_CONTRACT",
]


REQUIRED_COLUMNS: tuple[str, ...] = (
    "appli_no",
    "Licence_Type",
    "trn",
    "FName",
    "MName",
    "LName",
    "file_status",
    "statusDate",
    "comments",
    "entdte",
    "status_num",
    "app_file_locn",
    "app_file_dept",
)


@dataclass(frozen=True)
class ColumnContract:
    """Ordered, immutable list of required column names."""
    columns: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.columns)

    def index(self, name: str) -> int:
        """Return the fixed offset of ``name``.

        Raises:
            KeyError: if the column is not part of the contract
        """
        try:
            return self.columns.index(name)
        except ValueError:
            raise KeyError(f"column not in contract: {name}") from None

    def mismatches(self, header: list[str]) -> list[tuple[int, str, str]]:
        """Positional comparison against ``header``.

        Returns (0-based position, expected, actual) for every differing column.
        The caller is expected to have checked the column count already.
        """
        return [
            (i, expected, actual)
            for i, (expected, actual) in enumerate(zip(self.columns, header, strict=False))
            if expected != actual
        ]


LMS_CONTRACT = ColumnContract(columns=REQUIRED_COLUMNS)
