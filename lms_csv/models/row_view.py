from __future__ import annotations

from dataclasses import dataclass

from .column_contract import LMS_CONTRACT, ColumnContract

"""RowView model: named access to one parsed CSV data row.

Field offsets are resolved once from the column contract, so the validator
never indexes rows with bare integers.
"""

__all__ = [
    "RowView",
]


@dataclass(frozen=True)
class RowView:
    """Logical representation of a single data row.

    The row_number is 1-based and counted from the header row
    (header = 1, first data row = 2).
    """
    row_number: int
    fields: tuple[str, ...]
    contract: ColumnContract = LMS_CONTRACT

    def __len__(self) -> int:
        return len(self.fields)

    def _get(self, column: str) -> str:
        return self.fields[self.contract.index(column)]

    def identifier(self) -> str:
        return self._get("appli_no")

    def tax_ref(self) -> str:
        return self._get("trn")

    def department_code(self) -> str:
        return self._get("app_file_dept")

    def status_date(self) -> str:
        return self._get("statusDate")

    def entry_date(self) -> str:
        return self._get("entdte")

    def status_number(self) -> str:
        return self._get("status_num")
