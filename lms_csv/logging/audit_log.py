from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from lms_csv.models.audit_record import AuditRecord

"""Append-only audit log.

- JSON Lines, fixed key set per AuditRecord
- One file per UTC day: `audit-YYYYMMDD.log`
- Records are buffered and appended on flush(); existing lines are never rewritten
"""

__all__ = [
    "AuditRecord",
    "AuditLogBuffer",
]

DEFAULT_LOGS_DIR = Path("./logs")
DATE_FMT = "%Y%m%d"


class AuditLogBuffer:
    """In-memory buffer for audit records. Flush appends JSON Lines.

    Not thread-safe; the CLI runs serially.
    """
    def __init__(self, directory: Path | str | None = None) -> None:
        self._directory = Path(directory) if directory is not None else DEFAULT_LOGS_DIR
        self._records: list[AuditRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._directory.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(DATE_FMT)
            self._file_path = self._directory / f"audit-{stamp}.log"
        return self._file_path

    def append(self, record: AuditRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path:
        if not self._records:
            return self.file_path
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
