from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any

"""AuditRecord model for the append-only audit log.

Client IP addresses are never stored in clear text: only their SHA-256 digest
is recorded. The serialized key set is fixed (no extra keys).
"""

__all__ = [
    "AuditRecord",
    "hash_ip",
    "compute_sha256",
    "USER_AGENT_MAX_LENGTH",
]

USER_AGENT_MAX_LENGTH = 500


def hash_ip(ip: str | None) -> str:
    """Hash an IP address for audit logging. Returns 'unknown' when absent."""
    if not ip:
        return "unknown"
    return hashlib.sha256(ip.encode("utf-8")).hexdigest()


def compute_sha256(content: bytes) -> str:
    """Hex SHA-256 digest of file content."""
    return hashlib.sha256(content).hexdigest()


@dataclass(frozen=True)
class AuditRecord:
    """Structured audit record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        action: Action name in UPPER_SNAKE_CASE (e.g. CSV_VALIDATED)
        upload_session_id: Related upload session, if any
        ip_hash: SHA-256 of the client IP, or 'unknown'
        user_agent: Client user agent truncated to 500 characters
        details: Free-form JSON-serializable details
    """
    timestamp: str
    action: str
    upload_session_id: str | None
    ip_hash: str
    user_agent: str | None
    details: dict[str, Any] | None

    @staticmethod
    def create(
        action: str,
        *,
        upload_session_id: str | None = None,
        ip: str | None = None,
        user_agent: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> AuditRecord:
        """Create a new AuditRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return AuditRecord(
            timestamp=ts,
            action=action,
            upload_session_id=upload_session_id,
            ip_hash=hash_ip(ip),
            user_agent=user_agent[:USER_AGENT_MAX_LENGTH] if user_agent else None,
            # round-trip so later mutation of the caller's dict is not recorded
            details=json.loads(json.dumps(details)) if details else None,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
