from .audit_log import AuditLogBuffer
from .init import log_summary, reset_logging, setup_logging

__all__ = [
    "AuditLogBuffer",
    "log_summary",
    "reset_logging",
    "setup_logging",
]
