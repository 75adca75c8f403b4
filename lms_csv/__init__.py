"""LMS daily CSV upload validator."""

from .services.orchestrator import validate_csv
from .services.upload_request import (
    RequestValidationError,
    decode_file_content,
    handle_validate_request,
    validate_completion_request,
    validate_upload_request,
)

__all__ = [
    "validate_csv",
    "RequestValidationError",
    "decode_file_content",
    "handle_validate_request",
    "validate_completion_request",
    "validate_upload_request",
]

__version__ = "0.1.0"
