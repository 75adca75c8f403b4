from __future__ import annotations

import base64
import binascii
import re
from collections.abc import Mapping
from typing import Any

from .business_date import BusinessDateProvider
from .orchestrator import validate_csv

"""Upload request validation.

Framework-independent checks for the bodies of the upload endpoints:
- upload metadata (name, size, MIME type, extension) before a write URL is issued
- completion notifications (upload id, etag, optional SHA-256)
- the validate request, which carries the file as base64 / data URL

Failures raise RequestValidationError; the web layer maps it to HTTP 400.
"""

__all__ = [
    "RequestValidationError",
    "ALLOWED_MIME_TYPES",
    "ALLOWED_EXTENSIONS",
    "DEFAULT_MAX_FILE_SIZE_BYTES",
    "validate_upload_request",
    "validate_completion_request",
    "decode_file_content",
    "handle_validate_request",
]

ALLOWED_MIME_TYPES = ("text/csv", "application/vnd.ms-excel")
ALLOWED_EXTENSIONS = (".csv",)
DEFAULT_MAX_FILE_SIZE_BYTES = 150 * 1024 * 1024

_SHA256_HEX = re.compile(r"[a-fA-F0-9]{64}")
_MB = 1024 * 1024


class RequestValidationError(Exception):
    """Invalid request body. Maps to HTTP 400 / VALIDATION_ERROR."""

    code = "VALIDATION_ERROR"
    status_code = 400

    def to_dict(self) -> dict[str, Any]:
        return {"error": {"code": self.code, "message": str(self)}}


def _require_mapping(body: Any) -> Mapping[str, Any]:
    if not isinstance(body, Mapping):
        raise RequestValidationError("Invalid request body")
    return body


def _check_size(size_bytes: int | float, max_file_size_bytes: int) -> None:
    if size_bytes > max_file_size_bytes:
        max_mb = round(max_file_size_bytes / _MB)
        file_mb = round(size_bytes / _MB)
        raise RequestValidationError(f"File size ({file_mb}MB) exceeds maximum of {max_mb}MB")


def validate_upload_request(
    body: Any, max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES
) -> dict[str, Any]:
    """Validate the metadata sent before requesting a delegated write URL.

    Returns:
        dict with originalName, sizeBytes and mimeType
    """
    body = _require_mapping(body)
    original_name = body.get("originalName")
    size_bytes = body.get("sizeBytes")
    mime_type = body.get("mimeType")

    if not original_name or not isinstance(original_name, str):
        raise RequestValidationError("originalName is required")

    if isinstance(size_bytes, bool) or not isinstance(size_bytes, int | float) or size_bytes <= 0:
        raise RequestValidationError("sizeBytes must be a positive number")

    _check_size(size_bytes, max_file_size_bytes)

    if not mime_type or not isinstance(mime_type, str):
        raise RequestValidationError("mimeType is required")

    if mime_type not in ALLOWED_MIME_TYPES:
        raise RequestValidationError(
            f"MIME type {mime_type} is not allowed. Allowed types: {', '.join(ALLOWED_MIME_TYPES)}"
        )

    lowered = original_name.lower()
    ext = lowered[lowered.rfind("."):] if "." in lowered else lowered
    if ext not in ALLOWED_EXTENSIONS:
        raise RequestValidationError(f"File extension {ext} is not allowed. Only .csv files are accepted")

    return {"originalName": original_name, "sizeBytes": size_bytes, "mimeType": mime_type}


def validate_completion_request(body: Any) -> dict[str, Any]:
    """Validate the notification sent after a direct-to-storage upload."""
    body = _require_mapping(body)
    upload_id = body.get("uploadId")
    etag = body.get("etag")
    sha256 = body.get("sha256")

    if not upload_id or not isinstance(upload_id, str):
        raise RequestValidationError("uploadId is required")

    if not etag or not isinstance(etag, str):
        raise RequestValidationError("etag is required")

    if sha256 and (not isinstance(sha256, str) or not _SHA256_HEX.fullmatch(sha256)):
        raise RequestValidationError("sha256 must be a valid 64-character hex string")

    return {"uploadId": upload_id, "etag": etag, "sha256": sha256 or None}


def decode_file_content(file_content: str) -> bytes:
    """Decode base64 file content, with or without a data URL prefix.

    ``data:text/csv;base64,QUJD`` and ``QUJD`` both decode to ``b"ABC"``.
    Missing ``=`` padding is restored before decoding.
    """
    payload = file_content.split(",", 1)[1] if "," in file_content else file_content
    payload = "".join(payload.split())
    # padding is optional on input
    payload += "=" * (-len(payload) % 4)
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise RequestValidationError("Invalid file content encoding") from e


def handle_validate_request(
    body: Any,
    *,
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
    business_date: BusinessDateProvider | None = None,
) -> dict[str, Any]:
    """Process a validate request body and return the response body.

    The response has the shape
    ``{valid, errors, warnings, suggestedFilename, rowCount}``.
    """
    body = _require_mapping(body)
    file_content = body.get("fileContent")
    filename = body.get("filename")

    if not file_content or not isinstance(file_content, str):
        raise RequestValidationError("fileContent is required")

    if not filename or not isinstance(filename, str):
        raise RequestValidationError("filename is required")

    content = decode_file_content(file_content)
    _check_size(len(content), max_file_size_bytes)

    return validate_csv(content, filename, business_date=business_date).to_dict()
