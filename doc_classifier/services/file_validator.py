"""
File validation service for document uploads.

Provides security checks including:
- File size limits
- MIME type validation
- Filename sanitization
- Content hash calculation for deduplication
"""

import hashlib
import re
from pathlib import Path
from typing import FrozenSet, Optional, Tuple

import magic
from fastapi import HTTPException, UploadFile

from doc_classifier.config import get_settings

ALLOWED_MIME_TYPES: FrozenSet[str] = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
    "text/markdown",
    "text/x-markdown",
    "text/csv",
})

DEFAULT_FILENAME = "upload"


async def validate_upload(
    file: UploadFile,
    max_size_bytes: Optional[int] = None,
) -> Tuple[bytes, str, str, str]:
    """
    Validate an uploaded document and return content, hash, filename and MIME type.

    Args:
        file: FastAPI UploadFile instance from multipart/form-data
        max_size_bytes: Size limit; defaults to MAX_UPLOAD_SIZE_MB from settings

    Returns:
        Tuple of (file_content, sha256_hash, sanitized_filename, mime_type)

    Raises:
        HTTPException: 400 for validation errors, 413 for file too large
    """
    if max_size_bytes is None:
        max_size_bytes = get_settings().max_upload_size_mb * 1024 * 1024

    content = await file.read()

    if len(content) == 0:
        raise HTTPException(status_code=400, detail="File is empty")

    if len(content) > max_size_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size is {max_size_bytes // (1024 * 1024)}MB"
        )

    # Validate MIME type using python-magic
    mime_type = magic.from_buffer(content, mime=True)
    if mime_type not in ALLOWED_MIME_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type. Expected PDF, DOC, DOCX or text, got {mime_type}"
        )

    sanitized_filename = sanitize_filename(file.filename or DEFAULT_FILENAME)
    file_hash = hashlib.sha256(content).hexdigest()

    return content, file_hash, sanitized_filename, mime_type


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename to prevent path traversal attacks.

    Security:
        - Removes directory components and parent references (..)
        - Removes null bytes
        - Limits to alphanumeric, dash, underscore, dot
        - Caps length at 255 characters, keeping the extension
    """
    # Normalise Windows separators so Path().name strips those directories too
    filename = Path(filename.replace("\\", "/")).name

    filename = filename.replace("..", "").replace("\0", "")

    filename = re.sub(r'[^a-zA-Z0-9._-]', '_', filename)

    if not filename.strip("."):
        return DEFAULT_FILENAME

    if len(filename) > 255:
        stem, dot, suffix = filename.rpartition(".")
        if dot and stem and len(suffix) <= 10:
            filename = stem[:254 - len(suffix)] + "." + suffix
        else:
            filename = filename[:255]

    return filename
