"""Upload helpers: bounded reads and text extraction."""

from __future__ import annotations

from pathlib import Path

from fastapi import UploadFile

from ....tools.resume_reader import SUPPORTED_FORMATS, UnsupportedFormatError, extract_text
from ...errors import APIError


async def read_upload_with_limit(file: UploadFile, max_bytes: int) -> bytes:
    """Read an upload stream with hard byte limit.

    This prevents loading arbitrarily large payloads into memory before validation.
    """
    chunks: list[bytes] = []
    total = 0
    chunk_size = 64 * 1024

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise APIError(
                422,
                "UPLOAD_TOO_LARGE",
                "Uploaded file exceeds size limit",
                {"filename": file.filename, "max_upload_bytes": max_bytes},
            )
        chunks.append(chunk)

    return b"".join(chunks)


async def upload_to_text(file: UploadFile, max_bytes: int) -> str:
    """Extract plain text from an uploaded resume."""
    suffix = Path(file.filename or "").suffix.lower()
    if suffix not in SUPPORTED_FORMATS:
        raise APIError(
            415,
            "UNSUPPORTED_FORMAT",
            f"Unsupported file format: {suffix or '(none)'}",
            {"filename": file.filename, "supported": list(SUPPORTED_FORMATS)},
        )

    data = await read_upload_with_limit(file, max_bytes)
    try:
        text, _ = extract_text(data, suffix)
    except UnsupportedFormatError as e:
        raise APIError(415, "UNSUPPORTED_FORMAT", str(e), {"filename": file.filename}) from e
    except Exception as e:
        raise APIError(422, "EXTRACTION_FAILED", "Could not extract text from upload", {"filename": file.filename}) from e

    if not text.strip():
        raise APIError(422, "EXTRACTION_FAILED", "Uploaded file contains no text", {"filename": file.filename})
    return text
