"""Local storage for uploaded resume files."""

import logging
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from careertrack.config import get_settings
from careertrack.errors import validation_error

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {
    "application/pdf": ".pdf",
    "application/msword": ".doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
}

READ_CHUNK_SIZE = 64 * 1024


def ensure_upload_dir() -> Path:
    upload_dir = Path(get_settings().upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def _stored_name(mime_type: str) -> str:
    ext = ALLOWED_MIME_TYPES[mime_type]
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9):09d}{ext}"


async def read_upload(upload: UploadFile) -> bytes:
    """Read an upload fully, enforcing type and size limits."""
    max_bytes = get_settings().max_upload_bytes
    if upload.content_type not in ALLOWED_MIME_TYPES:
        raise validation_error("Only PDF, DOC, and DOCX files are allowed.")

    chunks = []
    total = 0
    while chunk := await upload.read(READ_CHUNK_SIZE):
        total += len(chunk)
        if total > max_bytes:
            raise validation_error(f"File size must be less than {max_bytes // (1024 * 1024)}MB.")
        chunks.append(chunk)

    if total == 0:
        raise validation_error("Uploaded file is empty.")
    return b"".join(chunks)


def save_file(content: bytes, mime_type: str) -> tuple[str, Path]:
    """Write the bytes under the upload dir; returns (stored name, path)."""
    filename = _stored_name(mime_type)
    path = ensure_upload_dir() / filename
    path.write_bytes(content)
    logger.info("Stored upload %s (%d bytes)", filename, len(content))
    return filename, path


def delete_file(file_path: str) -> None:
    path = Path(file_path)
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("Stored file already missing: %s", file_path)
