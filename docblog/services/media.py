import base64
import binascii
import logging
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from docblog.core.config import get_settings
from docblog.core.errors import UnsupportedMediaError

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
READ_CHUNK_BYTES = 256 * 1024


@dataclass(frozen=True, slots=True)
class ImageRecord:
    data: bytes
    content_type: str
    filename: str

    def to_wire(self) -> dict[str, str]:
        return {
            "data": base64.b64encode(self.data).decode("ascii"),
            "contentType": self.content_type,
            "filename": self.filename,
        }

    def to_data_uri(self) -> str:
        return f"data:{self.content_type};base64,{base64.b64encode(self.data).decode('ascii')}"


def image_from_wire(payload: dict) -> ImageRecord:
    """Inverse of ``ImageRecord.to_wire``."""
    try:
        data = base64.b64decode(payload["data"], validate=True)
        return ImageRecord(data=data, content_type=payload["contentType"], filename=payload["filename"])
    except (KeyError, TypeError, binascii.Error) as exc:
        raise UnsupportedMediaError("Malformed image payload") from exc


def check_image_metadata(content_type: str | None, filename: str | None) -> None:
    ext = Path(filename or "").suffix.lower()
    if (content_type or "").lower() not in ALLOWED_CONTENT_TYPES or ext not in ALLOWED_EXTENSIONS:
        logger.info("image_rejected", extra={"content_type": content_type, "upload_filename": filename})
        raise UnsupportedMediaError()


async def normalize_upload(file: UploadFile | None) -> ImageRecord | None:
    """Validate an uploaded image and hold it in memory.

    Returns None when no file was sent, including the empty part browsers
    submit for a file input left blank. The content type and the filename
    extension are checked separately so a spoofed header alone cannot pass.
    """
    if file is None:
        return None
    if not file.filename:
        await file.close()
        return None

    try:
        check_image_metadata(file.content_type, file.filename)

        max_bytes = get_settings().max_image_size_bytes
        chunks: list[bytes] = []
        total = 0
        while True:
            chunk = await file.read(READ_CHUNK_BYTES)
            if not chunk:
                break
            total += len(chunk)
            if total > max_bytes:
                raise UnsupportedMediaError(f"Image exceeds the {max_bytes} byte limit")
            chunks.append(chunk)
    finally:
        await file.close()

    if total == 0:
        raise UnsupportedMediaError("Uploaded image is empty")
    return ImageRecord(data=b"".join(chunks), content_type=file.content_type, filename=file.filename)
