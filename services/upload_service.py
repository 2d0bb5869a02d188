"""Validation of multipart image uploads"""
import logging
from typing import Optional
from fastapi import UploadFile
from config import ALLOWED_MIME_TYPES, MAX_UPLOAD_SIZE
from errors import InvalidRequest, PayloadTooLarge, UnsupportedMediaType

logger = logging.getLogger(__name__)


async def read_image_upload(file: Optional[UploadFile], field_name: str) -> bytes:
    """Return the upload's bytes after checking presence, mime type and size"""
    if file is None or not file.filename:
        raise InvalidRequest(f"{field_name} must be uploaded.")

    if file.content_type not in ALLOWED_MIME_TYPES:
        logger.warning(f"Rejected {field_name} with content type {file.content_type}")
        raise UnsupportedMediaType()

    # One byte past the limit is enough to detect an oversize file
    data = await file.read(MAX_UPLOAD_SIZE + 1)
    if len(data) > MAX_UPLOAD_SIZE:
        logger.warning(f"Rejected {field_name}: larger than {MAX_UPLOAD_SIZE} bytes")
        raise PayloadTooLarge()
    if not data:
        raise InvalidRequest(f"{field_name} is empty.")

    return data
