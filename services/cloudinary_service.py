"""Cloudinary upload service"""
import asyncio
import logging
from io import BytesIO
import cloudinary
import cloudinary.uploader
from errors import StorageError

logger = logging.getLogger(__name__)


def _upload(data: bytes, folder: str, public_id: str) -> dict:
    return cloudinary.uploader.upload(
        BytesIO(data),
        folder=folder,
        public_id=public_id,
        resource_type="image",
        overwrite=True,
        format="jpg"
    )


async def upload_to_cloudinary(data: bytes, folder: str, public_id: str) -> str:
    """Upload image bytes to Cloudinary and return secure URL.

    Stored images are normalized to JPEG. An existing asset with the same
    folder/public_id is overwritten, so callers pass a fresh uuid per upload.
    """
    logger.info(f"Uploading to Cloudinary: {folder}/{public_id}")
    try:
        # The Cloudinary SDK is blocking; keep the event loop free
        response = await asyncio.to_thread(_upload, data, folder, public_id)
        secure_url = response["secure_url"]
    except Exception as e:
        logger.error(f"Error uploading to Cloudinary: {str(e)}")
        raise StorageError() from e

    logger.info(f"Uploaded to Cloudinary: {secure_url}")
    return secure_url
