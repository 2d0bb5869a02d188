"""Fetching remote images"""
import logging
import httpx
from errors import FetchError

logger = logging.getLogger(__name__)


async def fetch_image_bytes(url: str, client: httpx.AsyncClient) -> bytes:
    """Download raw bytes from URL. Raises FetchError on non-2xx or transport error."""
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(f"Fetching {url} returned HTTP {e.response.status_code}")
        raise FetchError(f"Failed to fetch image from URL (HTTP {e.response.status_code}).") from e
    except httpx.HTTPError as e:
        logger.error(f"Error fetching image from {url}: {str(e)}")
        raise FetchError() from e

    logger.info(f"Fetched {len(response.content)} bytes from: {url}")
    return response.content
