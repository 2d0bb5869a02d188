"""Mockup generation by compositing the result image onto product templates"""
import asyncio
import logging
import uuid
from typing import Any, List, Optional
import httpx
from pydantic import ValidationError
from catalog import PLACEMENTS
from config import MAX_CONCURRENT_PRODUCTS
from errors import InvalidRequest, MockupError
from schemas import MockupResult, ProductRequest
from services.cloudinary_service import upload_to_cloudinary
from services.compositor_service import composite
from services.image_service import fetch_image_bytes

logger = logging.getLogger(__name__)

MOCKUP_FOLDER = "mockups"


def validate_mockup_request(result_image_url: Optional[str], products: Optional[List[Any]]) -> None:
    if not result_image_url or not isinstance(products, list) or not products:
        raise InvalidRequest("resultImageUrl and products array must be provided.")


def parse_product(entry: Any) -> Optional[ProductRequest]:
    """Validate one products entry; a malformed entry is logged and skipped"""
    try:
        return ProductRequest.model_validate(entry)
    except ValidationError as e:
        logger.warning(f"Skipping malformed product entry {entry!r}: {e.error_count()} validation error(s)")
        return None


async def _composite_product(product: ProductRequest, result_bytes: bytes, client: httpx.AsyncClient) -> Optional[MockupResult]:
    placement = PLACEMENTS.get(product.name)
    if placement is None:
        logger.warning(f"No placement defined for product {product.name}")
        return None
    if not product.base_image_url:
        logger.warning(f"No baseImageUrl given for product {product.name}")
        return None

    base_bytes = await fetch_image_bytes(product.base_image_url, client)
    # Pillow work is CPU bound
    mockup_bytes = await asyncio.to_thread(composite, base_bytes, result_bytes, placement)
    mockup_url = await upload_to_cloudinary(mockup_bytes, MOCKUP_FOLDER, str(uuid.uuid4()))

    return MockupResult(product_id=product.product_id, product_name=product.name, mockup_image_url=mockup_url)


async def _isolated(product: ProductRequest, work, semaphore: asyncio.Semaphore) -> Optional[MockupResult]:
    """Run one product's pipeline; any failure skips this product only"""
    async with semaphore:
        try:
            return await work
        except MockupError as e:
            logger.warning(f"Skipping product {product.name} ({product.product_id}): {e.message}")
        except Exception:
            logger.exception(f"Unexpected error generating mockup for product {product.name} ({product.product_id})")
    return None


async def gather_mockups(products: List[Any], build, max_concurrency: int = None) -> List[MockupResult]:
    """Run `build(product)` for every product concurrently and keep the successes.

    Shared by the local and Printful variants. Order of the returned list is
    not guaranteed to follow `products`.
    """
    semaphore = asyncio.Semaphore(max(1, max_concurrency or MAX_CONCURRENT_PRODUCTS))
    parsed = [product for product in map(parse_product, products) if product is not None]
    results = await asyncio.gather(
        *(_isolated(product, build(product), semaphore) for product in parsed)
    )
    mockups = [result for result in results if result is not None]
    logger.info(f"Generated {len(mockups)} of {len(products)} mockups")
    return mockups


async def generate_mockups(
    result_image_url: Optional[str],
    products: Optional[List[Any]],
    client: httpx.AsyncClient,
    max_concurrency: int = None,
) -> List[MockupResult]:
    """Composite the result image onto each product's template and upload the mockups"""
    validate_mockup_request(result_image_url, products)

    # Fetched once; every product composites the same image
    logger.info(f"Downloading result image from: {result_image_url}")
    result_bytes = await fetch_image_bytes(result_image_url, client)

    return await gather_mockups(
        products,
        lambda product: _composite_product(product, result_bytes, client),
        max_concurrency,
    )
