"""Printful mockup generator client.

Rendering is delegated to Printful: one task is created per product, then its
status is polled at a fixed interval until it succeeds, fails or runs out of
attempts. `RenderTask` keeps the polling state so the attempt and timeout
rules can be exercised without any HTTP.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional
import httpx
import config
from catalog import PROVIDER_VARIANTS, ProviderVariant
from errors import ProviderTaskError, ProviderTaskTimeout
from schemas import MockupResult, ProductRequest
from services.mockup_service import gather_mockups, validate_mockup_request

logger = logging.getLogger(__name__)


class TaskState(str, Enum):
    SUBMITTED = "submitted"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


TERMINAL_STATES = (TaskState.SUCCEEDED, TaskState.FAILED, TaskState.TIMED_OUT)


@dataclass
class RenderTask:
    task_id: str
    max_attempts: int
    state: TaskState = TaskState.SUBMITTED
    attempts: int = 0
    result_url: Optional[str] = None

    @property
    def done(self) -> bool:
        return self.state in TERMINAL_STATES

    def record(self, status: str, result_url: Optional[str] = None) -> TaskState:
        """Apply one status check reported by the provider"""
        if self.done:
            raise RuntimeError(f"Task {self.task_id} already finished as {self.state.value}")

        self.attempts += 1
        if status == "success" and result_url:
            self.state = TaskState.SUCCEEDED
            self.result_url = result_url
        elif status in ("success", "error"):
            # a success without a result url is unusable
            self.state = TaskState.FAILED
        elif self.attempts >= self.max_attempts:
            self.state = TaskState.TIMED_OUT
        else:
            self.state = TaskState.POLLING
        return self.state


def check_printful_config() -> bool:
    """Warn when Printful mode is selected without an API key"""
    if config.MOCKUP_PROVIDER == "printful" and not config.PRINTFUL_API_KEY:
        logger.warning("PRINTFUL_API_KEY not configured. Printful requests will be sent unauthenticated.")
        return False
    return True


class PrintfulClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str = None,
        base_url: str = None,
        poll_interval: float = None,
        max_attempts: int = None,
        sleep=asyncio.sleep,
    ):
        self.client = client
        self.api_key = api_key if api_key is not None else config.PRINTFUL_API_KEY
        self.base_url = (base_url or config.PRINTFUL_API_URL).rstrip("/")
        self.poll_interval = poll_interval if poll_interval is not None else config.POLL_INTERVAL
        self.max_attempts = max_attempts if max_attempts is not None else config.MAX_POLL_ATTEMPTS
        self._sleep = sleep

    @property
    def headers(self) -> dict:
        if not self.api_key:
            return {}
        return {"Authorization": f"Bearer {self.api_key}"}

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            response = await self.client.request(method, f"{self.base_url}{path}", headers=self.headers, **kwargs)
            response.raise_for_status()
            return response.json()["result"]["task"]
        except httpx.HTTPStatusError as e:
            logger.error(f"Printful {method} {path} returned {e.response.status_code} - {e.response.text}")
            raise ProviderTaskError(f"Printful API error (HTTP {e.response.status_code}).") from e
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Printful {method} {path} failed: {str(e)}")
            raise ProviderTaskError() from e

    async def create_task(self, variant: ProviderVariant, image_url: str) -> RenderTask:
        payload = {
            "variant_id": variant.variant_id,
            "format": "png",
            "image_url": image_url,
            "position": variant.position(),
        }
        task = await self._request("POST", "/mockup-generator/create-task", json=payload)
        logger.info(f"Created Printful task {task['id']} for variant {variant.variant_id}")
        return RenderTask(task_id=str(task["id"]), max_attempts=self.max_attempts)

    async def wait_for(self, task: RenderTask) -> str:
        """Poll until the task is finished and return its result url"""
        while not task.done:
            await self._sleep(self.poll_interval)
            status = await self._request("GET", f"/mockup-generator/task/{task.task_id}")
            task.record(status.get("status"), status.get("result_url"))

        if task.state is TaskState.FAILED:
            raise ProviderTaskError(f"Printful task {task.task_id} failed")
        if task.state is TaskState.TIMED_OUT:
            raise ProviderTaskTimeout(f"Printful task {task.task_id} timed out after {task.attempts} checks")
        return task.result_url

    async def render(self, variant: ProviderVariant, image_url: str) -> str:
        task = await self.create_task(variant, image_url)
        return await self.wait_for(task)


async def _render_product(product: ProductRequest, result_image_url: str, printful: PrintfulClient) -> Optional[MockupResult]:
    variant = PROVIDER_VARIANTS.get(product.name)
    if variant is None:
        logger.warning(f"No Printful variant mapping defined for product {product.name}")
        return None

    mockup_url = await printful.render(variant, result_image_url)
    return MockupResult(product_id=product.product_id, product_name=product.name, mockup_image_url=mockup_url)


async def generate_printful_mockups(
    result_image_url: Optional[str],
    products: Optional[List[Any]],
    printful: PrintfulClient,
    max_concurrency: int = None,
) -> List[MockupResult]:
    """Have Printful render a mockup per product from the public result image url"""
    validate_mockup_request(result_image_url, products)

    return await gather_mockups(
        products,
        lambda product: _render_product(product, result_image_url, printful),
        max_concurrency,
    )
