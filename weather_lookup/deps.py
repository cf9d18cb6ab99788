# ABOUTME: Dependency container for the lookup controller using Pydantic BaseModel.
# ABOUTME: Holds the settings and the retrying httpx.AsyncClient used to call OpenWeatherMap.

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import retry_if_exception_type, stop_after_attempt

from weather_lookup.config import Settings

TRANSIENT_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class LookupDeps(BaseModel):
    """Dependencies injected into the lookup controller."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings


def raise_for_transient_status(response: httpx.Response) -> None:
    """Raise HTTPStatusError for throttling and server errors only.

    404 from the current-conditions endpoint means "city not found" and must reach
    the service layer unretried, so client errors pass through untouched.
    """
    if response.status_code in TRANSIENT_STATUS_CODES:
        response.raise_for_status()


def create_http_client(timeout: float = 10.0) -> httpx.AsyncClient:
    """Create an httpx client with tenacity retry on transient HTTP errors.

    Retries connection errors, timeouts, and 429/5xx responses with exponential backoff.
    """
    transport = AsyncTenacityTransport(
        RetryConfig(
            retry=retry_if_exception_type((httpx.ConnectError, httpx.ReadTimeout, httpx.HTTPStatusError)),
            wait=wait_retry_after(max_wait=30),
            stop=stop_after_attempt(3),
            reraise=True,
        ),
        validate_response=raise_for_transient_status,
    )
    return httpx.AsyncClient(transport=transport, timeout=timeout)
