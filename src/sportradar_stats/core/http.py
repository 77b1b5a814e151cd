"""
Shared HTTP client infrastructure for the SportRadar integration.

Provides BaseApiClient with rate limiting, retries, and error handling.
Every failure (network, non-2xx status, undecodable body) surfaces as
ExternalAPIError so callers only have one exception type to handle.

Usage:
    class MyClient(BaseApiClient):
        BASE_URL = "https://api.example.com"

        async def get_data(self) -> dict:
            return await self._get("/data")
"""

import asyncio
import logging
import re
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

_API_KEY_PATTERN = re.compile(r"(api_key=)[^&]+")


def redact_url(url: str) -> str:
    """Mask the api_key query parameter so URLs can be logged."""
    return _API_KEY_PATTERN.sub(r"\1***", str(url))


def parse_retry_after(value: Optional[str], default: int = 1) -> int:
    """
    Seconds to wait according to a Retry-After header.

    Accepts delta-seconds ("120") or an HTTP-date; anything unparseable
    yields ``default``. Dates in the past give 0.
    """
    if value is None:
        return default
    value = value.strip()
    if value.isdigit():
        return int(value)
    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return default
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    return max(0, int((retry_at - datetime.now(timezone.utc)).total_seconds()))


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ExternalAPIError(Exception):
    """Base exception for external API errors."""

    def __init__(
        self,
        message: str,
        code: str = "EXTERNAL_API_ERROR",
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class RateLimitError(ExternalAPIError):
    """Exception raised when rate limit is exceeded."""

    def __init__(self, message: str, retry_after: int = 60):
        super().__init__(message, code="RATE_LIMITED", status_code=429)
        self.retry_after = retry_after


class DecodeError(ExternalAPIError):
    """Response body could not be decoded into the expected shape."""

    def __init__(self, message: str):
        super().__init__(message, code="DECODE_ERROR", status_code=502)


# ---------------------------------------------------------------------------
# Rate limiter
# ---------------------------------------------------------------------------

class RateLimiter:
    """Simple token bucket rate limiter for async API calls."""

    def __init__(self, requests_per_minute: int = 600):
        self.delay = 60.0 / requests_per_minute
        self._last_request = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait until we can make a request."""
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request
            if elapsed < self.delay:
                await asyncio.sleep(self.delay - elapsed)
            self._last_request = time.monotonic()


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------

class BaseApiClient:
    """
    Async HTTP client base with rate limiting and retries.

    Subclasses set BASE_URL and add endpoint-specific methods.
    Use as an async context manager:

        async with MyClient(...) as client:
            data = await client._get("/endpoint")

    Or with lazy initialisation:

        client = MyClient(...)
        data = await client._get("/endpoint")  # client auto-creates on first use
        await client.close()

    The underlying httpx.AsyncClient is shared by every request issued
    through this instance, including concurrent ones.
    """

    BASE_URL: str = ""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        requests_per_minute: int = 600,
        timeout: float = 30.0,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._default_headers = headers or {}
        self._default_params = params or {}
        self._rate_limiter = RateLimiter(requests_per_minute)
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    # -- Lifecycle -----------------------------------------------------------

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._default_headers,
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )

    async def __aenter__(self) -> "BaseApiClient":
        self._client = self._build_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the HTTP client, lazily creating it if needed."""
        if self._client is None or self._client.is_closed:
            self._client = self._build_client()
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    # -- HTTP methods --------------------------------------------------------

    async def _get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a GET request with retries and rate limiting."""
        return await self._request("GET", path, params=params)

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make an HTTP request with retry logic and rate limiting.

        Raises:
            RateLimitError: If API returns 429 and retries are exhausted
            DecodeError: If the body is not valid JSON
            ExternalAPIError: If request fails after retries
        """
        merged_params = {**self._default_params, **(params or {})}
        last_error: ExternalAPIError | None = None

        for attempt in range(self._max_retries):
            try:
                await self._rate_limiter.acquire()
                response = await self.client.request(
                    method=method,
                    url=path,
                    params=merged_params or None,
                )

                # Handle API rate limiting
                if response.status_code == 429:
                    retry_after = parse_retry_after(response.headers.get("retry-after"))
                    if attempt < self._max_retries - 1:
                        wait = min(retry_after, 30)
                        logger.warning(
                            f"Rate limited by API, waiting {wait}s (attempt {attempt + 1})"
                        )
                        await asyncio.sleep(wait)
                        continue
                    raise RateLimitError(
                        f"API rate limit exceeded. Try again in {retry_after} seconds.",
                        retry_after=retry_after,
                    )

                response.raise_for_status()

                try:
                    return response.json()
                except ValueError as e:
                    raise DecodeError(
                        f"Invalid JSON from {redact_url(response.request.url)}: {e}"
                    ) from e

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                last_error = ExternalAPIError(
                    f"HTTP {status} for {redact_url(e.request.url)}: {e.response.text[:200]}",
                    status_code=status,
                )
                # Client errors (except 429) are not retryable
                if 400 <= status < 500:
                    logger.error(f"Call to this API url failed: {redact_url(e.request.url)}")
                    raise last_error from e
                # Server errors: retry with backoff
                if attempt < self._max_retries - 1:
                    wait = 2 ** attempt
                    logger.warning(f"Request failed, retrying in {wait}s: HTTP {status}")
                    await asyncio.sleep(wait)

            except httpx.RequestError as e:
                last_error = ExternalAPIError(
                    f"Request to {redact_url(path)} failed: {e}"
                )
                if attempt < self._max_retries - 1:
                    wait = 2 ** attempt
                    logger.warning(f"Request error, retrying in {wait}s: {type(e).__name__}")
                    await asyncio.sleep(wait)

        logger.error(f"Call to this API url failed after {self._max_retries} attempts: {redact_url(path)}")
        raise last_error or ExternalAPIError("Request failed after retries")
