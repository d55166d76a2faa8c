import asyncio
import logging
import time

import httpx

from mintcache.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class RateLimitedClient:
    """Shared async HTTP client for the RPC and price calls.

    Spaces requests at least 1/rate_per_second apart and turns transport
    failures into ExternalServiceError so callers deal with one error type.
    """

    def __init__(
        self,
        rate_per_second: float = 10.0,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._min_interval = 1.0 / rate_per_second if rate_per_second > 0 else 0.0
        self._last_request_time = 0.0
        self._lock = asyncio.Lock()
        self._client = client or httpx.AsyncClient(timeout=timeout, headers={"Accept": "application/json"})

    async def _wait_for_slot(self) -> None:
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()

    async def get(self, url: str, params: dict | None = None) -> httpx.Response:
        await self._wait_for_slot()
        try:
            return await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("GET %s failed: %s", url, exc)
            raise ExternalServiceError(f"GET {url} failed: {exc}") from exc

    async def post(self, url: str, json: dict | list | None = None) -> httpx.Response:
        await self._wait_for_slot()
        try:
            return await self._client.post(url, json=json)
        except httpx.HTTPError as exc:
            logger.warning("POST %s failed: %s", url, exc)
            raise ExternalServiceError(f"POST {url} failed: {exc}") from exc

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
