"""Solana JSON-RPC client — account reads via getAccountInfo."""

import base64
import binascii
import logging

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from mintcache.exceptions import DecodeError, ExternalServiceError
from mintcache.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)


class SolanaRPCClient:
    """Minimal Solana JSON-RPC client for reading raw account data."""

    def __init__(
        self,
        rpc_url: str,
        http_client: RateLimitedClient,
        max_attempts: int = 3,
        backoff_multiplier: float = 2.0,
        commitment: str = "confirmed",
    ) -> None:
        self._rpc_url = rpc_url
        self._http = http_client
        self._max_attempts = max(1, max_attempts)
        self._backoff_multiplier = backoff_multiplier
        self._commitment = commitment

    async def _call(self, method: str, params: list) -> dict | list | int | str | None:
        """Execute a JSON-RPC call and return the result field.

        Transport and RPC errors are retried up to max_attempts; the last
        ExternalServiceError is re-raised as-is.
        """
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(ExternalServiceError),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._backoff_multiplier, max=30),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._call_once(method, params)
        return None  # unreachable, AsyncRetrying either returns or raises

    async def _call_once(self, method: str, params: list) -> dict | list | int | str | None:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params,
        }
        resp = await self._http.post(self._rpc_url, json=payload)
        if resp.status_code != 200:
            raise ExternalServiceError(f"Solana RPC HTTP {resp.status_code} ({method})")

        try:
            data = resp.json()
        except ValueError as exc:
            raise ExternalServiceError(f"Solana RPC returned invalid JSON ({method})") from exc

        if not isinstance(data, dict):
            raise ExternalServiceError(f"Solana RPC returned a non-object body ({method})")

        if "error" in data:
            error = data["error"]
            msg = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise ExternalServiceError(f"Solana RPC error ({method}): {msg}")

        return data.get("result")

    async def get_account_info(self, address: str) -> bytes | None:
        """Fetch raw account data. Returns None when the account does not exist."""
        opts = {"encoding": "base64", "commitment": self._commitment}
        result = await self._call("getAccountInfo", [address, opts])
        if not isinstance(result, dict):
            raise ExternalServiceError(f"Unexpected getAccountInfo result for {address}")

        value = result.get("value")
        if value is None:
            return None
        if not isinstance(value, dict):
            raise DecodeError(f"Account {address} value is not an object")

        data = value.get("data")
        if not isinstance(data, list) or not data:
            raise DecodeError(f"Account {address} has no base64 data field")
        try:
            return base64.b64decode(data[0], validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(f"Account {address} data is not valid base64") from exc

    async def get_slot(self) -> int:
        """Get current slot number."""
        result = await self._call("getSlot", [{"commitment": self._commitment}])
        return int(result)  # type: ignore[arg-type]
