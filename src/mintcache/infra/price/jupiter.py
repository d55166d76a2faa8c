"""Jupiter price provider — fetches the current USD spot price for a mint."""

import logging

from mintcache.exceptions import ExternalServiceError, PriceParseError
from mintcache.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

BASE_URL = "https://api.jup.ag/price/v2"


def extract_price(data: object, mint: str) -> float:
    """Pull data[mint].price out of a quote response.

    A missing entry or field is treated as a zero price. A value that is
    present but not numeric raises PriceParseError.
    """
    if not isinstance(data, dict):
        raise PriceParseError(f"Price response is not a JSON object for {mint}")

    prices = data.get("data") or {}
    if not isinstance(prices, dict):
        raise PriceParseError(f"Price response 'data' is not an object for {mint}")

    entry = prices.get(mint) or {}
    if not isinstance(entry, dict):
        raise PriceParseError(f"Price entry for {mint} is not an object")

    raw = entry.get("price")
    if raw is None:
        logger.warning("No price field for %s, defaulting to 0.0", mint)
        return 0.0
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise PriceParseError(f"Price for {mint} is not a number: {raw!r}") from exc


class JupiterPriceProvider:
    """Fetch spot prices from the Jupiter price API."""

    def __init__(self, http_client: RateLimitedClient, base_url: str = BASE_URL) -> None:
        self._http = http_client
        self._base_url = base_url

    async def fetch(self, mint: str) -> float:
        response = await self._http.get(self._base_url, params={"ids": mint})

        if response.status_code != 200:
            logger.warning("Jupiter returned %d for %s", response.status_code, mint)
            raise ExternalServiceError(f"Price service returned HTTP {response.status_code} for {mint}")

        try:
            data = response.json()
        except ValueError as exc:
            raise PriceParseError(f"Price service returned invalid JSON for {mint}") from exc

        price = extract_price(data, mint)
        logger.info("Fetched price for %s: %s", mint, price)
        return price
