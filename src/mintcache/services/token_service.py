"""TokenService — read-through cache over chain metadata and spot prices."""

import logging
import time
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from mintcache.db.repos.metadata_repo import TokenMetadataRepo
from mintcache.db.repos.price_repo import TokenPriceRepo
from mintcache.domain.models.token import PriceRecord, TokenMetadata
from mintcache.infra.metadata.fetcher import MetadataFetcher
from mintcache.infra.price.jupiter import JupiterPriceProvider

logger = logging.getLogger(__name__)

PRICE_CACHE_SECONDS = 60


class TokenService:
    """Orchestrator: cache lookup → fetch → upsert → return.

    Each call runs serially on the given session and commits its own write.
    There is no de-duplication of concurrent misses; the last upsert wins.
    """

    def __init__(
        self,
        session: AsyncSession,
        metadata_fetcher: MetadataFetcher,
        price_provider: JupiterPriceProvider,
        price_ttl: int = PRICE_CACHE_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._session = session
        self._metadata_repo = TokenMetadataRepo(session)
        self._price_repo = TokenPriceRepo(session)
        self._metadata_fetcher = metadata_fetcher
        self._price_provider = price_provider
        self._price_ttl = price_ttl
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock())

    async def get_metadata(self, mint: str) -> TokenMetadata:
        """Return token metadata. Cached rows never expire."""
        cached = await self._metadata_repo.get(mint)
        if cached is not None:
            logger.debug("Metadata cache hit for %s", mint)
            return cached

        metadata = await self._metadata_fetcher.fetch(mint)
        await self._metadata_repo.upsert(metadata, self._now())
        await self._session.commit()
        return metadata

    async def get_price_record(self, mint: str) -> PriceRecord:
        """Return a price no older than price_ttl seconds, refetching when stale or missing."""
        now = self._now()
        cached = await self._price_repo.get(mint)
        if cached is not None and cached.is_fresh(now, self._price_ttl):
            logger.debug("Price cache hit for %s (age %ds)", mint, cached.age(now))
            return cached

        if cached is not None:
            logger.debug("Price for %s is stale (age %ds), refetching", mint, cached.age(now))

        price = await self._price_provider.fetch(mint)
        record = PriceRecord(mint=mint, price=price, last_updated=self._now())
        await self._price_repo.upsert(record)
        await self._session.commit()
        return record

    async def get_price(self, mint: str) -> float:
        record = await self.get_price_record(mint)
        return record.price
