from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mintcache.db.models.token_price import TokenPrice
from mintcache.db.session import build_upsert
from mintcache.domain.models.token import PriceRecord


class TokenPriceRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, mint: str) -> Optional[PriceRecord]:
        """Return the cached price row regardless of age. Freshness is the caller's decision."""
        result = await self._session.execute(select(TokenPrice).where(TokenPrice.mint == mint))
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return PriceRecord(mint=row.mint, price=row.price, last_updated=row.last_updated)

    async def upsert(self, record: PriceRecord) -> None:
        stmt = build_upsert(
            self._session,
            TokenPrice,
            {"mint": record.mint, "price": record.price, "last_updated": record.last_updated},
            key="mint",
        )
        await self._session.execute(stmt)

    async def count(self, mint: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(TokenPrice)
        if mint is not None:
            stmt = stmt.where(TokenPrice.mint == mint)
        result = await self._session.execute(stmt)
        return result.scalar_one()
