from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mintcache.db.models.token_metadata import TokenMetadataCache
from mintcache.db.session import build_upsert
from mintcache.domain.models.token import TokenMetadata


class TokenMetadataRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, mint: str) -> Optional[TokenMetadata]:
        result = await self._session.execute(
            select(TokenMetadataCache.metadata_json).where(TokenMetadataCache.mint == mint)
        )
        payload = result.scalar_one_or_none()
        if payload is None:
            return None
        return TokenMetadata.model_validate(payload)

    async def upsert(self, metadata: TokenMetadata, now: int) -> None:
        """Insert or overwrite the cached metadata row for metadata.mint."""
        stmt = build_upsert(
            self._session,
            TokenMetadataCache,
            {"mint": metadata.mint, "metadata": metadata.model_dump(mode="json"), "last_updated": now},
            key="mint",
        )
        await self._session.execute(stmt)

    async def count(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(TokenMetadataCache))
        return result.scalar_one()
