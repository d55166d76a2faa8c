from typing import AsyncGenerator

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mintcache.config import Settings
from mintcache.container import Container
from mintcache.infra.metadata.fetcher import MetadataFetcher
from mintcache.infra.price.jupiter import JupiterPriceProvider
from mintcache.services.health import HealthMonitor
from mintcache.services.token_service import TokenService


@inject
async def get_db(
    session_factory: async_sessionmaker[AsyncSession] = Depends(Provide[Container.session_factory]),
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@inject
def get_settings(settings: Settings = Depends(Provide[Container.settings])) -> Settings:
    return settings


@inject
def get_metadata_fetcher(
    fetcher: MetadataFetcher = Depends(Provide[Container.metadata_fetcher]),
) -> MetadataFetcher:
    return fetcher


@inject
def get_price_provider(
    provider: JupiterPriceProvider = Depends(Provide[Container.price_provider]),
) -> JupiterPriceProvider:
    return provider


@inject
def get_health_monitor(
    monitor: HealthMonitor = Depends(Provide[Container.health_monitor]),
) -> HealthMonitor:
    return monitor


def get_token_service(
    db: AsyncSession = Depends(get_db),
    metadata_fetcher: MetadataFetcher = Depends(get_metadata_fetcher),
    price_provider: JupiterPriceProvider = Depends(get_price_provider),
    settings: Settings = Depends(get_settings),
) -> TokenService:
    return TokenService(db, metadata_fetcher, price_provider, price_ttl=settings.price_cache_seconds)
