from dependency_injector import containers, providers

from mintcache.config import Settings
from mintcache.db.session import build_engine, build_session_factory, ping
from mintcache.infra.http.rate_limited_client import RateLimitedClient
from mintcache.infra.metadata.fetcher import MetadataFetcher
from mintcache.infra.price.jupiter import JupiterPriceProvider
from mintcache.infra.solana.rpc_client import SolanaRPCClient
from mintcache.services.health import HealthMonitor


def build_health_monitor(engine, rpc: SolanaRPCClient, interval: float) -> HealthMonitor:
    return HealthMonitor(
        checks={
            "database": lambda: ping(engine),
            "solana_rpc": rpc.get_slot,
        },
        interval=interval,
    )


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["mintcache.api.deps"])

    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.http_rate_per_second,
        timeout=settings.provided.http_timeout,
    )

    rpc_client = providers.Singleton(
        SolanaRPCClient,
        rpc_url=settings.provided.solana_rpc_url,
        http_client=http_client,
        max_attempts=settings.provided.rpc_max_attempts,
    )

    metadata_fetcher = providers.Singleton(MetadataFetcher, rpc=rpc_client)

    price_provider = providers.Singleton(
        JupiterPriceProvider,
        http_client=http_client,
        base_url=settings.provided.price_api_url,
    )

    health_monitor = providers.Singleton(
        build_health_monitor,
        engine=engine,
        rpc=rpc_client,
        interval=settings.provided.health_check_interval,
    )
