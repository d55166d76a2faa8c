"""Command-line lookup.

Usage:
    mintcache [MINT ...]

Looks up metadata and price for each mint (defaults to a known pump.fun
token), going through the database cache, and prints the results.
"""

import asyncio
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from mintcache.config import Settings
from mintcache.container import Container
from mintcache.db.session import create_schema
from mintcache.exceptions import MintCacheError
from mintcache.services.token_service import TokenService

logger = logging.getLogger("mintcache")

DEFAULT_MINT = "61V8vBaqAGMpgDQi4JcAwo1dmBGHsyhzodcPqnEVpump"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


async def lookup(container: Container, mints: list[str]) -> None:
    settings: Settings = container.settings()
    engine = container.engine()
    session_factory = container.session_factory()

    logger.info("Connecting to database and RPC %s", settings.solana_rpc_url)
    await create_schema(engine)

    monitor = container.health_monitor()
    status = await monitor.check_once()
    for name, component in status.components.items():
        if not component.ok:
            logger.warning("%s unavailable: %s", name, component.error)

    async with session_factory() as session:
        service = TokenService(
            session,
            container.metadata_fetcher(),
            container.price_provider(),
            price_ttl=settings.price_cache_seconds,
        )
        for mint in mints:
            metadata = await service.get_metadata(mint)
            print(f"Metadata: {metadata.model_dump()}")
            price = await service.get_price(mint)
            print(f"Price (cached): {price}")


async def main(mints: list[str], container: Container | None = None) -> int:
    container = container or Container()
    configure_logging(container.settings().log_level)
    try:
        await lookup(container, mints)
    except (MintCacheError, SQLAlchemyError, OSError) as exc:
        logger.error("Lookup failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        logger.exception("Lookup failed unexpectedly")
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        await container.http_client().close()
        await container.engine().dispose()
    return 0


def run() -> None:
    mints = sys.argv[1:] or [DEFAULT_MINT]
    sys.exit(asyncio.run(main(mints)))


if __name__ == "__main__":
    run()
