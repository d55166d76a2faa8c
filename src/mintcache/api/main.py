import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from starlette.requests import Request
from starlette.responses import JSONResponse

from mintcache.api.deps import get_health_monitor
from mintcache.api.tokens import router as tokens_router
from mintcache.container import Container
from mintcache.db.session import create_schema
from mintcache.exceptions import (
    AccountNotFoundError,
    InvalidIdentifierError,
    MintCacheError,
)
from mintcache.services.health import HealthMonitor, HealthStatus

logger = logging.getLogger("mintcache.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = getattr(app.state, "container", None) or Container()
    app.state.container = container
    engine = container.engine()
    await create_schema(engine)
    monitor = container.health_monitor()
    await monitor.check_once()
    monitor.start()
    yield
    await monitor.stop()
    await container.http_client().close()
    await engine.dispose()


app = FastAPI(title="mintcache", version="0.1.0", lifespan=lifespan)


def _status_for(exc: MintCacheError) -> int:
    if isinstance(exc, InvalidIdentifierError):
        return 400
    if isinstance(exc, AccountNotFoundError):
        return 404
    return 502


@app.exception_handler(MintCacheError)
async def mintcache_exception_handler(request: Request, exc: MintCacheError):
    status_code = _status_for(exc)
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc), "error": type(exc).__name__})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.include_router(tokens_router)


@app.get("/api/health", response_model=HealthStatus)
async def health(monitor: HealthMonitor = Depends(get_health_monitor)) -> JSONResponse:
    status = monitor.status
    return JSONResponse(status_code=200 if status.healthy else 503, content=status.model_dump(mode="json"))


def serve() -> None:
    import uvicorn

    from mintcache.config import settings
    from mintcache.main import configure_logging

    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())
