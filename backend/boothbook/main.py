"""
Booth Reservation API - Main Application Entry Point

An event booth reservation service providing:
- Conflict-free, day-granular booth reservations with an approval lifecycle
- Booth availability kept in sync with active reservations on every write
- Optimistic (or row-lock) serialization of concurrent writes per booth
- Redis caching of booth listings, structured logging, Prometheus metrics
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from boothbook.core.config import get_settings
from boothbook.core.errors import BoothBookError, ConflictError
from boothbook.core.logging import setup_logging, get_logger
from boothbook.core.metrics import metrics_endpoint
from boothbook.api.router import api_router
from boothbook.api.middleware import RequestLoggingMiddleware
from boothbook.db.base import Base
from boothbook.db.session import engine
from boothbook.services.cache_service import get_redis, close_redis, get_cache_stats
import boothbook.models  # noqa: F401 - register tables on Base.metadata

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        lock_strategy=settings.BOOTH_LOCK_STRATEGY,
    )

    if settings.CREATE_TABLES_ON_STARTUP:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database_tables_ready")

    redis_client = await get_redis()
    if redis_client:
        logger.info("redis_ready")
    else:
        logger.warning("redis_unavailable", message="Running without cache")

    yield

    await close_redis()
    await engine.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Event booth reservations with conflict-free scheduling and live availability",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router)


@app.exception_handler(BoothBookError)
async def domain_error_handler(request: Request, exc: BoothBookError) -> JSONResponse:
    """Expected business failures: logged as warnings, returned with their kind."""
    logger.warning("request_rejected", error=exc.kind, detail=exc.detail)
    body = {"detail": exc.detail, "error": exc.kind}
    if isinstance(exc, ConflictError) and exc.conflicting_reservation_id is not None:
        body["conflicting_reservation_id"] = exc.conflicting_reservation_id
    return JSONResponse(status_code=exc.status_code, content=body)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    cache_stats = await get_cache_stats()
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": cache_stats,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
