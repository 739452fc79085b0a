import secrets
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.teamhub.api.middlewares import setup_middlewares
from src.teamhub.api.v1.router import api_router
from src.teamhub.core.config import Settings, get_settings
from src.teamhub.core.db import Database
from src.teamhub.core.documents import DocumentStore
from src.teamhub.core.exceptions import setup_exception_handlers
from src.teamhub.core.logging import get_logger, setup_logging
from src.teamhub.core.rate_limit import limiter
from src.teamhub.core.redis import close_redis, connect_redis
from src.teamhub.integrations.google import build_storage
from src.teamhub.integrations.storage import ObjectStorage

logger = get_logger(__name__)

HEALTH_CACHE_TTL = 10  # seconds


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - build missing resources on startup, release owned ones on shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    owned: list[str] = []
    if app.state.database is None:
        app.state.database = Database.from_settings(settings)
        owned.append("database")
    if settings.create_tables_on_startup:
        await app.state.database.create_all()
    if app.state.storage is None:
        app.state.storage = build_storage(settings)
        owned.append("storage")
    redis = None
    if app.state.documents is None:
        redis = await connect_redis(settings)
        if redis is not None:
            app.state.documents = DocumentStore(redis, settings.document_store_prefix)
        else:
            logger.warning("Document store unavailable - personal schedules will return 503")

    yield

    logger.info("Closing connections...")
    await app.state.http_client.aclose()
    await close_redis(redis)
    if "storage" in owned:
        await app.state.storage.aclose()
    if "database" in owned:
        await app.state.database.dispose()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Login, federated login, tokens and registration"},
    {"name": "users", "description": "Own profile, directory and presence"},
    {"name": "admin", "description": "User level and activation management"},
    {"name": "projects", "description": "Projects, members and project chat"},
    {"name": "tasks", "description": "Project tasks"},
    {"name": "milestones", "description": "Project milestones"},
    {"name": "schedules", "description": "Project calendar and personal schedules"},
    {"name": "files", "description": "File manager backed by Google Drive"},
    {"name": "board", "description": "Bulletin board posts and comments"},
]


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    storage: ObjectStorage | None = None,
    documents: DocumentStore | None = None,
) -> FastAPI:
    """Build the application.

    Resources passed in are used as-is and left open on shutdown; anything
    omitted is built from settings by the lifespan.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Team collaboration API: projects, schedules, files and board",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.storage = storage
    app.state.documents = documents
    app.state.http_client = httpx.AsyncClient(timeout=settings.google_api_timeout_seconds)
    app.state.health_cache = None
    app.state.health_cache_time = 0.0

    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    setup_middlewares(app, settings)

    app.include_router(api_router)

    # Prometheus metrics instrumentation
    instrumentator = Instrumentator().instrument(app)

    # Protect /metrics endpoint if API key is configured
    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")

    async def health(request: Request) -> JSONResponse:
        """Health check with dependency validation and caching."""
        state = request.app.state
        now = time.time()

        # Return cached result if still valid
        if state.health_cache and (now - state.health_cache_time) < HEALTH_CACHE_TTL:
            cached_response = state.health_cache.copy()
            cached_response["cached"] = True
            cached_response["cache_age_seconds"] = round(now - state.health_cache_time, 1)
            status_code = 200 if cached_response["status"] != "unhealthy" else 503
            return JSONResponse(content=cached_response, status_code=status_code)

        health_status: dict[str, Any] = {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "database": "unknown",
            "document_store": "not_configured",
            "cached": False,
        }

        try:
            await state.database.ping()
            health_status["database"] = "healthy"
        except Exception as e:
            health_status["database"] = f"unhealthy: {e}"
            health_status["status"] = "unhealthy"

        # Document store is optional - being down is "degraded", not unhealthy
        if state.documents is not None:
            try:
                await state.documents.ping()
                health_status["document_store"] = "healthy"
            except Exception as e:
                health_status["document_store"] = f"unhealthy: {e}"
                if health_status["status"] == "healthy":
                    health_status["status"] = "degraded"

        state.health_cache = health_status
        state.health_cache_time = now

        status_code = 200 if health_status["status"] != "unhealthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    app.add_api_route("/health", health, methods=["GET"], include_in_schema=False)
    app.add_api_route("/api/health", health, methods=["GET"], tags=["health"])

    return app


app = create_app()
