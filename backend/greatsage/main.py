"""Great Sage API application.

``create_app`` wires the versioned routers under ``settings.api_prefix``
together with CORS, request-context logging and proxy-header handling.
The module-level ``app`` is what uvicorn serves.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from greatsage.api import router as api_router
from greatsage.config import get_settings
from greatsage.db.session import close_db, init_db
from greatsage.middleware.logging import RequestContextMiddleware, configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Prepare the database before the first request and release it after the last.

    On startup the connection is checked and, when ``DATABASE_CREATE_TABLES``
    is set, the tables are created and the default user is seeded. Every
    request without a ``userId`` acts as that user, so it must exist before
    anything is written.
    """
    settings = get_settings()
    logger.info(
        "app_starting",
        version=settings.app_version,
        environment=settings.environment,
        create_tables=settings.database_create_tables,
        default_user_id=settings.default_user_id,
    )
    await init_db()
    logger.info("database_ready")

    yield

    await close_db()
    logger.info("app_stopped")


def create_app() -> FastAPI:
    """Build the API application from the current settings."""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Personal dashboard for tasks, projects, study, habits, notes and bookmarks",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # Last added runs first: proxy headers, then request context, then CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Process-Time"],
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()
