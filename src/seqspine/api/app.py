"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers and lifespan
events into a single ``FastAPI`` instance.

Manifesto:
    The app factory is the single composition root: the
    :class:`SequenceService` is built here (or injected by tests), the
    schema is provisioned on startup and the engine is disposed on
    shutdown.  Routers never construct storage themselves.

Tags:
    seq-spine, api, app-factory, composition-root, FastAPI

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from seqspine import __version__
from seqspine.api.middleware.errors import unhandled_exception_handler, validation_exception_handler
from seqspine.api.middleware.request_id import RequestIDMiddleware
from seqspine.api.routers import categories, events, records, routes
from seqspine.core.health import create_health_router, database_check
from seqspine.core.logging import configure_logging, get_logger
from seqspine.core.settings import SeqSpineSettings, get_settings
from seqspine.sequencing.service import SequenceService


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - provision on startup, dispose on shutdown."""
    settings: SeqSpineSettings = app.state.settings
    configure_logging(level=settings.log_level, json_format=settings.log_json)
    log = get_logger("seqspine.api")

    service: SequenceService = app.state.service
    created = service.provision()
    log.info(
        "api_starting",
        version=app.version,
        backend=service.engine.dialect.name,
        categories=service.categories,
        tables_created=created,
    )

    yield

    log.info("api_stopping")
    if app.state.owns_service:
        service.dispose()


def create_app(
    *,
    settings: SeqSpineSettings | None = None,
    service: SequenceService | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : SeqSpineSettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    service : SequenceService | None
        Pre-built service.  When ``None`` one is built from *settings* and
        disposed on shutdown.
    """
    settings = settings or (service.settings if service is not None else get_settings())

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.state.settings = settings
    app.state.owns_service = service is None
    app.state.service = service or SequenceService.from_settings(settings)

    # Endpoints resolve settings through DI; pin them to this app's settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    prefix = settings.api_prefix

    # Health endpoints at root level (no prefix) for container healthchecks
    app.include_router(
        create_health_router(
            "seq-spine",
            version=__version__,
            checks=[database_check(app.state.service.engine)],
        )
    )
    app.include_router(events.router, prefix=prefix, tags=["events"])
    app.include_router(categories.router, prefix=prefix, tags=["categories"])
    app.include_router(records.router, prefix=prefix, tags=["records"])
    app.include_router(routes.router, prefix=prefix, tags=["routing"])

    return app
