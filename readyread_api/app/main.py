"""
Main entrypoint for the ReadyRead API.

``create_app`` assembles the FastAPI application: logging, the
timeout middleware, the error envelope handlers and the resource
routes.  The database side is set up in the application lifespan: the
engine is created and pinged on startup, one storage and service per
resource is wired onto ``app.state.services``, and the engine is
disposed of on shutdown.

Run it through ``run.py`` (which also applies the HTTP server
settings) or directly with uvicorn's factory mode::

    uvicorn --factory readyread_api.app.main:create_app
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine
from starlette.concurrency import run_in_threadpool

from .api.router import register_routes
from .core.config import Settings, load_settings
from .core.db import create_db_engine, ping_database
from .core.errors import install_exception_handlers
from .core.logging_config import setup_logging
from .core.middleware import RequestTimeoutMiddleware
from .services import AuthorService, GenreService, LanguageService, UserService
from .storage import AuthorStorage, GenreStorage, LanguageStorage, UserStorage


def build_services(engine: Engine, request_timeout: int) -> dict:
    """Create the storage and service of every resource."""
    return {
        "users": UserService(UserStorage(engine, request_timeout)),
        "authors": AuthorService(AuthorStorage(engine, request_timeout)),
        "genres": GenreService(GenreStorage(engine, request_timeout)),
        "languages": LanguageService(LanguageStorage(engine, request_timeout)),
    }


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Application settings.  Loaded with ``load_settings`` when
        omitted.
    engine : Optional[Engine]
        Ready‑made database engine.  When given, the application uses
        it as is and leaves disposing of it to the caller (tests pass
        an in‑memory SQLite engine this way).  Otherwise an engine is
        created from ``settings.database`` on startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    if settings is None:
        settings = load_settings()

    # Initialise logging before anything else so that startup steps
    # below are logged with the application format.
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db = settings.database
        owns_engine = engine is None
        db_engine = engine if engine is not None else create_db_engine(db)
        if owns_engine:
            logger.info("connecting to database")
            await asyncio.wait_for(run_in_threadpool(ping_database, db_engine), timeout=db.connection_timeout)
            logger.info("connected to database")

        app.state.services = build_services(db_engine, db.request_timeout)
        logger.info("initialized routes")
        try:
            yield
        finally:
            if owns_engine:
                try:
                    await asyncio.wait_for(run_in_threadpool(db_engine.dispose), timeout=db.shutdown_timeout)
                except asyncio.TimeoutError:
                    logger.error("failed to close database connections within %ss", db.shutdown_timeout)
                else:
                    logger.info("closed database connections")

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description="API for the ReadyRead book shop.",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        RequestTimeoutMiddleware,
        read_timeout=settings.http.read_timeout,
        write_timeout=settings.http.write_timeout,
    )
    install_exception_handlers(app)
    register_routes(app)
    return app
