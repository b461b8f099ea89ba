"""Application entry point and FastAPI app factory."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config.settings import Settings, settings as default_settings
from .controllers import messages
from .database import (
    create_engine,
    create_session_factory,
    dispose_engine,
    init_storage,
)
from .middleware import StructuredLoggingMiddleware, TelemetryMiddleware
from .services import MessageStore, PageRenderer, SanitizationError, Sanitizer, StoreError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _close_handlers(target: logging.Logger) -> None:
    """Detach and close every handler a previous configuration installed."""

    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()


def _configure_logging(settings: Settings) -> None:
    """Stream application logs to stdout and a rotating file."""

    _close_handlers(logging.getLogger())

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=1_000_000,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.addHandler(stdout_handler)
    root_logger.addHandler(file_handler)
    root_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

    middleware_logger = logging.getLogger("board.middleware.structured")
    _close_handlers(middleware_logger)
    middleware_stdout = logging.StreamHandler(sys.stdout)
    middleware_stdout.setFormatter(logging.Formatter("%(message)s"))
    middleware_logger.addHandler(middleware_stdout)
    middleware_logger.addHandler(file_handler)
    middleware_logger.setLevel(logging.INFO)
    middleware_logger.propagate = False

    noisy_loggers = [
        "aiosqlite",
        "multipart",
        "sqlalchemy.engine",
    ]
    for name in noisy_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or default_settings
    _configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # A failure here propagates and aborts startup.
        engine = create_engine(settings.database)
        await init_storage(engine, settings.database.path)
        app.state.store = MessageStore(create_session_factory(engine))
        logger.info(
            "%s ready (variant=%s, database=%s)",
            settings.app_name,
            settings.board.variant,
            settings.database.path,
        )
        try:
            yield
        finally:
            await dispose_engine(engine)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        description="Message board: post a name and a message, read them back newest first.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.sanitizer = Sanitizer(
        enabled=settings.board.sanitize,
        on_failure=settings.board.sanitize_failure,
    )
    app.state.renderer = renderer = PageRenderer(settings.board)

    app.add_middleware(TelemetryMiddleware)
    app.add_middleware(StructuredLoggingMiddleware, log_format=settings.log_format)

    app.include_router(messages.router)

    @app.get("/health", include_in_schema=False)
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""

        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
        }

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Expose application metrics for Prometheus scraping."""

        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return renderer.render_error(request, exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        return renderer.render_error(request, 400, "The request could not be understood.")

    @app.exception_handler(SanitizationError)
    async def sanitization_exception_handler(request: Request, exc: SanitizationError):
        return renderer.render_error(request, 400, str(exc))

    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError):
        logger.error("Store failure on %s", request.url.path, exc_info=exc)
        return renderer.render_error(request, 500, "Internal server error")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
        return renderer.render_error(request, 500, "Internal server error")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "board.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug,
    )
