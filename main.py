"""
Daily Diet FastAPI Application
Main entry point: application factory, middleware and configuration wiring
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio
from typing import Optional

from api.routes import meals, health
from domain.models import create_db_engine, build_session_factory, init_database
from services.session_service import SessionResolver
from app.config import Settings, settings as default_settings

from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    not_found_exception_handler,
    unauthorized_exception_handler,
    general_exception_handler,
)
from app.exceptions import NotFoundError, UnauthorizedError

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, default_settings.log_level.upper()),
    format=default_settings.log_format,
)
_logger = logging.getLogger("dailydiet.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.
    Creates the schema with retries and disposes the engine on shutdown.
    """
    cfg: Settings = app.state.settings
    engine = app.state.engine

    _logger.info(f"Starting {cfg.app_name} in {cfg.environment.value} mode")

    for attempt in range(1, cfg.db_init_attempts + 1):
        try:
            # Run blocking init in a thread to avoid blocking the event loop
            await anyio.to_thread.run_sync(init_database, engine)
            _logger.info("Database initialization succeeded")
            break
        except Exception as exc:
            _logger.warning(
                "Database init attempt %d/%d failed: %s",
                attempt,
                cfg.db_init_attempts,
                exc,
            )
            if attempt < cfg.db_init_attempts:
                await anyio.sleep(cfg.db_init_delay_sec)
            else:
                _logger.error(
                    "Database initialization failed after %d attempts", attempt
                )
                raise

    try:
        yield
    finally:
        _logger.info(f"Shutting down {cfg.app_name}")
        engine.dispose()


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the application with its own engine, session factory and resolver"""
    cfg = app_settings or default_settings

    application = FastAPI(
        title=cfg.api_title,
        version=cfg.app_version,
        description=cfg.api_description,
        lifespan=lifespan,
        debug=cfg.debug,
        openapi_url=(
            f"{cfg.api_prefix}/openapi.json" if not cfg.is_production() else None
        ),
        docs_url=f"{cfg.api_prefix}/docs" if not cfg.is_production() else None,
        redoc_url=f"{cfg.api_prefix}/redoc" if not cfg.is_production() else None,
    )

    engine = create_db_engine(cfg.database_url, echo=cfg.db_echo)
    application.state.settings = cfg
    application.state.engine = engine
    application.state.session_factory = build_session_factory(engine)
    application.state.session_resolver = SessionResolver.from_settings(cfg)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=cfg.cors_allow_credentials,
        allow_methods=cfg.cors_allow_methods,
        allow_headers=cfg.cors_allow_headers,
    )
    application.add_middleware(RequestLoggingMiddleware)

    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(NotFoundError, not_found_exception_handler)
    application.add_exception_handler(UnauthorizedError, unauthorized_exception_handler)
    application.add_exception_handler(Exception, general_exception_handler)

    # health before meals: "/{meal_id}" would otherwise capture "/health-check"
    application.include_router(health.router, prefix=cfg.api_prefix)
    application.include_router(meals.router, prefix=cfg.api_prefix)

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.is_development(),
        log_level=default_settings.log_level.lower(),
    )
