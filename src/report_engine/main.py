"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from report_engine import __version__
from report_engine.api.v1 import router as api_v1_router
from report_engine.core.app_config import get_render_config
from report_engine.core.config import get_settings
from report_engine.core.exceptions import AppException, app_exception_handler, http_exception_handler
from report_engine.engine.renderer import ReportRenderer
from report_engine.middleware.logging import RequestLoggingMiddleware, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    # Validate render configuration (fail fast on startup)
    try:
        render_config = get_render_config()
        logger.info(
            "Render configuration loaded: palette=%s, locale=%s, %d palettes",
            render_config.charts.default_palette,
            render_config.tables.number_format.locale,
            len(render_config.charts.palettes),
        )
    except Exception as e:
        logger.critical("Failed to load render configuration: %s", e)
        raise SystemExit(1) from e

    app.state.renderer = ReportRenderer(render_config)

    logger.info("Application started: env=%s, port=%s", settings.app_env, settings.server_port)

    yield

    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Shortcode report engine - template preview API",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)

    app.include_router(api_v1_router, prefix="/api/v1")

    return app


app = create_app()


def run() -> None:
    """Run the API server with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "report_engine.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,
        log_config=None,
    )
