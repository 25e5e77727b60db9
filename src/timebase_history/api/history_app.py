"""History API application."""

import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from timebase_history.api.history_router import router as history_router
from timebase_history.api.history_service import HistoryService
from timebase_history.config import HistoryConfig, load_config
from timebase_history.timebase.client import TimebaseClient
from timebase_history.utils.health import ServiceHealth


def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> None:
    """Setup logging configuration.

    Args:
        log_level: Console log level
        log_dir: Directory for the rotating file log, none when omitted
    """
    logger.remove()

    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    logger.add(sys.stderr, format=log_format, level=log_level)

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    file_format = (
        "{time:YYYY-MM-DD HH:mm:ss} | "
        "{level: <8} | "
        "{name}:{function}:{line} - "
        "{message}"
    )
    logger.add(
        str(log_dir / "history.log"),
        rotation="1 day",
        retention="30 days",
        format=file_format,
        level="DEBUG"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the history service with the app and stop it on shutdown."""
    service: HistoryService = app.state.service
    await service.start()
    logger.info("History service started successfully")

    yield

    if service.is_running:
        await service.stop()
        logger.info("History service stopped successfully")


def create_history_service(
    config: Optional[HistoryConfig] = None,
    client: Optional[TimebaseClient] = None
) -> FastAPI:
    """Create history service application.

    Args:
        config: Service configuration, loaded from config/history.yaml when omitted
        client: Optional Timebase client

    Returns:
        FastAPI: Application instance
    """
    if config is None:
        config = load_config()

    app = FastAPI(
        title="Tag History Service",
        description="Point lookups and aligned tables over Timebase tag history",
        version=config.version,
        lifespan=lifespan
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors."""
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    app.state.service = HistoryService(config, client=client)
    app.include_router(history_router)

    @app.get("/health", response_model=ServiceHealth)
    async def health() -> ServiceHealth:
        """Get service health status."""
        return await app.state.service.health()

    return app
