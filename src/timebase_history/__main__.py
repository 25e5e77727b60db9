"""History service startup script."""

import sys
from pathlib import Path

import uvicorn
from loguru import logger

from timebase_history.api.history_app import create_history_service, setup_logging
from timebase_history.config import load_config


def _uvicorn_level(level: str) -> str:
    # uvicorn has no SUCCESS level
    return "info" if level == "SUCCESS" else level.lower()


def main():
    """Run history service."""
    try:
        config = load_config()
        setup_logging(config.service.log_level, log_dir=Path("logs"))

        app = create_history_service(config)

        uvicorn.run(
            app,
            host=config.service.host,
            port=config.service.port,
            log_level=_uvicorn_level(config.service.log_level)
        )

    except Exception as e:
        logger.exception(f"Failed to start history service: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
