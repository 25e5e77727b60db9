"""Service configuration."""

from pathlib import Path
from typing import Optional, Union

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from timebase_history.exceptions import ConfigurationError


DEFAULT_CONFIG_PATH = Path("config/history.yaml")


class ServiceSettings(BaseModel):
    """HTTP service settings."""

    host: str = Field("0.0.0.0", description="Bind address")
    port: int = Field(8010, ge=1, le=65535, description="Bind port")
    log_level: str = Field("INFO", description="Console log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        if level not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


class TimebaseSettings(BaseModel):
    """Timebase server settings."""

    base_url: str = Field("http://localhost:4511", description="Timebase server URL")
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")


class HistoryConfig(BaseModel):
    """Root configuration."""

    version: str = "1.0.0"
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    timebase: TimebaseSettings = Field(default_factory=TimebaseSettings)


def load_config(path: Optional[Union[str, Path]] = None) -> HistoryConfig:
    """Load service configuration.

    Args:
        path: Config file, defaults to config/history.yaml

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in {config_path}",
            {"error": str(e)}
        )

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root must be a mapping: {config_path}")

    try:
        config = HistoryConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed",
            {
                "path": str(config_path),
                "errors": e.errors(include_url=False, include_context=False, include_input=False)
            }
        )

    logger.debug(f"Loaded configuration from {config_path}")
    return config
