"""Project configuration and log output."""

from settings.config import (
    CONFIG_FILENAME,
    ConfigError,
    HoverConfig,
    LoggingConfig,
    PawnSenseConfig,
    PreviewConfig,
    load_config,
)
from settings.logging import configure_logging

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "HoverConfig",
    "LoggingConfig",
    "PawnSenseConfig",
    "PreviewConfig",
    "configure_logging",
    "load_config",
]
