from __future__ import annotations

from pathlib import Path
from typing import Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError

CONFIG_FILENAME = "pawnsense.toml"

LogFormat = Literal["console", "json"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class LoggingConfig(BaseModel):
    """Structured log output settings."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = Field(default="INFO", description="Minimum log level")
    format: LogFormat = Field(
        default="console",
        description="Render log events for a terminal or as JSON lines",
    )


class HoverConfig(BaseModel):
    """Settings for hover markdown."""

    model_config = ConfigDict(extra="forbid")

    language: str = Field(
        default="pawn",
        min_length=1,
        description="Language tag written on fenced code blocks",
    )


class PreviewConfig(BaseModel):
    """Settings for macro expansion previews."""

    model_config = ConfigDict(extra="forbid")

    max_substitutions: int = Field(
        default=1,
        ge=1,
        description="Macro uses expanded on the previewed line",
    )


class PawnSenseConfig(BaseModel):
    """Configuration read from pawnsense.toml."""

    model_config = ConfigDict(extra="forbid")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    hover: HoverConfig = Field(default_factory=HoverConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> PawnSenseConfig:
    """Load configuration from pawnsense.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return PawnSenseConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return PawnSenseConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
