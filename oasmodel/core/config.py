"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Configuration management for OASMODEL.

Settings come from defaults, ``OASMODEL_`` environment variables, and
explicit overrides, in increasing order of precedence.
"""

import logging
import os
from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator

from oasmodel.core.logging import get_logger

logger = get_logger(__name__)

_TRUE_VALUES = ("true", "1", "yes")


class BaseConfig(BaseModel):
    """Base configuration class with common functionality."""

    ENV_PREFIX: ClassVar[str] = "OASMODEL_"

    @classmethod
    def get_env_var(cls, key: str, default: Any = None) -> Any:
        """
        Get an environment variable with the class prefix.

        Args:
        ----
            key: Key name without prefix
            default: Default value if environment variable is not found

        Returns:
        -------
            The environment variable value or default

        """
        env_key = f"{cls.ENV_PREFIX}{key.upper()}"
        return os.environ.get(env_key, default)

    @classmethod
    def get_env_flag(cls, key: str, default: bool = False) -> bool:
        """Read a boolean environment variable."""
        value = cls.get_env_var(key)
        if value is None:
            return default
        return value.lower() in _TRUE_VALUES


class LoggingConfig(BaseConfig):
    """Configuration for logging settings."""

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    use_rich: bool = Field(
        default=True,
        description="Whether to use rich for console log output",
    )
    log_file: str | None = Field(
        default=None,
        description="Path to the log file (None for console-only logging)",
    )
    json_format: bool = Field(
        default=False,
        description="Whether to use JSON format for logs",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, value):
        """Validate that the log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        value = value.upper()
        if value not in valid_levels:
            logger.warning(f"Invalid log level '{value}', defaulting to INFO")
            return "INFO"
        return value

    @classmethod
    def from_env(cls, **overrides) -> "LoggingConfig":
        """Create a logging configuration from environment variables."""
        config = {
            "level": cls.get_env_var("LOG_LEVEL", "INFO"),
            "use_rich": cls.get_env_flag("LOG_USE_RICH", True),
            "log_file": cls.get_env_var("LOG_FILE", None),
            "json_format": cls.get_env_flag("LOG_JSON", False),
        }
        config.update(overrides)
        return cls(**config)

    def get_log_level_int(self) -> int:
        """Get the numeric logging level."""
        return getattr(logging, self.level)

    def configure_logging(self, debug: bool = False) -> None:
        """
        Configure logging based on the settings.

        Args:
        ----
            debug: Whether to force debug mode

        """
        from oasmodel.core.logging import configure_logging

        configure_logging(
            level=self.get_log_level_int(),
            log_file=self.log_file,
            json_format=self.json_format,
            use_rich=self.use_rich,
            debug=debug,
        )


class DecoderConfig(BaseConfig):
    """Configuration for loading and decoding documents."""

    max_depth: int = Field(
        default=64,
        gt=0,
        description="Maximum nesting depth accepted when loading a document",
    )
    extension_prefix: str = Field(
        default="x-",
        min_length=1,
        description="Prefix expected on extension keys",
    )
    strict_extensions: bool = Field(
        default=False,
        description="Treat extension keys without the prefix as errors",
    )

    @classmethod
    def from_env(cls, **overrides) -> "DecoderConfig":
        """Create a decoder configuration from environment variables."""
        config = {
            "max_depth": int(cls.get_env_var("MAX_DEPTH", "64")),
            "extension_prefix": cls.get_env_var("EXTENSION_PREFIX", "x-"),
            "strict_extensions": cls.get_env_flag("STRICT_EXTENSIONS", False),
        }
        config.update(overrides)
        return cls(**config)


class AppConfig(BaseConfig):
    """Main application configuration that aggregates all other configurations."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )
    decoder: DecoderConfig = Field(
        default_factory=DecoderConfig,
        description="Document loading and decoding configuration",
    )
    debug: bool = Field(
        default=False,
        description="Debug mode flag",
    )
    app_name: str = Field(
        default="OASMODEL",
        description="Application name",
    )
    app_version: str = Field(
        default="0.0.0",
        description="Application version",
    )

    @classmethod
    def from_env(cls, **overrides) -> "AppConfig":
        """Create an application configuration from environment variables."""
        config = {
            "logging": LoggingConfig.from_env(),
            "decoder": DecoderConfig.from_env(),
            "debug": cls.get_env_flag("DEBUG", False),
            "app_name": cls.get_env_var("APP_NAME", "OASMODEL"),
            "app_version": cls.get_env_var("APP_VERSION", "0.0.0"),
        }

        nested = {"logging": LoggingConfig, "decoder": DecoderConfig}
        for key, value in overrides.items():
            if key in nested and isinstance(value, dict):
                config[key] = nested[key](**value)
            elif value is not None:
                config[key] = value

        return cls(**config)

    def configure_logging(self) -> None:
        """Configure logging based on the settings."""
        self.logging.configure_logging(debug=self.debug)


_app_config = None


def get_app_config() -> AppConfig:
    """
    Get the global application configuration.

    Returns
    -------
        The application configuration instance

    """
    global _app_config
    if _app_config is None:
        _app_config = AppConfig.from_env()
    return _app_config


def init_app_config(config: AppConfig | None = None, **kwargs) -> AppConfig:
    """
    Initialize the global application configuration.

    Args:
    ----
        config: An existing AppConfig instance
        **kwargs: Key-value pairs for creating a new AppConfig

    Returns:
    -------
        The application configuration instance

    """
    global _app_config
    _app_config = config if config is not None else AppConfig.from_env(**kwargs)
    return _app_config


def reset_app_config() -> None:
    """Drop the global configuration so the next access reloads it."""
    global _app_config
    _app_config = None
