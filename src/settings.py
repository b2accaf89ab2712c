"""Application settings and configuration."""

from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from typing import Annotated, Literal

from fastapi import Depends
from loguru import logger
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from analysis import PipelineVariant

type LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Application configuration settings.

    Settings can be configured via:

    1. Environment variables (e.g., GRIDLENS_API_PORT=8080)
    2. .env file in the project root
    3. Default values defined below

    All settings use the GRIDLENS_ prefix for environment variables.

    .. rubric:: Examples

    Set the log level via environment::

        export GRIDLENS_LOG_LEVEL=DEBUG
        export GRIDLENS_DEFAULT_VARIANT=segmentation

    Or create a .env file::

        GRIDLENS_LOG_LEVEL=DEBUG
        GRIDLENS_DEFAULT_VARIANT=segmentation
    """

    # API Configuration
    api_host: Annotated[str, Field(default="127.0.0.1", description="API host address")]
    api_port: Annotated[int, Field(default=8000, description="API port", gt=0, lt=65536)]

    # Application Metadata
    app_title: Annotated[str, Field(default="GridLens API", description="Application title")]

    # Analysis
    log_level: Annotated[LogLevel, Field(default="INFO", description="Minimum level of emitted log records")]
    default_variant: Annotated[
        PipelineVariant,
        Field(
            default=PipelineVariant.PREVIEW,
            description="Pipeline variant used when a request does not name one",
        ),
    ]

    model_config = SettingsConfigDict(
        env_prefix="GRIDLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def app_version(self) -> str:
        """
        Get the application version from package metadata.

        :return: The application version from pyproject.toml.
                 Falls back to "0.0.0" if version cannot be determined.
        """
        try:
            return version("gridlens")
        except PackageNotFoundError:
            logger.warning("Could not determine package version, using fallback '0.0.0'")
            return "0.0.0"

    def log_startup_config(self) -> None:
        """Log the application configuration at startup."""
        logger.info("=" * 60)
        logger.info("Application startup - Configuration:")
        logger.info(f"  Title: {self.app_title}")
        logger.info(f"  Version: {self.app_version}")
        logger.info(f"  Host: {self.api_host}:{self.api_port}")
        logger.info(f"  Log level: {self.log_level}")
        logger.info(f"  Default variant: {self.default_variant}")
        logger.info("=" * 60)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Only one Settings instance is created per application lifecycle.

    :return: The application settings instance.
    """
    return Settings()


# Type alias for cleaner endpoint signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]
