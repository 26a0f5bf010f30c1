"""Configuration management."""
from __future__ import annotations
import logging

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, overridable with HORIZON_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="HORIZON_", env_file=".env", extra="ignore")

    # Map
    map_width: int = Field(default=2000, description="Canvas width")
    map_height: int = Field(default=1200, description="Canvas height")
    map_margin: int = Field(default=500, description="Partition box overhang past the canvas")

    # Simulation
    tick_interval: float = Field(default=1.0, description="Seconds between movement ticks")

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")


settings = Settings()


def configure_logging(level: str | None = None, json: bool = False) -> None:
    logging.basicConfig(format="%(message)s", level=(level or settings.log_level).upper())
    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
