"""Configuration management using Pydantic Settings."""

import logging
import sys
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine and service settings."""

    # Axis defaults
    desired_intervals: int = 5
    desired_label_count: int = 6

    # Downsampling
    downsample_threshold: int = 2000
    adaptive_points_per_pixel: float = 2.0
    adaptive_min_points: int = 50
    adaptive_max_points: int = 2000
    progressive_levels: List[int] = [100, 500, 1000, 5000]

    # Service
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="CHARTAXIS_",
    )


def configure_logging(level_name: str) -> None:
    """
    Configure the root logger for the HTTP service.

    Library modules only create module loggers; handlers are attached here.

    Args:
        level_name: Logging level name, e.g. "INFO" or "debug"
    """
    level = getattr(logging, level_name.upper(), logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)


# Global settings instance
settings = Settings()
