"""Application configuration."""

from .settings import (
    AppSettings,
    ChunkingSettings,
    Environment,
    IngestionSettings,
    LoggingSettings,
    get_settings,
    load_settings,
)

__all__ = [
    "AppSettings",
    "ChunkingSettings",
    "Environment",
    "IngestionSettings",
    "LoggingSettings",
    "get_settings",
    "load_settings",
]
