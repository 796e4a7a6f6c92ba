"""Application settings loaded from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TEXT_EXTENSIONS: tuple[str, ...] = (
    ".txt",
    ".md",
    ".markdown",
    ".rst",
    ".py",
    ".js",
    ".ts",
    ".java",
    ".c",
    ".h",
    ".cpp",
    ".go",
    ".rs",
    ".swift",
    ".rb",
    ".sh",
)


class Environment(str, Enum):
    """Deployment environments."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    level: str = Field(default="INFO", description="Log level for application output")
    scrub_fields: Sequence[str] = Field(
        default_factory=lambda: ["password", "token", "secret", "authorization"],
        description="Fields that should be redacted in logs",
    )


class ChunkingSettings(BaseModel):
    """Where chunking profiles come from and which one is active."""

    config_path: Path | None = Field(default=None, description="Override for the profile file")
    profile: str | None = Field(default=None, description="Profile used when none is requested")


class IngestionSettings(BaseModel):
    """Plain-text document parsing."""

    extensions: Sequence[str] = Field(default_factory=lambda: list(DEFAULT_TEXT_EXTENSIONS))
    encoding: str = "utf-8"

    @field_validator("extensions", mode="after")
    @classmethod
    def _normalise_extensions(cls, value: Sequence[str]) -> list[str]:
        normalised = []
        for extension in value:
            extension = extension.strip().lower()
            if extension and not extension.startswith("."):
                extension = f".{extension}"
            if extension:
                normalised.append(extension)
        return normalised


class AppSettings(BaseSettings):
    """Top-level application settings."""

    environment: Environment = Environment.DEV
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    chunking: ChunkingSettings = Field(default_factory=ChunkingSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)

    model_config = SettingsConfigDict(env_prefix="CHUNKWISE_", env_nested_delimiter="__")


ENVIRONMENT_DEFAULTS: Mapping[Environment, dict[str, Any]] = {
    Environment.DEV: {"logging": {"level": "DEBUG"}},
    Environment.STAGING: {"logging": {"level": "INFO"}},
    Environment.PROD: {"logging": {"level": "WARNING"}},
}


def _deep_update(target: dict[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in updates.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            target[key] = _deep_update(dict(current), value)
        else:
            target[key] = value
    return target


def load_settings(environment: str | None = None) -> AppSettings:
    """Load application settings with environment specific defaults applied.

    Environment defaults only fill in values: anything set explicitly through
    ``CHUNKWISE_*`` variables wins.
    """
    env_value = (environment or os.getenv("CHUNKWISE_ENV", "dev")).lower()
    try:
        env = Environment(env_value)
        base_settings = AppSettings()
    except (ValueError, ValidationError) as err:
        raise RuntimeError(f"Invalid configuration: {err}") from err
    explicit = base_settings.model_dump(exclude_unset=True)
    merged = _deep_update(dict(ENVIRONMENT_DEFAULTS.get(env, {})), explicit)
    merged["environment"] = env
    return AppSettings.model_validate(merged)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Cached accessor used by production code."""
    return load_settings()


__all__ = [
    "AppSettings",
    "ChunkingSettings",
    "DEFAULT_TEXT_EXTENSIONS",
    "Environment",
    "IngestionSettings",
    "LoggingSettings",
    "get_settings",
    "load_settings",
]
