"""YAML-backed chunking profiles with environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import DEFAULT_CHUNK_SIZE, DEFAULT_OVERLAP_PERCENTAGE
from .exceptions import ChunkerConfigurationError, ProfileNotFoundError
from .models import ChunkingConfig, ChunkingStrategyType, ContentType

logger = structlog.get_logger(__name__)

CONFIG_PATH_ENV = "CHUNKWISE_CHUNKING_CONFIG_PATH"
PROFILE_ENV = "CHUNKWISE_CHUNKING_PROFILE"
OVERRIDES_ENV = "CHUNKWISE_CHUNKING_OVERRIDES"

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "data" / "chunking.yaml"


class ChunkingProfile(BaseModel):
    """Named set of chunking parameters."""

    model_config = ConfigDict(extra="forbid")

    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    overlap_percentage: float = Field(default=DEFAULT_OVERLAP_PERCENTAGE, ge=0.0, le=1.0)
    strategy: ChunkingStrategyType = ChunkingStrategyType.SEMANTIC
    content_type: ContentType = ContentType.PROSE

    def to_config(self) -> ChunkingConfig:
        return ChunkingConfig(
            chunk_size=self.chunk_size,
            overlap_percentage=self.overlap_percentage,
            strategy=self.strategy,
            content_type=self.content_type,
        )


class ChunkingConfiguration(BaseModel):
    """Top-level chunking configuration supporting multiple profiles."""

    model_config = ConfigDict(extra="forbid")

    default_profile: str = Field(default="default")
    profiles: dict[str, ChunkingProfile] = Field(default_factory=dict)

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> ChunkingConfiguration:
        environment = os.environ if env is None else env
        override_path = environment.get(CONFIG_PATH_ENV)
        effective_path = Path(override_path) if override_path else path
        if effective_path is None:
            effective_path = DEFAULT_CONFIG_PATH
        if not effective_path.exists():
            raise ChunkerConfigurationError(
                f"Chunking configuration not found at '{effective_path}'"
            )
        try:
            data = yaml.safe_load(effective_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ChunkerConfigurationError(
                f"Invalid chunking configuration at '{effective_path}'"
            ) from exc
        if not isinstance(data, dict):
            raise ChunkerConfigurationError("Chunking configuration must be a mapping")

        default_profile = environment.get(PROFILE_ENV)
        if default_profile:
            data["default_profile"] = default_profile
        overrides = environment.get(OVERRIDES_ENV)
        if overrides:
            try:
                override_data = yaml.safe_load(overrides) or {}
            except yaml.YAMLError as exc:
                raise ChunkerConfigurationError(f"Invalid {OVERRIDES_ENV} payload") from exc
            if not isinstance(override_data, Mapping):
                raise ChunkerConfigurationError(f"{OVERRIDES_ENV} must be a mapping")
            data = _deep_merge(data, override_data)
        try:
            configuration = cls.model_validate(data)
        except ValidationError as exc:
            raise ChunkerConfigurationError(str(exc)) from exc
        logger.debug(
            "chunking.configuration_loaded",
            path=str(effective_path),
            default_profile=configuration.default_profile,
            profiles=sorted(configuration.profiles),
        )
        return configuration

    def profile(self, name: str | None = None) -> ChunkingProfile:
        """Return the named profile, or the default profile when ``name`` is empty."""
        available = tuple(self.profiles)
        if name:
            try:
                return self.profiles[name]
            except KeyError as exc:
                raise ProfileNotFoundError(name, available) from exc
        try:
            return self.profiles[self.default_profile]
        except KeyError as exc:
            raise ChunkerConfigurationError(
                f"Default chunking profile '{self.default_profile}' is not defined"
            ) from exc

    def config_for(self, name: str | None = None) -> ChunkingConfig:
        return self.profile(name).to_config()


def _deep_merge(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, Mapping):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


__all__ = [
    "CONFIG_PATH_ENV",
    "ChunkingConfiguration",
    "ChunkingProfile",
    "DEFAULT_CONFIG_PATH",
    "OVERRIDES_ENV",
    "PROFILE_ENV",
]
