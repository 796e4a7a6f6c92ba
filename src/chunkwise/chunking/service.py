"""High level chunking service bridging configuration and chunkers."""

from __future__ import annotations

from pathlib import Path
from time import perf_counter

import structlog

from .configuration import ChunkingConfiguration
from .models import Chunk, ChunkingConfig, ChunkingStrategyType
from .ports import ChunkingStrategy
from .registry import ChunkerRegistry, default_registry

logger = structlog.get_logger(__name__)


class ChunkingService:
    """Entry point consumed by the document pipeline and other callers.

    Calls without an explicit :class:`ChunkingConfig` use the active profile
    of the YAML configuration, which is loaded on first use.
    """

    def __init__(
        self,
        *,
        configuration: ChunkingConfiguration | None = None,
        config_path: Path | None = None,
        profile: str | None = None,
        registry: ChunkerRegistry | None = None,
    ) -> None:
        self._configuration = configuration
        self._config_path = config_path
        self.profile = profile
        self.registry = registry or default_registry
        self._strategies: dict[ChunkingStrategyType, ChunkingStrategy] = {}

    @property
    def configuration(self) -> ChunkingConfiguration:
        if self._configuration is None:
            self._configuration = ChunkingConfiguration.load(self._config_path)
        return self._configuration

    def default_config(self) -> ChunkingConfig:
        return self.configuration.config_for(self.profile)

    def chunk(self, text: str, config: ChunkingConfig | None = None) -> list[Chunk]:
        resolved = config or self.default_config()
        strategy = self._strategy(resolved.strategy)
        started = perf_counter()
        chunks = strategy.chunk(text, resolved)
        logger.info(
            "chunking.completed",
            strategy=strategy.name,
            content_type=resolved.content_type.value,
            chunk_size=resolved.chunk_size,
            overlap_size=resolved.overlap_size,
            text_length=len(text),
            chunk_count=len(chunks),
            duration_ms=round((perf_counter() - started) * 1000, 3),
        )
        return chunks

    def chunk_with_source(
        self,
        text: str,
        source: str | None,
        config: ChunkingConfig | None = None,
    ) -> list[Chunk]:
        """Chunk ``text`` and stamp every chunk with ``source``."""
        return [chunk.with_source(source) for chunk in self.chunk(text, config)]

    def list_strategies(self) -> list[str]:
        return sorted(self.registry.list_chunkers())

    def _strategy(self, strategy: ChunkingStrategyType) -> ChunkingStrategy:
        cached = self._strategies.get(strategy)
        if cached is None:
            cached = self.registry.create(strategy)
            self._strategies[strategy] = cached
        return cached


def chunk_text(text: str, config: ChunkingConfig | None = None) -> list[Chunk]:
    """Chunk ``text`` with ``config`` (or the model defaults) without loading profiles."""
    resolved = config or ChunkingConfig()
    return default_registry.create(resolved.strategy).chunk(text, resolved)


__all__ = ["ChunkingService", "chunk_text"]
