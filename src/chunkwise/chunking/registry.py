"""Strategy registry mapping configured strategy types to chunker classes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from .chunkers import ParagraphChunker, SemanticChunker, SentenceChunker
from .exceptions import ChunkerConfigurationError, ChunkerRegistryError
from .models import ChunkingStrategyType
from .ports import ChunkingStrategy

logger = structlog.get_logger(__name__)


@dataclass
class ChunkerRegistry:
    """Registry for selectable chunker implementations.

    The word chunker is an internal fallback and is never registered here.
    """

    _chunkers: dict[ChunkingStrategyType, type[ChunkingStrategy]] = field(default_factory=dict)

    def register(self, strategy: ChunkingStrategyType, chunker_class: type[ChunkingStrategy]) -> None:
        self._chunkers[ChunkingStrategyType(strategy)] = chunker_class
        logger.debug(
            "chunker.registered",
            strategy=ChunkingStrategyType(strategy).value,
            class_name=chunker_class.__name__,
        )

    def get(self, strategy: ChunkingStrategyType | str) -> type[ChunkingStrategy] | None:
        try:
            key = ChunkingStrategyType(strategy)
        except ValueError:
            return None
        return self._chunkers.get(key)

    def list_chunkers(self) -> list[str]:
        return [strategy.value for strategy in self._chunkers]

    def create(self, strategy: ChunkingStrategyType | str, **parameters: Any) -> ChunkingStrategy:
        """Instantiate the chunker registered for ``strategy``."""
        chunker_class = self.get(strategy)
        if chunker_class is None:
            raise ChunkerRegistryError(
                f"Unknown chunking strategy: {getattr(strategy, 'value', strategy)}"
            )
        try:
            return chunker_class(**parameters)
        except TypeError as exc:
            raise ChunkerConfigurationError(
                f"Failed to create chunker for '{chunker_class.__name__}': {exc}"
            ) from exc


def create_default_registry() -> ChunkerRegistry:
    registry = ChunkerRegistry()
    registry.register(ChunkingStrategyType.SENTENCE, SentenceChunker)
    registry.register(ChunkingStrategyType.PARAGRAPH, ParagraphChunker)
    registry.register(ChunkingStrategyType.SEMANTIC, SemanticChunker)
    return registry


default_registry = create_default_registry()


def strategy_for(
    strategy: ChunkingStrategyType | str,
    *,
    registry: ChunkerRegistry | None = None,
) -> ChunkingStrategy:
    """Return a fresh chunker for ``strategy`` from ``registry`` or the default one."""
    return (registry or default_registry).create(strategy)


__all__ = [
    "ChunkerRegistry",
    "create_default_registry",
    "default_registry",
    "strategy_for",
]
