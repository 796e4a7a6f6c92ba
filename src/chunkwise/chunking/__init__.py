"""Text chunking engine: strategies, configuration and the chunking service."""

from .chunkers import (
    CodeChunker,
    MarkdownChunker,
    ParagraphChunker,
    SemanticChunker,
    SentenceChunker,
    WordChunker,
)
from .configuration import ChunkingConfiguration, ChunkingProfile
from .exceptions import (
    ChunkerConfigurationError,
    ChunkerRegistryError,
    ChunkingError,
    ChunkingFailedError,
    InvalidChunkSizeError,
    ProfileNotFoundError,
)
from .models import Chunk, ChunkingConfig, ChunkingStrategyType, ChunkMetadata, ContentType
from .ports import ChunkingStrategy
from .registry import ChunkerRegistry, default_registry, strategy_for
from .service import ChunkingService, chunk_text

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "ChunkerConfigurationError",
    "ChunkerRegistry",
    "ChunkerRegistryError",
    "ChunkingConfig",
    "ChunkingConfiguration",
    "ChunkingError",
    "ChunkingFailedError",
    "ChunkingProfile",
    "ChunkingService",
    "ChunkingStrategy",
    "ChunkingStrategyType",
    "CodeChunker",
    "ContentType",
    "InvalidChunkSizeError",
    "MarkdownChunker",
    "ParagraphChunker",
    "ProfileNotFoundError",
    "SemanticChunker",
    "SentenceChunker",
    "WordChunker",
    "chunk_text",
    "default_registry",
    "strategy_for",
]
