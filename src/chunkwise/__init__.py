"""Bounded, position-tracked text chunking for retrieval indexing."""

from chunkwise.chunking import (
    Chunk,
    ChunkingConfig,
    ChunkingService,
    ChunkingStrategyType,
    ChunkMetadata,
    ContentType,
    chunk_text,
)
from chunkwise.pipeline import DocumentPipeline

__version__ = "0.1.0"

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "ChunkingConfig",
    "ChunkingService",
    "ChunkingStrategyType",
    "ContentType",
    "DocumentPipeline",
    "chunk_text",
    "__version__",
]
