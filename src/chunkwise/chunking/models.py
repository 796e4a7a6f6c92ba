"""Data models shared across chunkers."""

from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from .constants import DEFAULT_CHUNK_SIZE, DEFAULT_OVERLAP_PERCENTAGE


class ChunkingStrategyType(str, Enum):
    """Top-level strategies selectable through configuration."""

    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"
    SEMANTIC = "semantic"


class ContentType(str, Enum):
    """Content hints that select boundary rules for semantic chunking."""

    PROSE = "prose"
    CODE = "code"
    MARKDOWN = "markdown"
    MIXED = "mixed"


class ChunkMetadata(BaseModel):
    """Positional and classification details for a single chunk."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    index: int = Field(ge=0)
    start_position: int = Field(ge=0)
    end_position: int = Field(ge=0)
    has_overlap_with_previous: bool = False
    has_overlap_with_next: bool = False
    content_type: ContentType = ContentType.PROSE
    source: str | None = None

    @model_validator(mode="after")
    def _validate_offsets(self) -> ChunkMetadata:
        if self.end_position < self.start_position:
            raise ValueError("end_position must not precede start_position")
        return self


class Chunk(BaseModel):
    """Representation of a bounded text span produced by a chunker."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str
    metadata: ChunkMetadata

    @model_validator(mode="after")
    def _validate_span(self) -> Chunk:
        if self.text and self.metadata.end_position <= self.metadata.start_position:
            raise ValueError("end_position must be greater than start_position")
        return self

    @computed_field  # type: ignore[misc]
    @property
    def length(self) -> int:
        return len(self.text)

    def with_source(self, source: str | None) -> Chunk:
        return self.model_copy(
            update={"metadata": self.metadata.model_copy(update={"source": source})}
        )


class ChunkingConfig(BaseModel):
    """Immutable parameters for a single chunking call.

    ``chunk_size`` is not range-checked here; strategies reject
    non-positive sizes with :class:`InvalidChunkSizeError` when invoked.
    ``overlap_percentage`` is clamped to ``[0.0, 1.0]`` on construction.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    chunk_size: int = DEFAULT_CHUNK_SIZE
    overlap_percentage: float = DEFAULT_OVERLAP_PERCENTAGE
    strategy: ChunkingStrategyType = ChunkingStrategyType.SEMANTIC
    content_type: ContentType = ContentType.PROSE

    @field_validator("overlap_percentage", mode="after")
    @classmethod
    def _clamp_overlap(cls, value: float) -> float:
        if math.isnan(value):
            return 0.0
        return max(0.0, min(1.0, value))

    @property
    def overlap_size(self) -> int:
        """Overlap budget in characters."""
        return math.floor(self.chunk_size * self.overlap_percentage)

    def with_content_type(self, content_type: ContentType) -> ChunkingConfig:
        return self.model_copy(update={"content_type": content_type})


__all__ = [
    "Chunk",
    "ChunkMetadata",
    "ChunkingConfig",
    "ChunkingStrategyType",
    "ContentType",
]
