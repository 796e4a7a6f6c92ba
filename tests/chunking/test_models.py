from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from chunkwise.chunking.constants import DEFAULT_CHUNK_SIZE, DEFAULT_OVERLAP_PERCENTAGE
from chunkwise.chunking.models import (
    Chunk,
    ChunkingConfig,
    ChunkingStrategyType,
    ChunkMetadata,
    ContentType,
)


def test_config_defaults() -> None:
    config = ChunkingConfig()
    assert config.chunk_size == DEFAULT_CHUNK_SIZE
    assert config.overlap_percentage == DEFAULT_OVERLAP_PERCENTAGE
    assert config.strategy is ChunkingStrategyType.SEMANTIC
    assert config.content_type is ContentType.PROSE
    assert config.overlap_size == 50


@pytest.mark.parametrize(
    ("given", "expected"),
    [(-0.5, 0.0), (0.0, 0.0), (0.25, 0.25), (1.0, 1.0), (1.7, 1.0), (math.nan, 0.0)],
)
def test_overlap_percentage_is_clamped(given: float, expected: float) -> None:
    assert ChunkingConfig(overlap_percentage=given).overlap_percentage == expected


def test_overlap_size_is_floored() -> None:
    assert ChunkingConfig(chunk_size=33, overlap_percentage=0.1).overlap_size == 3
    assert ChunkingConfig(chunk_size=40, overlap_percentage=1.0).overlap_size == 40


def test_non_positive_chunk_size_is_constructible() -> None:
    assert ChunkingConfig(chunk_size=0).chunk_size == 0
    assert ChunkingConfig(chunk_size=-10).chunk_size == -10


def test_config_is_frozen_and_copies_with_content_type() -> None:
    config = ChunkingConfig(chunk_size=120)
    with pytest.raises(ValidationError):
        config.chunk_size = 10  # type: ignore[misc]
    code_config = config.with_content_type(ContentType.CODE)
    assert code_config.content_type is ContentType.CODE
    assert code_config.chunk_size == 120
    assert config.content_type is ContentType.PROSE


def test_config_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        ChunkingConfig(chunk_sz=10)  # type: ignore[call-arg]


def test_metadata_rejects_inverted_range() -> None:
    with pytest.raises(ValidationError):
        ChunkMetadata(index=0, start_position=5, end_position=2)


def test_chunk_requires_non_empty_range_for_text() -> None:
    with pytest.raises(ValidationError):
        Chunk(text="abc", metadata=ChunkMetadata(index=0, start_position=3, end_position=3))


def test_chunk_length_and_source_stamp() -> None:
    chunk = Chunk(text="héllo", metadata=ChunkMetadata(index=0, start_position=0, end_position=5))
    assert chunk.length == 5
    stamped = chunk.with_source("notes.md")
    assert stamped.metadata.source == "notes.md"
    assert chunk.metadata.source is None
    assert stamped.text == chunk.text
