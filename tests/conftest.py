from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import pytest

from chunkwise.chunking.models import Chunk
from chunkwise.config.settings import get_settings


class InMemoryVectorIndex:
    """Records what the pipeline writes; search matches on substrings."""

    def __init__(self) -> None:
        self.texts: list[str] = []
        self.metadatas: list[Mapping[str, Any]] = []
        self.searches: list[tuple[str, int, float]] = []
        self.reset_calls = 0

    def add_texts(self, texts: Sequence[str], metadatas: Sequence[Mapping[str, Any]]) -> list[str]:
        start = len(self.texts)
        self.texts.extend(texts)
        self.metadatas.extend(metadatas)
        return [f"doc-{position}" for position in range(start, len(self.texts))]

    def search(self, query: str, limit: int, threshold: float) -> list[str]:
        self.searches.append((query, limit, threshold))
        return [text for text in self.texts if query.lower() in text.lower()][:limit]

    def reset(self) -> None:
        self.texts.clear()
        self.metadatas.clear()
        self.reset_calls += 1


@pytest.fixture()
def vector_index() -> InMemoryVectorIndex:
    return InMemoryVectorIndex()


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def assert_well_formed(chunks: Sequence[Chunk]) -> None:
    """Indexes match positions, ranges are non-empty and starts never decrease."""
    for position, chunk in enumerate(chunks):
        assert chunk.metadata.index == position
        assert chunk.metadata.end_position > chunk.metadata.start_position
        assert chunk.text
    starts = [chunk.metadata.start_position for chunk in chunks]
    assert starts == sorted(starts)


def assert_within_budget(chunks: Sequence[Chunk], chunk_size: int) -> None:
    for chunk in chunks:
        if len(chunk.text) > chunk_size:
            # Only an unsplittable unit may exceed the budget, and only alone.
            assert len(chunk.text.split()) == 1, chunk.text
