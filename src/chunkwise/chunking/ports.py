"""Protocol definitions for chunkers."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .models import Chunk, ChunkingConfig


@runtime_checkable
class ChunkingStrategy(Protocol):
    """Protocol all chunking strategies must follow.

    Strategies may hold other strategies as delegation targets. Delegation is
    expected to be acyclic (the word chunker is always the terminal leaf), but
    nothing here prevents a cycle structurally.
    """

    name: str

    def chunk(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        """Split ``text`` into ordered chunks."""

    def explain(self) -> dict[str, Any]:
        """Return configuration useful for debugging or evaluation."""


__all__ = ["ChunkingStrategy"]
