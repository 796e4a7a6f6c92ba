"""Exception hierarchy for the chunking system."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager


class ChunkingError(RuntimeError):
    """Base error for chunking related failures."""


class InvalidChunkSizeError(ChunkingError):
    """Raised when a strategy is invoked with a non-positive chunk size."""

    def __init__(self, chunk_size: int) -> None:
        self.chunk_size = chunk_size
        super().__init__(f"Chunk size must be a positive integer, got {chunk_size}")


class ChunkerConfigurationError(ChunkingError):
    """Raised when chunker configuration is invalid or missing."""


class ChunkerRegistryError(ChunkingError):
    """Raised when registry operations fail."""


class ProfileNotFoundError(ChunkingError):
    """Raised when a requested chunking profile does not exist."""

    def __init__(self, profile: str, available: Sequence[str]) -> None:
        self.profile = profile
        self.available = tuple(sorted(available))
        message = f"Chunking profile '{profile}' not found. Available: {', '.join(self.available) or 'none'}"
        super().__init__(message)


class ChunkingFailedError(ChunkingError):
    """Raised when a delegated chunking step fails unexpectedly."""

    def __init__(self, strategy: str, underlying: BaseException) -> None:
        self.strategy = strategy
        self.underlying = underlying
        super().__init__(f"Chunking failed in {strategy}: {underlying}")


@contextmanager
def delegation(strategy: str) -> Iterator[None]:
    """Guard a delegated chunking step.

    Errors from this package propagate untouched; any other exception is
    wrapped exactly once in :class:`ChunkingFailedError` tagged with
    ``strategy``.
    """
    try:
        yield
    except ChunkingError:
        raise
    except Exception as exc:
        raise ChunkingFailedError(strategy, exc) from exc


__all__ = [
    "ChunkerConfigurationError",
    "ChunkerRegistryError",
    "ChunkingError",
    "ChunkingFailedError",
    "InvalidChunkSizeError",
    "ProfileNotFoundError",
    "delegation",
]
