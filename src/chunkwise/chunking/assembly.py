"""Utilities for constructing chunk models from position-tracked spans."""

from __future__ import annotations

from collections.abc import Sequence

from .models import Chunk, ChunkingConfig, ChunkMetadata, ContentType
from .tokenization import TextSpan


def assemble(
    segments: Sequence[TextSpan],
    separator: str,
    running_chunk_count: int,
    has_next: bool,
    config: ChunkingConfig,
    *,
    content_type: ContentType | None = None,
) -> Chunk | None:
    """Join ``segments`` into a chunk, or return ``None`` when there are none.

    Positions come from the first and last segment ranges, never from the
    joined text, so separators inserted here do not shift offsets.
    """
    if not segments:
        return None
    overlapping = config.overlap_size > 0
    metadata = ChunkMetadata(
        index=running_chunk_count,
        start_position=segments[0].start,
        end_position=segments[-1].end,
        has_overlap_with_previous=running_chunk_count > 0 and overlapping,
        has_overlap_with_next=has_next and overlapping,
        content_type=content_type or config.content_type,
    )
    return Chunk(text=separator.join(segment.text for segment in segments), metadata=metadata)


def rebase(
    chunk: Chunk,
    *,
    offset: int,
    index: int,
    has_previous: bool,
    has_next: bool,
    config: ChunkingConfig,
    content_type: ContentType | None = None,
) -> Chunk:
    """Copy ``chunk`` into the coordinate space of an enclosing text."""
    overlapping = config.overlap_size > 0
    metadata = chunk.metadata.model_copy(
        update={
            "index": index,
            "start_position": chunk.metadata.start_position + offset,
            "end_position": chunk.metadata.end_position + offset,
            "has_overlap_with_previous": has_previous and overlapping,
            "has_overlap_with_next": has_next and overlapping,
            "content_type": content_type or chunk.metadata.content_type,
        }
    )
    return chunk.model_copy(update={"metadata": metadata})


class ChunkAssembler:
    """Collects the chunks of a single strategy invocation in order."""

    def __init__(
        self,
        config: ChunkingConfig,
        *,
        separator: str,
        content_type: ContentType | None = None,
    ) -> None:
        self.config = config
        self.separator = separator
        self.content_type = content_type
        self._chunks: list[Chunk] = []

    def __len__(self) -> int:
        return len(self._chunks)

    def emit(self, segments: Sequence[TextSpan], *, has_next: bool) -> Chunk | None:
        chunk = assemble(
            segments,
            self.separator,
            len(self._chunks),
            has_next,
            self.config,
            content_type=self.content_type,
        )
        if chunk is not None:
            self._chunks.append(chunk)
        return chunk

    def splice(
        self,
        chunks: Sequence[Chunk],
        *,
        offset: int,
        has_more: bool,
        content_type: ContentType | None = None,
    ) -> None:
        """Append sub-chunks produced for a region starting at ``offset``."""
        last = len(chunks) - 1
        for position, chunk in enumerate(chunks):
            self._chunks.append(
                rebase(
                    chunk,
                    offset=offset,
                    index=len(self._chunks),
                    has_previous=bool(self._chunks),
                    has_next=position < last or has_more,
                    config=self.config,
                    content_type=content_type,
                )
            )

    def build(self) -> list[Chunk]:
        return list(self._chunks)


__all__ = ["ChunkAssembler", "assemble", "rebase"]
