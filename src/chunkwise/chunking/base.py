"""Shared abstractions for text chunkers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import structlog

from .assembly import ChunkAssembler
from .exceptions import InvalidChunkSizeError, delegation
from .models import Chunk, ChunkingConfig
from .ports import ChunkingStrategy
from .segmentation import SegmentAccumulator
from .sentence_splitters import SentenceSplitter
from .tokenization import SegmentUnit, TextSpan, segment

logger = structlog.get_logger(__name__)


def validate_chunk_size(config: ChunkingConfig) -> None:
    if config.chunk_size <= 0:
        raise InvalidChunkSizeError(config.chunk_size)


class TextChunker(ABC):
    """Base class validating input before running a concrete algorithm."""

    name: str = "TextChunker"

    def chunk(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        validate_chunk_size(config)
        if not text:
            return []
        return self.chunk_text(text, config)

    @abstractmethod
    def chunk_text(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        """Chunk non-empty ``text`` with an already validated ``config``."""

    def explain(self) -> dict[str, Any]:
        return {"name": self.name}

    def tokenize(
        self,
        text: str,
        unit: SegmentUnit,
        *,
        splitter: SentenceSplitter | None = None,
    ) -> list[TextSpan]:
        with delegation(f"{self.name} ({unit.value} segmentation)"):
            return list(segment(text, unit, splitter=splitter))

    def delegate(
        self,
        target: ChunkingStrategy,
        text: str,
        config: ChunkingConfig,
        *,
        label: str,
    ) -> list[Chunk]:
        logger.debug(
            "chunking.delegated",
            strategy=self.name,
            target=target.name,
            text_length=len(text),
            chunk_size=config.chunk_size,
        )
        with delegation(label):
            return target.chunk(text, config)

    def accumulate(
        self,
        spans: Sequence[TextSpan],
        config: ChunkingConfig,
        *,
        separator: str,
        oversize_target: ChunkingStrategy | None = None,
        oversize_label: str = "",
    ) -> list[Chunk]:
        """Run the accumulate/flush/overlap loop over whole ``spans``.

        A span longer than the budget goes to ``oversize_target`` when one is
        given; without a target it is emitted on its own.
        """
        assembler = ChunkAssembler(config, separator=separator)
        accumulator = SegmentAccumulator(separator_size=len(separator))
        limit = config.chunk_size
        last = len(spans) - 1

        for idx, span in enumerate(spans):
            if oversize_target is not None and len(span) > limit:
                if accumulator:
                    assembler.emit(accumulator.spans, has_next=True)
                    accumulator.clear()
                sub_chunks = self.delegate(oversize_target, span.text, config, label=oversize_label)
                assembler.splice(sub_chunks, offset=span.start, has_more=idx < last)
                continue

            if accumulator.exceeds(len(span), limit):
                assembler.emit(accumulator.spans, has_next=True)
                if config.overlap_size > 0:
                    accumulator.carry_overlap(config.overlap_size)
                else:
                    accumulator.clear()

            accumulator.make_room(len(span), limit)
            accumulator.add(span)

        if accumulator:
            assembler.emit(accumulator.spans, has_next=False)
        return assembler.build()


__all__ = ["TextChunker", "validate_chunk_size"]
