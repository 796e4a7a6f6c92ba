"""Paragraph-based chunking."""

from __future__ import annotations

from typing import Any

from ..base import TextChunker
from ..constants import PARAGRAPH_SEPARATOR
from ..models import Chunk, ChunkingConfig
from ..ports import ChunkingStrategy
from ..tokenization import SegmentUnit
from .sentence import SentenceChunker


class ParagraphChunker(TextChunker):
    """Accumulate paragraphs joined by a blank line.

    A paragraph larger than the budget is handed to the sentence chunker and
    text without any paragraph falls back to it entirely.
    """

    name = "ParagraphChunker"

    def __init__(self, *, sentence_chunker: ChunkingStrategy | None = None) -> None:
        self.sentence_chunker = sentence_chunker or SentenceChunker()

    def chunk_text(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        paragraphs = self.tokenize(text, SegmentUnit.PARAGRAPH)
        if not paragraphs:
            return self.delegate(
                self.sentence_chunker,
                text,
                config,
                label=f"{self.name} (fallback to {self.sentence_chunker.name})",
            )
        return self.accumulate(
            paragraphs,
            config,
            separator=PARAGRAPH_SEPARATOR,
            oversize_target=self.sentence_chunker,
            oversize_label=f"{self.name} (fallback to {self.sentence_chunker.name} for oversized paragraph)",
        )

    def explain(self) -> dict[str, Any]:
        return {"name": self.name, "oversize_target": self.sentence_chunker.name}
