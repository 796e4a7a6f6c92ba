"""Sentence-aware chunking."""

from __future__ import annotations

from typing import Any

from ..base import TextChunker
from ..constants import SPACE_SEPARATOR
from ..models import Chunk, ChunkingConfig
from ..ports import ChunkingStrategy
from ..sentence_splitters import SentenceSplitter
from ..tokenization import SegmentUnit
from .word import WordChunker


class SentenceChunker(TextChunker):
    """Accumulate whole sentences; oversized sentences fall back to words."""

    name = "SentenceChunker"

    def __init__(
        self,
        *,
        word_chunker: ChunkingStrategy | None = None,
        splitter: SentenceSplitter | None = None,
    ) -> None:
        self.word_chunker = word_chunker or WordChunker()
        self.splitter = splitter

    def chunk_text(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        sentences = self.tokenize(text, SegmentUnit.SENTENCE, splitter=self.splitter)
        if not sentences:
            return self.delegate(
                self.word_chunker,
                text,
                config,
                label=f"{self.name} (fallback to {self.word_chunker.name})",
            )
        return self.accumulate(
            sentences,
            config,
            separator=SPACE_SEPARATOR,
            oversize_target=self.word_chunker,
            oversize_label=f"{self.name} (fallback to {self.word_chunker.name} for oversized sentence)",
        )

    def explain(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "splitter": getattr(self.splitter, "name", "pysbd"),
            "oversize_target": self.word_chunker.name,
        }
