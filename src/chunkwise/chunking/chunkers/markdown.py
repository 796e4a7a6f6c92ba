"""Header-delimited chunking for markdown."""

from __future__ import annotations

from typing import Any

from ..base import TextChunker
from ..constants import PARAGRAPH_SEPARATOR
from ..models import Chunk, ChunkingConfig
from ..ports import ChunkingStrategy
from ..text_helpers import extract_markdown_sections
from .sentence import SentenceChunker


class MarkdownChunker(TextChunker):
    """Accumulate whole header sections; oversized sections go to sentences."""

    name = "SemanticChunker.markdown"

    def __init__(self, *, sentence_chunker: ChunkingStrategy | None = None) -> None:
        self.sentence_chunker = sentence_chunker or SentenceChunker()

    def chunk_text(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        sections = extract_markdown_sections(text)
        return self.accumulate(
            sections,
            config,
            separator=PARAGRAPH_SEPARATOR,
            oversize_target=self.sentence_chunker,
            oversize_label=f"{self.name} (fallback to {self.sentence_chunker.name} for oversized section)",
        )

    def explain(self) -> dict[str, Any]:
        return {"name": self.name, "oversize_target": self.sentence_chunker.name}
