"""Word-level chunking, the terminal fallback for oversized units."""

from __future__ import annotations

from ..base import TextChunker
from ..constants import SPACE_SEPARATOR
from ..models import Chunk, ChunkingConfig
from ..tokenization import SegmentUnit


class WordChunker(TextChunker):
    """Accumulate whitespace-delimited words up to the character budget.

    Used internally only. A word longer than the budget is emitted as its own
    oversized chunk rather than being cut.
    """

    name = "WordChunker"

    def chunk_text(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        words = self.tokenize(text, SegmentUnit.WORD)
        if not words:
            return []
        return self.accumulate(words, config, separator=SPACE_SEPARATOR)
