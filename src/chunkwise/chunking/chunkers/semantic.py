"""Content-aware chunking that adapts boundary rules to the content type."""

from __future__ import annotations

from typing import Any

import structlog

from ..assembly import ChunkAssembler
from ..base import TextChunker
from ..constants import LINE_SEPARATOR
from ..models import Chunk, ChunkingConfig, ContentType
from ..ports import ChunkingStrategy
from ..text_helpers import separate_code_and_prose
from .code import CodeChunker
from .markdown import MarkdownChunker
from .paragraph import ParagraphChunker
from .sentence import SentenceChunker

logger = structlog.get_logger(__name__)


class SemanticChunker(TextChunker):
    """Route text to prose, code, markdown or mixed-content rules.

    Prose goes to the paragraph chunker. Mixed content is cut at paired code
    fences and every resulting segment is chunked again through this chunker
    with the content type overridden to ``code`` or ``prose``.
    """

    name = "SemanticChunker"

    def __init__(
        self,
        *,
        prose_chunker: ChunkingStrategy | None = None,
        code_chunker: ChunkingStrategy | None = None,
        markdown_chunker: ChunkingStrategy | None = None,
    ) -> None:
        sentence_chunker = SentenceChunker()
        self.prose_chunker = prose_chunker or ParagraphChunker(sentence_chunker=sentence_chunker)
        self.code_chunker = code_chunker or CodeChunker()
        self.markdown_chunker = markdown_chunker or MarkdownChunker(sentence_chunker=sentence_chunker)

    def chunk_text(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        content_type = config.content_type
        if content_type is ContentType.CODE:
            return self.delegate(self.code_chunker, text, config, label=f"{self.name}.code")
        if content_type is ContentType.MARKDOWN:
            return self.delegate(self.markdown_chunker, text, config, label=f"{self.name}.markdown")
        if content_type is ContentType.MIXED:
            return self._chunk_mixed(text, config)
        return self.delegate(
            self.prose_chunker,
            text,
            config,
            label=f"{self.name}.prose (via {self.prose_chunker.name})",
        )

    def _chunk_mixed(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        segments = separate_code_and_prose(text)
        logger.debug(
            "chunking.mixed_segments",
            segments=len(segments),
            code_segments=sum(1 for segment in segments if segment.is_code),
        )
        assembler = ChunkAssembler(config, separator=LINE_SEPARATOR)
        last = len(segments) - 1
        for idx, segment in enumerate(segments):
            segment_type = segment.content_type
            sub_chunks = self.delegate(
                self,
                segment.span.text,
                config.with_content_type(segment_type),
                label=f"{self.name}.mixed (segment: {segment_type.value})",
            )
            assembler.splice(
                sub_chunks,
                offset=segment.span.start,
                has_more=idx < last,
                content_type=segment_type,
            )
        return assembler.build()

    def explain(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "prose": self.prose_chunker.name,
            "code": self.code_chunker.name,
            "markdown": self.markdown_chunker.name,
        }
