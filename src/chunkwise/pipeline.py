"""Document pipeline: parse a file, chunk it and hand the chunks to an index.

Building a pipeline never touches global logging. Applications call
:func:`chunkwise.utils.logging.configure_logging` with
``AppSettings.logging`` once at startup, before creating pipelines.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import structlog

from chunkwise.chunking.models import Chunk, ChunkingConfig
from chunkwise.chunking.service import ChunkingService
from chunkwise.config.settings import AppSettings, get_settings
from chunkwise.ingestion import DocumentParser, ParseFailureReason, PlainTextParser

logger = structlog.get_logger(__name__)

DEFAULT_NUM_RESULTS = 5
DEFAULT_SEARCH_THRESHOLD = 0.7


class PipelineError(RuntimeError):
    """Base error for document pipeline failures."""


class DocumentParseError(PipelineError):
    """Raised when a document cannot be turned into text."""

    def __init__(self, path: Path, reason: ParseFailureReason | None, detail: str | None = None) -> None:
        self.path = path
        self.reason = reason
        self.detail = detail
        label = reason.value if reason is not None else "unknown"
        message = f"Failed to parse '{path}': {label}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class EmptyDocumentError(PipelineError):
    """Raised when a parsed document yields no chunks."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Document '{path}' produced no content to index")


class InvalidSearchParametersError(PipelineError):
    """Raised when search is requested with out-of-range parameters."""


@runtime_checkable
class VectorIndex(Protocol):
    """Similarity index the pipeline writes chunks into."""

    def add_texts(self, texts: Sequence[str], metadatas: Sequence[Mapping[str, Any]]) -> Sequence[str]:
        ...

    def search(self, query: str, limit: int, threshold: float) -> Sequence[Any]:
        ...

    def reset(self) -> None:
        ...


class DocumentPipeline:
    """Facade tying a parser, the chunking service and a vector index together."""

    def __init__(
        self,
        index: VectorIndex,
        *,
        parser: DocumentParser | None = None,
        chunking: ChunkingService | None = None,
    ) -> None:
        self.index = index
        self.parser = parser or PlainTextParser()
        self.chunking = chunking or ChunkingService()

    @classmethod
    def from_settings(cls, index: VectorIndex, settings: AppSettings | None = None) -> DocumentPipeline:
        settings = settings or get_settings()
        return cls(
            index,
            parser=PlainTextParser.from_settings(settings.ingestion),
            chunking=ChunkingService(
                config_path=settings.chunking.config_path,
                profile=settings.chunking.profile,
            ),
        )

    def parse_document(self, path: Path | str, config: ChunkingConfig | None = None) -> list[Chunk]:
        """Parse ``path`` and return its chunks stamped with the file name."""
        path = Path(path)
        result = self.parser.parse(path)
        if not result.ok:
            raise DocumentParseError(path, result.reason, result.detail)
        chunks = self.chunking.chunk_with_source(result.text, path.name, config)
        if not chunks:
            raise EmptyDocumentError(path)
        logger.info("pipeline.document_parsed", path=str(path), chunk_count=len(chunks))
        return chunks

    def parse_and_index(self, path: Path | str, config: ChunkingConfig | None = None) -> Sequence[str]:
        chunks = self.parse_document(path, config)
        ids = self.index.add_texts(
            [chunk.text for chunk in chunks],
            [chunk.metadata.model_dump(mode="json") for chunk in chunks],
        )
        logger.info("pipeline.document_indexed", path=str(path), chunk_count=len(chunks))
        return ids

    def semantic_search(
        self,
        query: str,
        num_results: int = DEFAULT_NUM_RESULTS,
        threshold: float = DEFAULT_SEARCH_THRESHOLD,
    ) -> Sequence[Any]:
        if num_results <= 0:
            raise InvalidSearchParametersError(
                f"num_results must be positive, got {num_results}"
            )
        if not 0.0 <= threshold <= 1.0:
            raise InvalidSearchParametersError(
                f"threshold must be between 0.0 and 1.0, got {threshold}"
            )
        return self.index.search(query, num_results, threshold)

    def reset(self) -> None:
        self.index.reset()
        logger.info("pipeline.index_reset")


__all__ = [
    "DocumentParseError",
    "DocumentPipeline",
    "EmptyDocumentError",
    "InvalidSearchParametersError",
    "PipelineError",
    "VectorIndex",
]
