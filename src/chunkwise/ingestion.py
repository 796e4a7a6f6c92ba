"""Document parsing collaborators feeding the chunking pipeline."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog
from pydantic import BaseModel, ConfigDict, model_validator

from chunkwise.config.settings import DEFAULT_TEXT_EXTENSIONS, IngestionSettings

logger = structlog.get_logger(__name__)


class ParseStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"


class ParseFailureReason(str, Enum):
    UNSUPPORTED_FORMAT = "unsupported_format"
    EMPTY_RESULT = "empty_result"
    READ_ERROR = "read_error"


class ParseResult(BaseModel):
    """Outcome of parsing a single document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = ""
    status: ParseStatus = ParseStatus.OK
    reason: ParseFailureReason | None = None
    detail: str | None = None

    @model_validator(mode="after")
    def _validate_reason(self) -> ParseResult:
        if self.status is ParseStatus.FAILED and self.reason is None:
            raise ValueError("failed parse results require a reason")
        if self.status is ParseStatus.OK and self.reason is not None:
            raise ValueError("successful parse results cannot carry a failure reason")
        return self

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.OK

    @classmethod
    def failure(cls, reason: ParseFailureReason, detail: str | None = None) -> ParseResult:
        return cls(status=ParseStatus.FAILED, reason=reason, detail=detail)


@runtime_checkable
class DocumentParser(Protocol):
    """Turns a file into plain text; format conversion lives behind this port."""

    def parse(self, path: Path) -> ParseResult:
        ...


class PlainTextParser:
    """Read text files whose extension is on an allow-list."""

    def __init__(
        self,
        *,
        extensions: Iterable[str] = DEFAULT_TEXT_EXTENSIONS,
        encoding: str = "utf-8",
    ) -> None:
        self.extensions = frozenset(extension.lower() for extension in extensions)
        self.encoding = encoding

    @classmethod
    def from_settings(cls, settings: IngestionSettings) -> PlainTextParser:
        return cls(extensions=settings.extensions, encoding=settings.encoding)

    def supports(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def parse(self, path: Path) -> ParseResult:
        path = Path(path)
        if not self.supports(path):
            logger.debug("ingestion.unsupported_format", path=str(path), suffix=path.suffix)
            return ParseResult.failure(ParseFailureReason.UNSUPPORTED_FORMAT, path.suffix or None)
        try:
            text = path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("ingestion.read_failed", path=str(path), error=str(exc))
            return ParseResult.failure(ParseFailureReason.READ_ERROR, str(exc))
        if not text.strip():
            return ParseResult.failure(ParseFailureReason.EMPTY_RESULT)
        return ParseResult(text=text)


__all__ = [
    "DocumentParser",
    "ParseFailureReason",
    "ParseResult",
    "ParseStatus",
    "PlainTextParser",
]
