"""Tokenization adapters producing position-tracked text spans.

Every span returned here is trimmed of surrounding whitespace and its range
matches the trimmed text exactly, i.e. ``text[span.start:span.end] ==
span.text``. Offsets are ``str`` indices into the text handed to
:func:`segment`.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

import structlog

from .sentence_splitters import RegexSentenceSplitter, SentenceSplitter, SentenceSplitterFactory

logger = structlog.get_logger(__name__)

_WORD_PATTERN = re.compile(r"\S+")


class SegmentUnit(str, Enum):
    """Granularity of a tokenization pass."""

    WORD = "word"
    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"


@dataclass(slots=True, frozen=True)
class TextSpan:
    """A piece of text together with its half-open range in the source."""

    text: str
    start: int
    end: int

    def __len__(self) -> int:
        return len(self.text)


@lru_cache(maxsize=4)
def default_sentence_splitter(language: str = "en") -> SentenceSplitter:
    return SentenceSplitterFactory.create("pysbd", language=language)


def iter_lines(text: str) -> Iterator[TextSpan]:
    """Yield each line without its terminator, blank lines included."""
    position = 0
    for piece in text.splitlines(keepends=True):
        parts = piece.splitlines()
        line = parts[0] if parts else ""
        yield TextSpan(line, position, position + len(line))
        position += len(piece)


def iter_words(text: str) -> Iterator[TextSpan]:
    for match in _WORD_PATTERN.finditer(text):
        yield TextSpan(match.group(), match.start(), match.end())


def iter_paragraphs(text: str) -> Iterator[TextSpan]:
    """Every non-blank line is a paragraph."""
    for line in iter_lines(text):
        stripped = line.text.strip()
        if not stripped:
            continue
        start = line.start + (len(line.text) - len(line.text.lstrip()))
        yield TextSpan(stripped, start, start + len(stripped))


def iter_sentences(text: str, splitter: SentenceSplitter | None = None) -> Iterator[TextSpan]:
    """Locate each sentence from ``splitter`` in ``text``.

    Sentences are searched from a moving cursor so repeated sentences resolve
    to successive positions. A sentence that starts exactly where the previous
    one ends was cut inside a word and is joined back onto it. If the
    splitter altered the text so a sentence can no longer be found, the whole
    text is re-split with the regex splitter, whose output always aligns.
    """
    active = splitter or default_sentence_splitter()
    sentences = active.split(text)
    spans = _align(text, sentences)
    if spans is None:
        logger.debug(
            "tokenization.sentence_alignment_fallback",
            splitter=getattr(active, "name", type(active).__name__),
            text_length=len(text),
        )
        spans = _align(text, RegexSentenceSplitter().split(text)) or []
    yield from spans


def _align(text: str, pieces: list[str]) -> list[TextSpan] | None:
    spans: list[TextSpan] = []
    cursor = 0
    for piece in pieces:
        stripped = piece.strip()
        if not stripped:
            continue
        start = text.find(stripped, cursor)
        if start < 0:
            return None
        end = start + len(stripped)
        if spans and spans[-1].end == start:
            previous = spans.pop()
            start = previous.start
            stripped = text[start:end]
        spans.append(TextSpan(stripped, start, end))
        cursor = end
    return spans


def segment(
    text: str,
    unit: SegmentUnit,
    *,
    splitter: SentenceSplitter | None = None,
) -> Iterator[TextSpan]:
    """Lazily yield the ``unit`` spans of ``text`` in order."""
    if not text or not text.strip():
        return iter(())
    if unit is SegmentUnit.WORD:
        return iter_words(text)
    if unit is SegmentUnit.SENTENCE:
        return iter_sentences(text, splitter)
    if unit is SegmentUnit.PARAGRAPH:
        return iter_paragraphs(text)
    raise ValueError(f"Unsupported segment unit '{unit}'")


__all__ = [
    "SegmentUnit",
    "TextSpan",
    "default_sentence_splitter",
    "iter_lines",
    "iter_paragraphs",
    "iter_sentences",
    "iter_words",
    "segment",
]
