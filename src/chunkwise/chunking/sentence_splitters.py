"""Sentence splitting utilities for chunking."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any

import pysbd
import structlog

from .exceptions import ChunkerConfigurationError

logger = structlog.get_logger(__name__)


class SentenceSplitter(ABC):
    """Abstract base class for sentence splitters."""

    name: str = "abstract"

    @abstractmethod
    def split(self, text: str) -> list[str]:
        """Split text into sentences."""


class PySBDSentenceSplitter(SentenceSplitter):
    """Rule-based, language-aware sentence splitter using PySBD.

    A fresh ``pysbd.Segmenter`` is built per call because the segmenter keeps
    the text it last processed on the instance.
    """

    name = "pysbd"

    def __init__(self, language: str = "en") -> None:
        try:
            pysbd.Segmenter(language=language, clean=False)
        except ValueError as exc:
            raise ChunkerConfigurationError(
                f"PySBD does not support language '{language}'"
            ) from exc
        self.language = language

    def split(self, text: str) -> list[str]:
        if not text or not text.strip():
            return []
        segmenter = pysbd.Segmenter(language=self.language, clean=False)
        segments = segmenter.segment(text)
        return [segment.strip() for segment in segments if segment.strip()]


class RegexSentenceSplitter(SentenceSplitter):
    """Simple regex-based sentence splitter keeping terminal punctuation."""

    name = "regex"

    def __init__(self, pattern: str = r"\S.*?(?:[.!?]+(?=\s)|[.!?]*\Z)") -> None:
        self.pattern = pattern
        self._regex = re.compile(pattern, re.DOTALL)

    def split(self, text: str) -> list[str]:
        if not text:
            return []
        sentences = (match.group().strip() for match in self._regex.finditer(text))
        return [sentence for sentence in sentences if sentence]


class SentenceSplitterFactory:
    """Factory for creating sentence splitters."""

    _splitters: dict[str, type[SentenceSplitter]] = {
        "pysbd": PySBDSentenceSplitter,
        "regex": RegexSentenceSplitter,
    }

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> SentenceSplitter:
        """Create a sentence splitter by name."""
        if name not in cls._splitters:
            raise ChunkerConfigurationError(f"Unknown sentence splitter: {name}")

        try:
            splitter = cls._splitters[name](**kwargs)
        except ChunkerConfigurationError:
            raise
        except Exception as exc:
            raise ChunkerConfigurationError(
                f"Failed to create sentence splitter '{name}': {exc}"
            ) from exc
        logger.debug("sentence_splitter.created", splitter=name)
        return splitter

    @classmethod
    def list_splitters(cls) -> list[str]:
        """List available sentence splitter names."""
        return list(cls._splitters.keys())


__all__ = [
    "PySBDSentenceSplitter",
    "RegexSentenceSplitter",
    "SentenceSplitter",
    "SentenceSplitterFactory",
]
