"""Concrete chunking strategies."""

from .code import CodeChunker
from .markdown import MarkdownChunker
from .paragraph import ParagraphChunker
from .semantic import SemanticChunker
from .sentence import SentenceChunker
from .word import WordChunker

__all__ = [
    "CodeChunker",
    "MarkdownChunker",
    "ParagraphChunker",
    "SemanticChunker",
    "SentenceChunker",
    "WordChunker",
]
