"""Separator strings and fixed sizes shared by the chunking strategies."""

from __future__ import annotations

from typing import Final

SPACE_SEPARATOR: Final[str] = " "
LINE_SEPARATOR: Final[str] = "\n"
PARAGRAPH_SEPARATOR: Final[str] = "\n\n"

SPACE_SEPARATOR_SIZE: Final[int] = len(SPACE_SEPARATOR)
LINE_SEPARATOR_SIZE: Final[int] = len(LINE_SEPARATOR)

# Trailing lines carried into the next chunk for source code.
CODE_OVERLAP_LINE_COUNT: Final[int] = 3

CODE_FENCE: Final[str] = "```"
MARKDOWN_HEADER_PREFIX: Final[str] = "#"

DEFAULT_CHUNK_SIZE: Final[int] = 500
DEFAULT_OVERLAP_PERCENTAGE: Final[float] = 0.1

__all__ = [
    "CODE_FENCE",
    "CODE_OVERLAP_LINE_COUNT",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_OVERLAP_PERCENTAGE",
    "LINE_SEPARATOR",
    "LINE_SEPARATOR_SIZE",
    "MARKDOWN_HEADER_PREFIX",
    "PARAGRAPH_SEPARATOR",
    "SPACE_SEPARATOR",
    "SPACE_SEPARATOR_SIZE",
]
