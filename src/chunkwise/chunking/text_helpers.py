"""Line-oriented helpers for code, markdown and mixed-content chunking."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .constants import CODE_FENCE, MARKDOWN_HEADER_PREFIX
from .models import ContentType
from .tokenization import TextSpan, iter_lines


@dataclass(slots=True, frozen=True)
class ContentSegment:
    """A contiguous run of either code or prose inside mixed content."""

    span: TextSpan
    is_code: bool

    @property
    def content_type(self) -> ContentType:
        return ContentType.CODE if self.is_code else ContentType.PROSE


def split_lines_with_ranges(text: str) -> list[TextSpan]:
    return list(iter_lines(text))


def trimmed_span(text: str, start: int, end: int) -> TextSpan | None:
    """Span over ``text[start:end]`` with surrounding whitespace removed."""
    raw = text[start:end]
    stripped = raw.strip()
    if not stripped:
        return None
    begin = start + (len(raw) - len(raw.lstrip()))
    return TextSpan(stripped, begin, begin + len(stripped))


def is_blank(line: TextSpan) -> bool:
    return not line.text.strip()


def code_span(text: str, lines: Sequence[TextSpan]) -> TextSpan | None:
    """Span over ``lines`` without surrounding blank lines, indentation kept."""
    content = [line for line in lines if not is_blank(line)]
    if not content:
        return None
    start = content[0].start
    body = text[start : content[-1].end].rstrip()
    return TextSpan(body, start, start + len(body))


def group_code_into_logical_blocks(lines: Sequence[TextSpan]) -> list[list[TextSpan]]:
    """Group consecutive non-blank lines; blank lines are hard boundaries."""
    blocks: list[list[TextSpan]] = []
    current: list[TextSpan] = []
    for line in lines:
        if is_blank(line):
            if current:
                blocks.append(current)
                current = []
        else:
            current.append(line)
    if current:
        blocks.append(current)
    return blocks


def is_markdown_header(line: TextSpan) -> bool:
    return line.text.strip().startswith(MARKDOWN_HEADER_PREFIX)


def extract_markdown_sections(text: str) -> list[TextSpan]:
    """Split ``text`` at header lines.

    A section runs from a header line up to the next header. Content before
    the first header forms a section of its own.
    """
    lines = split_lines_with_ranges(text)
    boundaries = [line.start for line in lines if is_markdown_header(line)]
    if not boundaries or boundaries[0] != 0:
        boundaries.insert(0, 0)
    boundaries.append(len(text))

    sections: list[TextSpan] = []
    for start, end in zip(boundaries, boundaries[1:]):
        span = trimmed_span(text, start, end)
        if span is not None:
            sections.append(span)
    return sections


def is_code_fence(line: TextSpan) -> bool:
    return line.text.strip().startswith(CODE_FENCE)


def separate_code_and_prose(text: str) -> list[ContentSegment]:
    """Split mixed content into code and prose runs at fence lines.

    Fences pair up in order; lines between a pair are code. When the fence
    count is odd, the last fence has no partner and everything after it stays
    prose. Fence lines belong to no segment.
    """
    lines = split_lines_with_ranges(text)
    fences = [position for position, line in enumerate(lines) if is_code_fence(line)]
    if len(fences) % 2:
        fences.pop()
    closing = set(fences[1::2])
    opening = set(fences[0::2])

    segments: list[ContentSegment] = []
    run: list[TextSpan] = []
    in_code = False

    def flush(is_code: bool) -> None:
        if not run:
            return
        span = code_span(text, run) if is_code else trimmed_span(text, run[0].start, run[-1].end)
        if span is not None:
            segments.append(ContentSegment(span=span, is_code=is_code))
        run.clear()

    for position, line in enumerate(lines):
        if position in opening or position in closing:
            flush(in_code)
            in_code = position in opening
            continue
        if is_code_fence(line):
            # Unpaired trailing fence: a delimiter, never content.
            flush(in_code)
            continue
        run.append(line)
    flush(in_code)
    return segments


__all__ = [
    "ContentSegment",
    "code_span",
    "extract_markdown_sections",
    "group_code_into_logical_blocks",
    "is_blank",
    "is_code_fence",
    "is_markdown_header",
    "separate_code_and_prose",
    "split_lines_with_ranges",
    "trimmed_span",
]
