"""Accumulator used by the accumulate/flush/overlap chunking loop."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .overlap import calculate_overlap
from .tokenization import TextSpan


@dataclass(slots=True)
class SegmentAccumulator:
    """Ordered spans awaiting assembly plus the length of their joined text.

    ``char_total`` always equals ``len(separator.join(span.text ...))`` for the
    current spans: a separator is counted only between two entries.
    """

    separator_size: int
    spans: list[TextSpan] = field(default_factory=list)
    char_total: int = 0

    def __bool__(self) -> bool:
        return bool(self.spans)

    def size_with(self, length: int) -> int:
        """Joined length if a piece of ``length`` characters were appended."""
        return self.char_total + (self.separator_size if self.spans else 0) + length

    def exceeds(self, length: int, limit: int) -> bool:
        return bool(self.spans) and self.size_with(length) > limit

    def add(self, span: TextSpan) -> None:
        self.char_total = self.size_with(len(span))
        self.spans.append(span)

    def extend(self, spans: Iterable[TextSpan]) -> None:
        for span in spans:
            self.add(span)

    def make_room(self, length: int, limit: int) -> int:
        """Drop spans from the front until ``length`` more characters fit.

        Each removal subtracts the removed length plus the separator that
        joined it to the next entry; the last removal subtracts no separator,
        leaving ``char_total`` at zero. Returns the number of spans dropped.
        """
        dropped = 0
        while self.spans and self.size_with(length) > limit:
            removed = self.spans.pop(0)
            self.char_total -= len(removed) + (self.separator_size if self.spans else 0)
            dropped += 1
        if not self.spans:
            self.char_total = 0
        return dropped

    def clear(self) -> None:
        self.spans.clear()
        self.char_total = 0

    def carry_overlap(self, target_size: int) -> None:
        """Keep only the trailing spans selected as overlap for the next chunk."""
        selection = calculate_overlap(self.spans, target_size, self.separator_size)
        self.spans = list(selection.segments)
        self.char_total = selection.size

    def carry_last(self, count: int) -> None:
        """Keep a fixed number of trailing spans regardless of their size."""
        kept = self.spans[-count:] if count > 0 else []
        self.clear()
        self.extend(kept)


__all__ = ["SegmentAccumulator"]
