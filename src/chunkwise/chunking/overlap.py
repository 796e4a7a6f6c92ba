"""Greedy trailing-overlap selection shared by every strategy."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from .constants import SPACE_SEPARATOR_SIZE

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class OverlapSelection(Generic[T]):
    """Suffix of the accumulated segments reused as the next chunk's lead."""

    segments: tuple[T, ...]
    size: int

    def __bool__(self) -> bool:
        return bool(self.segments)


def calculate_overlap(
    segments: Sequence[T],
    target_size: int,
    separator_size: int = SPACE_SEPARATOR_SIZE,
) -> OverlapSelection[T]:
    """Select the longest run of whole trailing segments within ``target_size``.

    Segments are scanned from the end; a segment is kept while the running
    total plus its length (and one separator once the selection is non-empty)
    stays within the target. The scan stops at the first segment that does not
    fit, so the result is a contiguous suffix. Segments are measured with
    ``len()``.
    """
    if target_size <= 0 or not segments:
        return OverlapSelection((), 0)
    selected: list[T] = []
    total = 0
    for item in reversed(segments):
        cost = len(item) + (separator_size if selected else 0)  # type: ignore[arg-type]
        if total + cost > target_size:
            break
        selected.append(item)
        total += cost
    selected.reverse()
    return OverlapSelection(tuple(selected), total)


__all__ = ["OverlapSelection", "calculate_overlap"]
