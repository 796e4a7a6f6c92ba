"""Line-oriented chunking for source code."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..assembly import ChunkAssembler
from ..base import TextChunker
from ..constants import CODE_OVERLAP_LINE_COUNT, LINE_SEPARATOR, LINE_SEPARATOR_SIZE
from ..models import Chunk, ChunkingConfig
from ..segmentation import SegmentAccumulator
from ..text_helpers import group_code_into_logical_blocks, split_lines_with_ranges
from ..tokenization import TextSpan


def block_size(block: Sequence[TextSpan]) -> int:
    if not block:
        return 0
    return sum(len(line) for line in block) + LINE_SEPARATOR_SIZE * (len(block) - 1)


class CodeChunker(TextChunker):
    """Accumulate logical blocks of code without ever splitting a line.

    Overlap is measured in lines: when enabled, the last few lines of a chunk
    are repeated at the start of the next one, dropped from the front again if
    they would push it past the budget. Blocks larger than the budget are
    split between lines.
    """

    name = "SemanticChunker.code"

    def __init__(self, *, overlap_lines: int = CODE_OVERLAP_LINE_COUNT) -> None:
        self.overlap_lines = overlap_lines

    def chunk_text(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        blocks = group_code_into_logical_blocks(split_lines_with_ranges(text))
        assembler = ChunkAssembler(config, separator=LINE_SEPARATOR)
        accumulator = SegmentAccumulator(separator_size=LINE_SEPARATOR_SIZE)
        limit = config.chunk_size
        last = len(blocks) - 1

        for idx, block in enumerate(blocks):
            size = block_size(block)
            if size > limit:
                if accumulator:
                    assembler.emit(accumulator.spans, has_next=True)
                    accumulator.clear()
                self._split_oversized_block(block, assembler, config, has_more=idx < last)
                continue

            if accumulator.exceeds(size, limit):
                assembler.emit(accumulator.spans, has_next=True)
                self._carry_overlap(accumulator, config)

            accumulator.make_room(size, limit)
            accumulator.extend(block)

        if accumulator:
            assembler.emit(accumulator.spans, has_next=False)
        return assembler.build()

    def _carry_overlap(self, accumulator: SegmentAccumulator, config: ChunkingConfig) -> None:
        if config.overlap_size > 0:
            accumulator.carry_last(self.overlap_lines)
        else:
            accumulator.clear()

    def _split_oversized_block(
        self,
        block: Sequence[TextSpan],
        assembler: ChunkAssembler,
        config: ChunkingConfig,
        *,
        has_more: bool,
    ) -> None:
        accumulator = SegmentAccumulator(separator_size=LINE_SEPARATOR_SIZE)
        limit = config.chunk_size
        for line in block:
            if accumulator.exceeds(len(line), limit):
                assembler.emit(accumulator.spans, has_next=True)
                self._carry_overlap(accumulator, config)
            accumulator.make_room(len(line), limit)
            accumulator.add(line)
        if accumulator:
            assembler.emit(accumulator.spans, has_next=has_more)

    def explain(self) -> dict[str, Any]:
        return {"name": self.name, "overlap_lines": self.overlap_lines}


__all__ = ["CodeChunker", "block_size"]
