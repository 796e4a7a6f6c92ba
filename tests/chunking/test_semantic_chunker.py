from __future__ import annotations

from textwrap import dedent

import pytest

from chunkwise.chunking.chunkers import CodeChunker, MarkdownChunker, SemanticChunker
from chunkwise.chunking.models import ChunkingConfig, ChunkingStrategyType, ContentType
from chunkwise.chunking.text_helpers import (
    extract_markdown_sections,
    group_code_into_logical_blocks,
    separate_code_and_prose,
    split_lines_with_ranges,
)
from tests.conftest import assert_well_formed, assert_within_budget

CODE_SAMPLE = dedent(
    """\
    func example() {
        let x = 5
        let y = 10
        return x + y
    }

    func another() {
        print("Hello")
    }
    """
)

MIXED_SAMPLE = dedent(
    """\
    Here is some prose text.

    ```swift
    func code() {
        return 42
    }
    ```

    More prose after the code block.
    """
)


def _config(content_type: ContentType, chunk_size: int, overlap: float = 0.1) -> ChunkingConfig:
    return ChunkingConfig(
        chunk_size=chunk_size,
        overlap_percentage=overlap,
        strategy=ChunkingStrategyType.SEMANTIC,
        content_type=content_type,
    )


def test_prose_is_chunked_by_paragraph() -> None:
    text = "Para one is here.\n\nPara two is here."
    chunks = SemanticChunker().chunk(text, _config(ContentType.PROSE, 100))
    assert [chunk.text for chunk in chunks] == ["Para one is here.\n\nPara two is here."]
    assert chunks[0].metadata.content_type is ContentType.PROSE


def test_code_splits_into_logical_blocks() -> None:
    chunks = SemanticChunker().chunk(CODE_SAMPLE, _config(ContentType.CODE, 80))
    assert len(chunks) == 2
    assert "func example()" in chunks[0].text
    assert "func another()" in chunks[1].text
    assert all(chunk.metadata.content_type is ContentType.CODE for chunk in chunks)


def test_code_overlap_repeats_trailing_lines() -> None:
    chunks = CodeChunker().chunk(CODE_SAMPLE, _config(ContentType.CODE, 80))
    assert chunks[1].text.startswith("    let y = 10\n    return x + y\n}")
    assert chunks[1].metadata.has_overlap_with_previous


def test_code_without_overlap_keeps_indentation() -> None:
    chunks = CodeChunker().chunk(CODE_SAMPLE, _config(ContentType.CODE, 80, overlap=0.0))
    assert chunks[1].text == 'func another() {\n    print("Hello")\n}'
    for chunk in chunks:
        assert CODE_SAMPLE[chunk.metadata.start_position : chunk.metadata.end_position] == chunk.text


def test_oversized_code_block_splits_between_lines() -> None:
    lines = [f"    value_{number} = compute({number})" for number in range(12)]
    text = "def build():\n" + "\n".join(lines)
    chunks = CodeChunker().chunk(text, _config(ContentType.CODE, 90, overlap=0.0))
    assert len(chunks) > 1
    assert_within_budget(chunks, 90)
    assert_well_formed(chunks)
    emitted = [line for chunk in chunks for line in chunk.text.split("\n")]
    assert emitted == text.split("\n")


def test_markdown_sections_stay_together() -> None:
    text = "# Header 1\n\nSome content under header 1.\n\n## Header 2\n\nMore content here."
    chunks = SemanticChunker().chunk(text, _config(ContentType.MARKDOWN, 50, overlap=0.0))
    assert [chunk.text for chunk in chunks] == [
        "# Header 1\n\nSome content under header 1.",
        "## Header 2\n\nMore content here.",
    ]
    assert all(chunk.metadata.content_type is ContentType.MARKDOWN for chunk in chunks)


def test_markdown_consecutive_headers() -> None:
    text = "# Header 1\n\n## Header 2\n\nContent under header 2."
    chunks = SemanticChunker().chunk(text, _config(ContentType.MARKDOWN, 80))
    assert chunks
    assert all(chunk.text.strip() for chunk in chunks)
    assert "Header 2" in " ".join(chunk.text for chunk in chunks)


def test_oversized_markdown_section_is_not_duplicated() -> None:
    sentence = "This is a long sentence for markdown chunking."
    text = "# Header\n" + " ".join([sentence] * 40)
    chunks = MarkdownChunker().chunk(text, _config(ContentType.MARKDOWN, 120))
    assert chunks
    assert_within_budget(chunks, 120)
    assert_well_formed(chunks)
    assert " ".join(chunk.text for chunk in chunks).count(sentence) == 40


def test_mixed_content_separates_code_from_prose() -> None:
    chunks = SemanticChunker().chunk(MIXED_SAMPLE, _config(ContentType.MIXED, 80))
    assert len(chunks) >= 2
    assert_well_formed(chunks)
    prose = [chunk for chunk in chunks if chunk.metadata.content_type is ContentType.PROSE]
    code = [chunk for chunk in chunks if chunk.metadata.content_type is ContentType.CODE]
    assert prose and code
    assert "func code()" in code[0].text
    assert all("```" not in chunk.text for chunk in chunks)
    for chunk in chunks:
        assert MIXED_SAMPLE[chunk.metadata.start_position : chunk.metadata.end_position] == chunk.text


def test_unpaired_fence_leaves_remaining_content_as_prose() -> None:
    text = "Prose before code.\n\n```swift\nfunc code() {\n    return 1\n}\n"
    chunks = SemanticChunker().chunk(text, _config(ContentType.MIXED, 80))
    assert chunks
    assert all(chunk.metadata.content_type is ContentType.PROSE for chunk in chunks)
    assert all("```" not in chunk.text for chunk in chunks)
    assert "func code()" in " ".join(chunk.text for chunk in chunks)


def test_mixed_with_only_fences_yields_nothing() -> None:
    assert SemanticChunker().chunk("```\n```\n", _config(ContentType.MIXED, 80)) == []


def test_logical_blocks_split_on_blank_lines() -> None:
    blocks = group_code_into_logical_blocks(split_lines_with_ranges("a\nb\n\n\nc\n"))
    assert [[line.text for line in block] for block in blocks] == [["a", "b"], ["c"]]
    assert group_code_into_logical_blocks(split_lines_with_ranges("\n  \n")) == []


def test_markdown_preamble_forms_its_own_section() -> None:
    text = "Preamble text.\n# Title\nBody."
    sections = extract_markdown_sections(text)
    assert [section.text for section in sections] == ["Preamble text.", "# Title\nBody."]


@pytest.mark.parametrize(
    ("text", "kinds"),
    [
        ("intro\n```\ncode\n```\noutro", [False, True, False]),
        ("```\nfirst\n```\n```\nsecond\n```", [True, True]),
        ("only prose here", [False]),
    ],
)
def test_separate_code_and_prose(text: str, kinds: list[bool]) -> None:
    segments = separate_code_and_prose(text)
    assert [segment.is_code for segment in segments] == kinds
    for segment in segments:
        assert text[segment.span.start : segment.span.end] == segment.span.text
