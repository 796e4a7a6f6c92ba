from __future__ import annotations

from chunkwise.chunking.chunkers import ParagraphChunker
from chunkwise.chunking.models import ChunkingConfig
from tests.conftest import assert_well_formed, assert_within_budget


def test_paragraphs_are_grouped_with_blank_line_separator() -> None:
    text = "First paragraph.\n\nSecond paragraph.\n\nThird paragraph."
    chunks = ParagraphChunker().chunk(text, ChunkingConfig(chunk_size=40, overlap_percentage=0.0))
    assert [chunk.text for chunk in chunks] == [
        "First paragraph.\n\nSecond paragraph.",
        "Third paragraph.",
    ]
    for chunk in chunks:
        assert text[chunk.metadata.start_position : chunk.metadata.end_position] == chunk.text


def test_overlap_produces_multiple_chunks() -> None:
    text = "First paragraph.\n\nSecond paragraph.\n\nThird paragraph."
    chunks = ParagraphChunker().chunk(text, ChunkingConfig(chunk_size=30, overlap_percentage=0.15))
    assert len(chunks) > 1
    assert_well_formed(chunks)


def test_oversized_paragraph_reuses_sentences_as_overlap() -> None:
    text = "Short one. Alpha beta. This sentence makes it long."
    chunks = ParagraphChunker().chunk(text, ChunkingConfig(chunk_size=40, overlap_percentage=0.5))
    assert len(chunks) > 1
    assert "Alpha beta." in chunks[0].text
    assert "Alpha beta." in chunks[1].text
    assert_within_budget(chunks, 40)
    assert_well_formed(chunks)


def test_oversized_paragraph_never_emits_oversized_chunks() -> None:
    long_paragraph = (
        "This is sentence one and it is a bit longer than usual. "
        "This is sentence two with some extra words. "
        "This is sentence three that keeps the paragraph length high."
    )
    text = f"{long_paragraph}\n\nThis is a short paragraph."
    chunks = ParagraphChunker().chunk(text, ChunkingConfig(chunk_size=60, overlap_percentage=0.0))
    assert_within_budget(chunks, 60)
    assert_well_formed(chunks)
    assert chunks[-1].text == "This is a short paragraph."
    assert not chunks[-1].metadata.has_overlap_with_previous


def test_spliced_chunks_carry_offsets_into_the_enclosing_text() -> None:
    text = "Intro.\n\n" + "Sentence number one. Sentence number two. Sentence number three."
    chunks = ParagraphChunker().chunk(text, ChunkingConfig(chunk_size=25, overlap_percentage=0.0))
    assert chunks[0].text == "Intro."
    for chunk in chunks:
        assert text[chunk.metadata.start_position : chunk.metadata.end_position] == chunk.text
