from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from chunkwise.chunking.sentence_splitters import RegexSentenceSplitter, SentenceSplitter
from chunkwise.chunking.tokenization import (
    SegmentUnit,
    TextSpan,
    iter_lines,
    iter_paragraphs,
    iter_sentences,
    iter_words,
    segment,
)


def _assert_exact_ranges(text: str, spans: list[TextSpan]) -> None:
    for span in spans:
        assert text[span.start : span.end] == span.text
        assert span.text == span.text.strip()


def test_words_keep_punctuation_and_emoji() -> None:
    text = "  Hello, wörld! 🎉🎉  done"
    words = list(iter_words(text))
    assert [word.text for word in words] == ["Hello,", "wörld!", "🎉🎉", "done"]
    _assert_exact_ranges(text, words)


def test_lines_include_blank_lines_with_offsets() -> None:
    text = "a\n\nbc\r\nd"
    lines = list(iter_lines(text))
    assert [line.text for line in lines] == ["a", "", "bc", "d"]
    assert [line.start for line in lines] == [0, 2, 3, 7]


def test_paragraphs_are_trimmed_non_blank_lines() -> None:
    text = "  First paragraph.  \n\n\tSecond one.\n   \nThird."
    paragraphs = list(iter_paragraphs(text))
    assert [p.text for p in paragraphs] == ["First paragraph.", "Second one.", "Third."]
    _assert_exact_ranges(text, paragraphs)


def test_repeated_sentences_resolve_to_successive_positions() -> None:
    text = "Same again. Same again. Same again."
    sentences = list(iter_sentences(text, RegexSentenceSplitter()))
    assert [s.start for s in sentences] == [0, 12, 24]
    _assert_exact_ranges(text, sentences)


def test_default_sentence_splitter_ranges() -> None:
    text = "First sentence. Second sentence. Third sentence."
    sentences = list(segment(text, SegmentUnit.SENTENCE))
    assert [s.text for s in sentences] == ["First sentence.", "Second sentence.", "Third sentence."]
    _assert_exact_ranges(text, sentences)


class _RewritingSplitter(SentenceSplitter):
    name = "rewriting"

    def split(self, text: str) -> list[str]:
        return [piece.upper() for piece in text.split(". ")]


def test_unalignable_splitter_output_falls_back_to_regex() -> None:
    text = "One thing. Another thing."
    sentences = list(iter_sentences(text, _RewritingSplitter()))
    assert [s.text for s in sentences] == ["One thing.", "Another thing."]
    _assert_exact_ranges(text, sentences)


def test_alignment_fallback_is_logged_at_debug() -> None:
    with capture_logs() as events:
        list(iter_sentences("One thing. Another thing.", _RewritingSplitter()))
    fallback = [e for e in events if e["event"] == "tokenization.sentence_alignment_fallback"]
    assert [e["log_level"] for e in fallback] == ["debug"]


class _MidWordSplitter(SentenceSplitter):
    name = "mid-word"

    def split(self, text: str) -> list[str]:
        return ["Visit http://x.com/a.b?", "c=d. ", "Then stop."]


def test_sentence_cut_inside_a_word_is_joined_back() -> None:
    text = "Visit http://x.com/a.b?c=d. Then stop."
    sentences = list(iter_sentences(text, _MidWordSplitter()))
    assert [s.text for s in sentences] == ["Visit http://x.com/a.b?c=d.", "Then stop."]
    _assert_exact_ranges(text, sentences)


def test_default_splitter_keeps_urls_whole() -> None:
    text = "Visit http://x.com/a.b?c=d. Then stop."
    sentences = list(segment(text, SegmentUnit.SENTENCE))
    assert any("http://x.com/a.b?c=d." in s.text for s in sentences)
    _assert_exact_ranges(text, sentences)


@pytest.mark.parametrize("unit", list(SegmentUnit))
@pytest.mark.parametrize("text", ["", "   ", "\n\n\t"])
def test_blank_text_yields_nothing(unit: SegmentUnit, text: str) -> None:
    assert list(segment(text, unit)) == []
