"""Tests for greedy word wrapping."""

from pdfreflow.core.config import LayoutConfig
from pdfreflow.layout.wrap import WrappedLine, wrap_text


def _measure(text):
    return len(text) * 5.0


def test_words_wrap_when_the_next_word_overflows():
    lines = wrap_text("one two three", 40, _measure)
    assert lines == [WrappedLine("one two", 0.0), WrappedLine("three", 12.0)]


def test_paragraph_spacing_and_blank_lines():
    lines = wrap_text("a\n\nb", 100, _measure)
    # 12 for the line + 6 paragraph spacing, then 12 for the blank paragraph
    assert lines == [WrappedLine("a", 0.0), WrappedLine("b", 30.0)]


def test_overwide_word_is_drawn_anyway():
    assert wrap_text("supercalifragilistic", 10, _measure) == [WrappedLine("supercalifragilistic", 0.0)]
    lines = wrap_text("hi supercalifragilistic", 10, _measure)
    assert [line.text for line in lines] == ["hi", "supercalifragilistic"]


def test_empty_text_draws_nothing():
    assert wrap_text("", 100, _measure) == []


def test_line_height_follows_font_size():
    config = LayoutConfig(font_size=20)
    lines = wrap_text("aa bb", 10, _measure, config)
    assert [line.offset for line in lines] == [0.0, 24.0]
