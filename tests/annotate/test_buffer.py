"""Tests for annotate/buffer.py module.

Covers:
- lex_line() element kinds and offsets
- DocumentBuffer line offsets (LF, CRLF, trailing newline)
- DocumentBuffer.element_at()
- TextBuffer protocol conformance
"""

from __future__ import annotations

import pytest

from lintspan.annotate.buffer import DocumentBuffer, ElementKind, TextBuffer, lex_line
from lintspan.annotate.models import TextRange


class TestLexLine:
    """Tests for lex_line."""

    def test_splits_whitespace_words_and_punctuation(self) -> None:
        """Stylus property line lexes into expected kinds."""
        elements = lex_line("  color: #fff;")
        assert [(e.kind, e.text) for e in elements] == [
            (ElementKind.WHITESPACE, "  "),
            (ElementKind.WORD, "color"),
            (ElementKind.PUNCTUATION, ":"),
            (ElementKind.WHITESPACE, " "),
            (ElementKind.WORD, "#fff"),
            (ElementKind.PUNCTUATION, ";"),
        ]

    def test_tabs_are_whitespace(self) -> None:
        """Tabs and spaces form one whitespace run."""
        elements = lex_line("\t \tfoo")
        assert elements[0].kind == ElementKind.WHITESPACE
        assert elements[0].range == TextRange(0, 3)

    def test_hyphenated_identifiers_are_one_word(self) -> None:
        """Selectors and units keep their hyphens, dots and percent signs."""
        elements = lex_line(".btn-primary 1.5em 50%")
        words = [e.text for e in elements if e.kind == ElementKind.WORD]
        assert words == [".btn-primary", "1.5em", "50%"]

    def test_base_offset_applied(self) -> None:
        """Ranges are shifted by base."""
        elements = lex_line("ab", base=10)
        assert elements[0].range == TextRange(10, 12)

    def test_empty_line(self) -> None:
        """Empty line has no elements."""
        assert lex_line("") == []


class TestDocumentBufferLines:
    """Tests for DocumentBuffer line offsets."""

    def test_line_offsets(self) -> None:
        """Start/end offsets exclude the newline."""
        buffer = DocumentBuffer.from_text("a = 1\n  foo\n")
        assert buffer.line_count == 3
        assert [buffer.line_start_offset(i) for i in range(3)] == [0, 6, 12]
        assert [buffer.line_end_offset(i) for i in range(3)] == [5, 11, 12]

    def test_empty_text_has_one_line(self) -> None:
        """Empty document still has a single empty line."""
        buffer = DocumentBuffer.from_text("")
        assert buffer.line_count == 1
        assert buffer.line_start_offset(0) == 0
        assert buffer.line_end_offset(0) == 0

    def test_crlf_excluded_from_line_end(self) -> None:
        """Carriage return is not part of the line content."""
        buffer = DocumentBuffer.from_text("ab\r\ncd\r\n")
        assert buffer.line_end_offset(0) == 2
        assert buffer.line_start_offset(1) == 4
        assert buffer.line_text(1) == "cd"

    def test_line_text(self) -> None:
        """line_text returns the line without terminator."""
        buffer = DocumentBuffer.from_text("one\ntwo")
        assert buffer.line_text(0) == "one"
        assert buffer.line_text(1) == "two"

    def test_out_of_range_index_raises(self) -> None:
        """Line queries outside the buffer raise IndexError."""
        buffer = DocumentBuffer.from_text("one")
        with pytest.raises(IndexError):
            buffer.line_start_offset(1)
        with pytest.raises(IndexError):
            buffer.line_end_offset(-1)

    def test_line_index_at(self) -> None:
        """Offsets map back to their line, line end included."""
        buffer = DocumentBuffer.from_text("ab\ncd")
        assert buffer.line_index_at(0) == 0
        assert buffer.line_index_at(2) == 0
        assert buffer.line_index_at(3) == 1
        assert buffer.line_index_at(5) == 1


class TestDocumentBufferElements:
    """Tests for DocumentBuffer.element_at."""

    def test_word_element(self) -> None:
        """Offset inside a word returns the full word."""
        buffer = DocumentBuffer.from_text("x\n  foo = 1")
        element = buffer.element_at(5)
        assert element is not None
        assert element.kind == ElementKind.WORD
        assert element.text == "foo"
        assert element.range == TextRange(4, 7)

    def test_leading_whitespace_element(self) -> None:
        """Offset at indentation returns the whitespace run."""
        buffer = DocumentBuffer.from_text("x\n    foo")
        element = buffer.element_at(2)
        assert element is not None
        assert element.kind == ElementKind.WHITESPACE
        assert element.range == TextRange(2, 6)

    def test_line_end_has_no_element(self) -> None:
        """Newline position yields None."""
        buffer = DocumentBuffer.from_text("ab\ncd")
        assert buffer.element_at(2) is None

    def test_outside_text_has_no_element(self) -> None:
        """Offsets outside the text yield None."""
        buffer = DocumentBuffer.from_text("ab")
        assert buffer.element_at(2) is None
        assert buffer.element_at(-1) is None


class TestTextBufferProtocol:
    """DocumentBuffer satisfies the TextBuffer protocol."""

    def test_isinstance(self) -> None:
        assert isinstance(DocumentBuffer.from_text("a"), TextBuffer)

    def test_path_metadata(self) -> None:
        buffer = DocumentBuffer.from_text("a", path="/src/app.styl")
        assert buffer.path == "/src/app.styl"
        assert "app.styl" in repr(buffer)
