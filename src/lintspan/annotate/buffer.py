"""Read-only text buffer with line offsets and lexical element lookup.

The mapping pass only needs line boundaries and the element (whitespace run,
word, or punctuation character) covering an offset. ``TextBuffer`` describes
that contract; ``DocumentBuffer`` is an immutable implementation over a plain
string, lexing a line lazily when an element is requested.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from lintspan.annotate.models import TextRange


class ElementKind(Enum):
    WHITESPACE = "whitespace"
    WORD = "word"
    PUNCTUATION = "punctuation"


@dataclass(frozen=True, slots=True)
class Element:
    """Lexical element of a single line."""

    kind: ElementKind
    range: TextRange
    text: str


@runtime_checkable
class TextBuffer(Protocol):
    """Line/offset queries the position mapper relies on."""

    @property
    def text(self) -> str: ...

    @property
    def line_count(self) -> int: ...

    def line_start_offset(self, index: int) -> int: ...

    def line_end_offset(self, index: int) -> int: ...

    def element_at(self, offset: int) -> Element | None: ...


# Stylus identifiers, selectors, numbers with units, variables and colors.
_ELEMENT_RE = re.compile(r"(?P<ws>[ \t\f\v]+)|(?P<word>[\w\-$@#.%]+)|(?P<punct>.)")


def lex_line(line: str, base: int = 0) -> list[Element]:
    """Split one line (without its terminator) into elements."""
    elements: list[Element] = []
    for match in _ELEMENT_RE.finditer(line):
        if match.lastgroup == "ws":
            kind = ElementKind.WHITESPACE
        elif match.lastgroup == "word":
            kind = ElementKind.WORD
        else:
            kind = ElementKind.PUNCTUATION
        elements.append(
            Element(
                kind=kind,
                range=TextRange(base + match.start(), base + match.end()),
                text=match.group(),
            )
        )
    return elements


class DocumentBuffer:
    """Immutable snapshot of a document's text."""

    __slots__ = ("_text", "_starts", "_ends", "path")

    def __init__(self, text: str, path: str | None = None) -> None:
        self._text = text
        self.path = path
        starts = [0]
        ends: list[int] = []
        pos = text.find("\n")
        while pos != -1:
            ends.append(pos - 1 if pos > starts[-1] and text[pos - 1] == "\r" else pos)
            starts.append(pos + 1)
            pos = text.find("\n", pos + 1)
        end = len(text)
        if end > starts[-1] and text[end - 1] == "\r":
            end -= 1
        ends.append(end)
        self._starts = tuple(starts)
        self._ends = tuple(ends)

    @classmethod
    def from_text(cls, text: str, path: str | None = None) -> DocumentBuffer:
        return cls(text, path=path)

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._starts):
            raise IndexError(f"line index {index} out of range [0, {len(self._starts)})")

    def line_start_offset(self, index: int) -> int:
        self._check_index(index)
        return self._starts[index]

    def line_end_offset(self, index: int) -> int:
        self._check_index(index)
        return self._ends[index]

    def line_text(self, index: int) -> str:
        return self._text[self.line_start_offset(index) : self.line_end_offset(index)]

    def line_index_at(self, offset: int) -> int:
        """0-based index of the line containing ``offset``."""
        if not 0 <= offset <= len(self._text):
            raise IndexError(f"offset {offset} out of range [0, {len(self._text)}]")
        return bisect_right(self._starts, offset) - 1

    def element_at(self, offset: int) -> Element | None:
        """Element covering ``offset``; None at a line end or outside the text."""
        if not 0 <= offset < len(self._text):
            return None
        index = self.line_index_at(offset)
        start = self._starts[index]
        if offset >= self._ends[index]:
            return None
        for element in lex_line(self.line_text(index), base=start):
            if element.range.contains(offset):
                return element
        return None

    def __repr__(self) -> str:
        return f"DocumentBuffer(path={self.path!r}, lines={self.line_count})"
