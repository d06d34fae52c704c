"""Resolve reported line/column positions to buffer ranges.

Linter positions are 1-based and may be expressed in visual columns where a
tab counts ``tab_size`` columns. Every function returns None ("not mapped")
when the position does not fit the buffer; the linter may have run on stale
content, so this is routine and the caller simply drops the diagnostic.
"""

from __future__ import annotations

from dataclasses import dataclass

from lintspan.annotate.buffer import ElementKind, TextBuffer
from lintspan.annotate.models import TextRange


@dataclass(frozen=True, slots=True)
class MappedPosition:
    """Range for a single reported position."""

    range: TextRange
    after_end_of_line: bool = False


def resolve_column_offset(line_text: str, column: int, tab_size: int) -> int | None:
    """Convert a 1-based visual column to a 0-based offset within ``line_text``.

    A column one past the last character resolves to the line end. Anything
    further returns None.
    """
    target = max(column, 1) - 1
    visual = 0
    offset = 0
    while offset < len(line_text) and visual < target:
        visual += tab_size if line_text[offset] == "\t" else 1
        offset += 1
    if visual < target:
        return None
    return offset


def whitespace_offset(buffer: TextBuffer, offset: int) -> int:
    """Length of the whitespace element at ``offset``, 0 if there is none."""
    element = buffer.element_at(offset)
    if element is not None and element.kind is ElementKind.WHITESPACE:
        return element.range.length
    return 0


def _line_index(buffer: TextBuffer, line: int) -> int | None:
    index = line - 1
    if 0 <= index < buffer.line_count:
        return index
    return None


def map_position(
    buffer: TextBuffer,
    line: int,
    column: int | None,
    tab_size: int = 4,
    whole_line: bool = False,
) -> MappedPosition | None:
    """Map a reported ``line:column`` to the element it points at.

    Whole-line mode, or a missing column, highlights from the first
    non-whitespace character to the end of the line.
    """
    index = _line_index(buffer, line)
    if index is None:
        return None

    line_start = buffer.line_start_offset(index)
    line_end = buffer.line_end_offset(index)

    if whole_line or column is None:
        start = min(line_start + whitespace_offset(buffer, line_start), line_end)
        return MappedPosition(TextRange(start, line_end))

    offset = resolve_column_offset(buffer.text[line_start:line_end], column, tab_size)
    if offset is None:
        return None

    error_offset = line_start + offset
    element = buffer.element_at(error_offset)
    rng = element.range if element is not None else TextRange.point(error_offset)
    return MappedPosition(rng, after_end_of_line=error_offset == line_end)


def map_span(
    buffer: TextBuffer,
    line: int,
    start: int,
    end_line: int,
    end: int,
) -> TextRange | None:
    """Map a ``line:start``-``end_line:end`` span.

    Both offsets are measured from the start of their own line. The span is
    rejected when it is inverted, starts outside its line, or ends past the
    end line or the buffer.
    """
    start_index = _line_index(buffer, line)
    end_index = _line_index(buffer, end_line)
    if start_index is None or end_index is None:
        return None

    start_line_offset = buffer.line_start_offset(start_index)
    start_offset = start_line_offset + start - 1
    end_offset = buffer.line_start_offset(end_index) + end - 1

    if start_offset < start_line_offset or start_offset > buffer.line_end_offset(start_index):
        return None
    if end_offset < start_offset or end_offset > len(buffer.text):
        return None
    if end_offset > buffer.line_end_offset(end_index):
        return None
    return TextRange(start_offset, end_offset)
