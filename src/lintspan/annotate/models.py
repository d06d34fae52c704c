"""Annotate models - issues, message parts, ranges and annotations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Annotation severity level."""

    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open ``[start, end)`` character range in a buffer."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end

    @classmethod
    def point(cls, offset: int) -> TextRange:
        return cls(offset, offset)


@dataclass(frozen=True, slots=True)
class Issue:
    """A single line-format diagnostic, before range resolution."""

    line: int  # 1-based
    message: str
    column: int | None = None  # 1-based; None highlights the whole line
    rule: str | None = None  # "no-space", "colons", ...
    severity: str = "warning"


@dataclass(frozen=True, slots=True)
class MessagePart:
    """One located-or-unlocated fragment of a structured diagnostic."""

    path: str  # "" means the part carries text only
    line: int
    end_line: int
    start: int
    end: int
    description: str
    fix: str | None = None  # literal replacement for the part's range

    @property
    def has_location(self) -> bool:
        return bool(self.path)


@dataclass(frozen=True, slots=True)
class DiagnosticRecord:
    """A structured diagnostic: ordered message parts, first part is primary."""

    parts: tuple[MessagePart, ...]
    severity: str = "error"

    @property
    def primary(self) -> MessagePart:
        return self.parts[0]


@dataclass(frozen=True, slots=True)
class Response:
    """Top-level structured linter response."""

    passed: bool
    errors: tuple[DiagnosticRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class LineRecord:
    """Raw line-oriented linter output (``L:C: MESSAGE (RULE)`` per line)."""

    text: str


@dataclass(frozen=True, slots=True)
class StructuredRecord:
    """Raw structured linter output: JSON text or an already-decoded mapping."""

    payload: str | Mapping[str, Any]


RawDiagnostic = LineRecord | StructuredRecord


@dataclass(frozen=True, slots=True)
class MappedAnnotation:
    """A diagnostic resolved to a buffer range, ready for rendering."""

    message: str
    range: TextRange
    severity: Severity
    replacement: str | None = None
    after_end_of_line: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "start": self.range.start,
            "end": self.range.end,
            "severity": self.severity.value,
            "replacement": self.replacement,
            "after_end_of_line": self.after_end_of_line,
        }


@dataclass
class ParseResult:
    """Result from parsing linter output."""

    issues: list[Issue] = field(default_factory=list)
    response: Response | None = None
    skipped: int = 0
    parse_error: str | None = None

    @property
    def success(self) -> bool:
        return self.parse_error is None

    @property
    def records(self) -> tuple[DiagnosticRecord, ...]:
        if self.response is None or self.response.passed:
            return ()
        return self.response.errors

    @classmethod
    def ok(cls, issues: list[Issue], skipped: int = 0) -> ParseResult:
        return cls(issues=issues, skipped=skipped)

    @classmethod
    def structured(cls, response: Response, skipped: int = 0) -> ParseResult:
        return cls(response=response, skipped=skipped)

    @classmethod
    def error(cls, message: str) -> ParseResult:
        return cls(parse_error=message)
