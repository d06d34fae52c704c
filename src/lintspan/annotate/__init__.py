"""Annotate module - map linter diagnostics onto text buffers."""

from lintspan.annotate.buffer import DocumentBuffer, Element, ElementKind, TextBuffer
from lintspan.annotate.mapper import MappedPosition, map_position, map_span
from lintspan.annotate.messages import compose_message, format_issue_message
from lintspan.annotate.models import (
    DiagnosticRecord,
    Issue,
    LineRecord,
    MappedAnnotation,
    MessagePart,
    ParseResult,
    RawDiagnostic,
    Response,
    Severity,
    StructuredRecord,
    TextRange,
)
from lintspan.annotate.ops import AnnotateOps
from lintspan.annotate.parsers import (
    issues_from_records,
    parse_diagnostics,
    parse_line_output,
    parse_structured_output,
)
from lintspan.annotate.paths import is_lintable_file, is_same_file
from lintspan.annotate.severity import classify_severity

__all__ = [
    "AnnotateOps",
    "DiagnosticRecord",
    "DocumentBuffer",
    "Element",
    "ElementKind",
    "Issue",
    "LineRecord",
    "MappedAnnotation",
    "MappedPosition",
    "MessagePart",
    "ParseResult",
    "RawDiagnostic",
    "Response",
    "Severity",
    "StructuredRecord",
    "TextBuffer",
    "TextRange",
    "classify_severity",
    "compose_message",
    "format_issue_message",
    "is_lintable_file",
    "is_same_file",
    "issues_from_records",
    "map_position",
    "map_span",
    "parse_diagnostics",
    "parse_line_output",
    "parse_structured_output",
]
