"""Output parsers for the Stylus linter.

Two output shapes are understood:

- line format, one issue per line: ``L:C: MESSAGE (RULE)``
- structured JSON: ``{"passed": bool, "errors": [{"message": [part, ...]}]}``

Parsers never raise on bad input. A malformed record is logged and skipped;
a malformed payload is logged once and returned as ``ParseResult.error``.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from lintspan.annotate.models import (
    DiagnosticRecord,
    Issue,
    LineRecord,
    MessagePart,
    ParseResult,
    RawDiagnostic,
    Response,
    StructuredRecord,
)
from lintspan.core.errors import InternalError, ParseError

log = structlog.get_logger()

# Format: line[:column]: message [(rule)]
_LINE_PATTERN = re.compile(
    r"^\s*(?P<line>\d+)(?::(?P<column>\d+))?:\s*(?P<message>.*?)(?:\s*\((?P<rule>[^()\s]+)\))?\s*$"
)

_INT_TEXT = re.compile(r"\s*-?[0-9]+\s*")


def _as_int(value: Any, name: str, record: Any, default: int | None = None) -> int:
    if value is None and default is not None:
        return default
    if isinstance(value, bool):
        raise ParseError.malformed_record(f"'{name}' must be an integer", record)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INT_TEXT.fullmatch(value):
        return int(value)
    raise ParseError.malformed_record(f"'{name}' must be an integer, got {value!r}", record)


def _as_str(value: Any, name: str, record: Any, default: str | None = None) -> str:
    if value is None and default is not None:
        return default
    if not isinstance(value, str):
        raise ParseError.malformed_record(f"'{name}' must be a string, got {value!r}", record)
    return value


# =============================================================================
# Line Format
# =============================================================================


def parse_line(text: str) -> Issue | None:
    """Parse one ``L:C: MESSAGE (RULE)`` line; None if it does not match."""
    match = _LINE_PATTERN.match(text)
    if match is None or not match.group("message"):
        return None
    column = match.group("column")
    return Issue(
        line=int(match.group("line")),
        column=int(column) if column is not None else None,
        message=match.group("message"),
        rule=match.group("rule"),
    )


def parse_line_output(text: str) -> ParseResult:
    """Parse line-oriented linter output."""
    issues: list[Issue] = []
    skipped = 0
    for lineno, raw in enumerate(text.splitlines(), start=1):
        if not raw.strip():
            continue
        issue = parse_line(raw)
        if issue is None:
            skipped += 1
            log.debug("line_output.skipped", lineno=lineno, text=raw)
            continue
        issues.append(issue)
    return ParseResult.ok(issues, skipped=skipped)


def _issue_from_record(record: Any) -> Issue:
    if not isinstance(record, Mapping):
        raise ParseError.malformed_record("issue must be an object", record)
    message = _as_str(record.get("message"), "message", record).strip()
    if not message:
        raise ParseError.malformed_record("'message' must not be empty", record)
    column = record.get("column")
    if column is not None:
        column = _as_int(column, "column", record)
    rule = record.get("rule")
    return Issue(
        line=_as_int(record.get("line"), "line", record),
        column=None if column == -1 else column,
        message=message,
        rule=None if rule is None else _as_str(rule, "rule", record),
        severity=_as_str(record.get("severity"), "severity", record, default="warning"),
    )


def issues_from_records(records: Iterable[Any]) -> ParseResult:
    """Build issues from already-deserialized line-format records."""
    issues: list[Issue] = []
    skipped = 0
    for record in records:
        try:
            issues.append(_issue_from_record(record))
        except ParseError as e:
            skipped += 1
            log.warning("issue_record.skipped", error=e.message)
    return ParseResult.ok(issues, skipped=skipped)


# =============================================================================
# Structured Format
# =============================================================================


def _fix_text(value: Any, record: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return _as_str(value.get("replace"), "fix.replace", record)
    raise ParseError.malformed_record(f"'fix' must be a string or object, got {value!r}", record)


def _message_part(data: Any) -> MessagePart:
    if not isinstance(data, Mapping):
        raise ParseError.malformed_record("message part must be an object", data)
    path = _as_str(data.get("path"), "path", data, default="")
    line = _as_int(data.get("line"), "line", data, default=0)
    start = _as_int(data.get("start"), "start", data, default=1)
    return MessagePart(
        path=path,
        line=line,
        end_line=_as_int(data.get("endline"), "endline", data, default=line),
        start=start,
        end=_as_int(data.get("end"), "end", data, default=start),
        description=_as_str(data.get("descr"), "descr", data, default=""),
        fix=_fix_text(data.get("fix"), data),
    )


def _diagnostic_record(data: Any) -> DiagnosticRecord:
    if not isinstance(data, Mapping):
        raise ParseError.malformed_record("error must be an object", data)
    message = data.get("message")
    if message is None or (isinstance(message, list) and not message):
        raise ParseError.empty_message(data)
    if not isinstance(message, list):
        raise ParseError.malformed_record("'message' must be a list", data)
    return DiagnosticRecord(
        parts=tuple(_message_part(part) for part in message),
        severity=_as_str(data.get("severity"), "severity", data, default="error"),
    )


def _load_payload(payload: str | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise ParseError.malformed_payload(f"invalid JSON: {e}") from e
        except RecursionError as e:
            raise ParseError.malformed_payload("JSON nested too deeply") from e
    if not isinstance(payload, Mapping):
        raise ParseError.malformed_payload("top level must be an object")
    return payload


def parse_structured_output(payload: str | Mapping[str, Any]) -> ParseResult:
    """Parse structured linter output (JSON text or decoded mapping)."""
    try:
        data = _load_payload(payload)
        passed = data.get("passed")
        if not isinstance(passed, bool):
            raise ParseError.malformed_payload("'passed' must be a boolean")
        errors = data.get("errors")
        if errors is not None and not isinstance(errors, list):
            raise ParseError.malformed_payload("'errors' must be a list")
    except ParseError as e:
        log.error("structured_output.parse_failed", error=e.message)
        return ParseResult.error(e.message)

    if passed:
        log.debug("structured_output.passed")
        return ParseResult.structured(Response(passed=True))

    if not errors:
        log.error("structured_output.failed_without_errors")
        return ParseResult.structured(Response(passed=False))

    records: list[DiagnosticRecord] = []
    skipped = 0
    for index, item in enumerate(errors):
        try:
            records.append(_diagnostic_record(item))
        except ParseError as e:
            skipped += 1
            log.error("structured_output.record_skipped", index=index, error=e.message)
    return ParseResult.structured(Response(passed=False, errors=tuple(records)), skipped=skipped)


def parse_diagnostics(raw: RawDiagnostic) -> ParseResult:
    """Parse either output shape."""
    if isinstance(raw, LineRecord):
        return parse_line_output(raw.text)
    if isinstance(raw, StructuredRecord):
        return parse_structured_output(raw.payload)
    raise InternalError.unexpected("unsupported diagnostic output", type=type(raw).__name__)
