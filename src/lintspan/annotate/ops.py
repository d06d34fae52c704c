"""Annotate operations - turn parsed linter output into buffer annotations."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from lintspan.annotate.buffer import TextBuffer
from lintspan.annotate.mapper import map_position, map_span
from lintspan.annotate.messages import compose_message, format_issue_message, location_suffix
from lintspan.annotate.models import (
    DiagnosticRecord,
    Issue,
    MappedAnnotation,
    RawDiagnostic,
    Response,
)
from lintspan.annotate.parsers import parse_diagnostics
from lintspan.annotate.paths import STDIN_PATH, is_same_file
from lintspan.annotate.severity import classify_severity
from lintspan.config.models import AnnotationConfig

log = structlog.get_logger()


class AnnotateOps:
    """Map linter diagnostics onto a text buffer.

    Holds configuration only. Every call receives its buffer and output
    explicitly, so one instance can serve any number of documents at once.
    """

    def __init__(self, config: AnnotationConfig | None = None) -> None:
        self._config = config or AnnotationConfig()

    @property
    def config(self) -> AnnotationConfig:
        return self._config

    def annotate_issue(self, buffer: TextBuffer, issue: Issue) -> MappedAnnotation | None:
        """Annotation for one line-format issue, None if it is out of sync."""
        cfg = self._config
        position = map_position(
            buffer,
            issue.line,
            issue.column,
            tab_size=cfg.tab_size,
            whole_line=cfg.whole_line,
        )
        if position is None:
            log.debug("issue.not_mapped", line=issue.line, column=issue.column)
            return None

        message = format_issue_message(issue, cfg.message_prefix)
        if cfg.show_column:
            message += location_suffix(issue.line, issue.column)

        return MappedAnnotation(
            message=message,
            range=position.range,
            severity=classify_severity(issue.severity, cfg.treat_as_warnings),
            after_end_of_line=position.after_end_of_line,
        )

    def annotate_issues(self, buffer: TextBuffer, issues: Iterable[Issue]) -> list[MappedAnnotation]:
        annotations: list[MappedAnnotation] = []
        for issue in issues:
            annotation = self.annotate_issue(buffer, issue)
            if annotation is not None:
                annotations.append(annotation)
        return annotations

    def annotate_record(
        self, buffer: TextBuffer, path: str, record: DiagnosticRecord
    ) -> list[MappedAnnotation]:
        """One annotation per located part of ``record`` that lies in ``path``."""
        cfg = self._config
        message = compose_message(record.parts)
        if cfg.show_column:
            message += location_suffix(record.primary.line, record.primary.start)
        severity = classify_severity(record.severity, cfg.treat_as_warnings)

        log.debug("record.composed", message=message)

        annotations: list[MappedAnnotation] = []
        for part in record.parts:
            if not part.has_location:
                continue
            if not is_same_file(path, part.path):
                log.debug("part.other_file", path=part.path, buffer_path=path)
                continue
            rng = map_span(buffer, part.line, part.start, part.end_line, part.end)
            if rng is None:
                log.debug(
                    "part.not_mapped",
                    line=part.line,
                    start=part.start,
                    end_line=part.end_line,
                    end=part.end,
                )
                continue
            annotations.append(
                MappedAnnotation(
                    message=message,
                    range=rng,
                    severity=severity,
                    replacement=part.fix,
                )
            )
        return annotations

    def annotate_response(
        self, buffer: TextBuffer, path: str, response: Response
    ) -> list[MappedAnnotation]:
        if response.passed:
            return []
        annotations: list[MappedAnnotation] = []
        for record in response.errors:
            annotations.extend(self.annotate_record(buffer, path, record))
        if annotations:
            log.info("response.annotated", path=path, count=len(annotations))
        return annotations

    def annotate_output(
        self, buffer: TextBuffer, raw: RawDiagnostic, path: str | None = None
    ) -> list[MappedAnnotation]:
        """Parse ``raw`` linter output and map it onto ``buffer``.

        ``path`` is the buffer's file path, used to filter structured
        diagnostics that point into other files. It defaults to the buffer's
        own ``path`` attribute, then to stdin (``-``).

        Already-decoded line records take two steps instead:
        ``annotate_issues(buffer, issues_from_records(records).issues)``.
        """
        path = path or getattr(buffer, "path", None) or STDIN_PATH
        result = parse_diagnostics(raw)
        if not result.success:
            return []
        if result.response is not None:
            return self.annotate_response(buffer, path, result.response)
        return self.annotate_issues(buffer, result.issues)
