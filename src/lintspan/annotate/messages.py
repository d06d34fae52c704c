"""Compose display messages for annotations."""

from __future__ import annotations

from collections.abc import Sequence

from lintspan.annotate.models import Issue, MessagePart


def append_part(message: str, part: MessagePart) -> str:
    """Append a continuation part.

    Unlocated parts explain the preceding text and follow a colon; located
    parts reference another position and follow a space.
    """
    separator = " " if part.has_location else ": "
    return f"{message}{separator}{part.description}"


def compose_message(parts: Sequence[MessagePart]) -> str:
    """Join every part of a structured diagnostic into one string."""
    if not parts:
        return ""
    message = parts[0].description
    for part in parts[1:]:
        message = append_part(message, part)
    return message


def format_issue_message(issue: Issue, prefix: str = "") -> str:
    """``prefix + message (rule)`` for a line-format issue."""
    return f"{prefix}{issue.message.strip()} ({issue.rule or 'none'})"


def location_suffix(line: int, column: int | None) -> str:
    """`` [line:column]`` tag; a missing column is shown as -1."""
    return f" [{line}:{-1 if column is None else column}]"
