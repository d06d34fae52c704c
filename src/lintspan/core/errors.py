"""lintspan error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Parse (linter output)
- 9xxx: Internal

Parse errors never cross the public parsing API. They are raised inside the
parsers and caught at the record or payload boundary, where they are logged
and turned into skipped records or an empty ``ParseResult``.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Parse (3xxx)
    PARSE_MALFORMED_PAYLOAD = 3001
    PARSE_MALFORMED_RECORD = 3002
    PARSE_EMPTY_MESSAGE = 3003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class LintSpanError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(LintSpanError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ParseError(LintSpanError):
    """Linter output that cannot be turned into issues."""

    @classmethod
    def malformed_payload(cls, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_MALFORMED_PAYLOAD,
            message=f"Malformed linter output: {reason}",
            details={"reason": reason},
        )

    @classmethod
    def malformed_record(cls, reason: str, record: Any = None) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_MALFORMED_RECORD,
            message=f"Malformed diagnostic record: {reason}",
            details={"reason": reason, "record": repr(record)},
        )

    @classmethod
    def empty_message(cls, record: Any = None) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_EMPTY_MESSAGE,
            message="Diagnostic record has no message parts",
            details={"record": repr(record)},
        )


class InternalError(LintSpanError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
