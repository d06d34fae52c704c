"""Core module exports."""

from lintspan.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    LintSpanError,
    ParseError,
)
from lintspan.core.logging import configure_logging, get_logger

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "LintSpanError",
    "ParseError",
    # Logging
    "configure_logging",
    "get_logger",
]
