"""Config module exports."""

from lintspan.config.loader import LintSpanSettings, load_config
from lintspan.config.models import (
    AnnotationConfig,
    LintSpanConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "AnnotationConfig",
    "LintSpanConfig",
    "LintSpanSettings",
    "LoggingConfig",
    "LogOutputConfig",
]
