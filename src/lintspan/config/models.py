"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (LINTSPAN__SECTION__KEY)
3. Repo YAML (.lintspan/config.yaml), or an explicit config_file
4. Global YAML (~/.config/lintspan/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    LINTSPAN__<SECTION>__<KEY>=<VALUE>

Examples:
    LINTSPAN__LOGGING__LEVEL=DEBUG
    LINTSPAN__ANNOTATION__TAB_SIZE=2
    LINTSPAN__ANNOTATION__TREAT_AS_WARNINGS=true
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        LINTSPAN__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs every skipped diagnostic.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class AnnotationConfig(BaseModel):
    """How linter diagnostics are turned into buffer annotations.

    Env vars:
        LINTSPAN__ANNOTATION__TAB_SIZE: Visual width of a tab in reported columns
        LINTSPAN__ANNOTATION__WHOLE_LINE: Highlight whole lines, ignoring columns
        LINTSPAN__ANNOTATION__SHOW_COLUMN: Append " [line:column]" to messages
        LINTSPAN__ANNOTATION__TREAT_AS_WARNINGS: Downgrade every error to a warning
        LINTSPAN__ANNOTATION__MESSAGE_PREFIX: Text prepended to line-format messages
    """

    tab_size: int = Field(
        default=4,
        description="Visual columns per tab character when resolving reported columns.",
    )
    whole_line: bool = Field(
        default=False,
        description="Highlight from the first non-whitespace character to the line end.",
    )
    show_column: bool = Field(
        default=False,
        description="Append the reported location to every message.",
    )
    treat_as_warnings: bool = Field(
        default=False,
        description="Report every diagnostic as a warning regardless of its severity.",
    )
    message_prefix: str = Field(
        default="",
        description="Prefix for line-format messages, e.g. 'Stylus: '.",
    )
    extensions: list[str] = Field(
        default_factory=lambda: [".styl"],
        description="Source file extensions the linter understands.",
    )

    @field_validator("tab_size")
    @classmethod
    def validate_tab_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Tab size must be >= 1, got {v}")
        return v

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in v]


class LintSpanConfig(BaseModel):
    """Root configuration for lintspan.

    All settings can be configured via:
    1. Environment variables: LINTSPAN__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    annotation: AnnotationConfig = Field(default_factory=AnnotationConfig)
