"""Logging setup for lintspan.

structlog renders every event while stdlib logging owns the handlers, so
file outputs are opened and closed by the logging module. Diagnostics that
cannot be parsed or mapped are reported as events (``line_output.skipped``,
``part.not_mapped``) instead of being raised, and this is where they surface.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from lintspan.config.models import LoggingConfig, LogOutputConfig


def _level_number(name: str | None, fallback: int) -> int:
    if not name:
        return fallback
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else fallback


def _console_stream(destination: str) -> TextIO | None:
    # Looked up per call so redirected streams (pytest, CliRunner) are honoured
    if destination == "stderr":
        return sys.stderr
    if destination == "stdout":
        return sys.stdout
    return None


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]


def _build_handler(
    output: LogOutputConfig,
    pre_chain: list[structlog.types.Processor],
    root_level: int,
) -> logging.Handler:
    stream = _console_stream(output.destination)
    handler: logging.Handler
    if stream is not None:
        handler = logging.StreamHandler(stream)
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")

    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=stream is not None and stream.isatty(),
            pad_event_to=0,
            pad_level=False,
        )

    handler.setLevel(_level_number(output.level, root_level))
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )
    return handler


def configure_logging(
    config: LoggingConfig | None = None,
    *,
    json_format: bool = False,
    level: str | None = None,
) -> None:
    """Route structlog events through one stdlib handler per configured output.

    Args:
        config: Logging section of the loaded config. Without one a single
            stderr output is used, rendered as JSON when ``json_format`` is set.
        json_format: Render the default stderr output as JSON.
        level: Overrides the configured root level (the CLI's ``--verbose``).
    """
    from lintspan.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            outputs=[LogOutputConfig(format="json" if json_format else "console")]
        )

    root_level = _level_number(level or config.level, logging.WARNING)
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfigured per command once config files are read
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()
    root.setLevel(root_level)
    for output in config.outputs:
        root.addHandler(_build_handler(output, pre_chain, root_level))


def get_logger(name: str | None = None) -> structlog.types.FilteringBoundLogger:
    """Logger with ``logger=name`` bound to every event."""
    if name:
        return structlog.get_logger(logger=name)  # type: ignore[no-any-return]
    return structlog.get_logger()  # type: ignore[no-any-return]
