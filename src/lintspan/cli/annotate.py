"""lintspan annotate command - map linter output onto a source file."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import IO, Literal

import click
from rich.console import Console
from rich.table import Table

from lintspan.annotate.buffer import DocumentBuffer
from lintspan.annotate.models import LineRecord, MappedAnnotation, Severity, StructuredRecord
from lintspan.annotate.ops import AnnotateOps
from lintspan.annotate.paths import is_lintable_file
from lintspan.config.loader import load_config
from lintspan.core.errors import ConfigError
from lintspan.core.logging import configure_logging, get_logger


def _location(buffer: DocumentBuffer, offset: int) -> str:
    index = buffer.line_index_at(offset)
    return f"{index + 1}:{offset - buffer.line_start_offset(index) + 1}"


def format_annotation(buffer: DocumentBuffer, annotation: MappedAnnotation) -> str:
    """``start-end severity message`` with 1-based line:column locations."""
    rng = annotation.range
    return (
        f"{_location(buffer, rng.start)}-{_location(buffer, rng.end)} "
        f"{annotation.severity.value} {annotation.message}"
    )


def _render_table(buffer: DocumentBuffer, annotations: list[MappedAnnotation]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Location", no_wrap=True)
    table.add_column("Severity")
    table.add_column("Message")
    table.add_column("Fix")
    for annotation in annotations:
        rng = annotation.range
        style = "red" if annotation.severity is Severity.ERROR else "yellow"
        table.add_row(
            f"{_location(buffer, rng.start)}-{_location(buffer, rng.end)}",
            f"[{style}]{annotation.severity.value}[/{style}]",
            annotation.message,
            annotation.replacement or "",
        )
    return table


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--diagnostics",
    "-d",
    "diagnostics",
    type=click.File("r"),
    default="-",
    help="Linter output file (default: stdin)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["line", "json"]),
    default="line",
    show_default=True,
    help="Shape of the linter output",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file used instead of .lintspan/config.yaml",
)
@click.option("--path", "report_path", default=None, help="Path the linter reported for SOURCE")
@click.option("--tab-size", type=int, default=None, help="Visual width of a tab")
@click.option("--whole-line", is_flag=True, help="Highlight whole lines")
@click.option("--show-column", is_flag=True, help="Append [line:column] to messages")
@click.option("--treat-as-warnings", is_flag=True, help="Report errors as warnings")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def annotate_command(
    source: Path,
    diagnostics: IO[str],
    output_format: Literal["line", "json"],
    report_path: str | None,
    config_file: Path | None,
    tab_size: int | None,
    whole_line: bool,
    show_column: bool,
    treat_as_warnings: bool,
    as_json: bool,
) -> None:
    """Map linter output onto SOURCE and print the resulting annotations."""
    # Flags only switch options on; config files and env vars still apply otherwise
    overrides: dict[str, object] = {}
    if tab_size is not None:
        overrides["tab_size"] = tab_size
    if whole_line:
        overrides["whole_line"] = True
    if show_column:
        overrides["show_column"] = True
    if treat_as_warnings:
        overrides["treat_as_warnings"] = True

    try:
        config = load_config(
            source.parent,
            config_file=config_file,
            **({"annotation": overrides} if overrides else {}),
        )
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    verbose = bool((click.get_current_context().find_root().obj or {}).get("verbose"))
    configure_logging(config.logging, level="DEBUG" if verbose else None)

    if not is_lintable_file(str(source), config.annotation.extensions):
        raise click.ClickException(
            f"'{source}' is not a lintable file (expected: {', '.join(config.annotation.extensions)})"
        )

    buffer = DocumentBuffer.from_text(source.read_text(), path=str(source))
    output = diagnostics.read()
    raw = LineRecord(output) if output_format == "line" else StructuredRecord(output)

    annotations = AnnotateOps(config.annotation).annotate_output(
        buffer, raw, path=report_path or str(source)
    )
    get_logger("lintspan.cli").info("annotate.done", source=str(source), count=len(annotations))

    if as_json:
        click.echo(json.dumps([a.to_dict() for a in annotations], indent=2))
        return

    if not annotations:
        click.echo("No issues found.")
        return

    if sys.stdout.isatty():
        Console().print(_render_table(buffer, annotations))
    else:
        for annotation in annotations:
            click.echo(format_annotation(buffer, annotation))
