"""Main CLI entry point for schema-bridge.

Converts between Zod schema source and comment-bearing schema documents
from the command line. Every input argument accepts ``-`` for stdin.
"""

from pathlib import Path
from typing import IO
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from schema_bridge import __version__
from schema_bridge.config.base import ConverterSettings
from schema_bridge.config.loader import SettingsLoader, load_settings
from schema_bridge.engine.conversion_engine import ConversionEngine, ConversionResult, Direction
from schema_bridge.errors import ConversionError, MalformedInput
from schema_bridge.generators.zod_generator import reindent as reindent_source
from schema_bridge.schemas.base import SchemaNode
from schema_bridge.schemas.document import is_schema_document
from schema_bridge.utils.logging import configure_logging

console = Console()

_DIRECTIONS = [direction.value for direction in Direction]


@click.group()
@click.version_option(version=__version__, prog_name="schema-bridge")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Settings YAML file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """Schema Bridge - Convert between Zod schemas and JSON schema documents.

    Documents may carry // and /* */ comments; descriptions are written
    back out as comments.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    try:
        settings = load_settings(config_path) if config_path else ConverterSettings()
    except ConversionError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    ctx.obj["settings"] = settings
    configure_logging("DEBUG" if verbose else settings.log_level)


@cli.command("to-json")
@click.argument("source_file", type=click.File("r"))
@click.option("--output", "-o", type=click.Path(), help="Output file (stdout if not specified)")
@click.option("--comments/--no-comments", default=None, help="Emit description comments")
@click.pass_context
def to_json(ctx: click.Context, source_file: IO[str], output: str | None, comments: bool | None) -> None:
    """Convert Zod source into a schema document.

    SOURCE_FILE is the path to the Zod source file.
    """
    engine = ConversionEngine(settings=ctx.obj["settings"])
    result = engine.convert_source_to_document(source_file.read(), include_comments=comments)
    _finish(ctx, result, output)


@cli.command("to-zod")
@click.argument("document_file", type=click.File("r"))
@click.option("--output", "-o", type=click.Path(), help="Output file (stdout if not specified)")
@click.option("--reindent/--no-reindent", default=None, help="Lay the source out over multiple lines")
@click.pass_context
def to_zod(ctx: click.Context, document_file: IO[str], output: str | None, reindent: bool | None) -> None:
    """Convert a schema document into Zod source.

    DOCUMENT_FILE is the path to the (JSON with comments) schema document.
    """
    settings: ConverterSettings = ctx.obj["settings"]
    if reindent is not None:
        settings = settings.model_copy(update={"reindent_source": reindent})

    engine = ConversionEngine(settings=settings)
    result = engine.convert_document_to_source(document_file.read())
    _finish(ctx, result, output)


@cli.command()
@click.argument("input_file", type=click.File("r"))
@click.option("--direction", "-d", type=click.Choice(_DIRECTIONS), help="Conversion direction (detected if not specified)")
@click.option("--output", "-o", type=click.Path(), help="Output file (stdout if not specified)")
@click.pass_context
def convert(ctx: click.Context, input_file: IO[str], direction: str | None, output: str | None) -> None:
    """Convert a file in either direction.

    Documents are recognized by a top-level "type" field; anything else is
    treated as Zod source.
    """
    text = input_file.read()
    engine = ConversionEngine(settings=ctx.obj["settings"])
    result = engine.convert(direction or _detect_direction(text), text)
    _finish(ctx, result, output)


@cli.command()
@click.argument("source_file", type=click.File("r"))
@click.option("--output", "-o", type=click.Path(), help="Output file (stdout if not specified)")
@click.option("--indent", "-i", type=click.IntRange(1, 8), help="Spaces per nesting level")
@click.pass_context
def reindent(ctx: click.Context, source_file: IO[str], output: str | None, indent: int | None) -> None:
    """Re-indent Zod source, one entry per line."""
    settings: ConverterSettings = ctx.obj["settings"]
    text = reindent_source(source_file.read().strip(), indent or settings.indent)
    _write_output(text, output)


@cli.command()
@click.argument("input_file", type=click.File("r"))
@click.option("--direction", "-d", type=click.Choice(_DIRECTIONS), help="Read the input as source or document")
@click.pass_context
def inspect(ctx: click.Context, input_file: IO[str], direction: str | None) -> None:
    """Show the schema model read from a source file or document."""
    text = input_file.read()
    engine = ConversionEngine(settings=ctx.obj["settings"])
    result = engine.convert(direction or _detect_direction(text), text)

    if result.error is not None:
        _fail(ctx, result.error)

    _print_schema_table(result.node)


@cli.command("init-config")
@click.option("--output", "-o", type=click.Path(), default="schema-bridge.yaml", help="Output file path")
@click.pass_context
def init_config(ctx: click.Context, output: str) -> None:
    """Initialize a settings file with the default values."""
    loader = SettingsLoader()
    loader.save_file(ConverterSettings(), output)

    console.print(f"[green]Created settings: {output}[/green]")


def _detect_direction(text: str) -> Direction:
    if is_schema_document(text):
        return Direction.DOCUMENT_TO_SOURCE
    return Direction.SOURCE_TO_DOCUMENT


def _finish(ctx: click.Context, result: ConversionResult, output: str | None) -> None:
    if result.error is not None:
        _fail(ctx, result.error)
    _write_output(result.output, output)


def _write_output(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text + "\n")
        console.print(f"[green]Wrote {output}[/green]")
    else:
        click.echo(text)


def _fail(ctx: click.Context, error: ConversionError) -> None:
    """Print a conversion error and exit with status 1."""
    if isinstance(error, MalformedInput):
        console.print(f"[red]Error: {escape(error.reason)}[/red]")
        if error.line is not None:
            console.print(f"  Line {error.line}, column {error.column}")
        if error.excerpt:
            console.print(Panel(escape(error.excerpt), title="Near", expand=False))
    else:
        console.print(f"[red]Error: {escape(error.message)}[/red]")

    if ctx.obj.get("verbose", False):
        console.print(error.to_dict())
    sys.exit(1)


def _print_schema_table(node: SchemaNode) -> None:
    """Print a schema tree as a table."""
    table = Table(title="Schema")
    table.add_column("Path", style="cyan")
    table.add_column("Kind")
    table.add_column("Flags")
    table.add_column("Description")

    for path, child in node.walk():
        flags = [name for name in ("nullable", "optional") if getattr(child, name)]
        table.add_row(
            escape(path),
            child.kind.value,
            ", ".join(flags),
            escape(child.description or ""),
        )

    console.print(table)


if __name__ == "__main__":
    cli()
