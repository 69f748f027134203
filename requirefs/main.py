"""Command-line interface for inspecting and running module trees."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.pretty import Pretty
from rich.table import Table

from .console import console
from .console import error_console
from .exceptions import RequireFSError
from .exceptions import ResolutionFailure
from .factory import open_loader
from .loader import ModuleLoader
from .logging_setup import init_json_logging
from .settings import LoaderSettings
from .settings import load_settings
from .utils.error_format import escape_markup
from .utils.error_format import format_error_message
from .utils.error_format import format_resolution_hint

ARCHIVE_ARGUMENT = click.argument("archive", type=click.Path(exists=True, path_type=Path))
EXTENSION_OPTION = click.option(
    "--ext",
    "extensions",
    multiple=True,
    help="Extension to probe, in order (repeatable). Overrides configured extensions.",
)


def _fail(e: BaseException) -> NoReturn:
    error_console.print(f"[red]Error:[/red] {escape_markup(format_error_message(e))}")
    if isinstance(e, ResolutionFailure):
        for line in format_resolution_hint(e):
            error_console.print(f"[dim]{escape_markup(line)}[/dim]")
    sys.exit(1)


def _open(ctx: click.Context, archive: Path, extensions: tuple[str, ...] = ()) -> ModuleLoader:
    settings: LoaderSettings = ctx.obj["settings"]
    try:
        return open_loader(archive, settings=settings, extensions=list(extensions) or None)
    except (RequireFSError, OSError) as e:
        _fail(e)


@click.group()
@click.version_option(package_name="requirefs")
@click.option("--config", type=click.Path(dir_okay=False, path_type=Path), help="Settings YAML file")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Write JSONL logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
)
@click.pass_context
def cli(ctx: click.Context, config: Path | None, log_file: str | None, log_level: str):
    """Resolve and load CommonJS-style module trees from archives."""
    if log_file:
        init_json_logging(log_file, log_level)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = load_settings(config)


@cli.command(name="ls")
@ARCHIVE_ARGUMENT
@click.pass_context
def list_files(ctx: click.Context, archive: Path):
    """List the files in ARCHIVE."""
    loader = _open(ctx, archive)
    files = loader.source.list_files()

    if not files:
        console.print("[dim]No files found.[/dim]")
        return

    table = Table(title=str(archive))
    table.add_column("Path", style="cyan")
    table.add_column("Size", justify="right")
    for path in files:
        table.add_row(escape_markup(path), str(len(loader.source.read(path))))
    console.print(table)


@cli.command(name="resolve")
@ARCHIVE_ARGUMENT
@click.argument("specifier")
@click.option("--from", "context", default=".", show_default=True, help="Directory the specifier is seen from")
@EXTENSION_OPTION
@click.option("--trace", is_flag=True, help="Show every candidate path probed")
@click.pass_context
def resolve_command(
    ctx: click.Context, archive: Path, specifier: str, context: str, extensions: tuple[str, ...], trace: bool
):
    """Print the path SPECIFIER resolves to inside ARCHIVE."""
    loader = _open(ctx, archive, extensions)
    try:
        resolved, probed = loader.resolver.resolve_with_trace(specifier, context)
    except ResolutionFailure as e:
        _fail(e)

    if trace:
        for candidate in probed:
            marker = "[green]✓[/green]" if candidate == resolved else "[dim]✗[/dim]"
            console.print(f"{marker} {escape_markup(candidate)}")
    click.echo(resolved)


@cli.command(name="run")
@ARCHIVE_ARGUMENT
@click.argument("specifier")
@EXTENSION_OPTION
@click.option("--json", "as_json", is_flag=True, help="Print exports as JSON")
@click.pass_context
def run_command(ctx: click.Context, archive: Path, specifier: str, extensions: tuple[str, ...], as_json: bool):
    """Require SPECIFIER from the root of ARCHIVE and print its exports."""
    loader = _open(ctx, archive, extensions)
    try:
        exports = loader.require(specifier)
    except Exception as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps(exports, indent=2, default=repr))
    else:
        console.print(Pretty(exports))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
