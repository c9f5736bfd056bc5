"""Typer CLI entrypoints."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from arbor.config.settings import InterpreterSettings, load_settings
from arbor.core.errors import ArborError
from arbor.interpreter import Interpreter
from arbor.logging_utils import configure_logging

app = typer.Typer(name="arbor", help="Interpreter for the Arbor tree-rewriting language", add_completion=False)
err_console = Console(stderr=True, soft_wrap=True)

FileArgument = Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Program file")]


def _report(error: ArborError) -> None:
    err_console.print(f"[bold red]{escape(f'error[{error.kind}]')}[/bold red]: {escape(error.describe())}")


def _prepare(settings: InterpreterSettings) -> Interpreter:
    configure_logging(profile="cli")
    return Interpreter(settings, write=typer.echo)


@app.command()
def run(
    file: FileArgument,
    no_hoist: Annotated[bool, typer.Option("--no-hoist", help="Only call functions defined earlier")] = False,
    raw: Annotated[bool, typer.Option("--raw", help="display writes strings without quotes")] = False,
) -> None:
    """Parse, check and evaluate a program."""
    settings = load_settings(
        hoist_definitions=False if no_hoist else None,
        raw_display=True if raw else None,
    )
    interpreter = _prepare(settings)
    logger.info("cli.run file={} hoist={} raw={}", str(file), settings.hoist_definitions, settings.raw_display)
    try:
        interpreter.run_file(file)
    except ArborError as e:
        _report(e)
        raise typer.Exit(1) from None
    except RecursionError:
        err_console.print("[bold red]error[RecursionError][/bold red]: maximum evaluation depth exceeded")
        raise typer.Exit(1) from None


@app.command()
def check(file: FileArgument) -> None:
    """Parse and check a program without running it."""
    interpreter = _prepare(load_settings())
    try:
        interpreter.compile(file.read_text(encoding="utf-8"), str(file))
    except ArborError as e:
        _report(e)
        raise typer.Exit(1) from None
    typer.echo("ok")


@app.command()
def lower(file: FileArgument) -> None:
    """Print the canonical items of a program, one per line."""
    interpreter = _prepare(load_settings())
    try:
        items = interpreter.compile(file.read_text(encoding="utf-8"), str(file))
    except ArborError as e:
        _report(e)
        raise typer.Exit(1) from None
    for item in items:
        typer.echo(str(item))


if __name__ == "__main__":
    app()
