"""Typer application wiring for the citesmith CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from citesmith.core.config import CitationConfig, config_from_mapping, load_config
from citesmith.core.exceptions import CitationError
from citesmith.core.formatters import get_formatter
from citesmith.core.pipeline import process_bibliography, write_document
from citesmith.core.resolver import find_citations
from citesmith.core.sources import load_store
from citesmith.version import get_version

from ._options import (
    BibliographyArgument,
    BibliographyStyleOption,
    ConfigOption,
    CrlfOption,
    OutputOption,
    ReferenceStyleOption,
    TextOption,
)
from .bibliography import print_bibliography_overview
from .diagnostics import CliEmitter
from .state import debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Resolve ref{code} citations against a bibliography.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"citesmith {get_version()}")
        raise typer.Exit()


@app.callback()
def _app_root(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show the installed version and exit.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
) -> None:
    ctx.obj = get_cli_state(ctx)
    set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)


def _resolve_config(
    config_path: Path | None,
    reference_style: str | None,
    bibliography_style: str | None,
    crlf: bool,
) -> CitationConfig:
    config = load_config(config_path) if config_path else CitationConfig()
    overrides: dict[str, str] = {}
    if reference_style is not None:
        overrides["reference_style"] = reference_style
    if bibliography_style is not None:
        overrides["bibliography_style"] = bibliography_style
    if crlf:
        overrides["line_ending"] = "crlf"
    if not overrides:
        return config
    return config_from_mapping({**config.model_dump(), **overrides})


@app.command(name="resolve")
def resolve(
    bibliography: BibliographyArgument,
    text: TextOption = None,
    config_path: ConfigOption = None,
    reference_style: ReferenceStyleOption = None,
    bibliography_style: BibliographyStyleOption = None,
    crlf: CrlfOption = False,
    output: OutputOption = None,
) -> None:
    """Replace citations in a text and emit the matching bibliography."""
    state = get_cli_state()
    try:
        config = _resolve_config(config_path, reference_style, bibliography_style, crlf)
        store = load_store(bibliography, encoding=config.encoding)
        source = text.read_text(encoding=config.encoding) if text is not None else None
        document = process_bibliography(
            source,
            store,
            get_formatter(config.reference_style),
            get_formatter(config.bibliography_style),
            newline=config.newline,
            emitter=CliEmitter(state),
        )
    except (CitationError, OSError, UnicodeDecodeError) as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(document.render(), nl=False)
        return

    try:
        write_document(output, document, encoding=config.encoding)
    except OSError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    state.err_console.print("Done")


@app.command(name="list")
def list_entries(bibliography: BibliographyArgument) -> None:
    """Load a bibliography file and print an overview table."""
    try:
        store = load_store(bibliography)
    except CitationError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    print_bibliography_overview(store, get_cli_state().console)


@app.command(name="cited")
def cited(
    source: Annotated[
        Path,
        typer.Argument(
            metavar="TEXTFILE",
            help="Text file to scan for ref{code} markers.",
            exists=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    config_path: ConfigOption = None,
) -> None:
    """Print the cited codes in order of first appearance.

    The text is read with the configured encoding, UTF-8 by default.
    """
    try:
        config = load_config(config_path) if config_path else CitationConfig()
        content = source.read_text(encoding=config.encoding)
    except (CitationError, OSError, UnicodeDecodeError) as exc:
        emit_error(f"Failed to read '{source}'.", exception=exc)
        raise typer.Exit(code=1) from exc
    for code in find_citations(content):
        typer.echo(code)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - defensive catch-all
        state = get_cli_state()
        if state.show_tracebacks:
            from rich.traceback import Traceback

            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
