"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
STYLE_PANEL = "Styles"
OUTPUT_PANEL = "Output"

BibliographyArgument = Annotated[
    Path,
    typer.Argument(
        metavar="BIBFILE",
        help="Bibliography file (.yml, .yaml, .json or .bib).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

TextOption = Annotated[
    Path | None,
    typer.Option(
        "--text",
        "-t",
        help="Text file whose ref{code} markers are resolved. Omit to list the bibliography.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML configuration file.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

ReferenceStyleOption = Annotated[
    str | None,
    typer.Option(
        "--reference-style",
        help="Formatter used for in-text references (e.g. 'author-year').",
        rich_help_panel=STYLE_PANEL,
    ),
]

BibliographyStyleOption = Annotated[
    str | None,
    typer.Option(
        "--bibliography-style",
        help="Formatter used for bibliography lines (e.g. 'author-title').",
        rich_help_panel=STYLE_PANEL,
    ),
]

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Output file. Prints to stdout when omitted.",
        dir_okay=False,
        resolve_path=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

CrlfOption = Annotated[
    bool,
    typer.Option(
        "--crlf",
        help="Terminate lines with CRLF instead of the configured line ending.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]
