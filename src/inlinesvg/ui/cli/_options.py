"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
TRANSFORM_PANEL = "Transformation"
DIAGNOSTICS_PANEL = "Diagnostics"

SourceArgument = Annotated[
    list[str] | None,
    typer.Argument(
        metavar="SOURCE...",
        help="SVG sources: URLs, inline <svg> markup, or data:image/svg+xml URIs.",
        show_default=False,
        rich_help_panel=INPUTS_PANEL,
    ),
]

NoCacheOption = Annotated[
    bool,
    typer.Option(
        "--no-cache",
        help="Issue one request per source instead of sharing identical requests.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

UniquifyOption = Annotated[
    bool,
    typer.Option(
        "--uniquify/--no-uniquify",
        help="Append a per-instance suffix to ids and url() references.",
        rich_help_panel=TRANSFORM_PANEL,
    ),
]

HashOption = Annotated[
    str | None,
    typer.Option(
        "--hash",
        help="Fixed suffix used by --uniquify (random when omitted).",
        rich_help_panel=TRANSFORM_PANEL,
    ),
]

BaseUrlOption = Annotated[
    str,
    typer.Option(
        "--base-url",
        help="Prefix inserted in rewritten url() references.",
        rich_help_panel=TRANSFORM_PANEL,
    ),
]

TitleOption = Annotated[
    str | None,
    typer.Option(
        "--title",
        help="Replace the document <title>.",
        rich_help_panel=TRANSFORM_PANEL,
    ),
]

DescriptionOption = Annotated[
    str | None,
    typer.Option(
        "--description",
        help="Replace the document <desc>.",
        rich_help_panel=TRANSFORM_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
