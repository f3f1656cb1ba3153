"""Typer application wiring for the inlinesvg CLI."""

from __future__ import annotations

import typer

from .commands.render import render
from .state import debug_enabled, emit_error, get_cli_state


app = typer.Typer(
    help="Load SVG sources, uniquify their identifiers, and print the result.",
    context_settings={"help_option_names": ["--help"]},
)

app.command()(render)


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except (typer.Exit, SystemExit):
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.")
        raise typer.Exit(code=1) from exc
    except Exception as exc:  # pragma: no cover
        state = get_cli_state()
        if not state.show_tracebacks:
            emit_error(str(exc), exception=exc)
            raise typer.Exit(code=1) from exc

        from rich.traceback import Traceback

        state.err_console.print(
            Traceback.from_exception(
                type(exc), exc, exc.__traceback__, show_locals=state.verbosity >= 2
            )
        )
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
