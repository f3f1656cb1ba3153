"""Console and verbosity state shared by the CLI command."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
import sys

from rich.console import Console
from rich.text import Text

from inlinesvg.core.exceptions import exception_hint


@dataclass(slots=True)
class CLIState:
    """Verbosity and output consoles for one CLI invocation."""

    verbosity: int = 0
    show_tracebacks: bool = False
    _console: Console | None = field(default=None, init=False, repr=False)
    _err_console: Console | None = field(default=None, init=False, repr=False)

    # Streams are looked up on every access so redirected stdio (test runners,
    # pipes opened after start-up) is honoured.
    @property
    def console(self) -> Console:
        if self._console is None or self._console.file is not sys.stdout:
            self._console = Console(file=sys.stdout)
        return self._console

    @property
    def err_console(self) -> Console:
        if self._err_console is None or self._err_console.file is not sys.stderr:
            self._err_console = Console(file=sys.stderr, highlight=False)
        return self._err_console


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("inlinesvg_cli_state", default=None)


def get_cli_state() -> CLIState:
    """Return the active CLI state, creating a quiet default when unset."""
    state = _STATE_VAR.get()
    if state is None:
        state = CLIState()
        _STATE_VAR.set(state)
    return state


def set_cli_state(*, verbosity: int = 0, debug: bool = False) -> CLIState:
    """Install a fresh state for the current invocation."""
    state = CLIState(verbosity=max(0, verbosity), show_tracebacks=debug)
    _STATE_VAR.set(state)
    return state


def debug_enabled() -> bool:
    """Return whether full tracebacks should be displayed."""
    return get_cli_state().show_tracebacks


def _emit(level: str, style: str, message: str, exception: BaseException | None) -> None:
    state = get_cli_state()
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None and state.verbosity >= 1:
        hint = exception_hint(exception)
        if hint and hint not in message:
            text.append(f"\n  caused by: {hint}", style=style)
        text.append(f"\n  type: {type(exception).__name__}", style=style)
    state.err_console.print(text)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    """Print an error to stderr; ``-v`` adds the exception type and root cause."""
    _emit("error", "red", message, exception)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    _emit("warning", "yellow", message, exception)


def emit_info(message: str) -> None:
    """Print a progress message to stderr when ``-v`` is given."""
    state = get_cli_state()
    if state.verbosity >= 1:
        state.err_console.print(Text(message, style="dim"))


__all__ = [
    "CLIState",
    "debug_enabled",
    "emit_error",
    "emit_info",
    "emit_warning",
    "get_cli_state",
    "set_cli_state",
]
