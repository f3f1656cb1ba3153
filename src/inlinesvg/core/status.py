"""Load status values, transition rules, and error classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from inlinesvg.core.exceptions import UNSUPPORTED_MESSAGE, InlineSVGError


class LoadStatus(str, Enum):
    """Visible lifecycle of a consumer load."""

    PENDING = "pending"
    LOADING = "loading"
    LOADED = "loaded"
    READY = "ready"
    FAILED = "failed"
    UNSUPPORTED = "unsupported"

    @property
    def is_terminal(self) -> bool:
        """Return True when no automatic transition follows this status."""
        return self in _TERMINAL


_TERMINAL = frozenset({LoadStatus.READY, LoadStatus.FAILED, LoadStatus.UNSUPPORTED})

# LOADING (source reassignment), FAILED and UNSUPPORTED are reachable from any
# status; only the forward steps of a load are constrained.
_ALWAYS_ALLOWED = frozenset({LoadStatus.LOADING, LoadStatus.FAILED, LoadStatus.UNSUPPORTED})
_TRANSITIONS: dict[LoadStatus, frozenset[LoadStatus]] = {
    LoadStatus.LOADING: frozenset({LoadStatus.LOADED}),
    LoadStatus.LOADED: frozenset({LoadStatus.READY}),
}


class InvalidTransitionError(InlineSVGError):
    """Raised when a status change violates the load lifecycle."""

    def __init__(self, current: LoadStatus, target: LoadStatus) -> None:
        super().__init__(f"Cannot move from '{current.value}' to '{target.value}'")
        self.current = current
        self.target = target


@dataclass(slots=True)
class StatusTracker:
    """Track the status of a single consumer and enforce legal transitions."""

    status: LoadStatus = LoadStatus.PENDING
    history: list[LoadStatus] = field(default_factory=list, repr=False)

    def can_transition(self, target: LoadStatus) -> bool:
        if target in _ALWAYS_ALLOWED:
            return True
        return target in _TRANSITIONS.get(self.status, frozenset())

    def transition(self, target: LoadStatus) -> LoadStatus:
        """Move to ``target`` and return the previous status."""
        if not self.can_transition(target):
            raise InvalidTransitionError(self.status, target)
        previous = self.status
        self.history.append(previous)
        self.status = target
        return previous


def classify_error(exc: BaseException) -> LoadStatus:
    """Map a failure onto the terminal status it produces.

    Only the exact unsupported-environment message yields ``UNSUPPORTED``;
    every other failure, whatever its class, is ``FAILED``.
    """
    if str(exc) == UNSUPPORTED_MESSAGE:
        return LoadStatus.UNSUPPORTED
    return LoadStatus.FAILED


__all__ = [
    "InvalidTransitionError",
    "LoadStatus",
    "StatusTracker",
    "classify_error",
]
