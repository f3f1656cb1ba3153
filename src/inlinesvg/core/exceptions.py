"""Custom exception hierarchy for the SVG loading pipeline."""

from __future__ import annotations


UNSUPPORTED_MESSAGE = "Browser does not support SVG"
MISSING_SOURCE_MESSAGE = "Missing src"


class InlineSVGError(RuntimeError):
    """Base exception for SVG loading failures."""


class UnsupportedEnvironmentError(InlineSVGError):
    """Raised when the host cannot build or display SVG documents."""

    def __init__(self, message: str = UNSUPPORTED_MESSAGE) -> None:
        super().__init__(message)


class MissingSourceError(InlineSVGError):
    """Raised when a consumer is mounted or updated without a source."""

    def __init__(self, message: str = MISSING_SOURCE_MESSAGE) -> None:
        super().__init__(message)


class NetworkFailureError(InlineSVGError):
    """Raised when a remote SVG cannot be retrieved."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TLSCertificateError(NetworkFailureError):
    """Raised when TLS certificate verification fails during downloads."""


class InvalidContentTypeError(InlineSVGError):
    """Raised when a response does not advertise an SVG or plain text payload."""

    def __init__(self, content_type: str) -> None:
        super().__init__(f"Content type isn't valid: {content_type}")
        self.content_type = content_type


class ConversionError(InlineSVGError):
    """Raised when markup cannot be turned into an SVG document tree."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "MISSING_SOURCE_MESSAGE",
    "UNSUPPORTED_MESSAGE",
    "ConversionError",
    "InlineSVGError",
    "InvalidContentTypeError",
    "MissingSourceError",
    "NetworkFailureError",
    "TLSCertificateError",
    "UnsupportedEnvironmentError",
    "exception_hint",
    "exception_messages",
]
