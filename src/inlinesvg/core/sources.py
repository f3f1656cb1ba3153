"""Classify source identifiers into inline, data URI, or remote sources."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from enum import Enum
import re
from urllib.parse import unquote

from inlinesvg.core.exceptions import ConversionError


_DATA_URI = re.compile(r"data:image/svg[^,]*?(;base64)?,(.*)", re.DOTALL)


class SourceKind(Enum):
    """How the content behind a source identifier is obtained."""

    DATA_URI = "data-uri"
    INLINE = "inline"
    REMOTE = "remote"


@dataclass(frozen=True, slots=True)
class ResolvedSource:
    """Outcome of classifying a source identifier."""

    kind: SourceKind
    source: str
    content: str | None = None

    @property
    def is_remote(self) -> bool:
        return self.kind is SourceKind.REMOTE


def decode_data_uri(payload: str, *, is_base64: bool) -> str:
    """Decode the payload of an SVG data URI."""
    if not is_base64:
        return unquote(payload)
    try:
        return base64.b64decode(payload, validate=False).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ConversionError(f"Invalid base64 SVG payload: {exc}") from exc


def classify_source(source: str) -> ResolvedSource:
    """Decide, without any I/O, how ``source`` must be loaded.

    Data URIs are decoded in place, strings holding ``<svg`` are treated as
    inline markup, anything else is a remote reference. Only a source that
    starts with the data URI scheme is decoded, so inline markup embedding a
    data URI stays inline. A data URI whose payload decodes to nothing falls
    through to the other checks.
    """
    match = _DATA_URI.match(source.strip())
    if match:
        content = decode_data_uri(match.group(2), is_base64=bool(match.group(1)))
        if content:
            return ResolvedSource(SourceKind.DATA_URI, source, content)

    if "<svg" in source:
        return ResolvedSource(SourceKind.INLINE, source, source)

    return ResolvedSource(SourceKind.REMOTE, source)


__all__ = [
    "ResolvedSource",
    "SourceKind",
    "classify_source",
    "decode_data_uri",
]
