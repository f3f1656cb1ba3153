"""Core building blocks: sources, cache, status, and SVG transformation."""

from __future__ import annotations

from .cache import (
    CacheEntry,
    CacheResult,
    CacheStatus,
    FetchCache,
    fetch_cache_context,
    get_fetch_cache,
    set_fetch_cache,
)
from .config import LoaderOptions, RuntimeSettings
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .environment import DefaultCapabilities, HostCapabilities, StaticCapabilities
from .exceptions import (
    ConversionError,
    InlineSVGError,
    InvalidContentTypeError,
    MissingSourceError,
    NetworkFailureError,
    TLSCertificateError,
    UnsupportedEnvironmentError,
)
from .http import Fetcher, HttpResponse, RequestsFetcher, validate_response
from .sources import ResolvedSource, SourceKind, classify_source
from .status import InvalidTransitionError, LoadStatus, StatusTracker, classify_error
from .transform import inject_metadata, random_hash, transform_svg, uniquify_ids


__all__ = [
    "CacheEntry",
    "CacheResult",
    "CacheStatus",
    "ConversionError",
    "DefaultCapabilities",
    "DiagnosticEmitter",
    "FetchCache",
    "Fetcher",
    "HostCapabilities",
    "HttpResponse",
    "InlineSVGError",
    "InvalidContentTypeError",
    "InvalidTransitionError",
    "LoadStatus",
    "LoaderOptions",
    "LoggingEmitter",
    "MissingSourceError",
    "NetworkFailureError",
    "NullEmitter",
    "RequestsFetcher",
    "ResolvedSource",
    "RuntimeSettings",
    "SourceKind",
    "StaticCapabilities",
    "StatusTracker",
    "TLSCertificateError",
    "UnsupportedEnvironmentError",
    "classify_error",
    "classify_source",
    "fetch_cache_context",
    "get_fetch_cache",
    "inject_metadata",
    "random_hash",
    "set_fetch_cache",
    "transform_svg",
    "uniquify_ids",
    "validate_response",
]
