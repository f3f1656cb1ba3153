"""Primary public API for inlinesvg."""

from __future__ import annotations

from inlinesvg.core import (
    CacheResult,
    ConversionError,
    FetchCache,
    Fetcher,
    HttpResponse,
    InlineSVGError,
    InvalidContentTypeError,
    LoaderOptions,
    LoadStatus,
    MissingSourceError,
    NetworkFailureError,
    RuntimeSettings,
    UnsupportedEnvironmentError,
    classify_source,
    fetch_cache_context,
    get_fetch_cache,
    set_fetch_cache,
    transform_svg,
)
from inlinesvg.loader import InlineSVG, load_svg
from inlinesvg.version import get_version


__version__ = get_version()


__all__ = [
    "CacheResult",
    "ConversionError",
    "FetchCache",
    "Fetcher",
    "HttpResponse",
    "InlineSVG",
    "InlineSVGError",
    "InvalidContentTypeError",
    "LoadStatus",
    "LoaderOptions",
    "MissingSourceError",
    "NetworkFailureError",
    "RuntimeSettings",
    "UnsupportedEnvironmentError",
    "__version__",
    "classify_source",
    "fetch_cache_context",
    "get_fetch_cache",
    "get_version",
    "load_svg",
    "set_fetch_cache",
    "transform_svg",
]
