"""HTTP helpers used to retrieve remote SVG documents."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
import functools
import logging
import re
from typing import Protocol, runtime_checkable

import requests

from inlinesvg.core.config import RuntimeSettings
from inlinesvg.core.exceptions import (
    InvalidContentTypeError,
    NetworkFailureError,
    TLSCertificateError,
)
from inlinesvg.version import get_version


logger = logging.getLogger(__name__)

ACCEPTED_CONTENT_TYPES: tuple[str, ...] = ("image/svg+xml", "text/plain")
_CONTENT_TYPE_SPLIT = re.compile(r" ?; ?")


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Minimal response shape consumed by the loader."""

    status_code: int
    text: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def content_type(self) -> str:
        """Return the media type, without parameters, in a case-insensitive way."""
        raw = ""
        for key, value in self.headers.items():
            if key.lower() == "content-type":
                raw = value or ""
                break
        return _CONTENT_TYPE_SPLIT.split(raw)[0]


@runtime_checkable
class Fetcher(Protocol):
    """Coroutine performing a single GET request."""

    async def __call__(self, url: str) -> HttpResponse: ...


def _tls_help(url: str) -> str:
    return (
        "TLS certificate verification failed while downloading "
        f"'{url}'. On macOS run the Python 'Install Certificates.command' "
        "(from the python.org installer). On Windows run 'py -m pip install --upgrade certifi'. "
        "On Linux install your 'ca-certificates' package (apt/yum/apk). "
        "Also check system date/time and any proxy or corporate SSL inspection."
    )


def _default_user_agent(settings: RuntimeSettings) -> str:
    if settings.user_agent:
        return settings.user_agent
    return f"inlinesvg/{get_version()}"


def validate_response(response: HttpResponse) -> str:
    """Return the body of ``response`` or raise when it is not usable SVG text."""
    if response.status_code > 299:
        raise NetworkFailureError("Not Found", status_code=response.status_code)

    file_type = response.content_type
    if not any(accepted in file_type for accepted in ACCEPTED_CONTENT_TYPES):
        raise InvalidContentTypeError(file_type)

    return response.text


class RequestsFetcher:
    """Perform GET requests with ``requests`` on the event loop's executor."""

    def __init__(
        self,
        *,
        timeout: float | None = None,
        user_agent: str | None = None,
        settings: RuntimeSettings | None = None,
    ) -> None:
        settings = settings or RuntimeSettings.from_env()
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.user_agent = user_agent or _default_user_agent(settings)

    def get(self, url: str) -> HttpResponse:
        """Blocking GET returning an :class:`HttpResponse`."""
        headers = {"User-Agent": self.user_agent}
        try:
            response = requests.get(url, timeout=self.timeout, headers=headers)
        except requests.exceptions.SSLError as exc:
            raise TLSCertificateError(_tls_help(url)) from exc
        except requests.exceptions.RequestException as exc:
            raise NetworkFailureError(f"Failed to fetch '{url}': {exc}") from exc

        return HttpResponse(
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
        )

    async def __call__(self, url: str) -> HttpResponse:
        loop = asyncio.get_running_loop()
        logger.debug("GET %s (timeout=%s)", url, self.timeout)
        return await loop.run_in_executor(None, functools.partial(self.get, url))


__all__ = [
    "ACCEPTED_CONTENT_TYPES",
    "Fetcher",
    "HttpResponse",
    "RequestsFetcher",
    "validate_response",
]
