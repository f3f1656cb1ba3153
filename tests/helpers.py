"""Shared fakes and sample documents for the test suite."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

from inlinesvg.core.http import HttpResponse


SVG_HEADERS = {"Content-Type": "image/svg+xml; charset=utf-8"}

SAMPLE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
    'viewBox="0 0 10 10">'
    "<title>Original</title>"
    '<defs><linearGradient id="grad"><stop offset="0"/></linearGradient></defs>'
    '<rect id="x" fill="url(#grad)" width="10" height="10"/>'
    '<use href="#x"/>'
    "</svg>"
)


def svg_response(text: str = SAMPLE_SVG, *, status_code: int = 200) -> HttpResponse:
    return HttpResponse(status_code=status_code, text=text, headers=dict(SVG_HEADERS))


class FakeFetcher:
    """Async fetcher recording calls; responses can be held back with ``hold``."""

    def __init__(
        self,
        responses: Mapping[str, HttpResponse | Exception] | None = None,
        *,
        default: HttpResponse | Exception | None = None,
    ) -> None:
        self.responses = dict(responses or {})
        self.default = default if default is not None else svg_response()
        self.calls: list[str] = []
        self._gate: asyncio.Event | None = None

    def hold(self) -> None:
        self._gate = asyncio.Event()

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()

    async def __call__(self, url: str) -> HttpResponse:
        self.calls.append(url)
        if self._gate is not None:
            await self._gate.wait()
        outcome = self.responses.get(url, self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


async def settle() -> None:
    """Let every ready callback and task on the loop run."""
    for _ in range(5):
        await asyncio.sleep(0)
