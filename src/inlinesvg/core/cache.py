"""Process-wide request cache coalescing concurrent loads of the same source."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
import logging
from threading import RLock

from inlinesvg.core.diagnostics import DiagnosticEmitter, record_event
from inlinesvg.core.http import Fetcher, RequestsFetcher, validate_response


logger = logging.getLogger(__name__)

__all__ = [
    "CacheEntry",
    "CacheResult",
    "CacheStatus",
    "FetchCache",
    "fetch_cache_context",
    "get_fetch_cache",
    "set_fetch_cache",
]


class CacheStatus(Enum):
    LOADING = "loading"
    LOADED = "loaded"


@dataclass(frozen=True, slots=True)
class CacheResult:
    """Content delivered to a waiter and whether it was shared."""

    content: str
    cached: bool


@dataclass(slots=True)
class CacheEntry:
    """In-flight or completed content for a single source identifier."""

    content: str = ""
    status: CacheStatus = CacheStatus.LOADING
    waiters: list[asyncio.Future[str]] = field(default_factory=list, repr=False)
    task: asyncio.Task[None] | None = field(default=None, repr=False)

    def enqueue(self) -> asyncio.Future[str]:
        waiter: asyncio.Future[str] = asyncio.get_running_loop().create_future()
        self.waiters.append(waiter)
        return waiter

    def resolve(self, content: str) -> None:
        """Store ``content`` and release every waiter once, in arrival order."""
        self.content = content
        self.status = CacheStatus.LOADED
        waiters, self.waiters = self.waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(content)

    def reject(self, exc: BaseException) -> None:
        """Propagate ``exc`` to every waiter once, in arrival order."""
        waiters, self.waiters = self.waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_exception(exc)
                # Waiters whose owner went away must not warn about the exception.
                waiter.exception()


class FetchCache:
    """Map source identifiers to shared, single-flight fetches.

    At most one request per identifier is in flight while caching is enabled.
    Completed entries are kept for the lifetime of the cache, failed ones are
    dropped so that a later load starts over.
    """

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._entries: dict[str, CacheEntry] = {}
        self.emitter = emitter
        self.requests = 0

    @property
    def fetcher(self) -> Fetcher:
        if self._fetcher is None:
            self._fetcher = RequestsFetcher()
        return self._fetcher

    @fetcher.setter
    def fetcher(self, value: Fetcher | None) -> None:
        self._fetcher = value

    def __contains__(self, source: object) -> bool:
        return source in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, source: str) -> CacheEntry | None:
        return self._entries.get(source)

    def status(self, source: str) -> CacheStatus | None:
        entry = self._entries.get(source)
        return entry.status if entry is not None else None

    def purge(self, source: str) -> bool:
        """Forget ``source``; return True when an entry was removed."""
        return self._entries.pop(source, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    async def load(self, source: str, *, use_cache: bool = True) -> CacheResult:
        """Return the text behind ``source``, sharing requests when allowed.

        A completed entry is returned without suspending. A pending entry
        queues the caller behind the request already in flight.
        """
        if not use_cache:
            return CacheResult(await self._request(source), cached=False)

        entry = self._entries.get(source)
        if entry is not None and entry.status is CacheStatus.LOADED:
            record_event(self.emitter, "svg_fetch_cached", {"source": source})
            return CacheResult(entry.content, cached=True)

        cached = entry is not None
        if entry is None:
            entry = CacheEntry()
            self._entries[source] = entry
            waiter = entry.enqueue()
            entry.task = asyncio.ensure_future(self._fill(source, entry))
        else:
            waiter = entry.enqueue()
            record_event(
                self.emitter,
                "svg_fetch_coalesced",
                {"source": source, "waiters": len(entry.waiters)},
            )

        # The shared fetch belongs to the cache; cancelling this caller only
        # cancels its own waiter.
        content = await waiter
        return CacheResult(content, cached=cached)

    async def _request(self, source: str) -> str:
        self.requests += 1
        record_event(self.emitter, "svg_fetch", {"source": source})
        response = await self.fetcher(source)
        return validate_response(response)

    async def _fill(self, source: str, entry: CacheEntry) -> None:
        try:
            content = await self._request(source)
        except asyncio.CancelledError:
            if self._entries.get(source) is entry:
                del self._entries[source]
            for waiter in entry.waiters:
                waiter.cancel()
            entry.waiters.clear()
            raise
        except Exception as exc:
            if self._entries.get(source) is entry:
                del self._entries[source]
            logger.debug("Dropped cache entry for %s after failure: %s", source, exc)
            record_event(self.emitter, "svg_fetch_failed", {"source": source, "reason": str(exc)})
            entry.reject(exc)
            return
        entry.resolve(content)


_FETCH_CACHE: FetchCache | None = None
_LOCK: RLock = RLock()


def get_fetch_cache() -> FetchCache:
    """Return the lazily created process-wide cache."""
    global _FETCH_CACHE
    with _LOCK:
        if _FETCH_CACHE is None:
            _FETCH_CACHE = FetchCache()
        return _FETCH_CACHE


def set_fetch_cache(cache: FetchCache | None) -> FetchCache | None:
    """Replace the process-wide cache and return it."""
    global _FETCH_CACHE
    with _LOCK:
        _FETCH_CACHE = cache
        return _FETCH_CACHE


@contextmanager
def fetch_cache_context(
    cache: FetchCache | None = None,
    *,
    fetcher: Fetcher | None = None,
) -> Iterator[FetchCache]:
    """Temporarily install ``cache`` (or a fresh one) as the process-wide cache."""
    global _FETCH_CACHE
    current = cache if cache is not None else FetchCache(fetcher)
    with _LOCK:
        previous = _FETCH_CACHE
        _FETCH_CACHE = current
    try:
        yield current
    finally:
        with _LOCK:
            _FETCH_CACHE = previous
