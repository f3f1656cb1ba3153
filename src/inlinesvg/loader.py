"""Consumer-facing SVG loader driving the load status lifecycle."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any

from bs4.element import Tag

from inlinesvg.core.cache import CacheStatus, FetchCache, get_fetch_cache
from inlinesvg.core.config import LoaderOptions, RuntimeSettings
from inlinesvg.core.diagnostics import DiagnosticEmitter, LoggingEmitter
from inlinesvg.core.documents import parse_svg, to_markup
from inlinesvg.core.environment import DefaultCapabilities, HostCapabilities
from inlinesvg.core.exceptions import (
    ConversionError,
    InlineSVGError,
    MissingSourceError,
    UnsupportedEnvironmentError,
)
from inlinesvg.core.sources import classify_source
from inlinesvg.core.status import LoadStatus, StatusTracker, classify_error
from inlinesvg.core.transform import random_hash, transform_svg


logger = logging.getLogger(__name__)


class InlineSVG:
    """Load one SVG source and expose the processed document.

    The consumer starts in ``PENDING``; :meth:`mount` begins the first load,
    :meth:`set_source` restarts it, :meth:`unmount` stops every pending
    completion from touching this instance. Loads of remote sources run as
    tasks on the current event loop, so :meth:`mount` and :meth:`set_source`
    must be called from a coroutine when the source is remote.
    """

    def __init__(
        self,
        source: str = "",
        *,
        options: LoaderOptions | None = None,
        cache: FetchCache | None = None,
        capabilities: HostCapabilities | None = None,
        emitter: DiagnosticEmitter | None = None,
        settings: RuntimeSettings | None = None,
        **extra: Any,
    ) -> None:
        if options is None:
            options = LoaderOptions(source=source, **extra)
        elif source or extra:
            options = options.model_copy(update={"source": source or options.source, **extra})
        self.options = options
        self.cache = cache if cache is not None else get_fetch_cache()
        self.capabilities = capabilities or DefaultCapabilities()
        self.settings = settings or RuntimeSettings.from_env()
        self.emitter = emitter or LoggingEmitter(logger_obj=logger)

        self.hash = options.unique_hash or random_hash(8)
        self.content = ""
        self.element: Tag | None = None
        self.has_cache = bool(options.use_cache and options.source in self.cache)
        self.active = False

        self._tracker = StatusTracker()
        self._task: asyncio.Task[None] | None = None
        self._generation = 0

    def __repr__(self) -> str:
        return f"InlineSVG(source={self.source!r}, status={self.status.value!r})"

    @property
    def source(self) -> str:
        return self.options.source

    @property
    def status(self) -> LoadStatus:
        return self._tracker.status

    # ------------------------------------------------------------------ lifecycle

    def mount(self) -> None:
        """Activate the consumer and start a load.

        Mounting again after :meth:`unmount` or a failure starts a fresh
        attempt; a READY consumer or one with a load in flight is left alone.
        """
        self.active = True

        if not self.capabilities.can_use_dom():
            return

        if self.status is LoadStatus.READY or self._is_loading():
            return

        try:
            if not self.capabilities.supports_svg():
                raise UnsupportedEnvironmentError()
            if not self.source:
                raise MissingSourceError()
            self._load()
        except InlineSVGError as exc:
            self._handle_error(exc)

    def unmount(self) -> None:
        """Deactivate the consumer; in-flight completions are discarded."""
        self.active = False
        self._cancel_pending()

    def set_source(self, source: str) -> None:
        """Point the consumer at a new source and restart loading."""
        if source == self.options.source:
            return
        self.options.source = source

        if not self.capabilities.can_use_dom():
            return

        if not source:
            self._cancel_pending()
            self.content = ""
            self.element = None
            self._handle_error(MissingSourceError())
            return

        self._load()

    async def wait(self) -> None:
        """Wait until the current load settles, following source reassignments."""
        while True:
            task = self._task
            if task is None:
                return
            if task.done():
                if not task.cancelled() and task.exception() is not None:
                    raise task.exception()
                return
            await asyncio.wait({task})

    # ------------------------------------------------------------------ rendering

    def render(self) -> str:
        """Return the markup to display for the current status."""
        if not self.capabilities.can_use_dom():
            return self.options.loader

        if self.element is not None:
            if not self.options.attributes:
                return to_markup(self.element)
            element = copy.copy(self.element)
            element.attrs.update(self.options.attributes)
            return to_markup(element)

        if self.status in (LoadStatus.UNSUPPORTED, LoadStatus.FAILED):
            return self.options.fallback

        return self.options.loader

    # ------------------------------------------------------------------ internals

    def _is_current(self, generation: int) -> bool:
        return self.active and generation == self._generation

    def _is_loading(self) -> bool:
        return self._task is not None and not self._task.done()

    def _cancel_pending(self) -> None:
        self._generation += 1
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    def _load(self) -> None:
        if not self.active:
            return

        self._cancel_pending()
        generation = self._generation
        self.content = ""
        self.element = None
        self._tracker.transition(LoadStatus.LOADING)

        source = self.source
        if self.options.use_cache:
            entry = self.cache.get(source)
            if entry is not None and entry.status is CacheStatus.LOADED:
                self.has_cache = True
                self._handle_load(entry.content)
                return

        try:
            resolved = classify_source(source)
        except InlineSVGError as exc:
            self._handle_error(exc)
            return

        if not resolved.is_remote:
            self.has_cache = False
            self._handle_load(resolved.content or "")
            return

        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._fetch(generation, source))

    async def _fetch(self, generation: int, source: str) -> None:
        try:
            result = await self.cache.load(source, use_cache=self.options.use_cache)
        except Exception as exc:
            if self._is_current(generation):
                self._handle_error(exc)
            return

        if not self._is_current(generation):
            logger.debug("Discarded late completion for %s", source)
            return
        self.has_cache = result.cached
        self._handle_load(result.content)

    def _handle_load(self, content: str) -> None:
        if not self.active:
            return
        self.content = content
        self._tracker.transition(LoadStatus.LOADED)
        self._build_element()

    def _build_element(self) -> None:
        options = self.options
        try:
            text = options.pre_processor(self.content) if options.pre_processor else self.content
            node = parse_svg(text)
            if node is None:
                raise ConversionError("Could not convert the src to a DOM Node")
            svg = transform_svg(
                node,
                suffix=self.hash,
                base_url=options.base_url,
                uniquify=options.uniquify_ids,
                title=options.title,
                description=options.description,
            )
            # Serialisation failures must surface as FAILED here, not in render().
            to_markup(svg)
        except InlineSVGError as exc:
            self._handle_error(exc)
            return
        except Exception as exc:
            self._handle_error(ConversionError(str(exc)))
            return

        self.element = svg
        self._tracker.transition(LoadStatus.READY)
        if options.on_ready is not None:
            options.on_ready(self.source, self.has_cache)

    def _handle_error(self, exc: Exception) -> None:
        status = classify_error(exc)

        if not self.settings.production:
            self.emitter.error(f"{self.source or '<missing>'}: {exc}", exc)

        if not self.active:
            return

        self._tracker.transition(status)
        if self.options.on_error is not None:
            self.options.on_error(exc)


async def load_svg(source: str, **options: Any) -> InlineSVG:
    """Mount a consumer for ``source``, wait for it to settle, and unmount it."""
    consumer = InlineSVG(source, **options)
    consumer.mount()
    try:
        await consumer.wait()
    finally:
        consumer.unmount()
    return consumer


__all__ = ["InlineSVG", "load_svg"]
