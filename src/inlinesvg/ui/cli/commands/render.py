"""Implementation of the primary ``inlinesvg`` CLI command."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

import typer

from inlinesvg.core.cache import FetchCache
from inlinesvg.core.diagnostics import DiagnosticEmitter
from inlinesvg.core.status import LoadStatus
from inlinesvg.loader import InlineSVG

from .._options import (
    BaseUrlOption,
    DebugOption,
    DescriptionOption,
    HashOption,
    NoCacheOption,
    SourceArgument,
    TitleOption,
    UniquifyOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..state import emit_error, set_cli_state


async def load_sources(
    sources: Sequence[str],
    *,
    cache: FetchCache,
    emitter: DiagnosticEmitter,
    **options: Any,
) -> list[InlineSVG]:
    """Load every source concurrently through ``cache`` and return the consumers."""
    consumers = [InlineSVG(source, cache=cache, emitter=emitter, **options) for source in sources]
    for consumer in consumers:
        consumer.mount()
    try:
        await asyncio.gather(*(consumer.wait() for consumer in consumers))
    finally:
        for consumer in consumers:
            consumer.unmount()
    return consumers


def render(
    ctx: typer.Context,
    sources: SourceArgument = None,
    no_cache: NoCacheOption = False,
    uniquify: UniquifyOption = False,
    unique_hash: HashOption = None,
    base_url: BaseUrlOption = "",
    title: TitleOption = None,
    description: DescriptionOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Load SVG sources and print the processed markup."""
    state = set_cli_state(verbosity=verbose, debug=debug)

    if not sources:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    emitter = CliEmitter(state)
    cache = FetchCache(emitter=emitter)
    consumers = asyncio.run(
        load_sources(
            sources,
            cache=cache,
            emitter=emitter,
            use_cache=not no_cache,
            uniquify_ids=uniquify,
            unique_hash=unique_hash,
            base_url=base_url,
            title=title,
            description=description,
        )
    )

    failed = 0
    console = state.console
    for consumer in consumers:
        if consumer.status is LoadStatus.READY:
            console.print(consumer.render(), markup=False, highlight=False, soft_wrap=True)
            continue
        failed += 1
        if consumer.status is LoadStatus.PENDING:
            emit_error(f"{consumer.source}: no document could be built on this host")

    if failed:
        raise typer.Exit(code=1)


__all__ = ["load_sources", "render"]
