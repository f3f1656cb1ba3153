from __future__ import annotations

from collections.abc import Iterator

from helpers import FakeFetcher
import pytest

from inlinesvg.core.cache import FetchCache, fetch_cache_context


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def cache(fetcher: FakeFetcher) -> Iterator[FetchCache]:
    with fetch_cache_context(fetcher=fetcher) as current:
        yield current


@pytest.fixture(autouse=True)
def _development_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("INLINESVG_ENV", raising=False)
    monkeypatch.delenv("INLINESVG_HTTP_TIMEOUT", raising=False)
    monkeypatch.delenv("INLINESVG_HTTP_USER_AGENT", raising=False)
