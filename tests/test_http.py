from __future__ import annotations

import asyncio

import pytest
import requests

from inlinesvg.core.config import RuntimeSettings
from inlinesvg.core.exceptions import (
    InvalidContentTypeError,
    NetworkFailureError,
    TLSCertificateError,
)
from inlinesvg.core.http import HttpResponse, RequestsFetcher, validate_response


class DummyResponse:
    def __init__(
        self, status_code: int = 200, text: str = "<svg/>", content_type: str = "image/svg+xml"
    ) -> None:
        self.status_code = status_code
        self.text = text
        self.headers = {"Content-Type": content_type}


def test_fetcher_sets_user_agent_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_get(url: str, *, timeout: float, headers: dict[str, str] | None = None):
        captured.update(url=url, timeout=timeout, headers=headers)
        return DummyResponse()

    monkeypatch.setenv("INLINESVG_HTTP_USER_AGENT", "custom-agent/1.0")
    monkeypatch.setenv("INLINESVG_HTTP_TIMEOUT", "2.5")
    monkeypatch.setattr(requests, "get", fake_get)

    response = RequestsFetcher().get("https://example.com/icon.svg")

    assert response == HttpResponse(200, "<svg/>", {"Content-Type": "image/svg+xml"})
    assert captured["headers"] == {"User-Agent": "custom-agent/1.0"}
    assert captured["timeout"] == 2.5


def test_default_user_agent_names_the_package() -> None:
    fetcher = RequestsFetcher(settings=RuntimeSettings())

    assert fetcher.user_agent.startswith("inlinesvg/")
    assert fetcher.timeout == 10.0


def test_fetcher_runs_in_executor(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(requests, "get", lambda url, **_: DummyResponse(text="<svg id='a'/>"))

    response = asyncio.run(RequestsFetcher(timeout=1)("https://example.com/a.svg"))

    assert response.text == "<svg id='a'/>"


def test_tls_failures_carry_guidance(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_get(url: str, **_: object):
        raise requests.exceptions.SSLError("certificate verify failed")

    monkeypatch.setattr(requests, "get", fake_get)

    with pytest.raises(TLSCertificateError, match="TLS certificate verification failed"):
        RequestsFetcher(timeout=1).get("https://example.com/a.svg")


def test_transport_failures_become_network_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_get(url: str, **_: object):
        raise requests.exceptions.ConnectionError("connection refused")

    monkeypatch.setattr(requests, "get", fake_get)

    with pytest.raises(NetworkFailureError, match="connection refused"):
        RequestsFetcher(timeout=1).get("https://example.com/a.svg")


@pytest.mark.parametrize("status_code", [300, 404, 500])
def test_error_status_codes_are_not_found(status_code: int) -> None:
    response = HttpResponse(status_code, "<svg/>", {"content-type": "image/svg+xml"})

    with pytest.raises(NetworkFailureError, match="Not Found") as failure:
        validate_response(response)

    assert failure.value.status_code == status_code


@pytest.mark.parametrize(
    "content_type",
    ["image/svg+xml", "image/svg+xml; charset=utf-8", "text/plain;charset=UTF-8"],
)
def test_svg_and_plain_text_are_accepted(content_type: str) -> None:
    response = HttpResponse(299, "<svg/>", {"CONTENT-TYPE": content_type})

    assert validate_response(response) == "<svg/>"


@pytest.mark.parametrize("content_type", ["text/html", "application/json", None])
def test_other_content_types_are_rejected(content_type: str | None) -> None:
    headers = {} if content_type is None else {"Content-Type": content_type}

    with pytest.raises(InvalidContentTypeError, match="Content type isn't valid"):
        validate_response(HttpResponse(200, "<svg/>", headers))
