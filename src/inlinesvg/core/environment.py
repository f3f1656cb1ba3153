"""Host capability checks consulted before any load attempt."""

from __future__ import annotations

from functools import lru_cache
from typing import Protocol, runtime_checkable

from bs4.builder import builder_registry

from inlinesvg.core.documents import XML_PARSER, parse_svg
from inlinesvg.core.exceptions import ConversionError


_PROBE = '<svg xmlns="http://www.w3.org/2000/svg"><g id="probe"/></svg>'


@runtime_checkable
class HostCapabilities(Protocol):
    """Answers whether documents can be built and SVG is understood."""

    def can_use_dom(self) -> bool: ...

    def supports_svg(self) -> bool: ...


@lru_cache(maxsize=1)
def _xml_builder_available() -> bool:
    return builder_registry.lookup(XML_PARSER) is not None


@lru_cache(maxsize=1)
def _svg_probe_parses() -> bool:
    try:
        root = parse_svg(_PROBE)
    except ConversionError:
        return False
    return root is not None and root.find("g") is not None


class DefaultCapabilities:
    """Capabilities backed by the installed BeautifulSoup tree builders."""

    def can_use_dom(self) -> bool:
        return _xml_builder_available()

    def supports_svg(self) -> bool:
        return self.can_use_dom() and _svg_probe_parses()


class StaticCapabilities:
    """Fixed answers, handy for hosts known ahead of time."""

    def __init__(self, *, dom: bool = True, svg: bool = True) -> None:
        self.dom = dom
        self.svg = svg

    def can_use_dom(self) -> bool:
        return self.dom

    def supports_svg(self) -> bool:
        return self.svg


__all__ = ["DefaultCapabilities", "HostCapabilities", "StaticCapabilities"]
