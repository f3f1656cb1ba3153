"""Conversion between SVG markup and BeautifulSoup document trees."""

from __future__ import annotations

import html
import re

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import NavigableString, Tag

from inlinesvg.core.exceptions import ConversionError


XML_PARSER = "xml"

_MARKUP_TAG = re.compile(r"<!--.*?-->|</?[A-Za-z_][^<>]*>", re.DOTALL)


def local_name(tag: Tag) -> str:
    """Return the tag name without any namespace prefix."""
    return (tag.name or "").rsplit(":", 1)[-1]


def parse_svg(text: str) -> Tag | None:
    """Parse ``text`` and return its root ``<svg>`` element, if any."""
    if not text or not text.strip():
        return None
    try:
        soup = BeautifulSoup(text, XML_PARSER)
    except FeatureNotFound as exc:
        raise ConversionError("An XML tree builder (lxml) is required to parse SVG") from exc
    root = soup.find(True)
    if not isinstance(root, Tag) or local_name(root) != "svg":
        return None
    return root


def to_markup(node: Tag) -> str:
    """Serialise ``node`` back to markup."""
    markup = str(node)
    if not markup.strip():
        raise ConversionError("Could not convert the src to a display element")
    return markup


def parse_fragment(markup: str) -> list[Tag | NavigableString]:
    """Parse inline markup into detached nodes, falling back to plain text.

    The XML builder recovers from malformed input by dropping characters, so
    the parse is only trusted when it kept every character of text.
    """
    try:
        wrapper = BeautifulSoup(f"<fragment>{markup}</fragment>", XML_PARSER).find("fragment")
    except FeatureNotFound:
        wrapper = None
    if not isinstance(wrapper, Tag) or wrapper.get_text() != _expected_text(markup):
        return [NavigableString(markup)]
    return [child.extract() for child in list(wrapper.contents)]


def _expected_text(markup: str) -> str:
    return html.unescape(_MARKUP_TAG.sub("", markup))


__all__ = ["local_name", "parse_fragment", "parse_svg", "to_markup"]
