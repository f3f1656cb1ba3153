"""Post-processing of parsed SVG trees: identifier uniquification and metadata.

Every function here mutates the tree it receives in place and returns it. The
tree is owned by the consumer that parsed it, so no other holder observes the
changes.
"""

from __future__ import annotations

import re
import secrets
import string

from bs4 import BeautifulSoup
from bs4.element import Tag

from inlinesvg.core.documents import XML_PARSER, parse_fragment


IDENTIFIER_ATTRIBUTES: tuple[str, ...] = (
    "id",
    "href",
    "xlink:href",
    "xlink:role",
    "xlink:arcrole",
)
LINK_ATTRIBUTES: frozenset[str] = frozenset({"href", "xlink:href"})

_URL_REFERENCE = re.compile(r"url\((.*?)\)")
_HASH_ALPHABET = string.ascii_letters + string.digits


def random_hash(length: int = 8) -> str:
    """Return a random alphanumeric token used as an identifier suffix."""
    return "".join(secrets.choice(_HASH_ALPHABET) for _ in range(length))


def _suffixed(value: str, suffix: str) -> str:
    marker = f"__{suffix}"
    return value if value.endswith(marker) else f"{value}{marker}"


def rewrite_url_references(value: str, *, suffix: str, base_url: str = "") -> str:
    """Rewrite every ``url(ref)`` token of ``value`` to ``url(<base><ref>__<suffix>)``."""

    def _replace(match: re.Match[str]) -> str:
        reference = match.group(1)
        if not reference:
            return match.group(0)
        quote = ""
        if len(reference) >= 2 and reference[0] == reference[-1] and reference[0] in "'\"":
            quote, reference = reference[0], reference[1:-1]
        if reference.endswith(f"__{suffix}"):
            return match.group(0)
        return f"url({quote}{base_url}{reference}__{suffix}{quote})"

    return _URL_REFERENCE.sub(_replace, value)


def _attribute_text(value: object) -> str:
    if isinstance(value, list):
        return " ".join(str(item) for item in value)
    return str(value)


def uniquify_ids(svg: Tag, *, suffix: str, base_url: str = "") -> Tag:
    """Append ``__<suffix>`` to identifiers and ``url()`` references below ``svg``.

    The walk visits every descendant element depth-first; the root element
    itself keeps its attributes. Applying the same suffix twice is a no-op.
    """
    for element in svg.find_all(True):
        if not element.attrs:
            continue

        for name, raw in list(element.attrs.items()):
            value = _attribute_text(raw)
            if "url(" in value:
                element.attrs[name] = rewrite_url_references(
                    value, suffix=suffix, base_url=base_url
                )

        for name in IDENTIFIER_ATTRIBUTES:
            if name not in element.attrs:
                continue
            # Link targets keep their value: fragment references stay un-suffixed,
            # external and data values must stay resolvable.
            if name in LINK_ATTRIBUTES:
                continue
            value = _attribute_text(element.attrs[name])
            element.attrs[name] = _suffixed(value, suffix)

    return svg


def _owner_soup(node: Tag) -> BeautifulSoup:
    for parent in node.parents:
        if isinstance(parent, BeautifulSoup):
            return parent
    return BeautifulSoup("", XML_PARSER)


def _replace_child_text_element(svg: Tag, name: str, markup: str) -> None:
    existing = svg.find(name)
    if isinstance(existing, Tag):
        existing.decompose()

    element = _owner_soup(svg).new_tag(name)
    for child in parse_fragment(markup):
        element.append(child)
    svg.insert(0, element)


def inject_metadata(svg: Tag, *, title: str | None = None, description: str | None = None) -> Tag:
    """Replace ``<desc>`` and ``<title>`` with the given markup.

    The title ends up as the first child, followed by the description.
    """
    if description:
        _replace_child_text_element(svg, "desc", description)
    if title:
        _replace_child_text_element(svg, "title", title)
    return svg


def transform_svg(
    svg: Tag,
    *,
    suffix: str,
    base_url: str = "",
    uniquify: bool = False,
    title: str | None = None,
    description: str | None = None,
) -> Tag:
    """Run uniquification (when enabled) and metadata injection over ``svg``."""
    if uniquify:
        uniquify_ids(svg, suffix=suffix, base_url=base_url)
    return inject_metadata(svg, title=title, description=description)


__all__ = [
    "IDENTIFIER_ATTRIBUTES",
    "LINK_ATTRIBUTES",
    "inject_metadata",
    "random_hash",
    "rewrite_url_references",
    "transform_svg",
    "uniquify_ids",
]
