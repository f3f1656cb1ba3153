from __future__ import annotations

import pytest

from helpers import SAMPLE_SVG
from inlinesvg.core.documents import parse_fragment, parse_svg, to_markup
from inlinesvg.core.transform import (
    inject_metadata,
    random_hash,
    rewrite_url_references,
    transform_svg,
    uniquify_ids,
)


SUFFIX = "abc123"


def _parse(markup: str = SAMPLE_SVG):
    svg = parse_svg(markup)
    assert svg is not None
    return svg


def test_ids_are_suffixed_and_fragment_links_left_alone() -> None:
    svg = _parse('<svg xmlns="http://www.w3.org/2000/svg"><rect id="x"/><use href="#x"/></svg>')

    uniquify_ids(svg, suffix=SUFFIX)

    assert svg.find("rect")["id"] == "x__abc123"
    assert svg.find("use")["href"] == "#x"


def test_url_references_are_rewritten_with_base_url() -> None:
    svg = _parse()

    uniquify_ids(svg, suffix=SUFFIX, base_url="/page")

    rect = svg.find("rect")
    assert rect["fill"] == "url(/page#grad__abc123)"
    assert svg.find("linearGradient")["id"] == "grad__abc123"


def test_every_url_token_in_a_value_is_rewritten() -> None:
    value = "fill: url(#a); stroke: url('#b') !important"

    rewritten = rewrite_url_references(value, suffix=SUFFIX)

    assert rewritten == "fill: url(#a__abc123); stroke: url('#b__abc123') !important"


def test_empty_url_reference_is_kept() -> None:
    assert rewrite_url_references("url()", suffix=SUFFIX) == "url()"


def test_xlink_attributes() -> None:
    svg = _parse(
        '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink">'
        '<a xlink:href="https://example.com/" xlink:role="nav" xlink:arcrole="next">'
        '<use xlink:href="#shape"/>'
        '<image xlink:href="data:image/png;base64,AAAA"/>'
        "</a></svg>"
    )

    uniquify_ids(svg, suffix=SUFFIX)

    link = svg.find("a")
    assert link["xlink:href"] == "https://example.com/"
    assert link["xlink:role"] == "nav__abc123"
    assert link["xlink:arcrole"] == "next__abc123"
    assert svg.find("use")["xlink:href"] == "#shape"
    assert svg.find("image")["xlink:href"] == "data:image/png;base64,AAAA"


def test_root_element_keeps_its_identifier() -> None:
    svg = _parse('<svg xmlns="http://www.w3.org/2000/svg" id="root"><g id="inner"/></svg>')

    uniquify_ids(svg, suffix=SUFFIX)

    assert svg["id"] == "root"
    assert svg.find("g")["id"] == "inner__abc123"


def test_nested_descendants_are_visited() -> None:
    svg = _parse(
        '<svg xmlns="http://www.w3.org/2000/svg"><g id="a"><g id="b"><circle id="c"/></g></g></svg>'
    )

    uniquify_ids(svg, suffix=SUFFIX)

    assert [node["id"] for node in svg.find_all(True)] == [
        "a__abc123",
        "b__abc123",
        "c__abc123",
    ]


def test_uniquifying_twice_does_not_double_suffix() -> None:
    svg = _parse()

    uniquify_ids(svg, suffix=SUFFIX, base_url="/page")
    first = to_markup(svg)
    uniquify_ids(svg, suffix=SUFFIX, base_url="/page")

    assert to_markup(svg) == first
    assert svg.find("rect")["id"] == "x__abc123"


def test_disabled_uniquification_leaves_identifiers() -> None:
    svg = _parse()

    transform_svg(svg, suffix=SUFFIX, uniquify=False)

    assert svg.find("rect")["id"] == "x"
    assert svg.find("rect")["fill"] == "url(#grad)"


def test_title_and_description_are_replaced_and_prepended() -> None:
    svg = _parse(
        '<svg xmlns="http://www.w3.org/2000/svg"><desc>old</desc><title>Original</title>'
        '<rect id="x"/></svg>'
    )

    inject_metadata(svg, title="New title", description="A <tspan>rich</tspan> description")

    children = [child.name for child in svg.find_all(True, recursive=False)]
    assert children == ["title", "desc", "rect"]
    assert svg.find("title").get_text() == "New title"
    desc = svg.find("desc")
    assert desc.get_text() == "A rich description"
    assert desc.find("tspan") is not None
    assert "old" not in to_markup(svg)
    assert "Original" not in to_markup(svg)


def test_malformed_metadata_markup_is_kept_as_text() -> None:
    svg = _parse()

    inject_metadata(svg, title="Tom & Jerry", description="a < b")

    assert svg.find("title").get_text() == "Tom & Jerry"
    assert svg.find("desc").get_text() == "a < b"
    markup = to_markup(svg)
    assert "<title>Tom &amp; Jerry</title>" in markup
    assert "<desc>a &lt; b</desc>" in markup


def test_escaped_metadata_markup_is_decoded() -> None:
    nodes = parse_fragment("Tom &amp; <tspan>Jerry</tspan>")

    assert [getattr(node, "name", None) for node in nodes] == [None, "tspan"]
    assert "".join(node.get_text() for node in nodes) == "Tom & Jerry"


def test_metadata_is_not_touched_without_values() -> None:
    svg = _parse()

    inject_metadata(svg, title=None, description="")

    assert svg.find("title").get_text() == "Original"
    assert svg.find("desc") is None


def test_parse_svg_rejects_non_svg_roots() -> None:
    assert parse_svg("<html><body/></html>") is None
    assert parse_svg("") is None
    assert parse_svg("just some text") is None


def test_parse_fragment_keeps_plain_text() -> None:
    nodes = parse_fragment("plain words")

    assert [str(node) for node in nodes] == ["plain words"]


@pytest.mark.parametrize("length", [4, 8, 16])
def test_random_hash_shape(length: int) -> None:
    token = random_hash(length)

    assert len(token) == length
    assert token.isalnum()
