"""Unit tests for the component dispatcher and the per-kind extractors.

Elements are built from raw mappings through the assembler so that each test
covers reading, classification and extraction together.
"""

from __future__ import annotations

import logging
import typing as typ

import pytest
from tree_builders import (
    component,
    image_link,
    presentation,
    prop,
    resource,
    set_link,
    text,
)

from website_tree.elements import EXTRACTORS, Component
from website_tree.elements.models import (
    ButtonElement,
    CollectionElement,
    ImageElement,
    MapElement,
    NColumnsElement,
    NetworkGraphElement,
    QueryElement,
    SearchBarElement,
    TextElement,
)
from website_tree.errors import InvalidPropertyValue, MissingRequiredReference
from website_tree.source.reader import read_resource

if typ.TYPE_CHECKING:
    from website_tree.assembler import TreeAssembler
    from website_tree.elements.models import WebElement


def _parse(assembler: TreeAssembler, raw: dict[str, typ.Any]) -> WebElement:
    element = assembler.parse_element(read_resource(raw))
    assert element is not None, "expected an element, got None"
    return element


def test_every_component_has_an_extractor() -> None:
    missing = set(Component) - set(EXTRACTORS)
    assert not missing, f"components without extractor: {sorted(missing)!r}"


def test_text_element_reads_inline_document(assembler: TreeAssembler) -> None:
    element = _parse(assembler, text("t1", "Hello"))
    assert isinstance(element, TextElement)
    assert element.content == "Hello"
    assert (element.type, element.component) == ("element", Component.TEXT)
    assert element.variant.name == "block"
    assert element.variant.size is None


def test_sized_text_variant_defaults_to_md(assembler: TreeAssembler) -> None:
    raw = resource("t1", "Intro", component("text", prop("variant", "heading")), document="Hi")
    element = _parse(assembler, raw)
    assert isinstance(element, TextElement)
    assert (element.variant.name, element.variant.size) == ("heading", "md")


def test_text_without_content_is_fatal(assembler: TreeAssembler) -> None:
    raw = resource("t1", "Empty text", component("text"))
    with pytest.raises(MissingRequiredReference, match="Empty text"):
        assembler.parse_element(read_resource(raw))


def test_button_with_only_link_to_is_external(assembler: TreeAssembler) -> None:
    raw = resource(
        "b1",
        "Docs",
        component("button", prop("link-to", {"content": "Docs", "href": "https://example.org"})),
    )
    element = _parse(assembler, raw)
    assert isinstance(element, ButtonElement)
    assert element.href == "https://example.org"
    assert element.is_external is True, "expected link-to to mark the button external"
    assert element.variant == "default"


def test_button_with_navigate_to_is_internal(assembler: TreeAssembler) -> None:
    raw = resource(
        "b1",
        "About",
        component("button", prop("navigate-to", {"content": "About", "slug": "about"})),
    )
    element = _parse(assembler, raw)
    assert isinstance(element, ButtonElement)
    assert (element.href, element.is_external) == ("about", False)


def test_button_without_target_is_fatal(assembler: TreeAssembler) -> None:
    raw = resource("b1", "Lost button", component("button"))
    with pytest.raises(MissingRequiredReference) as excinfo:
        assembler.parse_element(read_resource(raw))
    assert excinfo.value.label == "Lost button"
    assert excinfo.value.component == "button"


def test_two_images_get_default_carousel_options(assembler: TreeAssembler) -> None:
    raw = resource(
        "i1", "Gallery", component("image"), links=[image_link("a"), image_link("b")]
    )
    element = _parse(assembler, raw)
    assert isinstance(element, ImageElement)
    assert element.variant == "default"
    assert element.image_quality == "high"
    assert element.is_full_width is True
    assert element.carousel_options is not None
    assert element.carousel_options.seconds_per_image == 5, (
        f"expected 5 seconds per image, got {element.carousel_options.seconds_per_image!r}"
    )


def test_carousel_seconds_can_be_overridden(assembler: TreeAssembler) -> None:
    raw = resource(
        "i1",
        "Gallery",
        component("image", prop("variant", "carousel", prop("seconds-per-image", 8))),
        links=[image_link("a"), image_link("b")],
    )
    element = _parse(assembler, raw)
    assert isinstance(element, ImageElement)
    assert element.carousel_options is not None
    assert element.carousel_options.seconds_per_image == 8


def test_single_image_has_no_carousel(assembler: TreeAssembler) -> None:
    raw = resource("i1", "Photo", component("image"), links=[image_link("a", label="A")])
    element = _parse(assembler, raw)
    assert isinstance(element, ImageElement)
    assert element.carousel_options is None
    assert element.images[0].label == "A"
    assert (element.images[0].width, element.images[0].height) == (800, 600)


def test_image_dimensions_read_leading_numbers(assembler: TreeAssembler) -> None:
    raw = resource(
        "i1",
        "Hero picture",
        component("image", prop("width", "100%"), prop("height", "42.5rem")),
        links=[image_link("a")],
    )
    element = _parse(assembler, raw)
    assert isinstance(element, ImageElement)
    assert (element.width, element.height) == (100.0, 42.5)


def test_unreadable_image_dimension_keeps_default_with_warning(
    assembler: TreeAssembler, caplog: pytest.LogCaptureFixture
) -> None:
    raw = resource(
        "i1",
        "Hero picture",
        component("image", prop("width", 640), prop("height", "tall")),
        links=[image_link("a")],
    )
    with caplog.at_level(logging.WARNING):
        element = _parse(assembler, raw)
    assert isinstance(element, ImageElement)
    assert (element.width, element.height) == (640.0, None)
    assert "tall" in caplog.text
    assert "Hero picture" in caplog.text, (
        f"expected a warning naming the element, got {caplog.text!r}"
    )


def test_unreadable_carousel_seconds_fall_back_to_default(
    assembler: TreeAssembler, caplog: pytest.LogCaptureFixture
) -> None:
    raw = resource(
        "i1",
        "Gallery",
        component("image", prop("variant", "carousel", prop("seconds-per-image", "slow"))),
        links=[image_link("a"), image_link("b")],
    )
    with caplog.at_level(logging.WARNING):
        element = _parse(assembler, raw)
    assert isinstance(element, ImageElement)
    assert element.carousel_options is not None
    assert element.carousel_options.seconds_per_image == 5
    assert "Gallery" in caplog.text


@pytest.mark.parametrize(("level", "expected"), [(2, 2), ("3", 3), ("h4", None)])
def test_text_heading_level(
    assembler: TreeAssembler, level: object, expected: int | None
) -> None:
    raw = resource(
        "t1", "Intro", component("text", prop("heading-level", level)), document="Hi"
    )
    element = _parse(assembler, raw)
    assert isinstance(element, TextElement)
    assert element.heading_level == expected


def test_image_without_links_is_fatal(assembler: TreeAssembler) -> None:
    with pytest.raises(MissingRequiredReference, match="Image link"):
        assembler.parse_element(read_resource(resource("i1", "Photo", component("image"))))


def test_map_parses_bounds(assembler: TreeAssembler) -> None:
    raw = resource(
        "m1",
        "Sites",
        component("map", prop("initial-bounds", "[[31.5, 35.1], [32, 35.6]]")),
        links=[set_link("set-1")],
    )
    element = _parse(assembler, raw)
    assert isinstance(element, MapElement)
    assert element.initial_bounds == ((31.5, 35.1), (32.0, 35.6))
    assert element.maximum_bounds is None
    assert (element.is_interactive, element.is_clustered, element.is_using_pins) == (
        True,
        False,
        False,
    )


def test_map_rejects_malformed_bounds(assembler: TreeAssembler) -> None:
    raw = resource(
        "m1",
        "Sites",
        component("map", prop("maximum-bounds", "[[31.5], [32, 35.6]]")),
        links=[set_link("set-1")],
    )
    with pytest.raises(InvalidPropertyValue, match="Sites"):
        assembler.parse_element(read_resource(raw))


def test_collection_defaults_and_forced_title(assembler: TreeAssembler) -> None:
    raw = resource("c1", "Objects", component("collection"), links=[set_link("set-1")])
    element = _parse(assembler, raw)
    assert isinstance(element, CollectionElement)
    assert element.link_uuids == ["set-1"]
    assert (element.variant, element.item_variant, element.layout) == (
        "full",
        "detailed",
        "image-start",
    )
    assert element.filter.is_sidebar_displayed is False
    assert element.title.properties.is_name_displayed is True
    assert element.title.properties.is_count_displayed is True, (
        "expected full collections to display their count"
    )


def test_collection_without_set_link_is_fatal(assembler: TreeAssembler) -> None:
    with pytest.raises(MissingRequiredReference, match="collection"):
        assembler.parse_element(read_resource(resource("c1", "Objects", component("collection"))))


def test_query_reads_prompts(assembler: TreeAssembler) -> None:
    raw = resource(
        "q1",
        "Search",
        component(
            "query",
            prop(
                "query",
                None,
                prop("query-prompt", "By site"),
                prop("use-property", {"content": "Site", "uuid": "var-1"}),
            ),
        ),
        links=[set_link("set-1")],
    )
    element = _parse(assembler, raw)
    assert isinstance(element, QueryElement)
    assert [query.label for query in element.queries] == ["By site"]
    assert element.queries[0].property_variable_uuids == ["var-1"]


def test_search_bar_unescapes_filter_queries(assembler: TreeAssembler) -> None:
    raw = resource(
        "s1",
        "Search",
        component(
            "search-bar",
            prop("bound-element", {"content": "Objects", "uuid": "c1"}),
            prop("base-filter-queries", "\\{type\\}"),
        ),
    )
    element = _parse(assembler, raw)
    assert isinstance(element, SearchBarElement)
    assert element.bound_element_uuid == "c1"
    assert element.base_filter_queries == "{type}"


def test_n_columns_parse_children_as_elements(assembler: TreeAssembler) -> None:
    raw = resource(
        "n1",
        "Columns",
        component("n-columns"),
        children=[text("left", "L"), resource("skip", "Skip", presentation("css")), text("r", "R")],
    )
    element = _parse(assembler, raw)
    assert isinstance(element, NColumnsElement)
    assert [column.uuid for column in element.columns] == ["left", "r"]


def test_network_graph_is_a_no_op(assembler: TreeAssembler) -> None:
    element = _parse(assembler, resource("g1", "Graph", component("network-graph")))
    assert isinstance(element, NetworkGraphElement)


def test_unknown_component_is_dropped_with_warning(
    assembler: TreeAssembler, caplog: pytest.LogCaptureFixture
) -> None:
    raw = resource("x1", "Widget", component("hologram"))
    with caplog.at_level(logging.WARNING):
        element = assembler.parse_element(read_resource(raw))
    assert element is None
    assert "hologram" in caplog.text, f"expected a warning naming the component, got {caplog.text!r}"


def test_missing_component_is_fatal(assembler: TreeAssembler) -> None:
    raw = resource("x1", "Bare element", presentation("element"))
    with pytest.raises(MissingRequiredReference, match="Bare element"):
        assembler.parse_element(read_resource(raw))


def test_element_styles_do_not_inherit(assembler: TreeAssembler) -> None:
    raw = text("t1", "Hello", presentation("css", prop("color", "red")))
    element = _parse(assembler, raw)
    assert [style.value for style in element.css_styles.default] == ["red"]
    assert element.css_styles.mobile == []
