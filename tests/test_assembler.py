"""Unit tests for the recursive page, segment and block assembler."""

from __future__ import annotations

import logging
import typing as typ

import pytest
from tree_builders import (
    block,
    component,
    document_link,
    image_link,
    page,
    presentation,
    prop,
    resource,
    segment,
    segment_item,
    text,
)

from website_tree.assembler import TreeAssembler, compose_slug, describe
from website_tree.config import ParserSettings
from website_tree.elements.models import ImageElement, TextElement
from website_tree.errors import MissingRequiredField, StructuralViolation
from website_tree.models import (
    AccordionItem,
    BlockLayoutOverride,
    WebBlock,
    Webpage,
    WebSegment,
)
from website_tree.resolvers import MappingDocumentResolver
from website_tree.source.reader import read_resource

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture


def _page(assembler: TreeAssembler, raw: dict[str, typ.Any]) -> Webpage:
    return assembler.parse_webpage(read_resource(raw))


@pytest.mark.parametrize(
    ("prefix", "slug", "expected"),
    [(None, "home", "home"), ("a", "b", "a/b"), ("a/b", "c", "a/b/c"), ("a", "", "a")],
)
def test_compose_slug(prefix: str | None, slug: str, expected: str) -> None:
    assert compose_slug(prefix, slug) == expected


def test_nested_page_slugs_accumulate(assembler: TreeAssembler) -> None:
    raw = page("p-a", "a", page("p-b", "b", page("p-c", "c")))
    top = _page(assembler, raw)
    assert top.slug == "a"
    assert top.webpages[0].slug == "a/b"
    assert top.webpages[0].webpages[0].slug == "a/b/c", (
        f"expected a/b/c, got {top.webpages[0].webpages[0].slug!r}"
    )


def test_segment_prefix_is_stripped_from_page_slugs(assembler: TreeAssembler) -> None:
    top = _page(assembler, page("p", "$seg-about"))
    assert top.slug == "about"


def test_page_defaults_and_title(assembler: TreeAssembler) -> None:
    top = _page(assembler, page("p", "home", label="Welcome"))
    assert (top.type, top.title) == ("page", "Welcome")
    props = top.properties
    assert (props.width, props.variant) == ("default", "default")
    assert props.is_sidebar_displayed is True
    assert props.is_breadcrumbs_displayed is False
    assert props.is_displayed_in_navbar is True
    assert props.is_navbar_search_bar_displayed is True
    assert props.background_image is None


def test_page_options_accept_both_label_spellings(assembler: TreeAssembler) -> None:
    raw = page(
        "p",
        "home",
        options=(
            prop("width", "full"),
            prop("sidebar-displayed", False),
            prop("breadcrumbs-visible", True),
            prop("header", False),
        ),
        links=[image_link("bg", label="Background")],
    )
    props = _page(assembler, raw).properties
    assert props.width == "full"
    assert props.is_sidebar_displayed is False
    assert props.is_breadcrumbs_displayed is True
    assert props.is_displayed_in_navbar is False
    assert props.background_image is not None
    assert props.background_image.uuid == "bg"


def test_page_items_keep_source_order(assembler: TreeAssembler) -> None:
    raw = page(
        "p",
        "home",
        text("t1", "First"),
        block("b1", text("t2", "Inside")),
        resource("note", "Loose note"),
        text("t3", "Last"),
    )
    items = _page(assembler, raw).items
    assert [item.uuid for item in items] == ["t1", "b1", "t3"]
    assert isinstance(items[1], WebBlock)
    assert [child.uuid for child in items[1].items] == ["t2"]


def test_block_layout_defaults_and_overrides(assembler: TreeAssembler) -> None:
    raw = page(
        "p",
        "home",
        block(
            "b1",
            text("t1", "Hi"),
            layout="horizontal",
            options=(
                prop("gap", "2rem"),
                prop("overwrite-mobile", None, prop("layout", "vertical")),
                prop("overwrite-tablet"),
            ),
        ),
    )
    found = _page(assembler, raw).items[0]
    assert isinstance(found, WebBlock)
    layout = found.properties.default
    assert (layout.layout, layout.gap, layout.align_items, layout.justify_content) == (
        "horizontal",
        "2rem",
        "start",
        "stretch",
    )
    assert layout.is_accordion_enabled is None, "expected no accordion flags"
    assert found.properties.mobile == BlockLayoutOverride(layout="vertical")
    assert found.properties.tablet is None, "expected an empty override to be None"


def test_accordion_block_builds_panels(assembler: TreeAssembler) -> None:
    panel = resource(
        "panel",
        "Panel",
        component("text"),
        document="Heading",
        children=[text("inner", "Body"), block("nested", text("deep", "Deep"))],
    )
    raw = page("p", "home", block("acc", panel, layout="accordion"))
    found = _page(assembler, raw).items[0]
    assert isinstance(found, WebBlock)
    assert found.properties.default.is_accordion_enabled is True
    assert found.properties.default.is_accordion_expanded_by_default is True
    assert found.properties.default.is_accordion_sidebar_displayed is False
    item = found.items[0]
    assert isinstance(item, AccordionItem)
    assert isinstance(item, TextElement)
    assert item.content == "Heading"
    assert [child.uuid for child in item.items] == ["inner", "nested"]


def test_accordion_rejects_non_text_children(assembler: TreeAssembler) -> None:
    picture = resource("img", "Picture", component("image"), links=[image_link("i")])
    raw = page("p", "home", block("acc", picture, layout="accordion"))
    with pytest.raises(StructuralViolation) as excinfo:
        _page(assembler, raw)
    assert excinfo.value.label == "Picture"
    assert "component 'image'" in excinfo.value.found, (
        f"expected the found description to name the image, got {excinfo.value.found!r}"
    )


def test_describe_names_roles() -> None:
    assert describe(read_resource(resource("n", "N"))) == "an unclassified node"
    assert describe(read_resource(resource("b", "B", presentation("block")))) == "a block"
    bare = read_resource(resource("e", "E", presentation("element")))
    assert describe(bare) == "an element without a component"


def test_segments_inside_pages_compose_slugs(assembler: TreeAssembler) -> None:
    raw = page(
        "p",
        "guide",
        segment("seg", "parts", segment_item("item", "one", page("leaf", "intro"))),
    )
    found = _page(assembler, raw).items[0]
    assert isinstance(found, WebSegment)
    assert found.slug == "parts"
    item = found.items[0]
    assert (item.type, item.slug) == ("segment-item", "one")
    leaf = item.items[0]
    assert isinstance(leaf, Webpage)
    assert leaf.slug == "guide/parts/one/intro"


def test_segment_items_hold_pages_then_segments(assembler: TreeAssembler) -> None:
    raw = segment(
        "seg",
        "top",
        segment_item(
            "item",
            "i",
            segment("inner", "nested", segment_item("x", "x")),
            page("leaf", "leaf"),
        ),
    )
    found = assembler.parse_segment(read_resource(raw))
    kinds = [child.type for child in found.items[0].items]
    assert kinds == ["page", "segment"], f"expected pages first, got {kinds!r}"


def test_page_without_slug_is_dropped_with_warning(
    assembler: TreeAssembler, caplog: pytest.LogCaptureFixture
) -> None:
    raw = page("p", "home", page("bad", None, label="Orphan"), page("ok", "ok"))
    with caplog.at_level(logging.WARNING):
        top = _page(assembler, raw)
    assert [child.slug for child in top.webpages] == ["home/ok"]
    assert "Orphan" in caplog.text


def test_page_without_slug_raises_when_dropping_is_disabled() -> None:
    assembler = TreeAssembler(settings=ParserSettings(drop_invalid_pages=False))
    raw = page("p", "home", page("bad", None, label="Orphan"))
    with pytest.raises(MissingRequiredField) as excinfo:
        _page(assembler, raw)
    assert (excinfo.value.kind, excinfo.value.field) == ("page", "slug")


def test_segment_without_abbreviation_is_dropped(assembler: TreeAssembler) -> None:
    found = assembler.parse_segments([read_resource(segment("seg", None))])
    assert found == []


def test_linked_document_is_resolved_once(mocker: MockerFixture) -> None:
    resolver = MappingDocumentResolver({"doc-1": "From the archive"})
    spy = mocker.spy(resolver, "resolve")
    assembler = TreeAssembler(resolver=resolver)
    raw = resource("t1", "Linked", component("text"), links=[document_link("doc-1")])
    element = assembler.parse_element(read_resource(raw))
    assert isinstance(element, TextElement)
    assert element.content == "From the archive"
    spy.assert_called_once_with("doc-1")


def test_inline_document_skips_resolver(mocker: MockerFixture) -> None:
    resolver = mocker.Mock()
    assembler = TreeAssembler(resolver=resolver)
    element = assembler.parse_element(read_resource(text("t1", "Inline")))
    assert isinstance(element, TextElement)
    resolver.resolve.assert_not_called()


def test_image_element_inside_page(assembler: TreeAssembler) -> None:
    raw = page(
        "p",
        "home",
        resource("img", "Picture", component("image"), links=[image_link("i")]),
    )
    item = _page(assembler, raw).items[0]
    assert isinstance(item, ImageElement)
