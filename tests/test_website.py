"""Unit tests for building the website root and its global option groups."""

from __future__ import annotations

import pytest
from tree_builders import (
    block,
    component,
    page,
    prop,
    resource,
    segment,
    segment_item,
    text,
    website,
)

from website_tree.elements.models import TextElement
from website_tree.errors import InvalidPropertyValue, MissingRequiredField
from website_tree.models import ItemPageOptions, Webpage, WebSegment
from website_tree.website import parse_website, website_root


def _sidebar(uuid: str, *children: dict[str, object], layout: str | None = None) -> dict:
    options = (prop("layout", layout),) if layout is not None else ()
    return resource(uuid, "Sidebar", component("sidebar", *options), children=children)


def test_end_to_end_home_page_with_text() -> None:
    site = parse_website(website(page("p1", "home", text("t1", "Hello"))))
    assert [item.slug for item in site.pages] == ["home"]
    element = site.pages[0].items[0]
    assert isinstance(element, TextElement)
    assert element.content == "Hello"
    assert site.identification.label == "Demo site"
    assert site.identification.abbreviation == "demo"


def test_pages_come_before_segments() -> None:
    tree = website(
        segment("seg", "parts", segment_item("item", "one")),
        page("p1", "home"),
        page("p2", "about"),
    )
    site = parse_website(tree)
    kinds = [type(item) for item in site.items]
    assert kinds == [Webpage, Webpage, WebSegment], f"unexpected order {kinds!r}"


def test_unclassified_top_level_nodes_are_skipped() -> None:
    tree = website(
        resource("loose", "Loose note"),
        page("p1", "home"),
        resource("blk", "Stray block", prop("presentation", "block")),
        segment("seg", "parts"),
    )
    site = parse_website(tree)
    assert [item.uuid for item in site.items] == ["p1", "seg"]


def test_iter_pages_walks_segments_and_nested_pages() -> None:
    tree = website(
        page("p1", "home", page("p2", "child")),
        segment("seg", "parts", segment_item("item", "one", page("p3", "leaf"))),
    )
    slugs = [found.slug for found in parse_website(tree).iter_pages()]
    assert slugs == ["home", "home/child", "parts/one/leaf"]


def test_iter_pages_reaches_segments_inside_pages() -> None:
    tree = website(
        page(
            "p1",
            "guide",
            page("p2", "child"),
            segment("seg", "parts", segment_item("item", "one", page("p3", "intro"))),
        ),
    )
    slugs = [found.slug for found in parse_website(tree).iter_pages()]
    assert slugs == ["guide", "guide/child", "guide/parts/one/intro"], (
        f"unexpected slugs {slugs!r}"
    )


def test_envelope_is_unwrapped() -> None:
    tree = {"ochre": {"tree": website(page("p1", "home"))}}
    assert website_root(tree)["uuid"] == "site"
    assert [found.slug for found in parse_website(tree).pages] == ["home"]


def test_missing_items_is_fatal() -> None:
    tree = website()
    del tree["items"]
    with pytest.raises(MissingRequiredField) as excinfo:
        parse_website(tree)
    assert excinfo.value.label == "Demo site"
    assert excinfo.value.field == "items"


def test_first_sidebar_wins() -> None:
    tree = website(
        page("p1", "home"),
        _sidebar("side-1", text("s1", "First"), layout="end"),
        _sidebar("side-2", text("s2", "Second")),
    )
    sidebar = parse_website(tree).sidebar
    assert sidebar is not None
    assert [item.uuid for item in sidebar.items] == ["s1"]
    assert (sidebar.layout, sidebar.mobile_layout) == ("end", "default")
    assert sidebar.is_displayed is True


def test_sidebar_without_items_is_absent() -> None:
    tree = website(page("p1", "home"), _sidebar("side-1"))
    assert parse_website(tree).sidebar is None


def test_sidebar_keeps_only_element_children() -> None:
    tree = website(
        page("p1", "home"),
        _sidebar("side-1", text("s1", "Kept"), block("blk", text("inner", "Nested"))),
    )
    sidebar = parse_website(tree).sidebar
    assert sidebar is not None
    assert [item.uuid for item in sidebar.items] == ["s1"], (
        f"expected only the text element, got {sidebar.items!r}"
    )
    assert isinstance(sidebar.items[0], TextElement)


def test_global_groups_default_independently() -> None:
    props = parse_website(website(page("p1", "home"))).properties
    assert (props.type, props.status, props.privacy) == ("traditional", "development", "public")
    assert props.contact is None
    assert props.theme.is_theme_toggle_displayed is True
    assert props.theme.default_theme == "system"
    assert props.navbar.is_displayed is True
    assert props.footer.is_displayed is True
    assert props.icon.logo_uuid is None
    assert props.item_page == ItemPageOptions()
    assert props.options.scopes is None


def test_global_groups_read_root_presentation() -> None:
    tree = website(
        page("p1", "home"),
        properties=(
            prop("webUI", "digital-collection"),
            prop("status", "production"),
            prop("contact", "Jane Roe;jane@example.org"),
            prop("default-theme", "dark"),
            prop("navbar-displayed", False),
            prop("logo", {"content": "Logo", "uuid": "logo-1"}),
            prop("bound-element-navbar-search-bar", {"content": "Objects", "uuid": "c1"}),
            prop("footer-displayed", False),
            prop("page-type", "item-page", prop("item-page-notes-displayed", False)),
        ),
    )
    props = parse_website(tree).properties
    assert props.type == "digital-collection"
    assert props.status == "production"
    assert props.contact is not None
    assert (props.contact.name, props.contact.email) == ("Jane Roe", "jane@example.org")
    assert props.theme.default_theme == "dark"
    assert props.navbar.is_displayed is False
    assert props.navbar.search_bar_bound_element_uuid == "c1"
    assert props.icon.logo_uuid == "logo-1"
    assert props.footer.is_displayed is False
    assert props.item_page.is_notes_displayed is False
    assert props.item_page.is_events_displayed is True


@pytest.mark.parametrize(
    "bad",
    [prop("webUI", "bamboo"), prop("privacy", "secret"), prop("contact", "no email here")],
)
def test_invalid_global_values_are_fatal(bad: dict[str, object]) -> None:
    with pytest.raises(InvalidPropertyValue):
        parse_website(website(page("p1", "home"), properties=(bad,)))


@pytest.mark.parametrize(
    ("bad", "expected"),
    [
        (prop("webUI", "bamboo"), "Invalid webUI 'bamboo' for website 'Demo site'"),
        (prop("contact", "no email here"), "Contact property of website 'Demo site'"),
    ],
)
def test_invalid_global_values_name_the_website(
    bad: dict[str, object], expected: str
) -> None:
    with pytest.raises(InvalidPropertyValue) as excinfo:
        parse_website(website(page("p1", "home"), properties=(bad,)))
    assert expected in str(excinfo.value), f"unexpected message {excinfo.value}"


def test_scope_without_uuid_names_the_website() -> None:
    tree = website(page("p1", "home"), options={"scopes": {"scope": [{"type": "set"}]}})
    with pytest.raises(InvalidPropertyValue, match="Scope entries of 'Demo site'"):
        parse_website(tree)


def test_non_mapping_contexts_are_skipped() -> None:
    tree = website(
        page("p1", "home"),
        options={
            "filterContexts": {
                "context": [
                    "stray text",
                    {
                        "identification": {"label": "By period"},
                        "levels": {"level": ["var-1, val-1"]},
                    },
                ]
            }
        },
    )
    contexts = parse_website(tree).properties.options.contexts
    assert contexts is not None
    assert [found.identification.label for found in contexts.filter] == ["By period"]
    assert contexts.filter[0].context[0].variable_uuid == "var-1"
    assert contexts.filter[0].context[0].value_uuid == "val-1"


def test_creators_license_and_title_label() -> None:
    tree = website(
        page("p1", "home"),
        creators={"creator": {"uuid": "person-1", "identification": {"label": "Jane Roe"}}},
        availability={"license": {"content": "CC BY 4.0", "target": "https://cc.org/by"}},
        options={
            "notes": {
                "note": {"content": {"lang": "eng", "title": "Title label", "string": "Name"}}
            }
        },
    )
    site = parse_website(tree)
    assert [(person.uuid, person.name) for person in site.creators] == [("person-1", "Jane Roe")]
    assert site.license is not None
    assert (site.license.content, site.license.url) == ("CC BY 4.0", "https://cc.org/by")
    assert site.properties.options.labels.title == "Name"


def test_parsing_is_idempotent() -> None:
    tree = website(page("p1", "home", text("t1", "Hello")), _sidebar("side", text("s", "S")))
    assert parse_website(tree) == parse_website(tree)
