"""Structural records of the website model: pages, segments, blocks, root.

Elements live in :mod:`website_tree.elements.models`; everything that
arranges them is defined here.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - dataclass field type
import typing as typ

from website_tree.elements.models import TextElement, WebElement, WebImage
from website_tree.options import WebsiteOptions
from website_tree.source.nodes import Identification  # noqa: TC001 - dataclass field type
from website_tree.styles import ResponsiveStyles
from website_tree.titles import WebTitle  # noqa: TC001 - dataclass field type

WEBSITE_TYPES = frozenset(
    {"traditional", "digital-collection", "plum", "cedar", "elm", "maple", "oak", "palm"}
)
WEBSITE_STATUSES = frozenset({"development", "preview", "production"})
WEBSITE_PRIVACY = frozenset({"public", "password", "private"})


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class BlockLayout:
    """Layout of a block on the default tier.

    The accordion flags are only set when the layout is ``accordion``.
    """

    layout: str = "vertical"
    spacing: str | None = None
    gap: str | None = None
    align_items: str = "start"
    justify_content: str = "stretch"
    is_accordion_enabled: bool | None = None
    is_accordion_expanded_by_default: bool | None = None
    is_accordion_sidebar_displayed: bool | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class BlockLayoutOverride:
    """Partial layout for the tablet or mobile tier; ``None`` inherits."""

    layout: str | None = None
    spacing: str | None = None
    gap: str | None = None
    align_items: str | None = None
    justify_content: str | None = None
    is_accordion_enabled: bool | None = None
    is_accordion_expanded_by_default: bool | None = None
    is_accordion_sidebar_displayed: bool | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class BlockProperties:
    default: BlockLayout = dc.field(default_factory=BlockLayout)
    tablet: BlockLayoutOverride | None = None
    mobile: BlockLayoutOverride | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class WebBlock:
    """A group of elements and nested blocks sharing a layout."""

    uuid: str
    title: WebTitle
    items: list[WebElement | WebBlock] = dc.field(default_factory=list)
    properties: BlockProperties = dc.field(default_factory=BlockProperties)
    css_styles: ResponsiveStyles = dc.field(default_factory=ResponsiveStyles)
    type: str = dc.field(default="block", init=False)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class AccordionItem(TextElement):
    """A text element heading one accordion panel, with the panel's items."""

    items: list[WebElement | WebBlock] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class PageProperties:
    width: str = "default"
    variant: str = "default"
    is_breadcrumbs_displayed: bool = False
    is_sidebar_displayed: bool = True
    is_displayed_in_navbar: bool = True
    is_navbar_search_bar_displayed: bool = True
    background_image: WebImage | None = None
    css_styles: ResponsiveStyles = dc.field(default_factory=ResponsiveStyles)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class Webpage:
    """A routed page with its content and nested pages."""

    uuid: str
    title: str
    slug: str
    publication_date: dt.datetime | None = None
    items: list[WebSegment | WebElement | WebBlock] = dc.field(default_factory=list)
    webpages: list[Webpage] = dc.field(default_factory=list)
    properties: PageProperties = dc.field(default_factory=PageProperties)
    type: str = dc.field(default="page", init=False)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class WebSegmentItem:
    """One entry of a segment, holding pages and nested segments."""

    uuid: str
    title: str
    slug: str
    publication_date: dt.datetime | None = None
    items: list[Webpage | WebSegment] = dc.field(default_factory=list)
    type: str = dc.field(default="segment-item", init=False)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class WebSegment:
    """A navigational group of segment items."""

    uuid: str
    title: str
    slug: str
    publication_date: dt.datetime | None = None
    items: list[WebSegmentItem] = dc.field(default_factory=list)
    type: str = dc.field(default="segment", init=False)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class Sidebar:
    is_displayed: bool = True
    items: list[WebElement] = dc.field(default_factory=list)
    title: WebTitle
    layout: str = "start"
    mobile_layout: str = "default"
    css_styles: ResponsiveStyles = dc.field(default_factory=ResponsiveStyles)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class Contact:
    name: str
    email: str | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ThemeOptions:
    is_theme_toggle_displayed: bool = True
    default_theme: str = "system"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class IconOptions:
    logo_uuid: str | None = None
    favicon_uuid: str | None = None
    apple_touch_icon_uuid: str | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class NavbarOptions:
    is_displayed: bool = True
    variant: str = "default"
    alignment: str = "start"
    is_project_displayed: bool = True
    search_bar_bound_element_uuid: str | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class FooterOptions:
    is_displayed: bool = True


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ItemPageOptions:
    """Which sections an item detail page shows."""

    is_main_content_displayed: bool = True
    is_description_displayed: bool = True
    is_document_displayed: bool = True
    is_notes_displayed: bool = True
    is_events_displayed: bool = True
    is_periods_displayed: bool = True
    is_properties_displayed: bool = True
    is_bibliography_displayed: bool = True
    is_property_values_grouped: bool = True
    iiif_viewer: str = "universal-viewer"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class WebsiteProperties:
    """Global option groups of a website, each defaulted on its own."""

    type: str = "traditional"
    status: str = "development"
    privacy: str = "public"
    contact: Contact | None = None
    theme: ThemeOptions = dc.field(default_factory=ThemeOptions)
    icon: IconOptions = dc.field(default_factory=IconOptions)
    navbar: NavbarOptions = dc.field(default_factory=NavbarOptions)
    footer: FooterOptions = dc.field(default_factory=FooterOptions)
    sidebar: Sidebar | None = None
    item_page: ItemPageOptions = dc.field(default_factory=ItemPageOptions)
    options: WebsiteOptions = dc.field(default_factory=WebsiteOptions)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class Person:
    uuid: str | None
    name: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class License:
    content: str
    url: str | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class Website:
    """Root of the website model."""

    uuid: str
    identification: Identification
    creators: list[Person] = dc.field(default_factory=list)
    license: License | None = None
    publication_date: dt.datetime | None = None
    items: list[Webpage | WebSegment] = dc.field(default_factory=list)
    properties: WebsiteProperties = dc.field(default_factory=WebsiteProperties)

    @property
    def pages(self) -> list[Webpage]:
        """Return the top-level pages, in source order."""
        return [item for item in self.items if isinstance(item, Webpage)]

    @property
    def sidebar(self) -> Sidebar | None:
        return self.properties.sidebar

    def iter_pages(self) -> typ.Iterator[Webpage]:
        """Yield every page of the site, depth first."""
        yield from _walk_pages(self.items)


def _walk_pages(items: typ.Iterable[object]) -> typ.Iterator[Webpage]:
    for item in items:
        match item:
            case Webpage():
                yield item
                yield from _walk_pages(item.webpages)
                yield from _walk_pages(item.items)
            case WebSegment() | WebSegmentItem():
                yield from _walk_pages(item.items)


__all__ = [
    "WEBSITE_PRIVACY",
    "WEBSITE_STATUSES",
    "WEBSITE_TYPES",
    "AccordionItem",
    "BlockLayout",
    "BlockLayoutOverride",
    "BlockProperties",
    "Contact",
    "FooterOptions",
    "IconOptions",
    "ItemPageOptions",
    "License",
    "NavbarOptions",
    "PageProperties",
    "Person",
    "Sidebar",
    "ThemeOptions",
    "WebBlock",
    "WebSegment",
    "WebSegmentItem",
    "Webpage",
    "Website",
    "WebsiteProperties",
]
