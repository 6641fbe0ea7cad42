"""Element records, one dataclass per component kind.

Field defaults double as each kind's default options: an extractor passes only
the options that were authored and the dataclass fills in the rest. Every
element carries ``uuid``, ``title`` and ``css_styles``; ``type`` and
``component`` are fixed per class and never passed in.
"""

from __future__ import annotations

import dataclasses as dc
import enum

from website_tree.errors import UnrecognizedComponent
from website_tree.options import OptionLabels, PropertyContexts, Scope  # noqa: TC001
from website_tree.source.nodes import BibliographyRef  # noqa: TC001 - dataclass field type
from website_tree.styles import ResponsiveStyles
from website_tree.titles import WebTitle  # noqa: TC001 - dataclass field type

Bounds = tuple[tuple[float, float], tuple[float, float]]


class Component(enum.StrEnum):
    """Closed set of component kinds an element may render as."""

    THREE_D_VIEWER = "3d-viewer"
    ADVANCED_SEARCH = "advanced-search"
    ANNOTATED_DOCUMENT = "annotated-document"
    ANNOTATED_IMAGE = "annotated-image"
    AUDIO_PLAYER = "audio-player"
    BIBLIOGRAPHY = "bibliography"
    BUTTON = "button"
    COLLECTION = "collection"
    EMPTY_SPACE = "empty-space"
    ENTRIES = "entries"
    FILTER_CATEGORIES = "filter-categories"
    IFRAME = "iframe"
    IIIF_VIEWER = "iiif-viewer"
    IMAGE = "image"
    IMAGE_GALLERY = "image-gallery"
    MAP = "map"
    N_COLUMNS = "n-columns"
    N_ROWS = "n-rows"
    NETWORK_GRAPH = "network-graph"
    QUERY = "query"
    SEARCH_BAR = "search-bar"
    TABLE = "table"
    TEXT = "text"
    TIMELINE = "timeline"
    VIDEO = "video"

    @classmethod
    def lookup(cls, value: object, *, label: str) -> Component:
        """Return the member for ``value`` or raise :class:`UnrecognizedComponent`."""
        try:
            return cls(str(value))
        except ValueError as exc:
            raise UnrecognizedComponent(label, value) from exc


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class WebImage:
    """An image referenced by an element or a page background."""

    uuid: str | None
    label: str | None = None
    description: str | None = None
    width: int = 0
    height: int = 0
    quality: str = "high"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class WebElement:
    """Fields shared by every element kind."""

    uuid: str
    title: WebTitle
    css_styles: ResponsiveStyles = dc.field(default_factory=ResponsiveStyles)
    type: str = dc.field(default="element", init=False)
    component: Component = dc.field(default=Component.TEXT, init=False)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ThreeDViewerElement(WebElement):
    component: Component = dc.field(default=Component.THREE_D_VIEWER, init=False)
    link_uuid: str
    file_size: int | None = None
    is_interactive: bool = True
    is_controls_displayed: bool = True


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class AdvancedSearchElement(WebElement):
    component: Component = dc.field(default=Component.ADVANCED_SEARCH, init=False)
    bound_element_uuid: str | None = None
    href: str | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class AnnotatedDocumentElement(WebElement):
    component: Component = dc.field(default=Component.ANNOTATED_DOCUMENT, init=False)
    link_uuid: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class AnnotatedImageElement(WebElement):
    component: Component = dc.field(default=Component.ANNOTATED_IMAGE, init=False)
    link_uuid: str
    is_filter_input_displayed: bool = True
    is_options_displayed: bool = True
    is_annotation_highlights_displayed: bool = True
    is_annotation_tooltips_displayed: bool = True


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class AudioPlayerElement(WebElement):
    component: Component = dc.field(default=Component.AUDIO_PLAYER, init=False)
    link_uuid: str
    is_speed_controls_displayed: bool = True
    is_volume_controls_displayed: bool = True
    is_seek_bar_displayed: bool = True


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class BibliographyElement(WebElement):
    component: Component = dc.field(default=Component.BIBLIOGRAPHY, init=False)
    link_uuids: list[str] = dc.field(default_factory=list)
    bibliographies: list[BibliographyRef] = dc.field(default_factory=list)
    layout: str = "long"
    is_source_document_displayed: bool = True


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ButtonElement(WebElement):
    component: Component = dc.field(default=Component.BUTTON, init=False)
    href: str
    is_external: bool = False
    variant: str = "default"
    label: str | None = None
    start_icon: str | None = None
    end_icon: str | None = None
    image: WebImage | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class DisplayedProperty:
    """A property variable shown on collection and query items."""

    uuid: str
    label: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class CollectionFilter:
    """Filter panel options of a collection."""

    is_sidebar_displayed: bool = False
    is_results_bar_displayed: bool = False
    is_map_displayed: bool = False
    is_input_displayed: bool = False
    is_limited_to_title_query: bool = False
    is_limited_to_leaf_property_values: bool = False
    sidebar_sort: str = "default"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class AttributeFilters:
    """Extra attribute facets offered by a collection."""

    bibliographies: bool = False
    periods: bool = False


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class CollectionOptions:
    """Scopes, contexts and labels read from an element's ``options`` block."""

    attribute_filters: AttributeFilters = dc.field(default_factory=AttributeFilters)
    scopes: list[Scope] | None = None
    contexts: PropertyContexts | None = None
    labels: OptionLabels = dc.field(default_factory=OptionLabels)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class CollectionElement(WebElement):
    component: Component = dc.field(default=Component.COLLECTION, init=False)
    link_uuids: list[str]
    displayed_properties: list[DisplayedProperty] | None = None
    variant: str = "full"
    item_variant: str = "detailed"
    pagination_variant: str = "default"
    layout: str = "image-start"
    image_quality: str = "low"
    is_using_query_params: bool = False
    is_sort_displayed: bool = False
    filter: CollectionFilter = dc.field(default_factory=CollectionFilter)
    options: CollectionOptions = dc.field(default_factory=CollectionOptions)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class EmptySpaceElement(WebElement):
    component: Component = dc.field(default=Component.EMPTY_SPACE, init=False)
    height: str | None = None
    width: str | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class EntriesElement(WebElement):
    component: Component = dc.field(default=Component.ENTRIES, init=False)
    link_uuid: str
    variant: str = "entry"
    is_filter_input_displayed: bool = False


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class FilterCategoriesElement(WebElement):
    component: Component = dc.field(default=Component.FILTER_CATEGORIES, init=False)
    link_uuid: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class IframeElement(WebElement):
    component: Component = dc.field(default=Component.IFRAME, init=False)
    href: str
    height: str | None = None
    width: str | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class IiifViewerElement(WebElement):
    component: Component = dc.field(default=Component.IIIF_VIEWER, init=False)
    link_uuid: str
    variant: str = "universal-viewer"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class CarouselOptions:
    seconds_per_image: float = 5


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class HeroOptions:
    is_background_image_displayed: bool = True
    is_document_displayed: bool = True


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ImageElement(WebElement):
    component: Component = dc.field(default=Component.IMAGE, init=False)
    images: list[WebImage]
    variant: str = "default"
    width: float | None = None
    height: float | None = None
    is_full_width: bool = True
    is_full_height: bool = True
    image_quality: str = "high"
    caption_layout: str = "bottom"
    caption_source: str = "name"
    alt_text_source: str = "name"
    is_transparent_background: bool = False
    is_cover: bool = False
    carousel_options: CarouselOptions | None = None
    hero_options: HeroOptions | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ImageGalleryElement(WebElement):
    component: Component = dc.field(default=Component.IMAGE_GALLERY, init=False)
    link_uuid: str
    is_filter_input_displayed: bool = True


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class MapElement(WebElement):
    component: Component = dc.field(default=Component.MAP, init=False)
    link_uuid: str
    custom_basemap: str | None = None
    initial_bounds: Bounds | None = None
    maximum_bounds: Bounds | None = None
    is_interactive: bool = True
    is_clustered: bool = False
    is_using_pins: bool = False
    is_controls_displayed: bool = False
    is_full_height: bool = False


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class NColumnsElement(WebElement):
    component: Component = dc.field(default=Component.N_COLUMNS, init=False)
    columns: list[WebElement] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class NRowsElement(WebElement):
    component: Component = dc.field(default=Component.N_ROWS, init=False)
    rows: list[WebElement] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class NetworkGraphElement(WebElement):
    component: Component = dc.field(default=Component.NETWORK_GRAPH, init=False)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class QueryPrompt:
    """One predefined query offered by a query element."""

    label: str
    property_variable_uuids: list[str] = dc.field(default_factory=list)
    start_icon: str | None = None
    end_icon: str | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class QueryElement(WebElement):
    component: Component = dc.field(default=Component.QUERY, init=False)
    link_uuids: list[str]
    queries: list[QueryPrompt]
    displayed_properties: list[DisplayedProperty] | None = None
    item_variant: str = "detailed"
    pagination_variant: str = "default"
    layout: str = "image-start"
    options: CollectionOptions = dc.field(default_factory=CollectionOptions)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class SearchBarElement(WebElement):
    component: Component = dc.field(default=Component.SEARCH_BAR, init=False)
    query_variant: str = "submit"
    placeholder: str | None = None
    base_filter_queries: str | None = None
    bound_element_uuid: str | None = None
    href: str | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class TableElement(WebElement):
    component: Component = dc.field(default=Component.TABLE, init=False)
    link_uuid: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class TextVariant:
    """Typographic variant of a text element.

    ``size`` is only set for the sized variants (paragraph, label, heading and
    display).
    """

    name: str = "block"
    size: str | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class TextElement(WebElement):
    component: Component = dc.field(default=Component.TEXT, init=False)
    content: str
    variant: TextVariant = dc.field(default_factory=TextVariant)
    heading_level: int | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class TimelineElement(WebElement):
    component: Component = dc.field(default=Component.TIMELINE, init=False)
    link_uuid: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class VideoElement(WebElement):
    component: Component = dc.field(default=Component.VIDEO, init=False)
    link_uuid: str
    is_chapters_displayed: bool = True


__all__ = [
    "AdvancedSearchElement",
    "AnnotatedDocumentElement",
    "AnnotatedImageElement",
    "AttributeFilters",
    "AudioPlayerElement",
    "BibliographyElement",
    "Bounds",
    "ButtonElement",
    "CarouselOptions",
    "CollectionElement",
    "CollectionFilter",
    "CollectionOptions",
    "Component",
    "DisplayedProperty",
    "EmptySpaceElement",
    "EntriesElement",
    "FilterCategoriesElement",
    "HeroOptions",
    "IframeElement",
    "IiifViewerElement",
    "ImageElement",
    "ImageGalleryElement",
    "MapElement",
    "NColumnsElement",
    "NRowsElement",
    "NetworkGraphElement",
    "QueryElement",
    "QueryPrompt",
    "SearchBarElement",
    "TableElement",
    "TextElement",
    "TextVariant",
    "ThreeDViewerElement",
    "TimelineElement",
    "VideoElement",
    "WebElement",
    "WebImage",
]
