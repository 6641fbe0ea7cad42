"""Route element nodes to the extractor registered for their component.

Examples
--------
>>> from website_tree.elements.dispatch import EXTRACTORS
>>> from website_tree.elements.models import Component
>>> set(EXTRACTORS) == set(Component)
True
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from website_tree.classify import component_property
from website_tree.elements import content, data, media, navigation
from website_tree.elements._common import ExtractionContext, Extractor
from website_tree.elements.models import CollectionElement, Component, WebElement
from website_tree.errors import MissingRequiredReference, UnrecognizedComponent
from website_tree.styles import parse_responsive_styles
from website_tree.titles import force_visibility, parse_web_title

if typ.TYPE_CHECKING:
    from website_tree.source.nodes import ResourceNode

logger = logging.getLogger(__name__)

EXTRACTORS: dict[Component, Extractor] = {
    Component.THREE_D_VIEWER: media.extract_3d_viewer,
    Component.ADVANCED_SEARCH: navigation.extract_advanced_search,
    Component.ANNOTATED_DOCUMENT: content.extract_annotated_document,
    Component.ANNOTATED_IMAGE: media.extract_annotated_image,
    Component.AUDIO_PLAYER: media.extract_audio_player,
    Component.BIBLIOGRAPHY: data.extract_bibliography,
    Component.BUTTON: navigation.extract_button,
    Component.COLLECTION: data.extract_collection,
    Component.EMPTY_SPACE: content.extract_empty_space,
    Component.ENTRIES: data.extract_entries,
    Component.FILTER_CATEGORIES: data.extract_filter_categories,
    Component.IFRAME: media.extract_iframe,
    Component.IIIF_VIEWER: media.extract_iiif_viewer,
    Component.IMAGE: media.extract_image,
    Component.IMAGE_GALLERY: media.extract_image_gallery,
    Component.MAP: data.extract_map,
    Component.N_COLUMNS: content.extract_n_columns,
    Component.N_ROWS: content.extract_n_rows,
    Component.NETWORK_GRAPH: data.extract_network_graph,
    Component.QUERY: data.extract_query,
    Component.SEARCH_BAR: navigation.extract_search_bar,
    Component.TABLE: data.extract_table,
    Component.TEXT: content.extract_text,
    Component.TIMELINE: data.extract_timeline,
    Component.VIDEO: media.extract_video,
}

_NAME_DISPLAYED = frozenset(
    {Component.ANNOTATED_IMAGE, Component.ANNOTATED_DOCUMENT, Component.COLLECTION}
)


def patch_title(element: WebElement) -> WebElement:
    """Force the title flags some components always display."""
    title = force_visibility(
        element.title,
        is_name_displayed=element.component in _NAME_DISPLAYED,
        is_count_displayed=(
            isinstance(element, CollectionElement) and element.variant == "full"
        ),
    )
    if title is element.title:
        return element
    return dc.replace(element, title=title)


def extract_element(
    node: ResourceNode,
    *,
    document_text: cabc.Callable[[ResourceNode], str | None],
    parse_children: cabc.Callable[[ResourceNode], list[WebElement]],
    language: str,
) -> WebElement | None:
    """Build the element record for ``node``.

    Parameters
    ----------
    node : ResourceNode
        A node classified as an element.
    document_text : Callable[[ResourceNode], str | None]
        Renders (or resolves and renders) a node's document.
    parse_children : Callable[[ResourceNode], list[WebElement]]
        Parses container children as nested elements.
    language : str
        Preferred language for labels.

    Returns
    -------
    WebElement | None
        The element, or ``None`` when its component is not recognised.

    Raises
    ------
    MissingRequiredReference
        If the component is missing, or its mandatory links or content are
        absent.
    """
    prop = component_property(node)
    if prop is None or prop.first_content is None:
        raise MissingRequiredReference(node.label, "unknown", "Component")
    try:
        component = Component.lookup(prop.first_content, label=node.label)
    except UnrecognizedComponent as exc:
        logger.warning("%s; element dropped", exc)
        return None

    ctx = ExtractionContext(
        node=node,
        component=component,
        component_property=prop,
        title=parse_web_title(node.properties, node.label),
        css_styles=parse_responsive_styles(node.properties),
        document_text=document_text,
        parse_children=parse_children,
        language=language,
    )
    return patch_title(EXTRACTORS[component](ctx))


__all__ = ["EXTRACTORS", "extract_element", "patch_title"]
