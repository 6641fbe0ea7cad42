"""Recursive walk turning classified resource nodes into website records.

Each child is classified once and routed by role: pages collect their own
content and nested pages, segments and segment items carry navigation, blocks
arrange elements and elements go through the component dispatcher. Slugs
accumulate as the walk descends::

    a  ->  a/b  ->  a/b/c

Examples
--------
>>> from website_tree.assembler import compose_slug
>>> compose_slug("a/b", "c")
'a/b/c'
>>> compose_slug(None, "home")
'home'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import re
import typing as typ

from website_tree._constants import IMAGE_LINK_TYPES
from website_tree.classify import Role, classify, component_name, role_subproperties
from website_tree.config import ParserSettings
from website_tree.elements import Component, WebElement, extract_element
from website_tree.elements._common import read_options, web_image
from website_tree.elements.models import TextElement
from website_tree.errors import MissingRequiredField, StructuralViolation
from website_tree.models import (
    AccordionItem,
    BlockLayout,
    BlockLayoutOverride,
    BlockProperties,
    PageProperties,
    WebBlock,
    Webpage,
    WebSegment,
    WebSegmentItem,
)
from website_tree.properties import find_by_label
from website_tree.source.strings import DocumentRenderer, PlainTextRenderer
from website_tree.styles import parse_responsive_styles
from website_tree.titles import parse_web_title

if typ.TYPE_CHECKING:
    from website_tree.resolvers import DocumentResolver
    from website_tree.source.nodes import PropertyNode, ResourceNode

logger = logging.getLogger(__name__)

T = typ.TypeVar("T")

SEGMENT_SLUG_PREFIX = re.compile(r"^\$[^-]*-")
ACCORDION = "accordion"

_PAGE_TEXT = {"width": "width", "variant": "variant"}
_PAGE_FLAGS = {
    "is_sidebar_displayed": ("sidebar-visible", "sidebar-displayed"),
    "is_breadcrumbs_displayed": ("breadcrumbs-visible", "breadcrumbs-displayed"),
    "is_displayed_in_navbar": ("header", "displayed-in-navbar"),
    "is_navbar_search_bar_displayed": "navbar-search-bar-displayed",
}
_LAYOUT_TEXT = {
    "layout": "layout",
    "spacing": "spacing",
    "gap": "gap",
    "align_items": "align-items",
    "justify_content": "justify-content",
}
_ACCORDION_FLAGS = {
    "is_accordion_enabled": "accordion-enabled",
    "is_accordion_expanded_by_default": "accordion-expanded",
    "is_accordion_sidebar_displayed": "accordion-sidebar-displayed",
}
_ACCORDION_DEFAULTS = {
    "is_accordion_enabled": True,
    "is_accordion_expanded_by_default": True,
    "is_accordion_sidebar_displayed": False,
}


def compose_slug(prefix: str | None, slug: str) -> str:
    """Join ``slug`` onto the accumulated ``prefix`` path."""
    if prefix is None:
        return slug
    return f"{prefix}/{slug}".removesuffix("/")


def describe(node: ResourceNode) -> str:
    """Describe a node's role (and component) for error messages."""
    match classify(node):
        case Role.NONE:
            return "an unclassified node"
        case Role.ELEMENT if component_name(node) is None:
            return "an element without a component"
        case Role.ELEMENT:
            return f"an element with component '{component_name(node)}'"
        case role:
            return f"a {role.value}"


class TreeAssembler:
    """Assemble pages, segments, blocks and elements from resource nodes.

    Parameters
    ----------
    renderer : DocumentRenderer, optional
        Turns raw document content into text. Defaults to
        :class:`~website_tree.source.strings.PlainTextRenderer`.
    resolver : DocumentResolver, optional
        Fetches the document of an element that carries no inline content.
        Without one, such elements are treated as having no document.
    settings : ParserSettings, optional
        Language and page-drop policy.
    """

    def __init__(
        self,
        renderer: DocumentRenderer | None = None,
        resolver: DocumentResolver | None = None,
        settings: ParserSettings | None = None,
    ) -> None:
        self.settings = settings or ParserSettings()
        self.renderer = renderer or PlainTextRenderer(self.settings.language)
        self.resolver = resolver

    # documents

    def document_text(self, node: ResourceNode) -> str | None:
        """Render the inline document of ``node`` or resolve its linked one."""
        if node.document is not None:
            return self.renderer(node.document)
        if self.resolver is None:
            return None
        link = next(
            (
                link
                for link in node.links
                if link.type == "internalDocument" and link.uuid is not None
            ),
            None,
        )
        if link is None:
            return None
        logger.debug("Resolving linked document %s for '%s'", link.uuid, node.label)
        content = self.resolver.resolve(typ.cast("str", link.uuid))
        if content is None:
            return None
        return self.renderer(content)

    # elements

    def parse_element(self, node: ResourceNode) -> WebElement | None:
        """Parse an element node; ``None`` when its component is unknown."""
        return extract_element(
            node,
            document_text=self.document_text,
            parse_children=self.parse_elements,
            language=self.settings.language,
        )

    def parse_elements(self, node: ResourceNode) -> list[WebElement]:
        """Parse the children of ``node`` strictly as elements."""
        elements: list[WebElement] = []
        for child in node.children:
            if classify(child) is not Role.ELEMENT:
                logger.debug("Skipping non-element child '%s'", child.label)
                continue
            element = self.parse_element(child)
            if element is not None:
                elements.append(element)
        return elements

    def parse_items(self, node: ResourceNode) -> list[WebElement | WebBlock]:
        """Parse the element and block children of ``node`` in source order."""
        items: list[WebElement | WebBlock] = []
        for child in node.children:
            match classify(child):
                case Role.ELEMENT:
                    element = self.parse_element(child)
                    if element is not None:
                        items.append(element)
                case Role.BLOCK:
                    items.append(self.parse_block(child))
                case _:
                    logger.debug("Skipping child '%s' of '%s'", child.label, node.label)
        return items

    # blocks

    def parse_block(self, node: ResourceNode) -> WebBlock:
        """Parse a block, enforcing text-only children for accordions.

        Raises
        ------
        StructuralViolation
            If an accordion block holds anything but text elements.
        """
        options = role_subproperties(node, Role.BLOCK)
        default = block_layout(options)
        properties = BlockProperties(
            default=default,
            tablet=layout_override(options, "overwrite-tablet", default.layout),
            mobile=layout_override(options, "overwrite-mobile", default.layout),
        )
        items: list[WebElement | WebBlock]
        if default.layout == ACCORDION:
            items = [self.parse_accordion_item(child) for child in node.children]
        else:
            items = self.parse_items(node)
        return WebBlock(
            uuid=node.uuid,
            title=parse_web_title(node.properties, node.label),
            items=items,
            properties=properties,
            css_styles=parse_responsive_styles(node.properties),
        )

    def parse_accordion_item(self, node: ResourceNode) -> AccordionItem:
        """Parse one accordion panel: a text element with its own items."""
        if classify(node) is not Role.ELEMENT or component_name(node) != Component.TEXT:
            raise StructuralViolation(node.label, "a text element", describe(node))
        text = typ.cast("TextElement", self.parse_element(node))
        fields = {
            field.name: getattr(text, field.name) for field in dc.fields(text) if field.init
        }
        return AccordionItem(**fields, items=self.parse_items(node))

    # pages and segments

    def parse_webpage(self, node: ResourceNode, prefix: str | None = None) -> Webpage:
        """Parse a page and, recursively, its nested pages.

        Parameters
        ----------
        node : ResourceNode
            A node classified as a page.
        prefix : str | None, optional
            Accumulated slug path of the enclosing page or segment item.

        Raises
        ------
        MissingRequiredField
            If the page has no slug.
        """
        if node.slug is None:
            raise MissingRequiredField(node.label, "page", "slug")
        slug = compose_slug(prefix, SEGMENT_SLUG_PREFIX.sub("", node.slug))

        items: list[WebSegment | WebElement | WebBlock] = []
        webpages: list[Webpage] = []
        for child in node.children:
            match classify(child):
                case Role.PAGE:
                    page = self._attempt(self.parse_webpage, child, slug)
                    if page is not None:
                        webpages.append(page)
                case Role.SEGMENT:
                    segment = self._attempt(self.parse_segment, child, slug)
                    if segment is not None:
                        items.append(segment)
                case Role.ELEMENT:
                    element = self.parse_element(child)
                    if element is not None:
                        items.append(element)
                case Role.BLOCK:
                    items.append(self.parse_block(child))
                case _:
                    logger.debug("Skipping child '%s' of page '%s'", child.label, node.label)

        return Webpage(
            uuid=node.uuid,
            title=node.label,
            slug=slug,
            publication_date=node.publication_date,
            items=items,
            webpages=webpages,
            properties=self.page_properties(node),
        )

    def page_properties(self, node: ResourceNode) -> PageProperties:
        options = role_subproperties(node, Role.PAGE)
        image_link = next(
            (
                link
                for link in node.links
                if link.type in IMAGE_LINK_TYPES and link.uuid is not None
            ),
            None,
        )
        return PageProperties(
            **read_options(options, text=_PAGE_TEXT, flags=_PAGE_FLAGS),
            background_image=web_image(image_link) if image_link is not None else None,
            css_styles=parse_responsive_styles(node.properties),
        )

    def parse_webpages(
        self, nodes: cabc.Iterable[ResourceNode], prefix: str | None = None
    ) -> list[Webpage]:
        """Parse every page among ``nodes``, skipping other roles."""
        return self._collect(self.parse_webpage, Role.PAGE, nodes, prefix)

    def parse_segment(self, node: ResourceNode, prefix: str | None = None) -> WebSegment:
        """Parse a segment; its slug comes from the abbreviation.

        Raises
        ------
        MissingRequiredField
            If the segment has no abbreviation.
        """
        slug = self._abbreviation_slug(node, "segment")
        return WebSegment(
            uuid=node.uuid,
            title=node.label,
            slug=slug,
            publication_date=node.publication_date,
            items=self._collect(
                self.parse_segment_item,
                Role.SEGMENT_ITEM,
                node.children,
                compose_slug(prefix, slug),
            ),
        )

    def parse_segments(
        self, nodes: cabc.Iterable[ResourceNode], prefix: str | None = None
    ) -> list[WebSegment]:
        """Parse every segment among ``nodes``, skipping other roles."""
        return self._collect(self.parse_segment, Role.SEGMENT, nodes, prefix)

    def parse_segment_item(
        self, node: ResourceNode, prefix: str | None = None
    ) -> WebSegmentItem:
        """Parse a segment item holding pages, then nested segments."""
        slug = self._abbreviation_slug(node, "segment item")
        path = compose_slug(prefix, slug)
        return WebSegmentItem(
            uuid=node.uuid,
            title=node.label,
            slug=slug,
            publication_date=node.publication_date,
            items=[
                *self.parse_webpages(node.children, path),
                *self.parse_segments(node.children, path),
            ],
        )

    # helpers

    @staticmethod
    def _abbreviation_slug(node: ResourceNode, kind: str) -> str:
        abbreviation = node.identification.abbreviation
        if abbreviation is None:
            raise MissingRequiredField(node.label, kind, "abbreviation")
        return abbreviation

    def _attempt(
        self,
        parse: cabc.Callable[[ResourceNode, str | None], T],
        node: ResourceNode,
        prefix: str | None,
    ) -> T | None:
        """Run ``parse``, dropping the node on a missing routing field if allowed."""
        try:
            return parse(node, prefix)
        except MissingRequiredField as exc:
            if not self.settings.drop_invalid_pages:
                raise
            logger.warning("%s; %s dropped", exc, exc.kind)
            return None

    def _collect(
        self,
        parse: cabc.Callable[[ResourceNode, str | None], T],
        role: Role,
        nodes: cabc.Iterable[ResourceNode],
        prefix: str | None,
    ) -> list[T]:
        results: list[T] = []
        for node in nodes:
            if classify(node) is not role:
                continue
            result = self._attempt(parse, node, prefix)
            if result is not None:
                results.append(result)
        return results


def block_layout(options: cabc.Sequence[PropertyNode]) -> BlockLayout:
    """Read the default-tier layout of a block.

    The accordion flags are read, with their own defaults, only when the
    layout is ``accordion``.
    """
    found = read_options(options, text=_LAYOUT_TEXT)
    if found.get("layout") == ACCORDION:
        found = _ACCORDION_DEFAULTS | found | read_options(options, flags=_ACCORDION_FLAGS)
    return BlockLayout(**found)


def layout_override(
    options: cabc.Sequence[PropertyNode], label: str, default_layout: str
) -> BlockLayoutOverride | None:
    """Read a partial ``overwrite-*`` layout; ``None`` when nothing is set."""
    prop = find_by_label(options, label)
    if prop is None:
        return None
    found = read_options(prop.properties, text=_LAYOUT_TEXT)
    if ACCORDION in (found.get("layout"), default_layout):
        found |= read_options(prop.properties, flags=_ACCORDION_FLAGS)
    return BlockLayoutOverride(**found) if found else None


__all__ = [
    "TreeAssembler",
    "block_layout",
    "compose_slug",
    "describe",
    "layout_override",
]
