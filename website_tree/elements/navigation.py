"""Extractors for navigation components: buttons and search inputs."""

from __future__ import annotations

import typing as typ

from website_tree._constants import IMAGE_LINK_TYPES
from website_tree.elements._common import (
    read_options,
    reference_href,
    reference_uuid,
    web_image,
)
from website_tree.elements.models import (
    AdvancedSearchElement,
    ButtonElement,
    SearchBarElement,
)

if typ.TYPE_CHECKING:
    from website_tree.elements._common import ExtractionContext


def extract_advanced_search(ctx: ExtractionContext) -> AdvancedSearchElement:
    bound_element_uuid = reference_uuid(ctx.options, "bound-element")
    href = reference_href(ctx.options, "link-to")
    if bound_element_uuid is None and href is None:
        raise ctx.missing("Bound element or href")
    return AdvancedSearchElement(
        **ctx.common, bound_element_uuid=bound_element_uuid, href=href
    )


def extract_button(ctx: ExtractionContext) -> ButtonElement:
    """Build a button from ``navigate-to`` or, failing that, ``link-to``.

    Only a ``link-to`` target makes the button external. The label is the
    element's document and an image link, when present, becomes the button
    image.
    """
    href = reference_href(ctx.options, "navigate-to")
    is_external = False
    if href is None:
        href = reference_href(ctx.options, "link-to")
        if href is None:
            raise ctx.missing("Properties 'navigate-to' or 'link-to'")
        is_external = True

    image_link = ctx.find_link(lambda link: link.type in IMAGE_LINK_TYPES)
    return ButtonElement(
        **ctx.common,
        href=href,
        is_external=is_external,
        label=ctx.document_text(ctx.node),
        image=web_image(image_link) if image_link is not None else None,
        **read_options(
            ctx.options,
            text={
                "variant": "variant",
                "start_icon": "start-icon",
                "end_icon": "end-icon",
            },
        ),
    )


def _unescape_braces(text: str) -> str:
    return text.replace("\\{", "{").replace("\\}", "}")


def extract_search_bar(ctx: ExtractionContext) -> SearchBarElement:
    bound_element_uuid = reference_uuid(ctx.options, "bound-element")
    href = reference_href(ctx.options, "link-to")
    if not bound_element_uuid and not href:
        raise ctx.missing("Bound element or href")
    options = read_options(
        ctx.options,
        text={
            "query_variant": "query-variant",
            "placeholder": "placeholder-text",
            "base_filter_queries": "base-filter-queries",
        },
    )
    if "base_filter_queries" in options:
        options["base_filter_queries"] = _unescape_braces(options["base_filter_queries"])
    return SearchBarElement(
        **ctx.common,
        bound_element_uuid=bound_element_uuid,
        href=href,
        **options,
    )


__all__ = ["extract_advanced_search", "extract_button", "extract_search_bar"]
