"""Extractors for textual and layout components."""

from __future__ import annotations

import typing as typ

from website_tree.elements._common import read_options
from website_tree.elements.models import (
    AnnotatedDocumentElement,
    EmptySpaceElement,
    NColumnsElement,
    NRowsElement,
    TextElement,
    TextVariant,
)
from website_tree.properties import find_by_label
from website_tree.source.strings import fake_string

if typ.TYPE_CHECKING:
    from website_tree.elements._common import ExtractionContext

SIZED_TEXT_VARIANTS = frozenset({"paragraph", "label", "heading", "display"})
DEFAULT_TEXT_SIZE = "md"


def extract_annotated_document(ctx: ExtractionContext) -> AnnotatedDocumentElement:
    link = ctx.require_link(lambda link: link.type == "internalDocument", "Document link")
    return AnnotatedDocumentElement(**ctx.common, link_uuid=typ.cast("str", link.uuid))


def extract_empty_space(ctx: ExtractionContext) -> EmptySpaceElement:
    return EmptySpaceElement(
        **ctx.common,
        **read_options(ctx.options, text={"height": "height", "width": "width"}),
    )


def text_variant(ctx: ExtractionContext) -> TextVariant:
    """Read the ``variant`` option; sized variants default to ``md``."""
    prop = find_by_label(ctx.options, "variant")
    if prop is None or prop.first_content is None:
        return TextVariant()
    name = fake_string(prop.first_content)
    if name not in SIZED_TEXT_VARIANTS:
        return TextVariant(name=name)
    size = read_options(prop.properties, text={"size": "size"}).get(
        "size", DEFAULT_TEXT_SIZE
    )
    return TextVariant(name=name, size=size)


def extract_text(ctx: ExtractionContext) -> TextElement:
    """Build a text element; its document content is mandatory."""
    content = ctx.document_text(ctx.node)
    if not content:
        raise ctx.missing("Content")
    heading_level = read_options(
        ctx.options, numbers={"heading_level": "heading-level"}, label=ctx.label
    ).get("heading_level")
    return TextElement(
        **ctx.common,
        content=content,
        variant=text_variant(ctx),
        heading_level=int(heading_level) if heading_level is not None else None,
    )


def extract_n_columns(ctx: ExtractionContext) -> NColumnsElement:
    return NColumnsElement(**ctx.common, columns=ctx.parse_children(ctx.node))


def extract_n_rows(ctx: ExtractionContext) -> NRowsElement:
    return NRowsElement(**ctx.common, rows=ctx.parse_children(ctx.node))


__all__ = [
    "extract_annotated_document",
    "extract_empty_space",
    "extract_n_columns",
    "extract_n_rows",
    "extract_text",
    "text_variant",
]
