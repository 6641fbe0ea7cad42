"""Extractors for data-driven components bound to sets and trees.

Collections and queries also read the element's ``options`` block (scopes,
level contexts and the ``Title label`` note), the same vocabulary the website
root uses.
"""

from __future__ import annotations

import json
import typing as typ

from website_tree.elements._common import read_options, uuids_of
from website_tree.elements.models import (
    AttributeFilters,
    BibliographyElement,
    Bounds,
    CollectionElement,
    CollectionFilter,
    CollectionOptions,
    DisplayedProperty,
    EntriesElement,
    FilterCategoriesElement,
    MapElement,
    NetworkGraphElement,
    QueryElement,
    QueryPrompt,
    TableElement,
    TimelineElement,
)
from website_tree.errors import InvalidPropertyValue
from website_tree.options import OptionLabels, parse_property_contexts, parse_scopes, title_label
from website_tree.properties import find_by_label, value_by_label
from website_tree.source.strings import fake_string

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from website_tree.elements._common import ExtractionContext
    from website_tree.source.nodes import PropertyNode

LISTING_OPTIONS = {
    "item_variant": "item-variant",
    "pagination_variant": "pagination-variant",
    "layout": "layout",
}


def _is_coordinate(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_bounds(text: str, *, label: str = "") -> Bounds:
    """Parse a ``"[[lat, lon], [lat, lon]]"`` string into a pair of points.

    Examples
    --------
    >>> parse_bounds("[[31.5, 35.1], [32.0, 35.6]]")
    ((31.5, 35.1), (32.0, 35.6))
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Invalid bounds '{text}' for element '{label}': {exc.msg}"
        raise InvalidPropertyValue(msg) from exc
    match raw:
        case [[a, b], [c, d]] if all(map(_is_coordinate, (a, b, c, d))):
            return ((float(a), float(b)), (float(c), float(d)))
        case _:
            msg = (
                f"Invalid bounds for element '{label}': expected "
                f"[[lat, lon], [lat, lon]] but found '{text}'"
            )
            raise InvalidPropertyValue(msg)


def displayed_properties(
    nodes: cabc.Sequence[PropertyNode],
) -> list[DisplayedProperty] | None:
    """Return the ``use-property`` variables, or ``None`` when not authored."""
    prop = find_by_label(nodes, "use-property")
    if prop is None:
        return None
    return [
        DisplayedProperty(
            uuid=value.uuid,
            label=fake_string(value.content) if value.content is not None else "",
        )
        for value in prop.values
        if value.uuid is not None
    ]


def collection_options(ctx: ExtractionContext) -> CollectionOptions:
    """Read attribute filters, scopes, contexts and labels from ``options``."""
    raw = ctx.node.options
    if not raw:
        return CollectionOptions()
    return CollectionOptions(
        attribute_filters=AttributeFilters(
            bibliographies=raw.get("filterBibliography") is True,
            periods=raw.get("filterPeriods") is True,
        ),
        scopes=parse_scopes(raw, language=ctx.language, owner=ctx.label),
        contexts=parse_property_contexts(raw, language=ctx.language),
        labels=OptionLabels(title=title_label(raw, language=ctx.language)),
    )


def _set_link_uuids(ctx: ExtractionContext) -> list[str]:
    uuids = uuids_of(link for link in ctx.links if link.category == "set")
    if not uuids:
        raise ctx.missing("Set links")
    return uuids


def extract_bibliography(ctx: ExtractionContext) -> BibliographyElement:
    item_links = [link for link in ctx.links if link.category != "bibliography"]
    bibliography_link = ctx.find_link(lambda link: link.category == "bibliography")
    bibliographies = bibliography_link.bibliographies if bibliography_link else None
    if not item_links and bibliographies is None:
        raise ctx.missing("Links")
    return BibliographyElement(
        **ctx.common,
        link_uuids=uuids_of(item_links),
        bibliographies=list(bibliographies or []),
        **read_options(
            ctx.options,
            text={"layout": "layout"},
            flags={"is_source_document_displayed": "source-document-displayed"},
        ),
    )


def extract_collection(ctx: ExtractionContext) -> CollectionElement:
    """Build a collection bound to one or more sets."""
    link_uuids = _set_link_uuids(ctx)
    filters = read_options(
        ctx.options,
        text={"sidebar_sort": "filter-sidebar-sort"},
        flags={
            "is_results_bar_displayed": "filter-results-bar-displayed",
            "is_map_displayed": "filter-map-displayed",
            "is_input_displayed": "filter-input-displayed",
            "is_limited_to_title_query": "filter-limit-to-title-query",
            "is_limited_to_leaf_property_values": "filter-limit-to-leaf-property-values",
            "is_sidebar_displayed": "filter-sidebar-displayed",
        },
    )
    return CollectionElement(
        **ctx.common,
        link_uuids=link_uuids,
        displayed_properties=displayed_properties(ctx.options),
        filter=CollectionFilter(**filters),
        options=collection_options(ctx),
        **read_options(
            ctx.options,
            text={
                "variant": "variant",
                "image_quality": "image-quality",
                **LISTING_OPTIONS,
            },
            flags={
                "is_using_query_params": "is-using-query-params",
                "is_sort_displayed": "sort-displayed",
            },
        ),
    )


def extract_entries(ctx: ExtractionContext) -> EntriesElement:
    link = ctx.require_link(lambda link: link.category in {"tree", "set"}, "Entries link")
    return EntriesElement(
        **ctx.common,
        link_uuid=typ.cast("str", link.uuid),
        **read_options(
            ctx.options,
            text={"variant": "variant"},
            flags={"is_filter_input_displayed": "filter-input-displayed"},
        ),
    )


def extract_filter_categories(ctx: ExtractionContext) -> FilterCategoriesElement:
    link = ctx.require_link(lambda link: link.category == "set", "Filter link")
    return FilterCategoriesElement(**ctx.common, link_uuid=typ.cast("str", link.uuid))


def extract_map(ctx: ExtractionContext) -> MapElement:
    """Build a map bound to a set or tree, with optional bounds."""
    link = ctx.require_link(lambda link: link.category in {"set", "tree"}, "Map link")
    bounds = {
        field: parse_bounds(fake_string(value), label=ctx.label)
        for field, label in (
            ("initial_bounds", "initial-bounds"),
            ("maximum_bounds", "maximum-bounds"),
        )
        if (value := value_by_label(ctx.options, label)) is not None
    }
    return MapElement(
        **ctx.common,
        link_uuid=typ.cast("str", link.uuid),
        **bounds,
        **read_options(
            ctx.options,
            text={"custom_basemap": "custom-basemap"},
            flags={
                "is_interactive": "is-interactive",
                "is_clustered": "is-clustered",
                "is_using_pins": "is-using-pins",
                "is_controls_displayed": "controls-displayed",
                "is_full_height": "is-full-height",
            },
        ),
    )


def extract_network_graph(ctx: ExtractionContext) -> NetworkGraphElement:
    # Placeholder kind: carries no references or options yet.
    return NetworkGraphElement(**ctx.common)


def _query_prompt(prop: PropertyNode) -> QueryPrompt | None:
    prompt = value_by_label(prop.properties, "query-prompt")
    if prompt is None:
        return None
    variables = find_by_label(prop.properties, "use-property")
    return QueryPrompt(
        label=fake_string(prompt),
        property_variable_uuids=uuids_of(variables.values) if variables else [],
        **read_options(
            prop.properties,
            text={"start_icon": "start-icon", "end_icon": "end-icon"},
        ),
    )


def extract_query(ctx: ExtractionContext) -> QueryElement:
    """Build a query element from the query sub-trees of its options."""
    link_uuids = _set_link_uuids(ctx)
    if not ctx.options:
        raise ctx.missing("Query properties")
    queries = [
        prompt for prop in ctx.options if (prompt := _query_prompt(prop)) is not None
    ]
    if not queries:
        raise ctx.missing("Queries")
    return QueryElement(
        **ctx.common,
        link_uuids=link_uuids,
        queries=queries,
        displayed_properties=displayed_properties(ctx.options),
        options=collection_options(ctx),
        **read_options(ctx.options, text=LISTING_OPTIONS),
    )


def extract_table(ctx: ExtractionContext) -> TableElement:
    link = ctx.require_link(lambda link: link.category == "set", "Table link")
    return TableElement(**ctx.common, link_uuid=typ.cast("str", link.uuid))


def extract_timeline(ctx: ExtractionContext) -> TimelineElement:
    link = ctx.require_link(lambda link: link.category == "tree", "Timeline link")
    return TimelineElement(**ctx.common, link_uuid=typ.cast("str", link.uuid))


__all__ = [
    "collection_options",
    "displayed_properties",
    "extract_bibliography",
    "extract_collection",
    "extract_entries",
    "extract_filter_categories",
    "extract_map",
    "extract_network_graph",
    "extract_query",
    "extract_table",
    "extract_timeline",
    "parse_bounds",
]
