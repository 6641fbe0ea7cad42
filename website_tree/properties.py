"""Lookups over a node's property list.

Labels are compared exactly against the resolved display label. The helpers
here are the only place that walks property lists by label; everything above
them asks for a label and gets a node, a value, or ``None``.

Examples
--------
>>> from website_tree.source.nodes import PropertyNode, PropertyValue
>>> nodes = [PropertyNode("variant", [PropertyValue("hero")])]
>>> value_by_label(nodes, "variant")
'hero'
>>> value_by_label(nodes, "layout") is None
True
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from website_tree.source.nodes import PropertyNode, ValueContent


def find_by_label(
    nodes: cabc.Iterable[PropertyNode], label: str
) -> PropertyNode | None:
    """Return the first property labelled ``label``."""
    return next((node for node in nodes if node.label == label), None)


def find_by_label_and_value(
    nodes: cabc.Iterable[PropertyNode], label: str, value: ValueContent
) -> PropertyNode | None:
    """Return the first property labelled ``label`` whose first value is ``value``."""
    return next(
        (node for node in nodes if node.label == label and node.first_content == value),
        None,
    )


def value_by_label(
    nodes: cabc.Iterable[PropertyNode], label: str
) -> ValueContent | None:
    """Return the first value's content of the property labelled ``label``."""
    node = find_by_label(nodes, label)
    return node.first_content if node is not None else None


def first_value_by_labels(
    nodes: cabc.Sequence[PropertyNode], *labels: str
) -> ValueContent | None:
    """Return the value of the first label in ``labels`` that is present.

    Older trees spell some options differently (``sidebar-visible`` versus
    ``sidebar-displayed``); pass the labels in order of preference.
    """
    for label in labels:
        node = find_by_label(nodes, label)
        if node is not None and node.values:
            return node.first_content
    return None


def subproperties(
    nodes: cabc.Iterable[PropertyNode], label: str, value: ValueContent
) -> list[PropertyNode]:
    """Return the sub-properties of ``label = value``, or an empty list."""
    node = find_by_label_and_value(nodes, label, value)
    return list(node.properties) if node is not None else []


def overlay_options(
    nodes: cabc.Sequence[PropertyNode],
    fields: typ.Mapping[str, str | tuple[str, ...]],
    *,
    convert: typ.Mapping[str, cabc.Callable[[ValueContent], typ.Any]] | None = None,
) -> dict[str, typ.Any]:
    """Collect present option values keyed by destination field name.

    Parameters
    ----------
    nodes : Sequence[PropertyNode]
        Property list holding the authored options.
    fields : Mapping[str, str | tuple[str, ...]]
        Destination field name mapped to the option label, or to several
        labels tried in order.
    convert : Mapping[str, Callable], optional
        Per-field converters applied to present values.

    Returns
    -------
    dict[str, Any]
        Only the fields whose label is present with a value. Absent options
        are left out so the caller's defaults stay in force.

    Examples
    --------
    >>> from website_tree.source.nodes import PropertyNode, PropertyValue
    >>> nodes = [PropertyNode("variant", [PropertyValue("hero")])]
    >>> overlay_options(nodes, {"variant": "variant", "layout": "layout"})
    {'variant': 'hero'}
    """
    converters = convert or {}
    found: dict[str, typ.Any] = {}
    for field_name, labels in fields.items():
        candidates = (labels,) if isinstance(labels, str) else labels
        value = first_value_by_labels(nodes, *candidates)
        if value is None:
            continue
        converter = converters.get(field_name)
        found[field_name] = converter(value) if converter is not None else value
    return found


__all__ = [
    "find_by_label",
    "find_by_label_and_value",
    "first_value_by_labels",
    "overlay_options",
    "subproperties",
    "value_by_label",
]
