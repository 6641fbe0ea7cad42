"""Derive the structural role of a resource node.

The role is never stored on the node; it is read from the first
``presentation`` property each time :func:`classify` runs and nowhere else.

Examples
--------
>>> from website_tree.source.nodes import (
...     Identification, PropertyNode, PropertyValue, ResourceNode)
>>> node = ResourceNode(
...     uuid="1",
...     identification=Identification("Home"),
...     properties=[PropertyNode("presentation", [PropertyValue("page")])],
... )
>>> classify(node)
<Role.PAGE: 'page'>
"""

from __future__ import annotations

import enum
import typing as typ

from website_tree._constants import COMPONENT, PRESENTATION
from website_tree.properties import find_by_label

if typ.TYPE_CHECKING:
    from website_tree.source.nodes import PropertyNode, ResourceNode


class Role(enum.StrEnum):
    """Structural role of a node in the website tree."""

    PAGE = "page"
    SEGMENT = "segment"
    SEGMENT_ITEM = "segment-item"
    BLOCK = "block"
    ELEMENT = "element"
    NONE = "none"


_STRUCTURAL = frozenset(role.value for role in Role if role is not Role.NONE)


def presentation_property(node: ResourceNode) -> PropertyNode | None:
    """Return the first ``presentation`` property of ``node``."""
    return find_by_label(node.properties, PRESENTATION)


def classify(node: ResourceNode) -> Role:
    """Return the structural role declared by ``node``.

    Any other ``presentation`` value (``css``, ``title``, …) or no
    ``presentation`` property at all yields :attr:`Role.NONE`.
    """
    prop = presentation_property(node)
    if prop is None:
        return Role.NONE
    content = prop.first_content
    if isinstance(content, str) and content in _STRUCTURAL:
        return Role(content)
    return Role.NONE


def component_property(node: ResourceNode) -> PropertyNode | None:
    """Return the ``component`` sub-property of the presentation property."""
    prop = presentation_property(node)
    if prop is None:
        return None
    return find_by_label(prop.properties, COMPONENT)


def component_name(node: ResourceNode) -> str | None:
    """Return the raw component literal of ``node`` as text, if any."""
    prop = component_property(node)
    if prop is None or prop.first_content is None:
        return None
    return str(prop.first_content)


def role_subproperties(node: ResourceNode, role: Role) -> list[PropertyNode]:
    """Return the option sub-tree of ``presentation = role``."""
    for prop in node.properties:
        if prop.label == PRESENTATION and prop.first_content == role.value:
            return list(prop.properties)
    return []


__all__ = [
    "Role",
    "classify",
    "component_name",
    "component_property",
    "presentation_property",
    "role_subproperties",
]
