"""Shared plumbing for the per-kind element extractors."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import functools
import logging
import re
import typing as typ

from website_tree._constants import DEFAULT_LANGUAGE
from website_tree.elements.models import Component, WebElement, WebImage
from website_tree.errors import MissingRequiredReference
from website_tree.properties import find_by_label, overlay_options
from website_tree.source.strings import fake_string

if typ.TYPE_CHECKING:
    from website_tree.source.nodes import (
        LinkRef,
        PropertyNode,
        ResourceNode,
        ValueContent,
    )
    from website_tree.styles import ResponsiveStyles
    from website_tree.titles import WebTitle

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dc.dataclass(frozen=True, slots=True)
class ExtractionContext:
    """Everything an extractor may read about the element being parsed.

    Attributes
    ----------
    node : ResourceNode
        The element's resource node (links, children, inline document).
    component : Component
        The recognised component kind.
    component_property : PropertyNode
        The ``component`` property; its sub-properties are the options.
    title : WebTitle
        Title read from the ``presentation = title`` sub-tree.
    css_styles : ResponsiveStyles
        Styles read from the ``presentation = css*`` sub-trees.
    document_text : Callable[[ResourceNode], str | None]
        Renders the node's document, resolving a linked one when the node
        carries no inline content.
    parse_children : Callable[[ResourceNode], list[WebElement]]
        Parses a container's child resources strictly as elements.
    language : str
        Preferred language for labels read from the options block.
    """

    node: ResourceNode
    component: Component
    component_property: PropertyNode
    title: WebTitle
    css_styles: ResponsiveStyles
    document_text: cabc.Callable[[ResourceNode], str | None]
    parse_children: cabc.Callable[[ResourceNode], list[WebElement]]
    language: str = DEFAULT_LANGUAGE

    @property
    def label(self) -> str:
        return self.node.label

    @property
    def options(self) -> list[PropertyNode]:
        return list(self.component_property.properties)

    @property
    def links(self) -> list[LinkRef]:
        return list(self.node.links)

    @property
    def common(self) -> dict[str, typ.Any]:
        """Keyword arguments shared by every element record."""
        return {
            "uuid": self.node.uuid,
            "title": self.title,
            "css_styles": self.css_styles,
        }

    def missing(self, expected: str) -> MissingRequiredReference:
        """Build the error raised when a mandatory input is absent."""
        return MissingRequiredReference(self.label, self.component.value, expected)

    def find_link(self, predicate: cabc.Callable[[LinkRef], bool]) -> LinkRef | None:
        """Return the first link matching ``predicate``."""
        return next((link for link in self.node.links if predicate(link)), None)

    def require_link(
        self, predicate: cabc.Callable[[LinkRef], bool], expected: str
    ) -> LinkRef:
        """Return the first matching link that carries a uuid, or raise."""
        link = self.find_link(predicate)
        if link is None or link.uuid is None:
            raise self.missing(expected)
        return link


Extractor = cabc.Callable[[ExtractionContext], WebElement]
OptionLabel = str | tuple[str, ...]


def as_flag(value: ValueContent) -> bool:
    """Interpret an authored option as a boolean."""
    match value:
        case bool():
            return value
        case str():
            return value.strip().lower() == "true"
        case _:
            return bool(value)


def as_text(value: ValueContent) -> str:
    return fake_string(value)


def as_number(value: ValueContent, *, label: str = "") -> float | None:
    """Read the leading number of an authored option.

    Trailing units are ignored, so ``"100%"`` reads as ``100``. A value with no
    leading number is logged and yields ``None`` so the field default applies.

    Examples
    --------
    >>> as_number("100%")
    100.0
    >>> as_number(" -2.5rem")
    -2.5
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    match = None if isinstance(value, bool) else _LEADING_NUMBER.match(str(value))
    if match is None:
        logger.warning(
            "Expected a number but found '%s' for element '%s'; default kept",
            value,
            label,
        )
        return None
    return float(match.group())


def read_options(
    nodes: cabc.Sequence[PropertyNode],
    *,
    text: typ.Mapping[str, OptionLabel] | None = None,
    flags: typ.Mapping[str, OptionLabel] | None = None,
    numbers: typ.Mapping[str, OptionLabel] | None = None,
    label: str = "",
) -> dict[str, typ.Any]:
    """Collect authored text, boolean and numeric options by field name.

    Numeric options without a leading number are left out, with a warning
    naming the element ``label``.

    Examples
    --------
    >>> from website_tree.source.nodes import PropertyNode, PropertyValue
    >>> nodes = [PropertyNode("is-interactive", [PropertyValue(False)])]
    >>> read_options(nodes, flags={"is_interactive": "is-interactive"})
    {'is_interactive': False}
    """
    found: dict[str, typ.Any] = {}
    for mapping, converter in (
        (text, as_text),
        (flags, as_flag),
        (numbers, functools.partial(as_number, label=label)),
    ):
        if mapping:
            found |= overlay_options(
                nodes, mapping, convert=dict.fromkeys(mapping, converter)
            )
    return {field: value for field, value in found.items() if value is not None}


def reference_href(nodes: cabc.Sequence[PropertyNode], label: str) -> str | None:
    """Return the ``href`` (or ``slug``) of the first value of ``label``."""
    prop = find_by_label(nodes, label)
    if prop is None or not prop.values:
        return None
    value = prop.values[0]
    return value.href or value.slug


def reference_uuid(nodes: cabc.Sequence[PropertyNode], label: str) -> str | None:
    """Return the uuid of the first value of ``label``."""
    prop = find_by_label(nodes, label)
    if prop is None or not prop.values:
        return None
    return prop.values[0].uuid


def uuids_of(values: cabc.Iterable[typ.Any]) -> list[str]:
    """Return the non-null ``uuid`` attributes of ``values`` in order."""
    return [item.uuid for item in values if item.uuid is not None]


def web_image(link: LinkRef, quality: str = "high") -> WebImage:
    """Build a :class:`WebImage` from an image link."""
    return WebImage(
        uuid=link.uuid,
        label=link.label,
        description=link.description,
        width=link.image.width if link.image is not None else 0,
        height=link.image.height if link.image is not None else 0,
        quality=quality,
    )


__all__ = [
    "ExtractionContext",
    "Extractor",
    "as_flag",
    "as_number",
    "as_text",
    "read_options",
    "reference_href",
    "reference_uuid",
    "uuids_of",
    "web_image",
]
