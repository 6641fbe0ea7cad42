"""Normalised records for the generic resource tree.

The raw tree is loosely typed: most containers may hold one item or a list,
labels may be plain scalars or multi-language rich text, and property values
carry their own ``dataType``. :mod:`website_tree.source.reader` folds all of
that into the frozen dataclasses below so the interpreter only ever sees one
shape.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import typing as typ

ValueContent = str | int | float | bool


@dc.dataclass(frozen=True, slots=True)
class Identification:
    """Resolved display strings identifying a node."""

    label: str
    abbreviation: str | None = None
    code: str | None = None


@dc.dataclass(frozen=True, slots=True)
class PropertyValue:
    """One typed value attached to a property node."""

    content: ValueContent | None
    data_type: str = "string"
    uuid: str | None = None
    href: str | None = None
    slug: str | None = None
    label: str | None = None
    category: str | None = None
    type: str | None = None


@dc.dataclass(frozen=True, slots=True)
class PropertyNode:
    """A label with ordered values and nested sub-properties."""

    label: str
    values: list[PropertyValue] = dc.field(default_factory=list)
    properties: list[PropertyNode] = dc.field(default_factory=list)
    label_uuid: str | None = None

    @property
    def first_content(self) -> ValueContent | None:
        """Return the content of the first value, if any."""
        if not self.values:
            return None
        return self.values[0].content


@dc.dataclass(frozen=True, slots=True)
class ImageDims:
    """Pixel dimensions reported for an image link."""

    width: int
    height: int


@dc.dataclass(frozen=True, slots=True)
class BibliographyRef:
    """Minimal reference to a bibliography entry carried by a link."""

    uuid: str | None
    label: str | None = None


@dc.dataclass(frozen=True, slots=True)
class LinkRef:
    """Reference from a node to another entity."""

    category: str
    uuid: str | None = None
    type: str | None = None
    href: str | None = None
    file_format: str | None = None
    file_size: int | None = None
    label: str | None = None
    description: str | None = None
    image: ImageDims | None = None
    bibliographies: list[BibliographyRef] | None = None


@dc.dataclass(frozen=True, slots=True)
class ResourceNode:
    """A node of the resource tree after normalisation.

    ``document`` keeps the raw inline document content untouched; it is only
    turned into text by the document renderer when a component asks for it.
    """

    uuid: str
    identification: Identification
    slug: str | None = None
    publication_date: dt.datetime | None = None
    properties: list[PropertyNode] = dc.field(default_factory=list)
    links: list[LinkRef] = dc.field(default_factory=list)
    children: list[ResourceNode] = dc.field(default_factory=list)
    document: typ.Any = None
    options: typ.Mapping[str, typ.Any] | None = None

    @property
    def label(self) -> str:
        """Return the resolved display label."""
        return self.identification.label


__all__ = [
    "BibliographyRef",
    "Identification",
    "ImageDims",
    "LinkRef",
    "PropertyNode",
    "PropertyValue",
    "ResourceNode",
    "ValueContent",
]
