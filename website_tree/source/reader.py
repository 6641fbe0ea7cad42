"""Fold raw resource-tree mappings into normalised node records.

The raw format freely alternates between a single item and a list of items
(``properties.property``, ``links``, ``resource``, ``value`` …) and encodes
typed values as strings tagged with a ``dataType``. Everything here exists to
make those ambiguities disappear before the website interpreter runs.
"""

from __future__ import annotations

import datetime as dt
import re
import typing as typ

from website_tree._constants import DEFAULT_LANGUAGE
from website_tree.errors import InvalidPropertyValue
from website_tree.source.nodes import (
    BibliographyRef,
    Identification,
    ImageDims,
    LinkRef,
    PropertyNode,
    PropertyValue,
    ResourceNode,
)
from website_tree.source.strings import DocumentRenderer, fake_string, resolve_string

LINK_CATEGORIES = (
    "resource",
    "spatialUnit",
    "concept",
    "set",
    "tree",
    "person",
    "bibliography",
    "propertyVariable",
    "propertyValue",
)
VALUE_DATA_TYPES = frozenset(
    {
        "string",
        "integer",
        "decimal",
        "boolean",
        "date",
        "dateTime",
        "time",
        "coordinate",
        "IDREF",
    }
)
_TRAILING_ELLIPSIS = re.compile(r"\s*\.{3}$")


def ensure_list(value: object) -> list[typ.Any]:
    """Return ``value`` as a list: ``None`` is empty, a single item is wrapped."""
    match value:
        case None:
            return []
        case list():
            return value
        case _:
            return [value]


def parse_timestamp(value: object) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None."""
    match value:
        case dt.datetime():
            parsed = value
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


def _optional_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def read_identification(
    raw: object,
    *,
    language: str = DEFAULT_LANGUAGE,
    renderer: DocumentRenderer | None = None,
) -> Identification:
    """Resolve an ``identification`` block into display strings."""
    match raw:
        case {"label": label, **rest}:
            pass
        case None:
            return Identification(label="")
        case _:
            return Identification(label=resolve_string(raw, language, renderer))
    abbreviation = resolve_string(rest.get("abbreviation"), language, renderer)
    code = rest.get("code")
    return Identification(
        label=resolve_string(label, language, renderer),
        abbreviation=abbreviation or None,
        code=str(code) if code is not None else None,
    )


def _scalar_type(value: object) -> str:
    match value:
        case bool():
            return "boolean"
        case int():
            return "integer"
        case float():
            return "decimal"
        case _:
            return "string"


def _number(value: object, data_type: str, owner: str) -> int | float:
    try:
        if data_type == "integer":
            return int(str(value))
        return float(str(value))
    except ValueError as exc:
        msg = f"Property value '{value}' of '{owner}' is not a valid {data_type}"
        raise InvalidPropertyValue(msg) from exc


def read_value(
    raw: object, *, language: str = DEFAULT_LANGUAGE, owner: str = ""
) -> PropertyValue:
    """Read one property value, typing its content from ``dataType``.

    Bare scalars keep their JSON type. Mappings are typed by ``dataType``
    (``string`` when absent); ``rawValue`` carries the machine value when
    present and ``content`` then becomes the human label. ``owner`` names the
    property in error messages.
    """
    if isinstance(raw, (str, int, float, bool)):
        return PropertyValue(content=raw, data_type=_scalar_type(raw))
    if not isinstance(raw, dict):
        return PropertyValue(content=None)

    data_type = raw.get("dataType") or "string"
    if data_type not in VALUE_DATA_TYPES:
        msg = f"Invalid property value content type: '{data_type}' in '{owner}'"
        raise InvalidPropertyValue(msg)

    raw_value = raw.get("rawValue")
    raw_content = raw.get("content")
    label = (
        resolve_string({"content": raw_content}, language)
        if raw_value is not None and raw_content is not None
        else None
    )
    source = raw_value if raw_value is not None else raw_content

    content: str | int | float | bool | None
    match data_type:
        case "integer" | "decimal" | "time":
            content = None if source is None else _number(source, data_type, owner)
        case "boolean":
            content = source is True or str(source).lower() == "true"
        case _:
            if raw.get("slug") is not None:
                content = fake_string(raw["slug"])
            elif raw_value is not None:
                content = fake_string(raw_value)
            elif raw_content is not None:
                content = resolve_string({"content": raw_content}, language)
            else:
                content = None

    return PropertyValue(
        content=content,
        data_type=data_type,
        uuid=raw.get("uuid"),
        href=raw.get("href"),
        slug=fake_string(raw["slug"]) if raw.get("slug") is not None else None,
        label=label,
        category=raw.get("category"),
        type=raw.get("type"),
    )


def read_property(raw: object, *, language: str = DEFAULT_LANGUAGE) -> PropertyNode:
    """Read one property node and its nested sub-properties."""
    match raw:
        case {"label": raw_label, **rest}:
            pass
        case _:
            msg = f"Property nodes require a 'label', got {raw!r}"
            raise InvalidPropertyValue(msg)
    label_uuid = raw_label.get("uuid") if isinstance(raw_label, dict) else None
    label = _TRAILING_ELLIPSIS.sub("", resolve_string(raw_label, language)).strip()
    return PropertyNode(
        label=label,
        values=[
            read_value(value, language=language, owner=label)
            for value in ensure_list(rest.get("value"))
        ],
        properties=read_properties(rest.get("property"), language=language),
        label_uuid=label_uuid,
    )


def read_properties(
    raw: object, *, language: str = DEFAULT_LANGUAGE
) -> list[PropertyNode]:
    """Read a property container (``{"property": ...}``, list or single node)."""
    match raw:
        case {"property": inner}:
            entries = ensure_list(inner)
        case _:
            entries = ensure_list(raw)
    return [read_property(entry, language=language) for entry in entries]


def read_links(raw: object, *, language: str = DEFAULT_LANGUAGE) -> list[LinkRef]:
    """Read category-keyed link groups into a flat, ordered list."""
    links: list[LinkRef] = []
    for group in ensure_list(raw):
        if not isinstance(group, dict):
            continue
        category = next((key for key in LINK_CATEGORIES if key in group), None)
        if category is None:
            msg = f"Invalid link provided: {group!r}"
            raise InvalidPropertyValue(msg)
        entries = [entry for entry in ensure_list(group[category]) if isinstance(entry, dict)]
        bibliographies = (
            [
                BibliographyRef(
                    uuid=entry.get("uuid"),
                    label=_link_label(entry, language),
                )
                for entry in entries
            ]
            if category == "bibliography"
            else None
        )
        links.extend(
            _read_link(entry, category, bibliographies, language) for entry in entries
        )
    return links


def _link_label(entry: typ.Mapping[str, typ.Any], language: str) -> str | None:
    identification = entry.get("identification")
    if identification is None:
        return None
    return read_identification(identification, language=language).label or None


def _read_link(
    entry: typ.Mapping[str, typ.Any],
    category: str,
    bibliographies: list[BibliographyRef] | None,
    language: str,
) -> LinkRef:
    width = _optional_int(entry.get("width"))
    height = _optional_int(entry.get("height"))
    description = entry.get("description")
    return LinkRef(
        category=category,
        uuid=entry.get("uuid"),
        type=entry.get("type"),
        href=entry.get("href"),
        file_format=entry.get("fileFormat"),
        file_size=_optional_int(entry.get("fileSize")),
        label=_link_label(entry, language),
        description=(
            resolve_string(description, language) if description is not None else None
        ),
        image=(
            ImageDims(width=width, height=height)
            if width is not None and height is not None
            else None
        ),
        bibliographies=bibliographies,
    )


def read_resource(
    raw: object,
    *,
    language: str = DEFAULT_LANGUAGE,
    renderer: DocumentRenderer | None = None,
) -> ResourceNode:
    """Read a resource node and, recursively, its child resources.

    Parameters
    ----------
    raw : object
        Mapping decoded from JSON or YAML.
    language : str, optional
        Preferred language for labels.
    renderer : DocumentRenderer, optional
        Renderer used for linked fragments inside labels.

    Returns
    -------
    ResourceNode
        The normalised node.

    Raises
    ------
    InvalidPropertyValue
        If ``raw`` is not a mapping or contains malformed properties or links.
    """
    if not isinstance(raw, dict):
        msg = f"Resource nodes must be mappings, got {type(raw).__name__}"
        raise InvalidPropertyValue(msg)
    document = raw.get("document")
    if isinstance(document, dict) and "content" in document:
        document = document["content"]
    slug = raw.get("slug")
    return ResourceNode(
        uuid=str(raw.get("uuid", "")),
        identification=read_identification(
            raw.get("identification"), language=language, renderer=renderer
        ),
        slug=fake_string(slug) if slug is not None else None,
        publication_date=parse_timestamp(raw.get("publicationDateTime")),
        properties=read_properties(raw.get("properties"), language=language),
        links=read_links(raw.get("links"), language=language),
        children=read_resources(raw.get("resource"), language=language, renderer=renderer),
        document=document,
        options=raw.get("options") if isinstance(raw.get("options"), dict) else None,
    )


def read_resources(
    raw: object,
    *,
    language: str = DEFAULT_LANGUAGE,
    renderer: DocumentRenderer | None = None,
) -> list[ResourceNode]:
    """Read a single resource or a list of resources."""
    return [
        read_resource(entry, language=language, renderer=renderer)
        for entry in ensure_list(raw)
    ]


__all__ = [
    "LINK_CATEGORIES",
    "VALUE_DATA_TYPES",
    "ensure_list",
    "parse_timestamp",
    "read_identification",
    "read_links",
    "read_properties",
    "read_property",
    "read_resource",
    "read_resources",
    "read_value",
]
