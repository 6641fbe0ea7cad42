"""Build the :class:`~website_tree.models.Website` root from a raw tree.

The root's children are walked by the :class:`~website_tree.assembler.TreeAssembler`;
this module adds what only the root has: the sidebar, the global option
groups read from the root ``presentation`` sub-tree, creators and licence.

Examples
--------
>>> from website_tree.website import parse_website
>>> tree = {
...     "uuid": "site",
...     "identification": {"label": "Demo"},
...     "items": {"resource": {
...         "uuid": "p1",
...         "slug": "home",
...         "identification": {"label": "Home"},
...         "properties": {"property": {"label": "presentation", "value": "page"}},
...     }},
... }
>>> [page.slug for page in parse_website(tree).pages]
['home']
"""

from __future__ import annotations

import logging
import typing as typ

from website_tree._constants import PRESENTATION, SIDEBAR
from website_tree.assembler import TreeAssembler
from website_tree.classify import Role, classify, component_name, component_property
from website_tree.config import ParserSettings
from website_tree.elements._common import read_options, reference_uuid
from website_tree.errors import InvalidPropertyValue, MissingRequiredField
from website_tree.models import (
    WEBSITE_PRIVACY,
    WEBSITE_STATUSES,
    WEBSITE_TYPES,
    Contact,
    FooterOptions,
    IconOptions,
    ItemPageOptions,
    License,
    NavbarOptions,
    Person,
    Sidebar,
    ThemeOptions,
    Website,
    WebsiteProperties,
)
from website_tree.options import parse_website_options
from website_tree.properties import find_by_label, find_by_label_and_value, value_by_label
from website_tree.source.reader import (
    ensure_list,
    read_identification,
    read_resource,
    read_resources,
)
from website_tree.source.strings import fake_string, resolve_string
from website_tree.styles import parse_responsive_styles
from website_tree.titles import parse_web_title

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from website_tree.resolvers import DocumentResolver
    from website_tree.source.nodes import PropertyNode, ResourceNode
    from website_tree.source.strings import DocumentRenderer

logger = logging.getLogger(__name__)

_THEME = {
    "text": {"default_theme": "default-theme"},
    "flags": {"is_theme_toggle_displayed": "supports-theme-toggle"},
}
_NAVBAR = {
    "text": {"variant": "navbar-variant", "alignment": "navbar-alignment"},
    "flags": {
        "is_displayed": "navbar-displayed",
        "is_project_displayed": "navbar-project-displayed",
    },
}
_ICONS = {
    "logo_uuid": "logo",
    "favicon_uuid": "favicon-ico",
    "apple_touch_icon_uuid": "favicon-img",
}
_ITEM_PAGE_FLAGS = {
    "is_main_content_displayed": "item-page-main-content-displayed",
    "is_description_displayed": "item-page-description-displayed",
    "is_document_displayed": "item-page-document-displayed",
    "is_notes_displayed": "item-page-notes-displayed",
    "is_events_displayed": "item-page-events-displayed",
    "is_periods_displayed": "item-page-periods-displayed",
    "is_properties_displayed": "item-page-properties-displayed",
    "is_bibliography_displayed": "item-page-bibliography-displayed",
    "is_property_values_grouped": "item-page-property-values-grouped",
}
_CONTACT_PARTS = 2


def website_root(payload: typ.Mapping[str, typ.Any]) -> typ.Mapping[str, typ.Any]:
    """Unwrap ``{"ochre": {"tree": ...}}`` and ``{"tree": ...}`` envelopes."""
    match payload:
        case {"ochre": dict() as inner}:
            return website_root(inner)
        case {"tree": dict() as inner}:
            return inner
        case _:
            return payload


def root_children(tree: typ.Mapping[str, typ.Any]) -> list[typ.Any]:
    """Return the raw top-level resources of a website tree.

    Raises
    ------
    MissingRequiredField
        If the tree has neither ``items.resource`` nor ``resource``.
    """
    items = tree.get("items")
    if isinstance(items, dict) and "resource" in items:
        return ensure_list(items["resource"])
    if "resource" in tree:
        return ensure_list(tree["resource"])
    label = read_identification(tree.get("identification")).label
    raise MissingRequiredField(label or str(tree.get("uuid", "")), "website", "items")


def find_sidebar_node(nodes: cabc.Iterable[ResourceNode]) -> ResourceNode | None:
    """Return the first element node whose component is ``sidebar``."""
    return next(
        (
            node
            for node in nodes
            if classify(node) is Role.ELEMENT and component_name(node) == SIDEBAR
        ),
        None,
    )


def parse_sidebar(
    nodes: cabc.Sequence[ResourceNode], assembler: TreeAssembler
) -> Sidebar | None:
    """Build the sidebar from the first qualifying top-level node.

    Returns
    -------
    Sidebar | None
        ``None`` when no node qualifies or the sidebar has no items.
    """
    node = find_sidebar_node(nodes)
    if node is None:
        return None
    items = assembler.parse_elements(node)
    if not items:
        return None
    prop = component_property(node)
    options = list(prop.properties) if prop is not None else []
    return Sidebar(
        items=items,
        title=parse_web_title(node.properties, node.label),
        css_styles=parse_responsive_styles(node.properties),
        **read_options(options, text={"layout": "layout", "mobile_layout": "layout-mobile"}),
    )


def _closed_value(
    nodes: cabc.Sequence[PropertyNode],
    label: str,
    default: str,
    allowed: frozenset[str],
    owner: str,
) -> str:
    value = value_by_label(nodes, label)
    if value is None:
        return default
    text = fake_string(value)
    if text not in allowed:
        msg = (
            f"Invalid {label} '{text}' for website '{owner}', expected one of "
            f"{', '.join(sorted(allowed))}"
        )
        raise InvalidPropertyValue(msg)
    return text


def parse_contact(nodes: cabc.Sequence[PropertyNode], owner: str = "") -> Contact | None:
    """Read ``contact`` as ``"name;email"``.

    Raises
    ------
    InvalidPropertyValue
        If the value does not split into exactly a name and an email.
    """
    prop = find_by_label(nodes, "contact")
    if prop is None:
        return None
    content = prop.first_content
    parts = fake_string(content).split(";") if content is not None else []
    if len(parts) != _CONTACT_PARTS:
        msg = (
            f"Contact property of website '{owner}' must be in the format "
            f"'name;email', but got '{content}'"
        )
        raise InvalidPropertyValue(msg)
    name, email = parts
    return Contact(name=name, email=email)


def parse_item_page(nodes: cabc.Sequence[PropertyNode]) -> ItemPageOptions:
    prop = find_by_label_and_value(nodes, "page-type", "item-page")
    if prop is None:
        return ItemPageOptions()
    return ItemPageOptions(
        **read_options(
            prop.properties,
            text={"iiif_viewer": "item-page-iiif-viewer"},
            flags=_ITEM_PAGE_FLAGS,
        )
    )


def parse_website_properties(
    properties: cabc.Sequence[PropertyNode],
    *,
    options: typ.Mapping[str, typ.Any] | None = None,
    sidebar: Sidebar | None = None,
    language: str,
    label: str = "",
) -> WebsiteProperties:
    """Read the global option groups of a website.

    Every group is read from the root ``presentation`` sub-tree and defaulted
    on its own; an absent group never aborts the parse.

    Parameters
    ----------
    properties : Sequence[PropertyNode]
        Properties of the website root.
    options : Mapping[str, Any], optional
        Raw ``options`` block of the root (scopes, contexts, label notes).
    sidebar : Sidebar, optional
        The already built sidebar.
    language : str
        Preferred language for option labels.
    label : str, optional
        Label of the website, named in error messages.

    Raises
    ------
    InvalidPropertyValue
        If the type, status or privacy is outside its known values, or the
        contact is malformed.
    """
    presentation = find_by_label(properties, PRESENTATION)
    nodes = list(presentation.properties) if presentation is not None else []
    return WebsiteProperties(
        type=_closed_value(nodes, "webUI", "traditional", WEBSITE_TYPES, label),
        status=_closed_value(nodes, "status", "development", WEBSITE_STATUSES, label),
        privacy=_closed_value(nodes, "privacy", "public", WEBSITE_PRIVACY, label),
        contact=parse_contact(nodes, label),
        theme=ThemeOptions(**read_options(nodes, **_THEME)),
        icon=IconOptions(
            **{field: reference_uuid(nodes, icon) for field, icon in _ICONS.items()}
        ),
        navbar=NavbarOptions(
            search_bar_bound_element_uuid=reference_uuid(
                nodes, "bound-element-navbar-search-bar"
            ),
            **read_options(nodes, **_NAVBAR),
        ),
        footer=FooterOptions(
            **read_options(nodes, flags={"is_displayed": "footer-displayed"})
        ),
        sidebar=sidebar,
        item_page=parse_item_page(nodes),
        options=parse_website_options(options, language=language, owner=label),
    )


def parse_creators(raw: object, *, language: str) -> list[Person]:
    """Read ``creators.creator`` entries as people."""
    creators = raw.get("creator") if isinstance(raw, dict) else raw
    people: list[Person] = []
    for entry in ensure_list(creators):
        if not isinstance(entry, dict):
            continue
        identification = entry.get("identification") or {}
        people.append(
            Person(
                uuid=entry.get("uuid"),
                name=resolve_string(identification.get("label"), language),
            )
        )
    return people


def parse_license(raw: object) -> License | None:
    """Read ``availability.license``; a bare string licence yields ``None``."""
    if not isinstance(raw, dict):
        return None
    license_raw = raw.get("license")
    if not isinstance(license_raw, dict):
        return None
    content = license_raw.get("content")
    if content is None:
        return None
    return License(content=fake_string(content), url=license_raw.get("target"))


def parse_website(
    tree: typ.Mapping[str, typ.Any],
    *,
    renderer: DocumentRenderer | None = None,
    resolver: DocumentResolver | None = None,
    settings: ParserSettings | None = None,
) -> Website:
    """Interpret a raw resource tree as a website.

    Parameters
    ----------
    tree : Mapping[str, Any]
        Decoded website tree, optionally inside an ``ochre``/``tree``
        envelope.
    renderer : DocumentRenderer, optional
        Renders document content to text; plain text by default.
    resolver : DocumentResolver, optional
        Fetches linked documents for elements without inline content.
    settings : ParserSettings, optional
        Language and page-drop policy.

    Returns
    -------
    Website
        A freshly built website model.

    Raises
    ------
    WebsiteParseError
        On any fatal problem: missing items, a component lacking its mandatory
        reference, an accordion holding non-text children, or an invalid
        global property.
    """
    settings = settings or ParserSettings()
    root_raw = website_root(tree)
    language = settings.language
    root = read_resource(
        {key: value for key, value in root_raw.items() if key not in {"items", "resource"}},
        language=language,
        renderer=renderer,
    )
    children = read_resources(root_children(root_raw), language=language, renderer=renderer)
    assembler = TreeAssembler(renderer=renderer, resolver=resolver, settings=settings)

    items = [*assembler.parse_webpages(children), *assembler.parse_segments(children)]
    logger.debug("Parsed %d top-level items for website '%s'", len(items), root.label)
    sidebar = parse_sidebar(children, assembler)

    return Website(
        uuid=root.uuid,
        identification=root.identification,
        creators=parse_creators(root_raw.get("creators"), language=language),
        license=parse_license(root_raw.get("availability")),
        publication_date=root.publication_date,
        items=items,
        properties=parse_website_properties(
            root.properties,
            options=root.options,
            sidebar=sidebar,
            language=language,
            label=root.label,
        ),
    )


__all__ = [
    "find_sidebar_node",
    "parse_contact",
    "parse_creators",
    "parse_item_page",
    "parse_license",
    "parse_sidebar",
    "parse_website",
    "parse_website_properties",
    "root_children",
    "website_root",
]
