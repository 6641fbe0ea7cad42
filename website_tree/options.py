"""Scopes, level contexts and label notes attached to a node's ``options``.

Collections, queries and the website root share one ``options`` block::

    options:
      scopes: {scope: [{uuid: {content: ..., type: ...}, identification: ...}]}
      flattenContexts: {context: {levels: {level: ["var-uuid, value-uuid"]}}}
      notes: {note: [{content: {lang: eng, title: Title label, string: ...}}]}

Every level string is ``"<variable uuid>, <value uuid or null>"``; the object
form carries the same string in ``content`` plus a ``dataType``.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from website_tree._constants import DEFAULT_LANGUAGE, TITLE_LABEL_NOTE
from website_tree.errors import InvalidPropertyValue
from website_tree.source.nodes import Identification
from website_tree.source.reader import ensure_list, read_identification
from website_tree.source.strings import fake_string, resolve_string

CONTEXT_KINDS = (
    "flatten",
    "suppress",
    "filter",
    "sort",
    "detail",
    "download",
    "label",
    "prominent",
)


@dc.dataclass(frozen=True, slots=True)
class Scope:
    """A named scope the website or collection searches within."""

    uuid: str
    type: str | None
    identification: Identification


@dc.dataclass(frozen=True, slots=True)
class LevelContextItem:
    """One level of a context path."""

    variable_uuid: str
    value_uuid: str | None = None


@dc.dataclass(frozen=True, slots=True)
class LevelContext:
    """A property path used to flatten, filter, sort… query results."""

    context: list[LevelContextItem]
    type: str
    identification: Identification


@dc.dataclass(frozen=True, slots=True)
class PropertyContexts:
    """Level contexts grouped by kind."""

    flatten: list[LevelContext] = dc.field(default_factory=list)
    suppress: list[LevelContext] = dc.field(default_factory=list)
    filter: list[LevelContext] = dc.field(default_factory=list)
    sort: list[LevelContext] = dc.field(default_factory=list)
    detail: list[LevelContext] = dc.field(default_factory=list)
    download: list[LevelContext] = dc.field(default_factory=list)
    label: list[LevelContext] = dc.field(default_factory=list)
    prominent: list[LevelContext] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True)
class OptionLabels:
    """Custom labels configured through notes."""

    title: str | None = None


@dc.dataclass(frozen=True, slots=True)
class WebsiteOptions:
    """Scopes, contexts and labels of the website root."""

    scopes: list[Scope] | None = None
    contexts: PropertyContexts | None = None
    labels: OptionLabels = dc.field(default_factory=OptionLabels)


def _split_level(text: str, owner: str) -> LevelContextItem:
    variable, _, value = text.partition(", ")
    if not variable:
        msg = f"Invalid context level '{text}' in '{owner}'"
        raise InvalidPropertyValue(msg)
    return LevelContextItem(
        variable_uuid=variable,
        value_uuid=None if value in {"", "null"} else value,
    )


def parse_level_contexts(raw: object, *, language: str = DEFAULT_LANGUAGE) -> list[LevelContext]:
    """Read every ``context`` of a ``<kind>Contexts`` entry (single or list)."""
    parsed: list[LevelContext] = []
    for group in ensure_list(raw):
        if not isinstance(group, dict):
            continue
        for context in ensure_list(group.get("context")):
            if not isinstance(context, dict):
                continue
            identification = read_identification(
                context.get("identification"), language=language
            )
            levels = context.get("levels") or {}
            data_type = ""
            items: list[LevelContextItem] = []
            for level in ensure_list(levels.get("level")):
                match level:
                    case str():
                        items.append(_split_level(level, identification.label))
                    case {"content": content, **rest}:
                        data_type = str(rest.get("dataType", ""))
                        items.append(_split_level(str(content), identification.label))
                    case _:
                        msg = (
                            f"Expected a level string but found {level!r} in "
                            f"context '{identification.label}'"
                        )
                        raise InvalidPropertyValue(msg)
            parsed.append(
                LevelContext(context=items, type=data_type, identification=identification)
            )
    return parsed


def parse_property_contexts(
    options: typ.Mapping[str, typ.Any], *, language: str = DEFAULT_LANGUAGE
) -> PropertyContexts:
    """Read the eight ``<kind>Contexts`` groups of ``options``."""
    return PropertyContexts(
        **{
            kind: parse_level_contexts(options.get(f"{kind}Contexts"), language=language)
            for kind in CONTEXT_KINDS
        }
    )


def parse_scopes(
    options: typ.Mapping[str, typ.Any],
    *,
    language: str = DEFAULT_LANGUAGE,
    owner: str = "",
) -> list[Scope] | None:
    """Read ``options.scopes.scope`` or return ``None`` when absent.

    ``owner`` is the label of the node carrying the options, used in errors.
    """
    scopes = options.get("scopes")
    if not isinstance(scopes, dict):
        return None
    parsed: list[Scope] = []
    for scope in ensure_list(scopes.get("scope")):
        match scope:
            case {"uuid": {"content": uuid, **rest}}:
                scope_type = rest.get("type")
            case {"uuid": str() as uuid}:
                scope_type = None
            case _:
                msg = f"Scope entries of '{owner}' require a uuid, got {scope!r}"
                raise InvalidPropertyValue(msg)
        parsed.append(
            Scope(
                uuid=str(uuid),
                type=scope_type,
                identification=read_identification(
                    scope.get("identification"), language=language
                ),
            )
        )
    return parsed


def title_label(
    options: typ.Mapping[str, typ.Any], *, language: str = DEFAULT_LANGUAGE
) -> str | None:
    """Return the content of the note titled ``Title label``."""
    notes = options.get("notes")
    if not isinstance(notes, dict):
        return None
    for note in ensure_list(notes.get("note")):
        if not isinstance(note, dict):
            continue
        items = ensure_list(note.get("content"))
        if not items:
            continue
        item = next(
            (entry for entry in items if isinstance(entry, dict) and entry.get("lang") == language),
            items[0],
        )
        if not isinstance(item, dict) or item.get("title") is None:
            continue
        if fake_string(item["title"]) == TITLE_LABEL_NOTE:
            return resolve_string(item, language)
    return None


def parse_website_options(
    options: typ.Mapping[str, typ.Any] | None,
    *,
    language: str = DEFAULT_LANGUAGE,
    owner: str = "",
) -> WebsiteOptions:
    """Read the options block; an absent block yields empty options."""
    if not options:
        return WebsiteOptions()
    return WebsiteOptions(
        scopes=parse_scopes(options, language=language, owner=owner),
        contexts=parse_property_contexts(options, language=language),
        labels=OptionLabels(title=title_label(options, language=language)),
    )


__all__ = [
    "CONTEXT_KINDS",
    "LevelContext",
    "LevelContextItem",
    "OptionLabels",
    "PropertyContexts",
    "Scope",
    "WebsiteOptions",
    "parse_level_contexts",
    "parse_property_contexts",
    "parse_scopes",
    "parse_website_options",
    "title_label",
]
