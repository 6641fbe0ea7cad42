"""Resolve multi-language rich text into display strings.

Labels, abbreviations and inline documents all share one loose shape: a bare
scalar, or ``{"content": ...}`` holding either a single language item or a
list of ``{"lang": ..., "string": ...}`` items whose ``string`` may itself be a
list of styled fragments. :func:`resolve_string` picks the requested language
(falling back to the first item) and flattens the fragments; fragments that
carry links or annotations are handed to the document renderer, which is an
injected capability so callers can produce markdown, MDX or HTML as they see
fit. :class:`PlainTextRenderer` is the default and emits plain text.

Examples
--------
>>> resolve_string("Home")
'Home'
>>> resolve_string({"content": [{"lang": "fra", "string": "Accueil"},
...                             {"lang": "eng", "string": "Home"}]})
'Home'
"""

from __future__ import annotations

import typing as typ

from website_tree._constants import DEFAULT_LANGUAGE
from website_tree.errors import InvalidPropertyValue

DocumentRenderer = typ.Callable[[typ.Any], str]

_WHITESPACE_OPTIONS = frozenset({"newline", "trailing", "leading"})


def fake_string(value: str | int | float | bool) -> str:
    """Return the display form of a scalar masquerading as a string."""
    match value:
        case bool():
            text = "true" if value else "false"
        case _:
            text = str(value)
    return text.replace("&#39;", "'")


def _is_scalar(value: object) -> bool:
    return isinstance(value, (str, int, float, bool))


def _apply_whitespace(text: str, whitespace: object) -> str:
    """Apply ``leading``/``trailing``/``newline`` markers to ``text``."""
    options = str(whitespace).split()
    if not set(options) <= _WHITESPACE_OPTIONS:
        return text
    for option in options:
        match option:
            case "newline":
                text = f"\n{text}"
            case "trailing":
                text = f"{text} "
            case "leading":
                text = f" {text}"
    return text


def _pick_language(
    items: list[typ.Any], language: str
) -> typ.Any:
    """Return the item for ``language`` or the first one."""
    for item in items:
        if isinstance(item, dict) and item.get("lang") == language:
            return item
    if not items:
        msg = f"No string item found for language '{language}' in empty content"
        raise InvalidPropertyValue(msg)
    return items[0]


class PlainTextRenderer:
    """Render rich-text documents to plain text.

    Styling (``rend``) is dropped, whitespace markers are honoured and linked
    fragments contribute their visible text only.
    """

    def __init__(self, language: str = DEFAULT_LANGUAGE) -> None:
        self.language = language

    def __call__(self, document: typ.Any) -> str:
        """Render ``document`` (a document ``content`` payload) to text."""
        match document:
            case None:
                return ""
            case list() as items:
                return self._fragment(_pick_language(items, self.language))
            case {"content": inner}:
                return self(inner)
            case _:
                return self._fragment(document)

    def _fragment(self, fragment: typ.Any) -> str:
        if _is_scalar(fragment):
            return fake_string(fragment)
        match fragment:
            case list() as parts:
                return "".join(self._fragment(part) for part in parts)
            case {"string": inner, **rest}:
                text = self._fragment(inner)
            case {"content": inner, **rest}:
                text = self._fragment(inner)
            case {"whitespace": whitespace}:
                return _apply_whitespace("", whitespace)
            case _:
                return ""
        if "whitespace" in rest:
            text = _apply_whitespace(text, rest["whitespace"])
        return text


def resolve_string(
    value: typ.Any,
    language: str = DEFAULT_LANGUAGE,
    renderer: DocumentRenderer | None = None,
) -> str:
    """Resolve a possibly multi-language rich-text value to one string.

    Parameters
    ----------
    value : Any
        Scalar, ``{"content": ...}`` mapping, language item or list of
        language items.
    language : str, optional
        Preferred language code; the first item is used when it is missing.
    renderer : DocumentRenderer, optional
        Renderer used for fragments carrying links or annotations. Defaults to
        :class:`PlainTextRenderer`.

    Returns
    -------
    str
        The resolved display string; ``""`` for ``None``.
    """
    active_renderer = renderer or PlainTextRenderer(language)
    match value:
        case None:
            return ""
        case str() | int() | float() | bool():
            return fake_string(value)
        case list() as items:
            return _resolve_item(_pick_language(items, language), active_renderer)
        case {"content": inner}:
            return resolve_string(inner, language, active_renderer)
        case dict():
            return _resolve_item(value, active_renderer)
        case _:
            return str(value)


def _resolve_item(item: typ.Any, renderer: DocumentRenderer) -> str:
    """Flatten one language item, delegating linked fragments to ``renderer``."""
    if _is_scalar(item):
        return fake_string(item)
    if not isinstance(item, dict):
        return ""
    inner = item.get("string", item.get("content"))
    if _is_scalar(inner):
        return fake_string(inner)
    parts = inner if isinstance(inner, list) else [inner]
    pieces: list[str] = []
    for part in parts:
        if _is_scalar(part):
            pieces.append(fake_string(part))
        elif isinstance(part, dict) and "links" in part:
            pieces.append(renderer(part))
        elif isinstance(part, dict) and "string" in part:
            pieces.append(_resolve_item(part, renderer))
        elif isinstance(part, dict):
            text = fake_string(part["content"]) if "content" in part else ""
            if "whitespace" in part:
                text = _apply_whitespace(text, part["whitespace"])
            pieces.append(text)
    return "".join(pieces)


__all__ = [
    "DocumentRenderer",
    "PlainTextRenderer",
    "fake_string",
    "resolve_string",
]
