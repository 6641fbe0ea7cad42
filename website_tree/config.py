"""Parser settings and their YAML loader.

Settings live in a small YAML mapping; every key is optional and unknown keys
are ignored::

    language: eng
    drop_invalid_pages: true
    document_url_template: https://example.org/v2/ochre?uuid={uuid}&format=json
    request_timeout: 10
    max_retries: 2

Examples
--------
>>> from website_tree.config import ParserSettings
>>> ParserSettings().language
'eng'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ruamel.yaml import YAML

from website_tree._constants import DEFAULT_LANGUAGE
from website_tree.errors import WebsiteParseError

if typ.TYPE_CHECKING:
    from pathlib import Path


class SettingsError(WebsiteParseError):
    """Raised when the settings file holds values of the wrong type."""


@dc.dataclass(frozen=True, slots=True)
class ParserSettings:
    """Knobs controlling how a website tree is interpreted.

    Attributes
    ----------
    language : str
        Preferred language for multi-language labels and documents.
    drop_invalid_pages : bool
        When true, a page missing its slug (or a segment missing its
        abbreviation) is dropped with a warning instead of aborting the parse.
    document_url_template : str | None
        URL template with a ``{uuid}`` placeholder used to fetch linked
        documents over HTTP.
    request_timeout : float
        Per-request timeout in seconds for document fetches.
    max_retries : int
        Connection retries for document fetches.
    """

    language: str = DEFAULT_LANGUAGE
    drop_invalid_pages: bool = True
    document_url_template: str | None = None
    request_timeout: float = 10.0
    max_retries: int = 2


def _coerce(name: str, value: object, expected: type) -> typ.Any:
    if expected is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        msg = (
            f"Setting '{name}' expects {expected.__name__} but found "
            f"{type(value).__name__} '{value}'"
        )
        raise SettingsError(msg)
    return value


_SETTING_TYPES: dict[str, type] = {
    "language": str,
    "drop_invalid_pages": bool,
    "document_url_template": str,
    "request_timeout": float,
    "max_retries": int,
}


def settings_from_mapping(raw: typ.Mapping[str, typ.Any]) -> ParserSettings:
    """Build settings from a mapping, ignoring unknown keys."""
    values = {
        name: _coerce(name, raw[name], expected)
        for name, expected in _SETTING_TYPES.items()
        if raw.get(name) is not None
    }
    return ParserSettings(**values)


def load_settings(path: Path | None = None) -> ParserSettings:
    """Load parser settings from ``path``, or defaults when no path is given.

    Parameters
    ----------
    path : Path | None, optional
        YAML file holding the settings mapping.

    Returns
    -------
    ParserSettings
        Settings with every absent key at its default.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    SettingsError
        If a known key holds a value of the wrong type.
    """
    if path is None:
        return ParserSettings()
    if not path.exists():
        msg = f"Settings file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return settings_from_mapping(loaded)


__all__ = ["ParserSettings", "SettingsError", "load_settings", "settings_from_mapping"]
