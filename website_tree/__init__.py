"""Interpret generic resource trees as typed website models.

A resource tree carries no type tags: pages, segments, blocks and elements are
declared through a reserved ``presentation`` property. This package reads such
a tree and returns a frozen :class:`Website` built from pages, segments,
blocks and one record per component kind.

Exports
-------
- ``parse_website``: interpret a decoded tree mapping.
- ``TreeAssembler``: the recursive walk, for parsing sub-trees directly.
- ``ParserSettings`` / ``load_settings``: parser configuration.
- ``app`` / ``main``: the ``webtree`` command line.

Examples
--------
>>> from website_tree import parse_website
>>> site = parse_website({"uuid": "s", "identification": {"label": "S"}, "resource": []})
>>> site.items
[]
"""

from __future__ import annotations

from .assembler import TreeAssembler
from .cli import app, main
from .config import ParserSettings, load_settings
from .errors import (
    DocumentResolutionError,
    InvalidPropertyValue,
    MissingRequiredField,
    MissingRequiredReference,
    StructuralViolation,
    UnrecognizedComponent,
    WebsiteParseError,
)
from .models import Website
from .website import parse_website

__all__ = [
    "DocumentResolutionError",
    "InvalidPropertyValue",
    "MissingRequiredField",
    "MissingRequiredReference",
    "ParserSettings",
    "StructuralViolation",
    "TreeAssembler",
    "UnrecognizedComponent",
    "Website",
    "WebsiteParseError",
    "app",
    "main",
    "load_settings",
    "parse_website",
]
