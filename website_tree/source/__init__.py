"""Normalisation of the raw, loosely typed resource tree."""

from __future__ import annotations

from .nodes import Identification, LinkRef, PropertyNode, PropertyValue, ResourceNode
from .reader import read_resource, read_resources
from .strings import DocumentRenderer, PlainTextRenderer, resolve_string

__all__ = [
    "DocumentRenderer",
    "Identification",
    "LinkRef",
    "PlainTextRenderer",
    "PropertyNode",
    "PropertyValue",
    "ResourceNode",
    "read_resource",
    "read_resources",
    "resolve_string",
]
