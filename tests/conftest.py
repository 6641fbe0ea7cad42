"""Shared fixtures for the website tree test suite."""

from __future__ import annotations

import typing as typ

import pytest

from website_tree.assembler import TreeAssembler
from website_tree.config import ParserSettings
from website_tree.source.reader import read_resource

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from website_tree.source.nodes import ResourceNode


@pytest.fixture
def assembler() -> TreeAssembler:
    """Return an assembler with default settings and no resolver."""
    return TreeAssembler(settings=ParserSettings())


@pytest.fixture
def node() -> cabc.Callable[[dict[str, typ.Any]], ResourceNode]:
    """Return a factory that normalises a raw mapping into a node."""
    return read_resource
