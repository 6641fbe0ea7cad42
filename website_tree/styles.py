"""Responsive style declarations read from ``presentation = css*`` sub-trees.

Each tier is read on its own: a node with only ``css`` gets empty tablet and
mobile lists, never a copy of the default tier.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from website_tree._constants import CSS_TIERS, PRESENTATION
from website_tree.properties import subproperties
from website_tree.source.strings import fake_string

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from website_tree.source.nodes import PropertyNode


@dc.dataclass(frozen=True, slots=True)
class Style:
    """One CSS declaration."""

    label: str
    value: str


@dc.dataclass(frozen=True, slots=True)
class ResponsiveStyles:
    """Independent style lists for the three responsive tiers."""

    default: list[Style] = dc.field(default_factory=list)
    tablet: list[Style] = dc.field(default_factory=list)
    mobile: list[Style] = dc.field(default_factory=list)


def parse_styles(nodes: cabc.Sequence[PropertyNode], marker: str) -> list[Style]:
    """Return the declarations found under ``presentation = marker``."""
    styles: list[Style] = []
    for node in subproperties(nodes, PRESENTATION, marker):
        content = node.first_content
        if content is None:
            continue
        styles.append(Style(label=node.label, value=fake_string(content)))
    return styles


def parse_responsive_styles(nodes: cabc.Sequence[PropertyNode]) -> ResponsiveStyles:
    """Read the default, tablet and mobile tiers from ``nodes``."""
    return ResponsiveStyles(
        **{tier: parse_styles(nodes, marker) for tier, marker in CSS_TIERS.items()}
    )


__all__ = ["ResponsiveStyles", "Style", "parse_responsive_styles", "parse_styles"]
