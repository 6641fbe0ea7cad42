"""Titles shown above blocks, elements and the sidebar."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from website_tree._constants import PRESENTATION, TITLE
from website_tree.properties import overlay_options, subproperties

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from website_tree.source.nodes import PropertyNode


@dc.dataclass(frozen=True, slots=True)
class TitleVisibility:
    """Which parts of a title are displayed."""

    is_name_displayed: bool = False
    is_description_displayed: bool = False
    is_date_displayed: bool = False
    is_creators_displayed: bool = False
    is_count_displayed: bool = False


@dc.dataclass(frozen=True, slots=True)
class WebTitle:
    """Display title of a website node."""

    label: str
    variant: str = "default"
    properties: TitleVisibility = dc.field(default_factory=TitleVisibility)


_VISIBILITY_LABELS = {
    "is_name_displayed": "name-displayed",
    "is_description_displayed": "description-displayed",
    "is_date_displayed": "date-displayed",
    "is_creators_displayed": "creators-displayed",
    "is_count_displayed": "count-displayed",
}


def parse_web_title(nodes: cabc.Sequence[PropertyNode], label: str) -> WebTitle:
    """Read the ``presentation = title`` sub-tree of ``nodes``.

    Parameters
    ----------
    nodes : Sequence[PropertyNode]
        Properties of the titled node.
    label : str
        Resolved display label of the node.

    Returns
    -------
    WebTitle
        The title with every absent option at its default.
    """
    title_nodes = subproperties(nodes, PRESENTATION, TITLE)
    options = overlay_options(title_nodes, {"variant": "variant"}, convert={"variant": str})
    visibility = overlay_options(
        title_nodes,
        _VISIBILITY_LABELS,
        convert=dict.fromkeys(_VISIBILITY_LABELS, _is_true),
    )
    return WebTitle(label=label, properties=TitleVisibility(**visibility), **options)


def force_visibility(title: WebTitle, **flags: bool) -> WebTitle:
    """Return ``title`` with the given visibility flags switched on.

    Flags passed as ``False`` leave the authored value untouched.
    """
    forced = {name: True for name, enabled in flags.items() if enabled}
    if not forced:
        return title
    return dc.replace(title, properties=dc.replace(title.properties, **forced))


def _is_true(value: object) -> bool:
    return value is True or value == "true"


__all__ = ["TitleVisibility", "WebTitle", "force_visibility", "parse_web_title"]
