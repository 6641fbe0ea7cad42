"""Read a raw resource tree from a JSON or YAML file."""

from __future__ import annotations

import json
import typing as typ

from ruamel.yaml import YAML

if typ.TYPE_CHECKING:
    from pathlib import Path

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def load_tree(path: Path) -> dict[str, typ.Any]:
    """Load the tree mapping stored at ``path``.

    Parameters
    ----------
    path : Path
        A ``.json``, ``.yaml`` or ``.yml`` file.

    Returns
    -------
    dict[str, Any]
        The decoded top-level mapping.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ValueError
        If the suffix is not a supported format.
    TypeError
        If the document does not hold a mapping at the top level.
    """
    if not path.exists():
        msg = f"Tree file '{path}' not found."
        raise FileNotFoundError(msg)

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as handle:
        if suffix == ".json":
            loaded = json.load(handle)
        elif suffix in YAML_SUFFIXES:
            loader = YAML(typ="safe")
            loader.version = (1, 2)
            loaded = loader.load(handle)
        else:
            msg = f"Unsupported tree format '{suffix}'; use .json, .yaml or .yml"
            raise ValueError(msg)

    if not isinstance(loaded, dict):
        msg = "Top-level tree structure must be a mapping."
        raise TypeError(msg)
    return loaded


__all__ = ["load_tree"]
