"""Convert the website model into JSON-ready builtins.

Field names become camelCase, enums collapse to their values and datetimes
to ISO 8601 strings, matching what a rendering layer consumes.

Examples
--------
>>> from website_tree.styles import Style
>>> to_builtins(Style(label="font-size", value="2rem"))
{'label': 'font-size', 'value': '2rem'}
>>> camel_case("is_name_displayed")
'isNameDisplayed'
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import enum
import json
import typing as typ


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_builtins(value: object) -> typ.Any:
    """Recursively turn dataclasses and containers into builtins."""
    match value:
        case enum.Enum():
            return value.value
        case dt.datetime():
            return value.isoformat()
        case _ if dc.is_dataclass(value) and not isinstance(value, type):
            return {
                camel_case(field.name): to_builtins(getattr(value, field.name))
                for field in dc.fields(value)
            }
        case list() | tuple():
            return [to_builtins(item) for item in value]
        case dict():
            return {str(key): to_builtins(item) for key, item in value.items()}
        case _:
            return value


def to_json(value: object, *, indent: int | None = 2) -> str:
    """Serialise ``value`` to a JSON string."""
    return json.dumps(to_builtins(value), indent=indent, ensure_ascii=False)


__all__ = ["camel_case", "to_builtins", "to_json"]
