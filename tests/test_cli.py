"""Tests for JSON serialisation and the ``webtree`` command line."""

from __future__ import annotations

import datetime as dt
import json
import typing as typ

import pytest
from tree_builders import page, segment, segment_item, text, website

from website_tree.cli import app, outline_lines
from website_tree.elements.models import Component
from website_tree.serialize import camel_case, to_builtins, to_json
from website_tree.website import parse_website

if typ.TYPE_CHECKING:
    from pathlib import Path


def _run(argv: list[str]) -> None:
    """Invoke the app, treating a clean exit as success."""
    try:
        app(argv)
    except SystemExit as exc:
        if exc.code not in (0, None):
            raise


def _write_tree(tmp_path: Path, tree: dict[str, typ.Any]) -> Path:
    path = tmp_path / "site.json"
    path.write_text(json.dumps(tree), encoding="utf-8")
    return path


@pytest.mark.parametrize(
    ("name", "expected"),
    [("uuid", "uuid"), ("is_name_displayed", "isNameDisplayed"), ("css_styles", "cssStyles")],
)
def test_camel_case(name: str, expected: str) -> None:
    assert camel_case(name) == expected


def test_to_builtins_flattens_enums_and_dates() -> None:
    value = {"when": dt.datetime(2024, 5, 1, tzinfo=dt.UTC), "kind": Component.MAP}
    assert to_builtins(value) == {"when": "2024-05-01T00:00:00+00:00", "kind": "map"}


def test_website_serialises_with_camel_case_keys() -> None:
    site = parse_website(website(page("p1", "home", text("t1", "Hello"))))
    payload = json.loads(to_json(site))
    home = payload["items"][0]
    assert (home["type"], home["slug"]) == ("page", "home")
    assert home["properties"]["isSidebarDisplayed"] is True
    element = home["items"][0]
    assert (element["component"], element["content"]) == ("text", "Hello")
    assert element["title"]["properties"]["isNameDisplayed"] is False


def test_outline_lines_indent_nested_items() -> None:
    site = parse_website(
        website(
            page("p1", "home", page("p2", "child"), label="Home"),
            segment("seg", "parts", segment_item("item", "one")),
        )
    )
    assert outline_lines(site.items) == [
        "home  Home",
        "  home/child  Child",
        "[segment] parts  Seg",
        "  [segment-item] one  Item",
    ]


def test_outline_lines_include_segments_inside_pages() -> None:
    site = parse_website(
        website(
            page(
                "p1",
                "guide",
                text("t1", "Hello"),
                segment("seg", "parts", segment_item("item", "one", page("p3", "intro"))),
                label="Guide",
            ),
        )
    )
    assert outline_lines(site.items) == [
        "guide  Guide",
        "  [segment] parts  Seg",
        "    [segment-item] one  Item",
        "      guide/parts/one/intro  Intro",
    ]


def test_cli_parse_writes_output_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    tree = _write_tree(tmp_path, website(page("p1", "home", text("t1", "Hello"))))
    output = tmp_path / "out" / "site.model.json"
    _run(["parse", str(tree), "--output", str(output)])
    written = json.loads(output.read_text(encoding="utf-8"))
    assert written["identification"]["label"] == "Demo site"
    assert "wrote" in capsys.readouterr().out


def test_cli_outline_prints_hierarchy(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    tree = _write_tree(tmp_path, website(page("p1", "home", label="Home")))
    _run(["outline", str(tree)])
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["Demo site", "  home  Home"], f"unexpected outline {lines!r}"


def test_cli_reports_parse_errors(tmp_path: Path) -> None:
    tree = website()
    del tree["items"]
    path = _write_tree(tmp_path, tree)
    with pytest.raises(SystemExit) as excinfo:
        _run(["outline", str(path)])
    assert str(excinfo.value.code).startswith("error: "), (
        f"expected an error message exit, got {excinfo.value.code!r}"
    )
