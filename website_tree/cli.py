"""Cyclopts CLI entrypoint for interpreting website trees.

The ``webtree`` console script reads a resource tree from JSON or YAML, runs
the website interpreter over it and either writes the resulting model as JSON
(``webtree parse``) or prints the routed slug hierarchy (``webtree outline``).
Every option can also be supplied through a ``WEBTREE_*`` environment
variable, which keeps CI invocations short.

Examples
--------
Write the website model for a tree file:

>>> from website_tree.cli import app
>>> app(["parse", "site.json", "--output", "site.model.json"])  # doctest: +SKIP

Show the page hierarchy:

>>> app(["outline", "site.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import ParserSettings, load_settings
from .errors import WebsiteParseError
from .loader import load_tree
from .models import Webpage, WebSegment, WebSegmentItem, Website
from .resolvers import HttpDocumentResolver
from .serialize import to_json
from .website import parse_website

app = App(name="webtree", config=cyclopts.config.Env("WEBTREE_", command=False))  # type: ignore[unknown-argument]

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def _build_website(
    tree: Path, settings_path: Path | None, document_url: str | None
) -> Website:
    """Load settings and the tree, then parse it into a website.

    Raises
    ------
    SystemExit
        With the error message when the tree cannot be interpreted.
    """
    settings: ParserSettings = load_settings(settings_path)
    template = document_url or settings.document_url_template
    resolver = (
        HttpDocumentResolver(
            template,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
        )
        if template
        else None
    )
    try:
        return parse_website(load_tree(tree), resolver=resolver, settings=settings)
    except WebsiteParseError as exc:
        raise SystemExit(f"error: {exc}") from exc


def outline_lines(
    items: typ.Sequence[Webpage | WebSegment | WebSegmentItem], depth: int = 0
) -> list[str]:
    """Render the routed hierarchy of ``items`` as indented lines."""
    lines: list[str] = []
    indent = "  " * depth
    for item in items:
        match item:
            case Webpage():
                lines.append(f"{indent}{item.slug}  {item.title}")
                lines.extend(outline_lines(item.webpages, depth + 1))
                segments = [child for child in item.items if isinstance(child, WebSegment)]
                lines.extend(outline_lines(segments, depth + 1))
            case WebSegment() | WebSegmentItem():
                lines.append(f"{indent}[{item.type}] {item.slug}  {item.title}")
                lines.extend(outline_lines(item.items, depth + 1))
    return lines


@app.command(help="Parse a website tree and write the website model as JSON.")
def parse(
    tree: typ.Annotated[Path, Parameter(help="Path to the tree file (.json, .yaml)")],
    *,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Write JSON here instead of stdout", env_var="WEBTREE_OUTPUT"),
    ] = None,
    settings: typ.Annotated[
        Path | None,
        Parameter(help="Path to parser settings (YAML)", env_var="WEBTREE_SETTINGS"),
    ] = None,
    document_url: typ.Annotated[
        str | None,
        Parameter(
            help="URL template with {uuid} for linked documents",
            env_var="WEBTREE_DOCUMENT_URL",
        ),
    ] = None,
    log_level: typ.Annotated[
        str, Parameter(help="Logging level", env_var="WEBTREE_LOG_LEVEL")
    ] = "WARNING",
) -> None:
    """Parse ``tree`` and emit the website model.

    Parameters
    ----------
    tree : Path
        Resource tree file to interpret.
    output : Path or None, optional
        Destination for the JSON model; printed to stdout when ``None``.
    settings : Path or None, optional
        YAML settings file; defaults apply when omitted.
    document_url : str or None, optional
        Overrides ``document_url_template`` from the settings.
    log_level : str, optional
        Level passed to :func:`logging.basicConfig`.
    """
    _configure_logging(log_level)
    website = _build_website(tree, settings, document_url)
    text = to_json(website)
    if output is None:
        print(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="Print the page and segment hierarchy of a website tree.")
def outline(
    tree: typ.Annotated[Path, Parameter(help="Path to the tree file (.json, .yaml)")],
    *,
    settings: typ.Annotated[
        Path | None,
        Parameter(help="Path to parser settings (YAML)", env_var="WEBTREE_SETTINGS"),
    ] = None,
    log_level: typ.Annotated[
        str, Parameter(help="Logging level", env_var="WEBTREE_LOG_LEVEL")
    ] = "WARNING",
) -> None:
    _configure_logging(log_level)
    website = _build_website(tree, settings, None)
    print(website.identification.label)
    for line in outline_lines(website.items, depth=1):
        print(line)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``webtree`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
