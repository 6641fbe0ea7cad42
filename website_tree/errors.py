"""Error taxonomy raised while interpreting a resource tree as a website.

Every error message names the offending node by its resolved display label and
states what was expected versus what was found, so content authors can fix the
source tree without reading a traceback.
"""

from __future__ import annotations


class WebsiteParseError(ValueError):
    """Base class for fatal problems found while parsing a website tree."""


class MissingRequiredReference(WebsiteParseError):
    """Raised when a component lacks its mandatory link or document."""

    def __init__(self, label: str, component: str, expected: str) -> None:
        self.label = label
        self.component = component
        msg = (
            f"{expected} not found for the '{component}' component of "
            f"element '{label}'"
        )
        super().__init__(msg)


class MissingRequiredField(WebsiteParseError):
    """Raised when a structural node lacks a mandatory field such as a slug."""

    def __init__(self, label: str, kind: str, field: str) -> None:
        self.label = label
        self.kind = kind
        self.field = field
        msg = f"{kind.capitalize()} '{label}' is missing its '{field}'"
        super().__init__(msg)


class StructuralViolation(WebsiteParseError):
    """Raised when a node appears where the tree structure forbids it."""

    def __init__(self, label: str, expected: str, found: str) -> None:
        self.label = label
        self.expected = expected
        self.found = found
        msg = f"Expected {expected} but found {found} for resource '{label}'"
        super().__init__(msg)


class InvalidPropertyValue(WebsiteParseError):
    """Raised when a property value cannot be interpreted."""


class UnrecognizedComponent(WebsiteParseError):
    """Raised for a component literal outside the known set.

    The dispatcher catches this and drops the element with a warning, so it
    never reaches callers of :func:`website_tree.parse_website`.
    """

    def __init__(self, label: str, component: object) -> None:
        self.label = label
        self.component = component
        msg = (
            f"Invalid or non-implemented component '{component}' for "
            f"element '{label}'"
        )
        super().__init__(msg)


class DocumentResolutionError(RuntimeError):
    """Raised when a linked document cannot be retrieved."""


__all__ = [
    "DocumentResolutionError",
    "InvalidPropertyValue",
    "MissingRequiredField",
    "MissingRequiredReference",
    "StructuralViolation",
    "UnrecognizedComponent",
    "WebsiteParseError",
]
