r"""Resolve linked documents for elements that carry no inline content.

Text, button and annotated-document elements may point at their document
through an ``internalDocument`` link instead of embedding it. A
:class:`DocumentResolver` turns that link's uuid into the raw document content
which the document renderer then turns into text.

Two resolvers ship with the package: :class:`MappingDocumentResolver` serves
documents fetched ahead of time, and :class:`HttpDocumentResolver` fetches
them one by one over HTTP.

Example
-------
>>> from website_tree.resolvers import MappingDocumentResolver
>>> resolver = MappingDocumentResolver({"doc-1": {"content": "Hello"}})
>>> resolver.resolve("doc-1")
'Hello'
>>> resolver.resolve("missing") is None
True
"""

from __future__ import annotations

import json
import logging
import typing as typ
from http import HTTPStatus

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from website_tree.errors import DocumentResolutionError

logger = logging.getLogger(__name__)

_ACCEPT_HEADER = "application/json"


@typ.runtime_checkable
class DocumentResolver(typ.Protocol):
    """Capability returning the raw document content for a uuid."""

    def resolve(self, uuid: str) -> typ.Any | None:
        """Return the document content for ``uuid`` or ``None`` when absent."""
        ...


def document_content(payload: object) -> typ.Any | None:
    """Extract document content from a resource, document or content payload.

    Accepts the full ``{"ochre": {"resource": {"document": ...}}}`` response,
    a bare resource, a ``{"content": ...}`` document, or the content itself.
    """
    match payload:
        case {"ochre": inner}:
            return document_content(inner)
        case {"resource": dict() as inner}:
            return document_content(inner.get("document"))
        case {"document": inner}:
            return document_content(inner)
        case {"content": inner}:
            return inner
        case _:
            return payload


class MappingDocumentResolver:
    """Serve documents from a pre-fetched ``uuid -> payload`` mapping."""

    def __init__(self, documents: typ.Mapping[str, typ.Any]) -> None:
        self._documents = dict(documents)

    def resolve(self, uuid: str) -> typ.Any | None:
        payload = self._documents.get(uuid)
        if payload is None:
            return None
        return document_content(payload)


class HttpDocumentResolver:
    """Fetch documents over HTTP using a URL template.

    The template must contain a ``{uuid}`` placeholder. The resolver owns its
    ``requests.Session`` (unless one is supplied), applies ``timeout`` to every
    request and retries connection failures and 5xx answers ``max_retries``
    times through the session's transport adapter.
    """

    def __init__(
        self,
        url_template: str,
        *,
        session: requests.Session | None = None,
        timeout: float = 10.0,
        max_retries: int = 2,
    ) -> None:
        """Initialise the resolver.

        Parameters
        ----------
        url_template : str
            URL with a ``{uuid}`` placeholder.
        session : requests.Session, optional
            Preconfigured session to reuse connections. Defaults to a new
            session with a retrying adapter mounted for HTTP and HTTPS.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``10.0``.
        max_retries : int, optional
            Connection retries per request. Defaults to ``2``.

        Raises
        ------
        ValueError
            If ``url_template`` has no ``{uuid}`` placeholder.
        """
        if "{uuid}" not in url_template:
            msg = f"Document URL template '{url_template}' lacks a '{{uuid}}' placeholder"
            raise ValueError(msg)
        self._url_template = url_template
        if session is None:
            session = requests.Session()
            retry = Retry(
                total=max_retries,
                connect=max_retries,
                read=max_retries,
                backoff_factor=0.5,
                status_forcelist=(500, 502, 503, 504),
                allowed_methods=("GET", "HEAD"),
            )
            adapter = HTTPAdapter(max_retries=retry)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        self._session = session
        self.timeout = timeout
        self._headers = {"Accept": _ACCEPT_HEADER, "User-Agent": "website-tree/0.1"}

    def resolve(self, uuid: str) -> typ.Any | None:
        """Fetch the document for ``uuid``.

        Returns
        -------
        Any | None
            The document content, or ``None`` when the server answers 404 or
            the resource has no document.

        Raises
        ------
        DocumentResolutionError
            If the server cannot be reached, answers with an error status or
            returns something other than JSON.
        """
        url = self._url_template.format(uuid=uuid)
        logger.debug("Resolving document %s from %s", uuid, url)
        try:
            response = self._session.get(url, headers=self._headers, timeout=self.timeout)
        except requests.RequestException as exc:
            msg = f"Failed to fetch document '{uuid}': {exc}"
            raise DocumentResolutionError(msg) from exc

        if response.status_code == HTTPStatus.NOT_FOUND:
            return None
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            snippet = response.text[:200]
            msg = (
                f"Document lookup for '{uuid}' failed with status "
                f"{response.status_code}: {snippet}"
            )
            raise DocumentResolutionError(msg)

        try:
            payload = response.json()
        except (json.JSONDecodeError, requests.JSONDecodeError) as exc:
            msg = f"Document response for '{uuid}' was not valid JSON"
            raise DocumentResolutionError(msg) from exc
        return document_content(payload)


__all__ = [
    "DocumentResolver",
    "HttpDocumentResolver",
    "MappingDocumentResolver",
    "document_content",
]
