"""Outbound HTTP request derived from an endpoint and a base URL."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from ..codec import encode_json
from .endpoint import EndpointLike, QueryItems, RawBody

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class HttpRequest:
    """
    Immutable outbound request handed to a transport.

    Attributes:
        method: Wire name of the HTTP method
        url: Fully resolved URL (None only for hand-built test requests)
        headers: Request headers
        body: Serialized body bytes, if any
    """

    method: str
    url: Optional[str]
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    def header(self, name: str) -> Optional[str]:
        """Look up a header value case-insensitively."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def with_header(self, name: str, value: str) -> HttpRequest:
        """Return a copy with ``name`` set to ``value``, replacing any existing value."""
        lowered = name.lower()
        headers = {k: v for k, v in self.headers.items() if k.lower() != lowered}
        headers[name] = value
        return dataclasses.replace(self, headers=headers)


def build_url(base_url: str, path: str, query: Optional[QueryItems] = None) -> str:
    """
    Append ``path`` to ``base_url`` and attach ``query``.

    Exactly one "/" separates the base path from the endpoint path. An absent
    or empty query adds no "?" at all.

    Example:
        >>> build_url("https://api.example.com", "/posts", [("_limit", "10")])
        'https://api.example.com/posts?_limit=10'
    """
    parts = urlsplit(base_url)
    url_path = parts.path
    if path:
        url_path = url_path.rstrip("/") + "/" + path.lstrip("/")

    query_string = urlencode(list(query), quote_via=quote) if query else ""
    full_query = "&".join(q for q in (parts.query, query_string) if q)

    return urlunsplit((parts.scheme, parts.netloc, url_path, full_query, ""))


def build_request(endpoint: EndpointLike, base_url: str) -> HttpRequest:
    """
    Derive the outbound request for ``endpoint``.

    Content-Type is set whenever the endpoint has a body, including an empty
    mapping (sent as ``{}``). Authorization is not handled here.
    """
    headers: dict[str, str] = {}
    body: Optional[bytes] = None

    if endpoint.body is not None:
        headers["Content-Type"] = JSON_CONTENT_TYPE
        if isinstance(endpoint.body, RawBody):
            body = endpoint.body.content
        else:
            body = encode_json(dict(endpoint.body))

    return HttpRequest(
        method=endpoint.method.value,
        url=build_url(base_url, endpoint.path, endpoint.query),
        headers=headers,
        body=body,
    )
