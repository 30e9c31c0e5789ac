"""Request patterns used to route canned responses."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Protocol
from urllib.parse import urlparse

from ..models.endpoint import HttpMethod


class RequestDescriptor(Protocol):
    """Anything exposing a method and an optional URL."""

    @property
    def method(self) -> str: ...

    @property
    def url(self) -> Optional[str]: ...


@dataclass(frozen=True)
class RequestPattern:
    """
    Matches requests by method, host and path.

    Constructing the pattern directly takes raw regular expressions that are
    searched anywhere in the host/path, so ``RequestPattern(path_regex="/users")``
    matches ``/users``, ``/users/123`` and ``/api/users``.

    :meth:`for_path` takes literal values instead: the path is escaped and
    anchored, so ``RequestPattern.for_path("/users")`` matches ``/users`` only.

    Example:
        pattern = RequestPattern.for_path("/users/123", method=HttpMethod.GET)
        pattern.matches(request)
    """

    path_regex: str
    method: Optional[HttpMethod] = None
    host_regex: Optional[str] = None

    @classmethod
    def for_path(
        cls,
        path: str,
        method: Optional[HttpMethod] = None,
        host: Optional[str] = None,
    ) -> RequestPattern:
        """Build a pattern from a literal path (anchored) and literal host."""
        return cls(
            path_regex=f"^{re.escape(path)}$",
            method=method,
            host_regex=re.escape(host) if host is not None else None,
        )

    def matches(self, request: RequestDescriptor) -> bool:
        """
        Check whether ``request`` satisfies every filter of this pattern.

        A request without a URL never matches.
        """
        if self.method is not None and (request.method or "").upper() != self.method.value:
            return False

        if request.url is None:
            return False

        parsed = urlparse(request.url)

        if self.host_regex is not None and re.search(self.host_regex, parsed.hostname or "") is None:
            return False

        return re.search(self.path_regex, parsed.path) is not None
