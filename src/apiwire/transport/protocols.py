"""Protocol definitions for transport abstraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from ..models.request import HttpRequest


@dataclass(frozen=True)
class TransportResponse:
    """
    Immutable response returned by a Transport.

    Attributes:
        content: Raw response body
        status_code: HTTP status code (200, 404, etc.)
        headers: Response headers, one value per name (repeats joined with ", ")
        url: Final URL after any redirects, when known
        http_version: Protocol version the response was served with
    """

    content: bytes
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    url: Optional[str] = None
    http_version: str = "HTTP/1.1"

    def text(self, encoding: str = "utf-8") -> str:
        """Decode the body, replacing undecodable bytes."""
        return self.content.decode(encoding, errors="replace")


@runtime_checkable
class Transport(Protocol):
    """
    Protocol for anything that can execute an HttpRequest.

    This abstraction allows for:
    - The live aiohttp transport
    - Canned and routed test doubles
    - Wrappers that gate or inspect traffic

    Transports never interpret status codes; that is the network service's
    job.
    """

    async def send(self, request: HttpRequest) -> TransportResponse:
        """
        Execute a request.

        Args:
            request: The fully built request

        Returns:
            TransportResponse with body, status and headers

        Raises:
            TransportError: When the request could not be completed
        """
        ...
