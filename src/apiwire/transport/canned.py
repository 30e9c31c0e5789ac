"""Transport that always answers with one fixed response."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from ..codec import encode_json
from ..errors import MissingRequestUrlError
from ..models.request import HttpRequest
from .protocols import TransportResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CannedResponse:
    """
    A fake response served by test-double transports.

    Attributes:
        content: Response body bytes
        status_code: HTTP status code
        headers: Optional response headers
        http_version: HTTP version reported for the response
    """

    content: bytes
    status_code: int = 200
    headers: Optional[Mapping[str, str]] = None
    http_version: str = "HTTP/1.1"

    @classmethod
    def from_text(
        cls,
        text: str,
        encoding: str = "utf-8",
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
    ) -> CannedResponse:
        """Build a response whose body is ``text`` encoded with ``encoding``."""
        return cls(content=text.encode(encoding), status_code=status_code, headers=headers)

    @classmethod
    def from_json(
        cls,
        payload: Any,
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
    ) -> CannedResponse:
        """Build a response whose body is ``payload`` serialized as JSON."""
        merged = {"Content-Type": "application/json"}
        if headers:
            merged.update(headers)
        return cls(content=encode_json(payload), status_code=status_code, headers=merged)

    def to_response(self, url: str) -> TransportResponse:
        """Materialize the transport response for a request to ``url``."""
        return TransportResponse(
            content=self.content,
            status_code=self.status_code,
            headers=dict(self.headers or {}),
            url=url,
            http_version=self.http_version,
        )


class CannedTransport:
    """
    Transport that ignores the request and returns one fixed response.

    The request must still carry a URL.

    Example:
        transport = CannedTransport(CannedResponse.from_text('{"id": 1}'))
        service = NetworkService(transport=transport, auth_service=auth)
    """

    def __init__(self, response: CannedResponse) -> None:
        self.response = response

    @classmethod
    def from_text(
        cls,
        text: str,
        encoding: str = "utf-8",
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
    ) -> CannedTransport:
        """Shortcut for ``CannedTransport(CannedResponse.from_text(...))``."""
        return cls(CannedResponse.from_text(text, encoding=encoding, status_code=status_code, headers=headers))

    async def send(self, request: HttpRequest) -> TransportResponse:
        if request.url is None:
            raise MissingRequestUrlError()
        logger.debug(f"Serving canned {self.response.status_code} for {request.method} {request.url}")
        return self.response.to_response(request.url)
