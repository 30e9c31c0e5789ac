"""Live HTTP transport backed by aiohttp."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Optional
from urllib.parse import urlparse

import aiohttp

from ..errors import InvalidResponseTypeError, MissingRequestUrlError, TransportError
from ..models.request import HttpRequest
from .protocols import TransportResponse

logger = logging.getLogger(__name__)


class AiohttpTransport:
    """
    Transport that sends requests over the network with aiohttp.

    No retries, caching or pooling policy is layered on top of aiohttp;
    timeouts, TLS and connection reuse are aiohttp's concern.

    Session handling:
    - Injected session: used as-is and never closed by the transport
    - ``async with transport:``: one session is owned for the whole block
    - Otherwise: a short-lived session is opened per request

    Example:
        async with AiohttpTransport(timeout=10) as transport:
            response = await transport.send(request)
            print(response.status_code, response.text())
    """

    ALLOWED_SCHEMES = frozenset({"http", "https"})

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        *,
        timeout: float = 30.0,
        user_agent: Optional[str] = None,
        proxy: Optional[str] = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            session: Externally managed session to send requests with
            timeout: Total request timeout in seconds
            user_agent: Custom User-Agent string
            proxy: Proxy URL (http://...)
        """
        self._session = session
        self._owns_session = False
        self._timeout = timeout
        self._user_agent = user_agent
        self._proxy = proxy

    async def __aenter__(self) -> AiohttpTransport:
        """Enter async context and create an owned session if none was injected."""
        if self._session is None:
            self._session = self._create_session()
            self._owns_session = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close the owned session."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._owns_session = False

    def _create_session(self) -> aiohttp.ClientSession:
        headers = {"User-Agent": self._user_agent} if self._user_agent else None
        return aiohttp.ClientSession(headers=headers)

    async def send(self, request: HttpRequest) -> TransportResponse:
        """
        Send a request and return the raw response.

        Raises:
            MissingRequestUrlError: If the request has no URL
            InvalidResponseTypeError: If the URL is not an HTTP(S) URL
            TransportError: On network errors and timeouts
        """
        if request.url is None:
            raise MissingRequestUrlError()

        scheme = urlparse(request.url).scheme.lower()
        if scheme not in self.ALLOWED_SCHEMES:
            raise InvalidResponseTypeError(f"Not an HTTP response: unsupported URL scheme {scheme!r}")

        if self._session is not None:
            return await self._send(self._session, request)

        async with self._create_session() as session:
            return await self._send(session, request)

    async def _send(self, session: aiohttp.ClientSession, request: HttpRequest) -> TransportResponse:
        logger.debug(f"{request.method} {request.url}")
        try:
            async with session.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                data=request.body,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                proxy=self._proxy,
                allow_redirects=True,
            ) as response:
                content = await response.read()
                return TransportResponse(
                    content=content,
                    status_code=response.status,
                    headers=_join_headers(response.headers),
                    url=str(response.url),
                    http_version=_format_version(response.version),
                )
        except asyncio.TimeoutError as e:
            raise TransportError(f"Timed out after {self._timeout}s: {request.method} {request.url}", cause=e) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"HTTP error for {request.method} {request.url}: {e}", cause=e) from e


def _join_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """
    Flatten a multi-valued header mapping into one value per name.

    Repeated headers (e.g. several ``Set-Cookie`` lines) are joined with
    ", " in arrival order; the first spelling of each name is kept.
    """
    joined: dict[str, str] = {}
    spelling: dict[str, str] = {}
    for name, value in headers.items():
        key = spelling.setdefault(name.lower(), name)
        joined[key] = f"{joined[key]}, {value}" if key in joined else value
    return joined


def _format_version(version: Optional[aiohttp.HttpVersion]) -> str:
    if version is None:
        return "HTTP/1.1"
    return f"HTTP/{version.major}.{version.minor}"
