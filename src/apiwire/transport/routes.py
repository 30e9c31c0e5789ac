"""Transports that pick canned responses by request pattern."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..errors import AmbiguousRouteMatchError, MissingRequestUrlError, NoRouteMatchError, PatternNotMatchedError
from ..models.request import HttpRequest
from .canned import CannedResponse
from .pattern import RequestPattern
from .protocols import Transport, TransportResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CannedRoute:
    """A routing table entry: requests matching ``pattern`` get ``response``."""

    pattern: RequestPattern
    response: CannedResponse


class RouteMatchMode(str, Enum):
    """How a routing table resolves a request."""

    # Routes are evaluated in order; the first match wins
    FIRST_MATCH_WINS = "first_match_wins"
    # Exactly one route must match
    REQUIRE_UNIQUE_MATCH = "require_unique_match"


class CannedRoutesTransport:
    """
    Transport backed by an ordered table of canned routes.

    Example:
        transport = CannedRoutesTransport(
            [
                CannedRoute(RequestPattern.for_path("/users"), CannedResponse.from_text("[]")),
                CannedRoute(RequestPattern(path_regex=r"^/users/\\d+$"), CannedResponse.from_text("{}")),
            ],
            mode=RouteMatchMode.REQUIRE_UNIQUE_MATCH,
        )
    """

    def __init__(
        self,
        routes: Sequence[CannedRoute],
        mode: RouteMatchMode = RouteMatchMode.FIRST_MATCH_WINS,
    ) -> None:
        self.routes = tuple(routes)
        self.mode = mode

    async def send(self, request: HttpRequest) -> TransportResponse:
        if request.url is None:
            raise MissingRequestUrlError()

        if self.mode == RouteMatchMode.FIRST_MATCH_WINS:
            for route in self.routes:
                if route.pattern.matches(request):
                    return self._respond(route, request.url)
            raise NoRouteMatchError(request.method, request.url)

        matches = [route for route in self.routes if route.pattern.matches(request)]
        if not matches:
            raise NoRouteMatchError(request.method, request.url)
        if len(matches) > 1:
            raise AmbiguousRouteMatchError(len(matches))
        return self._respond(matches[0], request.url)

    def _respond(self, route: CannedRoute, url: str) -> TransportResponse:
        logger.debug(f"Route {route.pattern.path_regex!r} matched {url}")
        return route.response.to_response(url)


class MatchingTransport:
    """
    Pass-through transport that only forwards requests matching a pattern.

    Useful for asserting which calls are allowed to reach a given mock.

    Example:
        users_only = MatchingTransport(
            RequestPattern.for_path("/users", method=HttpMethod.GET),
            CannedTransport.from_text("[]"),
        )
    """

    def __init__(self, pattern: RequestPattern, transport: Transport) -> None:
        self.pattern = pattern
        self.transport = transport

    async def send(self, request: HttpRequest) -> TransportResponse:
        if not self.pattern.matches(request):
            raise PatternNotMatchedError(request.method, request.url)
        return await self.transport.send(request)
