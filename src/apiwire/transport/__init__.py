"""Transports: the live aiohttp client and test doubles."""

from .canned import CannedResponse, CannedTransport
from .live import AiohttpTransport
from .pattern import RequestDescriptor, RequestPattern
from .protocols import Transport, TransportResponse
from .routes import CannedRoute, CannedRoutesTransport, MatchingTransport, RouteMatchMode

__all__ = [
    "AiohttpTransport",
    "CannedResponse",
    "CannedRoute",
    "CannedRoutesTransport",
    "CannedTransport",
    "MatchingTransport",
    "RequestDescriptor",
    "RequestPattern",
    "RouteMatchMode",
    "Transport",
    "TransportResponse",
]
