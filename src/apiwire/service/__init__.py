"""Network services built on top of transports."""

from .canned import CannedNetworkService
from .network import NetworkService, is_success
from .protocols import InvalidationHandler, NetworkClient

__all__ = [
    "CannedNetworkService",
    "InvalidationHandler",
    "NetworkClient",
    "NetworkService",
    "is_success",
]
