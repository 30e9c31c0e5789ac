"""Protocol definitions for network services."""

from typing import Protocol, TypeVar, runtime_checkable

from ..models.endpoint import EndpointLike
from ..models.environment import EnvironmentLike

T = TypeVar("T")


@runtime_checkable
class InvalidationHandler(Protocol):
    """
    Notification sink for rejected credentials.

    Called once when the server answers 401. The network service awaits the
    call before raising, but an exception from the handler never replaces
    the original status error.
    """

    async def on_token_invalid(self) -> None: ...


class NetworkClient(Protocol):
    """
    Protocol for the three call shapes a network service offers.

    Implemented by NetworkService (real pipeline) and CannedNetworkService
    (fixed data), so view models and scripts can depend on either.
    """

    async def fetch_one(self, model: type[T], endpoint: EndpointLike, environment: EnvironmentLike) -> T:
        """Execute ``endpoint`` and decode the body as one ``model``."""
        ...

    async def fetch_many(self, model: type[T], endpoint: EndpointLike, environment: EnvironmentLike) -> list[T]:
        """Execute ``endpoint`` and decode the body as a JSON array of ``model``."""
        ...

    async def fetch_status(self, endpoint: EndpointLike, environment: EnvironmentLike) -> int:
        """Execute ``endpoint`` and return the success status code."""
        ...
