"""Declarative endpoint descriptions."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Union, runtime_checkable

# Values allowed in a request body; the encoder also accepts datetimes and
# pydantic models.
JsonValue = Union[str, int, float, bool, None, Mapping[str, "JsonValue"], Sequence["JsonValue"]]

QueryItems = Sequence[tuple[str, str]]


class HttpMethod(str, Enum):
    """HTTP methods supported by endpoints."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


@dataclass(frozen=True)
class RawBody:
    """Pre-serialized JSON request body, sent as-is."""

    content: bytes


Body = Union[Mapping[str, JsonValue], RawBody]


@runtime_checkable
class EndpointLike(Protocol):
    """
    Protocol for anything that describes an HTTP call.

    Typed per-API endpoint sets implement these five attributes (usually as
    properties computed from the variant) and can be passed wherever an
    Endpoint is accepted.

    Example:
        class UsersApi:
            def __init__(self, path: str, method: HttpMethod) -> None:
                self.path = path
                self.method = method
                self.query = None
                self.body = None
                self.requires_auth = True

            @classmethod
            def user(cls, user_id: int) -> "UsersApi":
                return cls(f"/users/{user_id}", HttpMethod.GET)
    """

    @property
    def path(self) -> str: ...

    @property
    def method(self) -> HttpMethod: ...

    @property
    def query(self) -> Optional[QueryItems]: ...

    @property
    def body(self) -> Optional[Body]: ...

    @property
    def requires_auth(self) -> bool: ...


@dataclass(frozen=True)
class Endpoint:
    """
    Plain endpoint description.

    Attributes:
        path: Path appended to the base URL, expected to start with "/"
        method: HTTP method
        query: Ordered (name, value) query pairs
        body: JSON body fields; presence (even when empty) sets Content-Type
        requires_auth: Whether to attach the bearer token
    """

    path: str
    method: HttpMethod
    query: Optional[QueryItems] = None
    body: Optional[Body] = None
    requires_auth: bool = False
