"""API environments supply the base URL endpoints resolve against."""

from typing import Optional, Protocol
from urllib.parse import urlparse

from pydantic import BaseModel, Field

from ..errors import MissingBaseURLError


class EnvironmentLike(Protocol):
    """Protocol for objects that carry an optional base URL."""

    @property
    def base_url(self) -> Optional[str]: ...


class ApiEnvironment(BaseModel):
    """
    Environment pointing at one deployment of an API.

    Example:
        production = ApiEnvironment(base_url="https://api.example.com")
        staging = ApiEnvironment(base_url="https://staging.example.com/v2")
    """

    base_url: Optional[str] = Field(None, description="Base URL endpoint paths are appended to")

    model_config = {"extra": "forbid", "frozen": True}


def resolve_base_url(environment: EnvironmentLike) -> str:
    """
    Return the environment's base URL or fail loudly.

    Raises:
        MissingBaseURLError: If the base URL is absent or has no scheme/host
    """
    base_url = environment.base_url
    if not base_url:
        raise MissingBaseURLError(base_url)
    parsed = urlparse(base_url)
    if not parsed.scheme or not parsed.netloc:
        raise MissingBaseURLError(base_url)
    return base_url
