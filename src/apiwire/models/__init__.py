"""Endpoint, environment, request and configuration models."""

from .config import AuthConfig, ClientConfig, NetworkConfig
from .endpoint import Body, Endpoint, EndpointLike, HttpMethod, JsonValue, QueryItems, RawBody
from .environment import ApiEnvironment, EnvironmentLike, resolve_base_url
from .request import JSON_CONTENT_TYPE, HttpRequest, build_request, build_url

__all__ = [
    # Endpoint
    "Body",
    "Endpoint",
    "EndpointLike",
    "HttpMethod",
    "JsonValue",
    "QueryItems",
    "RawBody",
    # Environment
    "ApiEnvironment",
    "EnvironmentLike",
    "resolve_base_url",
    # Request
    "HttpRequest",
    "JSON_CONTENT_TYPE",
    "build_request",
    "build_url",
    # Config
    "AuthConfig",
    "ClientConfig",
    "NetworkConfig",
]
