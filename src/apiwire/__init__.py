"""
apiwire - Declarative endpoints, pluggable transports and typed JSON decoding.

Usage:
    from apiwire import ApiEnvironment, Endpoint, HttpMethod, NetworkService

    env = ApiEnvironment(base_url="https://api.example.com")
    service = NetworkService()

    posts = await service.fetch_many(
        Post,
        Endpoint("/posts", HttpMethod.GET, query=[("_limit", "10")]),
        env,
    )
"""

__version__ = "1.0.0"

from .auth import AuthService, CredentialStore, InMemoryCredentialStore, KeyringCredentialStore
from .codec import IsoDateTime, JsonDecoder, encode_json, format_iso8601, parse_iso8601
from .errors import (
    AmbiguousRouteMatchError,
    ApiwireError,
    CredentialBackendError,
    CredentialDecodingError,
    CredentialEncodingError,
    CredentialStoreError,
    DecodingError,
    InvalidResponseTypeError,
    InvalidStatusCodeError,
    MissingBaseURLError,
    MissingRequestUrlError,
    NoRouteMatchError,
    PatternNotMatchedError,
    TransportError,
)
from .logging_config import setup_logging
from .models import (
    ApiEnvironment,
    AuthConfig,
    ClientConfig,
    Endpoint,
    EndpointLike,
    EnvironmentLike,
    HttpMethod,
    HttpRequest,
    JsonValue,
    NetworkConfig,
    RawBody,
    build_request,
)
from .service import CannedNetworkService, InvalidationHandler, NetworkClient, NetworkService
from .transport import (
    AiohttpTransport,
    CannedResponse,
    CannedRoute,
    CannedRoutesTransport,
    CannedTransport,
    MatchingTransport,
    RequestPattern,
    RouteMatchMode,
    Transport,
    TransportResponse,
)

__all__ = [
    "__version__",
    # Service
    "NetworkService",
    "NetworkClient",
    "CannedNetworkService",
    "InvalidationHandler",
    # Models
    "ApiEnvironment",
    "Endpoint",
    "EndpointLike",
    "EnvironmentLike",
    "HttpMethod",
    "HttpRequest",
    "JsonValue",
    "RawBody",
    "build_request",
    # Config
    "AuthConfig",
    "ClientConfig",
    "NetworkConfig",
    "setup_logging",
    # Transport
    "AiohttpTransport",
    "CannedResponse",
    "CannedRoute",
    "CannedRoutesTransport",
    "CannedTransport",
    "MatchingTransport",
    "RequestPattern",
    "RouteMatchMode",
    "Transport",
    "TransportResponse",
    # Auth
    "AuthService",
    "CredentialStore",
    "InMemoryCredentialStore",
    "KeyringCredentialStore",
    # Codec
    "IsoDateTime",
    "JsonDecoder",
    "encode_json",
    "format_iso8601",
    "parse_iso8601",
    # Errors
    "ApiwireError",
    "AmbiguousRouteMatchError",
    "CredentialBackendError",
    "CredentialDecodingError",
    "CredentialEncodingError",
    "CredentialStoreError",
    "DecodingError",
    "InvalidResponseTypeError",
    "InvalidStatusCodeError",
    "MissingBaseURLError",
    "MissingRequestUrlError",
    "NoRouteMatchError",
    "PatternNotMatchedError",
    "TransportError",
]
