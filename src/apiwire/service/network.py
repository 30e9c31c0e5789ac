"""Network service: endpoint -> request -> transport -> status check -> decode."""

from __future__ import annotations

import logging
from typing import Optional, TypeVar

from ..auth import AuthService, CredentialStore, KeyringCredentialStore
from ..codec import JsonDecoder
from ..errors import InvalidStatusCodeError
from ..models.config import ClientConfig
from ..models.endpoint import EndpointLike
from ..models.environment import EnvironmentLike, resolve_base_url
from ..models.request import HttpRequest, build_request
from ..transport import AiohttpTransport, Transport, TransportResponse
from .protocols import InvalidationHandler

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNAUTHORIZED = 401


def is_success(status_code: int) -> bool:
    """Whether ``status_code`` is in the accepted [200, 300) range."""
    return 200 <= status_code < 300


class NetworkService:
    """
    Executes endpoints against an environment and decodes the results.

    Pipeline for every call:
    1. Build the request from the endpoint and the environment's base URL
    2. Attach the bearer token if the endpoint requires auth
    3. Send it through the transport
    4. Reject statuses outside [200, 300); on 401 notify the invalidation handler first
    5. Decode the body (fetch_one / fetch_many only)

    The service holds no mutable state, so one instance can serve concurrent
    calls as long as its transport and credential store can.

    Example:
        service = NetworkService(
            transport=AiohttpTransport(),
            auth_service=AuthService(InMemoryCredentialStore()),
        )
        env = ApiEnvironment(base_url="https://jsonplaceholder.typicode.com")
        posts = await service.fetch_many(Post, Endpoint("/posts", HttpMethod.GET), env)
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        auth_service: Optional[AuthService] = None,
        invalidation_handler: Optional[InvalidationHandler] = None,
        decoder: Optional[JsonDecoder] = None,
        log_responses: bool = False,
        response_logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Initialize the network service.

        Args:
            transport: Transport used to send requests (default: AiohttpTransport())
            auth_service: Token source for endpoints that require auth
                (default: AuthService over a KeyringCredentialStore)
            invalidation_handler: Notified when the server answers 401
            decoder: JSON decoder configuration (default: JsonDecoder())
            log_responses: Log method, URL, status and body of every response
            response_logger: Logger receiving response diagnostics
        """
        self.transport: Transport = transport if transport is not None else AiohttpTransport()
        self.auth_service = auth_service if auth_service is not None else AuthService(KeyringCredentialStore())
        self.invalidation_handler = invalidation_handler
        self.decoder = decoder if decoder is not None else JsonDecoder()
        self.log_responses = log_responses
        self.response_logger = response_logger or logger

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        store: Optional[CredentialStore] = None,
        invalidation_handler: Optional[InvalidationHandler] = None,
    ) -> NetworkService:
        """
        Build a service from configuration.

        Args:
            config: Client configuration
            store: Credential store override (default: keyring under config.auth.keyring_service)
            invalidation_handler: Notified when the server answers 401
        """
        transport = AiohttpTransport(
            timeout=config.network.timeout,
            user_agent=config.network.user_agent,
            proxy=config.network.proxy,
        )
        auth_service = AuthService(
            store if store is not None else KeyringCredentialStore(service=config.auth.keyring_service),
            header_field=config.auth.header_field,
            header_prefix=config.auth.header_prefix,
            token_key=config.auth.token_key,
        )
        return cls(
            transport=transport,
            auth_service=auth_service,
            invalidation_handler=invalidation_handler,
            log_responses=config.network.log_responses,
        )

    async def fetch_one(self, model: type[T], endpoint: EndpointLike, environment: EnvironmentLike) -> T:
        """
        Execute ``endpoint`` and decode the body as a single ``model``.

        Raises:
            MissingBaseURLError: If the environment has no base URL
            TransportError: If the transport could not complete the call
            InvalidStatusCodeError: If the status is outside [200, 300)
            DecodingError: If the body does not decode into ``model``
        """
        response = await self._execute(endpoint, environment)
        return self.decoder.decode(response.content, model)

    async def fetch_many(self, model: type[T], endpoint: EndpointLike, environment: EnvironmentLike) -> list[T]:
        """Execute ``endpoint`` and decode the body as a JSON array of ``model``."""
        response = await self._execute(endpoint, environment)
        return self.decoder.decode_many(response.content, model)

    async def fetch_status(self, endpoint: EndpointLike, environment: EnvironmentLike) -> int:
        """Execute ``endpoint`` without decoding and return the success status code."""
        response = await self._execute(endpoint, environment)
        return response.status_code

    async def _execute(self, endpoint: EndpointLike, environment: EnvironmentLike) -> TransportResponse:
        request = build_request(endpoint, resolve_base_url(environment))
        if endpoint.requires_auth:
            request = await self.auth_service.authorize(request)

        response = await self.transport.send(request)
        self._log_response(request, response)

        if not is_success(response.status_code):
            if response.status_code == UNAUTHORIZED:
                await self._notify_token_invalid()
            raise InvalidStatusCodeError(response.status_code)

        return response

    async def _notify_token_invalid(self) -> None:
        if self.invalidation_handler is None:
            return
        try:
            await self.invalidation_handler.on_token_invalid()
        except Exception as e:
            # The 401 error is raised by the caller regardless
            logger.error(f"Invalidation handler failed: {e}")

    def _log_response(self, request: HttpRequest, response: TransportResponse) -> None:
        if not self.log_responses:
            return
        self.response_logger.debug(f"{request.method} {request.url} -> {response.status_code}")
        try:
            self.response_logger.debug(f"Response text:\n{response.content.decode('utf-8')}")
        except UnicodeDecodeError:
            self.response_logger.debug(f"Response data (non-UTF8, {len(response.content)} bytes)")
