"""Bearer-token authentication on top of a credential store."""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import CredentialStoreError
from ..models.request import HttpRequest
from .protocols import CredentialStore

logger = logging.getLogger(__name__)


class AuthService:
    """
    Stores the access token and attaches it to outgoing requests.

    Example:
        auth = AuthService(InMemoryCredentialStore())
        await auth.save_token("abc123")
        request = await auth.authorize(request)
        # request.header("Authorization") == "Bearer abc123"
    """

    DEFAULT_HEADER_FIELD = "Authorization"
    DEFAULT_HEADER_PREFIX = "Bearer "
    DEFAULT_TOKEN_KEY = "accessToken"

    def __init__(
        self,
        store: CredentialStore,
        header_field: str = DEFAULT_HEADER_FIELD,
        header_prefix: str = DEFAULT_HEADER_PREFIX,
        token_key: str = DEFAULT_TOKEN_KEY,
    ) -> None:
        """
        Initialize the auth service.

        Args:
            store: Where the token is persisted
            header_field: Header that carries the token
            header_prefix: Text placed before the token in the header value
            token_key: Name the token is stored under
        """
        self.store = store
        self.header_field = header_field
        self.header_prefix = header_prefix
        self.token_key = token_key

    async def load_token(self) -> Optional[str]:
        """
        Return the stored token, or None.

        Store failures are swallowed and reported as "no token", so callers
        cannot tell "never logged in" from "storage unreadable". The failure is
        still logged as a warning.
        """
        try:
            return await self.store.load(self.token_key)
        except CredentialStoreError as e:
            logger.warning(f"Could not load {self.token_key!r} from credential store, treating as absent: {e}")
            return None

    async def save_token(self, token: str) -> None:
        await self.store.save(self.token_key, token)

    async def delete_token(self) -> None:
        await self.store.delete(self.token_key)

    async def authorize(self, request: HttpRequest) -> HttpRequest:
        """Return ``request`` with the auth header set when a token is available."""
        token = await self.load_token()
        if token is None:
            logger.debug(f"No token available for {request.method} {request.url}")
            return request
        return request.with_header(self.header_field, f"{self.header_prefix}{token}")
