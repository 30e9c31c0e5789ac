"""Persistent credential store backed by the system keyring."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import keyring
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError

from ..errors import CredentialBackendError, CredentialDecodingError, CredentialEncodingError

logger = logging.getLogger(__name__)

DEFAULT_SERVICE = "apiwire"


class KeyringCredentialStore:
    """
    Credential store that keeps secrets in the OS keychain via ``keyring``.

    Secrets are namespaced by ``service`` and keyed by name. keyring calls
    block, so they run in a worker thread.

    Error mapping:
    - Secret not encodable as UTF-8 -> CredentialEncodingError
    - Stored value not readable as UTF-8 text -> CredentialDecodingError
    - Any backend failure, keyring or OS level -> CredentialBackendError
      (status = error class name)

    Example:
        store = KeyringCredentialStore(service="com.example.app")
        await store.save("accessToken", token)
    """

    def __init__(self, service: str = DEFAULT_SERVICE, backend: Optional[KeyringBackend] = None) -> None:
        """
        Initialize the store.

        Args:
            service: Namespace for this application's secrets
            backend: Explicit keyring backend (defaults to keyring's active backend)
        """
        self.service = service
        self._backend = backend

    def _get_backend(self) -> KeyringBackend:
        if self._backend is None:
            self._backend = keyring.get_keyring()
        return self._backend

    async def save(self, name: str, secret: str) -> None:
        try:
            secret.encode("utf-8")
        except UnicodeEncodeError as e:
            raise CredentialEncodingError(f"Secret for {name!r} is not encodable as UTF-8") from e

        await self._call("set_password", self.service, name, secret)
        logger.debug(f"Saved secret {name!r} in keyring service {self.service!r}")

    async def load(self, name: str) -> Optional[str]:
        value = await self._call("get_password", self.service, name)
        if value is None:
            return None
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError as e:
                raise CredentialDecodingError(f"Secret for {name!r} is not valid UTF-8") from e
        if not isinstance(value, str):
            raise CredentialDecodingError(f"Secret for {name!r} has unexpected type {type(value).__name__}")
        return value

    async def delete(self, name: str) -> None:
        try:
            await self._call("delete_password", self.service, name)
        except CredentialBackendError as e:
            # keyring signals a missing entry with PasswordDeleteError
            if isinstance(e.__cause__, PasswordDeleteError):
                logger.debug(f"No secret {name!r} to delete in keyring service {self.service!r}")
                return
            raise

    async def _call(self, method: str, *args: str) -> Any:
        backend = self._get_backend()
        try:
            return await asyncio.to_thread(getattr(backend, method), *args)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Backends also raise OSError, pywintypes.error, dbus errors...
            raise CredentialBackendError(type(e).__name__, f"Keyring {method} failed: {e}") from e
