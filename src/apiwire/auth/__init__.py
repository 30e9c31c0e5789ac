"""Credential storage and bearer-token authentication."""

from .keyring_store import DEFAULT_SERVICE, KeyringCredentialStore
from .memory import InMemoryCredentialStore
from .protocols import CredentialStore
from .service import AuthService

__all__ = [
    "AuthService",
    "CredentialStore",
    "DEFAULT_SERVICE",
    "InMemoryCredentialStore",
    "KeyringCredentialStore",
]
