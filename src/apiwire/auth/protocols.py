"""Protocol definitions for credential storage."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class CredentialStore(Protocol):
    """
    Protocol for single-secret key-value storage.

    Implementations may be backed by memory, the OS keychain or any other
    secure store. Failures are raised as CredentialStoreError subclasses;
    a missing entry is not a failure.
    """

    async def save(self, name: str, secret: str) -> None:
        """
        Store ``secret`` under ``name``, replacing any previous value.

        Raises:
            CredentialStoreError: If the backend rejects the write
        """
        ...

    async def load(self, name: str) -> Optional[str]:
        """
        Return the secret stored under ``name``, or None if there is none.

        Raises:
            CredentialStoreError: If the backend fails or the value is unreadable
        """
        ...

    async def delete(self, name: str) -> None:
        """
        Remove the secret stored under ``name``. Deleting a missing entry succeeds.

        Raises:
            CredentialStoreError: If the backend rejects the delete
        """
        ...
