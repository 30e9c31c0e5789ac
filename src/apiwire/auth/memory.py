"""In-memory credential store for tests and previews."""

import asyncio
from typing import Optional


class InMemoryCredentialStore:
    """
    Credential store holding secrets in a process-local dict.

    Thread-safe for concurrent coroutines: every access goes through an
    asyncio.Lock.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._storage: dict[str, str] = dict(initial or {})
        self._lock = asyncio.Lock()

    async def save(self, name: str, secret: str) -> None:
        async with self._lock:
            self._storage[name] = secret

    async def load(self, name: str) -> Optional[str]:
        async with self._lock:
            return self._storage.get(name)

    async def delete(self, name: str) -> None:
        async with self._lock:
            self._storage.pop(name, None)

    async def keys(self) -> list[str]:
        """Snapshot of the stored names."""
        async with self._lock:
            return list(self._storage)
