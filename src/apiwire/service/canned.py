"""Network service double that serves fixed data."""

from __future__ import annotations

import asyncio
from typing import Optional, TypeVar

from ..codec import JsonDecoder
from ..models.endpoint import EndpointLike
from ..models.environment import EnvironmentLike

T = TypeVar("T")


class CannedNetworkService:
    """
    Answers every call with the same bytes, optionally after a delay.

    No request is built and no transport is involved, so endpoints and
    environments are accepted but ignored. Handy for previews and for
    exercising loading states.

    Example:
        service = CannedNetworkService.from_text('[{"id": 1, ...}]', delay=0.5)
        posts = await service.fetch_many(Post, JsonPlaceholderEndpoint.posts(), env)
    """

    def __init__(self, content: bytes = b"", decoder: Optional[JsonDecoder] = None, delay: float = 0.0) -> None:
        """
        Initialize the service.

        Args:
            content: Body returned for every call
            decoder: JSON decoder configuration (default: JsonDecoder())
            delay: Seconds to wait before answering
        """
        self.content = content
        self.decoder = decoder if decoder is not None else JsonDecoder()
        self.delay = delay

    @classmethod
    def from_text(cls, text: str = "", decoder: Optional[JsonDecoder] = None, delay: float = 0.0) -> CannedNetworkService:
        """Build a service answering with UTF-8 encoded ``text``."""
        return cls(text.encode("utf-8"), decoder=decoder, delay=delay)

    async def fetch_one(self, model: type[T], endpoint: EndpointLike, environment: EnvironmentLike) -> T:
        await self._wait()
        return self.decoder.decode(self.content, model)

    async def fetch_many(self, model: type[T], endpoint: EndpointLike, environment: EnvironmentLike) -> list[T]:
        await self._wait()
        return self.decoder.decode_many(self.content, model)

    async def fetch_status(self, endpoint: EndpointLike, environment: EnvironmentLike) -> int:
        await self._wait()
        return 200

    async def _wait(self) -> None:
        if self.delay > 0:
            await asyncio.sleep(self.delay)
