"""Async request dispatch."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from ..config import PaynameConfig
from .dispatch_shared import DispatcherState, HttpMethod
from .models import ApiResponse
from .token import TokenState


class AsyncTransportLike(Protocol):
    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str | None = None,
    ) -> str: ...

    async def close(self) -> None: ...


class AsyncDispatcher(DispatcherState):
    """Async counterpart of :class:`Dispatcher` with identical outcome rules."""

    def __init__(
        self,
        config: PaynameConfig,
        transport: AsyncTransportLike,
        *,
        token_state: TokenState | None = None,
    ) -> None:
        super().__init__(config, token_state=token_state)
        self._transport = transport

    async def get(self, path: str) -> ApiResponse:
        return await self.request(HttpMethod.GET, path)

    async def post(self, path: str, payload: Mapping[str, object] | None = None) -> ApiResponse:
        return await self.request(HttpMethod.POST, path, payload)

    async def put(self, path: str, payload: Mapping[str, object] | None = None) -> ApiResponse:
        return await self.request(HttpMethod.PUT, path, payload)

    async def delete(self, path: str, payload: Mapping[str, object] | None = None) -> ApiResponse:
        return await self.request(HttpMethod.DELETE, path, payload)

    async def request(
        self,
        method: HttpMethod | str,
        path: str,
        payload: Mapping[str, object] | None = None,
    ) -> ApiResponse:
        prepared = self._prepare(method, path, payload)
        raw = await self._transport.send(
            prepared.method,
            prepared.url,
            headers=prepared.headers,
            body=prepared.body,
        )
        return self._complete(raw, prepared)


__all__ = [
    "AsyncTransportLike",
    "AsyncDispatcher",
]
