"""Public async client entrypoint."""

from __future__ import annotations

from collections.abc import Mapping
from types import TracebackType

from .auth import AsyncAuthService
from .client_shared import ensure_client_open, resolve_client_config
from .config import PaynameConfig
from .core.async_dispatcher import AsyncDispatcher, AsyncTransportLike
from .core.async_transport import AsyncTransport
from .core.dispatch_shared import HttpMethod
from .core.errors import ApiErrorRecord
from .core.models import ApiResponse
from .core.token import TokenState


class _GuardedAsyncDispatcher(AsyncDispatcher):
    """Async dispatcher that refuses to send once its owner is closed."""

    def __init__(
        self,
        owner: "AsyncPaynameClient",
        config: PaynameConfig,
        transport: AsyncTransportLike,
        *,
        token_state: TokenState | None = None,
    ) -> None:
        super().__init__(config, transport, token_state=token_state)
        self._owner = owner

    async def request(
        self,
        method: HttpMethod | str,
        path: str,
        payload: Mapping[str, object] | None = None,
    ) -> ApiResponse:
        self._owner._ensure_open()
        return await super().request(method, path, payload)


class AsyncPaynameClient:
    """Public async Payname API client (dispatch and auth only)."""

    def __init__(
        self,
        *,
        config: PaynameConfig | None = None,
        transport: AsyncTransportLike | None = None,
        token_state: TokenState | None = None,
    ) -> None:
        self._config = resolve_client_config(config)

        self._transport = transport or AsyncTransport(self._config)
        self._dispatcher = _GuardedAsyncDispatcher(
            self,
            self._config,
            self._transport,
            token_state=token_state,
        )
        self._closed = False
        self.auth = AsyncAuthService(self._dispatcher)

    @property
    def config(self) -> PaynameConfig:
        return self._config

    @property
    def dispatcher(self) -> AsyncDispatcher:
        return self._dispatcher

    @property
    def token(self) -> str:
        return self._dispatcher.token

    def set_token(self, token: str) -> str:
        return self._dispatcher.set_token(token)

    @property
    def last_error(self) -> ApiErrorRecord | None:
        return self._dispatcher.last_error

    async def get(self, path: str) -> ApiResponse:
        return await self._dispatcher.get(path)

    async def post(self, path: str, payload: Mapping[str, object] | None = None) -> ApiResponse:
        return await self._dispatcher.post(path, payload)

    async def put(self, path: str, payload: Mapping[str, object] | None = None) -> ApiResponse:
        return await self._dispatcher.put(path, payload)

    async def delete(
        self,
        path: str,
        payload: Mapping[str, object] | None = None,
    ) -> ApiResponse:
        return await self._dispatcher.delete(path, payload)

    def _ensure_open(self) -> None:
        ensure_client_open(self._closed, "AsyncPaynameClient")

    async def close(self) -> None:
        if self._closed:
            return
        await self._transport.close()
        self._closed = True

    async def __aenter__(self) -> "AsyncPaynameClient":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "AsyncPaynameClient",
]
