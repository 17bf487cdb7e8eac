"""Sync request dispatch."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from ..config import PaynameConfig
from .dispatch_shared import DispatcherState, HttpMethod
from .models import ApiResponse
from .token import TokenState


class TransportLike(Protocol):
    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str | None = None,
    ) -> str: ...

    def close(self) -> None: ...


class Dispatcher(DispatcherState):
    """Sends one request per call and routes the envelope outcome.

    ``success: false`` raises :class:`PaynameApiError`. A successful envelope
    with a ``W``-prefixed code returns normally and leaves the warning in
    :attr:`last_error`. A clean success clears :attr:`last_error`.
    """

    def __init__(
        self,
        config: PaynameConfig,
        transport: TransportLike,
        *,
        token_state: TokenState | None = None,
    ) -> None:
        super().__init__(config, token_state=token_state)
        self._transport = transport

    def get(self, path: str) -> ApiResponse:
        return self.request(HttpMethod.GET, path)

    def post(self, path: str, payload: Mapping[str, object] | None = None) -> ApiResponse:
        return self.request(HttpMethod.POST, path, payload)

    def put(self, path: str, payload: Mapping[str, object] | None = None) -> ApiResponse:
        return self.request(HttpMethod.PUT, path, payload)

    def delete(self, path: str, payload: Mapping[str, object] | None = None) -> ApiResponse:
        return self.request(HttpMethod.DELETE, path, payload)

    def request(
        self,
        method: HttpMethod | str,
        path: str,
        payload: Mapping[str, object] | None = None,
    ) -> ApiResponse:
        prepared = self._prepare(method, path, payload)
        raw = self._transport.send(
            prepared.method,
            prepared.url,
            headers=prepared.headers,
            body=prepared.body,
        )
        return self._complete(raw, prepared)


__all__ = [
    "TransportLike",
    "Dispatcher",
]
