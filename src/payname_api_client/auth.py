"""OAuth token endpoints."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .core.async_dispatcher import AsyncDispatcher
from .core.dispatcher import Dispatcher
from .core.dispatch_shared import DispatcherState
from .core.errors import PaynameProtocolError
from .core.models import ApiResponse

logger = logging.getLogger("payname_api_client")

TOKEN_PATH = "/auth/token"
REFRESH_TOKEN_PATH = "/auth/refresh_token"


def build_token_payload(state: DispatcherState) -> dict[str, object]:
    return {
        "ID": state.config.id,
        "secret": state.config.secret,
    }


def build_refresh_payload(state: DispatcherState) -> dict[str, object]:
    return {
        "ID": state.config.id,
        "token": state.token,
    }


def extract_token(response: ApiResponse) -> str:
    """Pull the token out of an auth response ``data`` field."""

    data = response.data
    if isinstance(data, str) and data:
        return data
    if isinstance(data, Mapping):
        token = data.get("token")
        if isinstance(token, str) and token:
            return token
    raise PaynameProtocolError("auth response does not contain a token")


class AuthService:
    """Token acquisition for OAuth mode.

    The returned token is not stored; pass it to ``set_token`` or use
    :meth:`authenticate` / :meth:`refresh`.
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def request_token(self) -> str:
        response = self._dispatcher.post(TOKEN_PATH, build_token_payload(self._dispatcher))
        return extract_token(response)

    def refresh_token(self) -> str:
        response = self._dispatcher.post(
            REFRESH_TOKEN_PATH,
            build_refresh_payload(self._dispatcher),
        )
        return extract_token(response)

    def authenticate(self) -> str:
        token = self._dispatcher.set_token(self.request_token())
        logger.info("auth token acquired")
        return token

    def refresh(self) -> str:
        token = self._dispatcher.set_token(self.refresh_token())
        logger.info("auth token refreshed")
        return token


class AsyncAuthService:
    """Async counterpart of :class:`AuthService`."""

    def __init__(self, dispatcher: AsyncDispatcher) -> None:
        self._dispatcher = dispatcher

    async def request_token(self) -> str:
        response = await self._dispatcher.post(TOKEN_PATH, build_token_payload(self._dispatcher))
        return extract_token(response)

    async def refresh_token(self) -> str:
        response = await self._dispatcher.post(
            REFRESH_TOKEN_PATH,
            build_refresh_payload(self._dispatcher),
        )
        return extract_token(response)

    async def authenticate(self) -> str:
        token = self._dispatcher.set_token(await self.request_token())
        logger.info("auth token acquired")
        return token

    async def refresh(self) -> str:
        token = self._dispatcher.set_token(await self.refresh_token())
        logger.info("auth token refreshed")
        return token


__all__ = [
    "TOKEN_PATH",
    "REFRESH_TOKEN_PATH",
    "extract_token",
    "AuthService",
    "AsyncAuthService",
]
