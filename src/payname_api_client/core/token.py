"""Bearer token slot shared by every request of one client."""

from __future__ import annotations

from ..config import PaynameConfig


class TokenState:
    """Holds the value sent verbatim in the ``Authorization`` header."""

    def __init__(self, token: str = "") -> None:
        self._token = token

    @property
    def current(self) -> str:
        return self._token

    def set(self, token: str) -> str:
        self._token = token
        return self._token

    def resolve(self, config: PaynameConfig) -> str:
        """Return the token to send for the next request.

        Simple-auth mode overwrites the slot with the secret key on every
        call. OAuth mode sends whatever was last set, even if empty.
        """

        if not config.use_oauth:
            self._token = config.secret
        return self._token


__all__ = [
    "TokenState",
]
