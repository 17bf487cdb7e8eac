"""Public client entrypoint."""

from __future__ import annotations

from collections.abc import Mapping
from types import TracebackType

from .auth import AuthService
from .client_shared import ensure_client_open, resolve_client_config
from .config import PaynameConfig
from .core.dispatch_shared import HttpMethod
from .core.dispatcher import Dispatcher, TransportLike
from .core.errors import ApiErrorRecord
from .core.models import ApiResponse
from .core.token import TokenState
from .core.transport import SyncTransport
from .resources.cards import CardService, PopupService
from .resources.payments import CreditService, DebitService, PaymentService
from .resources.users import DocService, IbanService, UserService


class _GuardedDispatcher(Dispatcher):
    """Dispatcher that refuses to send once its owner is closed."""

    def __init__(
        self,
        owner: "PaynameClient",
        config: PaynameConfig,
        transport: TransportLike,
        *,
        token_state: TokenState | None = None,
    ) -> None:
        super().__init__(config, transport, token_state=token_state)
        self._owner = owner

    def request(
        self,
        method: HttpMethod | str,
        path: str,
        payload: Mapping[str, object] | None = None,
    ) -> ApiResponse:
        self._owner._ensure_open()
        return super().request(method, path, payload)


class PaynameClient:
    """Public Payname API client.

    Owns one configuration, one bearer token and one last-error slot.
    Instances are independent of each other.
    """

    def __init__(
        self,
        *,
        config: PaynameConfig | None = None,
        transport: TransportLike | None = None,
        token_state: TokenState | None = None,
    ) -> None:
        self._config = resolve_client_config(config)

        self._transport = transport or SyncTransport(self._config)
        self._dispatcher = _GuardedDispatcher(
            self,
            self._config,
            self._transport,
            token_state=token_state,
        )
        self._closed = False

        self.auth = AuthService(self._dispatcher)
        self.debits = DebitService(self._dispatcher)
        self.credits = CreditService(self._dispatcher)
        self.payments = PaymentService(
            self._dispatcher,
            debits=self.debits,
            credits=self.credits,
        )
        self.cards = CardService(self._dispatcher)
        self.ibans = IbanService(self._dispatcher)
        self.docs = DocService(self._dispatcher)
        self.users = UserService(
            self._dispatcher,
            ibans=self.ibans,
            docs=self.docs,
            cards=self.cards,
        )
        self.popups = PopupService(self._dispatcher)

    @property
    def config(self) -> PaynameConfig:
        return self._config

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def token(self) -> str:
        return self._dispatcher.token

    def set_token(self, token: str) -> str:
        return self._dispatcher.set_token(token)

    @property
    def last_error(self) -> ApiErrorRecord | None:
        return self._dispatcher.last_error

    def get(self, path: str) -> ApiResponse:
        return self._dispatcher.get(path)

    def post(self, path: str, payload: Mapping[str, object] | None = None) -> ApiResponse:
        return self._dispatcher.post(path, payload)

    def put(self, path: str, payload: Mapping[str, object] | None = None) -> ApiResponse:
        return self._dispatcher.put(path, payload)

    def delete(self, path: str, payload: Mapping[str, object] | None = None) -> ApiResponse:
        return self._dispatcher.delete(path, payload)

    def _ensure_open(self) -> None:
        ensure_client_open(self._closed, "PaynameClient")

    def close(self) -> None:
        if self._closed:
            return
        self._transport.close()
        self._closed = True

    def __enter__(self) -> "PaynameClient":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


__all__ = [
    "PaynameClient",
]
