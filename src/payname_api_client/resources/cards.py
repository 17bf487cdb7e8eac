"""Card and popup services."""

from __future__ import annotations

from collections.abc import Mapping

from ..core.dispatcher import Dispatcher
from ..core.errors import PaynameProtocolError
from .models import Card
from .parser import record_from_payload, records_from_payload, require_hash


class CardService:
    """Saved cards. Cards are created by tokenization and cannot be updated."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def create(self, props: Mapping[str, object] | None = None) -> Card:
        response = self._dispatcher.post("/token", dict(props or {}))
        return record_from_payload(Card, response.data)

    def get(self, card_hash: str) -> Card:
        card_hash = require_hash(card_hash, name="card_hash")
        response = self._dispatcher.get(f"/card/{card_hash}")
        return record_from_payload(Card, response.data)

    def list(self, user_hash: str) -> tuple[Card, ...]:
        user_hash = require_hash(user_hash, name="user_hash")
        response = self._dispatcher.get(f"/user/{user_hash}/card")
        return records_from_payload(Card, response.data, user=user_hash)

    def delete(self, card: Card) -> object | None:
        card_hash = require_hash(card.hash, name="card.hash")
        return self._dispatcher.delete(f"/card/{card_hash}").data


class PopupService:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def create(self, options: Mapping[str, object]) -> str:
        """Create a payment popup and return the URL to open.

        ``amount`` is required; ``callback_ok`` and ``callback_cancel``
        redirect instead of closing the popup.
        """
        data = self._dispatcher.post("/popup", options).data
        url = data.get("url") if isinstance(data, Mapping) else None
        if not isinstance(url, str):
            raise PaynameProtocolError("popup response does not contain a url")
        return url


__all__ = [
    "CardService",
    "PopupService",
]
