"""User, IBAN and document services."""

from __future__ import annotations

from collections.abc import Mapping

from ..core.dispatcher import Dispatcher
from .cards import CardService
from .models import Card, Doc, Iban, User
from .parser import (
    merge_record,
    parse_user,
    parse_users,
    record_from_payload,
    record_to_payload,
    records_from_payload,
    require_hash,
)


class IbanService:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def create(self, options: Mapping[str, object]) -> Iban:
        user_hash = require_hash(_text(options.get("user")), name="user")
        response = self._dispatcher.post(f"/user/{user_hash}/iban", options)
        return record_from_payload(Iban, response.data, user=user_hash)

    def get(self, user_hash: str, iban_hash: str) -> Iban:
        user_hash = require_hash(user_hash, name="user_hash")
        iban_hash = require_hash(iban_hash, name="iban_hash")
        response = self._dispatcher.get(f"/user/{user_hash}/iban/{iban_hash}")
        return record_from_payload(Iban, response.data, user=user_hash)

    def list(self, user_hash: str) -> tuple[Iban, ...]:
        user_hash = require_hash(user_hash, name="user_hash")
        response = self._dispatcher.get(f"/user/{user_hash}/iban")
        return records_from_payload(Iban, response.data, user=user_hash)

    def update(self, iban: Iban) -> Iban:
        response = self._dispatcher.put(_iban_path(iban), record_to_payload(iban))
        return merge_record(iban, response.data)

    def delete(self, iban: Iban) -> object | None:
        return self._dispatcher.delete(_iban_path(iban)).data


class DocService:
    """Identity documents attached to a user (KYC)."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def create(self, options: Mapping[str, object]) -> Doc:
        user_hash = require_hash(_text(options.get("user")), name="user")
        response = self._dispatcher.post(f"/user/{user_hash}/doc", options)
        return record_from_payload(Doc, response.data, user=user_hash)

    def get(self, user_hash: str, doc_hash: str) -> Doc:
        user_hash = require_hash(user_hash, name="user_hash")
        doc_hash = require_hash(doc_hash, name="doc_hash")
        response = self._dispatcher.get(f"/user/{user_hash}/doc/{doc_hash}")
        return record_from_payload(Doc, response.data, user=user_hash)

    def list(self, user_hash: str) -> tuple[Doc, ...]:
        user_hash = require_hash(user_hash, name="user_hash")
        response = self._dispatcher.get(f"/user/{user_hash}/doc")
        return records_from_payload(Doc, response.data, user=user_hash)

    def delete(self, doc: Doc) -> object | None:
        user_hash = require_hash(doc.user, name="doc.user")
        doc_hash = require_hash(doc.hash, name="doc.hash")
        return self._dispatcher.delete(f"/user/{user_hash}/doc/{doc_hash}").data


class UserService:
    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        ibans: IbanService | None = None,
        docs: DocService | None = None,
        cards: CardService | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._ibans = ibans or IbanService(dispatcher)
        self._docs = docs or DocService(dispatcher)
        self._cards = cards or CardService(dispatcher)

    def create(self, options: Mapping[str, object] | None = None) -> User:
        response = self._dispatcher.post("/user", dict(options or {}))
        return parse_user(response.data)

    def get(self, user_hash: str) -> User:
        user_hash = require_hash(user_hash, name="user_hash")
        response = self._dispatcher.get(f"/user/{user_hash}")
        return parse_user(response.data)

    def list(self) -> tuple[User, ...]:
        response = self._dispatcher.get("/user")
        return parse_users(response.data)

    def update(self, user: User) -> User:
        response = self._dispatcher.put(_user_path(user), record_to_payload(user))
        return merge_record(user, response.data)

    def delete(self, user: User) -> object | None:
        return self._dispatcher.delete(_user_path(user)).data

    def cards(self, user: User) -> tuple[Card, ...]:
        return self._cards.list(user.hash)

    def docs(self, user: User) -> tuple[Doc, ...]:
        return self._docs.list(user.hash)

    def doc(self, user: User, doc_hash: str) -> Doc:
        return self._docs.get(user.hash, doc_hash)

    def ibans(self, user: User) -> tuple[Iban, ...]:
        return self._ibans.list(user.hash)

    def iban(self, user: User, iban_hash: str) -> Iban:
        return self._ibans.get(user.hash, iban_hash)


def _text(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _user_path(user: User) -> str:
    return f"/user/{require_hash(user.hash, name='user.hash')}"


def _iban_path(iban: Iban) -> str:
    user_hash = require_hash(iban.user, name="iban.user")
    iban_hash = require_hash(iban.hash, name="iban.hash")
    return f"/user/{user_hash}/iban/{iban_hash}"


__all__ = [
    "UserService",
    "IbanService",
    "DocService",
]
