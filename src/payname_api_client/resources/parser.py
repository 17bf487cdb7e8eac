"""Parsers from API ``data`` payloads into typed records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, replace
from typing import TypeVar

from ..core.errors import PaynameProtocolError, PaynameValidationError
from .models import Credit, Debit, Iban, Payment, User

RecordT = TypeVar("RecordT")

# Wire keys that are not valid snake_case field names.
_WIRE_ALIASES: dict[str, str] = {
    "presentationDate": "presentation_date",
    "test_3DS": "test_3ds",
}
_FIELD_TO_WIRE: dict[str, str] = {field_name: wire for wire, field_name in _WIRE_ALIASES.items()}
_NESTED_FIELDS = frozenset({"debits", "credits", "ibans"})


def _as_object(payload: object, *, kind: str) -> Mapping[str, object]:
    if not isinstance(payload, Mapping):
        raise PaynameProtocolError(f"{kind} payload must be an object")
    return payload


def _as_list(payload: object, *, kind: str) -> list[object]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise PaynameProtocolError(f"{kind} list payload must be an array")
    return payload


def _known_fields(record_type: type) -> frozenset[str]:
    return frozenset(item.name for item in fields(record_type)) - _NESTED_FIELDS


def _known_values(record_type: type, payload: Mapping[str, object]) -> dict[str, object]:
    known = _known_fields(record_type)
    values: dict[str, object] = {}
    for key, value in payload.items():
        name = _WIRE_ALIASES.get(key, key)
        if name in known:
            values[name] = value
    return values


def record_from_payload(
    record_type: type[RecordT],
    payload: object,
    **overrides: object,
) -> RecordT:
    """Build a record from known keys; unknown keys are ignored."""

    values = _known_values(record_type, _as_object(payload, kind=record_type.__name__))
    values.update(overrides)
    return record_type(**values)


def records_from_payload(
    record_type: type[RecordT],
    payload: object,
    **overrides: object,
) -> tuple[RecordT, ...]:
    return tuple(
        record_from_payload(record_type, item, **overrides)
        for item in _as_list(payload, kind=record_type.__name__)
    )


def merge_record(record: RecordT, payload: object) -> RecordT:
    """Overwrite record fields with the known keys of ``payload``.

    Non-object payloads leave the record unchanged.
    """

    if not isinstance(payload, Mapping):
        return record
    return replace(record, **_known_values(type(record), payload))


def record_to_payload(record: object) -> dict[str, object]:
    return {
        _FIELD_TO_WIRE.get(item.name, item.name): getattr(record, item.name)
        for item in fields(record)
        if item.name not in _NESTED_FIELDS
    }


def parse_payment(payload: object) -> Payment:
    data = _as_object(payload, kind="Payment")
    return record_from_payload(
        Payment,
        data,
        debits=records_from_payload(Debit, data.get("debit")),
        credits=records_from_payload(Credit, data.get("credit")),
    )


def parse_payments(payload: object) -> tuple[Payment, ...]:
    return tuple(parse_payment(item) for item in _as_list(payload, kind="Payment"))


def parse_user(payload: object) -> User:
    data = _as_object(payload, kind="User")
    return record_from_payload(
        User,
        data,
        ibans=records_from_payload(Iban, data.get("iban")),
    )


def parse_users(payload: object) -> tuple[User, ...]:
    return tuple(parse_user(item) for item in _as_list(payload, kind="User"))


def require_hash(value: str | None, *, name: str) -> str:
    if not value:
        raise PaynameValidationError(f"{name} must not be empty")
    return value


__all__ = [
    "record_from_payload",
    "records_from_payload",
    "merge_record",
    "record_to_payload",
    "parse_payment",
    "parse_payments",
    "parse_user",
    "parse_users",
    "require_hash",
]
