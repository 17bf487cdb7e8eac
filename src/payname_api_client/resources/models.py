"""Payment-domain records returned by resource services."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass

WAITING_METHOD_STATUS = "W_METHOD"


@dataclass(slots=True, frozen=True)
class Debit:
    hash: str = ""
    payment: str = ""
    user: str = ""
    method: str = ""
    token: str = ""
    status: str = ""
    due_at: str | None = None
    paid_at: str | None = None
    amount: float | None = None
    method_data: str | None = None

    @property
    def is_waiting_3ds(self) -> bool:
        return self.status == WAITING_METHOD_STATUS and self.method_data is not None

    def three_ds_info(self) -> dict[str, object]:
        """Fields to post when redirecting the payer to the 3-D Secure form."""
        if self.method_data is None:
            return {}
        info = json.loads(self.method_data)
        return dict(info) if isinstance(info, Mapping) else {}


@dataclass(slots=True, frozen=True)
class Credit:
    hash: str = ""
    payment: str = ""
    user: str = ""
    method: str = ""
    status: str = ""
    due_at: str | None = None
    paid_at: str | None = None
    amount: float | None = None


@dataclass(slots=True, frozen=True)
class Payment:
    """Payment with its nested debits and credits.

    ``status`` follows the platform lifecycle: ``W_*`` debit phase,
    ``C_*`` confirmation phase, ``F_*`` credit phase, ``D_ADMIN`` deleted.
    """

    hash: str = ""
    order: str = ""
    status: str = ""
    confirmation: str = ""
    commission: float = 0
    comm_fixed: float = 0
    external_data: str = ""
    option_urssaf: bool = False
    urssaf_nb_hours: float = 0
    amount: float = 0
    urssaf: float = 0
    payname: float = 0
    tax: float = 0
    presentation_date: str = ""
    test_3ds: object | None = None
    debits: tuple[Debit, ...] = ()
    credits: tuple[Credit, ...] = ()

    @property
    def is_waiting_3ds(self) -> bool:
        return any(debit.is_waiting_3ds for debit in self.debits)


@dataclass(slots=True, frozen=True)
class Iban:
    hash: str | None = None
    user: str | None = None
    iban: str | None = None
    master: bool | None = None
    is_prod: bool | None = None
    title: str | None = None
    status: str | None = None


@dataclass(slots=True, frozen=True)
class Doc:
    hash: str = ""
    type: str | None = None
    file: str | None = None
    user: str | None = None
    status: str | None = None


@dataclass(slots=True, frozen=True)
class User:
    hash: str = ""
    email: str | None = None
    phone: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    birthdate: str | None = None
    secu: str | None = None
    status: str | None = None
    ibans: tuple[Iban, ...] = ()


@dataclass(slots=True, frozen=True)
class Card:
    hash: str | None = None
    number: str | None = None
    email: str | None = None
    is_prod: bool | None = None
    type: str | None = None
    user: str | None = None
    expiry_year: int | str | None = None
    expiry_month: int | str | None = None


__all__ = [
    "Debit",
    "Credit",
    "Payment",
    "Iban",
    "Doc",
    "User",
    "Card",
]
