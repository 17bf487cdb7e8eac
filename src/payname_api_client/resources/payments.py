"""Payment, debit and credit services."""

from __future__ import annotations

from collections.abc import Mapping

from ..core.dispatcher import Dispatcher
from .models import Credit, Debit, Payment
from .parser import (
    merge_record,
    parse_payment,
    parse_payments,
    record_from_payload,
    record_to_payload,
    records_from_payload,
    require_hash,
)


def _simulation_payload(
    *,
    amount_key: str,
    amount: float,
    comm_fixed: float | None,
    commission: float | None,
    nb_hours: float | None,
    postal_code: str | None,
    birthdate: str | None,
) -> dict[str, object]:
    return {
        amount_key: amount,
        "commission": commission,
        "comm_fixed": comm_fixed,
        "nb_hours": nb_hours,
        "postal_code": postal_code,
        "birthdate": birthdate,
    }


class DebitService:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def create(self, options: Mapping[str, object]) -> Debit:
        payment_hash = require_hash(_text(options.get("payment")), name="payment")
        response = self._dispatcher.post(f"/payment/{payment_hash}/debit", options)
        return record_from_payload(Debit, response.data, payment=payment_hash)

    def get(self, payment_hash: str, debit_hash: str) -> Debit:
        payment_hash = require_hash(payment_hash, name="payment_hash")
        debit_hash = require_hash(debit_hash, name="debit_hash")
        response = self._dispatcher.get(f"/payment/{payment_hash}/debit/{debit_hash}")
        return record_from_payload(Debit, response.data, payment=payment_hash)

    def list(self, payment_hash: str) -> tuple[Debit, ...]:
        payment_hash = require_hash(payment_hash, name="payment_hash")
        response = self._dispatcher.get(f"/payment/{payment_hash}/debit")
        return records_from_payload(Debit, response.data, payment=payment_hash)

    def update(self, debit: Debit) -> Debit:
        response = self._dispatcher.put(_debit_path(debit), record_to_payload(debit))
        return merge_record(debit, response.data)

    def delete(self, debit: Debit) -> Debit:
        response = self._dispatcher.delete(_debit_path(debit))
        return merge_record(debit, response.data)


class CreditService:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def create(self, options: Mapping[str, object]) -> Credit:
        payment_hash = require_hash(_text(options.get("payment")), name="payment")
        response = self._dispatcher.post(f"/payment/{payment_hash}/credit", options)
        return record_from_payload(Credit, response.data, payment=payment_hash)

    def get(self, payment_hash: str, credit_hash: str) -> Credit:
        payment_hash = require_hash(payment_hash, name="payment_hash")
        credit_hash = require_hash(credit_hash, name="credit_hash")
        response = self._dispatcher.get(f"/payment/{payment_hash}/credit/{credit_hash}")
        return record_from_payload(Credit, response.data, payment=payment_hash)

    def list(self, payment_hash: str) -> tuple[Credit, ...]:
        payment_hash = require_hash(payment_hash, name="payment_hash")
        response = self._dispatcher.get(f"/payment/{payment_hash}/credit")
        return records_from_payload(Credit, response.data, payment=payment_hash)

    def update(self, credit: Credit) -> Credit:
        response = self._dispatcher.put(_credit_path(credit), record_to_payload(credit))
        return merge_record(credit, response.data)

    def delete(self, credit: Credit) -> Credit:
        response = self._dispatcher.delete(_credit_path(credit))
        return merge_record(credit, response.data)


class PaymentService:
    """Payment lifecycle: simulate, create, debit, confirm, credit."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        debits: DebitService | None = None,
        credits: CreditService | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._debits = debits or DebitService(dispatcher)
        self._credits = credits or CreditService(dispatcher)

    def simulate(
        self,
        credit: float,
        *,
        comm_fixed: float | None = None,
        commission: float | None = None,
        nb_hours: float | None = None,
        postal_code: str | None = None,
        birthdate: str | None = None,
    ) -> object | None:
        """Simulate amounts from the amount the payee should receive.

        ``nb_hours``, ``postal_code`` and ``birthdate`` only apply to URSSAF
        payments. Commission settings default to the marketplace values.
        """
        payload = _simulation_payload(
            amount_key="credit",
            amount=credit,
            comm_fixed=comm_fixed,
            commission=commission,
            nb_hours=nb_hours,
            postal_code=postal_code,
            birthdate=birthdate,
        )
        return self._dispatcher.post("/payment/simulate", payload).data

    def simulate_reverse(
        self,
        debit: float,
        *,
        comm_fixed: float | None = None,
        commission: float | None = None,
        nb_hours: float | None = None,
        postal_code: str | None = None,
        birthdate: str | None = None,
    ) -> object | None:
        """Simulate amounts from the amount the payer should be charged."""
        payload = _simulation_payload(
            amount_key="debit",
            amount=debit,
            comm_fixed=comm_fixed,
            commission=commission,
            nb_hours=nb_hours,
            postal_code=postal_code,
            birthdate=birthdate,
        )
        return self._dispatcher.post("/payment/simulate", payload).data

    def create(self, options: Mapping[str, object]) -> Payment:
        """Create a payment from flat options; the legacy ``datas`` wrapper is not supported."""
        response = self._dispatcher.post("/payment", options)
        return parse_payment(response.data)

    def get(self, payment_hash: str) -> Payment:
        payment_hash = require_hash(payment_hash, name="payment_hash")
        response = self._dispatcher.get(f"/payment/{payment_hash}")
        return parse_payment(response.data)

    def list(self) -> tuple[Payment, ...]:
        response = self._dispatcher.get("/payment")
        return parse_payments(response.data)

    def update(self, payment: Payment) -> Payment:
        response = self._dispatcher.put(_payment_path(payment), record_to_payload(payment))
        return merge_record(payment, response.data)

    def exec_debits(self, payment: Payment) -> Payment:
        return self._run_action(payment, "exec_debits")

    def balance(self, payment: Payment) -> Payment:
        return self._run_action(payment, "balance")

    def exec_credits(self, payment: Payment) -> Payment:
        return self._run_action(payment, "exec_credits")

    def confirm(self, payment: Payment) -> Payment:
        # Payments without credits predate the per-payment confirm endpoint.
        if self.credits(payment):
            response = self._dispatcher.put(f"{_payment_path(payment)}/confirm")
        else:
            response = self._dispatcher.put(
                "/payment",
                {"action": "confirm", "datas": {"order_id": payment.order}},
            )
        return merge_record(payment, response.data)

    def finalize_3ds(self, pares: str, md: str) -> object | None:
        """Complete 3-D Secure for a direct payment.

        ``pares`` and ``md`` are the fields the bank posts back to the 3DS
        callback URL configured for the shop.
        """
        response = self._dispatcher.post("/payment/finalize3ds", {"PaRes": pares, "MD": md})
        return response.data

    def delete(self, payment: Payment) -> Payment:
        response = self._dispatcher.delete(_payment_path(payment))
        return merge_record(payment, response.data)

    def debits(self, payment: Payment) -> tuple[Debit, ...]:
        return self._debits.list(payment.hash)

    def debit(self, payment: Payment, debit_hash: str) -> Debit:
        return self._debits.get(payment.hash, debit_hash)

    def credits(self, payment: Payment) -> tuple[Credit, ...]:
        return self._credits.list(payment.hash)

    def credit(self, payment: Payment, credit_hash: str) -> Credit:
        return self._credits.get(payment.hash, credit_hash)

    def _run_action(self, payment: Payment, action: str) -> Payment:
        response = self._dispatcher.put(f"{_payment_path(payment)}/{action}")
        return merge_record(payment, response.data)


def _text(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _payment_path(payment: Payment) -> str:
    return f"/payment/{require_hash(payment.hash, name='payment.hash')}"


def _debit_path(debit: Debit) -> str:
    payment_hash = require_hash(debit.payment, name="debit.payment")
    debit_hash = require_hash(debit.hash, name="debit.hash")
    return f"/payment/{payment_hash}/debit/{debit_hash}"


def _credit_path(credit: Credit) -> str:
    payment_hash = require_hash(credit.payment, name="credit.payment")
    credit_hash = require_hash(credit.hash, name="credit.hash")
    return f"/payment/{payment_hash}/credit/{credit_hash}"


__all__ = [
    "PaymentService",
    "DebitService",
    "CreditService",
]
