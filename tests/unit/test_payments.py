from __future__ import annotations

import pytest

from payname_api_client.client import PaynameClient
from payname_api_client.core.errors import PaynameApiError, PaynameValidationError
from payname_api_client.resources.models import Credit, Debit, Payment
from tests.shared.payloads import make_error_payload, make_payment_data, make_success_payload
from tests.shared.transport import RecordingTransport, build_config

BASE = "https://api.test/v2"


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(transport: RecordingTransport):
    with PaynameClient(config=build_config(), transport=transport) as client:
        yield client


def test_simulate_posts_credit_amount(client: PaynameClient, transport: RecordingTransport):
    transport.queue(make_success_payload({"debit": 130, "credit": 100}))

    result = client.payments.simulate(100, commission=0.1, postal_code="75001")

    assert result == {"debit": 130, "credit": 100}
    assert transport.last.url == f"{BASE}/payment/simulate"
    assert transport.last.json_body == {
        "credit": 100,
        "commission": 0.1,
        "comm_fixed": None,
        "nb_hours": None,
        "postal_code": "75001",
        "birthdate": None,
    }


def test_simulate_reverse_posts_debit_amount(client: PaynameClient, transport: RecordingTransport):
    transport.queue(make_success_payload({"debit": 100, "credit": 80}))

    client.payments.simulate_reverse(100, nb_hours=3)

    body = transport.last.json_body
    assert body["debit"] == 100
    assert "credit" not in body
    assert body["nb_hours"] == 3


def test_create_payment_parses_record(client: PaynameClient, transport: RecordingTransport):
    transport.queue(make_success_payload(make_payment_data()))

    payment = client.payments.create({"amount": 120.5, "order_id": "order-42"})

    assert isinstance(payment, Payment)
    assert payment.hash == "pay_1"
    assert payment.debits[0].payment == "pay_1"
    assert transport.last.method == "POST"
    assert transport.last.url == f"{BASE}/payment"
    assert transport.last.json_body == {"amount": 120.5, "order_id": "order-42"}
    assert "datas" not in transport.last.json_body


def test_create_payment_failure_raises(client: PaynameClient, transport: RecordingTransport):
    transport.queue(make_error_payload(code="E1001", msg="Invalid amount", id=77))

    with pytest.raises(PaynameApiError, match="E1001 - Invalid amount"):
        client.payments.create({"amount": -1})
    assert client.last_error.code == "E1001"


def test_get_and_list_payments(client: PaynameClient, transport: RecordingTransport):
    transport.queue(
        make_success_payload(make_payment_data("pay_9")),
        make_success_payload([make_payment_data("pay_1"), make_payment_data("pay_2")]),
    )

    payment = client.payments.get("pay_9")
    payments = client.payments.list()

    assert payment.hash == "pay_9"
    assert transport.sent[0].url == f"{BASE}/payment/pay_9"
    assert [item.hash for item in payments] == ["pay_1", "pay_2"]
    assert transport.sent[1].url == f"{BASE}/payment"


def test_get_payment_requires_hash(client: PaynameClient, transport: RecordingTransport):
    with pytest.raises(PaynameValidationError):
        client.payments.get("")
    assert transport.calls == 0


def test_update_payment_sends_fields_and_merges(client: PaynameClient, transport: RecordingTransport):
    transport.queue(make_success_payload({"status": "C_CONFIRMED", "unknown": 1}))
    payment = Payment(hash="pay_1", order="o1", status="W_DEBIT", presentation_date="2026-03-01")

    updated = client.payments.update(payment)

    assert transport.last.method == "PUT"
    assert transport.last.url == f"{BASE}/payment/pay_1"
    assert transport.last.json_body["presentationDate"] == "2026-03-01"
    assert updated.status == "C_CONFIRMED"
    assert updated.order == "o1"
    assert payment.status == "W_DEBIT"


@pytest.mark.parametrize("action", ["exec_debits", "balance", "exec_credits"])
def test_lifecycle_actions(client: PaynameClient, transport: RecordingTransport, action: str):
    transport.queue(make_success_payload({"status": "F_DONE"}))

    result = getattr(client.payments, action)(Payment(hash="pay_1"))

    assert transport.last.method == "PUT"
    assert transport.last.url == f"{BASE}/payment/pay_1/{action}"
    assert transport.last.body is None
    assert result.status == "F_DONE"


def test_confirm_with_credits_uses_payment_endpoint(
    client: PaynameClient,
    transport: RecordingTransport,
):
    transport.queue(
        make_success_payload([{"hash": "cre_1"}]),
        make_success_payload({"status": "C_CONFIRMED"}),
    )

    confirmed = client.payments.confirm(Payment(hash="pay_1", order="o1"))

    assert transport.sent[0].url == f"{BASE}/payment/pay_1/credit"
    assert transport.sent[1].method == "PUT"
    assert transport.sent[1].url == f"{BASE}/payment/pay_1/confirm"
    assert confirmed.status == "C_CONFIRMED"


def test_confirm_without_credits_uses_order_action(
    client: PaynameClient,
    transport: RecordingTransport,
):
    transport.queue(make_success_payload([]), make_success_payload(True))

    confirmed = client.payments.confirm(Payment(hash="pay_1", order="o1"))

    assert transport.sent[1].url == f"{BASE}/payment"
    assert transport.sent[1].json_body == {"action": "confirm", "datas": {"order_id": "o1"}}
    assert confirmed == Payment(hash="pay_1", order="o1")


def test_finalize_3ds(client: PaynameClient, transport: RecordingTransport):
    transport.queue(make_success_payload({"status": "W_DEBIT"}))

    result = client.payments.finalize_3ds("pares-value", "md-value")

    assert result == {"status": "W_DEBIT"}
    assert transport.last.url == f"{BASE}/payment/finalize3ds"
    assert transport.last.json_body == {"PaRes": "pares-value", "MD": "md-value"}


def test_delete_payment(client: PaynameClient, transport: RecordingTransport):
    transport.queue(make_success_payload({"status": "D_ADMIN"}))

    deleted = client.payments.delete(Payment(hash="pay_1"))

    assert transport.last.method == "DELETE"
    assert deleted.status == "D_ADMIN"


def test_payment_debit_and_credit_accessors(client: PaynameClient, transport: RecordingTransport):
    transport.queue(
        make_success_payload([{"hash": "deb_1"}]),
        make_success_payload({"hash": "deb_1", "status": "F_PAID"}),
        make_success_payload({"hash": "cre_1"}),
    )
    payment = Payment(hash="pay_1")

    debits = client.payments.debits(payment)
    debit = client.payments.debit(payment, "deb_1")
    credit = client.payments.credit(payment, "cre_1")

    assert debits == (Debit(hash="deb_1", payment="pay_1"),)
    assert debit.status == "F_PAID"
    assert transport.sent[1].url == f"{BASE}/payment/pay_1/debit/deb_1"
    assert credit == Credit(hash="cre_1", payment="pay_1")
    assert transport.sent[2].url == f"{BASE}/payment/pay_1/credit/cre_1"


def test_create_debit_requires_payment(client: PaynameClient, transport: RecordingTransport):
    with pytest.raises(PaynameValidationError):
        client.debits.create({"amount": 10})
    assert transport.calls == 0


def test_create_debit_and_credit(client: PaynameClient, transport: RecordingTransport):
    transport.queue(
        make_success_payload({"hash": "deb_2", "amount": 10}),
        make_success_payload({"hash": "cre_2", "amount": 8}),
    )

    debit = client.debits.create({"payment": "pay_1", "amount": 10})
    credit = client.credits.create({"payment": "pay_1", "amount": 8, "user": "usr_1"})

    assert debit == Debit(hash="deb_2", payment="pay_1", amount=10)
    assert transport.sent[0].url == f"{BASE}/payment/pay_1/debit"
    assert credit == Credit(hash="cre_2", payment="pay_1", amount=8)
    assert transport.sent[1].json_body == {"payment": "pay_1", "amount": 8, "user": "usr_1"}


def test_update_and_delete_debit(client: PaynameClient, transport: RecordingTransport):
    transport.queue(
        make_success_payload({"due_at": "2026-05-01"}),
        make_success_payload({"status": "D_ADMIN"}),
    )
    debit = Debit(hash="deb_1", payment="pay_1", amount=10)

    updated = client.debits.update(debit)
    deleted = client.debits.delete(updated)

    assert transport.sent[0].method == "PUT"
    assert transport.sent[0].url == f"{BASE}/payment/pay_1/debit/deb_1"
    assert transport.sent[0].json_body["amount"] == 10
    assert updated.due_at == "2026-05-01"
    assert transport.sent[1].method == "DELETE"
    assert deleted.status == "D_ADMIN"


def test_update_debit_without_payment_is_rejected(client: PaynameClient, transport: RecordingTransport):
    with pytest.raises(PaynameValidationError):
        client.debits.update(Debit(hash="deb_1"))
    assert transport.calls == 0


def test_update_and_delete_credit(client: PaynameClient, transport: RecordingTransport):
    transport.queue(make_success_payload({"amount": 9}), make_success_payload(None))
    credit = Credit(hash="cre_1", payment="pay_1", amount=8)

    updated = client.credits.update(credit)
    deleted = client.credits.delete(updated)

    assert updated.amount == 9
    assert transport.sent[1].url == f"{BASE}/payment/pay_1/credit/cre_1"
    assert deleted == updated
