from __future__ import annotations

import logging

import pytest

from payname_api_client.core.dispatcher import Dispatcher
from payname_api_client.core.errors import (
    PaynameApiError,
    PaynameConfigurationError,
    PaynameProtocolError,
    PaynameTransportError,
    Severity,
)
from payname_api_client.core.models import Outcome
from payname_api_client.config import PaynameConfig
from tests.shared.payloads import make_error_payload, make_success_payload
from tests.shared.transport import RecordingTransport, build_config


def _dispatcher(*steps, use_oauth: bool = False) -> tuple[Dispatcher, RecordingTransport]:
    transport = RecordingTransport(steps)
    return Dispatcher(build_config(use_oauth=use_oauth), transport), transport


def test_simple_auth_sends_secret_as_authorization():
    dispatcher, transport = _dispatcher(make_success_payload({"hash": "p1"}))

    response = dispatcher.get("/payment/p1")

    sent = transport.last
    assert sent.method == "GET"
    assert sent.url == "https://api.test/v2/payment/p1"
    assert sent.headers["Authorization"] == "sec-XYZ"
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.body is None
    assert dispatcher.token == "sec-XYZ"
    assert response.data == {"hash": "p1"}
    assert response.outcome is Outcome.OK
    assert dispatcher.last_error is None


def test_oauth_sends_stored_token_verbatim():
    dispatcher, transport = _dispatcher(make_success_payload(), use_oauth=True)
    dispatcher.set_token("tok-abc")

    dispatcher.get("/user")

    assert transport.last.headers["Authorization"] == "tok-abc"


def test_oauth_sends_empty_token_when_unset():
    dispatcher, transport = _dispatcher(make_success_payload(), use_oauth=True)

    dispatcher.get("/user")

    assert transport.last.headers["Authorization"] == ""


def test_payload_is_sent_as_json_body():
    dispatcher, transport = _dispatcher(make_success_payload())

    dispatcher.post("/payment", {"amount": 10, "label": "café"})

    assert transport.last.method == "POST"
    assert transport.last.json_body == {"amount": 10, "label": "café"}
    assert "café" in transport.last.body


@pytest.mark.parametrize("method", ["put", "delete"])
def test_verb_helpers_use_matching_method(method):
    dispatcher, transport = _dispatcher(make_success_payload())

    getattr(dispatcher, method)("/payment/p1", {"a": 1})

    assert transport.last.method == method.upper()


def test_missing_credentials_fail_before_sending():
    transport = RecordingTransport([make_success_payload()])
    dispatcher = Dispatcher(PaynameConfig(shop_id="shop1"), transport)

    with pytest.raises(PaynameConfigurationError):
        dispatcher.get("/payment")
    assert transport.calls == 0


def test_missing_credentials_fail_in_oauth_mode_too():
    transport = RecordingTransport([make_success_payload()])
    dispatcher = Dispatcher(PaynameConfig(secret_key="sec", use_oauth=True), transport)
    dispatcher.set_token("tok")

    with pytest.raises(PaynameConfigurationError):
        dispatcher.get("/payment")
    assert transport.calls == 0


def test_failure_envelope_raises_and_records_last_error():
    dispatcher, _ = _dispatcher(make_error_payload(code="E1001", msg="Invalid amount", id=77))

    with pytest.raises(PaynameApiError) as exc_info:
        dispatcher.post("/payment", {"amount": -1})

    err = exc_info.value
    assert str(err) == "E1001 - Invalid amount (request id: 77)"
    assert dispatcher.last_error is err.record
    assert dispatcher.last_error.severity is Severity.ERROR


def test_failure_message_includes_data():
    dispatcher, _ = _dispatcher(make_error_payload(code="E7", msg="Bad", data={"f": "é"}))

    with pytest.raises(PaynameApiError) as exc_info:
        dispatcher.get("/payment")

    assert str(exc_info.value) == 'E7 - Bad (request id: -1) - {"f": "é"}'


def test_warning_success_returns_data_and_keeps_warning():
    dispatcher, _ = _dispatcher(make_success_payload({"hash": "p2"}, code="W200", msg="check", id=8))

    response = dispatcher.get("/payment/p2")

    assert response.data == {"hash": "p2"}
    assert response.outcome is Outcome.OK_WITH_WARNING
    assert response.warning is dispatcher.last_error
    assert dispatcher.last_error.code == "W200"
    assert dispatcher.last_error.severity is Severity.WARNING
    assert dispatcher.last_error.request_id == 8


def test_warning_without_msg_still_returns_data():
    dispatcher, transport = _dispatcher({"success": True, "code": "W42", "data": {"hash": "p9"}})

    response = dispatcher.post("/payment", {"amount": 10})

    assert response.data == {"hash": "p9"}
    assert response.outcome is Outcome.OK_WITH_WARNING
    assert dispatcher.last_error.severity is Severity.WARNING
    assert dispatcher.last_error.code == "W42"
    assert dispatcher.last_error.message == ""
    assert transport.calls == 1


def test_failure_keeps_non_numeric_request_id():
    dispatcher, _ = _dispatcher(make_error_payload(code="E3", msg="Bad", id="req-abc"))

    with pytest.raises(PaynameApiError) as exc_info:
        dispatcher.get("/payment")

    assert exc_info.value.request_id == "req-abc"
    assert str(exc_info.value) == "E3 - Bad (request id: req-abc)"


def test_clean_success_clears_previous_warning():
    dispatcher, _ = _dispatcher(
        make_success_payload(code="W1", msg="careful"),
        make_success_payload({"ok": True}),
    )

    dispatcher.get("/payment")
    assert dispatcher.last_error is not None
    dispatcher.get("/payment")
    assert dispatcher.last_error is None


def test_clean_success_clears_previous_error():
    dispatcher, _ = _dispatcher(make_error_payload(), make_success_payload())

    with pytest.raises(PaynameApiError):
        dispatcher.get("/payment")
    dispatcher.get("/payment")

    assert dispatcher.last_error is None


def test_invalid_json_raises_transport_error_with_raw_body():
    dispatcher, _ = _dispatcher("<html>Bad Gateway</html>")

    with pytest.raises(PaynameTransportError) as exc_info:
        dispatcher.get("/payment")

    assert "did not send valid JSON: <html>Bad Gateway</html>" in str(exc_info.value)
    assert exc_info.value.raw_body == "<html>Bad Gateway</html>"


def test_empty_body_raises_transport_error():
    dispatcher, _ = _dispatcher("")

    with pytest.raises(PaynameTransportError):
        dispatcher.get("/payment")


def test_invalid_json_leaves_last_error_untouched():
    dispatcher, _ = _dispatcher(make_success_payload(code="W3", msg="w"), "not json")

    dispatcher.get("/payment")
    with pytest.raises(PaynameTransportError):
        dispatcher.get("/payment")

    assert dispatcher.last_error is not None
    assert dispatcher.last_error.code == "W3"


def test_failure_without_msg_is_protocol_error():
    dispatcher, _ = _dispatcher({"success": False, "code": "E1"})

    with pytest.raises(PaynameProtocolError):
        dispatcher.get("/payment")


def test_transport_failure_propagates():
    dispatcher, _ = _dispatcher(PaynameTransportError("GET https://api.test/v2/x ERROR: down"))

    with pytest.raises(PaynameTransportError, match="ERROR: down"):
        dispatcher.get("/x")


def test_unknown_http_method_is_rejected():
    dispatcher, transport = _dispatcher(make_success_payload())

    with pytest.raises(ValueError):
        dispatcher.request("PATCH", "/payment")
    assert transport.calls == 0


def test_dispatchers_do_not_share_state():
    first, _ = _dispatcher(make_error_payload(), use_oauth=True)
    second, _ = _dispatcher(make_success_payload(), use_oauth=True)
    first.set_token("tok-first")

    with pytest.raises(PaynameApiError):
        first.get("/payment")
    second.get("/payment")

    assert second.token == ""
    assert second.last_error is None
    assert first.last_error is not None


def test_outcomes_are_logged(caplog: pytest.LogCaptureFixture):
    dispatcher, _ = _dispatcher(
        make_success_payload(),
        make_success_payload(code="W1", msg="w"),
        make_error_payload(code="E2"),
    )

    with caplog.at_level(logging.DEBUG, logger="payname_api_client"):
        dispatcher.get("/a")
        dispatcher.get("/b")
        with pytest.raises(PaynameApiError):
            dispatcher.get("/c")

    levels = [record.levelno for record in caplog.records if record.name == "payname_api_client"]
    assert logging.INFO in levels
    assert logging.WARNING in levels
    assert logging.ERROR in levels
    assert all("sec-XYZ" not in record.getMessage() for record in caplog.records)
