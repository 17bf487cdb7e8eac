"""Error types and envelope classification."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

NO_CODE = "n.a."
NO_REQUEST_ID = -1
WARNING_PREFIX = "W"


class Severity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"


def extract_code(payload: Mapping[str, object]) -> str:
    """Return the outcome code, preferring ``code`` over the legacy ``error`` key."""

    if "code" in payload:
        return _as_text(payload["code"])
    if "error" in payload:
        return _as_text(payload["error"])
    return NO_CODE


def _as_text(value: object) -> str:
    return "" if value is None else str(value)


def _to_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
    return None


def extract_request_id(payload: Mapping[str, object]) -> int | str:
    """Return the request id, preferring ``id`` over the legacy ``logs.log`` key.

    Numeric ids come back as ``int``; any other value is kept as text so the
    support reference is not lost. Only an absent or null id maps to ``-1``.
    """

    if "id" in payload:
        raw = payload["id"]
    else:
        logs = payload.get("logs")
        if not (isinstance(logs, Mapping) and "log" in logs):
            return NO_REQUEST_ID
        raw = logs["log"]
    if raw is None:
        return NO_REQUEST_ID
    request_id = _to_int(raw)
    return str(raw) if request_id is None else request_id


def severity_of(code: str) -> Severity:
    # First character only; there is no canonical list of warning codes.
    if code[:1] == WARNING_PREFIX:
        return Severity.WARNING
    return Severity.ERROR


def has_warning_code(payload: Mapping[str, object]) -> bool:
    if "code" not in payload and "error" not in payload:
        return False
    return severity_of(extract_code(payload)) is Severity.WARNING


class PaynameError(Exception):
    """Base exception for this package."""


class PaynameConfigurationError(PaynameError):
    """Credentials missing at time of use."""


class PaynameValidationError(PaynameError):
    """Invalid configuration value or resource call input."""


class PaynameClientClosedError(PaynameError):
    """Raised when client is used after close."""


class PaynameTransportError(PaynameError):
    """Network failure or unreadable response body."""

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        url: str | None = None,
        raw_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.raw_body = raw_body


class PaynameProtocolError(PaynameTransportError):
    """Response JSON does not have the envelope shape."""


@dataclass(slots=True, frozen=True)
class ApiErrorRecord:
    """Error or warning reported by the API in a response envelope.

    Build instances with :meth:`from_envelope`; the record mirrors exactly
    what the envelope carried.
    """

    code: str
    severity: Severity
    message: str
    details: object | None
    request_id: int | str
    data: object | None

    @classmethod
    def from_envelope(cls, payload: Mapping[str, object]) -> "ApiErrorRecord":
        """Build a record; ``msg`` is required only when ``success`` is false."""

        if "msg" not in payload and not payload.get("success"):
            raise PaynameProtocolError("error envelope is missing msg")
        code = extract_code(payload)
        return cls(
            code=code,
            severity=severity_of(code),
            message=_as_text(payload.get("msg")),
            details=payload.get("details"),
            request_id=extract_request_id(payload),
            data=payload.get("data"),
        )

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def format_for_exception(self) -> str:
        text = f"{self.code} - {self.message} (request id: {self.request_id})"
        if self.data:
            text += " - " + json.dumps(self.data, ensure_ascii=False)
        return text


class PaynameApiError(PaynameError):
    """Envelope reported ``success: false``."""

    def __init__(self, record: ApiErrorRecord) -> None:
        super().__init__(record.format_for_exception())
        self.record = record

    @property
    def code(self) -> str:
        return self.record.code

    @property
    def request_id(self) -> int | str:
        return self.record.request_id


__all__ = [
    "NO_CODE",
    "NO_REQUEST_ID",
    "Severity",
    "ApiErrorRecord",
    "PaynameError",
    "PaynameConfigurationError",
    "PaynameValidationError",
    "PaynameClientClosedError",
    "PaynameTransportError",
    "PaynameProtocolError",
    "PaynameApiError",
    "extract_code",
    "extract_request_id",
    "severity_of",
    "has_warning_code",
]
