"""Shared response parsing helpers for sync/async dispatchers."""

from __future__ import annotations

import json
from collections.abc import Mapping

from .errors import (
    ApiErrorRecord,
    PaynameProtocolError,
    PaynameTransportError,
    has_warning_code,
)


def parse_envelope(raw: str | None, *, method: str, url: str) -> dict[str, object]:
    """Parse a raw body into an envelope mapping."""

    try:
        payload = json.loads(raw) if raw else None
    except ValueError as exc:
        raise _invalid_json_error(raw, method=method, url=url) from exc

    if payload is None:
        raise _invalid_json_error(raw, method=method, url=url)
    if not isinstance(payload, dict):
        raise PaynameProtocolError(
            f"{method} {url} response JSON root must be an object",
            method=method,
            url=url,
            raw_body=raw,
        )
    return payload


def is_success(payload: Mapping[str, object]) -> bool:
    return bool(payload.get("success"))


def classify_envelope(payload: Mapping[str, object]) -> ApiErrorRecord | None:
    """Return the record to keep as last error, or ``None`` for a clean success.

    Failed envelopes always yield a record. Successful envelopes yield one
    only when their code starts with ``W``.
    """

    if not is_success(payload):
        return ApiErrorRecord.from_envelope(payload)
    if has_warning_code(payload):
        return ApiErrorRecord.from_envelope(payload)
    return None


def _invalid_json_error(raw: str | None, *, method: str, url: str) -> PaynameTransportError:
    return PaynameTransportError(
        f"{method} {url} did not send valid JSON: {raw}",
        method=method,
        url=url,
        raw_body=raw,
    )


__all__ = [
    "parse_envelope",
    "is_success",
    "classify_envelope",
]
