"""Core response models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from .errors import ApiErrorRecord, extract_request_id


class Outcome(str, Enum):
    OK = "OK"
    OK_WITH_WARNING = "OK_WITH_WARNING"


@dataclass(slots=True, frozen=True)
class ApiEnvelope:
    success: bool
    code: str | None
    message: str | None
    request_id: int | str
    raw: Mapping[str, object]

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "ApiEnvelope":
        code = payload.get("code", payload.get("error"))
        message = payload.get("msg")
        return cls(
            success=bool(payload.get("success")),
            code=str(code) if code is not None else None,
            message=str(message) if message is not None else None,
            request_id=extract_request_id(payload),
            raw=payload,
        )


@dataclass(slots=True, frozen=True)
class ApiResponse:
    """Successful call result.

    ``warning`` is set when the API accepted the call but reported a
    ``W``-prefixed code; failed calls raise instead of returning.
    """

    data: object | None
    envelope: ApiEnvelope
    warning: ApiErrorRecord | None = None

    @property
    def outcome(self) -> Outcome:
        if self.warning is None:
            return Outcome.OK
        return Outcome.OK_WITH_WARNING


__all__ = [
    "Outcome",
    "ApiEnvelope",
    "ApiResponse",
]
