"""Request preparation and outcome routing shared by sync/async dispatchers."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from ..config import PaynameConfig
from .errors import ApiErrorRecord, PaynameApiError, PaynameTransportError
from .models import ApiEnvelope, ApiResponse
from .response_parsing import classify_envelope, is_success, parse_envelope
from .token import TokenState

logger = logging.getLogger("payname_api_client")


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(slots=True, frozen=True)
class RequestSpec:
    method: HttpMethod
    path: str
    payload: Mapping[str, object] | None = None


@dataclass(slots=True, frozen=True)
class PreparedRequest:
    method: str
    url: str
    headers: Mapping[str, str]
    body: str | None


def prepare_request(
    spec: RequestSpec,
    *,
    config: PaynameConfig,
    token_state: TokenState,
) -> PreparedRequest:
    """Resolve credentials and token, then build the wire request.

    Raises ``PaynameConfigurationError`` before anything is sent when the
    credentials are missing.
    """

    config.check_credentials()
    token = token_state.resolve(config)
    headers = {
        "Authorization": token,
        "Content-Type": "application/json",
    }
    body = None
    if spec.payload is not None:
        body = json.dumps(dict(spec.payload), ensure_ascii=False)
    return PreparedRequest(
        method=spec.method.value,
        url=config.host + spec.path,
        headers=headers,
        body=body,
    )


class DispatcherState:
    """Per-client state: config, token slot and last observed error."""

    def __init__(
        self,
        config: PaynameConfig,
        *,
        token_state: TokenState | None = None,
    ) -> None:
        self._config = config
        self._token_state = token_state or TokenState()
        self._last_error: ApiErrorRecord | None = None

    @property
    def config(self) -> PaynameConfig:
        return self._config

    @property
    def token(self) -> str:
        return self._token_state.current

    def set_token(self, token: str) -> str:
        return self._token_state.set(token)

    @property
    def last_error(self) -> ApiErrorRecord | None:
        return self._last_error

    def _prepare(
        self,
        method: HttpMethod | str,
        path: str,
        payload: Mapping[str, object] | None,
    ) -> PreparedRequest:
        spec = RequestSpec(method=HttpMethod(method), path=path, payload=payload)
        prepared = prepare_request(spec, config=self._config, token_state=self._token_state)
        logger.debug("request start method=%s url=%s", prepared.method, prepared.url)
        return prepared

    def _complete(self, raw: str | None, prepared: PreparedRequest) -> ApiResponse:
        try:
            envelope = parse_envelope(raw, method=prepared.method, url=prepared.url)
        except PaynameTransportError:
            logger.error("response parse error method=%s url=%s", prepared.method, prepared.url)
            raise

        record = classify_envelope(envelope)
        self._last_error = record
        if record is not None and not is_success(envelope):
            logger.error(
                "request failed method=%s url=%s code=%s request_id=%s",
                prepared.method,
                prepared.url,
                record.code,
                record.request_id,
            )
            raise PaynameApiError(record)
        if record is not None:
            logger.warning(
                "request succeeded with warning method=%s url=%s code=%s request_id=%s",
                prepared.method,
                prepared.url,
                record.code,
                record.request_id,
            )
        else:
            logger.info("request success method=%s url=%s", prepared.method, prepared.url)

        return ApiResponse(
            data=envelope.get("data"),
            envelope=ApiEnvelope.from_payload(envelope),
            warning=record,
        )


__all__ = [
    "HttpMethod",
    "RequestSpec",
    "PreparedRequest",
    "prepare_request",
    "DispatcherState",
]
