"""Sync HTTP transport."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

import httpx

from ..config import PaynameConfig
from .errors import PaynameTransportError
from .transport_shared import build_default_timeout, decode_body, merge_headers

logger = logging.getLogger("payname_api_client")


class TransportClient(Protocol):
    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        content: str | None = None,
    ) -> object: ...

    def close(self) -> None: ...


class SyncTransport:
    """Blocking transport for the Payname API.

    Returns the raw response body whatever the HTTP status, since the API
    reports failures inside the JSON envelope. With ``use_pooled_transport``
    one ``httpx.Client`` is kept and reused across calls; otherwise every
    call opens and closes its own client.
    """

    def __init__(
        self,
        config: PaynameConfig,
        *,
        client: TransportClient | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._http_transport = http_transport
        self._pooled: httpx.Client | None = None
        self._closed = False

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._pooled is not None:
            self._pooled.close()
            self._pooled = None

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str | None = None,
    ) -> str:
        if self._closed:
            raise PaynameTransportError("transport is already closed", method=method, url=url)

        merged = merge_headers(self._config, headers)
        try:
            if self._client is not None:
                response = self._client.request(method, url, headers=merged, content=body)
            elif self._config.use_pooled_transport:
                response = self._pooled_client().request(
                    method,
                    url,
                    headers=merged,
                    content=body,
                )
            else:
                with self._new_client() as one_shot:
                    response = one_shot.request(
                        method,
                        url,
                        headers=merged,
                        content=body,
                    )
        except (httpx.HTTPError, OSError) as exc:
            logger.error(
                "request network error method=%s url=%s error=%s",
                method,
                url,
                exc.__class__.__name__,
            )
            raise PaynameTransportError(
                f"{method} {url} ERROR: {exc}",
                method=method,
                url=url,
            ) from exc

        logger.debug(
            "response received method=%s url=%s http_status=%s",
            method,
            url,
            getattr(response, "status_code", None),
        )
        return decode_body(response)

    def _pooled_client(self) -> httpx.Client:
        if self._pooled is None:
            self._pooled = self._new_client()
        return self._pooled

    def _new_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=build_default_timeout(self._config),
            transport=self._http_transport,
        )


__all__ = [
    "TransportClient",
    "SyncTransport",
]
