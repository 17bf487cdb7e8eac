"""Async HTTP transport."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

import httpx

from ..config import PaynameConfig
from .errors import PaynameTransportError
from .transport_shared import build_default_timeout, decode_body, merge_headers

logger = logging.getLogger("payname_api_client")


class AsyncTransportClient(Protocol):
    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        content: str | None = None,
    ) -> object: ...

    async def aclose(self) -> None: ...


class AsyncTransport:
    """Asynchronous transport for the Payname API."""

    def __init__(
        self,
        config: PaynameConfig,
        *,
        client: AsyncTransportClient | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._http_transport = http_transport
        self._pooled: httpx.AsyncClient | None = None
        self._closed = False

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._pooled is not None:
            await self._pooled.aclose()
            self._pooled = None

    async def send(
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
                response = await self._client.request(method, url, headers=merged, content=body)
            elif self._config.use_pooled_transport:
                response = await self._pooled_client().request(
                    method,
                    url,
                    headers=merged,
                    content=body,
                )
            else:
                async with self._new_client() as one_shot:
                    response = await one_shot.request(
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

    def _pooled_client(self) -> httpx.AsyncClient:
        if self._pooled is None:
            self._pooled = self._new_client()
        return self._pooled

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=build_default_timeout(self._config),
            transport=self._http_transport,
        )


__all__ = [
    "AsyncTransportClient",
    "AsyncTransport",
]
