"""Shared helpers for sync/async transport implementations."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from ..config import PaynameConfig


def build_default_headers(config: PaynameConfig) -> Mapping[str, str]:
    return {
        "Accept": "application/json",
        "User-Agent": config.transport.user_agent,
    }


def build_default_timeout(config: PaynameConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def merge_headers(config: PaynameConfig, headers: Mapping[str, str]) -> dict[str, str]:
    merged = dict(build_default_headers(config))
    merged.update(headers)
    return merged


def decode_body(response: object) -> str:
    text = getattr(response, "text", None)
    if isinstance(text, str):
        return text
    content = getattr(response, "content", b"")
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return str(content)


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "merge_headers",
    "decode_body",
]
