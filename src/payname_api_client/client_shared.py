"""Shared helpers for sync/async client bootstrap."""

from __future__ import annotations

from .config import PaynameConfig
from .core.errors import PaynameClientClosedError, PaynameValidationError


def validate_client_config(config: PaynameConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise PaynameValidationError(str(exc)) from exc


def resolve_client_config(config: PaynameConfig | None) -> PaynameConfig:
    """Return a validated config; an unconfigured one when ``config`` is omitted.

    Missing credentials are not an error here, they are checked per call.
    """

    resolved = config if config is not None else PaynameConfig()
    validate_client_config(resolved)
    return resolved


def ensure_client_open(closed: bool, client_name: str) -> None:
    if closed:
        raise PaynameClientClosedError(f"{client_name} is already closed")


__all__ = [
    "validate_client_config",
    "resolve_client_config",
    "ensure_client_open",
]
