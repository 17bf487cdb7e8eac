"""Client configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .core.errors import PaynameConfigurationError

DEFAULT_HOST = "https://api.payname.fr/v2"
HOST_OVERRIDE_ENV = "PAYNAME_API_HOST_OVERRIDE"
ID_ENV = "PAYNAME_ID"
SECRET_ENV = "PAYNAME_SECRET"
USE_OAUTH_ENV = "PAYNAME_USE_OAUTH"
USE_POOLED_TRANSPORT_ENV = "PAYNAME_USE_POOLED_TRANSPORT"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0
    user_agent: str = "payname-api-client/0.1.0"

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True)
class PaynameConfig:
    """Credentials and behaviour flags owned by one client.

    Fields may be patched at any time before a call. Credentials are only
    checked when read through :attr:`id` or :attr:`secret`.
    """

    shop_id: str = ""
    secret_key: str = field(default="", repr=False)
    host: str = DEFAULT_HOST
    use_oauth: bool = False
    use_pooled_transport: bool = False
    transport: TransportConfig = field(default_factory=TransportConfig)

    @classmethod
    def setup(
        cls,
        shop_id: str,
        secret_key: str,
        *,
        use_oauth: bool = True,
        use_pooled_transport: bool = True,
        environ: Mapping[str, str] | None = None,
    ) -> "PaynameConfig":
        config = cls(
            shop_id=shop_id,
            secret_key=secret_key,
            use_oauth=use_oauth,
            use_pooled_transport=use_pooled_transport,
        )
        config.apply_host_override(environ)
        return config

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "PaynameConfig":
        env = os.environ if environ is None else environ
        return cls.setup(
            env.get(ID_ENV, ""),
            env.get(SECRET_ENV, ""),
            use_oauth=_parse_flag(env, USE_OAUTH_ENV, default=True),
            use_pooled_transport=_parse_flag(env, USE_POOLED_TRANSPORT_ENV, default=True),
            environ=env,
        )

    def apply_host_override(self, environ: Mapping[str, str] | None = None) -> None:
        env = os.environ if environ is None else environ
        override = env.get(HOST_OVERRIDE_ENV)
        if override:
            self.host = override

    def set_id(self, shop_id: str) -> None:
        self.shop_id = shop_id

    def set_secret(self, secret_key: str) -> None:
        self.secret_key = secret_key

    def set_oauth(self, use_oauth: bool) -> None:
        self.use_oauth = use_oauth

    def set_pooled_transport(self, use_pooled_transport: bool) -> None:
        self.use_pooled_transport = use_pooled_transport

    @property
    def id(self) -> str:
        self.check_credentials()
        return self.shop_id

    @property
    def secret(self) -> str:
        self.check_credentials()
        return self.secret_key

    def check_credentials(self) -> None:
        if not self.shop_id or not self.secret_key:
            raise PaynameConfigurationError(
                "Payname API is not configured; use PaynameConfig.setup(shop_id, secret_key)"
            )

    def validate(self) -> None:
        if not self.host:
            raise ValueError("host must not be empty")
        if not isinstance(self.use_oauth, bool):
            raise ValueError("use_oauth must be bool")
        if not isinstance(self.use_pooled_transport, bool):
            raise ValueError("use_pooled_transport must be bool")
        self.transport.validate()


def _parse_flag(env: Mapping[str, str], name: str, *, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


__all__ = [
    "DEFAULT_HOST",
    "HOST_OVERRIDE_ENV",
    "TransportConfig",
    "PaynameConfig",
]
