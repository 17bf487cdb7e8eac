"""Public package exports for Payname API client."""

from .async_client import AsyncPaynameClient
from .client import PaynameClient
from .config import PaynameConfig, TransportConfig
from .core.errors import (
    ApiErrorRecord,
    PaynameApiError,
    PaynameClientClosedError,
    PaynameConfigurationError,
    PaynameError,
    PaynameProtocolError,
    PaynameTransportError,
    PaynameValidationError,
    Severity,
)
from .core.models import ApiResponse, Outcome

__all__ = [
    "PaynameClient",
    "AsyncPaynameClient",
    "PaynameConfig",
    "TransportConfig",
    "ApiResponse",
    "Outcome",
    "ApiErrorRecord",
    "Severity",
    "PaynameError",
    "PaynameConfigurationError",
    "PaynameValidationError",
    "PaynameClientClosedError",
    "PaynameTransportError",
    "PaynameProtocolError",
    "PaynameApiError",
]
