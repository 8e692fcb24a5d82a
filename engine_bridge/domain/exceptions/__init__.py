"""
DOMAIN EXCEPTIONS - Bridge failure taxonomy

Validation errors are raised before dispatch and mapped to HTTP 400 by the
presentation layer. Upstream and callback errors never leave the service that
raises them; they are converted to fallback content or log lines.
"""

from engine_bridge.domain.exceptions.base import BridgeError
from engine_bridge.domain.exceptions.validation_error import BridgeValidationError
from engine_bridge.domain.exceptions.upstream_error import (
    EngineUnavailableError,
    UpstreamLogicalFailure,
    UpstreamTransportError,
)
from engine_bridge.domain.exceptions.callback_error import CallbackDeliveryError

__all__ = [
    "BridgeError",
    "BridgeValidationError",
    "EngineUnavailableError",
    "UpstreamLogicalFailure",
    "UpstreamTransportError",
    "CallbackDeliveryError",
]
