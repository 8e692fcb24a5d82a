"""
BridgeValidationError - Raised when an inbound request cannot be dispatched.
Maps to: HTTP 400 Bad Request
"""

from engine_bridge.domain.exceptions.base import BridgeError


class BridgeValidationError(BridgeError):
    """Missing or empty utterance, or a mention with nothing to act on."""
