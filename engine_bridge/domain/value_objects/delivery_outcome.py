"""
DeliveryOutcome Value Object - How a request's answer left the bridge.

Used for logging only; no decision is taken on it.
"""

from enum import Enum


class DeliveryOutcome(str, Enum):
    DELIVERED_INLINE = "delivered_inline"
    ACKNOWLEDGED_PENDING_CALLBACK = "acknowledged_pending_callback"
    CALLBACK_SENT = "callback_sent"
    CALLBACK_FAILED = "callback_failed"
    CALLBACK_SKIPPED = "callback_skipped"
