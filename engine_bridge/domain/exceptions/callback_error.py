"""
CallbackDeliveryError - The out-of-band POST to a callback URL failed.
Logged only; never surfaced to the platform.
"""

from engine_bridge.domain.exceptions.base import BridgeError


class CallbackDeliveryError(BridgeError):
    def __init__(self, message: str, callback_url: str):
        super().__init__(message)
        self.callback_url = callback_url
