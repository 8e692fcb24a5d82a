"""
BridgeError - Common base for every error raised by the bridge.
"""


class BridgeError(Exception):
    """Base class for bridge errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
