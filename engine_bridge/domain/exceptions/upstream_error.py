"""
Upstream engine errors.

UpstreamTransportError and UpstreamLogicalFailure are absorbed by the engine
gateway into EngineAnswer variants. EngineUnavailableError is only raised at
startup and is fatal.
"""

from engine_bridge.domain.exceptions.base import BridgeError


class UpstreamTransportError(BridgeError):
    """The engine call did not complete (network, timeout, non-2xx, bad JSON)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamLogicalFailure(BridgeError):
    """The engine answered but reported failure or returned nothing usable."""

    def __init__(self, message: str = "", error: str | None = None):
        super().__init__(message)
        self.error = error


class EngineUnavailableError(BridgeError):
    """The authenticated engine client could not be initialized."""
