"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass or enum)
- Pure Python (no framework dependencies)
"""

from engine_bridge.domain.value_objects.platform import Platform
from engine_bridge.domain.value_objects.identity import Identity
from engine_bridge.domain.value_objects.delivery_outcome import DeliveryOutcome

__all__ = [
    "Platform",
    "Identity",
    "DeliveryOutcome",
]
