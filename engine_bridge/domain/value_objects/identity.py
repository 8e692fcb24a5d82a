"""
Identity Value Object - Session key and speaker resolved from a request.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    session_key: str  # conversational continuity key sent to the engine
    user_id: str  # platform user id, or a generated one
    display_name: str

    def __post_init__(self):
        if not self.session_key or not self.session_key.strip():
            raise ValueError("Session key cannot be empty")

    def __str__(self) -> str:
        return self.session_key
