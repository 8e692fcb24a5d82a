"""
Platform Value Object - Which inbound surface a request arrived on.
"""

from enum import Enum


class Platform(str, Enum):
    MENTION = "mention"  # mention bot, replies inline
    CHANNEL = "channel"  # skill platform, text via callback
    GROUP = "group"  # skill platform, image via callback

    @property
    def uses_callback(self) -> bool:
        return self is not Platform.MENTION
