"""
Mention Channel Port - Conversation a mention arrived in.
Implementation: engine_bridge/adapters/slack/slack_channel.py
"""

from abc import ABC, abstractmethod


class MentionChannel(ABC):
    @abstractmethod
    async def send_typing(self) -> None:
        """Show a transient "working on it" indicator."""
        ...

    @abstractmethod
    async def clear_typing(self) -> None: ...

    @abstractmethod
    async def send_text(self, text: str) -> None:
        """Post a reply into the original conversation."""
        ...
