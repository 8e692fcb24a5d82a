"""Slack Channel - MentionChannel implementation for one Slack message."""

import logging
from slack_sdk.web.async_client import AsyncWebClient

from engine_bridge.domain.ports.mention_channel import MentionChannel

logger = logging.getLogger(__name__)

TYPING_REACTION = "hourglass_flowing_sand"


class SlackChannel(MentionChannel):
    """Replies in the thread of the mentioning message.

    Slack has no typing API for bots, so an hourglass reaction on the user's
    message stands in for it.
    """

    def __init__(self, client: AsyncWebClient, channel_id: str, message_ts: str | None):
        self._client = client
        self.channel_id = channel_id
        self.message_ts = message_ts

    async def send_typing(self) -> None:
        if self.message_ts:
            await self._client.reactions_add(
                channel=self.channel_id,
                timestamp=self.message_ts,
                name=TYPING_REACTION,
            )

    async def clear_typing(self) -> None:
        if self.message_ts:
            await self._client.reactions_remove(
                channel=self.channel_id,
                timestamp=self.message_ts,
                name=TYPING_REACTION,
            )

    async def send_text(self, text: str) -> None:
        await self._client.chat_postMessage(
            channel=self.channel_id,
            thread_ts=self.message_ts,
            text=text,
        )
