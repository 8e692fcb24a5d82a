"""Slack Mention Adapter - Turns Slack events into mention requests."""

import logging
import re
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from engine_bridge.adapters.slack.slack_channel import SlackChannel
from engine_bridge.domain.entities.inbound_request import MentionMessage
from engine_bridge.domain.value_objects.delivery_outcome import DeliveryOutcome
from engine_bridge.services.bridge_orchestrator import BridgeOrchestrator

logger = logging.getLogger(__name__)

# <@U0123ABC> or <@U0123ABC|name>
USER_MENTION_PATTERN = re.compile(r"<@([A-Z0-9]+)(?:\|[^>]*)?>")


class SlackMentionAdapter:
    """Slack side of the mention bot: parsing, identity lookup, replies."""

    def __init__(
        self,
        client: AsyncWebClient,
        orchestrator: BridgeOrchestrator,
        bot_user_id: str | None = None,
    ):
        self._client = client
        self._orchestrator = orchestrator
        self._bot_user_id = bot_user_id or None
        self._display_names: dict[str, str | None] = {}
        self._usernames: dict[str, str | None] = {}

    async def handle_event(self, event: dict) -> DeliveryOutcome | None:
        """Handle one ``app_mention`` / ``message`` event."""
        message = await self.build_message(event)
        channel = SlackChannel(
            self._client, message.conversation_id or "", message.message_ref
        )
        return await self._orchestrator.handle_mention(message, channel)

    async def build_message(self, event: dict) -> MentionMessage:
        bot_user_id = await self.get_bot_user_id()
        user_id = event.get("user")
        raw_text = event.get("text") or ""
        mentioned = set(USER_MENTION_PATTERN.findall(raw_text))

        if bot_user_id:
            mentions_bot = bot_user_id in mentioned
        else:
            # app_mention is only delivered when the bot was mentioned
            mentions_bot = event.get("type") == "app_mention"

        from_bot = self._is_bot_message(event)
        display_name, username = (None, None)
        if user_id and not from_bot:
            display_name, username = await self.get_user_names(user_id)

        return MentionMessage(
            text=self.clean_text(raw_text, bot_user_id),
            conversation_id=event.get("channel"),
            user_id=user_id,
            display_name=display_name,
            username=username,
            mentions_bot=mentions_bot,
            from_bot=from_bot,
            message_ref=event.get("thread_ts") or event.get("ts"),
        )

    def clean_text(self, text: str, bot_user_id: str | None) -> str:
        """Remove the bot's own mention and collapse whitespace."""
        if bot_user_id:
            text = re.sub(rf"<@{re.escape(bot_user_id)}(?:\|[^>]*)?>", " ", text)
        else:
            # Without a known bot id, drop the leading mention that addressed us
            text = re.sub(r"^\s*<@[A-Z0-9]+(?:\|[^>]*)?>", " ", text)
        return " ".join(text.split())

    async def get_bot_user_id(self) -> str | None:
        if self._bot_user_id is None:
            try:
                response = await self._client.auth_test()
                self._bot_user_id = response.get("user_id") or ""
            except SlackApiError as e:
                logger.warning("[SLACK] auth.test failed, bot id unknown: %s", e)
                return None
        return self._bot_user_id or None

    async def get_user_names(self, user_id: str) -> tuple[str | None, str | None]:
        """Return (display name, username), cached per process."""
        if user_id not in self._display_names:
            try:
                response = await self._client.users_info(user=user_id)
            except SlackApiError as e:
                logger.warning("[SLACK] users.info failed for %s: %s", user_id, e)
                return None, None
            user_info = response.get("user", {}) or {}
            profile = user_info.get("profile", {}) or {}
            self._display_names[user_id] = (
                profile.get("display_name") or profile.get("real_name") or None
            )
            self._usernames[user_id] = user_info.get("name") or None
        return self._display_names[user_id], self._usernames[user_id]

    def _is_bot_message(self, event: dict) -> bool:
        """Check if message is from a bot to prevent infinite loops."""
        bot_id = event.get("bot_id")
        if bot_id is not None and str(bot_id).strip() != "":
            return True
        if event.get("subtype") == "bot_message":
            return True
        return False
