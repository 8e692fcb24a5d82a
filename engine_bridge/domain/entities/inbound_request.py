"""
InboundRequest Entities - One inbound message, tagged by platform.

Skill payloads are parsed leniently: missing or mistyped fields become None so
that validation, not parsing, decides whether a request is rejected.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from engine_bridge.domain.value_objects.platform import Platform


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        value = str(value).strip()
        return value or None
    return None


def _dict_or_empty(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True, kw_only=True)
class InboundRequest:
    platform: Platform
    text: str | None
    conversation_id: str | None = None
    user_id: str | None = None
    user_type: str | None = None
    callback_url: str | None = None

    @property
    def utterance(self) -> str:
        """Text with surrounding whitespace removed ("" when missing)."""
        return (self.text or "").strip()


@dataclass(frozen=True, kw_only=True)
class MentionMessage(InboundRequest):
    platform: Platform = Platform.MENTION
    display_name: str | None = None  # member-visible name in the conversation
    username: str | None = None  # account name
    mentions_bot: bool = True
    from_bot: bool = False
    message_ref: str | None = None  # platform message id, used for threading


@dataclass(frozen=True, kw_only=True)
class SkillUtterance(InboundRequest):
    bot_id: str | None = None

    @classmethod
    def from_payload(cls, body: Any) -> SkillUtterance:
        """Build from a skill request body.

        Expected shape::

            {"userRequest": {"utterance": "...", "user": {"id": "...", "type": "..."},
                             "callbackUrl": "..."},
             "bot": {"id": "..."}}
        """
        body = _dict_or_empty(body)
        user_request = _dict_or_empty(body.get("userRequest"))
        user = _dict_or_empty(user_request.get("user"))
        bot = _dict_or_empty(body.get("bot"))

        utterance = user_request.get("utterance")
        return cls(
            text=utterance if isinstance(utterance, str) else None,
            user_id=_str_or_none(user.get("id")),
            user_type=_str_or_none(user.get("type")),
            callback_url=_str_or_none(user_request.get("callbackUrl")),
            bot_id=_str_or_none(bot.get("id")),
        )


@dataclass(frozen=True, kw_only=True)
class ChannelUtterance(SkillUtterance):
    platform: Platform = Platform.CHANNEL


@dataclass(frozen=True, kw_only=True)
class GroupUtterance(SkillUtterance):
    platform: Platform = Platform.GROUP
