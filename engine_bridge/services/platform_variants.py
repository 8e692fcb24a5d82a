"""Per-platform settings consumed by the bridge orchestrator.

Each inbound surface differs only in its session prefix, which engine
endpoint it calls, the acknowledgment it returns and its localized strings.
"""

from dataclasses import dataclass
from typing import Literal

from engine_bridge.config.settings import Config
from engine_bridge.domain.entities.response_envelope import SKILL_VERSION
from engine_bridge.domain.value_objects.platform import Platform

KO_FALLBACK_TEXT = "죄송합니다. 지금은 요청을 처리할 수 없습니다."
KO_WAIT_TEXT = "요청을 처리하고 있어요. 잠시만 기다려 주세요!"
EN_FALLBACK_TEXT = "Sorry. I can't process your request right now."


@dataclass(frozen=True)
class PlatformVariant:
    platform: Platform
    session_prefix: str
    engine_call: Literal["text", "image"]
    fallback_text: str
    wait_text: str | None = None  # shown in the ack while the answer is prepared

    def ack_payload(self) -> dict | None:
        """Immediate response for callback platforms, None for inline ones."""
        if not self.platform.uses_callback:
            return None
        payload = {"version": SKILL_VERSION, "useCallback": True}
        if self.wait_text:
            payload["data"] = {"text": self.wait_text}
        return payload


VARIANTS: dict[Platform, PlatformVariant] = {
    Platform.MENTION: PlatformVariant(
        platform=Platform.MENTION,
        session_prefix=Config.MENTION_SESSION_PREFIX,
        engine_call="text",
        fallback_text=EN_FALLBACK_TEXT,
    ),
    Platform.CHANNEL: PlatformVariant(
        platform=Platform.CHANNEL,
        session_prefix="kakaotalk",
        engine_call="text",
        fallback_text=KO_FALLBACK_TEXT,
    ),
    Platform.GROUP: PlatformVariant(
        platform=Platform.GROUP,
        session_prefix="kakaotalk-group",
        engine_call="image",
        fallback_text=KO_FALLBACK_TEXT,
        wait_text=KO_WAIT_TEXT,
    ),
}


def get_variant(platform: Platform) -> PlatformVariant:
    return VARIANTS[platform]
