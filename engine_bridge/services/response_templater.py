"""Response Templater - Turns an engine answer into a platform envelope."""

import logging

from engine_bridge.domain.entities.engine_answer import (
    EngineAnswer,
    ImageAnswer,
    LogicalFailure,
    TextAnswer,
    TransportFailure,
)
from engine_bridge.domain.entities.response_envelope import (
    ImageOutput,
    MentionReply,
    ResponseEnvelope,
    SkillEnvelope,
    TextOutput,
)
from engine_bridge.domain.value_objects.platform import Platform
from engine_bridge.services.platform_variants import get_variant

logger = logging.getLogger(__name__)

MAX_DIAGNOSTIC_LENGTH = 80
MAX_MENTION_MESSAGE_LENGTH = 2000


class ResponseTemplater:
    """Renders EngineAnswer values. Pure and total: every input yields an envelope."""

    def render(
        self, platform: Platform, answer: EngineAnswer, utterance: str = ""
    ) -> ResponseEnvelope:
        """Render ``answer`` for ``platform``.

        Args:
            platform: Platform the request arrived on
            answer: Whatever the engine gateway produced, success or failure
            utterance: Original user text, used as image alt text
        """
        fallback = get_variant(platform).fallback_text

        if isinstance(answer, TextAnswer):
            text = answer.messages[0] if answer.messages else fallback
            return self._text_envelope(platform, text)

        if isinstance(answer, ImageAnswer):
            if platform is Platform.MENTION:
                parts = [answer.caption, answer.image_url]
                return self._text_envelope(platform, "\n".join(p for p in parts if p))
            outputs = []
            if answer.caption:
                outputs.append(TextOutput(text=answer.caption))
            outputs.append(ImageOutput(image_url=answer.image_url, alt_text=utterance))
            return SkillEnvelope(outputs=tuple(outputs))

        if isinstance(answer, LogicalFailure):
            return self._text_envelope(
                platform, self.fallback_text(platform, answer.detail)
            )

        if isinstance(answer, TransportFailure):
            return self._text_envelope(platform, fallback)

        logger.error("Unknown engine answer type: %s", type(answer).__name__)
        return self._text_envelope(platform, fallback)

    def fallback_text(self, platform: Platform, detail: str | None = None) -> str:
        """Fixed fallback, optionally suffixed with a short diagnostic."""
        fallback = get_variant(platform).fallback_text
        if not detail or not str(detail).strip():
            return fallback
        detail = " ".join(str(detail).split())
        if len(detail) > MAX_DIAGNOSTIC_LENGTH:
            detail = detail[: MAX_DIAGNOSTIC_LENGTH - 3] + "..."
        return f"{fallback} ({detail})"

    def ack(self, platform: Platform) -> dict | None:
        """Immediate acknowledgment payload for callback platforms."""
        return get_variant(platform).ack_payload()

    def _text_envelope(self, platform: Platform, text: str) -> ResponseEnvelope:
        if platform is Platform.MENTION:
            return MentionReply(chunks=tuple(self.split_long_message(text)))
        return SkillEnvelope(outputs=(TextOutput(text=text),))

    def split_long_message(
        self, text: str, max_length: int = MAX_MENTION_MESSAGE_LENGTH
    ) -> list[str]:
        """Split long text into chunks, breaking at paragraph boundaries."""
        if len(text) <= max_length:
            return [text]

        chunks = []
        remaining = text

        while remaining:
            if len(remaining) <= max_length:
                chunks.append(remaining)
                break

            # Find a good break point (paragraph or sentence)
            chunk = remaining[:max_length]
            break_point = chunk.rfind("\n\n")  # Paragraph
            if break_point == -1:
                break_point = chunk.rfind(". ")  # Sentence
            if break_point == -1:
                break_point = chunk.rfind(" ")  # Word
            if break_point <= 0:
                break_point = max_length - 1  # Force break

            chunks.append(remaining[: break_point + 1].strip())
            remaining = remaining[break_point + 1 :].strip()

        return [chunk for chunk in chunks if chunk]
