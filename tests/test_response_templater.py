"""
Unit tests for ResponseTemplater.

Run with: pytest tests/test_response_templater.py -v
"""

import json
from dataclasses import replace

from engine_bridge.domain.entities.engine_answer import (
    ImageAnswer,
    LogicalFailure,
    TextAnswer,
    TransportFailure,
)
from engine_bridge.domain.entities.response_envelope import MentionReply, SkillEnvelope
from engine_bridge.domain.value_objects.platform import Platform
from engine_bridge.services.platform_variants import (
    EN_FALLBACK_TEXT,
    KO_FALLBACK_TEXT,
    KO_WAIT_TEXT,
    get_variant,
)
from engine_bridge.services.response_templater import ResponseTemplater


class TestSkillRendering:
    def test_text_answer_uses_first_message(self):
        envelope = ResponseTemplater().render(
            Platform.CHANNEL, TextAnswer(messages=("hi there", "ignored"))
        )
        assert envelope.to_dict() == {
            "version": "2.0",
            "template": {"outputs": [{"simpleText": {"text": "hi there"}}]},
        }

    def test_empty_message_list_falls_back(self):
        envelope = ResponseTemplater().render(Platform.CHANNEL, TextAnswer(messages=()))
        assert envelope.text == KO_FALLBACK_TEXT

    def test_transport_failure_is_exact_fallback(self):
        envelope = ResponseTemplater().render(
            Platform.CHANNEL, TransportFailure(reason="ConnectError", status_code=None)
        )
        assert envelope.text == KO_FALLBACK_TEXT

    def test_logical_failure_appends_diagnostic(self):
        envelope = ResponseTemplater().render(
            Platform.GROUP, LogicalFailure(message=None, error="quota exceeded")
        )
        assert envelope.text == f"{KO_FALLBACK_TEXT} (quota exceeded)"

    def test_logical_failure_without_detail_is_plain_fallback(self):
        envelope = ResponseTemplater().render(Platform.GROUP, LogicalFailure())
        assert envelope.text == KO_FALLBACK_TEXT

    def test_long_diagnostic_is_truncated(self):
        envelope = ResponseTemplater().render(
            Platform.CHANNEL, LogicalFailure(message="x" * 500)
        )
        suffix = envelope.text[len(KO_FALLBACK_TEXT) + 2 : -1]
        assert len(suffix) == 80
        assert suffix.endswith("...")

    def test_image_with_caption_puts_text_first(self):
        envelope = ResponseTemplater().render(
            Platform.GROUP,
            ImageAnswer(image_url="https://x/img.png", caption="ok"),
            utterance="draw a cat",
        )
        assert envelope.to_dict()["template"]["outputs"] == [
            {"simpleText": {"text": "ok"}},
            {"simpleImage": {"imageUrl": "https://x/img.png", "altText": "draw a cat"}},
        ]

    def test_image_without_caption_has_only_image(self):
        envelope = ResponseTemplater().render(
            Platform.GROUP, ImageAnswer(image_url="https://x/img.png"), utterance="cat"
        )
        assert envelope.to_dict()["template"]["outputs"] == [
            {"simpleImage": {"imageUrl": "https://x/img.png", "altText": "cat"}}
        ]

    def test_rendering_is_idempotent(self):
        templater = ResponseTemplater()
        answer = ImageAnswer(image_url="https://x/img.png", caption="ok")

        first = templater.render(Platform.GROUP, answer, utterance="cat")
        second = templater.render(Platform.GROUP, answer, utterance="cat")

        assert first == second
        assert json.dumps(first.to_dict(), ensure_ascii=False) == json.dumps(
            second.to_dict(), ensure_ascii=False
        )

    def test_unknown_answer_type_still_renders(self):
        envelope = ResponseTemplater().render(Platform.CHANNEL, object())
        assert isinstance(envelope, SkillEnvelope)
        assert envelope.text == KO_FALLBACK_TEXT


class TestAcknowledgment:
    def test_channel_ack(self):
        assert ResponseTemplater().ack(Platform.CHANNEL) == {
            "version": "2.0",
            "useCallback": True,
        }

    def test_group_ack_carries_wait_text(self):
        assert ResponseTemplater().ack(Platform.GROUP) == {
            "version": "2.0",
            "useCallback": True,
            "data": {"text": KO_WAIT_TEXT},
        }

    def test_mention_has_no_ack(self):
        assert ResponseTemplater().ack(Platform.MENTION) is None

    def test_ack_data_follows_variant_wait_text(self):
        variant = replace(get_variant(Platform.CHANNEL), wait_text="one moment")
        assert variant.ack_payload()["data"] == {"text": "one moment"}


class TestMentionRendering:
    def test_text_reply(self):
        reply = ResponseTemplater().render(Platform.MENTION, TextAnswer(messages=("hey",)))
        assert reply == MentionReply(chunks=("hey",))

    def test_failure_uses_english_fallback(self):
        reply = ResponseTemplater().render(Platform.MENTION, TransportFailure(reason="x"))
        assert reply.chunks == (EN_FALLBACK_TEXT,)

    def test_long_reply_is_split(self):
        text = ("word " * 1000).strip()
        reply = ResponseTemplater().render(Platform.MENTION, TextAnswer(messages=(text,)))

        assert len(reply.chunks) > 1
        assert all(len(chunk) <= 2000 for chunk in reply.chunks)
        assert " ".join(reply.chunks) == text

    def test_split_prefers_paragraph_breaks(self):
        text = "a" * 1500 + "\n\n" + "b" * 1500
        chunks = ResponseTemplater().split_long_message(text)
        assert chunks == ["a" * 1500, "b" * 1500]
