"""
Unit tests for EngineGateway against a mocked engine.

Run with: pytest tests/test_engine_gateway.py -v
"""

import httpx
import pytest

from engine_bridge.domain.entities.engine_answer import (
    ImageAnswer,
    LogicalFailure,
    TextAnswer,
    TransportFailure,
)
from engine_bridge.domain.exceptions import EngineUnavailableError
from engine_bridge.services.engine_credentials import EngineCredentials, StaticCredentials
from engine_bridge.services.engine_gateway import EngineGateway

pytestmark = pytest.mark.asyncio


class TestAsk:
    async def test_posts_messages_with_session_and_token(self, gateway, engine):
        answer = await gateway.ask("kakaotalk-u1-user", "hello", speaker_name="Jamie")

        assert answer == TextAnswer(messages=("hi there",))
        request = engine.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/messages"
        assert request.headers["Authorization"] == "Bearer test-token"
        assert engine.payloads()[0] == {
            "messages": ["hello"],
            "session_id": "kakaotalk-u1-user",
            "speaker_name": "Jamie",
        }

    async def test_speaker_name_is_optional(self, gateway, engine):
        await gateway.ask("s", "hello")
        assert "speaker_name" not in engine.payloads()[0]

    async def test_no_auth_header_without_token(self, engine):
        gateway = EngineGateway(
            base_url="http://engine.test",
            client=httpx.AsyncClient(transport=engine.transport),
            credentials=StaticCredentials(None),
        )
        await gateway.ask("s", "hello")
        assert "Authorization" not in engine.requests[0].headers

    async def test_unavailable_credentials_become_transport_failure(self, engine):
        class UnavailableCredentials(EngineCredentials):
            async def get_token(self):
                raise EngineUnavailableError("metadata server unreachable")

        gateway = EngineGateway(
            base_url="http://engine.test",
            client=httpx.AsyncClient(transport=engine.transport),
            credentials=UnavailableCredentials(),
        )

        answer = await gateway.ask("s", "hello")
        image_answer = await gateway.ask_for_image("u1", "s", "draw")

        assert answer == TransportFailure(reason="metadata server unreachable")
        assert isinstance(image_answer, TransportFailure)
        assert engine.requests == []

    async def test_transport_error_becomes_transport_failure(self, gateway, engine):
        engine.error = httpx.ConnectError("connection refused")

        answer = await gateway.ask("s", "hello")

        assert isinstance(answer, TransportFailure)
        assert "ConnectError" in answer.reason

    async def test_timeout_becomes_transport_failure(self, gateway, engine):
        engine.error = httpx.ReadTimeout("too slow")
        assert isinstance(await gateway.ask("s", "hello"), TransportFailure)

    async def test_non_2xx_becomes_transport_failure(self, gateway, engine):
        engine.reply("/messages", status_code=503, body={"detail": "overloaded"})

        answer = await gateway.ask("s", "hello")

        assert isinstance(answer, TransportFailure)
        assert answer.status_code == 503
        assert "overloaded" in answer.reason

    async def test_non_json_body_becomes_transport_failure(self, gateway, engine):
        engine.reply("/messages", body="<html>oops</html>")
        assert isinstance(await gateway.ask("s", "hello"), TransportFailure)

    async def test_empty_messages_become_empty_text_answer(self, gateway, engine):
        engine.reply("/messages", body={"messages": []})
        assert await gateway.ask("s", "hello") == TextAnswer(messages=())

    async def test_success_false_becomes_logical_failure(self, gateway, engine):
        engine.reply("/messages", body={"success": False, "error": "bad prompt"})
        assert await gateway.ask("s", "hello") == LogicalFailure(
            message=None, error="bad prompt"
        )


class TestAskForImage:
    async def test_image_with_caption(self, gateway, engine):
        answer = await gateway.ask_for_image("u1", "kakaotalk-group-u1-user", "a cat")

        assert answer == ImageAnswer(image_url="https://x/img.png", caption="ok")
        assert engine.requests[0].url.path == "/kakao/message"
        assert engine.payloads()[0] == {
            "prompt": "a cat",
            "user_id": "u1",
            "session_id": "kakaotalk-group-u1-user",
        }

    async def test_image_data_url_is_accepted(self, gateway, engine):
        engine.reply(
            "/kakao/message",
            body={"success": True, "image_data": "https://cdn/img.png"},
        )
        answer = await gateway.ask_for_image("u1", "s", "a cat")
        assert answer == ImageAnswer(image_url="https://cdn/img.png", caption=None)

    async def test_success_false_becomes_logical_failure(self, gateway, engine):
        engine.reply(
            "/kakao/message",
            body={"success": False, "response_message": "unsafe prompt", "error": "E42"},
        )
        answer = await gateway.ask_for_image("u1", "s", "a cat")
        assert answer == LogicalFailure(message="unsafe prompt", error="E42")

    async def test_caption_only_becomes_text(self, gateway, engine):
        engine.reply(
            "/kakao/message", body={"success": True, "response_message": "no image today"}
        )
        answer = await gateway.ask_for_image("u1", "s", "a cat")
        assert answer == TextAnswer(messages=("no image today",))

    async def test_missing_image_becomes_logical_failure(self, gateway, engine):
        engine.reply("/kakao/message", body={"success": True})
        answer = await gateway.ask_for_image("u1", "s", "a cat")
        assert isinstance(answer, LogicalFailure)

    async def test_server_error_becomes_transport_failure(self, gateway, engine):
        engine.reply("/kakao/message", status_code=500, body={"error": "boom"})
        answer = await gateway.ask_for_image("u1", "s", "a cat")
        assert isinstance(answer, TransportFailure)
        assert answer.status_code == 500
