import json
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from engine_bridge.config.settings import TestingConfig
from engine_bridge.fastapi_app import create_fastapi_app
from engine_bridge.services.callback_delivery import CallbackDelivery
from engine_bridge.services.engine_credentials import StaticCredentials
from engine_bridge.services.engine_gateway import EngineGateway
from engine_bridge.setup.ioc.container import AppProvider


class FakeEndpoint:
    """Records requests sent through an httpx.MockTransport and replays canned replies."""

    def __init__(self, status_code: int = 200, body=None):
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, tuple[int, object]] = {}
        self.default = (status_code, body if body is not None else {})
        self.error: Exception | None = None

    def reply(self, path: str, status_code: int = 200, body=None) -> None:
        self.routes[path] = (status_code, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        status_code, body = self.routes.get(request.url.path, self.default)
        if isinstance(body, (str, bytes)):
            return httpx.Response(status_code, content=body)
        return httpx.Response(status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def payloads(self) -> list:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture()
def engine():
    """Fake upstream engine answering both endpoints successfully."""
    fake = FakeEndpoint()
    fake.reply("/messages", body={"messages": ["hi there"]})
    fake.reply(
        "/kakao/message",
        body={
            "success": True,
            "image_url": "https://x/img.png",
            "response_message": "ok",
        },
    )
    return fake


@pytest.fixture()
def callbacks():
    """Fake callback receiver."""
    return FakeEndpoint(body={"status": "ok"})


@pytest.fixture()
def slack_client():
    client = AsyncMock()
    client.users_info.return_value = {
        "user": {"name": "jdoe", "profile": {"display_name": "Jamie", "real_name": ""}}
    }
    client.auth_test.return_value = {"user_id": TestingConfig.SLACK_BOT_USER_ID}
    return client


@pytest.fixture()
def gateway(engine):
    client = httpx.AsyncClient(transport=engine.transport)
    return EngineGateway(
        base_url=TestingConfig.ENGINE_URL,
        client=client,
        credentials=StaticCredentials("test-token"),
    )


@pytest.fixture()
def delivery(callbacks):
    return CallbackDelivery(httpx.AsyncClient(transport=callbacks.transport))


@pytest.fixture()
def app(engine, callbacks, slack_client):
    """Create a FastAPI app wired to the fake engine and callback receiver."""
    provider = AppProvider(
        config=TestingConfig,
        engine_transport=engine.transport,
        callback_transport=callbacks.transport,
        credentials=StaticCredentials("test-token"),
        slack_client=slack_client,
    )
    return create_fastapi_app(provider=provider, config=TestingConfig)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app (runs startup and shutdown)."""
    with TestClient(app) as test_client:
        yield test_client
