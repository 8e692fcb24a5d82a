"""
Tests for the dishka container lifecycle.

Run with: pytest tests/test_container.py -v
"""

import pytest
from dishka import make_async_container
from slack_sdk.web.async_client import AsyncWebClient

from engine_bridge.config.settings import TestingConfig
from engine_bridge.services.engine_credentials import StaticCredentials
from engine_bridge.setup.ioc.container import AppProvider

pytestmark = pytest.mark.asyncio


class TestSlackClientLifecycle:
    async def test_own_slack_session_is_closed_with_container(self):
        container = make_async_container(
            AppProvider(config=TestingConfig, credentials=StaticCredentials())
        )

        client = await container.get(AsyncWebClient)
        assert client.session is not None
        assert not client.session.closed

        await container.close()

        assert client.session.closed

    async def test_injected_slack_client_is_reused(self, slack_client):
        container = make_async_container(
            AppProvider(config=TestingConfig, slack_client=slack_client)
        )

        assert await container.get(AsyncWebClient) is slack_client

        await container.close()
