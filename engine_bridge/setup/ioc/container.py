"""
Dishka DI Container Setup.

Everything the bridge shares across requests is APP-scoped (created once,
reused by every request and background task):

  EngineCredentials -> EngineGateway ----\\
  httpx client      -> CallbackDelivery --+-> BridgeOrchestrator -> routes
  AsyncWebClient    -> SlackMentionAdapter (mention bot only)

The engine gateway is resolved eagerly at startup (see fastapi_app.lifespan);
if it cannot be built the process must not start serving.
"""

from collections.abc import AsyncIterable

import aiohttp
import httpx
from dishka import Provider, Scope, provide
from slack_sdk.web.async_client import AsyncWebClient

from engine_bridge.adapters.slack.slack_adapter import SlackMentionAdapter
from engine_bridge.config.settings import Config
from engine_bridge.domain.exceptions import EngineUnavailableError
from engine_bridge.services.bridge_orchestrator import BridgeOrchestrator
from engine_bridge.services.callback_delivery import CallbackDelivery
from engine_bridge.services.engine_credentials import (
    EngineCredentials,
    GoogleIdTokenCredentials,
    StaticCredentials,
)
from engine_bridge.services.engine_gateway import EngineGateway
from engine_bridge.services.identity_resolver import IdentityResolver
from engine_bridge.services.response_templater import ResponseTemplater


class AppProvider(Provider):
    """
    Application dependency provider.

    Transports and the Slack client can be injected so tests run against
    httpx.MockTransport and a mocked Slack client.
    """

    def __init__(
        self,
        config: type[Config] = Config,
        engine_transport: httpx.AsyncBaseTransport | None = None,
        callback_transport: httpx.AsyncBaseTransport | None = None,
        credentials: EngineCredentials | None = None,
        slack_client: AsyncWebClient | None = None,
    ):
        super().__init__()
        self.config = config
        self.engine_transport = engine_transport
        self.callback_transport = callback_transport
        self.credentials = credentials
        self.slack_client = slack_client

    # ==================== ENGINE ====================

    @provide(scope=Scope.APP)
    async def get_engine_credentials(self) -> EngineCredentials:
        if not self.config.ENGINE_URL:
            raise EngineUnavailableError("ENGINE_URL is not configured")
        if self.credentials is not None:
            credentials = self.credentials
        elif self.config.ENGINE_AUTH_ENABLED:
            credentials = GoogleIdTokenCredentials(audience=self.config.ENGINE_URL)
        else:
            credentials = StaticCredentials()
        await credentials.initialize()
        return credentials

    @provide(scope=Scope.APP)
    async def get_engine_gateway(
        self, credentials: EngineCredentials
    ) -> AsyncIterable[EngineGateway]:
        """Shared engine client; closed when the container closes."""
        client = httpx.AsyncClient(
            timeout=self.config.ENGINE_TIMEOUT_SECONDS,
            transport=self.engine_transport,
        )
        yield EngineGateway(
            base_url=self.config.ENGINE_URL,
            client=client,
            credentials=credentials,
            text_path=self.config.ENGINE_TEXT_PATH,
            image_path=self.config.ENGINE_IMAGE_PATH,
        )
        await client.aclose()

    # ==================== DELIVERY ====================

    @provide(scope=Scope.APP)
    async def get_callback_delivery(self) -> AsyncIterable[CallbackDelivery]:
        client = httpx.AsyncClient(
            timeout=self.config.CALLBACK_TIMEOUT_SECONDS,
            transport=self.callback_transport,
        )
        yield CallbackDelivery(client)
        await client.aclose()

    # ==================== ORCHESTRATION ====================

    @provide(scope=Scope.APP)
    def get_identity_resolver(self) -> IdentityResolver:
        return IdentityResolver()

    @provide(scope=Scope.APP)
    def get_response_templater(self) -> ResponseTemplater:
        return ResponseTemplater()

    @provide(scope=Scope.APP)
    def get_orchestrator(
        self,
        gateway: EngineGateway,
        delivery: CallbackDelivery,
        resolver: IdentityResolver,
        templater: ResponseTemplater,
    ) -> BridgeOrchestrator:
        return BridgeOrchestrator(
            gateway=gateway,
            delivery=delivery,
            resolver=resolver,
            templater=templater,
        )

    # ==================== SLACK ====================

    @provide(scope=Scope.APP)
    async def get_slack_client(self) -> AsyncIterable[AsyncWebClient]:
        """Slack client on one shared aiohttp session; closed with the container."""
        if self.slack_client is not None:
            yield self.slack_client
            return
        session = aiohttp.ClientSession()
        yield AsyncWebClient(token=self.config.SLACK_BOT_TOKEN, session=session)
        await session.close()

    @provide(scope=Scope.APP)
    def get_slack_adapter(
        self, client: AsyncWebClient, orchestrator: BridgeOrchestrator
    ) -> SlackMentionAdapter:
        return SlackMentionAdapter(
            client=client,
            orchestrator=orchestrator,
            bot_user_id=self.config.SLACK_BOT_USER_ID,
        )
