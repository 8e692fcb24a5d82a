"""
Bridge Orchestrator - Per-request state machine.

    Received -> Validated -> (AckSent) -> Dispatched -> Rendered -> Delivered
        \\-> Failed (malformed input only)

Skill platforms (channel, group):
    accept()        validates and returns the acknowledgment the HTTP handler
                    sends back immediately
    process_skill() runs afterwards as a detached background task: ask the
                    engine, render, POST to the callback URL

Mention bot:
    handle_mention() shows a typing indicator, asks the engine and replies
                     inline in the original conversation

Anything that goes wrong after validation is absorbed into fallback content;
the only thing ever surfaced to an HTTP caller is a BridgeValidationError.
"""

import logging

from engine_bridge.domain.entities.engine_answer import EngineAnswer, TransportFailure
from engine_bridge.domain.entities.inbound_request import (
    InboundRequest,
    MentionMessage,
    SkillUtterance,
)
from engine_bridge.domain.entities.response_envelope import (
    MentionReply,
    ResponseEnvelope,
)
from engine_bridge.domain.exceptions import BridgeValidationError
from engine_bridge.domain.ports.mention_channel import MentionChannel
from engine_bridge.domain.value_objects.delivery_outcome import DeliveryOutcome
from engine_bridge.domain.value_objects.identity import Identity
from engine_bridge.domain.value_objects.platform import Platform
from engine_bridge.services.callback_delivery import CallbackDelivery
from engine_bridge.services.engine_gateway import EngineGateway
from engine_bridge.services.identity_resolver import IdentityResolver
from engine_bridge.services.platform_variants import get_variant
from engine_bridge.services.response_templater import ResponseTemplater

logger = logging.getLogger(__name__)


class BridgeOrchestrator:
    def __init__(
        self,
        gateway: EngineGateway,
        delivery: CallbackDelivery,
        resolver: IdentityResolver | None = None,
        templater: ResponseTemplater | None = None,
    ):
        self.gateway = gateway
        self.delivery = delivery
        self.resolver = resolver or IdentityResolver()
        self.templater = templater or ResponseTemplater()

    # ==================== VALIDATION ====================

    def validate(self, request: InboundRequest) -> None:
        """Received -> Validated. Raises BridgeValidationError (terminal)."""
        if isinstance(request, MentionMessage):
            if request.from_bot:
                raise BridgeValidationError("Ignoring message authored by a bot")
            if not request.mentions_bot:
                raise BridgeValidationError("Message does not mention the bot")
        if request.text is None:
            raise BridgeValidationError("Missing message content")
        if not request.utterance:
            raise BridgeValidationError("Empty message content")

    # ==================== SKILL PLATFORMS ====================

    def accept(self, request: SkillUtterance) -> dict:
        """Validate a skill request and return its immediate acknowledgment.

        Must be followed by scheduling ``process_skill(request)`` as a
        background task; the caller never waits for it.
        """
        if not request.platform.uses_callback:
            raise ValueError(f"{request.platform.value} requests are not acknowledged")
        self.validate(request)
        logger.info(
            "[SKILL] %s request %s (callback=%s): %s",
            request.platform.value,
            DeliveryOutcome.ACKNOWLEDGED_PENDING_CALLBACK.value,
            "yes" if request.callback_url else "no",
            request.utterance[:50],
        )
        return self.templater.ack(request.platform)

    async def process_skill(self, request: SkillUtterance) -> DeliveryOutcome:
        """AckSent -> Dispatched -> Rendered -> Delivered. Never raises."""
        try:
            identity = self.resolver.resolve(request)
            answer = await self.dispatch(request, identity)
            envelope = self.templater.render(request.platform, answer, request.utterance)
        except Exception as e:
            logger.exception("[SKILL] Error processing %s request: %s", request.platform.value, e)
            envelope = self.templater.render(
                request.platform, TransportFailure(reason=str(e)), request.utterance
            )

        try:
            outcome = await self.delivery.deliver(request.callback_url, envelope)
        except Exception as e:
            logger.exception("[SKILL] Unexpected callback error: %s", e)
            outcome = DeliveryOutcome.CALLBACK_FAILED

        logger.info(
            "[SKILL] %s request finished: %s", request.platform.value, outcome.value
        )
        return outcome

    # ==================== MENTION BOT ====================

    async def handle_mention(
        self, request: MentionMessage, channel: MentionChannel
    ) -> DeliveryOutcome | None:
        """Answer a mention inline. Returns None when nothing was delivered."""
        try:
            self.validate(request)
        except BridgeValidationError as e:
            logger.debug("[MENTION] Skipping message: %s", e)
            return None

        await self._safe_typing(channel.send_typing)
        try:
            identity = self.resolver.resolve(request)
            answer = await self.dispatch(request, identity)
            reply = self.templater.render(Platform.MENTION, answer, request.utterance)
            await self._send_reply(channel, reply)
            return DeliveryOutcome.DELIVERED_INLINE
        except Exception as e:
            logger.exception("[MENTION] Error answering mention: %s", e)
            try:
                await channel.send_text(get_variant(Platform.MENTION).fallback_text)
            except Exception as send_error:
                logger.error("[MENTION] Could not send fallback reply: %s", send_error)
            return None
        finally:
            await self._safe_typing(channel.clear_typing)

    # ==================== SHARED ====================

    async def dispatch(self, request: InboundRequest, identity: Identity) -> EngineAnswer:
        """Call the engine endpoint this platform uses."""
        variant = get_variant(request.platform)
        if variant.engine_call == "image":
            return await self.gateway.ask_for_image(
                identity.user_id, identity.session_key, request.utterance
            )
        speaker_name = (
            identity.display_name if request.platform is Platform.MENTION else None
        )
        return await self.gateway.ask(
            identity.session_key, request.utterance, speaker_name=speaker_name
        )

    async def _send_reply(self, channel: MentionChannel, reply: ResponseEnvelope) -> None:
        if not isinstance(reply, MentionReply):
            raise TypeError(f"Cannot send {type(reply).__name__} inline")
        for chunk in reply.chunks:
            await channel.send_text(chunk)

    async def _safe_typing(self, action) -> None:
        try:
            await action()
        except Exception as e:
            logger.debug("[MENTION] Typing indicator failed: %s", e)
