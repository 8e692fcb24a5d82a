"""Identity Resolver - Derives the engine session key and speaker name."""

import logging
from uuid import uuid4

from engine_bridge.domain.entities.inbound_request import InboundRequest, MentionMessage
from engine_bridge.domain.value_objects.identity import Identity
from engine_bridge.domain.value_objects.platform import Platform
from engine_bridge.services.platform_variants import get_variant

logger = logging.getLogger(__name__)

DEFAULT_USER_TYPE = "user"


def _generated_user_id() -> str:
    return str(uuid4())


def _placeholder_name(user_id: str) -> str:
    return f"user-{user_id.replace('-', '')[:8]}"


def build_session_key(
    prefix: str,
    conversation_id: str | None = None,
    user_id: str | None = None,
    user_type: str | None = None,
) -> str:
    """Join the non-empty parts with "-" in a fixed order."""
    parts = [prefix, conversation_id, user_id, user_type]
    return "-".join(part for part in parts if part)


class IdentityResolver:
    """Resolves any InboundRequest to an Identity. Never raises.

    Mention messages share one engine session per conversation; the speaker is
    sent separately. Skill requests get one session per user; when the payload
    carries no user id a fresh one is generated, so those requests have no
    continuity.
    """

    def resolve(self, request: InboundRequest) -> Identity:
        variant = get_variant(request.platform)
        user_id = request.user_id or _generated_user_id()
        if not request.user_id:
            logger.debug(
                "No user id on %s request, generated %s", request.platform.value, user_id
            )

        if request.platform is Platform.MENTION:
            conversation_id = request.conversation_id or _generated_user_id()
            session_key = build_session_key(variant.session_prefix, conversation_id)
        else:
            session_key = build_session_key(
                variant.session_prefix,
                request.conversation_id,
                user_id,
                request.user_type or DEFAULT_USER_TYPE,
            )

        return Identity(
            session_key=session_key,
            user_id=user_id,
            display_name=self.display_name(request, user_id),
        )

    def display_name(self, request: InboundRequest, user_id: str) -> str:
        if isinstance(request, MentionMessage):
            for name in (request.display_name, request.username):
                if name and name.strip():
                    return name.strip()
        return _placeholder_name(user_id)
