"""
ENTITIES - Per-request values flowing through the bridge.
"""

from engine_bridge.domain.entities.inbound_request import (
    ChannelUtterance,
    GroupUtterance,
    InboundRequest,
    MentionMessage,
    SkillUtterance,
)
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

__all__ = [
    "InboundRequest",
    "MentionMessage",
    "SkillUtterance",
    "ChannelUtterance",
    "GroupUtterance",
    "EngineAnswer",
    "TextAnswer",
    "ImageAnswer",
    "LogicalFailure",
    "TransportFailure",
    "ResponseEnvelope",
    "SkillEnvelope",
    "MentionReply",
    "TextOutput",
    "ImageOutput",
]
