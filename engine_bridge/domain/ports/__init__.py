from engine_bridge.domain.ports.mention_channel import MentionChannel

__all__ = ["MentionChannel"]
