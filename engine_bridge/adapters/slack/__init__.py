from engine_bridge.adapters.slack.slack_adapter import SlackMentionAdapter
from engine_bridge.adapters.slack.slack_channel import SlackChannel

__all__ = ["SlackMentionAdapter", "SlackChannel"]
