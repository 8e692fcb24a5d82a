"""
Bot Adapters Module
===================

Translation layers between external chat platforms and the bridge
orchestrator. Adapters only:
1. Receive events from the platform
2. Translate them into domain InboundRequest values
3. Provide the platform side of the MentionChannel port (typing, replies)

Available Adapters:
- slack: mention bot on Slack (app_mention events)
"""
