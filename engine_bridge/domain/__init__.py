"""
DOMAIN LAYER - Bridge data model

This layer contains:
- Entities: per-request values (inbound requests, engine answers, envelopes)
- Value Objects: immutable identifiers and tags (Platform, Identity, outcomes)
- Exceptions: the bridge failure taxonomy

RULES:
1. NO framework imports (no FastAPI, httpx, slack_sdk)
2. NO I/O operations
3. Nothing here outlives a single request
"""
