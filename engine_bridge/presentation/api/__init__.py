"""
API Routers - FastAPI endpoint definitions.
"""

from engine_bridge.presentation.api.skill import (
    channel_router,
    group_router,
)
from engine_bridge.presentation.api.slack import router as slack_router

__all__ = [
    "channel_router",
    "group_router",
    "slack_router",
]
