"""
Slack Routes (Webhook Endpoints)
================================

POST /slack/events - Slack Events API (url_verification, app_mention)

Slack requires a response within 3 seconds, so mentions are answered from a
background task and the event is acknowledged with 200 OK immediately.
Slack redelivers events it considers unacknowledged; redeliveries are
acknowledged without being processed again.
"""

import json
import logging

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, BackgroundTasks, HTTPException, Request, Response

from engine_bridge.adapters.slack.slack_adapter import SlackMentionAdapter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/slack", tags=["slack"])


async def _process_mention_event(adapter: SlackMentionAdapter, event: dict) -> None:
    """Background task to answer a mention."""
    try:
        outcome = await adapter.handle_event(event)
        logger.info("[SLACK] Mention in %s finished: %s", event.get("channel"), outcome)
    except Exception as e:
        logger.exception(f"Error processing Slack mention: {e}")


@router.post("/events")
@inject
async def slack_events(
    request: Request,
    background_tasks: BackgroundTasks,
    adapter: FromDishka[SlackMentionAdapter],
):
    """
    Handle Slack events.

    SLACK EVENT TYPES:
    ------------------
    1. url_verification - Slack verifying the endpoint (one-time setup)
    2. event_callback   - app_mention events are answered, others ignored
    """
    if not request.app.state.config.SLACK_ENABLED:
        logger.debug("Slack integration disabled, ignoring event")
        return Response(status_code=200)

    body = await request.body()
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Invalid JSON")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Invalid JSON")

    if data.get("type") == "url_verification":
        logger.info("[SLACK] URL verification challenge received")
        return {"challenge": data.get("challenge")}

    if request.headers.get("X-Slack-Retry-Num"):
        logger.info(
            "[SLACK] Ignoring redelivery #%s (%s)",
            request.headers.get("X-Slack-Retry-Num"),
            request.headers.get("X-Slack-Retry-Reason", "unknown"),
        )
        return Response(status_code=200)

    if data.get("type") == "event_callback":
        event = data.get("event", {}) or {}
        if event.get("type") == "app_mention":
            logger.info(
                "[SLACK] Mention from %s in %s: %s...",
                event.get("user", "unknown"),
                event.get("channel", ""),
                (event.get("text") or "")[:50],
            )
            background_tasks.add_task(_process_mention_event, adapter, event)
        else:
            logger.debug(f"[SLACK] Ignoring event type: {event.get('type')}")

    return Response(status_code=200)
