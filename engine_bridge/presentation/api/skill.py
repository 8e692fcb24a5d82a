"""
Skill Platform Routes - KakaoTalk skill server webhooks.

ENDPOINTS:
----------
POST /channel/message - text answers
POST /group/message   - image answers

The platform times out long before the engine answers, so both routes
acknowledge immediately with ``useCallback: true`` and finish the work in a
background task that POSTs the result to ``userRequest.callbackUrl``.
"""

import json
import logging

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, BackgroundTasks, Request
from fastapi.responses import JSONResponse

from engine_bridge.domain.entities.inbound_request import (
    ChannelUtterance,
    GroupUtterance,
    SkillUtterance,
)
from engine_bridge.domain.exceptions import BridgeValidationError
from engine_bridge.services.bridge_orchestrator import BridgeOrchestrator

logger = logging.getLogger(__name__)

channel_router = APIRouter(prefix="/channel", tags=["skill"])
group_router = APIRouter(prefix="/group", tags=["skill"])


async def _read_json(request: Request):
    body = await request.body()
    try:
        return json.loads(body) if body else None
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise BridgeValidationError("Invalid JSON body")


def _acknowledge(
    skill_request: SkillUtterance,
    orchestrator: BridgeOrchestrator,
    background_tasks: BackgroundTasks,
) -> JSONResponse:
    ack = orchestrator.accept(skill_request)
    # Runs after the acknowledgment has been sent; never awaited by the caller
    background_tasks.add_task(orchestrator.process_skill, skill_request)
    return JSONResponse(status_code=200, content=ack)


@channel_router.post("/message")
@inject
async def channel_message(
    request: Request,
    background_tasks: BackgroundTasks,
    orchestrator: FromDishka[BridgeOrchestrator],
):
    """
    Channel skill: text answer delivered via callback.

    Body: {"userRequest": {"utterance", "user": {"id", "type"}, "callbackUrl"}, "bot"}
    Returns: {"version": "2.0", "useCallback": true}
    """
    body = await _read_json(request)
    skill_request = ChannelUtterance.from_payload(body)
    return _acknowledge(skill_request, orchestrator, background_tasks)


@group_router.post("/message")
@inject
async def group_message(
    request: Request,
    background_tasks: BackgroundTasks,
    orchestrator: FromDishka[BridgeOrchestrator],
):
    """
    Group skill: image (and optional caption) delivered via callback.

    Returns: {"version": "2.0", "useCallback": true, "data": {"text": <wait text>}}
    """
    body = await _read_json(request)
    skill_request = GroupUtterance.from_payload(body)
    return _acknowledge(skill_request, orchestrator, background_tasks)
