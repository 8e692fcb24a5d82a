"""Upstream Engine Gateway - Single-shot authenticated calls to the engine.

Both operations return an EngineAnswer for every outcome. Transport problems
(network errors, timeouts, non-2xx, undecodable bodies) become
TransportFailure; an engine that answers but reports failure becomes
LogicalFailure. Nothing is retried.
"""

import logging
from typing import Any

import httpx
from google.auth.exceptions import GoogleAuthError

from engine_bridge.domain.entities.engine_answer import (
    EngineAnswer,
    ImageAnswer,
    LogicalFailure,
    TextAnswer,
    TransportFailure,
)
from engine_bridge.domain.exceptions import (
    EngineUnavailableError,
    UpstreamLogicalFailure,
    UpstreamTransportError,
)
from engine_bridge.services.engine_credentials import EngineCredentials

logger = logging.getLogger(__name__)


def _optional_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


class EngineGateway:
    """Client for the engine's text and image endpoints.

    The ``httpx.AsyncClient`` is created once at startup and shared by every
    in-flight request; the gateway itself holds no per-request state.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient,
        credentials: EngineCredentials,
        text_path: str = "/messages",
        image_path: str = "/kakao/message",
    ):
        self.base_url = base_url.rstrip("/")
        self.text_path = text_path
        self.image_path = image_path
        self._client = client
        self._credentials = credentials

    async def ask(
        self, session_key: str, utterance: str, speaker_name: str | None = None
    ) -> EngineAnswer:
        """
        Ask the engine for a text answer.

        Request:  POST {base_url}/messages
                  {"messages": [utterance], "session_id": ..., "speaker_name": ...}
        Response: {"messages": ["..."]}
        """
        payload: dict[str, Any] = {"messages": [utterance], "session_id": session_key}
        if speaker_name:
            payload["speaker_name"] = speaker_name

        try:
            data = await self._post(self.text_path, payload)
            return self._parse_text_answer(data)
        except UpstreamTransportError as e:
            logger.error("[ENGINE] Text call failed for session=%s: %s", session_key, e)
            return TransportFailure(reason=e.message, status_code=e.status_code)
        except UpstreamLogicalFailure as e:
            logger.warning(
                "[ENGINE] Text call reported failure for session=%s: %s",
                session_key,
                e.message or e.error,
            )
            return LogicalFailure(message=e.message or None, error=e.error)

    async def ask_for_image(
        self, user_id: str, session_id: str, utterance: str
    ) -> EngineAnswer:
        """
        Ask the engine to generate an image.

        Request:  POST {base_url}/kakao/message
                  {"prompt": utterance, "user_id": ..., "session_id": ...}
        Response: {"success": true, "image_url": "...", "response_message": "..."}
                  {"success": false, "error": "..."}
        """
        payload = {"prompt": utterance, "user_id": user_id, "session_id": session_id}

        try:
            data = await self._post(self.image_path, payload)
            return self._parse_image_answer(data)
        except UpstreamTransportError as e:
            logger.error("[ENGINE] Image call failed for session=%s: %s", session_id, e)
            return TransportFailure(reason=e.message, status_code=e.status_code)
        except UpstreamLogicalFailure as e:
            logger.warning(
                "[ENGINE] Image call reported failure for session=%s: %s",
                session_id,
                e.message or e.error,
            )
            return LogicalFailure(message=e.message or None, error=e.error)

    async def _auth_headers(self) -> dict[str, str]:
        try:
            token = await self._credentials.get_token()
        except EngineUnavailableError as e:
            raise UpstreamTransportError(e.message) from e
        except (GoogleAuthError, OSError) as e:
            raise UpstreamTransportError(f"Could not obtain engine token: {e}") from e
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def _post(self, path: str, payload: dict) -> dict:
        url = f"{self.base_url}{path}"
        headers = await self._auth_headers()

        try:
            response = await self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise UpstreamTransportError(
                f"Engine request failed ({type(e).__name__}): {e}"
            ) from e

        if not response.is_success:
            error_detail = response.text
            try:
                error_data = response.json()
                if isinstance(error_data, dict):
                    error_detail = error_data.get("detail") or error_data.get(
                        "error", error_detail
                    )
            except ValueError:
                pass
            raise UpstreamTransportError(
                f"Engine API error ({response.status_code}): {error_detail}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamTransportError("Engine returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise UpstreamTransportError("Engine returned a non-object JSON body")
        return data

    def _parse_text_answer(self, data: dict) -> EngineAnswer:
        if data.get("success") is False:
            raise UpstreamLogicalFailure(
                message=_optional_text(data.get("message"))
                or _optional_text(data.get("response_message"))
                or "",
                error=_optional_text(data.get("error")),
            )

        messages = data.get("messages")
        if not isinstance(messages, list) or not messages:
            # Rendered as the plain fallback text
            logger.warning("[ENGINE] Text call returned no messages")
            return TextAnswer(messages=())
        return TextAnswer(messages=tuple(str(m) for m in messages if m is not None))

    def _parse_image_answer(self, data: dict) -> EngineAnswer:
        caption = _optional_text(data.get("response_message"))
        if not data.get("success"):
            raise UpstreamLogicalFailure(
                message=caption or "", error=_optional_text(data.get("error"))
            )

        image_url = _optional_text(data.get("image_url"))
        if image_url is None:
            image_data = _optional_text(data.get("image_data"))
            if image_data and image_data.startswith(("http://", "https://")):
                image_url = image_data
            elif image_data:
                logger.warning("[ENGINE] Ignoring image_data that is not a URL")

        if image_url:
            return ImageAnswer(image_url=image_url, caption=caption)
        if caption:
            return TextAnswer(messages=(caption,))
        raise UpstreamLogicalFailure(error="Engine returned no image")
