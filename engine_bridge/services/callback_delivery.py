"""Callback Delivery - Best-effort POST of a finished envelope to a callback URL."""

import logging

import httpx

from engine_bridge.domain.entities.response_envelope import SkillEnvelope
from engine_bridge.domain.exceptions import CallbackDeliveryError
from engine_bridge.domain.value_objects.delivery_outcome import DeliveryOutcome

logger = logging.getLogger(__name__)


class CallbackDelivery:
    """Single-attempt delivery; failures are logged and reported, never raised.

    By the time this runs the platform already holds its acknowledgment, so
    there is no channel left to report a delivery error to.
    """

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def deliver(
        self, callback_url: str | None, envelope: SkillEnvelope
    ) -> DeliveryOutcome:
        if not callback_url:
            logger.info("[CALLBACK] No callback URL, skipping delivery")
            return DeliveryOutcome.CALLBACK_SKIPPED

        try:
            await self._post(callback_url, envelope.to_dict())
        except CallbackDeliveryError as e:
            logger.error("[CALLBACK] Delivery to %s failed: %s", e.callback_url, e)
            return DeliveryOutcome.CALLBACK_FAILED

        logger.info("[CALLBACK] Delivered response to %s", callback_url)
        return DeliveryOutcome.CALLBACK_SENT

    async def _post(self, callback_url: str, body: dict) -> None:
        try:
            response = await self._client.post(
                callback_url,
                json=body,
                headers={"Content-Type": "application/json"},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise CallbackDeliveryError(
                f"{type(e).__name__}: {e}", callback_url
            ) from e

        if not response.is_success:
            raise CallbackDeliveryError(
                f"Callback returned HTTP {response.status_code}: {response.text[:200]}",
                callback_url,
            )
