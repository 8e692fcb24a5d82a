"""Engine credentials - Identity tokens for calling the upstream engine.

The engine sits behind identity-token auth (Google-signed ID token with the
engine URL as audience). Tokens are fetched with google-auth and refreshed in
a worker thread once they expire; callers only see ``get_token()``.
"""

import asyncio
import logging

import google.auth.transport.requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import id_token

from engine_bridge.domain.exceptions import EngineUnavailableError

logger = logging.getLogger(__name__)


class EngineCredentials:
    """Base credentials: returns the bearer token to send, or None for no auth."""

    async def initialize(self) -> None:
        """Acquire the first token. Raises EngineUnavailableError on failure."""

    async def get_token(self) -> str | None:
        return None


class StaticCredentials(EngineCredentials):
    """Fixed token (or no auth at all); used for local engines and tests."""

    def __init__(self, token: str | None = None):
        self._token = token

    async def get_token(self) -> str | None:
        return self._token


class GoogleIdTokenCredentials(EngineCredentials):
    """ID token credentials for ``audience``, shared by all in-flight requests."""

    def __init__(self, audience: str):
        self.audience = audience
        self._request = google.auth.transport.requests.Request()
        self._credentials = None
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        try:
            self._credentials = await asyncio.to_thread(
                id_token.fetch_id_token_credentials, self.audience, self._request
            )
            await asyncio.to_thread(self._credentials.refresh, self._request)
        except (GoogleAuthError, OSError, ValueError) as e:
            raise EngineUnavailableError(
                f"Failed to initialize engine client for {self.audience}: {e}"
            ) from e
        logger.info("[ENGINE] Identity token client initialized for %s", self.audience)

    async def get_token(self) -> str | None:
        if self._credentials is None:
            await self.initialize()
        if not self._credentials.valid:
            async with self._lock:
                # Another request may have refreshed while we waited
                if not self._credentials.valid:
                    logger.debug("[ENGINE] Refreshing identity token")
                    await asyncio.to_thread(self._credentials.refresh, self._request)
        return self._credentials.token
