"""Process-wide identity cache.

The configured API key is validated once; the resulting user id is reused
for every later tool listing and tool call.
"""

from __future__ import annotations

import logging

from .backend.client import Backend
from .core.exceptions import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)


class IdentityCache:
    """Single-slot cache for the authenticated user id.

    Concurrent first calls may each validate the key; the first result to
    land is kept and every caller returns it.
    """

    def __init__(self, backend: Backend, api_key: str | None) -> None:
        self._backend = backend
        self._api_key = api_key
        self._identity: str | None = None

    @property
    def identity(self) -> str | None:
        return self._identity

    async def ensure_identity(self) -> str:
        """Return the cached user id, validating the API key on first use.

        Raises:
            ConfigurationError: If no API key is configured
            AuthenticationError: If the backend rejects the key
        """
        if self._identity is not None:
            return self._identity

        if not self._api_key or not self._api_key.strip():
            raise ConfigurationError("APPSAI_API_KEY environment variable is required")

        result = await self._backend.validate_credential(self._api_key)
        if not result.get("valid") or not result.get("userId"):
            reason = result.get("error") or "Invalid API key"
            logger.error(f"API key validation failed: {reason}")
            raise AuthenticationError(reason)

        if self._identity is None:
            self._identity = str(result["userId"])
            logger.info("API key validated")
        return self._identity
