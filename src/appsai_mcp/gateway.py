"""Gateway facade used by the MCP server.

Wires the identity cache, backend client and dispatcher together and
exposes the two operations the server answers: tool listing and tool
invocation. Neither raises.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.types import CallToolResult, Tool

from .backend.client import Backend, ParseClient
from .core.config import Settings
from .core.exceptions import AppsAIError
from .identity import IdentityCache
from .tools.dispatcher import Dispatcher, text_result
from .tools.translator import list_tools

logger = logging.getLogger(__name__)


class Gateway:
    def __init__(self, backend: Backend, settings: Settings) -> None:
        self.backend = backend
        self.settings = settings
        self.identity_cache = IdentityCache(backend, settings.api_key)
        self.dispatcher = Dispatcher(backend, settings)

    @classmethod
    def from_settings(cls, settings: Settings) -> Gateway:
        return cls(ParseClient.from_settings(settings), settings)

    async def ensure_identity(self) -> str:
        return await self.identity_cache.ensure_identity()

    async def list_tools(self) -> list[Tool]:
        """List tools, or nothing if the API key cannot be validated."""
        try:
            await self.ensure_identity()
        except AppsAIError as e:
            logger.error(f"Error listing tools: {e}")
            return []

        tools = await list_tools(self.backend)
        logger.info(f"Returning {len(tools)} tools")
        return tools

    async def invoke(self, name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        """Invoke a tool on behalf of the authenticated user."""
        logger.info(f"Tool call: {name}")
        try:
            identity = await self.ensure_identity()
        except AppsAIError as e:
            logger.error(f"Error executing {name}: {e}")
            return text_result(f"Authentication error: {e}", is_error=True)

        return await self.dispatcher.dispatch(name, arguments or {}, identity)
