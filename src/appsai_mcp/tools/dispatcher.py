"""Route MCP tool calls to the AppsAI backend.

A tool name ``{category}_{ACTION_NAME}`` is split on its first underscore
only; action names keep any underscores of their own. Each category's
route (direct cloud function or unified executor) comes from
``CATEGORY_RULES``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from mcp.types import CallToolResult, TextContent

from ..backend.client import Backend
from ..core.config import Settings
from ..core.exceptions import BackendFailure, MalformedInvocation
from .categories import CATEGORY_RULES, DispatchRoute, ToolCategory, parse_category
from .definitions import PROJECT_CLOUD_FUNCTIONS
from .payment import build_payment_descriptor, is_insufficient_balance

logger = logging.getLogger(__name__)

RouteHandler = Callable[[ToolCategory, str, dict[str, Any], str], Awaitable[Any]]

# Categories whose actions map to named cloud functions
DIRECT_ENDPOINTS: dict[ToolCategory, dict[str, str]] = {
    ToolCategory.PROJECT: PROJECT_CLOUD_FUNCTIONS,
}


def split_tool_name(name: str) -> tuple[str, str]:
    """Split ``category_ACTION`` on the first underscore.

    Raises:
        MalformedInvocation: If the name has no underscore
    """
    category, sep, action = name.partition("_")
    if not sep:
        raise MalformedInvocation(f"Invalid tool name format: {name}")
    return category, action


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


class Dispatcher:
    """Forwards tool calls to the backend and shapes the response."""

    def __init__(self, backend: Backend, settings: Settings | None = None) -> None:
        self._backend = backend
        self._settings = settings or Settings()
        self._routes: dict[DispatchRoute, RouteHandler] = {
            DispatchRoute.DIRECT: self._call_direct,
            DispatchRoute.UNIFIED: self._call_unified,
        }

    async def _call_direct(
        self, category: ToolCategory, action: str, params: dict[str, Any], identity: str
    ) -> Any:
        endpoint = DIRECT_ENDPOINTS.get(category, {}).get(action)
        if endpoint is None:
            raise MalformedInvocation(f"Unknown {category.value} tool: {action}")
        return await self._backend.execute_direct(endpoint, params, identity)

    async def _call_unified(
        self, category: ToolCategory, action: str, params: dict[str, Any], identity: str
    ) -> Any:
        return await self._backend.execute_unified(category.value, action, params, identity)

    def _resolve(self, name: str) -> tuple[ToolCategory, str, RouteHandler]:
        category_name, action = split_tool_name(name)
        category = parse_category(category_name)
        if category is None:
            raise MalformedInvocation(f"Unknown tool category: {category_name}")
        return category, action, self._routes[CATEGORY_RULES[category].route]

    async def dispatch(self, name: str, arguments: dict[str, Any], identity: str) -> CallToolResult:
        """Execute a tool call.

        Never raises; every failure comes back as an error result.

        Args:
            name: MCP tool name, ``{category}_{ACTION_NAME}``
            arguments: Tool arguments, forwarded unchanged
            identity: Authenticated user id

        Returns:
            A CallToolResult with one text block
        """
        try:
            category, action, route = self._resolve(name)
        except MalformedInvocation as e:
            return text_result(str(e), is_error=True)

        try:
            result = await route(category, action, arguments, identity)
        except MalformedInvocation as e:
            return text_result(str(e), is_error=True)
        except BackendFailure as e:
            if is_insufficient_balance(e.code):
                descriptor = build_payment_descriptor(e.data, self._settings)
                logger.info(
                    f"Insufficient balance for {name}: shortfall {descriptor.shortfall:g}, "
                    f"minimum top-up {descriptor.minimum_topup}"
                )
                return text_result(descriptor.to_json(), is_error=True)
            logger.warning(f"Backend error executing {name} (code {e.code}): {e.message}")
            return text_result(f"Error executing {name}: {e.message}", is_error=True)
        except Exception as e:
            logger.exception(f"Error executing {name}")
            return text_result(f"Error executing {name}: {e}", is_error=True)

        return text_result(json.dumps(result, indent=2, default=str))
