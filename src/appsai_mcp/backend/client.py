"""Parse Cloud client for the AppsAI backend.

Every backend operation is a Parse Cloud function, called over the Parse
REST API::

    POST {server_url}/functions/{name}
    X-Parse-Application-Id: {app_id}

A successful call answers ``{"result": ...}``; a failed one answers
``{"code": <int>, "error": <message or object>}``. Failures of any kind are
raised as :class:`BackendFailure`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol, runtime_checkable

import aiohttp

from ..core.config import Settings
from ..core.exceptions import BackendFailure

logger = logging.getLogger(__name__)

# Status code for failures that never produced a backend response
TRANSPORT_ERROR_CODE = -1

# Cloud function names
VALIDATE_API_KEY_FUNCTION = "validateMCPAPIKey"
TOOL_DEFINITIONS_FUNCTION = "getMCPToolDefinitions"
UNIFIED_EXECUTE_FUNCTION = "executeMCPTool"


@runtime_checkable
class Backend(Protocol):
    """Operations the gateway needs from the AppsAI backend."""

    async def validate_credential(self, api_key: str) -> dict[str, Any]:
        """Return ``{"valid": bool, "userId"?: str, "error"?: str}``."""
        ...

    async def fetch_catalog(self) -> dict[str, list[dict[str, Any]]]:
        """Return raw tool definitions grouped by category."""
        ...

    async def execute_unified(
        self, category: str, action: str, params: dict[str, Any], identity: str
    ) -> Any:
        """Run a categorized action through the unified executor."""
        ...

    async def execute_direct(self, endpoint: str, params: dict[str, Any], identity: str) -> Any:
        """Run a named cloud function on behalf of ``identity``."""
        ...


class ParseClient:
    """Backend implementation over the Parse Cloud REST API."""

    def __init__(
        self,
        server_url: str,
        app_id: str,
        request_timeout: float = 120.0,
    ) -> None:
        self.server_url = server_url.rstrip("/")
        self.app_id = app_id
        self.request_timeout = request_timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> ParseClient:
        return cls(
            server_url=settings.server_url,
            app_id=settings.app_id,
            request_timeout=settings.request_timeout,
        )

    def _headers(self, session_token: str | None = None) -> dict[str, str]:
        headers = {
            "X-Parse-Application-Id": self.app_id,
            "Content-Type": "application/json",
        }
        if session_token:
            headers["X-Parse-Session-Token"] = session_token
        return headers

    async def run_cloud_function(
        self,
        name: str,
        params: dict[str, Any],
        session_token: str | None = None,
    ) -> Any:
        """Run a Parse Cloud function and return its ``result``.

        Args:
            name: Cloud function name
            params: JSON-serializable function parameters
            session_token: Optional Parse session token

        Returns:
            The function's result value

        Raises:
            BackendFailure: On transport errors or a failed function call
        """
        url = f"{self.server_url}/functions/{name}"
        try:
            timeout = aiohttp.ClientTimeout(total=self.request_timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=params, headers=self._headers(session_token)) as resp:
                    try:
                        body = await resp.json(content_type=None)
                    except ValueError:
                        text = await resp.text()
                        raise BackendFailure(resp.status, f"Invalid response from {name}: {text[:200]}")

                    if resp.status >= 400 or not isinstance(body, dict) or "result" not in body:
                        raise _failure_from_body(resp.status, body)

                    return body["result"]

        except aiohttp.ClientError as e:
            logger.warning(f"Cloud function {name} connection error: {e}")
            raise BackendFailure(TRANSPORT_ERROR_CODE, f"Connection error: {e}") from e
        except asyncio.TimeoutError as e:
            logger.warning(f"Cloud function {name} timed out after {self.request_timeout}s")
            raise BackendFailure(TRANSPORT_ERROR_CODE, "Request timeout") from e

    async def validate_credential(self, api_key: str) -> dict[str, Any]:
        # The cloud function authenticates the key itself; no master key.
        try:
            result = await self.run_cloud_function(VALIDATE_API_KEY_FUNCTION, {"apiKey": api_key})
        except BackendFailure as e:
            return {"valid": False, "error": e.message}

        if not isinstance(result, dict):
            return {"valid": False, "error": "Malformed validation response"}
        return result

    async def fetch_catalog(self) -> dict[str, list[dict[str, Any]]]:
        result = await self.run_cloud_function(TOOL_DEFINITIONS_FUNCTION, {})
        tools = result.get("tools") if isinstance(result, dict) else None
        if not isinstance(tools, dict):
            raise BackendFailure(TRANSPORT_ERROR_CODE, "Tool definitions response has no 'tools' mapping")
        return tools

    async def execute_unified(
        self, category: str, action: str, params: dict[str, Any], identity: str
    ) -> Any:
        return await self.run_cloud_function(
            UNIFIED_EXECUTE_FUNCTION,
            {
                "category": category,
                "tool": action,
                "params": params,
                "userId": identity,
            },
        )

    async def execute_direct(self, endpoint: str, params: dict[str, Any], identity: str) -> Any:
        return await self.run_cloud_function(endpoint, {**params, "_mcpUserId": identity})


def _failure_from_body(status: int, body: Any) -> BackendFailure:
    """Build a BackendFailure from a Parse error body."""
    if not isinstance(body, dict):
        return BackendFailure(status, f"Unexpected response (HTTP {status})")

    code = body.get("code", status)
    error = body.get("error")
    data = body.get("data")

    # Cloud code may throw a structured object instead of a string
    if isinstance(error, dict):
        code = error.get("code", code)
        data = error.get("data", data)
        error = error.get("message")

    message = error if isinstance(error, str) and error else f"Backend error (HTTP {status})"
    try:
        code = int(code)
    except (TypeError, ValueError):
        code = status
    return BackendFailure(code, message, data if isinstance(data, dict) else None)
