"""MCP Server for AppsAI.

Exposes AppsAI tools to LLMs via the Model Context Protocol:
- Tools: project management plus every backend category
  (canvas, backend, server, system, aws, mongodb, agents)
- Resources: the user's projects
- Prompts: starter prompts for common apps
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, GetPromptResult, Prompt, Resource, Tool

from . import __version__
from . import prompts as prompt_templates
from . import resources as project_resources
from .core.config import Settings, load_settings
from .core.exceptions import ConfigurationError
from .gateway import Gateway
from .tools.dispatcher import text_result

logger = logging.getLogger(__name__)

# Initialize the MCP server
server = Server("appsai", version=__version__)

_gateway: Gateway | None = None


def get_gateway() -> Gateway:
    """Return the process-wide gateway, building it from the environment."""
    global _gateway
    if _gateway is None:
        _gateway = Gateway.from_settings(load_settings())
    return _gateway


def set_gateway(gateway: Gateway | None) -> None:
    global _gateway
    _gateway = gateway


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    try:
        return await get_gateway().list_tools()
    except Exception:
        logger.exception("Error listing tools")
        return []


@server.call_tool(validate_input=False)
async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
    """Handle tool calls."""
    try:
        return await get_gateway().invoke(name, arguments)
    except Exception as e:
        logger.exception(f"Error in tool {name}")
        return text_result(f"Error executing {name}: {e}", is_error=True)


@server.list_resources()
async def list_resources() -> list[Resource]:
    try:
        return await project_resources.list_resources(get_gateway())
    except Exception:
        logger.exception("Error listing resources")
        return []


@server.read_resource()
async def read_resource(uri: Any) -> list[ReadResourceContents]:
    text = await project_resources.read_resource(get_gateway(), str(uri))
    return [ReadResourceContents(content=text, mime_type="application/json")]


@server.list_prompts()
async def list_prompts() -> list[Prompt]:
    return prompt_templates.list_prompts()


@server.get_prompt()
async def get_prompt(name: str, arguments: dict[str, str] | None = None) -> GetPromptResult:
    return prompt_templates.get_prompt(name, arguments)


def configure_logging(level: str = "INFO") -> None:
    # stdout carries the MCP protocol; logging.basicConfig writes to stderr
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def serve(settings: Settings) -> None:
    """Serve MCP over stdio until the client disconnects."""
    set_gateway(Gateway.from_settings(settings))
    logger.info(f"AppsAI MCP server starting (backend {settings.server_url})...")

    async with stdio_server() as (read_stream, write_stream):
        logger.info("Server connected and ready")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run(settings: Settings | None = None) -> None:
    """Run the MCP server.

    Raises:
        ConfigurationError: If APPSAI_API_KEY is not set
    """
    settings = settings or load_settings()
    if not settings.has_api_key:
        raise ConfigurationError("APPSAI_API_KEY environment variable is required")

    asyncio.run(serve(settings))


if __name__ == "__main__":
    from .cli.main import main

    raise SystemExit(main())
