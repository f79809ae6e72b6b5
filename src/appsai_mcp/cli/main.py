#!/usr/bin/env python3
"""
AppsAI MCP CLI - Model Context Protocol gateway for AppsAI.

Commands:
  appsai-mcp serve          Run the MCP server over stdio (default)
  appsai-mcp tools          Authenticate and list the available tools
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from ..core.config import load_env_file, load_settings
from ..core.exceptions import AppsAIError, ConfigurationError
from ..gateway import Gateway

logger = logging.getLogger(__name__)


# ============================================================================
# Commands
# ============================================================================

def cmd_serve(args: argparse.Namespace) -> int:
    """Run the MCP server over stdio."""
    from ..mcp_server import configure_logging, run

    try:
        settings = load_settings()
        configure_logging(args.log_level or settings.log_level)
        run(settings)
        return 0
    except ConfigurationError as e:
        logger.error(f"Fatal error: {e}")
        print(f"❌ {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0


async def _collect_tools(gateway: Gateway) -> list:
    await gateway.ensure_identity()
    return await gateway.list_tools()


def cmd_tools(args: argparse.Namespace) -> int:
    """List the tools the server would expose."""
    logging.basicConfig(level=getattr(logging, (args.log_level or "WARNING").upper(), logging.WARNING))
    try:
        gateway = Gateway.from_settings(load_settings())
        tools = asyncio.run(_collect_tools(gateway))
    except AppsAIError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([t.model_dump(exclude_none=True) for t in tools], indent=2))
        return 0

    for tool in tools:
        required = tool.inputSchema.get("required", [])
        suffix = f"  (requires: {', '.join(required)})" if required else ""
        print(f"  {tool.name}{suffix}")
    print(f"\n{len(tools)} tools")
    return 0


# ============================================================================
# Main Entry Point
# ============================================================================

def app() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='appsai-mcp',
        description='Model Context Protocol gateway for AppsAI',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  appsai-mcp                        Run the MCP server over stdio
  appsai-mcp tools                  List available tools
  appsai-mcp tools --json           Dump tool schemas as JSON

Environment:
  APPSAI_API_KEY (required), PARSE_SERVER_URL, PARSE_APP_ID
        """
    )
    parser.add_argument('--log-level', '-l', help='Logging level (default: APPSAI_LOG_LEVEL or INFO)')

    subparsers = parser.add_subparsers(dest='command')

    # serve
    subparsers.add_parser('serve', help='Run the MCP server over stdio')

    # tools
    tools_parser = subparsers.add_parser('tools', help='List available tools')
    tools_parser.add_argument('--json', action='store_true', help='Print full tool schemas as JSON')

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    load_env_file()

    parser = app()
    args = parser.parse_args(argv)

    commands = {
        'serve': cmd_serve,
        'tools': cmd_tools,
    }

    handler = commands.get(args.command or 'serve')
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
