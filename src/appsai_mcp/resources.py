"""MCP resources backed by project tools.

Resources:
    appsai://projects       -- the user's projects (project_LIST_PROJECTS)
    appsai://project/{id}   -- one project's details (project_GET_PROJECT_DETAILS)
"""

from __future__ import annotations

import logging
import re

from mcp.types import Resource

from .core.exceptions import AppsAIError
from .gateway import Gateway

logger = logging.getLogger(__name__)

PROJECTS_URI = "appsai://projects"
PROJECT_URI_PATTERN = re.compile(r"^appsai://project/(.+)$")

RESOURCES = [
    Resource(
        uri=PROJECTS_URI,
        name="Projects",
        description="List of your AppsAI projects",
        mimeType="application/json",
    ),
]


async def list_resources(gateway: Gateway) -> list[Resource]:
    """List resources, or nothing if the API key cannot be validated."""
    try:
        await gateway.ensure_identity()
    except AppsAIError as e:
        logger.error(f"Error listing resources: {e}")
        return []
    return list(RESOURCES)


async def read_resource(gateway: Gateway, uri: str) -> str:
    """Read a resource as JSON text.

    Raises:
        ValueError: If the URI is unknown or the user cannot be authenticated
    """
    logger.info(f"Resource read: {uri}")
    uri = uri.rstrip("/")

    try:
        await gateway.ensure_identity()
    except AppsAIError as e:
        raise ValueError(f"Failed to read resource: {e}") from e

    if uri == PROJECTS_URI:
        result = await gateway.invoke("project_LIST_PROJECTS", {})
        return result.content[0].text if result.content else "[]"

    match = PROJECT_URI_PATTERN.match(uri)
    if match:
        result = await gateway.invoke("project_GET_PROJECT_DETAILS", {"projectId": match.group(1)})
        return result.content[0].text if result.content else "{}"

    raise ValueError(f"Failed to read resource: Unknown resource: {uri}")
