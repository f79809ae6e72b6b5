"""Translate backend action definitions into MCP tools.

Tool names are ``{category}_{ACTION_NAME}``. Two schema rules apply:

* ``additionalProperties`` is stripped from every schema; MCP clients such
  as Claude Code reject tools that carry it.
* Categories that require a project id get a ``projectId`` property as the
  first property and first required entry, unless the backend already
  declares one. This lets callers target any connected project.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from mcp.types import Tool

from ..backend.client import Backend
from ..core.exceptions import CatalogUnavailable
from .categories import ToolCategory, parse_category, requires_project_id
from .definitions import PROJECT_ACTIONS, ActionDescriptor

logger = logging.getLogger(__name__)

PROJECT_ID_PROPERTY = "projectId"
PROJECT_ID_SCHEMA = {
    "type": "string",
    "description": (
        "The project ID to execute this tool on. Required. "
        "Use project_LIST_PROJECTS to see available projects."
    ),
}
CLOSED_SCHEMA_FLAG = "additionalProperties"

Catalog = Mapping[ToolCategory, Sequence[ActionDescriptor]]


def tool_name(category: ToolCategory, action_name: str) -> str:
    return f"{category.value}_{action_name}"


def translate_schema(parameters: dict[str, Any], category: ToolCategory) -> dict[str, Any]:
    """Return an MCP input schema for an action's parameter schema.

    The source schema is never modified.
    """
    schema = copy.deepcopy(parameters)
    schema.pop(CLOSED_SCHEMA_FLAG, None)
    schema.setdefault("type", "object")

    properties = schema.get("properties")
    if not isinstance(properties, dict):
        properties = {}
    required = schema.get("required")
    if not isinstance(required, list):
        required = []

    if requires_project_id(category):
        if PROJECT_ID_PROPERTY not in properties:
            # Rebuild so projectId is the first key
            properties = {PROJECT_ID_PROPERTY: dict(PROJECT_ID_SCHEMA), **properties}
        if PROJECT_ID_PROPERTY not in required:
            required = [PROJECT_ID_PROPERTY, *required]

    schema["properties"] = properties
    schema["required"] = required
    return schema


def convert_action(action: ActionDescriptor, category: ToolCategory) -> Tool:
    """Convert one backend action into an MCP tool."""
    return Tool(
        name=tool_name(category, action.name),
        description=action.description,
        inputSchema=translate_schema(action.parameters, category),
    )


def translate_catalog(catalog: Catalog) -> list[Tool]:
    """Convert a categorized action catalog into a flat list of MCP tools."""
    tools: list[Tool] = []
    for category, actions in catalog.items():
        for action in actions:
            tools.append(convert_action(action, category))
    return tools


def parse_catalog(raw: Mapping[str, Any]) -> dict[ToolCategory, list[ActionDescriptor]]:
    """Parse the backend's raw ``{category: [definition, ...]}`` mapping.

    Unknown categories and malformed definitions are skipped. Project
    actions are defined locally, so a backend ``project`` entry is ignored.
    """
    catalog: dict[ToolCategory, list[ActionDescriptor]] = {}
    for category_name, definitions in raw.items():
        category = parse_category(category_name)
        if category is None:
            logger.warning(f"Skipping unknown tool category from backend: {category_name}")
            continue
        if category is ToolCategory.PROJECT:
            continue
        if not isinstance(definitions, list):
            logger.warning(f"Skipping category {category_name}: definitions are not a list")
            continue

        actions = catalog.setdefault(category, [])
        for definition in definitions:
            try:
                actions.append(ActionDescriptor.from_dict(definition))
            except (AttributeError, ValueError) as e:
                logger.warning(f"Skipping malformed {category_name} tool definition: {e}")
    return catalog


async def fetch_catalog(backend: Backend) -> dict[ToolCategory, list[ActionDescriptor]]:
    """Fetch and parse the backend tool catalog.

    Raises:
        CatalogUnavailable: If the catalog cannot be fetched or parsed
    """
    try:
        raw = await backend.fetch_catalog()
        return parse_catalog(raw)
    except Exception as e:
        raise CatalogUnavailable(f"Tool definitions unavailable: {e}") from e


async def list_tools(backend: Backend) -> list[Tool]:
    """Return every MCP tool: local project tools, then backend categories.

    Never raises. If the backend catalog is unavailable only the project
    tools are returned: "no tools" there means no backend tools, since the
    project tools are defined locally and need no catalog.
    """
    tools = translate_catalog({ToolCategory.PROJECT: PROJECT_ACTIONS})

    try:
        tools.extend(translate_catalog(await fetch_catalog(backend)))
    except CatalogUnavailable as e:
        logger.warning(f"Failed to fetch tool definitions from backend: {e.__cause__ or e}")

    return tools
