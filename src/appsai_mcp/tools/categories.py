"""Tool categories and their per-category rules.

Categories match the backend AI types. Shared coordination tools
(``DECLARE_*_NEED``) are not exposed; MCP callers reach the underlying
tools directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ToolCategory(StrEnum):
    """Closed set of backend tool categories."""

    PROJECT = "project"
    CANVAS = "canvas"
    BACKEND = "backend"
    SERVER = "server"
    SYSTEM = "system"
    AWS = "aws"
    MONGODB = "mongodb"
    AGENTS = "agents"


class DispatchRoute(StrEnum):
    """How calls in a category reach the backend."""

    # Static action -> cloud function table
    DIRECT = "direct"
    # Unified executeMCPTool entry point
    UNIFIED = "unified"


@dataclass(frozen=True)
class CategoryRule:
    requires_project_id: bool
    route: DispatchRoute


CATEGORY_RULES: dict[ToolCategory, CategoryRule] = {
    ToolCategory.PROJECT: CategoryRule(requires_project_id=False, route=DispatchRoute.DIRECT),
    ToolCategory.CANVAS: CategoryRule(requires_project_id=True, route=DispatchRoute.UNIFIED),
    ToolCategory.BACKEND: CategoryRule(requires_project_id=True, route=DispatchRoute.UNIFIED),
    ToolCategory.SERVER: CategoryRule(requires_project_id=True, route=DispatchRoute.UNIFIED),
    ToolCategory.SYSTEM: CategoryRule(requires_project_id=True, route=DispatchRoute.UNIFIED),
    ToolCategory.AWS: CategoryRule(requires_project_id=True, route=DispatchRoute.UNIFIED),
    ToolCategory.MONGODB: CategoryRule(requires_project_id=True, route=DispatchRoute.UNIFIED),
    ToolCategory.AGENTS: CategoryRule(requires_project_id=True, route=DispatchRoute.UNIFIED),
}


def parse_category(value: str) -> ToolCategory | None:
    """Return the category named ``value``, or None if it is not known."""
    try:
        return ToolCategory(value)
    except ValueError:
        return None


def requires_project_id(category: ToolCategory) -> bool:
    return CATEGORY_RULES[category].requires_project_id
