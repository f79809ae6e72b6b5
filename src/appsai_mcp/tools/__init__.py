"""Tool translation and dispatch.

This package re-exports the pieces the MCP server needs so callers can
write ``from appsai_mcp.tools import list_tools, Dispatcher``.
"""

from .categories import CATEGORY_RULES, CategoryRule, DispatchRoute, ToolCategory
from .definitions import PROJECT_ACTIONS, PROJECT_CLOUD_FUNCTIONS, ActionDescriptor
from .dispatcher import Dispatcher, split_tool_name, text_result
from .payment import PaymentDescriptor, build_payment_descriptor
from .translator import convert_action, list_tools, parse_catalog, translate_catalog

__all__ = [
    # Categories
    "CATEGORY_RULES",
    "CategoryRule",
    "DispatchRoute",
    "ToolCategory",
    # Definitions
    "PROJECT_ACTIONS",
    "PROJECT_CLOUD_FUNCTIONS",
    "ActionDescriptor",
    # Translation
    "convert_action",
    "list_tools",
    "parse_catalog",
    "translate_catalog",
    # Dispatch
    "Dispatcher",
    "split_tool_name",
    "text_result",
    # Payment
    "PaymentDescriptor",
    "build_payment_descriptor",
]
