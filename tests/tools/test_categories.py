"""Tests for tool categories."""

from __future__ import annotations

from appsai_mcp.tools.categories import (
    CATEGORY_RULES,
    DispatchRoute,
    ToolCategory,
    parse_category,
    requires_project_id,
)
from appsai_mcp.tools.dispatcher import DIRECT_ENDPOINTS


class TestCategoryRules:
    """Tests for the per-category rule table."""

    def test_every_category_has_a_rule(self):
        assert set(CATEGORY_RULES) == set(ToolCategory)

    def test_only_project_skips_project_id(self):
        scoped = {c for c in ToolCategory if requires_project_id(c)}
        assert scoped == set(ToolCategory) - {ToolCategory.PROJECT}

    def test_direct_routes_have_endpoint_tables(self):
        """Every direct-routed category has an action table."""
        for category, rule in CATEGORY_RULES.items():
            if rule.route is DispatchRoute.DIRECT:
                assert category in DIRECT_ENDPOINTS

    def test_parse_category(self):
        assert parse_category("mongodb") is ToolCategory.MONGODB
        assert parse_category("shared") is None
        assert parse_category("CANVAS") is None
