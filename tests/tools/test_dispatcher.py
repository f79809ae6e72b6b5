"""Tests for tool call dispatch."""

from __future__ import annotations

import json

import pytest

from appsai_mcp.core.config import Settings
from appsai_mcp.core.exceptions import BackendFailure, MalformedInvocation
from appsai_mcp.tools.dispatcher import Dispatcher, split_tool_name


@pytest.fixture
def dispatcher(fake_backend, settings) -> Dispatcher:
    return Dispatcher(fake_backend, settings)


class TestSplitToolName:
    """Tests for tool name parsing."""

    def test_simple_name(self):
        assert split_tool_name("canvas_LIST_FILES") == ("canvas", "LIST_FILES")

    def test_action_underscores_kept(self):
        """Only the first underscore separates category and action."""
        assert split_tool_name("system_DO_A_B") == ("system", "DO_A_B")

    def test_no_underscore_rejected(self):
        with pytest.raises(MalformedInvocation, match="Invalid tool name format: malformed"):
            split_tool_name("malformed")

    def test_trailing_underscore_gives_empty_action(self):
        assert split_tool_name("canvas_") == ("canvas", "")


class TestRouting:
    """Tests for routing calls to the backend."""

    @pytest.mark.asyncio
    async def test_unified_route(self, dispatcher, fake_backend):
        """Scoped categories go through the unified executor."""
        args = {"projectId": "p1", "path": "src/App.tsx"}
        result = await dispatcher.dispatch("canvas_READ_FILE", args, "user-123")

        assert result.isError is False
        assert fake_backend.unified_calls == [("canvas", "READ_FILE", args, "user-123")]
        assert fake_backend.direct_calls == []

    @pytest.mark.asyncio
    async def test_action_with_underscores_forwarded_whole(self, dispatcher, fake_backend):
        await dispatcher.dispatch("system_DO_A_B", {}, "user-123")
        assert fake_backend.unified_calls[0][:2] == ("system", "DO_A_B")

    @pytest.mark.asyncio
    async def test_project_route_uses_cloud_function(self, dispatcher, fake_backend):
        """Project tools call their mapped cloud function directly."""
        await dispatcher.dispatch("project_LIST_PROJECTS", {"limit": 5}, "user-123")

        assert fake_backend.direct_calls == [("getUserProjects", {"limit": 5}, "user-123")]
        assert fake_backend.unified_calls == []

    @pytest.mark.asyncio
    async def test_unknown_project_action(self, dispatcher, fake_backend):
        """Unmapped project actions fail without a backend call."""
        result = await dispatcher.dispatch("project_RENAME_PROJECT", {}, "user-123")

        assert result.isError is True
        assert result.content[0].text == "Unknown project tool: RENAME_PROJECT"
        assert fake_backend.call_count == 0

    @pytest.mark.asyncio
    async def test_malformed_name(self, dispatcher, fake_backend):
        """A name without a category separator never reaches the backend."""
        result = await dispatcher.dispatch("malformed", {}, "user-123")

        assert result.isError is True
        assert len(result.content) == 1
        assert "Invalid tool name format" in result.content[0].text
        assert fake_backend.call_count == 0

    @pytest.mark.asyncio
    async def test_unknown_category(self, dispatcher, fake_backend):
        result = await dispatcher.dispatch("shared_DECLARE_CANVAS_NEED", {}, "user-123")

        assert result.isError is True
        assert result.content[0].text == "Unknown tool category: shared"
        assert fake_backend.call_count == 0


class TestResults:
    """Tests for response shaping."""

    @pytest.mark.asyncio
    async def test_success_is_pretty_json(self, dispatcher, fake_backend):
        fake_backend.execute_result = {"files": ["a.ts", "b.ts"], "count": 2}
        result = await dispatcher.dispatch("canvas_LIST_FILES", {"projectId": "p1"}, "user-123")

        assert result.isError is False
        assert len(result.content) == 1
        assert result.content[0].type == "text"
        assert result.content[0].text == json.dumps(fake_backend.execute_result, indent=2)

    @pytest.mark.asyncio
    async def test_generic_backend_failure(self, dispatcher, fake_backend):
        fake_backend.execute_error = BackendFailure(141, "Project not found")
        result = await dispatcher.dispatch("canvas_LIST_FILES", {"projectId": "nope"}, "user-123")

        assert result.isError is True
        assert result.content[0].text == "Error executing canvas_LIST_FILES: Project not found"

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_error_result(self, dispatcher, fake_backend):
        fake_backend.execute_error = RuntimeError("boom")
        result = await dispatcher.dispatch("canvas_LIST_FILES", {}, "user-123")

        assert result.isError is True
        assert result.content[0].text == "Error executing canvas_LIST_FILES: boom"

    @pytest.mark.asyncio
    async def test_insufficient_balance_returns_payment_descriptor(
        self, dispatcher, fake_backend, insufficient_balance
    ):
        """402 failures produce a structured payment descriptor."""
        fake_backend.execute_error = insufficient_balance
        result = await dispatcher.dispatch("system_DEPLOY_ALL", {"projectId": "p1"}, "user-123")

        assert result.isError is True
        assert len(result.content) == 1
        payload = json.loads(result.content[0].text)
        assert payload["error"] == "INSUFFICIENT_BALANCE"
        assert payload["shortfall"] == 25
        assert payload["resourceType"] == "deployment"
        assert payload["payment"]["minimumTopUp"] == 25
        assert payload["payment"]["recommendedTopUp"] == 30

    @pytest.mark.asyncio
    async def test_insufficient_balance_on_project_route(self, fake_backend):
        """Direct routes get the same payment handling."""
        dispatcher = Dispatcher(fake_backend, Settings(billing_url="https://billing.test"))
        fake_backend.execute_error = BackendFailure(402, "Insufficient credits")
        result = await dispatcher.dispatch("project_CREATE_PROJECT", {"templateS3Key": "t"}, "user-123")

        payload = json.loads(result.content[0].text)
        assert result.isError is True
        assert payload["payment"]["manualUrl"] == "https://billing.test"
        assert payload["payment"]["minimumTopUp"] == 10

    @pytest.mark.asyncio
    async def test_no_local_retry(self, dispatcher, fake_backend, insufficient_balance):
        """A payment-required failure is not retried."""
        fake_backend.execute_error = insufficient_balance
        await dispatcher.dispatch("canvas_LIST_FILES", {}, "user-123")
        assert fake_backend.call_count == 1
