"""Tests for the AppsAI MCP CLI."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from appsai_mcp.cli.main import app, cmd_serve, cmd_tools, main
from appsai_mcp.core.config import Settings
from appsai_mcp.gateway import Gateway


@pytest.fixture(autouse=True)
def no_env_file():
    with patch("appsai_mcp.cli.main.load_env_file", return_value=None):
        yield


@pytest.fixture
def fake_gateway(fake_backend):
    gateway = Gateway(fake_backend, Settings(api_key="test-api-key"))
    with patch("appsai_mcp.cli.main.Gateway.from_settings", return_value=gateway):
        yield gateway


class TestArgumentParsing:
    """Test CLI argument parsing."""

    def test_default_command_is_none(self):
        args = app().parse_args([])
        assert args.command is None

    def test_tools_json(self):
        args = app().parse_args(["tools", "--json"])
        assert args.command == "tools"
        assert args.json is True

    def test_log_level(self):
        args = app().parse_args(["--log-level", "DEBUG", "serve"])
        assert args.log_level == "DEBUG"
        assert args.command == "serve"


class TestServeCommand:
    """Test the serve command."""

    def test_missing_key_exits_1(self, monkeypatch):
        monkeypatch.delenv("APPSAI_API_KEY", raising=False)
        with patch("appsai_mcp.mcp_server.asyncio.run") as run:
            assert main(["serve"]) == 1
        run.assert_not_called()

    def test_no_command_runs_serve(self, monkeypatch):
        monkeypatch.setenv("APPSAI_API_KEY", "sk-test")
        with patch("appsai_mcp.mcp_server.asyncio.run") as run:
            assert main([]) == 0
        run.assert_called_once()
        # run() hands asyncio.run a coroutine; close it to avoid a warning
        run.call_args.args[0].close()

    def test_cmd_serve_passes_settings(self, monkeypatch):
        monkeypatch.setenv("APPSAI_API_KEY", "sk-test")
        monkeypatch.setenv("PARSE_SERVER_URL", "http://localhost:1337/parse")
        with patch("appsai_mcp.mcp_server.run") as run:
            assert cmd_serve(app().parse_args(["serve"])) == 0

        settings = run.call_args.args[0]
        assert settings.api_key == "sk-test"
        assert settings.server_url == "http://localhost:1337/parse"


class TestToolsCommand:
    """Test the tools command."""

    def test_lists_names(self, fake_gateway, capsys):
        assert cmd_tools(app().parse_args(["tools"])) == 0
        out = capsys.readouterr().out

        assert "project_LIST_PROJECTS" in out
        assert "canvas_READ_FILE  (requires: projectId, path)" in out
        assert "8 tools" in out

    def test_json_output(self, fake_gateway, capsys):
        assert cmd_tools(app().parse_args(["tools", "--json"])) == 0
        tools = json.loads(capsys.readouterr().out)

        by_name = {t["name"]: t for t in tools}
        assert by_name["canvas_READ_FILE"]["inputSchema"]["required"] == ["projectId", "path"]
        assert "additionalProperties" not in by_name["canvas_READ_FILE"]["inputSchema"]

    def test_rejected_key(self, fake_gateway, fake_backend, capsys):
        fake_backend.validation_result = {"valid": False, "error": "API key revoked"}
        assert cmd_tools(app().parse_args(["tools"])) == 1
        assert "API key revoked" in capsys.readouterr().err
