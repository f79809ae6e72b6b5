"""Shared fixtures for AppsAI MCP tests."""

from __future__ import annotations

from typing import Any

import pytest

from appsai_mcp.core.config import Settings
from appsai_mcp.core.exceptions import BackendFailure


class FakeBackend:
    """In-memory stand-in for the AppsAI backend.

    Records every call so tests can assert on what reached the backend.
    """

    def __init__(
        self,
        catalog: dict[str, list[dict[str, Any]]] | None = None,
        user_id: str = "user-123",
    ) -> None:
        self.catalog = catalog if catalog is not None else {}
        self.user_id = user_id
        self.validation_result: dict[str, Any] | None = None
        self.catalog_error: Exception | None = None
        self.execute_result: Any = {"ok": True}
        self.execute_error: Exception | None = None

        self.validate_calls: list[str] = []
        self.fetch_calls = 0
        self.unified_calls: list[tuple[str, str, dict[str, Any], str]] = []
        self.direct_calls: list[tuple[str, dict[str, Any], str]] = []

    async def validate_credential(self, api_key: str) -> dict[str, Any]:
        self.validate_calls.append(api_key)
        if self.validation_result is not None:
            return self.validation_result
        return {"valid": True, "userId": self.user_id}

    async def fetch_catalog(self) -> dict[str, list[dict[str, Any]]]:
        self.fetch_calls += 1
        if self.catalog_error is not None:
            raise self.catalog_error
        return self.catalog

    async def execute_unified(
        self, category: str, action: str, params: dict[str, Any], identity: str
    ) -> Any:
        self.unified_calls.append((category, action, params, identity))
        if self.execute_error is not None:
            raise self.execute_error
        return self.execute_result

    async def execute_direct(self, endpoint: str, params: dict[str, Any], identity: str) -> Any:
        self.direct_calls.append((endpoint, params, identity))
        if self.execute_error is not None:
            raise self.execute_error
        return self.execute_result

    @property
    def call_count(self) -> int:
        return len(self.unified_calls) + len(self.direct_calls)


SAMPLE_CATALOG = {
    "canvas": [
        {
            "type": "function",
            "name": "READ_FILE",
            "description": "Read a file from the project canvas",
            "parameters": {
                "type": "object",
                "properties": {"path": {"type": "string", "description": "File path"}},
                "required": ["path"],
                "additionalProperties": False,
            },
        },
        {
            "type": "function",
            "name": "LIST_FILES",
            "description": "List files in the project",
            "parameters": {"type": "object", "properties": {}, "required": []},
        },
    ],
    "mongodb": [
        {
            "type": "function",
            "name": "QUERY_COLLECTION",
            "description": "Query a collection",
            "parameters": {
                "type": "object",
                "properties": {
                    "collection": {"type": "string", "description": "Collection name"},
                    "projectId": {"type": "string", "description": "Backend-declared project"},
                },
                "required": ["collection", "projectId"],
                "additionalProperties": True,
            },
        },
    ],
}


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend(catalog=SAMPLE_CATALOG)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-api-key")


@pytest.fixture
def insufficient_balance() -> BackendFailure:
    return BackendFailure(
        402,
        "Insufficient credits",
        {"shortfall": 25, "current": 0, "required": 25, "resourceType": "deployment"},
    )
