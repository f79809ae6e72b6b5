"""Backend action definitions.

ActionDescriptor is the backend-native (OpenAI function style) description
of one action. Project actions are defined here rather than fetched from
the backend, together with the cloud function each one maps to.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ActionDescriptor:
    """One invocable backend action within a category."""

    name: str
    description: str = ""
    parameters: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []}
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ActionDescriptor:
        """Build from a backend tool definition.

        Expected shape::

            {"type": "function", "name": ..., "description": ...,
             "parameters": {"type": "object", "properties": {...},
                            "required": [...], "additionalProperties": false}}
        """
        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("Action definition requires a non-empty 'name'")

        description = data.get("description") or ""
        if not isinstance(description, str):
            raise ValueError(f"Action {name} has a non-string 'description'")

        parameters = data.get("parameters")
        if not isinstance(parameters, dict):
            parameters = {"type": "object", "properties": {}, "required": []}

        return cls(
            name=name,
            description=description,
            parameters=copy.deepcopy(parameters),
        )


# Project management actions. additionalProperties is omitted on purpose;
# the translator strips it from backend schemas too.
PROJECT_ACTIONS = [
    ActionDescriptor(
        name="LIST_PROJECTS",
        description="List all projects owned by or shared with the authenticated user",
        parameters={
            "type": "object",
            "properties": {
                "skip": {"type": "number", "description": "Number of projects to skip (for pagination)"},
                "limit": {"type": "number", "description": "Maximum number of projects to return (default 20)"},
            },
            "required": [],
        },
    ),
    ActionDescriptor(
        name="GET_TEMPLATES",
        description="Get available starter templates for creating new projects",
        parameters={
            "type": "object",
            "properties": {
                "_placeholder": {"type": "string", "description": "Unused parameter (no parameters required)"},
            },
            "required": [],
        },
    ),
    ActionDescriptor(
        name="CREATE_PROJECT",
        description="Create a new project from a starter template",
        parameters={
            "type": "object",
            "properties": {
                "templateS3Key": {"type": "string", "description": "S3 key of the starter template to use"},
            },
            "required": ["templateS3Key"],
        },
    ),
    ActionDescriptor(
        name="GET_PROJECT_DETAILS",
        description="Get detailed information about a specific project",
        parameters={
            "type": "object",
            "properties": {
                "projectId": {"type": "string", "description": "The project ID"},
            },
            "required": ["projectId"],
        },
    ),
    ActionDescriptor(
        name="DELETE_PROJECT",
        description="Delete a project (owner only). This action cannot be undone.",
        parameters={
            "type": "object",
            "properties": {
                "projectId": {"type": "string", "description": "The project ID to delete"},
            },
            "required": ["projectId"],
        },
    ),
]

# Project action name -> cloud function
PROJECT_CLOUD_FUNCTIONS: dict[str, str] = {
    "LIST_PROJECTS": "getUserProjects",
    "GET_TEMPLATES": "getTemplates",
    "CREATE_PROJECT": "createProject",
    "GET_PROJECT_DETAILS": "getProjectDetails",
    "DELETE_PROJECT": "deleteProject",
}
