"""Starter prompts for building common apps on AppsAI."""

from __future__ import annotations

from typing import Any

from mcp.types import GetPromptResult, Prompt, PromptArgument, PromptMessage, TextContent

_PROJECT_ARGUMENT = [PromptArgument(name="projectId", description="Target project ID", required=True)]

_PROMPT_TEMPLATES: dict[str, dict[str, Any]] = {
    "build-youtube": {
        "description": "Build a YouTube clone with video uploads, playback, and comments",
        "title": "Build a YouTube clone",
        "arguments": _PROJECT_ARGUMENT,
        "defaults": {"projectId": "unknown"},
        "template": """Build a YouTube clone in project {projectId}.

Features to implement:
1. Video upload with S3 storage (use backend_createS3Bucket, backend_uploadFilesToS3)
2. Video playback page with player component
3. Video listing/feed with thumbnails
4. Comments system with MongoDB (use mongodb_createCollection)
5. Like/dislike functionality
6. User channels and subscriptions
7. Search functionality

Start by listing current files with canvas_LIST_FILES, then build each feature incrementally.
Deploy with system_DEPLOY_ALL when ready.""",
    },
    "build-slack": {
        "description": "Build a Slack clone with real-time messaging and channels",
        "title": "Build a Slack clone",
        "arguments": _PROJECT_ARGUMENT,
        "defaults": {"projectId": "unknown"},
        "template": """Build a Slack clone in project {projectId}.

Features to implement:
1. Real-time messaging with Parse Live Queries
2. Channels (public and private)
3. Direct messages between users
4. Message threads and replies
5. File sharing with S3 (use backend_createS3Bucket)
6. User presence (online/offline status)
7. Message search
8. Emoji reactions

Set up MongoDB collections for messages, channels, and users.
Use backend_SET_BACKEND_FILE for backend real-time logic.
Deploy with system_DEPLOY_ALL when ready.""",
    },
    "build-twitter": {
        "description": "Build a Twitter/X clone with posts, likes, and follows",
        "title": "Build a Twitter/X clone",
        "arguments": _PROJECT_ARGUMENT,
        "defaults": {"projectId": "unknown"},
        "template": """Build a Twitter/X clone in project {projectId}.

Features to implement:
1. Post tweets (280 char limit)
2. Image/video uploads to S3
3. Like and retweet functionality
4. Follow/unfollow users
5. User profiles with bio and avatar
6. Home feed with posts from followed users
7. Trending topics
8. Notifications

Set up MongoDB collections for posts, users, follows, likes.
Build the feed algorithm in backend code.
Deploy with system_DEPLOY_ALL when ready.""",
    },
    "connect-apps": {
        "description": "Connect two AppsAI projects to share data and functionality",
        "title": "Connect two AppsAI projects",
        "arguments": [
            PromptArgument(name="sourceProjectId", description="Source project ID", required=True),
            PromptArgument(name="targetProjectId", description="Target project ID", required=True),
        ],
        "defaults": {"sourceProjectId": "source", "targetProjectId": "target"},
        "template": """Connect project {sourceProjectId} to project {targetProjectId}.

This enables:
1. Shared authentication between apps
2. Cross-app data access
3. Unified API endpoints
4. Shared MongoDB collections

Steps:
1. Get details of both projects with project_GET_PROJECT_DETAILS
2. Set up shared environment variables in both projects
3. Configure CORS for cross-origin requests
4. Create shared API endpoints in backend code
5. Deploy both projects

Use canvas_SET_ENV_VARIABLE and backend_SET_BACKEND_ENV_VARIABLE to configure connections.""",
    },
}


def list_prompts() -> list[Prompt]:
    return [
        Prompt(
            name=name,
            description=prompt_data["description"],
            arguments=prompt_data["arguments"],
        )
        for name, prompt_data in _PROMPT_TEMPLATES.items()
    ]


def get_prompt(name: str, arguments: dict[str, str] | None = None) -> GetPromptResult:
    """Render a prompt template.

    Missing arguments fall back to placeholder values.

    Raises:
        ValueError: If the prompt name is unknown
    """
    prompt_data = _PROMPT_TEMPLATES.get(name)
    if prompt_data is None:
        raise ValueError(f"Unknown prompt: {name}")

    values = dict(prompt_data["defaults"])
    values.update({k: v for k, v in (arguments or {}).items() if k in values and v})

    return GetPromptResult(
        description=prompt_data["title"],
        messages=[
            PromptMessage(
                role="user",
                content=TextContent(type="text", text=prompt_data["template"].format(**values)),
            )
        ],
    )
