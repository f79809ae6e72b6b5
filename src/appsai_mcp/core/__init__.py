"""Core configuration and error types for AppsAI MCP."""

from .config import Settings, load_env_file, load_settings
from .exceptions import (
    AppsAIError,
    AuthenticationError,
    BackendFailure,
    CatalogUnavailable,
    ConfigurationError,
    MalformedInvocation,
)

__all__ = [
    "Settings",
    "load_env_file",
    "load_settings",
    "AppsAIError",
    "AuthenticationError",
    "BackendFailure",
    "CatalogUnavailable",
    "ConfigurationError",
    "MalformedInvocation",
]
