"""AppsAI backend access."""

from .client import Backend, ParseClient

__all__ = ["Backend", "ParseClient"]
