"""AppsAI MCP command line interface."""
