"""AppsAI MCP - Model Context Protocol gateway for AppsAI.

AppsAI MCP provides:
- Tool discovery (backend action catalog translated into MCP tools)
- Tool dispatch (MCP tool calls forwarded to the AppsAI backend)
- x402-style payment-required responses for insufficient credits
- Project resources and starter prompts
"""

__version__ = "1.0.0"
