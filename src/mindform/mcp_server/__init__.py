"""
MCP Server module for MindForm.

Provides Model Context Protocol server implementation
with stdio and SSE transport support.
"""

from mindform.mcp_server.server import create_mcp_server, create_sse_app, run_mcp_server
from mindform.mcp_server.tools import get_mcp_tools, mcp_generate_form, mcp_validate_answers

__all__ = [
    "create_mcp_server",
    "create_sse_app",
    "run_mcp_server",
    "get_mcp_tools",
    "mcp_generate_form",
    "mcp_validate_answers",
]
