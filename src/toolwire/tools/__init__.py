"""
Tool definitions, the @tool decorator, MCP-backed tools and the tool registry.
"""

from .base import CallableTool, ParamMetadata, Tool, ToolParameter
from .decorators import tool
from .mcp import McpTool, ToolServer, load_mcp_tools
from .registry import ToolRegistry

__all__ = [
    "CallableTool",
    "ParamMetadata",
    "Tool",
    "ToolParameter",
    "tool",
    "McpTool",
    "ToolServer",
    "load_mcp_tools",
    "ToolRegistry",
]
