"""
Tools backed by an MCP tool server.

The transport/session layer is not part of this package; anything that can
list tools and call one by name satisfies `ToolServer`.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Protocol, runtime_checkable

from ..completion import ToolDefinition
from ..exceptions import ToolExecutionError


@runtime_checkable
class ToolServer(Protocol):
    """The two operations consumed from an MCP client session."""

    async def list_tools(self) -> List[ToolDefinition]:
        ...

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> Any:
        ...


class McpTool:
    """
    One tool exposed by a ToolServer.

    Example:
        >>> definitions = await server.list_tools()
        >>> builder = client.agent(cohere.COMMAND_R)
        >>> for definition in definitions:
        ...     builder = builder.mcp_tool(definition, server)
    """

    def __init__(self, definition: ToolDefinition, server: ToolServer):
        self._definition = definition
        self.server = server
        self.name = definition.name

    def definition(self) -> ToolDefinition:
        return self._definition

    async def call(self, arguments: Dict[str, Any]) -> str:
        """Forward the call to the server; non-text results are JSON-encoded."""
        try:
            result = await self.server.call_tool(self.name, arguments)
        except Exception as exc:
            raise ToolExecutionError(tool_name=self.name, error=exc, arguments=arguments) from exc
        if isinstance(result, str):
            return result
        return json.dumps(result, default=str)


async def load_mcp_tools(server: ToolServer) -> List[McpTool]:
    """Wrap every tool the server lists."""
    return [McpTool(definition, server) for definition in await server.list_tools()]


__all__ = ["ToolServer", "McpTool", "load_mcp_tools"]
