"""
Registry mapping tool names to runnable tools.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..completion import ToolDefinition
from ..exceptions import ToolValidationError
from .base import CallableTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    The set of tools an agent can offer to a model.

    Holds local `Tool`s and `McpTool`s alike; anything with a `name`, a
    `definition()` and an async `call(arguments)` fits.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, CallableTool] = {}

    def register(self, tool_instance: CallableTool) -> None:
        if tool_instance.name in self._tools:
            logger.warning(f"Tool '{tool_instance.name}' registered twice; keeping the latest")
        self._tools[tool_instance.name] = tool_instance

    def get(self, name: str) -> Optional[CallableTool]:
        return self._tools.get(name)

    def list_tools(self) -> List[CallableTool]:
        return list(self._tools.values())

    def copy(self) -> "ToolRegistry":
        """A new registry holding the same tools."""
        registry = ToolRegistry()
        registry._tools = dict(self._tools)
        return registry

    def definitions(self) -> List[ToolDefinition]:
        """ToolDefinitions of every registered tool, in registration order."""
        return [t.definition() for t in self._tools.values()]

    async def call(self, name: str, arguments: Dict[str, Any]) -> str:
        """
        Run a registered tool by name.

        Raises:
            ToolValidationError: If no tool with that name is registered.
            ToolExecutionError: If the tool itself fails.
        """
        tool_instance = self._tools.get(name)
        if tool_instance is None:
            raise ToolValidationError(
                tool_name=name,
                param_name="name",
                issue="Unknown tool requested by the model",
                suggestion=f"Registered tools: {', '.join(self._tools) or 'none'}",
            )
        return await tool_instance.call(arguments)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


__all__ = ["ToolRegistry"]
