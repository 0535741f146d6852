"""
Fluent construction of an Agent.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional

from ..completion import Document, ToolDefinition
from ..json_utils import merge
from ..providers.base import CompletionModel
from ..tools.base import CallableTool
from ..tools.mcp import McpTool, ToolServer
from ..tools.registry import ToolRegistry
from .config import AgentConfig, Hooks
from .core import Agent


class AgentBuilder:
    """
    Collects an agent's preamble, context, tools and sampling settings.

    Every method returns the builder so calls can be chained.
    """

    def __init__(self, model: CompletionModel):
        self.model = model
        self._config = AgentConfig()
        self._tools = ToolRegistry()

    def preamble(self, preamble: str) -> "AgentBuilder":
        """Replace the system preamble."""
        self._config.preamble = preamble
        return self

    def append_preamble(self, text: str) -> "AgentBuilder":
        """Append a line to the preamble, starting one if none is set."""
        if self._config.preamble:
            self._config.preamble = f"{self._config.preamble}\n{text}"
        else:
            self._config.preamble = text
        return self

    def context(self, text: str) -> "AgentBuilder":
        """Attach a static context document; ids are assigned in order."""
        doc_id = f"static_doc_{len(self._config.static_context)}"
        self._config.static_context.append(Document(id=doc_id, text=text))
        return self

    def tool(self, tool_instance: CallableTool) -> "AgentBuilder":
        self._tools.register(tool_instance)
        return self

    def mcp_tool(self, definition: ToolDefinition, server: ToolServer) -> "AgentBuilder":
        """Offer one tool listed by an MCP server."""
        self._tools.register(McpTool(definition, server))
        return self

    def temperature(self, temperature: float) -> "AgentBuilder":
        self._config.temperature = temperature
        return self

    def max_tokens(self, max_tokens: int) -> "AgentBuilder":
        self._config.max_tokens = max_tokens
        return self

    def additional_params(self, params: Dict[str, Any]) -> "AgentBuilder":
        """Merge raw wire fields into every request; later calls win."""
        self._config.additional_params = merge(self._config.additional_params or {}, params)
        return self

    def cost_warning_threshold(self, threshold: Optional[float]) -> "AgentBuilder":
        self._config.cost_warning_threshold = threshold
        return self

    def hooks(self, hooks: Hooks) -> "AgentBuilder":
        self._config.hooks = dict(hooks)
        return self

    def build(self) -> Agent:
        """Create the Agent from a snapshot; later builder calls do not affect it."""
        config = replace(
            self._config,
            static_context=list(self._config.static_context),
            additional_params=dict(self._config.additional_params) if self._config.additional_params else None,
            hooks=dict(self._config.hooks) if self._config.hooks else None,
        )
        return Agent(model=self.model, tools=self._tools.copy(), config=config)


__all__ = ["AgentBuilder"]
