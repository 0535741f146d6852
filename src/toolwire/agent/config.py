"""
Configuration options for the agent.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..completion import Document

# Hook type definitions
HookCallable = Callable[..., None]
Hooks = Dict[str, HookCallable]


@dataclass
class AgentConfig:
    """
    Settings an Agent applies to every completion request it sends.

    Attributes:
        preamble: System instructions sent with every request. Default: None.
        static_context: Documents attached to every request. Default: empty.
        temperature: Sampling temperature; None leaves the provider default.
        max_tokens: Output token cap; None leaves the provider default.
        additional_params: Raw wire fields merged over each request body.
        cost_warning_threshold: Log a warning once cumulative cost exceeds this
            USD amount. None = no warnings. Default: None.
        hooks: Optional dict of lifecycle hooks for observability. Default: None.
               Available hooks:
               - 'on_llm_start': Called before each completion with (request,)
               - 'on_llm_end': Called after each completion with (response, usage)
               - 'on_tool_start': Called before a tool runs with (tool_name, arguments)
               - 'on_tool_end': Called after a tool runs with (tool_name, result, duration)
               - 'on_tool_error': Called when a tool fails with (tool_name, error, arguments)
    """

    preamble: Optional[str] = None
    static_context: List[Document] = field(default_factory=list)
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    additional_params: Optional[Dict[str, Any]] = None
    cost_warning_threshold: Optional[float] = None
    hooks: Optional[Hooks] = None


__all__ = ["AgentConfig", "HookCallable", "Hooks"]
