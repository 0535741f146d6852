"""
Token usage and cost tracking for provider calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class UsageStats:
    """
    Token usage and cost of a single provider call.

    Attributes:
        prompt_tokens: Number of tokens in the prompt/input.
        completion_tokens: Number of tokens in the completion/output.
        total_tokens: Total tokens used (prompt + completion).
        cost_usd: Estimated cost in USD for this call.
        model: Model id used for this call.
        provider: Provider name (cohere, openai, hyperbolic).
    """

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    cost_usd: float = 0.0
    model: str = ""
    provider: str = ""

    def __post_init__(self) -> None:
        if self.total_tokens == 0 and (self.prompt_tokens or self.completion_tokens):
            self.total_tokens = self.prompt_tokens + self.completion_tokens

    def __str__(self) -> str:
        return (
            f"Input tokens: {self.prompt_tokens}\n"
            f"Output tokens: {self.completion_tokens}\n"
            f"Total tokens: {self.total_tokens}\n"
            f"Cost: ${self.cost_usd:.6f}"
        )


@dataclass
class AgentUsage:
    """
    Aggregates usage across the completion calls made by one agent.

    Attributes:
        total_prompt_tokens: Cumulative prompt tokens.
        total_completion_tokens: Cumulative completion tokens.
        total_tokens: Cumulative total tokens.
        total_cost_usd: Cumulative cost in USD.
        tool_calls: Mapping of tool name to the number of times it was invoked.
        calls: UsageStats of every completion call, in order.
    """

    total_prompt_tokens: int = 0
    total_completion_tokens: int = 0
    total_tokens: int = 0
    total_cost_usd: float = 0.0
    tool_calls: Dict[str, int] = field(default_factory=dict)
    calls: List[UsageStats] = field(default_factory=list)

    def add_usage(self, stats: UsageStats) -> None:
        self.total_prompt_tokens += stats.prompt_tokens
        self.total_completion_tokens += stats.completion_tokens
        self.total_tokens += stats.total_tokens
        self.total_cost_usd += stats.cost_usd
        self.calls.append(stats)

    def add_tool_call(self, tool_name: str) -> None:
        self.tool_calls[tool_name] = self.tool_calls.get(tool_name, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a dictionary for logging/display."""
        return {
            "total_tokens": self.total_tokens,
            "total_prompt_tokens": self.total_prompt_tokens,
            "total_completion_tokens": self.total_completion_tokens,
            "total_cost_usd": round(self.total_cost_usd, 6),
            "tool_calls": dict(self.tool_calls),
            "calls": len(self.calls),
        }

    def __str__(self) -> str:
        lines = [
            "\n" + "=" * 60,
            "📊 Usage Summary",
            "=" * 60,
            f"Total Tokens: {self.total_tokens:,}",
            f"  - Prompt: {self.total_prompt_tokens:,}",
            f"  - Completion: {self.total_completion_tokens:,}",
            f"Total Cost: ${self.total_cost_usd:.6f}",
            f"Completion calls: {len(self.calls)}",
        ]
        if self.tool_calls:
            lines.append("\nTool Calls:")
            for tool_name, count in sorted(self.tool_calls.items(), key=lambda x: -x[1]):
                lines.append(f"  - {tool_name}: {count}")
        lines.append("=" * 60 + "\n")
        return "\n".join(lines)


__all__ = ["UsageStats", "AgentUsage"]
