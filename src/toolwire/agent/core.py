"""
Agent: a completion model plus a preamble, static context and tools.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional, Sequence, Union

from ..completion import CompletionRequest, CompletionResponse
from ..message import Message
from ..providers.base import CompletionModel
from ..tools.registry import ToolRegistry
from ..usage import AgentUsage
from .config import AgentConfig

logger = logging.getLogger(__name__)

Prompt = Union[str, Message]


class Agent:
    """
    Single-turn agent over any CompletionModel.

    `chat()` answers with the model's text, or, when the model asks for a tool,
    runs the first requested tool and answers with its output. There is no
    loop feeding the result back to the model and no retry; provider and tool
    errors propagate to the caller.

    Attributes:
        model: The completion model requests are sent to.
        tools: ToolRegistry of local and MCP-backed tools offered to the model.
        config: Preamble, context, sampling settings and hooks.
        usage: Cumulative token usage and tool invocations.

    Example:
        >>> client = cohere.Client.from_env()
        >>> agent = (
        ...     client.agent(cohere.COMMAND_R)
        ...     .preamble("You are a calculator.")
        ...     .tool(add)
        ...     .build()
        ... )
        >>> await agent.prompt("What is 2 + 5?")
        '7'
    """

    def __init__(
        self,
        model: CompletionModel,
        tools: Optional[ToolRegistry] = None,
        config: Optional[AgentConfig] = None,
    ):
        self.model = model
        self.tools = tools if tools is not None else ToolRegistry()
        self.config = config or AgentConfig()
        self.usage = AgentUsage()

    def reset(self) -> None:
        """Clear accumulated usage."""
        self.usage = AgentUsage()

    def _call_hook(self, hook_name: str, *args: Any) -> None:
        """Call a hook if configured; hook failures are logged and never break a call."""
        if not self.config.hooks or hook_name not in self.config.hooks:
            return
        try:
            self.config.hooks[hook_name](*args)
        except Exception as exc:  # noqa: BLE001
            logger.warning(f"Hook '{hook_name}' raised {type(exc).__name__}: {exc}")

    def build_request(self, prompt: Prompt, chat_history: Sequence[Message] = ()) -> CompletionRequest:
        """The CompletionRequest this agent would send for `prompt`."""
        if isinstance(prompt, str):
            prompt = Message.user(prompt)
        return CompletionRequest(
            prompt=prompt,
            preamble=self.config.preamble,
            chat_history=list(chat_history),
            documents=list(self.config.static_context),
            tools=self.tools.definitions(),
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
            additional_params=self.config.additional_params,
        )

    async def completion(
        self, prompt: Prompt, chat_history: Sequence[Message] = ()
    ) -> CompletionResponse:
        """Send one completion request and return the canonical response."""
        request = self.build_request(prompt, chat_history)
        self._call_hook("on_llm_start", request)
        response = await self.model.acomplete(request)

        self.usage.add_usage(response.usage)
        self._call_hook("on_llm_end", response, response.usage)

        if (
            self.config.cost_warning_threshold
            and self.usage.total_cost_usd > self.config.cost_warning_threshold
        ):
            logger.warning(
                f"Cost warning: total cost ${self.usage.total_cost_usd:.6f} "
                f"exceeds threshold ${self.config.cost_warning_threshold:.6f}"
            )
        return response

    async def chat(self, prompt: Prompt, chat_history: Sequence[Message] = ()) -> str:
        """
        Answer `prompt`: the model's text, or the output of the first tool it called.

        Raises:
            ToolValidationError: If the model called an unknown tool or sent bad arguments.
            ToolExecutionError: If the tool failed.
        """
        response = await self.completion(prompt, chat_history)
        tool_calls = response.tool_calls
        if not tool_calls:
            return response.text or ""

        call = tool_calls[0]
        if len(tool_calls) > 1:
            logger.debug(f"Model requested {len(tool_calls)} tools; running only '{call.name}'")

        self._call_hook("on_tool_start", call.name, call.arguments)
        start = time.time()
        try:
            result = await self.tools.call(call.name, call.arguments)
        except Exception as exc:
            self._call_hook("on_tool_error", call.name, exc, call.arguments)
            raise
        self.usage.add_tool_call(call.name)
        self._call_hook("on_tool_end", call.name, result, time.time() - start)
        return result

    async def prompt(self, prompt: Prompt) -> str:
        """`chat()` with an empty history."""
        return await self.chat(prompt, [])


__all__ = ["Agent", "Prompt"]
