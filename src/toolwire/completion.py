"""
Provider-agnostic completion request/response types.

Every provider adapter consumes a CompletionRequest and produces a
CompletionResponse; nothing in here knows about a wire format.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .message import AssistantContent, Message, Text, ToolCall
from .usage import UsageStats

JsonSchema = Dict[str, Any]


@dataclass(frozen=True)
class ToolDefinition:
    """
    Description of a callable tool, as shown to a model.

    Attributes:
        name: Tool name the model uses when calling it.
        description: What the tool does.
        parameters: JSON-schema object with `properties` and optional `required`.
    """

    name: str
    description: str
    parameters: JsonSchema = field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []}
    )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "parameters": self.parameters}


@dataclass(frozen=True)
class Document:
    """A context document attached to a completion request."""

    id: str
    text: str
    additional_props: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, str]:
        payload = {"id": self.id, "text": self.text}
        payload.update(self.additional_props)
        return payload

    def __str__(self) -> str:
        meta = " ".join(f"{key}: {value!r}" for key, value in self.additional_props.items())
        header = f"<file id: {self.id}>" if not meta else f"<file id: {self.id}>\n<metadata {meta} />"
        return f"{header}\n{self.text}\n</file>\n"


@dataclass
class CompletionRequest:
    """
    Everything an adapter needs to issue one completion call.

    Attributes:
        prompt: The message being answered.
        preamble: Optional system instructions.
        chat_history: Earlier turns, oldest first.
        documents: Optional context documents.
        tools: Tools the model may call.
        temperature: Sampling temperature, provider default when None.
        max_tokens: Output token cap, provider default when None.
        additional_params: Raw wire fields merged over the generated request
            (caller values win; nested objects merge, everything else overrides).
    """

    prompt: Message
    preamble: Optional[str] = None
    chat_history: Sequence[Message] = field(default_factory=list)
    documents: Sequence[Document] = field(default_factory=list)
    tools: Sequence[ToolDefinition] = field(default_factory=list)
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    additional_params: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class CompletionResponse:
    """
    Canonical result of a completion call.

    `choice` is never empty. When the provider asked for tools it contains only
    ToolCall entries; otherwise it contains exactly one Text entry.
    """

    choice: Tuple[AssistantContent, ...]
    raw_response: Any = None
    usage: UsageStats = field(default_factory=UsageStats)

    def __post_init__(self) -> None:
        choice = tuple(self.choice)
        if not choice:
            raise ValueError("CompletionResponse.choice must contain at least one item")
        object.__setattr__(self, "choice", choice)

    @classmethod
    def from_parts(
        cls,
        text: str,
        tool_calls: Sequence[ToolCall],
        raw_response: Any = None,
        usage: Optional[UsageStats] = None,
    ) -> "CompletionResponse":
        """Apply the tool-call exclusivity rule: tool calls win over text."""
        choice: Tuple[AssistantContent, ...]
        if tool_calls:
            choice = tuple(tool_calls)
        else:
            choice = (Text(text),)
        return cls(choice=choice, raw_response=raw_response, usage=usage or UsageStats())

    @property
    def text(self) -> Optional[str]:
        first = self.choice[0]
        return first.text if isinstance(first, Text) else None

    @property
    def tool_calls(self) -> List[ToolCall]:
        return [item for item in self.choice if isinstance(item, ToolCall)]

    def to_message(self) -> Message:
        """The assistant turn to append to chat history."""
        return Message.assistant(self.choice)


__all__ = [
    "JsonSchema",
    "ToolDefinition",
    "Document",
    "CompletionRequest",
    "CompletionResponse",
]
