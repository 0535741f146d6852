"""
Canonical message model shared by every provider adapter.

A message is a role plus a non-empty, ordered tuple of content parts. The role
decides which part kinds are legal; an illegal combination is rejected when
the message is built, so adapters never see a coerced message.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Tuple, Union

from .exceptions import ConversionError


class Role(str, Enum):
    """Conversation role."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


@dataclass(frozen=True)
class Text:
    """Plain text content."""

    text: str


@dataclass(frozen=True)
class Image:
    """Inline image content, base64-encoded."""

    data: str
    media_type: str = "image/jpeg"

    @classmethod
    def from_path(cls, image_path: str, media_type: str = "image/jpeg") -> "Image":
        """Load and base64-encode an image from disk."""
        path = Path(image_path).expanduser().resolve()
        if not path.exists():
            raise FileNotFoundError(f"Image file not found: {path}")
        return cls(data=base64.b64encode(path.read_bytes()).decode("utf-8"), media_type=media_type)


@dataclass(frozen=True)
class ToolCall:
    """
    A model's request to invoke a tool.

    Attributes:
        id: Call identifier. Must match the id of the ToolResult answering it.
        name: Tool name.
        arguments: Structured arguments (usually a dict decoded from JSON).
    """

    id: str
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolResult:
    """The output of a tool call, sent back to the model in a later turn."""

    id: str
    content: Any


ContentPart = Union[Text, Image, ToolCall, ToolResult]
AssistantContent = Union[Text, ToolCall]

_ALLOWED_PARTS: Dict[Role, FrozenSet[type]] = {
    Role.USER: frozenset({Text, Image, ToolResult}),
    Role.ASSISTANT: frozenset({Text, ToolCall}),
    Role.TOOL: frozenset({ToolResult}),
    Role.SYSTEM: frozenset({Text}),
}


@dataclass(frozen=True)
class Message:
    """
    Conversation turn in the canonical model.

    `content` may be given as a plain string, a single part or any iterable of
    parts; it is normalised to a tuple.

    Example:
        >>> msg = Message.user("What's the weather in Paris?")
        >>> msg.text
        "What's the weather in Paris?"
    """

    role: Role
    content: Tuple[ContentPart, ...]

    def __post_init__(self) -> None:
        try:
            role = Role(self.role)
        except ValueError as exc:
            raise ConversionError(f"Unknown message role: {self.role!r}") from exc
        content = self.content
        if isinstance(content, str):
            content = (Text(content),)
        elif isinstance(content, (Text, Image, ToolCall, ToolResult)):
            content = (content,)
        else:
            content = tuple(content)

        if not content:
            raise ConversionError(f"{role.value} message must have at least one content part")

        allowed = _ALLOWED_PARTS[role]
        for part in content:
            if type(part) not in allowed:
                raise ConversionError(
                    f"{type(part).__name__} content is not allowed in a {role.value} message"
                )

        object.__setattr__(self, "role", role)
        object.__setattr__(self, "content", content)

    @classmethod
    def user(cls, content: Union[str, ContentPart, Iterable[ContentPart]]) -> "Message":
        return cls(role=Role.USER, content=content)  # type: ignore[arg-type]

    @classmethod
    def assistant(cls, content: Union[str, ContentPart, Iterable[ContentPart]]) -> "Message":
        return cls(role=Role.ASSISTANT, content=content)  # type: ignore[arg-type]

    @classmethod
    def system(cls, text: str) -> "Message":
        return cls(role=Role.SYSTEM, content=(Text(text),))

    @classmethod
    def tool_result(cls, id: str, content: Any) -> "Message":
        """Build a tool-role message answering the call with the given id."""
        return cls(role=Role.TOOL, content=(ToolResult(id=id, content=content),))

    @property
    def text(self) -> str:
        """All text parts joined with a newline."""
        return "\n".join(part.text for part in self.content if isinstance(part, Text))

    @property
    def tool_calls(self) -> List[ToolCall]:
        return [part for part in self.content if isinstance(part, ToolCall)]

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain representation for logging or debugging."""
        parts: List[Dict[str, Any]] = []
        for part in self.content:
            if isinstance(part, Text):
                parts.append({"type": "text", "text": part.text})
            elif isinstance(part, Image):
                parts.append({"type": "image", "media_type": part.media_type})
            elif isinstance(part, ToolCall):
                parts.append(
                    {"type": "tool_call", "id": part.id, "name": part.name, "arguments": part.arguments}
                )
            else:
                parts.append({"type": "tool_result", "id": part.id, "content": part.content})
        return {"role": self.role.value, "content": parts}


__all__ = [
    "Role",
    "Text",
    "Image",
    "ToolCall",
    "ToolResult",
    "ContentPart",
    "AssistantContent",
    "Message",
]
