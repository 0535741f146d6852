"""
Tests for completion.py: request defaults and the tool-call exclusivity rule.
"""

from __future__ import annotations

import pytest

from toolwire.completion import CompletionRequest, CompletionResponse, Document, ToolDefinition
from toolwire.message import Message, Role, Text, ToolCall
from toolwire.usage import UsageStats


class TestCompletionResponse:
    def test_text_only_response(self) -> None:
        response = CompletionResponse.from_parts(text="Hi there", tool_calls=[])
        assert response.choice == (Text("Hi there"),)
        assert response.text == "Hi there"
        assert response.tool_calls == []

    def test_tool_calls_win_over_text(self) -> None:
        calls = [
            ToolCall(id="add", name="add", arguments={"x": 1, "y": 2}),
            ToolCall(id="sub", name="sub", arguments={"x": 3, "y": 1}),
        ]
        response = CompletionResponse.from_parts(text="I'll call tools", tool_calls=calls)
        assert response.choice == tuple(calls)
        assert all(isinstance(item, ToolCall) for item in response.choice)
        assert response.text is None

    def test_empty_text_still_yields_one_text_choice(self) -> None:
        response = CompletionResponse.from_parts(text="", tool_calls=[])
        assert response.choice == (Text(""),)

    def test_empty_choice_rejected(self) -> None:
        with pytest.raises(ValueError):
            CompletionResponse(choice=())

    def test_usage_defaults_to_zeros(self) -> None:
        response = CompletionResponse.from_parts(text="x", tool_calls=[])
        assert response.usage == UsageStats()

    def test_to_message_is_assistant_turn(self) -> None:
        call = ToolCall(id="1", name="add")
        message = CompletionResponse.from_parts(text="", tool_calls=[call]).to_message()
        assert message.role == Role.ASSISTANT
        assert message.tool_calls == [call]


class TestCompletionRequest:
    def test_defaults(self) -> None:
        request = CompletionRequest(prompt=Message.user("hi"))
        assert request.preamble is None
        assert list(request.chat_history) == []
        assert list(request.documents) == []
        assert list(request.tools) == []
        assert request.temperature is None
        assert request.max_tokens is None
        assert request.additional_params is None


class TestToolDefinition:
    def test_default_parameters_are_empty_object(self) -> None:
        definition = ToolDefinition(name="ping", description="Ping")
        assert definition.parameters == {"type": "object", "properties": {}, "required": []}

    def test_to_dict(self) -> None:
        definition = ToolDefinition(name="ping", description="Ping")
        assert definition.to_dict()["name"] == "ping"


class TestDocument:
    def test_to_dict_flattens_props(self) -> None:
        doc = Document(id="doc1", text="content", additional_props={"title": "Intro"})
        assert doc.to_dict() == {"id": "doc1", "text": "content", "title": "Intro"}

    def test_str_renders_file_block(self) -> None:
        assert str(Document(id="d", text="body")) == "<file id: d>\nbody\n</file>\n"

    def test_str_includes_metadata(self) -> None:
        rendered = str(Document(id="d", text="body", additional_props={"k": "v"}))
        assert "<metadata k: 'v' />" in rendered
