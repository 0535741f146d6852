"""
Pytest configuration for toolwire tests.

This file configures pytest with custom markers and command-line options
for running different types of tests, and provides the mocked provider
endpoint used by the adapter tests.
"""

import json

import httpx
import pytest


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end tests with real API calls",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "e2e: mark test as end-to-end (requires real API keys, use --run-e2e to run)"
    )
    config.addinivalue_line("markers", "cohere: mark test as requiring Cohere API key")
    config.addinivalue_line("markers", "hyperbolic: mark test as requiring Hyperbolic API key")


def pytest_collection_modifyitems(config, items):
    """Skip e2e tests unless --run-e2e is passed."""
    if config.getoption("--run-e2e"):
        # --run-e2e given: do not skip e2e tests
        return

    skip_e2e = pytest.mark.skip(reason="Need --run-e2e option to run end-to-end tests")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


class MockEndpoint:
    """
    Fake provider endpoint backed by httpx.MockTransport.

    Answers every request with the same JSON payload (or raw text) and keeps
    the requests it saw, so tests can assert on wire bodies and call counts.
    """

    def __init__(self, payload=None, status_code=200, text=None, handler=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text
        self.handler = handler
        self.requests = []
        self.transport = httpx.MockTransport(self)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def body(self, index: int = -1):
        """Decoded JSON body of a recorded request (the last one by default)."""
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_endpoint():
    """Factory for MockEndpoint instances."""
    return MockEndpoint


@pytest.fixture
def cohere_chat_payload():
    """Builder for Cohere /v1/chat success bodies."""

    def build(text="Hello!", tool_calls=None, meta=None):
        payload = {
            "text": text,
            "generation_id": "gen-123",
            "finish_reason": "COMPLETE",
            "chat_history": [],
        }
        if tool_calls is not None:
            payload["tool_calls"] = tool_calls
        if meta is not None:
            payload["meta"] = meta
        return payload

    return build


@pytest.fixture
def openai_chat_payload():
    """Builder for OpenAI /chat/completions success bodies."""

    def build(content="Hello!", tool_calls=None, usage=None):
        message = {"role": "assistant", "content": content}
        if tool_calls is not None:
            message["tool_calls"] = tool_calls
        payload = {
            "id": "chatcmpl-123",
            "object": "chat.completion",
            "model": "gpt-4o-mini",
            "choices": [{"index": 0, "message": message, "finish_reason": "stop"}],
        }
        if usage is not None:
            payload["usage"] = usage
        return payload

    return build
