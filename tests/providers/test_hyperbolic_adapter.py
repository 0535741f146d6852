"""
Tests for the Hyperbolic client (OpenAI-compatible wire format).
"""

from __future__ import annotations

import pytest

from toolwire.completion import CompletionRequest
from toolwire.exceptions import ProviderConfigurationError, ProviderError
from toolwire.message import Message
from toolwire.providers import hyperbolic


class TestHyperbolic:
    def test_posts_to_hyperbolic_host(self, make_endpoint, openai_chat_payload) -> None:
        endpoint = make_endpoint(openai_chat_payload(content="hello"))
        client = hyperbolic.Client("test-key", transport=endpoint.transport)

        response = client.completion_model(hyperbolic.LLAMA_3_1_8B).complete(
            CompletionRequest(prompt=Message.user("hi"))
        )

        assert str(endpoint.requests[0].url) == "https://api.hyperbolic.xyz/v1/chat/completions"
        assert endpoint.body()["model"] == "meta-llama/Meta-Llama-3.1-8B-Instruct"
        assert response.text == "hello"

    def test_errors_name_hyperbolic(self, make_endpoint) -> None:
        endpoint = make_endpoint(text="upstream unavailable", status_code=503)
        client = hyperbolic.Client("test-key", transport=endpoint.transport)

        with pytest.raises(ProviderError) as exc_info:
            client.completion_model(hyperbolic.DEEPSEEK_R1).complete(CompletionRequest(prompt=Message.user("x")))

        assert exc_info.value.provider == "hyperbolic"
        assert exc_info.value.body == "upstream unavailable"

    def test_usage_reports_hyperbolic(self, make_endpoint, openai_chat_payload) -> None:
        usage = {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5}
        endpoint = make_endpoint(openai_chat_payload(usage=usage))
        client = hyperbolic.Client("test-key", transport=endpoint.transport)

        response = client.completion_model(hyperbolic.LLAMA_3_3_70B).complete(
            CompletionRequest(prompt=Message.user("x"))
        )

        assert response.usage.provider == "hyperbolic"
        assert response.usage.total_tokens == 5

    def test_from_env_missing(self, monkeypatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("HYPERBOLIC_API_KEY", raising=False)
        with pytest.raises(ProviderConfigurationError, match="HYPERBOLIC_API_KEY"):
            hyperbolic.Client.from_env()

    def test_invalid_key_names_env_var(self) -> None:
        with pytest.raises(ProviderConfigurationError, match="HYPERBOLIC_API_KEY"):
            hyperbolic.Client("bad\nkey")
