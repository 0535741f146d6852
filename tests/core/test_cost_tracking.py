"""
Tests for usage accounting and cost calculation.
"""

from __future__ import annotations

import logging

import pytest

from toolwire.models import Cohere, OpenAI
from toolwire.pricing import PRICING, calculate_cost, get_model_pricing
from toolwire.usage import AgentUsage, UsageStats


class TestCalculateCost:
    def test_known_model(self) -> None:
        info = Cohere.COMMAND_R
        cost = calculate_cost(info.id, 1_000_000, 1_000_000)
        assert cost == pytest.approx(info.prompt_cost + info.completion_cost)

    def test_zero_tokens_is_free(self) -> None:
        assert calculate_cost(OpenAI.GPT_4O.id, 0, 0) == 0.0

    def test_unknown_model_warns_and_returns_zero(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="toolwire.pricing"):
            assert calculate_cost("not-a-model", 100, 100) == 0.0
        assert "Unknown model 'not-a-model'" in caplog.text

    def test_pricing_table_matches_registry(self) -> None:
        assert get_model_pricing(Cohere.COMMAND_R_PLUS.id) == {
            "prompt": Cohere.COMMAND_R_PLUS.prompt_cost,
            "completion": Cohere.COMMAND_R_PLUS.completion_cost,
        }
        assert get_model_pricing("nope") is None
        assert Cohere.COMMAND_R.id in PRICING


class TestUsageStats:
    def test_total_computed_when_missing(self) -> None:
        stats = UsageStats(prompt_tokens=10, completion_tokens=5)
        assert stats.total_tokens == 15

    def test_explicit_total_kept(self) -> None:
        assert UsageStats(prompt_tokens=10, completion_tokens=5, total_tokens=20).total_tokens == 20

    def test_str(self) -> None:
        text = str(UsageStats(prompt_tokens=3, completion_tokens=4))
        assert "Input tokens: 3" in text
        assert "Output tokens: 4" in text
        assert "Total tokens: 7" in text


class TestAgentUsage:
    def test_aggregates_calls_and_tools(self) -> None:
        usage = AgentUsage()
        usage.add_usage(UsageStats(prompt_tokens=10, completion_tokens=5, cost_usd=0.01))
        usage.add_usage(UsageStats(prompt_tokens=1, completion_tokens=1, cost_usd=0.02))
        usage.add_tool_call("add")
        usage.add_tool_call("add")

        assert usage.total_tokens == 17
        assert usage.total_cost_usd == pytest.approx(0.03)
        assert usage.tool_calls == {"add": 2}
        assert usage.to_dict()["calls"] == 2
        assert "add: 2" in str(usage)
