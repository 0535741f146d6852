"""
Cost calculation derived from the model registry (models.py).

Prices are USD per 1M tokens and change over time; check provider
documentation for current rates.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from .models import ALL_MODELS, MODELS_BY_ID

logger = logging.getLogger(__name__)

PRICING: Dict[str, Dict[str, float]] = {
    model.id: {"prompt": model.prompt_cost, "completion": model.completion_cost}
    for model in ALL_MODELS
}


def calculate_cost(model: str, prompt_tokens: int, completion_tokens: int) -> float:
    """
    Calculate cost in USD for given token usage.

    Args:
        model: Model id (e.g. "command-r", "gpt-4o").
        prompt_tokens: Number of prompt/input tokens.
        completion_tokens: Number of completion/output tokens.

    Returns:
        Estimated cost in USD, or 0.0 when the model is not in the registry.
    """
    if model not in MODELS_BY_ID:
        logger.warning(f"Unknown model '{model}' - cannot calculate cost, returning $0.00")
        return 0.0

    model_info = MODELS_BY_ID[model]
    prompt_cost = (prompt_tokens / 1_000_000) * model_info.prompt_cost
    completion_cost = (completion_tokens / 1_000_000) * model_info.completion_cost

    return prompt_cost + completion_cost


def get_model_pricing(model: str) -> Optional[Dict[str, float]]:
    """Return {'prompt': ..., 'completion': ...} prices per 1M tokens, or None."""
    return PRICING.get(model)


__all__ = ["PRICING", "calculate_cost", "get_model_pricing"]
