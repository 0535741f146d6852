"""
Model registry for the supported providers.

Single source of truth for model ids, pricing and embedding dimensionality.
Embedding adapters resolve `ndims` from this table at construction time;
unknown embedding models resolve to 0.

Example:
    >>> from toolwire.models import Cohere
    >>> Cohere.Embeddings.EMBED_ENGLISH_V3.dimensions
    1024
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal

ModelType = Literal["chat", "embedding"]


@dataclass(frozen=True)
class ModelInfo:
    """
    Metadata for a single model.

    Attributes:
        id: Model identifier sent on the wire (e.g. "command-r").
        provider: Provider name ("cohere", "openai", "hyperbolic").
        type: "chat" or "embedding".
        prompt_cost: Cost in USD per 1M input tokens.
        completion_cost: Cost in USD per 1M output tokens.
        context_window: Maximum context length in tokens.
        dimensions: Embedding vector length (0 for chat models).
    """

    id: str
    provider: str
    type: ModelType
    prompt_cost: float
    completion_cost: float
    context_window: int
    dimensions: int = 0


# =============================================================================
# Cohere
# =============================================================================


class Cohere:
    """Cohere command and embed models."""

    COMMAND_R_PLUS = ModelInfo(
        id="command-r-plus",
        provider="cohere",
        type="chat",
        prompt_cost=2.50,
        completion_cost=10.00,
        context_window=128000,
    )
    COMMAND_R = ModelInfo(
        id="command-r",
        provider="cohere",
        type="chat",
        prompt_cost=0.15,
        completion_cost=0.60,
        context_window=128000,
    )
    COMMAND = ModelInfo(
        id="command",
        provider="cohere",
        type="chat",
        prompt_cost=1.00,
        completion_cost=2.00,
        context_window=4096,
    )
    COMMAND_NIGHTLY = ModelInfo(
        id="command-nightly",
        provider="cohere",
        type="chat",
        prompt_cost=1.00,
        completion_cost=2.00,
        context_window=128000,
    )
    COMMAND_LIGHT = ModelInfo(
        id="command-light",
        provider="cohere",
        type="chat",
        prompt_cost=0.30,
        completion_cost=0.60,
        context_window=4096,
    )
    COMMAND_LIGHT_NIGHTLY = ModelInfo(
        id="command-light-nightly",
        provider="cohere",
        type="chat",
        prompt_cost=0.30,
        completion_cost=0.60,
        context_window=4096,
    )

    class Embeddings:
        """Cohere embedding models."""

        EMBED_ENGLISH_V3 = ModelInfo(
            id="embed-english-v3.0",
            provider="cohere",
            type="embedding",
            prompt_cost=0.10,
            completion_cost=0.0,
            context_window=512,
            dimensions=1024,
        )
        EMBED_ENGLISH_LIGHT_V3 = ModelInfo(
            id="embed-english-light-v3.0",
            provider="cohere",
            type="embedding",
            prompt_cost=0.10,
            completion_cost=0.0,
            context_window=512,
            dimensions=384,
        )
        EMBED_MULTILINGUAL_V3 = ModelInfo(
            id="embed-multilingual-v3.0",
            provider="cohere",
            type="embedding",
            prompt_cost=0.10,
            completion_cost=0.0,
            context_window=512,
            dimensions=1024,
        )
        EMBED_MULTILINGUAL_LIGHT_V3 = ModelInfo(
            id="embed-multilingual-light-v3.0",
            provider="cohere",
            type="embedding",
            prompt_cost=0.10,
            completion_cost=0.0,
            context_window=512,
            dimensions=384,
        )
        EMBED_ENGLISH_V2 = ModelInfo(
            id="embed-english-v2.0",
            provider="cohere",
            type="embedding",
            prompt_cost=0.10,
            completion_cost=0.0,
            context_window=512,
            dimensions=4096,
        )
        EMBED_ENGLISH_LIGHT_V2 = ModelInfo(
            id="embed-english-light-v2.0",
            provider="cohere",
            type="embedding",
            prompt_cost=0.10,
            completion_cost=0.0,
            context_window=512,
            dimensions=1024,
        )
        EMBED_MULTILINGUAL_V2 = ModelInfo(
            id="embed-multilingual-v2.0",
            provider="cohere",
            type="embedding",
            prompt_cost=0.10,
            completion_cost=0.0,
            context_window=256,
            dimensions=768,
        )


# =============================================================================
# OpenAI
# =============================================================================


class OpenAI:
    """OpenAI chat and embedding models."""

    GPT_4O = ModelInfo(
        id="gpt-4o",
        provider="openai",
        type="chat",
        prompt_cost=2.50,
        completion_cost=10.00,
        context_window=128000,
    )
    GPT_4O_MINI = ModelInfo(
        id="gpt-4o-mini",
        provider="openai",
        type="chat",
        prompt_cost=0.15,
        completion_cost=0.60,
        context_window=128000,
    )
    GPT_4_TURBO = ModelInfo(
        id="gpt-4-turbo",
        provider="openai",
        type="chat",
        prompt_cost=10.00,
        completion_cost=30.00,
        context_window=128000,
    )
    GPT_35_TURBO = ModelInfo(
        id="gpt-3.5-turbo",
        provider="openai",
        type="chat",
        prompt_cost=0.50,
        completion_cost=1.50,
        context_window=16385,
    )

    class Embeddings:
        """OpenAI embedding models."""

        TEXT_EMBEDDING_3_SMALL = ModelInfo(
            id="text-embedding-3-small",
            provider="openai",
            type="embedding",
            prompt_cost=0.02,
            completion_cost=0.0,
            context_window=8191,
            dimensions=1536,
        )
        TEXT_EMBEDDING_3_LARGE = ModelInfo(
            id="text-embedding-3-large",
            provider="openai",
            type="embedding",
            prompt_cost=0.13,
            completion_cost=0.0,
            context_window=8191,
            dimensions=3072,
        )
        TEXT_EMBEDDING_ADA_002 = ModelInfo(
            id="text-embedding-ada-002",
            provider="openai",
            type="embedding",
            prompt_cost=0.10,
            completion_cost=0.0,
            context_window=8191,
            dimensions=1536,
        )


# =============================================================================
# Hyperbolic (OpenAI-compatible hosted open models)
# =============================================================================


class Hyperbolic:
    """Hyperbolic hosted models."""

    LLAMA_3_1_8B = ModelInfo(
        id="meta-llama/Meta-Llama-3.1-8B-Instruct",
        provider="hyperbolic",
        type="chat",
        prompt_cost=0.10,
        completion_cost=0.10,
        context_window=131072,
    )
    LLAMA_3_3_70B = ModelInfo(
        id="meta-llama/Llama-3.3-70B-Instruct",
        provider="hyperbolic",
        type="chat",
        prompt_cost=0.40,
        completion_cost=0.40,
        context_window=131072,
    )
    DEEPSEEK_R1 = ModelInfo(
        id="deepseek-ai/DeepSeek-R1",
        provider="hyperbolic",
        type="chat",
        prompt_cost=2.00,
        completion_cost=2.00,
        context_window=131072,
    )
    QWEN2_5_72B_INSTRUCT = ModelInfo(
        id="Qwen/Qwen2.5-72B-Instruct",
        provider="hyperbolic",
        type="chat",
        prompt_cost=0.40,
        completion_cost=0.40,
        context_window=131072,
    )


# =============================================================================
# Aggregated Model Lists
# =============================================================================


def _collect_all_models() -> List[ModelInfo]:
    """Collect all model definitions from provider classes."""
    models = []

    for provider_class in [Cohere, OpenAI, Hyperbolic]:
        containers = [provider_class]
        embeddings = getattr(provider_class, "Embeddings", None)
        if embeddings is not None:
            containers.append(embeddings)
        for container in containers:
            for attr_name in dir(container):
                if attr_name.startswith("_"):
                    continue
                attr = getattr(container, attr_name)
                if isinstance(attr, ModelInfo):
                    models.append(attr)

    return models


ALL_MODELS: List[ModelInfo] = _collect_all_models()

MODELS_BY_ID: Dict[str, ModelInfo] = {model.id: model for model in ALL_MODELS}


def embedding_dimensions(model_id: str) -> int:
    """Return the known vector length for an embedding model, or 0 if unknown."""
    info = MODELS_BY_ID.get(model_id)
    if info is None or info.type != "embedding":
        return 0
    return info.dimensions


__all__ = [
    "ModelInfo",
    "ModelType",
    "Cohere",
    "OpenAI",
    "Hyperbolic",
    "ALL_MODELS",
    "MODELS_BY_ID",
    "embedding_dimensions",
]
