"""
Embedding value object and the interface every embedding adapter satisfies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Sequence, runtime_checkable

import numpy as np


@dataclass(frozen=True)
class Embedding:
    """
    A text document and its vector.

    Attributes:
        document: The text that was embedded.
        vector: The embedding, one float per dimension.
    """

    document: str
    vector: List[float]

    def cosine_similarity(self, other: "Embedding") -> float:
        """Cosine similarity between two embeddings (0.0 if either is all zeros)."""
        a = np.asarray(self.vector, dtype=np.float64)
        b = np.asarray(other.vector, dtype=np.float64)
        if a.shape != b.shape:
            raise ValueError(f"Cannot compare vectors of length {a.size} and {b.size}")
        denom = float(np.linalg.norm(a) * np.linalg.norm(b))
        if denom == 0.0:
            return 0.0
        return float(np.dot(a, b) / denom)


@runtime_checkable
class EmbeddingModel(Protocol):
    """
    A provider-bound embedding model.

    `max_documents` is the largest batch the provider accepts in one request;
    batching larger inputs is the caller's job (see EmbeddingsBuilder).
    `ndims` is the vector length, or 0 when the model is unknown.
    """

    provider: str
    model: str
    max_documents: int

    @property
    def ndims(self) -> int:
        ...

    def embed_texts(self, documents: Sequence[str]) -> List[Embedding]:
        """Embed a batch, returning one Embedding per input in input order."""
        ...

    async def aembed_texts(self, documents: Sequence[str]) -> List[Embedding]:
        """Async version of embed_texts()."""
        ...


__all__ = ["Embedding", "EmbeddingModel"]
