"""
Batching helper on top of an EmbeddingModel.

Embedding adapters refuse batches larger than their provider's limit; the
builder splits any number of documents into compliant batches and stitches
the results back together in input order.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Iterable, List

if TYPE_CHECKING:
    from .provider import Embedding, EmbeddingModel


class EmbeddingsBuilder:
    """
    Collect documents, then embed them in provider-sized batches.

    Example:
        >>> embeddings = await (
        ...     client.embeddings(cohere.EMBED_ENGLISH_V3)
        ...     .document("first")
        ...     .documents(["second", "third"])
        ...     .abuild()
        ... )
    """

    def __init__(self, model: "EmbeddingModel"):
        self.model = model
        self._documents: List[str] = []

    def document(self, text: str) -> "EmbeddingsBuilder":
        self._documents.append(text)
        return self

    def documents(self, texts: Iterable[str]) -> "EmbeddingsBuilder":
        self._documents.extend(texts)
        return self

    def batches(self) -> List[List[str]]:
        """Split the collected documents into batches of at most model.max_documents."""
        size = max(1, self.model.max_documents)
        return [self._documents[i : i + size] for i in range(0, len(self._documents), size)]

    def build(self) -> List["Embedding"]:
        """Embed every batch sequentially."""
        results: List["Embedding"] = []
        for batch in self.batches():
            results.extend(self.model.embed_texts(batch))
        return results

    async def abuild(self) -> List["Embedding"]:
        """Embed every batch concurrently; output order matches input order."""
        batch_results = await asyncio.gather(
            *(self.model.aembed_texts(batch) for batch in self.batches())
        )
        return [embedding for batch in batch_results for embedding in batch]


__all__ = ["EmbeddingsBuilder"]
