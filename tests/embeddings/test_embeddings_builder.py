"""
Tests for EmbeddingsBuilder batching and the Embedding value object.
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from toolwire.embeddings import Embedding, EmbeddingsBuilder
from toolwire.providers import cohere


class FakeEmbeddingModel:
    """Embeds each text as [len(text)] and records batch sizes."""

    provider = "fake"
    model = "fake-embedder"

    def __init__(self, max_documents=3):
        self.max_documents = max_documents
        self.batches = []
        self.started = 0

    @property
    def ndims(self) -> int:
        return 1

    def embed_texts(self, documents):
        self.batches.append(list(documents))
        return [Embedding(document=d, vector=[float(len(d))]) for d in documents]

    async def aembed_texts(self, documents):
        # Later batches finish first to prove ordering does not depend on completion order.
        self.started += 1
        await asyncio.sleep(0.01 / self.started)
        return self.embed_texts(documents)


class TestBatching:
    def test_batches_respect_max_documents(self) -> None:
        builder = EmbeddingsBuilder(FakeEmbeddingModel(max_documents=3)).documents(list("abcdefg"))
        assert builder.batches() == [["a", "b", "c"], ["d", "e", "f"], ["g"]]

    def test_build_preserves_order(self) -> None:
        texts = ["a", "bb", "ccc", "dddd", "eeeee"]
        model = FakeEmbeddingModel(max_documents=2)
        embeddings = EmbeddingsBuilder(model).documents(texts).build()

        assert [e.document for e in embeddings] == texts
        assert [e.vector for e in embeddings] == [[1.0], [2.0], [3.0], [4.0], [5.0]]
        assert model.batches == [["a", "bb"], ["ccc", "dddd"], ["eeeee"]]

    @pytest.mark.asyncio
    async def test_abuild_preserves_order(self) -> None:
        texts = [f"doc-{i}" * (i + 1) for i in range(7)]
        embeddings = await EmbeddingsBuilder(FakeEmbeddingModel(max_documents=2)).documents(texts).abuild()
        assert [e.document for e in embeddings] == texts

    def test_no_documents_no_batches(self) -> None:
        model = FakeEmbeddingModel()
        assert EmbeddingsBuilder(model).build() == []
        assert model.batches == []

    def test_document_chaining(self) -> None:
        builder = EmbeddingsBuilder(FakeEmbeddingModel()).document("one").document("two")
        assert builder.batches() == [["one", "two"]]


class TestCohereBatching:
    def test_large_input_split_at_96(self, make_endpoint) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            texts = json.loads(request.content)["texts"]
            return httpx.Response(200, json={"id": "e", "embeddings": [[float(len(t))] for t in texts]})

        endpoint = make_endpoint(handler=respond)
        client = cohere.Client("k", transport=endpoint.transport)
        texts = [f"text {i}" for i in range(200)]

        embeddings = client.embeddings(cohere.EMBED_ENGLISH_V3).documents(texts).build()

        assert [len(endpoint.body(i)["texts"]) for i in range(endpoint.calls)] == [96, 96, 8]
        assert [e.document for e in embeddings] == texts


class TestEmbedding:
    def test_cosine_similarity(self) -> None:
        a = Embedding("a", [1.0, 0.0])
        b = Embedding("b", [0.0, 1.0])
        c = Embedding("c", [2.0, 0.0])
        assert a.cosine_similarity(b) == pytest.approx(0.0)
        assert a.cosine_similarity(c) == pytest.approx(1.0)

    def test_zero_vector(self) -> None:
        assert Embedding("a", [0.0, 0.0]).cosine_similarity(Embedding("b", [1.0, 1.0])) == 0.0

    def test_length_mismatch(self) -> None:
        with pytest.raises(ValueError):
            Embedding("a", [1.0]).cosine_similarity(Embedding("b", [1.0, 2.0]))
