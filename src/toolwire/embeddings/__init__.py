"""Embedding value object, model interface and batching builder."""

from .builder import EmbeddingsBuilder
from .provider import Embedding, EmbeddingModel

__all__ = ["Embedding", "EmbeddingModel", "EmbeddingsBuilder"]
