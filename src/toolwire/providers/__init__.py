"""Provider adapters. Import the provider module you need, e.g. `providers.cohere`."""

from . import cohere, hyperbolic, openai
from .base import CompletionModel

__all__ = ["CompletionModel", "cohere", "hyperbolic", "openai"]
