"""
Completion model interface every provider adapter satisfies.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..completion import CompletionRequest, CompletionResponse


@runtime_checkable
class CompletionModel(Protocol):
    """
    A provider-bound model that turns CompletionRequests into CompletionResponses.

    Implementations convert the request to the provider's wire format, POST it,
    and convert the answer back. Conversion problems raise ConversionError
    before any network call; remote failures raise ProviderError or
    TransportError. Nothing is retried.
    """

    provider: str
    model: str

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Run one completion call, blocking."""
        ...

    async def acomplete(self, request: CompletionRequest) -> CompletionResponse:
        """Run one completion call without blocking the event loop."""
        ...


__all__ = ["CompletionModel"]
