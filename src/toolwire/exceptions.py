"""
Error taxonomy shared by every provider adapter.

Conversion problems are raised before any network I/O. Provider, document and
transport errors are raised after the call and carry enough context
(provider, operation) to be logged by the caller. Nothing here is retried.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ToolwireError(Exception):
    """Base exception for all toolwire errors."""

    pass


class ConversionError(ToolwireError):
    """Raised when the canonical model cannot be represented in a wire format."""

    def __init__(self, message: str, provider: Optional[str] = None):
        self.provider = provider
        prefix = f"[{provider}] " if provider else ""
        super().__init__(f"{prefix}{message}")


class ProviderError(ToolwireError):
    """Raised when the remote endpoint answers with an error or an unreadable body."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        operation: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.message = message
        self.provider = provider
        self.operation = operation
        self.status_code = status_code
        self.body = body

        status = f" (status={status_code})" if status_code is not None else ""
        super().__init__(f"{provider} {operation} failed{status}: {message}")


class DocumentError(ToolwireError):
    """Raised when request and response cardinality do not line up."""

    def __init__(self, message: str, *, provider: str, expected: int, received: int):
        self.provider = provider
        self.expected = expected
        self.received = received
        super().__init__(f"[{provider}] {message}")


class TransportError(ToolwireError):
    """Raised when the HTTP call itself fails (connection, timeout, protocol)."""

    def __init__(self, message: str, *, provider: str, operation: str):
        self.provider = provider
        self.operation = operation
        super().__init__(f"{provider} {operation} transport failure: {message}")


class ProviderConfigurationError(ToolwireError):
    """Raised when a provider client cannot be configured."""

    def __init__(self, provider_name: str, missing_config: str, env_var: str = ""):
        self.provider_name = provider_name
        self.missing_config = missing_config
        self.env_var = env_var

        message = f"\n{'='*60}\n"
        message += f"❌ Provider Configuration Error: '{provider_name}'\n"
        message += f"{'='*60}\n\n"
        message += f"Problem: {missing_config}\n"
        if env_var:
            message += f"\n💡 How to fix:\n"
            message += f"  1. Set the environment variable:\n"
            message += f"     export {env_var}='your-api-key'\n"
            message += f"  2. Or pass it directly:\n"
            message += f"     client = {provider_name}.Client(api_key='your-api-key')\n"
        message += f"\n{'='*60}\n"

        super().__init__(message)


class ToolValidationError(ToolwireError):
    """Raised when a tool definition or its call arguments are invalid."""

    def __init__(self, tool_name: str, param_name: str, issue: str, suggestion: str = ""):
        self.tool_name = tool_name
        self.param_name = param_name
        self.issue = issue
        self.suggestion = suggestion

        message = f"\n{'='*60}\n"
        message += f"❌ Tool Validation Error: '{tool_name}'\n"
        message += f"{'='*60}\n\n"
        message += f"Parameter: {param_name}\n"
        message += f"Issue: {issue}\n"
        if suggestion:
            message += f"\n💡 Suggestion: {suggestion}\n"
        message += f"\n{'='*60}\n"

        super().__init__(message)


class ToolExecutionError(ToolwireError):
    """Raised when running a tool (local or MCP) fails."""

    def __init__(self, tool_name: str, error: Exception, arguments: Dict[str, Any]):
        self.tool_name = tool_name
        self.error = error
        self.arguments = arguments

        message = f"\n{'='*60}\n"
        message += f"❌ Tool Execution Failed: '{tool_name}'\n"
        message += f"{'='*60}\n\n"
        message += f"Error: {type(error).__name__}: {error}\n"
        message += f"Arguments: {arguments}\n"
        message += f"\n{'='*60}\n"

        super().__init__(message)


class ExtractionError(ToolwireError):
    """Raised when an extractor gets no usable structured data back."""

    pass


# Error families surfaced by CompletionModel.complete / EmbeddingModel.embed_texts
COMPLETION_ERRORS = (ConversionError, ProviderError, TransportError)
EMBEDDING_ERRORS = (ProviderError, DocumentError, TransportError)


__all__ = [
    "ToolwireError",
    "ConversionError",
    "ProviderError",
    "DocumentError",
    "TransportError",
    "ProviderConfigurationError",
    "ToolValidationError",
    "ToolExecutionError",
    "ExtractionError",
    "COMPLETION_ERRORS",
    "EMBEDDING_ERRORS",
]
