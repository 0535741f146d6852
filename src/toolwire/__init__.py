"""Public exports for the toolwire package."""

from .agent import Agent, AgentBuilder, AgentConfig
from .completion import CompletionRequest, CompletionResponse, Document, ToolDefinition
from .embeddings import Embedding, EmbeddingModel, EmbeddingsBuilder
from .exceptions import (
    COMPLETION_ERRORS,
    EMBEDDING_ERRORS,
    ConversionError,
    DocumentError,
    ExtractionError,
    ProviderConfigurationError,
    ProviderError,
    ToolExecutionError,
    ToolValidationError,
    ToolwireError,
    TransportError,
)
from .extractor import Extractor, ExtractorBuilder
from .message import Image, Message, Role, Text, ToolCall, ToolResult
from .models import ALL_MODELS, MODELS_BY_ID, ModelInfo
from .pricing import PRICING, calculate_cost, get_model_pricing
from .providers import CompletionModel, cohere, hyperbolic, openai
from .tools import McpTool, Tool, ToolParameter, ToolRegistry, ToolServer, load_mcp_tools, tool
from .usage import AgentUsage, UsageStats

__version__ = "0.1.0"

__all__ = [
    # Canonical model
    "Message",
    "Role",
    "Text",
    "Image",
    "ToolCall",
    "ToolResult",
    "CompletionRequest",
    "CompletionResponse",
    "Document",
    "ToolDefinition",
    # Providers
    "CompletionModel",
    "cohere",
    "openai",
    "hyperbolic",
    # Embeddings
    "Embedding",
    "EmbeddingModel",
    "EmbeddingsBuilder",
    # Agents and tools
    "Agent",
    "AgentBuilder",
    "AgentConfig",
    "Extractor",
    "ExtractorBuilder",
    "Tool",
    "ToolParameter",
    "ToolRegistry",
    "tool",
    "McpTool",
    "ToolServer",
    "load_mcp_tools",
    # Exceptions
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
    # Usage tracking
    "UsageStats",
    "AgentUsage",
    # Models and pricing
    "ModelInfo",
    "ALL_MODELS",
    "MODELS_BY_ID",
    "PRICING",
    "calculate_cost",
    "get_model_pricing",
]
