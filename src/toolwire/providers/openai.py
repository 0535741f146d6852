"""
OpenAI adapter: Chat Completions and Embeddings over plain HTTP.

The same wire format is spoken by OpenAI-compatible hosts (see hyperbolic.py),
so the client takes the provider name and base URL as parameters.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Type

from ..completion import CompletionRequest, CompletionResponse, Document, ToolDefinition
from ..embeddings.builder import EmbeddingsBuilder
from ..embeddings.provider import Embedding
from ..env import require_env
from ..exceptions import ConversionError, DocumentError, ProviderConfigurationError, ProviderError
from ..json_utils import as_count, drop_none, merge
from ..message import Image, Message, Role, Text, ToolCall, ToolResult
from ..models import OpenAI, embedding_dimensions
from ..pricing import calculate_cost
from ..usage import UsageStats
from ._http import DEFAULT_TIMEOUT, HttpTransport, error_message, read_json

if TYPE_CHECKING:
    from pydantic import BaseModel

    from ..agent.builder import AgentBuilder
    from ..extractor import ExtractorBuilder

logger = logging.getLogger(__name__)

PROVIDER = "openai"
OPENAI_API_BASE_URL = "https://api.openai.com/v1"
API_KEY_ENV = "OPENAI_API_KEY"

CHAT_PATH = "/chat/completions"
EMBEDDINGS_PATH = "/embeddings"

MAX_DOCUMENTS = 2048

GPT_4O = OpenAI.GPT_4O.id
GPT_4O_MINI = OpenAI.GPT_4O_MINI.id
GPT_4_TURBO = OpenAI.GPT_4_TURBO.id
GPT_35_TURBO = OpenAI.GPT_35_TURBO.id

TEXT_EMBEDDING_3_SMALL = OpenAI.Embeddings.TEXT_EMBEDDING_3_SMALL.id
TEXT_EMBEDDING_3_LARGE = OpenAI.Embeddings.TEXT_EMBEDDING_3_LARGE.id
TEXT_EMBEDDING_ADA_002 = OpenAI.Embeddings.TEXT_EMBEDDING_ADA_002.id


class Client:
    """
    Client for OpenAI (or an OpenAI-compatible host).

    Args:
        api_key: API key sent as a bearer token.
        base_url: API root including the version segment.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (e.g. httpx.MockTransport).
        provider: Name used in errors, logs and usage records.
        env_var: Environment variable named in configuration errors.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = OPENAI_API_BASE_URL,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        transport: Optional[Any] = None,
        provider: str = PROVIDER,
        env_var: str = API_KEY_ENV,
    ):
        self.name = provider
        self.http = HttpTransport(
            provider, api_key, base_url, env_var=env_var, timeout=timeout, transport=transport
        )

    @classmethod
    def from_base_url(cls, api_key: str, base_url: str, **kwargs: Any) -> "Client":
        return cls(api_key, base_url=base_url, **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "Client":
        """Create a client from OPENAI_API_KEY (a cwd .env file is loaded first)."""
        api_key = require_env(API_KEY_ENV)
        if not api_key:
            raise ProviderConfigurationError("openai", f"{API_KEY_ENV} is not set", API_KEY_ENV)
        return cls(api_key, **kwargs)

    @property
    def base_url(self) -> str:
        return self.http.base_url

    def completion_model(self, model: str) -> "CompletionModel":
        return CompletionModel(self, model)

    def embedding_model(self, model: str) -> "EmbeddingModel":
        """Create an embedding model; unknown models get ndims=0."""
        return EmbeddingModel(self, model, embedding_dimensions(model))

    def embedding_model_with_ndims(self, model: str, ndims: int) -> "EmbeddingModel":
        return EmbeddingModel(self, model, ndims)

    def embeddings(self, model: str) -> EmbeddingsBuilder:
        return EmbeddingsBuilder(self.embedding_model(model))

    def agent(self, model: str) -> "AgentBuilder":
        from ..agent.builder import AgentBuilder

        return AgentBuilder(self.completion_model(model))

    def extractor(self, model: str, target: Type["BaseModel"]) -> "ExtractorBuilder":
        from ..extractor import ExtractorBuilder

        return ExtractorBuilder(self.completion_model(model), target)

    def close(self) -> None:
        self.http.close()

    async def aclose(self) -> None:
        await self.http.aclose()


# ================================================================
# Message and tool conversion
# ================================================================


def _result_text(content: Any) -> str:
    return content if isinstance(content, str) else json.dumps(content)


def message_to_wire(message: Message, provider: str = PROVIDER) -> List[Dict[str, Any]]:
    """
    Convert one canonical message to Chat Completions messages.

    Tool results become `tool` messages placed before any remaining user
    content, so they directly follow the assistant turn that asked for them.
    """
    if message.role == Role.SYSTEM:
        return [{"role": "system", "content": message.text}]

    if message.role == Role.ASSISTANT:
        text = "\n".join(p.text for p in message.content if isinstance(p, Text))
        entry: Dict[str, Any] = {"role": "assistant", "content": text or None}
        calls = [
            {
                "id": p.id,
                "type": "function",
                "function": {"name": p.name, "arguments": json.dumps(p.arguments)},
            }
            for p in message.content
            if isinstance(p, ToolCall)
        ]
        if calls:
            entry["tool_calls"] = calls
        return [entry]

    wire: List[Dict[str, Any]] = []
    parts: List[Dict[str, Any]] = []
    for part in message.content:
        if isinstance(part, ToolResult):
            wire.append({"role": "tool", "tool_call_id": part.id, "content": _result_text(part.content)})
        elif isinstance(part, Text):
            parts.append({"type": "text", "text": part.text})
        elif isinstance(part, Image):
            parts.append(
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{part.media_type};base64,{part.data}"},
                }
            )
        else:
            raise ConversionError(
                f"{type(part).__name__} content is not supported in a {message.role.value} message",
                provider=provider,
            )
    if parts:
        wire.append({"role": "user", "content": parts})
    return wire


def documents_to_wire(documents: Sequence[Document]) -> Dict[str, Any]:
    attachments = "".join(str(doc) for doc in documents)
    return {"role": "user", "content": f"<attachments>\n{attachments}</attachments>"}


def tool_to_wire(tool: ToolDefinition) -> Dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": tool.parameters,
        },
    }


# ================================================================
# Wire responses
# ================================================================


@dataclass(frozen=True)
class OpenAICompletionResponse:
    """Success payload of POST /chat/completions (first choice only)."""

    id: str
    model: str
    content: str
    finish_reason: str
    tool_calls: List[ToolCall] = field(default_factory=list)
    usage: Optional[Dict[str, Any]] = None

    @classmethod
    def probe(cls, payload: Any) -> Optional["OpenAICompletionResponse"]:
        """Decode the success shape, or return None if the payload is not one."""
        if not isinstance(payload, Mapping):
            return None
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], Mapping):
            return None
        message = choices[0].get("message")
        if not isinstance(message, Mapping):
            return None

        tool_calls = []
        for raw_call in message.get("tool_calls") or []:
            function = raw_call.get("function") if isinstance(raw_call, Mapping) else None
            if not isinstance(function, Mapping) or not isinstance(function.get("name"), str):
                return None
            arguments = function.get("arguments") or "{}"
            if isinstance(arguments, str):
                try:
                    arguments = json.loads(arguments)
                except ValueError:
                    return None
            if not isinstance(arguments, dict):
                return None
            tool_calls.append(
                ToolCall(
                    id=str(raw_call.get("id") or function["name"]),
                    name=function["name"],
                    arguments=arguments,
                )
            )

        content = message.get("content") or ""
        if isinstance(content, list):
            # Some compatible hosts send content as a list of typed parts.
            if not all(isinstance(part, Mapping) for part in content):
                return None
            texts = [part.get("text") for part in content if part.get("type") == "text"]
            if not all(isinstance(text, str) for text in texts):
                return None
            content = "\n".join(texts)
        if not isinstance(content, str):
            return None

        usage = payload.get("usage")
        return cls(
            id=str(payload.get("id") or ""),
            model=str(payload.get("model") or ""),
            content=content,
            finish_reason=str(choices[0].get("finish_reason") or ""),
            tool_calls=tool_calls,
            usage=dict(usage) if isinstance(usage, Mapping) else None,
        )


# ================================================================
# Completion model
# ================================================================


class CompletionModel:
    """Chat Completions model (POST {base_url}/chat/completions)."""

    def __init__(self, client: Client, model: str):
        self.client = client
        self.model = model
        self.provider = client.name

    def build_request(self, request: CompletionRequest) -> Dict[str, Any]:
        """Assemble the wire body. Raises ConversionError before any I/O."""
        messages: List[Dict[str, Any]] = []
        if request.preamble:
            messages.append({"role": "system", "content": request.preamble})
        if request.documents:
            messages.append(documents_to_wire(request.documents))
        for message in request.chat_history:
            messages.extend(message_to_wire(message, self.provider))
        messages.extend(message_to_wire(request.prompt, self.provider))

        body = drop_none(
            {
                "model": self.model,
                "messages": messages,
                "temperature": request.temperature,
                "max_tokens": request.max_tokens,
                "tools": [tool_to_wire(t) for t in request.tools] or None,
            }
        )
        if request.additional_params:
            body = merge(body, request.additional_params)
        return body

    def parse_response(self, payload: Any, raw: str) -> CompletionResponse:
        completion = OpenAICompletionResponse.probe(payload)
        if completion is None:
            message = error_message(payload)
            raise ProviderError(
                message if message is not None else raw,
                provider=self.provider,
                operation="completion",
                body=raw,
            )

        usage = UsageStats(model=self.model, provider=self.provider)
        if completion.usage:
            prompt_tokens = as_count(completion.usage.get("prompt_tokens"))
            completion_tokens = as_count(completion.usage.get("completion_tokens"))
            usage = UsageStats(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=as_count(completion.usage.get("total_tokens")),
                cost_usd=calculate_cost(self.model, prompt_tokens, completion_tokens),
                model=self.model,
                provider=self.provider,
            )
            logger.info(f"{self.provider} completion usage:\n{usage}")
        else:
            logger.info(f"{self.provider} completion usage: n/a")

        return CompletionResponse.from_parts(
            text=completion.content,
            tool_calls=completion.tool_calls,
            raw_response=completion,
            usage=usage,
        )

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        body = self.build_request(request)
        response = self.client.http.post(CHAT_PATH, body, operation="completion")
        payload, raw = read_json(response, provider=self.provider, operation="completion")
        return self.parse_response(payload, raw)

    async def acomplete(self, request: CompletionRequest) -> CompletionResponse:
        body = self.build_request(request)
        response = await self.client.http.apost(CHAT_PATH, body, operation="completion")
        payload, raw = read_json(response, provider=self.provider, operation="completion")
        return self.parse_response(payload, raw)


# ================================================================
# Embedding model
# ================================================================


class EmbeddingModel:
    """Embeddings model (POST {base_url}/embeddings), at most 2048 inputs per call."""

    max_documents = MAX_DOCUMENTS

    def __init__(self, client: Client, model: str, ndims: int):
        self.client = client
        self.model = model
        self.provider = client.name
        self._ndims = ndims

    @property
    def ndims(self) -> int:
        return self._ndims

    def build_request(self, documents: Sequence[str]) -> Dict[str, Any]:
        if len(documents) > self.max_documents:
            raise DocumentError(
                f"At most {self.max_documents} documents per embedding request, got {len(documents)}",
                provider=self.provider,
                expected=self.max_documents,
                received=len(documents),
            )
        return {"model": self.model, "input": list(documents), "encoding_format": "float"}

    def parse_response(self, documents: Sequence[str], payload: Any, raw: str) -> List[Embedding]:
        data = payload.get("data") if isinstance(payload, Mapping) else None
        vectors: Optional[List[List[float]]] = None
        if isinstance(data, list) and all(
            isinstance(item, Mapping) and isinstance(item.get("embedding"), list) for item in data
        ):
            indices = [item.get("index", position) for position, item in enumerate(data)]
            if all(type(index) is int for index in indices) and sorted(indices) == list(range(len(data))):
                ordered = sorted(zip(indices, data), key=lambda pair: pair[0])
                try:
                    vectors = [[float(x) for x in item["embedding"]] for _, item in ordered]
                except (TypeError, ValueError):
                    vectors = None
        if vectors is None:
            message = error_message(payload)
            raise ProviderError(
                message if message is not None else raw,
                provider=self.provider,
                operation="embedding",
                body=raw,
            )

        usage = payload.get("usage")
        if isinstance(usage, Mapping):
            logger.info(f"{self.provider} embeddings usage: {usage.get('total_tokens', 0)} tokens")
        else:
            logger.info(f"{self.provider} embeddings usage: n/a")

        if len(vectors) != len(documents):
            raise DocumentError(
                f"Expected {len(documents)} embeddings, got {len(vectors)}",
                provider=self.provider,
                expected=len(documents),
                received=len(vectors),
            )
        return [Embedding(document=doc, vector=vec) for doc, vec in zip(documents, vectors)]

    def embed_texts(self, documents: Sequence[str]) -> List[Embedding]:
        documents = list(documents)
        if not documents:
            return []
        body = self.build_request(documents)
        response = self.client.http.post(EMBEDDINGS_PATH, body, operation="embedding")
        payload, raw = read_json(response, provider=self.provider, operation="embedding")
        return self.parse_response(documents, payload, raw)

    async def aembed_texts(self, documents: Sequence[str]) -> List[Embedding]:
        documents = list(documents)
        if not documents:
            return []
        body = self.build_request(documents)
        response = await self.client.http.apost(EMBEDDINGS_PATH, body, operation="embedding")
        payload, raw = read_json(response, provider=self.provider, operation="embedding")
        return self.parse_response(documents, payload, raw)


__all__ = [
    "Client",
    "CompletionModel",
    "EmbeddingModel",
    "OpenAICompletionResponse",
    "message_to_wire",
    "documents_to_wire",
    "tool_to_wire",
    "MAX_DOCUMENTS",
    "OPENAI_API_BASE_URL",
    "GPT_4O",
    "GPT_4O_MINI",
    "GPT_4_TURBO",
    "GPT_35_TURBO",
    "TEXT_EMBEDDING_3_SMALL",
    "TEXT_EMBEDDING_3_LARGE",
    "TEXT_EMBEDDING_ADA_002",
]
