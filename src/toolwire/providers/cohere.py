"""
Cohere adapter: client, chat completion model and embedding model.

Example:
    >>> from toolwire.providers import cohere
    >>> client = cohere.Client("YOUR_API_KEY")
    >>> command_r = client.completion_model(cohere.COMMAND_R)
    >>> response = await command_r.acomplete(CompletionRequest(prompt=Message.user("Hi")))
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Type

from ..completion import CompletionRequest, CompletionResponse, ToolDefinition
from ..embeddings.builder import EmbeddingsBuilder
from ..embeddings.provider import Embedding
from ..env import require_env
from ..exceptions import ConversionError, DocumentError, ProviderConfigurationError, ProviderError
from ..json_utils import as_count, drop_none, merge
from ..message import Image, Message, Role, Text, ToolCall, ToolResult
from ..models import Cohere, embedding_dimensions
from ..pricing import calculate_cost
from ..tools.schema import FlatParameter, expand_parameters, flatten_parameters
from ..usage import UsageStats
from ._http import DEFAULT_TIMEOUT, HttpTransport, error_message, read_json

if TYPE_CHECKING:
    from pydantic import BaseModel

    from ..agent.builder import AgentBuilder
    from ..extractor import ExtractorBuilder

logger = logging.getLogger(__name__)

PROVIDER = "cohere"
COHERE_API_BASE_URL = "https://api.cohere.ai"
API_KEY_ENV = "COHERE_API_KEY"

CHAT_PATH = "/v1/chat"
EMBED_PATH = "/v1/embed"

MAX_DOCUMENTS = 96

COMMAND_R_PLUS = Cohere.COMMAND_R_PLUS.id
COMMAND_R = Cohere.COMMAND_R.id
COMMAND = Cohere.COMMAND.id
COMMAND_NIGHTLY = Cohere.COMMAND_NIGHTLY.id
COMMAND_LIGHT = Cohere.COMMAND_LIGHT.id
COMMAND_LIGHT_NIGHTLY = Cohere.COMMAND_LIGHT_NIGHTLY.id

EMBED_ENGLISH_V3 = Cohere.Embeddings.EMBED_ENGLISH_V3.id
EMBED_ENGLISH_LIGHT_V3 = Cohere.Embeddings.EMBED_ENGLISH_LIGHT_V3.id
EMBED_MULTILINGUAL_V3 = Cohere.Embeddings.EMBED_MULTILINGUAL_V3.id
EMBED_MULTILINGUAL_LIGHT_V3 = Cohere.Embeddings.EMBED_MULTILINGUAL_LIGHT_V3.id
EMBED_ENGLISH_V2 = Cohere.Embeddings.EMBED_ENGLISH_V2.id
EMBED_ENGLISH_LIGHT_V2 = Cohere.Embeddings.EMBED_ENGLISH_LIGHT_V2.id
EMBED_MULTILINGUAL_V2 = Cohere.Embeddings.EMBED_MULTILINGUAL_V2.id


# ================================================================
# Client
# ================================================================


class Client:
    """
    Cohere API client.

    Owns the base URL, the credential and the HTTP connection pools. Models
    created from the same client share them.

    Args:
        api_key: Cohere API key.
        base_url: API root. Default: https://api.cohere.ai
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (e.g. httpx.MockTransport).

    Raises:
        ProviderConfigurationError: If the API key cannot be used as a bearer token.
    """

    name = PROVIDER

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = COHERE_API_BASE_URL,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        transport: Optional[Any] = None,
    ):
        self.http = HttpTransport(
            PROVIDER,
            api_key,
            base_url,
            env_var=API_KEY_ENV,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_base_url(cls, api_key: str, base_url: str, **kwargs: Any) -> "Client":
        return cls(api_key, base_url=base_url, **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "Client":
        """Create a client from COHERE_API_KEY (a cwd .env file is loaded first)."""
        api_key = require_env(API_KEY_ENV)
        if not api_key:
            raise ProviderConfigurationError("cohere", f"{API_KEY_ENV} is not set", API_KEY_ENV)
        return cls(api_key, **kwargs)

    @property
    def base_url(self) -> str:
        return self.http.base_url

    def completion_model(self, model: str) -> "CompletionModel":
        return CompletionModel(self, model)

    def embedding_model(self, model: str, input_type: str = "search_document") -> "EmbeddingModel":
        """
        Create an embedding model.

        The vector length is looked up in the model registry; unknown models
        get ndims=0. Use embedding_model_with_ndims() when it matters.
        """
        return EmbeddingModel(self, model, input_type, embedding_dimensions(model))

    def embedding_model_with_ndims(
        self, model: str, input_type: str, ndims: int
    ) -> "EmbeddingModel":
        return EmbeddingModel(self, model, input_type, ndims)

    def embeddings(self, model: str, input_type: str = "search_document") -> EmbeddingsBuilder:
        return EmbeddingsBuilder(self.embedding_model(model, input_type))

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
# Wire types
# ================================================================


@dataclass(frozen=True)
class BilledUnits:
    """Billing summary attached to Cohere responses."""

    input_tokens: int = 0
    output_tokens: int = 0
    search_units: int = 0
    classifications: int = 0

    @classmethod
    def from_meta(cls, meta: Any) -> Optional["BilledUnits"]:
        if not isinstance(meta, Mapping):
            return None
        units = meta.get("billed_units")
        if not isinstance(units, Mapping):
            return None
        return cls(
            input_tokens=as_count(units.get("input_tokens")),
            output_tokens=as_count(units.get("output_tokens")),
            search_units=as_count(units.get("search_units")),
            classifications=as_count(units.get("classifications")),
        )

    def __str__(self) -> str:
        return (
            f"Input tokens: {self.input_tokens}\n"
            f"Output tokens: {self.output_tokens}\n"
            f"Search units: {self.search_units}\n"
            f"Classifications: {self.classifications}"
        )


@dataclass(frozen=True)
class CohereToolCall:
    """Tool call as Cohere encodes it (no id; the name doubles as one)."""

    name: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "parameters": self.parameters}

    def to_canonical(self) -> ToolCall:
        return ToolCall(id=self.name, name=self.name, arguments=self.parameters)


@dataclass(frozen=True)
class CohereToolDefinition:
    """Tool declaration in Cohere's flat `parameter_definitions` format."""

    name: str
    description: str
    parameter_definitions: Dict[str, FlatParameter]

    @classmethod
    def from_definition(cls, tool: ToolDefinition) -> "CohereToolDefinition":
        return cls(
            name=tool.name,
            description=tool.description,
            parameter_definitions=flatten_parameters(tool, provider=PROVIDER),
        )

    def to_definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters=expand_parameters(self.parameter_definitions),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameter_definitions": {
                arg: param.to_dict() for arg, param in self.parameter_definitions.items()
            },
        }


@dataclass(frozen=True)
class CohereCompletionResponse:
    """Success payload of POST /v1/chat."""

    text: str
    generation_id: str
    finish_reason: str
    tool_calls: List[CohereToolCall] = field(default_factory=list)
    citations: List[Dict[str, Any]] = field(default_factory=list)
    documents: List[Dict[str, Any]] = field(default_factory=list)
    search_queries: List[Dict[str, Any]] = field(default_factory=list)
    search_results: List[Dict[str, Any]] = field(default_factory=list)
    is_search_required: Optional[bool] = None
    chat_history: List[Dict[str, Any]] = field(default_factory=list)
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def probe(cls, payload: Any) -> Optional["CohereCompletionResponse"]:
        """Decode the success shape, or return None if the payload is not one."""
        if not isinstance(payload, Mapping):
            return None
        text = payload.get("text")
        generation_id = payload.get("generation_id")
        finish_reason = payload.get("finish_reason")
        if not (
            isinstance(text, str)
            and isinstance(generation_id, str)
            and isinstance(finish_reason, str)
        ):
            return None

        raw_calls = payload.get("tool_calls") or []
        if not isinstance(raw_calls, list):
            return None
        tool_calls = []
        for raw_call in raw_calls:
            if not isinstance(raw_call, Mapping) or not isinstance(raw_call.get("name"), str):
                return None
            parameters = raw_call.get("parameters") or {}
            if not isinstance(parameters, Mapping):
                return None
            tool_calls.append(CohereToolCall(name=raw_call["name"], parameters=dict(parameters)))

        meta = payload.get("meta")
        return cls(
            text=text,
            generation_id=generation_id,
            finish_reason=finish_reason,
            tool_calls=tool_calls,
            citations=list(payload.get("citations") or []),
            documents=list(payload.get("documents") or []),
            search_queries=list(payload.get("search_queries") or []),
            search_results=list(payload.get("search_results") or []),
            is_search_required=payload.get("is_search_required"),
            chat_history=list(payload.get("chat_history") or []),
            meta=dict(meta) if isinstance(meta, Mapping) else None,
        )


@dataclass(frozen=True)
class CohereEmbeddingResponse:
    """Success payload of POST /v1/embed."""

    id: str
    embeddings: List[List[float]]
    texts: List[str]
    response_type: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def probe(cls, payload: Any) -> Optional["CohereEmbeddingResponse"]:
        if not isinstance(payload, Mapping):
            return None
        embeddings = payload.get("embeddings")
        if not isinstance(embeddings, list) or not all(isinstance(v, list) for v in embeddings):
            return None
        try:
            vectors = [[float(x) for x in vector] for vector in embeddings]
        except (TypeError, ValueError):
            return None
        meta = payload.get("meta")
        return cls(
            id=str(payload.get("id") or ""),
            embeddings=vectors,
            texts=list(payload.get("texts") or []),
            response_type=payload.get("response_type"),
            meta=dict(meta) if isinstance(meta, Mapping) else None,
        )


# ================================================================
# Message conversion
# ================================================================


def _tool_outputs(content: Any) -> List[Dict[str, Any]]:
    """Cohere wants tool outputs as a list of JSON objects."""
    if isinstance(content, Mapping):
        return [dict(content)]
    if isinstance(content, list) and content and all(isinstance(x, Mapping) for x in content):
        return [dict(x) for x in content]
    if isinstance(content, str):
        try:
            decoded = json.loads(content)
        except ValueError:
            decoded = None
        if isinstance(decoded, dict):
            return [decoded]
    return [{"result": content}]


def message_to_wire(
    message: Message, known_calls: Optional[Mapping[str, ToolCall]] = None
) -> List[Dict[str, Any]]:
    """
    Convert one canonical message to Cohere chat_history entries.

    User text parts expand to one USER entry each; tool results become a
    TOOL entry whose `call` is looked up by id in `known_calls`.

    Raises:
        ConversionError: For content Cohere cannot carry (images).
    """
    known_calls = known_calls or {}

    if message.role == Role.SYSTEM:
        return [{"role": "SYSTEM", "message": message.text}]

    if message.role == Role.ASSISTANT:
        text = "\n".join(p.text for p in message.content if isinstance(p, Text))
        calls = [
            CohereToolCall(name=p.name, parameters=dict(p.arguments)).to_dict()
            for p in message.content
            if isinstance(p, ToolCall)
        ]
        entry: Dict[str, Any] = {"role": "CHATBOT", "message": text}
        if calls:
            entry["tool_calls"] = calls
        return [entry]

    wire: List[Dict[str, Any]] = []
    results: List[Dict[str, Any]] = []
    for part in message.content:
        if isinstance(part, Text):
            wire.append({"role": "USER", "message": part.text})
        elif isinstance(part, ToolResult):
            call = known_calls.get(part.id)
            wire_call = (
                CohereToolCall(name=call.name, parameters=dict(call.arguments))
                if call is not None
                else CohereToolCall(name=part.id)
            )
            results.append({"call": wire_call.to_dict(), "outputs": _tool_outputs(part.content)})
        elif isinstance(part, Image):
            raise ConversionError("Only text content is supported by Cohere", provider=PROVIDER)
        else:
            raise ConversionError(
                f"{type(part).__name__} content is not supported in a {message.role.value} message",
                provider=PROVIDER,
            )
    if results:
        wire.append({"role": "TOOL", "tool_results": results})
    return wire


def history_to_wire(history: Sequence[Message]) -> List[Dict[str, Any]]:
    """Convert chat history in order, remembering tool calls for later results."""
    known_calls: Dict[str, ToolCall] = {}
    wire: List[Dict[str, Any]] = []
    for message in history:
        wire.extend(message_to_wire(message, known_calls))
        for call in message.tool_calls:
            known_calls[call.id] = call
    return wire


def prompt_to_wire(prompt: Message) -> str:
    """Flatten a user prompt to the single string Cohere expects."""
    if prompt.role != Role.USER:
        raise ConversionError("Only user messages are supported by Cohere", provider=PROVIDER)
    texts = []
    for part in prompt.content:
        if not isinstance(part, Text):
            raise ConversionError("Only text content is supported by Cohere", provider=PROVIDER)
        texts.append(part.text)
    return "\n".join(texts)


# ================================================================
# Completion model
# ================================================================


class CompletionModel:
    """
    Cohere chat model (POST /v1/chat).

    Example:
        >>> model = cohere.Client(api_key).completion_model(cohere.COMMAND_R)
        >>> response = model.complete(CompletionRequest(prompt=Message.user("Hello")))
        >>> print(response.text)
    """

    provider = PROVIDER

    def __init__(self, client: Client, model: str):
        self.client = client
        self.model = model

    def build_request(self, request: CompletionRequest) -> Dict[str, Any]:
        """Assemble the wire body. Raises ConversionError before any I/O."""
        chat_history = history_to_wire(request.chat_history)
        message = prompt_to_wire(request.prompt)
        tools = [CohereToolDefinition.from_definition(t).to_dict() for t in request.tools]

        body = drop_none(
            {
                "model": self.model,
                "preamble": request.preamble,
                "message": message,
                "documents": [doc.to_dict() for doc in request.documents] or None,
                "chat_history": chat_history or None,
                "temperature": request.temperature,
                "max_tokens": request.max_tokens,
                "tools": tools or None,
            }
        )
        if request.additional_params:
            body = merge(body, request.additional_params)
        return body

    def parse_response(self, payload: Any, raw: str) -> CompletionResponse:
        """Turn a decoded /v1/chat body into a CompletionResponse."""
        completion = CohereCompletionResponse.probe(payload)
        if completion is None:
            message = error_message(payload)
            raise ProviderError(
                message if message is not None else raw,
                provider=PROVIDER,
                operation="completion",
                body=raw,
            )

        billed = BilledUnits.from_meta(completion.meta)
        if billed is not None:
            logger.info(f"Cohere completion billed units: {billed}")
        else:
            logger.info("Cohere completion billed units: n/a")

        usage = UsageStats(model=self.model, provider=PROVIDER)
        if billed is not None:
            usage = UsageStats(
                prompt_tokens=billed.input_tokens,
                completion_tokens=billed.output_tokens,
                cost_usd=calculate_cost(self.model, billed.input_tokens, billed.output_tokens),
                model=self.model,
                provider=PROVIDER,
            )

        return CompletionResponse.from_parts(
            text=completion.text,
            tool_calls=[call.to_canonical() for call in completion.tool_calls],
            raw_response=completion,
            usage=usage,
        )

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        body = self.build_request(request)
        response = self.client.http.post(CHAT_PATH, body, operation="completion")
        payload, raw = read_json(response, provider=PROVIDER, operation="completion")
        return self.parse_response(payload, raw)

    async def acomplete(self, request: CompletionRequest) -> CompletionResponse:
        body = self.build_request(request)
        response = await self.client.http.apost(CHAT_PATH, body, operation="completion")
        payload, raw = read_json(response, provider=PROVIDER, operation="completion")
        return self.parse_response(payload, raw)


# ================================================================
# Embedding model
# ================================================================


class EmbeddingModel:
    """
    Cohere embedding model (POST /v1/embed).

    At most MAX_DOCUMENTS (96) texts per call; use EmbeddingsBuilder to batch
    larger inputs.
    """

    provider = PROVIDER
    max_documents = MAX_DOCUMENTS

    def __init__(self, client: Client, model: str, input_type: str, ndims: int):
        self.client = client
        self.model = model
        self.input_type = input_type
        self._ndims = ndims

    @property
    def ndims(self) -> int:
        return self._ndims

    def build_request(self, documents: Sequence[str]) -> Dict[str, Any]:
        if len(documents) > self.max_documents:
            raise DocumentError(
                f"At most {self.max_documents} documents per embedding request, got {len(documents)}",
                provider=PROVIDER,
                expected=self.max_documents,
                received=len(documents),
            )
        return {"model": self.model, "texts": list(documents), "input_type": self.input_type}

    def parse_response(self, documents: Sequence[str], payload: Any, raw: str) -> List[Embedding]:
        result = CohereEmbeddingResponse.probe(payload)
        if result is None:
            message = error_message(payload)
            raise ProviderError(
                message if message is not None else raw,
                provider=PROVIDER,
                operation="embedding",
                body=raw,
            )

        billed = BilledUnits.from_meta(result.meta)
        if billed is not None:
            logger.info(f"Cohere embeddings billed units: {billed}")
        else:
            logger.info("Cohere embeddings billed units: n/a")

        if len(result.embeddings) != len(documents):
            raise DocumentError(
                f"Expected {len(documents)} embeddings, got {len(result.embeddings)}",
                provider=PROVIDER,
                expected=len(documents),
                received=len(result.embeddings),
            )

        return [
            Embedding(document=document, vector=vector)
            for document, vector in zip(documents, result.embeddings)
        ]

    def embed_texts(self, documents: Sequence[str]) -> List[Embedding]:
        documents = list(documents)
        if not documents:
            return []
        body = self.build_request(documents)
        response = self.client.http.post(EMBED_PATH, body, operation="embedding")
        payload, raw = read_json(response, provider=PROVIDER, operation="embedding")
        return self.parse_response(documents, payload, raw)

    async def aembed_texts(self, documents: Sequence[str]) -> List[Embedding]:
        documents = list(documents)
        if not documents:
            return []
        body = self.build_request(documents)
        response = await self.client.http.apost(EMBED_PATH, body, operation="embedding")
        payload, raw = read_json(response, provider=PROVIDER, operation="embedding")
        return self.parse_response(documents, payload, raw)


__all__ = [
    "Client",
    "CompletionModel",
    "EmbeddingModel",
    "CohereToolCall",
    "CohereToolDefinition",
    "CohereCompletionResponse",
    "CohereEmbeddingResponse",
    "BilledUnits",
    "message_to_wire",
    "history_to_wire",
    "prompt_to_wire",
    "MAX_DOCUMENTS",
    "COHERE_API_BASE_URL",
    "COMMAND_R_PLUS",
    "COMMAND_R",
    "COMMAND",
    "COMMAND_NIGHTLY",
    "COMMAND_LIGHT",
    "COMMAND_LIGHT_NIGHTLY",
    "EMBED_ENGLISH_V3",
    "EMBED_ENGLISH_LIGHT_V3",
    "EMBED_MULTILINGUAL_V3",
    "EMBED_MULTILINGUAL_LIGHT_V3",
    "EMBED_ENGLISH_V2",
    "EMBED_ENGLISH_LIGHT_V2",
    "EMBED_MULTILINGUAL_V2",
]
