"""
Hyperbolic adapter.

Hyperbolic serves open-weight chat models behind an OpenAI-compatible Chat
Completions endpoint, so this client wraps an `openai.Client` pointed at the
Hyperbolic base URL and tagged with the "hyperbolic" provider name. No
embedding endpoint is exposed.

Example:
    >>> from toolwire.providers import hyperbolic
    >>> client = hyperbolic.Client.from_env()
    >>> comedian = (
    ...     client.agent(hyperbolic.DEEPSEEK_R1)
    ...     .preamble("You are a comedian here to entertain the user using humour and jokes.")
    ...     .build()
    ... )
    >>> print(await comedian.prompt("Entertain me!"))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Type

from ..env import require_env
from ..exceptions import ProviderConfigurationError
from ..models import Hyperbolic
from . import openai
from ._http import DEFAULT_TIMEOUT

if TYPE_CHECKING:
    from pydantic import BaseModel

    from ..agent.builder import AgentBuilder
    from ..extractor import ExtractorBuilder

PROVIDER = "hyperbolic"
HYPERBOLIC_API_BASE_URL = "https://api.hyperbolic.xyz/v1"
API_KEY_ENV = "HYPERBOLIC_API_KEY"

LLAMA_3_1_8B = Hyperbolic.LLAMA_3_1_8B.id
LLAMA_3_3_70B = Hyperbolic.LLAMA_3_3_70B.id
DEEPSEEK_R1 = Hyperbolic.DEEPSEEK_R1.id
QWEN2_5_72B_INSTRUCT = Hyperbolic.QWEN2_5_72B_INSTRUCT.id


class Client:
    """Hyperbolic API client (completion only)."""

    name = PROVIDER

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = HYPERBOLIC_API_BASE_URL,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        transport: Optional[Any] = None,
    ):
        self._openai = openai.Client(
            api_key,
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            provider=PROVIDER,
            env_var=API_KEY_ENV,
        )

    @classmethod
    def from_base_url(cls, api_key: str, base_url: str, **kwargs: Any) -> "Client":
        return cls(api_key, base_url=base_url, **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "Client":
        """Create a client from HYPERBOLIC_API_KEY (a cwd .env file is loaded first)."""
        api_key = require_env(API_KEY_ENV)
        if not api_key:
            raise ProviderConfigurationError("hyperbolic", f"{API_KEY_ENV} is not set", API_KEY_ENV)
        return cls(api_key, **kwargs)

    @property
    def base_url(self) -> str:
        return self._openai.base_url

    def completion_model(self, model: str) -> openai.CompletionModel:
        return self._openai.completion_model(model)

    def agent(self, model: str) -> "AgentBuilder":
        return self._openai.agent(model)

    def extractor(self, model: str, target: Type["BaseModel"]) -> "ExtractorBuilder":
        return self._openai.extractor(model, target)

    def close(self) -> None:
        self._openai.close()

    async def aclose(self) -> None:
        await self._openai.aclose()


__all__ = [
    "Client",
    "HYPERBOLIC_API_BASE_URL",
    "LLAMA_3_1_8B",
    "LLAMA_3_3_70B",
    "DEEPSEEK_R1",
    "QWEN2_5_72B_INSTRUCT",
]
