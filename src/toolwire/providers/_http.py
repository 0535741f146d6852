"""
Shared HTTP plumbing for provider clients.

Each provider client owns exactly one HttpTransport. It holds one sync and one
async httpx client with the bearer credential baked into the default headers;
every model derived from the provider client shares it read-only.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from ..exceptions import ProviderConfigurationError, ProviderError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


def _check_credential(provider: str, api_key: Any, env_var: str) -> str:
    if not isinstance(api_key, str) or not api_key.strip():
        raise ProviderConfigurationError(provider, "API key is empty or missing", env_var)
    if any(not (32 <= ord(ch) < 127) for ch in api_key):
        raise ProviderConfigurationError(
            provider,
            "API key contains characters that cannot be sent in an Authorization header",
            env_var,
        )
    return api_key


class HttpTransport:
    """
    Bearer-authenticated JSON POST transport for one provider.

    Args:
        provider: Provider name used in errors and logs.
        api_key: Credential sent as `Authorization: Bearer <api_key>`.
        base_url: Root URL; request paths are resolved relative to it.
        env_var: Environment variable name mentioned in configuration errors.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport used by both the sync and async
            clients (e.g. `httpx.MockTransport` in tests).

    Raises:
        ProviderConfigurationError: If the credential cannot be attached to
            the default request headers.
    """

    def __init__(
        self,
        provider: str,
        api_key: str,
        base_url: str,
        *,
        env_var: str = "",
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        transport: Optional[Any] = None,
    ):
        api_key = _check_credential(provider, api_key, env_var)
        self.provider = provider
        self.base_url = base_url.rstrip("/")
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self._client = httpx.Client(
            base_url=self.base_url, headers=headers, timeout=timeout, transport=transport
        )
        self._async_client = httpx.AsyncClient(
            base_url=self.base_url, headers=headers, timeout=timeout, transport=transport
        )

    def _url(self, path: str) -> str:
        return path.lstrip("/")

    def post(self, path: str, body: Dict[str, Any], *, operation: str) -> httpx.Response:
        """POST a JSON body; network failures become TransportError."""
        logger.debug(f"POST {self.base_url}/{self._url(path)} ({self.provider} {operation})")
        try:
            return self._client.post(self._url(path), json=body)
        except httpx.RequestError as exc:
            raise TransportError(str(exc), provider=self.provider, operation=operation) from exc

    async def apost(self, path: str, body: Dict[str, Any], *, operation: str) -> httpx.Response:
        """Async version of post()."""
        logger.debug(f"POST {self.base_url}/{self._url(path)} ({self.provider} {operation})")
        try:
            return await self._async_client.post(self._url(path), json=body)
        except httpx.RequestError as exc:
            raise TransportError(str(exc), provider=self.provider, operation=operation) from exc

    def close(self) -> None:
        self._client.close()

    async def aclose(self) -> None:
        await self._async_client.aclose()


def read_json(response: httpx.Response, *, provider: str, operation: str) -> Tuple[Any, str]:
    """
    Return the decoded JSON body and the raw text of a response.

    Raises:
        ProviderError: For non-2xx statuses (body carried verbatim) and for
            bodies that are not valid JSON.
    """
    raw = response.text
    if not response.is_success:
        raise ProviderError(
            raw, provider=provider, operation=operation, status_code=response.status_code, body=raw
        )
    try:
        return json.loads(raw), raw
    except ValueError:
        raise ProviderError(
            raw, provider=provider, operation=operation, status_code=response.status_code, body=raw
        ) from None


def error_message(payload: Any) -> Optional[str]:
    """Probe a decoded body for a provider error shape and return its message."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(error, str):
        return error
    message = payload.get("message")
    if isinstance(message, str):
        return message
    return None


__all__ = ["DEFAULT_TIMEOUT", "HttpTransport", "read_json", "error_message"]
