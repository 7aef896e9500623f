"""OpenAI-compatible chat completion client for catalog providers."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from modelscout.catalog.types import Provider
from modelscout.errors import RemoteCallError

logger = logging.getLogger("modelscout.chat.client")

_ENV_KEY_NAMES = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "xai": "XAI_API_KEY",
    "groq": "GROQ_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "cerebras": "CEREBRAS_API_KEY",
    "huggingface": "HUGGINGFACE_API_KEY",
    "vercel": "VERCEL_API_KEY",
}


def env_key_name(provider_id: str) -> str:
    return _ENV_KEY_NAMES.get(provider_id.lower(), provider_id.upper().replace("-", "_") + "_API_KEY")


def resolve_api_key(provider: Provider, override: str | None = None, environ: Mapping[str, str] | None = None) -> str:
    """Explicit key, then the provider's environment variable, then the catalog value.

    Catalog keys written as ``$NAME`` are read from the environment.
    """
    env = os.environ if environ is None else environ
    if override:
        return override

    key = env.get(env_key_name(provider.id))
    if key:
        return key

    if provider.api_key.startswith("$"):
        return env.get(provider.api_key[1:].strip("{}"), "")
    return provider.api_key


@dataclass(frozen=True)
class Completion:
    content: str
    input_tokens: int = 0
    output_tokens: int = 0
    cached_tokens: int = 0


class CompletionClient:
    def __init__(
        self,
        provider: Provider,
        api_key: str,
        timeout: int = 120,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.provider = provider
        headers = {"Content-Type": "application/json", **provider.default_headers}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.Client(
            base_url=provider.api_endpoint.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(timeout, connect=10.0),
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> CompletionClient:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def complete(self, model_id: str, messages: list[dict[str, str]], max_tokens: int | None = None) -> Completion:
        payload: dict[str, Any] = {"model": model_id, "messages": messages}
        if max_tokens:
            payload["max_tokens"] = max_tokens

        try:
            resp = self._client.post("/chat/completions", json=payload)
        except httpx.HTTPError as exc:
            raise RemoteCallError(f"API call failed: {exc}") from exc

        if resp.status_code >= 400:
            raise RemoteCallError(f"API call failed: HTTP {resp.status_code} {resp.text[:200]}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise RemoteCallError("API call failed: response is not JSON") from exc

        if not isinstance(data, dict):
            raise RemoteCallError("API call failed: malformed response")

        choices = data.get("choices") or []
        if not choices:
            raise RemoteCallError("no response from model")
        if not isinstance(choices, list) or not isinstance(choices[0], dict):
            raise RemoteCallError("API call failed: malformed response")

        try:
            usage = data.get("usage") or {}
            details = usage.get("prompt_tokens_details") or {}
            return Completion(
                content=str((choices[0].get("message") or {}).get("content") or ""),
                input_tokens=int(usage.get("prompt_tokens", 0) or 0),
                output_tokens=int(usage.get("completion_tokens", 0) or 0),
                cached_tokens=int(details.get("cached_tokens", 0) or 0),
            )
        except (TypeError, ValueError, AttributeError) as exc:
            raise RemoteCallError("API call failed: malformed response") from exc
