from __future__ import annotations

import http.client
import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Any
from urllib import error, request

from resilient_selectors.core.exceptions import ConfigurationError, ProviderError
from resilient_selectors.llm.parser import parse_selector_response
from resilient_selectors.llm.prompts import build_prompt

log = logging.getLogger(__name__)

MAX_TOKENS = 200

API_KEY_ENV = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}
MODEL_ENV = {
    "anthropic": "ANTHROPIC_MODEL",
    "openai": "OPENAI_MODEL",
}
DEFAULT_MODELS = {
    "anthropic": "claude-sonnet-4-20250514",
    "openai": "gpt-4o",
}
DEFAULT_BASE_URLS = {
    "anthropic": "https://api.anthropic.com",
    "openai": "https://api.openai.com",
}


class SelectorRepairClient(ABC):
    """Provider-neutral interface for remote selector suggestions."""

    provider_name = "unknown"

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.api_key = api_key
        self.model = model or os.getenv(MODEL_ENV[self.provider_name], DEFAULT_MODELS[self.provider_name])
        self.base_url = (base_url or DEFAULT_BASE_URLS[self.provider_name]).rstrip("/")
        self.timeout = timeout

    def suggest_selector(self, failed_selector: str, snapshot: str) -> str:
        prompt = build_prompt(failed_selector, snapshot)
        response = self._complete(prompt)
        return parse_selector_response(self._extract_text(response), self.display_name)

    @property
    def display_name(self) -> str:
        return "OpenAI" if self.provider_name == "openai" else self.provider_name.capitalize()

    @abstractmethod
    def _complete(self, prompt: str) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def _extract_text(self, response: dict[str, Any]) -> str | None:
        raise NotImplementedError

    def _post(self, url: str, body: dict[str, Any], headers: dict[str, str]) -> dict[str, Any]:
        return _post_json(url, body, headers, self.display_name, self.timeout)


class AnthropicSelectorClient(SelectorRepairClient):
    provider_name = "anthropic"

    def _complete(self, prompt: str) -> dict[str, Any]:
        body = {
            "model": self.model,
            "max_tokens": MAX_TOKENS,
            "messages": [
                {"role": "user", "content": prompt},
            ],
        }
        return self._post(
            f"{self.base_url}/v1/messages",
            body,
            headers={
                "x-api-key": self.api_key,
                "anthropic-version": "2023-06-01",
                "Content-Type": "application/json",
            },
        )

    def _extract_text(self, response: dict[str, Any]) -> str | None:
        content = response.get("content") or []
        if not content or not isinstance(content[0], dict):
            return None
        return content[0].get("text")


class OpenAISelectorClient(SelectorRepairClient):
    provider_name = "openai"

    def _complete(self, prompt: str) -> dict[str, Any]:
        body = {
            "model": self.model,
            "max_tokens": MAX_TOKENS,
            "messages": [
                {"role": "user", "content": prompt},
            ],
        }
        return self._post(
            f"{self.base_url}/v1/chat/completions",
            body,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )

    def _extract_text(self, response: dict[str, Any]) -> str | None:
        choices = response.get("choices") or []
        if not choices or not isinstance(choices[0], dict):
            return None
        return (choices[0].get("message") or {}).get("content")


CLIENT_TYPES: dict[str, type[SelectorRepairClient]] = {
    "anthropic": AnthropicSelectorClient,
    "openai": OpenAISelectorClient,
}


def resolve_api_key(provider: str, api_key: str | None = None) -> str | None:
    return api_key or os.getenv(API_KEY_ENV[provider]) or None


def create_selector_client(
    provider: str,
    api_key: str | None = None,
    model: str | None = None,
    base_url: str | None = None,
    timeout: float = 30.0,
) -> SelectorRepairClient:
    if provider not in CLIENT_TYPES:
        raise ConfigurationError(f"Unsupported LLM provider: {provider}")
    resolved_key = resolve_api_key(provider, api_key)
    if not resolved_key:
        raise ConfigurationError(
            f'No API key provided for "{provider}". '
            f"Set {API_KEY_ENV[provider]} or pass api_key in config."
        )
    client = CLIENT_TYPES[provider](resolved_key, model=model, base_url=base_url, timeout=timeout)
    log.info("Remote selector healing configured (provider: %s, model: %s)", provider, client.model)
    return client


def _post_json(
    url: str,
    payload: dict[str, Any],
    headers: dict[str, str],
    source: str,
    timeout: float,
) -> dict[str, Any]:
    encoded = json.dumps(payload).encode("utf-8")
    req = request.Request(url, data=encoded, headers=headers, method="POST")
    try:
        with request.urlopen(req, timeout=timeout) as response:
            body = response.read()
    except error.HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="replace")
        raise ProviderError(f"{source} API error {exc.code}: {detail}") from exc
    except (error.URLError, http.client.HTTPException, OSError) as exc:
        reason = getattr(exc, "reason", exc)
        raise ProviderError(f"{source} request could not be completed: {reason}") from exc
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ProviderError(f"{source} returned malformed JSON") from exc
    if not isinstance(payload, dict):
        raise ProviderError(f"{source} returned an unexpected payload")
    return payload
