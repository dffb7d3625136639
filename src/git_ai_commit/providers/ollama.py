"""Ollama local provider for commit message generation."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..exceptions import ProviderError
from .base import HTTPProvider, env_or_default

logger = logging.getLogger(__name__)

DEFAULT_HOST = "http://localhost:11434"


class OllamaProvider(HTTPProvider):
    """Ollama local provider using the native chat API with structured output."""

    PROVIDER_NAME = "Ollama"

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize Ollama provider.

        Args:
            base_url: Ollama server URL (defaults to OLLAMA_HOST or
                http://localhost:11434)
            transport: Optional httpx transport, mainly for tests
        """
        base_url = (base_url or env_or_default("OLLAMA_HOST", DEFAULT_HOST)).rstrip("/")
        if "://" not in base_url:
            base_url = f"http://{base_url}"
        super().__init__(
            base_url,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    def complete(self, model: str, prompt: str, schema: dict[str, Any]) -> str:
        logger.debug("Requesting %s with a %d character prompt", model, len(prompt))
        data = self._request(
            "POST",
            "/api/chat",
            json={
                "model": model,
                "messages": [{"role": "user", "content": prompt}],
                "stream": False,
                "format": schema,
            },
        )
        try:
            content = data["message"]["content"]
        except (KeyError, TypeError) as e:
            raise ProviderError(f"Unexpected response from Ollama: {data!r}") from e
        return content

    def list_models(self) -> list[str]:
        data = self._request("GET", "/api/tags")
        return [m["name"] for m in data.get("models", [])]

    def get_name(self) -> str:
        """Get the display name for this provider."""
        return f"Ollama ({self.base_url})"
