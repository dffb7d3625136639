"""OpenAI-compatible provider for commit message generation."""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from ..exceptions import ProviderError
from .base import HTTPProvider, env_or_default

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1/"


class OpenAIProvider(HTTPProvider):
    """Chat completions provider for OpenAI and compatible services."""

    PROVIDER_NAME = "OpenAI"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize OpenAI provider.

        Args:
            api_key: API key (defaults to OPENAI_API_KEY env var)
            base_url: API base URL (defaults to OPENAI_BASE_URL or the
                public OpenAI endpoint)
            transport: Optional httpx transport, mainly for tests

        Raises:
            ValueError: If no API key is provided or found in environment
        """
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not self.api_key:
            raise ValueError(
                "OpenAI API key is required. "
                "Set OPENAI_API_KEY environment variable or pass it as an option."
            )
        base_url = base_url or env_or_default("OPENAI_BASE_URL", DEFAULT_BASE_URL)
        if not base_url.endswith("/"):
            base_url += "/"
        super().__init__(
            base_url,
            headers={"Authorization": f"Bearer {self.api_key}"},
            transport=transport,
        )

    def complete(self, model: str, prompt: str, schema: dict[str, Any]) -> str:
        logger.debug("Requesting %s with a %d character prompt", model, len(prompt))
        data = self._request(
            "POST",
            "chat/completions",
            json={
                "model": model,
                "messages": [{"role": "user", "content": prompt}],
                "response_format": {
                    "type": "json_schema",
                    "json_schema": {"name": "commit_message", "schema": schema},
                },
            },
        )
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"Unexpected response from OpenAI: {data!r}") from e
        return content or ""

    def list_models(self) -> list[str]:
        data = self._request("GET", "models")
        return sorted(m["id"] for m in data.get("data", []))
