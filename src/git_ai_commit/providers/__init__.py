"""Chat model services used to draft commit messages."""

from __future__ import annotations

from .base import AIProvider
from .ollama import OllamaProvider
from .openai import OpenAIProvider

__all__ = [
    "AIProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "PROVIDERS",
    "create_provider",
]

PROVIDERS = ("ollama", "openai")


def create_provider(
    provider: str = "ollama",
    api_key: str | None = None,
    base_url: str | None = None,
) -> AIProvider:
    """Factory function to create an AI provider instance.

    Args:
        provider: Provider name - 'ollama' or 'openai'
        api_key: API key for the provider (required for openai)
        base_url: Base URL of the service (provider-specific default if not set)

    Returns:
        An AIProvider instance

    Raises:
        ValueError: If provider is unknown or required config is missing
    """
    provider = provider.lower()

    if provider == "ollama":
        return OllamaProvider(base_url=base_url)
    elif provider == "openai":
        return OpenAIProvider(api_key=api_key, base_url=base_url)
    else:
        raise ValueError(
            f"Unknown provider: {provider}. Supported providers: {', '.join(PROVIDERS)}"
        )
