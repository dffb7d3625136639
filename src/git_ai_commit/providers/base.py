"""Base protocol for chat model services."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Any

import httpx

from ..exceptions import ProviderError

logger = logging.getLogger(__name__)

# Model calls may take arbitrarily long; only the connection is bounded.
DEFAULT_TIMEOUT = httpx.Timeout(None, connect=10.0)


class AIProvider(ABC):
    """Abstract base class for chat model services."""

    @abstractmethod
    def complete(self, model: str, prompt: str, schema: dict[str, Any]) -> str:
        """Send ``prompt`` as a single user message and return the reply text.

        Args:
            model: Model identifier to run the request against
            prompt: The full prompt, including the diff
            schema: JSON schema the reply content must follow

        Returns:
            The raw content of the model's reply

        Raises:
            ProviderError: If the service cannot be reached or rejects the request
        """
        ...

    @abstractmethod
    def list_models(self) -> list[str]:
        """Get the model identifiers the service offers."""
        ...

    @abstractmethod
    def get_name(self) -> str:
        """Get the display name for this provider."""
        ...


class HTTPProvider(AIProvider):
    """Shared HTTP plumbing for providers backed by an ``httpx.Client``."""

    PROVIDER_NAME: str

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self._client = httpx.Client(
            base_url=base_url,
            headers=headers or {},
            timeout=DEFAULT_TIMEOUT,
            transport=transport,
        )

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON envelope.

        Raises:
            ProviderError: On connection failures, error statuses or a
                non-JSON envelope
        """
        logger.debug("%s %s%s", method, self.base_url, url)
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.ConnectError as e:
            raise ProviderError(
                f"Cannot connect to {self.PROVIDER_NAME} at {self.base_url}: {e}"
            ) from e
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"{self.PROVIDER_NAME} returned HTTP {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"{self.PROVIDER_NAME} request failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"{self.PROVIDER_NAME} returned a non-JSON response") from e

    def get_name(self) -> str:
        """Get the display name for this provider."""
        return self.PROVIDER_NAME

    def __del__(self) -> None:
        """Clean up HTTP client on deletion."""
        if hasattr(self, "_client"):
            self._client.close()


def env_or_default(name: str, default: str) -> str:
    """Read an environment variable, falling back when it is unset or empty."""
    return os.environ.get(name) or default
