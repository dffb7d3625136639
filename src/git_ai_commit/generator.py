"""Commit message generation and response decoding."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from .exceptions import GenerationDecodeError, ProviderError
from .models import CommitMessage, commit_message_schema
from .providers import AIProvider

if TYPE_CHECKING:
    from .terminal import Prompter

logger = logging.getLogger(__name__)


def decode_commit_message(raw: str) -> CommitMessage:
    """Decode a model reply into a CommitMessage.

    Decoding happens in two steps: the text is parsed as JSON, then the
    parsed value is validated against the CommitMessage schema. Failure at
    either step raises GenerationDecodeError carrying ``raw``.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise GenerationDecodeError(f"Model response is not valid JSON: {e}", raw) from e

    try:
        return CommitMessage.model_validate(data)
    except ValidationError as e:
        raise GenerationDecodeError(
            f"Model response does not match the commit message schema: {e}", raw
        ) from e


class MessageGenerator:
    """Ask a chat model for a commit message and decode its reply."""

    def __init__(self, provider: AIProvider) -> None:
        self.provider = provider
        self._schema = commit_message_schema()

    def generate(self, model: str, prompt: str) -> CommitMessage:
        """Generate a commit message for ``prompt`` using ``model``.

        Raises:
            GenerationDecodeError: If the reply is not a valid commit message
            ProviderError: If the model service fails
        """
        if not model:
            raise ValueError("A model must be selected before generating")
        raw = self.provider.complete(model, prompt, self._schema)
        logger.debug("Raw model response: %r", raw)
        return decode_commit_message(raw)

    def list_models(self) -> list[str]:
        return self.provider.list_models()

    def select_model(self, prompter: Prompter, current: str | None = None) -> str:
        """Let the user pick one of the service's models.

        Raises:
            ProviderError: If the service offers no models
        """
        models = self.list_models()
        if not models:
            raise ProviderError(f"{self.provider.get_name()} has no models available")
        model = prompter.choose_model(models, current)
        logger.debug("Selected model %s", model)
        return model
