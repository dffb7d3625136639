"""Commit message schema shared by the generator and the providers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CommitMessage(BaseModel):
    """A drafted commit message as returned by the model.

    On the wire the fields are ``commitTitle`` and ``commitDescription``.
    Both are required strings; the description may be empty.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    title: str = Field(alias="commitTitle", description="One-line summary of the change")
    description: str = Field(
        alias="commitDescription",
        description="Longer explanation, or an empty string if the title says it all",
    )


def commit_message_schema() -> dict[str, Any]:
    """JSON schema sent to the model service to constrain its output."""
    return CommitMessage.model_json_schema(by_alias=True)
