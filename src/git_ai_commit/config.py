"""Options for a single run."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .git import GitRepo

DEFAULT_PROVIDER = "ollama"

# git config keys consulted when the flag and environment are unset
MODEL_CONFIG_KEY = "ai-commit.model"
PROVIDER_CONFIG_KEY = "ai-commit.provider"


@dataclass
class CommitOptions:
    """Options for the commit assistant."""

    path: str | None = None
    model: str | None = None
    provider: str | None = None
    host: str | None = None
    api_key: str | None = None

    interactive: bool = False
    wip: bool = False
    handoff: bool = False

    def with_repo_defaults(self, repo: GitRepo) -> CommitOptions:
        """Fill the model and provider from git config where they are unset."""
        return replace(
            self,
            model=self.model or repo.config_get(MODEL_CONFIG_KEY),
            provider=self.provider or repo.config_get(PROVIDER_CONFIG_KEY) or DEFAULT_PROVIDER,
        )
