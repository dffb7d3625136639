"""Main CommitAssistant class tying staging, generation and commit together."""

from __future__ import annotations

import logging

from .commit import CommitDispatcher, DispatchResult
from .config import DEFAULT_PROVIDER, CommitOptions
from .exceptions import UserAbort
from .generator import MessageGenerator
from .git import GitRepo
from .providers import AIProvider, create_provider
from .staging import StagingController
from .terminal import Prompter, RichPrompter
from .workflow import ConfirmationLoop, Outcome, WorkflowState

logger = logging.getLogger(__name__)


class CommitAssistant:
    """AI-assisted commit for the pending changes of one repository."""

    def __init__(
        self,
        options: CommitOptions | None = None,
        prompter: Prompter | None = None,
        provider: AIProvider | None = None,
        repo: GitRepo | None = None,
    ) -> None:
        """Initialize the assistant.

        Args:
            options: Run options
            prompter: User interaction (defaults to the rich terminal prompter)
            provider: Model service (created from the options when omitted)
            repo: Repository (discovered from ``options.path`` when omitted)
        """
        self.repo = repo or GitRepo.discover((options or CommitOptions()).path)
        self.options = (options or CommitOptions()).with_repo_defaults(self.repo)
        self.prompter = prompter or RichPrompter()
        self._provider = provider

    def _get_provider(self) -> AIProvider:
        """Lazily create and return the AI provider."""
        if self._provider is None:
            self._provider = create_provider(
                provider=self.options.provider or DEFAULT_PROVIDER,
                api_key=self.options.api_key,
                base_url=self.options.host,
            )
        return self._provider

    def run(self) -> DispatchResult:
        """Stage, generate, confirm and commit.

        The index is restored on every exit path except hand-off mode and
        a successful commit.

        Raises:
            NoChangesError: If there is nothing to commit
            UserAbort: If the user aborted at the prompt
            GenerationDecodeError: If the model reply could not be decoded
            ProviderError: If the model service failed
            GitError: If a git command failed
        """
        staging = StagingController(
            self.repo,
            interactive=self.options.interactive,
            handoff=self.options.handoff,
        )
        with staging:
            diff = self.repo.get_staged_diff()
            logger.debug("Staged diff is %d characters", len(diff))

            generator = MessageGenerator(self._get_provider())
            model = self.options.model or generator.select_model(self.prompter)

            result = ConfirmationLoop(generator, self.prompter).run(
                WorkflowState.initial(diff, model)
            )
            if result.outcome is Outcome.ERROR and result.error is not None:
                raise result.error
            if result.outcome is not Outcome.COMMITTED or result.message is None:
                raise UserAbort()

            dispatcher = CommitDispatcher(
                self.repo,
                wip=self.options.wip,
                handoff=self.options.handoff,
            )
            return dispatcher.dispatch(
                result.message,
                result.model,
                amend=result.amend,
                on_commit=staging.mark_committed,
            )


__all__ = ["CommitAssistant"]
