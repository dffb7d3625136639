"""Error types raised while drafting and committing a message."""

from __future__ import annotations


class CommitAssistError(Exception):
    """Base class for all errors surfaced to the command line."""

    pass


class NoChangesError(CommitAssistError):
    """The working tree has nothing to commit."""

    def __init__(self, message: str = "No changes to commit.") -> None:
        super().__init__(message)


class GitError(CommitAssistError):
    """A git invocation exited with a non-zero status."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr


class GenerationDecodeError(CommitAssistError):
    """The model response could not be decoded into a commit message.

    Attributes:
        raw: The response body exactly as the model returned it
    """

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


class ProviderError(CommitAssistError):
    """The model service could not be reached or answered with an error."""

    pass


class UserAbort(CommitAssistError):
    """The user chose to abort at the confirmation prompt."""

    def __init__(self, message: str = "Aborted.") -> None:
        super().__init__(message)
