"""Index staging with guaranteed restoration."""

from __future__ import annotations

import logging
from types import TracebackType

from .exceptions import NoChangesError
from .git import GitRepo

logger = logging.getLogger(__name__)


class StagingController:
    """Stage pending changes for diffing and restore the index afterwards.

    Use as a context manager around the whole workflow. Entering checks for
    pending changes, saves the index file, registers untracked files with
    intent-to-add and stages everything (or runs ``git add --patch`` when
    ``interactive`` is set). Leaving puts the saved index back, whatever the
    exit path, unless a commit was recorded with :meth:`mark_committed`, in
    which case only leftover intent-to-add entries are dropped.

    In hand-off mode the index belongs to the integration that launched us,
    so nothing is staged and nothing is restored.
    """

    def __init__(
        self,
        repo: GitRepo,
        interactive: bool = False,
        handoff: bool = False,
    ) -> None:
        self.repo = repo
        self.interactive = interactive
        self.handoff = handoff
        self.committed = False
        self._saved = False
        self._snapshot: bytes | None = None

    def __enter__(self) -> StagingController:
        if not self.repo.has_pending_changes():
            raise NoChangesError()

        if self.handoff:
            logger.debug("Hand-off mode: leaving the index untouched")
            return self

        self._snapshot = self.repo.save_index()
        self._saved = True
        logger.debug("Saved the index before staging")
        try:
            self.repo.add_intent_to_add(self.repo.get_untracked_files())
            if self.interactive:
                self.repo.stage_interactive()
            else:
                self.repo.stage_all()
        except BaseException:
            self.restore()
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.restore()

    def mark_committed(self) -> None:
        """Record that a commit was created from the staged index."""
        self.committed = True

    def restore(self) -> None:
        """Put the index back the way it was before staging."""
        if not self._saved:
            return
        self._saved = False
        if self.committed:
            logger.debug("Commit created: resetting index to HEAD")
            self.repo.reset_index()
        else:
            logger.debug("Restoring the saved index")
            self.repo.restore_index(self._snapshot)
