"""Composing the final commit message and recording it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from .git import GitRepo
from .models import CommitMessage

logger = logging.getLogger(__name__)

WIP_MARKER = "[WIP] "
SKIP_CI_MARKER = "[skip ci]"
FOOTER_TEMPLATE = "Commit message by {model}"

# Read by lazygit when it is waiting for a commit message
HANDOFF_FILE = "LAZYGIT_PENDING_COMMIT"


def compose_commit_message(message: CommitMessage, model: str, wip: bool = False) -> str:
    """Build the full commit body.

    The layout is title, blank line, description, blank line, footer. The
    blank lines are kept even when the description is empty. In WIP mode the
    title gets a marker prefix and a CI-skip line is added after the footer.
    """
    title = f"{WIP_MARKER}{message.title}" if wip else message.title
    body = f"{title}\n\n{message.description}\n\n{FOOTER_TEMPLATE.format(model=model)}"
    if wip:
        body += f"\n{SKIP_CI_MARKER}"
    return body


class DispatchResult(Enum):
    COMMITTED = "committed"
    HANDED_OFF = "handed_off"


@dataclass
class CommitDispatcher:
    """Writes an accepted message as a commit or to the hand-off file."""

    repo: GitRepo
    wip: bool = False
    handoff: bool = False

    def handoff_path(self) -> Path:
        return self.repo.git_dir() / HANDOFF_FILE

    def dispatch(
        self,
        message: CommitMessage,
        model: str,
        amend: bool = False,
        on_commit: Callable[[], None] | None = None,
    ) -> DispatchResult:
        """Finalize ``message``.

        ``on_commit`` runs as soon as the commit exists, before the amend
        step. Nothing here undoes the commit if a later step fails.
        """
        body = compose_commit_message(message, model, wip=self.wip)

        if self.handoff:
            path = self.handoff_path()
            path.write_text(body, encoding="utf-8")
            logger.debug("Wrote pending commit message to %s", path)
            return DispatchResult.HANDED_OFF

        self.repo.commit(body)
        logger.debug("Commit created")
        if on_commit is not None:
            on_commit()
        if amend:
            self.repo.amend_interactive()
        return DispatchResult.COMMITTED
