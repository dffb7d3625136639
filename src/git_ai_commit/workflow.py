"""The generate-and-confirm loop.

The loop is a small state machine over :class:`WorkflowState` records.
Every call to :meth:`ConfirmationLoop.step` takes one state and returns the
next one; nothing is kept on the loop object itself, so each transition can
be exercised on its own.

::

    GENERATING -> REVIEWING -> COMMITTING
                     |  ^   -> ABORTED
                     v  |
                  GENERATING (retry, refine, switch model)

A failed generation ends the loop in FAILED.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from .exceptions import CommitAssistError, GenerationDecodeError, ProviderError
from .generator import MessageGenerator
from .models import CommitMessage
from .prompts import append_refinement, build_prompt
from .terminal import Prompter

logger = logging.getLogger(__name__)


class Action(Enum):
    ACCEPT = "accept"
    ACCEPT_AND_AMEND = "accept-and-amend"
    ABORT = "abort"
    RETRY = "retry"
    SWITCH_MODEL = "switch-model"
    REFINE = "refine"
    SHOW_PROMPT = "show-prompt"
    HELP = "help"


ACTION_KEYS = {
    "y": Action.ACCEPT,
    "a": Action.ACCEPT_AND_AMEND,
    "n": Action.ABORT,
    "r": Action.RETRY,
    "m": Action.SWITCH_MODEL,
    "e": Action.REFINE,
    "p": Action.SHOW_PROMPT,
    "?": Action.HELP,
    "h": Action.HELP,
}

LEGEND = [
    ("y", "accept the message and commit"),
    ("a", "accept, commit, then amend the commit in your editor"),
    ("n", "abort without committing"),
    ("r", "generate another message with the same prompt"),
    ("m", "pick a different model and generate again"),
    ("e", "add instructions for the model and generate again"),
    ("p", "show the prompt sent to the model"),
    ("?", "show this help"),
]


def parse_action(text: str) -> Action:
    """Map user input to an action. Unknown input aborts."""
    return ACTION_KEYS.get(text.strip().lower(), Action.ABORT)


class Phase(Enum):
    GENERATING = "generating"
    REVIEWING = "reviewing"
    COMMITTING = "committing"
    ABORTED = "aborted"
    FAILED = "failed"


TERMINAL_PHASES = frozenset({Phase.COMMITTING, Phase.ABORTED, Phase.FAILED})


@dataclass(frozen=True)
class WorkflowState:
    """Everything the loop knows about one invocation."""

    diff: str
    model: str
    prompt: str
    refinement: str = ""
    message: CommitMessage | None = None
    phase: Phase = Phase.GENERATING
    amend: bool = False
    error: CommitAssistError | None = None

    @classmethod
    def initial(cls, diff: str, model: str) -> WorkflowState:
        if not model:
            raise ValueError("A model must be selected before generating")
        return cls(diff=diff, model=model, prompt=build_prompt(diff))


class Outcome(Enum):
    COMMITTED = "committed"
    ABORTED = "aborted"
    ERROR = "error"


@dataclass(frozen=True)
class WorkflowResult:
    outcome: Outcome
    message: CommitMessage | None = None
    model: str = ""
    amend: bool = False
    error: CommitAssistError | None = None


class ConfirmationLoop:
    """Drives generation and the user's review of each draft."""

    def __init__(self, generator: MessageGenerator, prompter: Prompter) -> None:
        self.generator = generator
        self.prompter = prompter

    def run(self, state: WorkflowState) -> WorkflowResult:
        """Step until the user accepts or aborts, or generation fails."""
        while state.phase not in TERMINAL_PHASES:
            state = self.step(state)
        return self.result(state)

    def step(self, state: WorkflowState) -> WorkflowState:
        if state.phase is Phase.GENERATING:
            return self.generate(state)
        if state.phase is Phase.REVIEWING:
            return self.review(state)
        return state

    def generate(self, state: WorkflowState) -> WorkflowState:
        self.prompter.status(f"Generating commit message with {state.model}...")
        try:
            message = self.generator.generate(state.model, state.prompt)
        except (GenerationDecodeError, ProviderError) as e:
            logger.debug("Generation failed: %s", e)
            return replace(state, phase=Phase.FAILED, error=e)
        return replace(state, message=message, phase=Phase.REVIEWING)

    def review(self, state: WorkflowState) -> WorkflowState:
        if state.message is None:
            raise ValueError("No commit message has been generated yet")
        self.prompter.show_message(state.message, state.model)
        try:
            action = parse_action(self.prompter.ask_action())
        except (KeyboardInterrupt, EOFError):
            action = Action.ABORT
        logger.debug("Action: %s", action.value)
        return self.apply(state, action)

    def apply(self, state: WorkflowState, action: Action) -> WorkflowState:
        """Transition out of REVIEWING for ``action``."""
        if action is Action.ACCEPT:
            return replace(state, phase=Phase.COMMITTING)
        if action is Action.ACCEPT_AND_AMEND:
            return replace(state, phase=Phase.COMMITTING, amend=True)
        if action is Action.RETRY:
            return replace(state, phase=Phase.GENERATING)
        if action is Action.SWITCH_MODEL:
            try:
                model = self.generator.select_model(self.prompter, current=state.model)
            except ProviderError as e:
                return replace(state, phase=Phase.FAILED, error=e)
            return replace(state, model=model, phase=Phase.GENERATING)
        if action is Action.REFINE:
            refinement = append_refinement(state.refinement, self.prompter.ask_refinement())
            return replace(
                state,
                refinement=refinement,
                prompt=build_prompt(state.diff, refinement),
                phase=Phase.GENERATING,
            )
        if action is Action.SHOW_PROMPT:
            self.prompter.show_prompt(state.prompt)
            return state
        if action is Action.HELP:
            self.prompter.show_help(LEGEND)
            return state
        return replace(state, phase=Phase.ABORTED)

    @staticmethod
    def result(state: WorkflowState) -> WorkflowResult:
        if state.phase is Phase.COMMITTING:
            return WorkflowResult(
                Outcome.COMMITTED, message=state.message, model=state.model, amend=state.amend
            )
        if state.phase is Phase.FAILED:
            return WorkflowResult(Outcome.ERROR, model=state.model, error=state.error)
        return WorkflowResult(Outcome.ABORTED, model=state.model)
