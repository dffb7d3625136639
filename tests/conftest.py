import json
import shutil
import subprocess
from pathlib import Path
from typing import Any

import pytest

from git_ai_commit.models import CommitMessage
from git_ai_commit.providers import AIProvider
from git_ai_commit.terminal import Prompter


class FakeProvider(AIProvider):
    """Returns canned replies and records every request."""

    def __init__(self, replies=None, models=None):
        self.replies = list(replies or [])
        self.models = list(models) if models is not None else ["llama3.2"]
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def complete(self, model, prompt, schema):
        self.calls.append((model, prompt, schema))
        return self.replies.pop(0)

    def list_models(self):
        return list(self.models)

    def get_name(self):
        return "Fake"


class ScriptedPrompter(Prompter):
    """Plays back user input from lists."""

    def __init__(self, actions=(), refinements=(), model_choices=()):
        self.actions = list(actions)
        self.refinements = list(refinements)
        self.model_choices = list(model_choices)
        self.shown: list[tuple[CommitMessage, str]] = []
        self.prompts_shown: list[str] = []
        self.help_shown = 0
        self.statuses: list[str] = []

    def show_message(self, message, model):
        self.shown.append((message, model))

    def ask_action(self):
        action = self.actions.pop(0)
        if isinstance(action, BaseException):
            raise action
        return action

    def ask_refinement(self):
        return self.refinements.pop(0)

    def choose_model(self, models, current=None):
        choice = self.model_choices.pop(0)
        assert choice in models
        return choice

    def show_prompt(self, prompt):
        self.prompts_shown.append(prompt)

    def show_help(self, legend):
        self.help_shown += 1

    def status(self, text):
        self.statuses.append(text)


class FakeRepo:
    """Records the git operations the staging and commit code asks for."""

    def __init__(self, status="M  file.txt", untracked=(), git_dir=None):
        self._status = status
        self._untracked = list(untracked)
        self._git_dir = git_dir
        self.calls: list[tuple] = []

    def has_pending_changes(self):
        self.calls.append(("status",))
        return bool(self._status)

    def save_index(self):
        self.calls.append(("save_index",))
        return b"saved-index"

    def get_untracked_files(self):
        return list(self._untracked)

    def add_intent_to_add(self, paths):
        self.calls.append(("intent_to_add", tuple(paths)))

    def stage_all(self):
        self.calls.append(("stage_all",))

    def stage_interactive(self):
        self.calls.append(("stage_interactive",))

    def restore_index(self, snapshot):
        self.calls.append(("restore_index", snapshot))

    def reset_index(self):
        self.calls.append(("reset_index",))

    def commit(self, message):
        self.calls.append(("commit", message))

    def amend_interactive(self):
        self.calls.append(("amend",))

    def git_dir(self):
        return self._git_dir


def reply(title, description=""):
    return json.dumps({"commitTitle": title, "commitDescription": description})


@pytest.fixture
def fake_provider():
    return FakeProvider


@pytest.fixture
def scripted_prompter():
    return ScriptedPrompter


@pytest.fixture
def fake_repo():
    return FakeRepo


@pytest.fixture
def make_reply():
    return reply


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout


@pytest.fixture
def run_git():
    return git


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A repository with one commit containing ``tracked.txt``."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_AI_COMMIT_MODEL", raising=False)
    monkeypatch.delenv("GIT_AI_COMMIT_PROVIDER", raising=False)

    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "--quiet")
    git(repo, "config", "user.name", "Test User")
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "commit.gpgsign", "false")

    (repo / "tracked.txt").write_text("".join(f"line {i}\n" for i in range(1, 31)))
    git(repo, "add", "tracked.txt")
    git(repo, "commit", "--quiet", "-m", "Initial commit")
    return repo
