"""Git operations wrapper using subprocess."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from .exceptions import GitError

logger = logging.getLogger(__name__)

# Lines of surrounding context included in the staged diff
DIFF_CONTEXT_LINES = 10


class GitRepo:
    """Wrapper for git operations using subprocess."""

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize git repository wrapper.

        Args:
            path: Directory git commands run in (defaults to current directory)
        """
        self.path = Path(path) if path else Path.cwd()

    @classmethod
    def discover(cls, path: str | Path | None = None) -> GitRepo:
        """Locate the repository containing ``path``.

        When ``path`` is given, commands keep running in that directory;
        otherwise they run from the repository root.

        Raises:
            GitError: If the directory is not inside a git work tree
        """
        repo = cls(path)
        root = repo.root()
        return repo if path else cls(root)

    def _run(
        self,
        *args: str,
        check: bool = True,
        capture_output: bool = True,
        input: str | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Run a git command.

        Args:
            *args: Git command arguments
            check: Raise exception on non-zero exit
            capture_output: Capture stdout/stderr; when False the command
                inherits the terminal
            input: Text written to the command's stdin

        Returns:
            CompletedProcess result

        Raises:
            GitError: If command fails and check is True
        """
        cmd = ["git", *args]
        logger.debug("Running %s in %s", " ".join(cmd), self.path)
        try:
            return subprocess.run(
                cmd,
                cwd=self.path,
                check=check,
                capture_output=capture_output,
                input=input,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise GitError(
                f"Command failed: {' '.join(cmd)}\nExit code: {e.returncode}\nStderr: {stderr}",
                command=cmd,
                returncode=e.returncode,
                stderr=stderr,
            ) from e
        except FileNotFoundError as e:
            raise GitError("git executable not found on PATH", command=cmd) from e

    def root(self) -> Path:
        """Get the top-level directory of the work tree."""
        result = self._run("rev-parse", "--show-toplevel")
        return Path(result.stdout.strip())

    def git_dir(self) -> Path:
        """Get the ``.git`` metadata directory under the repository root."""
        return self.root() / ".git"

    def config_get(self, key: str) -> str | None:
        """Read a git config value, or None when it is unset."""
        result = self._run("config", "--get", key, check=False)
        value = result.stdout.strip()
        return value or None

    def status(self) -> str:
        """Get the porcelain status output, trimmed."""
        result = self._run("status", "--porcelain")
        return result.stdout.strip()

    def has_pending_changes(self) -> bool:
        """Check for tracked modifications, deletions or untracked files."""
        return bool(self.status())

    def get_untracked_files(self) -> list[str]:
        """Get untracked paths that are not ignored."""
        result = self._run("ls-files", "--others", "--exclude-standard")
        return [f for f in result.stdout.split("\n") if f]

    def add_intent_to_add(self, paths: list[str]) -> None:
        """Register new paths with the index without staging their content."""
        if not paths:
            return
        self._run("add", "--intent-to-add", "--", *paths)

    def stage_all(self) -> None:
        """Stage every change in the work tree."""
        self._run("add", "--all")

    def stage_interactive(self) -> None:
        """Hand the terminal to ``git add --patch`` until the user exits it."""
        self._run("add", "--patch", capture_output=False)

    def get_staged_diff(self, context: int = DIFF_CONTEXT_LINES) -> str:
        """Get diff of staged changes with extended context."""
        result = self._run("diff", "--cached", f"--unified={context}")
        return result.stdout

    def index_path(self) -> Path:
        """Get the path of the index file."""
        result = self._run("rev-parse", "--git-path", "index")
        path = Path(result.stdout.strip())
        return path if path.is_absolute() else self.path / path

    def save_index(self) -> bytes | None:
        """Read the raw index file, or None if the repository has none yet.

        The raw file keeps entries a tree cannot hold, such as
        intent-to-add paths.
        """
        path = self.index_path()
        return path.read_bytes() if path.exists() else None

    def restore_index(self, snapshot: bytes | None) -> None:
        """Put back an index file saved with :meth:`save_index`."""
        path = self.index_path()
        if snapshot is None:
            path.unlink(missing_ok=True)
            return
        temp_path = path.with_name(f"{path.name}.git-ai-commit")
        temp_path.write_bytes(snapshot)
        os.replace(temp_path, path)

    def reset_index(self) -> None:
        """Reset the index to HEAD, leaving the work tree untouched."""
        self._run("reset", "--quiet")

    def commit(self, message: str) -> None:
        """Create a commit from the index using ``message`` verbatim.

        The message is passed on stdin so embedded newlines and blank
        lines survive exactly.
        """
        self._run("commit", "--cleanup=verbatim", "--file", "-", input=message)

    def amend_interactive(self) -> None:
        """Open the user's editor on the last commit via ``git commit --amend``."""
        self._run("commit", "--amend", capture_output=False)
