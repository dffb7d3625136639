"""CLI interface for git-ai-commit."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .assistant import CommitAssistant
from .commit import DispatchResult
from .config import CommitOptions
from .exceptions import (
    GenerationDecodeError,
    GitError,
    NoChangesError,
    UserAbort,
)
from .providers import PROVIDERS


console = Console()


def configure_logging(verbose: bool) -> None:
    """Send package logs to stderr through rich."""
    logger = logging.getLogger("git_ai_commit")
    logger.handlers[:] = [
        RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    ]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


@click.command()
@click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, file_okay=False),
)
@click.option(
    "-i",
    "--interactive",
    is_flag=True,
    help="Pick the hunks to stage with git add --patch",
)
@click.option(
    "-w",
    "--wip",
    is_flag=True,
    help="Mark the commit as work in progress and skip CI",
)
@click.option(
    "-l",
    "--lazygit",
    "handoff",
    is_flag=True,
    help="Write the message for lazygit to pick up instead of committing",
)
@click.option(
    "-m",
    "--model",
    envvar="GIT_AI_COMMIT_MODEL",
    help="Model to use (asks interactively when unset)",
)
@click.option(
    "--provider",
    type=click.Choice(PROVIDERS),
    envvar="GIT_AI_COMMIT_PROVIDER",
    help='Model service: "ollama" (default) or "openai"',
)
@click.option(
    "--host",
    help="Base URL of the model service (defaults to OLLAMA_HOST or OPENAI_BASE_URL)",
)
@click.option(
    "-k",
    "--api-key",
    help="API key for the openai provider (defaults to OPENAI_API_KEY env var)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Show debug logging and full tracebacks",
)
@click.version_option(__version__)
def main(
    path: str | None,
    interactive: bool,
    wip: bool,
    handoff: bool,
    model: str | None,
    provider: str | None,
    host: str | None,
    api_key: str | None,
    verbose: bool,
) -> None:
    """Draft a commit message for your changes with a language model.

    \b
    Examples:
      # Stage everything and commit with a chosen model
      git-ai-commit

      # Pick hunks interactively and use a specific model
      git-ai-commit -i --model llama3.2

      # Commit as work in progress, skipping CI
      git-ai-commit --wip

      # Called from lazygit: only write the message
      git-ai-commit --lazygit
    """
    configure_logging(verbose)

    options = CommitOptions(
        path=path,
        model=model,
        provider=provider,
        host=host,
        api_key=api_key,
        interactive=interactive,
        wip=wip,
        handoff=handoff,
    )

    try:
        assistant = CommitAssistant(options)
        result = assistant.run()
    except NoChangesError as e:
        console.print(f"[yellow]{e}[/]")
        sys.exit(1)
    except (UserAbort, KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Aborted.[/]")
        sys.exit(1)
    except GenerationDecodeError as e:
        console.print(f"\n[red]❌ Error: {escape(str(e))}[/]")
        console.print("[dim]Raw model response:[/]")
        console.print(e.raw, markup=False, highlight=False)
        sys.exit(1)
    except GitError as e:
        if verbose:
            console.print_exception()
        console.print(f"\n[red]❌ git failed: {escape(e.stderr or str(e))}[/]")
        sys.exit(1)
    except Exception as e:
        if verbose:
            console.print_exception()
        else:
            console.print(f"\n[red]❌ Error: {escape(str(e))}[/]")
        sys.exit(1)

    if result is DispatchResult.HANDED_OFF:
        console.print("[green]✅ Commit message handed off to lazygit[/]")
    else:
        console.print("[green]✅ Committed[/]")


if __name__ == "__main__":
    main()
