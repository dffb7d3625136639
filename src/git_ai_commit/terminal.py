"""Interactive terminal prompts for the confirmation loop."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.console import Console
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table
from rich.text import Text

from .models import CommitMessage


class Prompter(ABC):
    """What the confirmation loop needs from the user."""

    @abstractmethod
    def show_message(self, message: CommitMessage, model: str) -> None:
        ...

    @abstractmethod
    def ask_action(self) -> str:
        """Read the next action key."""
        ...

    @abstractmethod
    def ask_refinement(self) -> str:
        """Read extra instructions for the model."""
        ...

    @abstractmethod
    def choose_model(self, models: list[str], current: str | None = None) -> str:
        ...

    @abstractmethod
    def show_prompt(self, prompt: str) -> None:
        """Display the prompt and wait until the user acknowledges it."""
        ...

    @abstractmethod
    def show_help(self, legend: list[tuple[str, str]]) -> None:
        ...

    @abstractmethod
    def status(self, text: str) -> None:
        """Report progress, e.g. that a generation is running."""
        ...


class RichPrompter(Prompter):
    """Prompter that reads from and writes to the terminal through rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_message(self, message: CommitMessage, model: str) -> None:
        body = Text(message.title, style="bold")
        if message.description:
            body.append(f"\n\n{message.description}")
        self.console.print()
        self.console.print(Panel(body, title="Commit message", subtitle=model, expand=False))

    def ask_action(self) -> str:
        return Prompt.ask(
            "[cyan]Commit?[/] [dim](y/a/n/r/m/e/p/? for help)[/]",
            console=self.console,
            default="",
            show_default=False,
        )

    def ask_refinement(self) -> str:
        return Prompt.ask("[cyan]Additional instructions[/]", console=self.console, default="")

    def choose_model(self, models: list[str], current: str | None = None) -> str:
        table = Table(show_header=False, box=None)
        for i, name in enumerate(models, start=1):
            marker = " [green](current)[/]" if name == current else ""
            table.add_row(f"[bold]{i}[/]", f"{name}{marker}")
        self.console.print("\n[cyan]Available models:[/]")
        self.console.print(table)
        default = models.index(current) + 1 if current in models else 1
        choice = IntPrompt.ask(
            "Select a model",
            console=self.console,
            choices=[str(i) for i in range(1, len(models) + 1)],
            show_choices=False,
            default=default,
        )
        return models[choice - 1]

    def show_prompt(self, prompt: str) -> None:
        self.console.print(Panel(Text(prompt), title="Prompt", expand=False))
        Prompt.ask(
            "[dim]Press Enter to continue[/]",
            console=self.console,
            default="",
            show_default=False,
        )

    def show_help(self, legend: list[tuple[str, str]]) -> None:
        table = Table(show_header=False, box=None)
        for key, text in legend:
            table.add_row(f"[bold]{key}[/]", text)
        self.console.print(table)

    def status(self, text: str) -> None:
        self.console.print(f"[blue]{text}[/]")
