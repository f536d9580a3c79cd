"""Rich-based terminal output and prompts for ccx-cli.

Provides the shared ``console``, the coloured message helpers, and the two
terminal collaborators used by the CLI: ``RichReporter`` (spinner plus
success/failure lines) and ``RichPrompter`` (list and yes/no questions).
"""

from __future__ import annotations

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.status import Status

from .interfaces import Question

console = Console()


# ---------------------------------------------------------------------------
# Message helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


# ---------------------------------------------------------------------------
# Status sink
# ---------------------------------------------------------------------------


class RichReporter:
    """Reports workflow progress with a Rich spinner.

    ``start`` opens a live status line which ``update`` rewrites; ``succeed``
    and ``fail`` close it and leave a permanent coloured line behind.
    """

    def __init__(self, output: Console | None = None) -> None:
        self.console = output or console
        self._status: Status | None = None

    def _stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def start(self, message: str) -> None:
        self._stop()
        self._status = self.console.status(f"[yellow]{message}[/yellow]", spinner="dots")
        self._status.start()

    def update(self, message: str) -> None:
        if self._status is None:
            self.info(message)
            return
        self._status.update(f"[yellow]{message}[/yellow]")

    def succeed(self, message: str) -> None:
        self._stop()
        self.console.print(f"[bold green]✔ {message}[/bold green]")

    def fail(self, message: str) -> None:
        self._stop()
        self.console.print(f"[bold red]✖ {message}[/bold red]")

    def info(self, message: str) -> None:
        self.console.print(f"[cyan]{message}[/cyan]")


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class RichPrompter:
    """Blocking terminal prompts backed by ``rich.prompt``.

    ``KeyboardInterrupt`` and ``EOFError`` raised while waiting for input are
    left to propagate to the caller.
    """

    def __init__(self, output: Console | None = None) -> None:
        self.console = output or console

    def choose(self, questions: list[Question]) -> dict[str, str]:
        answers: dict[str, str] = {}
        for question in questions:
            answers[question.name] = Prompt.ask(
                f"[bold]{question.message}[/bold]",
                choices=question.choices,
                default=question.choices[0],
                console=self.console,
            )
        return answers

    def confirm(self, message: str, default: bool = True) -> bool:
        return Confirm.ask(f"[bold]{message}[/bold]", default=default, console=self.console)
