"""Collaborator contracts for the ``init`` workflow.

The workflow only talks to these protocols, so tests can substitute fakes for
the terminal, the network and the package manager.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from .models import InstallOutcome, TemplateRef


class Question(BaseModel):
    """A single-choice question asked during choice resolution."""
    name: str = Field(..., description="Key of the answer in the returned mapping")
    message: str
    choices: list[str]


@runtime_checkable
class Prompter(Protocol):
    """Blocking interactive input."""

    def choose(self, questions: list[Question]) -> dict[str, str]:
        """Ask every question in one round and return ``{name: answer}``."""
        ...

    def confirm(self, message: str, default: bool = True) -> bool:
        """Ask a yes/no question."""
        ...


@runtime_checkable
class Reporter(Protocol):
    """Status sink for progress and outcomes."""

    def start(self, message: str) -> None:
        """Begin a long-running step with a live status line."""
        ...

    def update(self, message: str) -> None:
        """Replace the live status text."""
        ...

    def succeed(self, message: str) -> None:
        """End the current step (if any) and report success."""
        ...

    def fail(self, message: str) -> None:
        """End the current step (if any) and report failure."""
        ...

    def info(self, message: str) -> None:
        ...


@runtime_checkable
class Fetcher(Protocol):
    """Copies a remote template into a local directory."""

    async def fetch(
        self,
        template: TemplateRef,
        target: Path,
        on_info: Callable[[str], None] | None = None,
    ) -> None:
        """Materialize *template* into *target*. Raises ``FetchError`` on failure."""
        ...


@runtime_checkable
class Installer(Protocol):
    """Installs the dependencies of a freshly materialized project."""

    @property
    def command_line(self) -> str:
        """The install command as the user would type it."""
        ...

    async def install(self, project_dir: Path) -> InstallOutcome:
        ...
