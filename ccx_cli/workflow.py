"""The ``init`` workflow: resolve choices, materialize a template, install.

Steps run strictly in sequence and each one is a precondition for the next::

    RESOLVING_CHOICES -> LOCATING_TEMPLATE -> CHECKING_TARGET -> CREATING_DIR
        -> FETCHING -> FETCHED -> PROMPTING_INSTALL -> INSTALLING

A failure in any step ends the run in a terminal state (``ABORTED_EXISTS``,
``FETCH_FAILED``, ...) and is reported through the ``Reporter``. Only prompt
cancellation (``KeyboardInterrupt`` / ``EOFError``) escapes ``run``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from .config import Settings
from .errors import DirectoryCreateError, FetchError, ResolutionError, TargetExistsError
from .interfaces import Fetcher, Installer, Prompter, Reporter
from .locator import locate_template
from .models import Framework, Language, Selection, TemplateRef, WorkflowResult, WorkflowState
from .resolver import resolve_selection

INSTALL_QUESTION = "Install dependencies now?"


class InitWorkflow:
    """Creates one project from a remote template.

    Attributes:
        settings: Template and install settings.
        prompter: Source of interactive answers.
        reporter: Status sink for progress and outcomes.
        fetcher: Copies the remote template into the new directory.
        installer: Runs the dependency install command.
        history: Every state entered during the last ``run``, in order.
    """

    def __init__(
        self,
        prompter: Prompter,
        reporter: Reporter,
        fetcher: Fetcher,
        installer: Installer,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.prompter = prompter
        self.reporter = reporter
        self.fetcher = fetcher
        self.installer = installer
        self.history: list[WorkflowState] = []

    @property
    def state(self) -> WorkflowState:
        return self.history[-1] if self.history else WorkflowState.START

    def _enter(self, state: WorkflowState) -> None:
        self.history.append(state)

    def _finish(self, state: WorkflowState, **fields) -> WorkflowResult:
        if not state.is_terminal:
            raise ValueError(f"{state.value} is not a terminal state")
        self._enter(state)
        return WorkflowResult(state=state, **fields)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    @staticmethod
    def check_target(target: Path) -> None:
        """Raise ``TargetExistsError`` if anything already lives at *target*."""
        if target.exists() or target.is_symlink():
            raise TargetExistsError(target)

    @staticmethod
    async def create_target(target: Path) -> None:
        """Create *target* as a new empty directory."""
        try:
            await asyncio.to_thread(target.mkdir)
        except FileExistsError as exc:
            raise TargetExistsError(target) from exc
        except OSError as exc:
            raise DirectoryCreateError(target, exc.strerror or str(exc)) from exc

    async def materialize(self, template: TemplateRef, target: Path) -> None:
        """Fetch *template* into *target* behind a live status line."""
        self.reporter.info("Cloning template from repository...")
        self.reporter.start("Downloading template...")
        await self.fetcher.fetch(template, target, on_info=self.reporter.update)
        self.reporter.succeed("Download succeeded")

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------

    async def run(
        self,
        project_name: str,
        framework: Framework | str | None = None,
        language: Language | str | None = None,
        cwd: Path | None = None,
    ) -> WorkflowResult:
        """Run the whole workflow and return its terminal state.

        Args:
            project_name: Directory name of the new project.
            framework: Preselected framework, or ``None`` to ask.
            language: Preselected language, or ``None`` to ask.
            cwd: Parent directory of the project (defaults to ``Path.cwd()``).
        """
        self.history = []
        selection: Selection | None = None

        try:
            self._enter(WorkflowState.RESOLVING_CHOICES)
            selection = resolve_selection(project_name, framework, language, self.prompter)

            self._enter(WorkflowState.LOCATING_TEMPLATE)
            template = locate_template(
                selection.framework, selection.language, self.settings.template
            )
        except ResolutionError as exc:
            self.reporter.fail(str(exc))
            return self._finish(
                WorkflowState.RESOLUTION_FAILED, selection=selection, message=str(exc)
            )

        target = ((cwd or Path.cwd()) / selection.project_name).absolute()
        context = {"selection": selection, "template": template, "target": target}

        try:
            self._enter(WorkflowState.CHECKING_TARGET)
            self.check_target(target)
            self._enter(WorkflowState.CREATING_DIR)
            await self.create_target(target)
        except TargetExistsError:
            message = f"{selection.project_name} already exists"
            self.reporter.fail(message)
            return self._finish(WorkflowState.ABORTED_EXISTS, message=message, **context)
        except DirectoryCreateError as exc:
            self.reporter.fail(str(exc))
            return self._finish(WorkflowState.CREATE_FAILED, message=str(exc), **context)

        try:
            self._enter(WorkflowState.FETCHING)
            await self.materialize(template, target)
        except FetchError as exc:
            message = f"Download failed: {exc}"
            self.reporter.fail(message)
            return self._finish(WorkflowState.FETCH_FAILED, message=message, **context)
        self._enter(WorkflowState.FETCHED)

        self._enter(WorkflowState.PROMPTING_INSTALL)
        if not self.prompter.confirm(INSTALL_QUESTION, default=True):
            self.reporter.info(
                f"Skipped dependency install. Run '{self.installer.command_line}' "
                f"in {selection.project_name} when ready."
            )
            return self._finish(WorkflowState.SKIPPED, message="Install skipped", **context)

        self._enter(WorkflowState.INSTALLING)
        self.reporter.info("Installing dependencies...")
        outcome = await self.installer.install(target)
        if outcome.success:
            self.reporter.succeed("Dependencies installed!")
            return self._finish(
                WorkflowState.INSTALL_OK, install=outcome, message="Project ready", **context
            )

        message = (
            f"Dependency install failed ({outcome.error}), "
            f"please run '{self.installer.command_line}' manually"
        )
        self.reporter.fail(message)
        return self._finish(
            WorkflowState.INSTALL_FAILED, install=outcome, message=message, **context
        )
