"""Shared pytest fixtures for the ccx-cli test suite.

Provides reusable fixtures for:
- In-memory template archives shaped like GitHub codeload tarballs
- Fake prompter, reporter, fetcher and installer collaborators
- A fully wired ``InitWorkflow`` built from the fakes
- Mock subprocess helpers
"""

from __future__ import annotations

import io
import tarfile
from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from ccx_cli.config import Settings
from ccx_cli.errors import FetchError
from ccx_cli.interfaces import Question
from ccx_cli.models import InstallOutcome, TemplateRef
from ccx_cli.workflow import InitWorkflow


# ---------------------------------------------------------------------------
# Archives
# ---------------------------------------------------------------------------

def build_archive(
    files: dict[str, str],
    top_level: str = "ccx-react-template-ts",
    extra: list[tarfile.TarInfo] | None = None,
) -> bytes:
    """Build a ``.tar.gz`` with every file nested under *top_level*."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        root = tarfile.TarInfo(top_level)
        root.type = tarfile.DIRTYPE
        root.mode = 0o755
        archive.addfile(root)
        for name, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(f"{top_level}/{name}")
            info.size = len(data)
            info.mode = 0o644
            archive.addfile(info, io.BytesIO(data))
        for info in extra or []:
            archive.addfile(info)
    return buffer.getvalue()


@pytest.fixture
def make_archive() -> Callable[..., bytes]:
    """Factory for in-memory template tarballs."""
    return build_archive


@pytest.fixture
def template_files() -> dict[str, str]:
    """Minimal starter project contents."""
    return {
        "package.json": '{\n  "name": "ccx-react-template",\n  "private": true\n}\n',
        "README.md": "# ccx react template\n",
        "src/main.tsx": "console.log('hello')\n",
        "src/components/App.tsx": "export default function App() { return null }\n",
    }


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------

class FakePrompter:
    """Prompter that answers from fixed values and records every question."""

    def __init__(
        self,
        answers: dict[str, str] | None = None,
        confirm_answer: bool = True,
        cancel: bool = False,
    ) -> None:
        self.answers = answers or {"framework": "react", "language": "ts"}
        self.confirm_answer = confirm_answer
        self.cancel = cancel
        self.choose_calls: list[list[str]] = []
        self.confirm_calls: list[str] = []

    def choose(self, questions: list[Question]) -> dict[str, str]:
        self.choose_calls.append([q.name for q in questions])
        if self.cancel:
            raise KeyboardInterrupt
        return {q.name: self.answers[q.name] for q in questions}

    def confirm(self, message: str, default: bool = True) -> bool:
        self.confirm_calls.append(message)
        return self.confirm_answer


class FakeReporter:
    """Reporter that keeps ``(kind, message)`` events in order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def start(self, message: str) -> None:
        self.events.append(("start", message))

    def update(self, message: str) -> None:
        self.events.append(("update", message))

    def succeed(self, message: str) -> None:
        self.events.append(("succeed", message))

    def fail(self, message: str) -> None:
        self.events.append(("fail", message))

    def info(self, message: str) -> None:
        self.events.append(("info", message))

    def messages(self, kind: str) -> list[str]:
        return [message for event, message in self.events if event == kind]


class FakeFetcher:
    """Fetcher that writes a package.json, or fails with ``FetchError``."""

    def __init__(self, error: str | None = None) -> None:
        self.error = error
        self.calls: list[tuple[TemplateRef, Path]] = []

    async def fetch(
        self,
        template: TemplateRef,
        target: Path,
        on_info: Callable[[str], None] | None = None,
    ) -> None:
        self.calls.append((template, target))
        if on_info:
            on_info(f"Downloading {template} ...")
        if self.error:
            raise FetchError(self.error)
        (target / "package.json").write_text('{"name": "demo"}\n', encoding="utf-8")


class FakeInstaller:
    """Installer that returns a canned outcome without spawning anything."""

    def __init__(
        self,
        outcome: InstallOutcome | None = None,
        command_line: str = "npm install",
    ) -> None:
        self.outcome = outcome or InstallOutcome(success=True, exit_code=0)
        self.command_line = command_line
        self.calls: list[Path] = []

    async def install(self, project_dir: Path) -> InstallOutcome:
        self.calls.append(project_dir)
        return self.outcome


@pytest.fixture
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture
def reporter() -> FakeReporter:
    return FakeReporter()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def installer() -> FakeInstaller:
    return FakeInstaller()


@pytest.fixture
def workflow(
    prompter: FakePrompter,
    reporter: FakeReporter,
    fetcher: FakeFetcher,
    installer: FakeInstaller,
) -> InitWorkflow:
    """``InitWorkflow`` wired entirely to fakes."""
    return InitWorkflow(
        prompter=prompter,
        reporter=reporter,
        fetcher=fetcher,
        installer=installer,
        settings=Settings(),
    )


@pytest.fixture
def make_workflow() -> Callable[..., InitWorkflow]:
    """Factory for ``InitWorkflow`` instances with configured fakes.

    The fakes stay reachable as ``workflow.prompter``, ``workflow.reporter``,
    ``workflow.fetcher`` and ``workflow.installer``.
    """
    def factory(
        answers: dict[str, str] | None = None,
        confirm_answer: bool = True,
        cancel: bool = False,
        fetch_error: str | None = None,
        install_outcome: InstallOutcome | None = None,
        install_command: str = "npm install",
    ) -> InitWorkflow:
        return InitWorkflow(
            prompter=FakePrompter(answers, confirm_answer=confirm_answer, cancel=cancel),
            reporter=FakeReporter(),
            fetcher=FakeFetcher(error=fetch_error),
            installer=FakeInstaller(install_outcome, command_line=install_command),
            settings=Settings(),
        )

    return factory


# ---------------------------------------------------------------------------
# Mock Subprocess
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess with a configurable return code.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(returncode: int = 0) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
