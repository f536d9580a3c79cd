"""Dependency installation for freshly generated projects.

Runs the package manager (``npm install`` by default) inside the project with
the child's stdin/stdout/stderr inherited, so the user sees the native install
output live. Failures are returned as an ``InstallOutcome``; nothing is
retried.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from .config import InstallSettings
from .models import InstallOutcome


class DependencyInstaller:
    """Spawns the install command and maps its exit status to an outcome."""

    def __init__(self, settings: InstallSettings | None = None) -> None:
        self.settings = settings or InstallSettings()

    @property
    def command_line(self) -> str:
        return self.settings.display

    def _executable(self) -> str:
        # Resolves npm.cmd on Windows; an unknown command falls through and
        # fails at spawn time.
        return shutil.which(self.settings.command) or self.settings.command

    async def install(self, project_dir: Path) -> InstallOutcome:
        """Run the install command in *project_dir* and wait for it to exit.

        Returns:
            ``InstallOutcome(success=True, exit_code=0)`` on success; otherwise
            an outcome carrying the exit code or the spawn error message.
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self._executable(),
                *self.settings.args,
                cwd=str(project_dir),
            )
        except OSError as exc:
            return InstallOutcome(
                success=False,
                error=f"Cannot run '{self.command_line}': {exc}",
            )

        returncode = await process.wait()
        if returncode == 0:
            return InstallOutcome(success=True, exit_code=0)
        return InstallOutcome(
            success=False,
            exit_code=returncode,
            error=f"'{self.command_line}' exited with code {returncode}",
        )
