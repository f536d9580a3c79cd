"""ccx-cli configuration.

Typed, in-memory settings for the scaffolder. Nothing is read from files or
environment variables; the defaults describe the published templates and the
package manager used after download. Tests build their own ``Settings`` to
point the fetcher and installer at fakes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TemplateSettings(BaseModel):
    """Where the starter templates live and how they are downloaded."""

    host: str = Field(default="github", description="Template host prefix")
    org: str = Field(default="chencanxi", description="Owner of the template repositories")
    prefix: str = Field(default="ccx", description="Repository name prefix")
    js_branch: str = Field(default="main", description="Branch holding the plain JS variant")
    ts_branch: str = Field(default="ts", description="Branch holding the TypeScript variant")
    archive_base_url: str = Field(default="https://codeload.github.com")
    timeout: float = Field(default=60.0, gt=0, description="Download timeout in seconds")


class InstallSettings(BaseModel):
    """The dependency install command run inside a new project."""

    command: str = Field(default="npm")
    args: list[str] = Field(default_factory=lambda: ["install"])

    @property
    def display(self) -> str:
        """The command line as the user would type it."""
        return " ".join([self.command, *self.args])


class Settings(BaseModel):
    """Global ccx-cli settings.

    Created once by the CLI entry point and passed to every component that
    needs it.
    """

    template: TemplateSettings = Field(default_factory=TemplateSettings)
    install: InstallSettings = Field(default_factory=InstallSettings)
