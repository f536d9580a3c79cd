"""ccx-cli -- scaffold React or Vue projects from remote templates.

Quick usage::

    from ccx_cli import InitWorkflow, Settings, TemplateFetcher, DependencyInstaller
    from ccx_cli.console import RichPrompter, RichReporter

    workflow = InitWorkflow(
        prompter=RichPrompter(),
        reporter=RichReporter(),
        fetcher=TemplateFetcher(),
        installer=DependencyInstaller(),
    )
    result = await workflow.run("my-app", framework="react", language="ts")
"""

__version__ = "1.0.0"

from ccx_cli.config import InstallSettings, Settings, TemplateSettings
from ccx_cli.errors import (
    DirectoryCreateError,
    FetchError,
    ResolutionError,
    ScaffoldError,
    TargetExistsError,
)
from ccx_cli.fetcher import TemplateFetcher
from ccx_cli.installer import DependencyInstaller
from ccx_cli.locator import locate_template
from ccx_cli.models import (
    Framework,
    InstallOutcome,
    Language,
    Selection,
    TemplateRef,
    WorkflowResult,
    WorkflowState,
)
from ccx_cli.resolver import resolve_selection
from ccx_cli.workflow import InitWorkflow

__all__ = [
    "__version__",
    # Settings
    "Settings",
    "TemplateSettings",
    "InstallSettings",
    # Errors
    "ScaffoldError",
    "ResolutionError",
    "TargetExistsError",
    "DirectoryCreateError",
    "FetchError",
    # Models
    "Framework",
    "Language",
    "Selection",
    "TemplateRef",
    "InstallOutcome",
    "WorkflowState",
    "WorkflowResult",
    # Workflow
    "resolve_selection",
    "locate_template",
    "TemplateFetcher",
    "DependencyInstaller",
    "InitWorkflow",
]
