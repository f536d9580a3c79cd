"""Pydantic v2 models shared by the ``init`` workflow.

Everything here is transient: selections, template references and outcomes
live for a single run and are never persisted.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Framework(str, Enum):
    """Front-end library the generated project is based on."""
    REACT = "react"
    VUE = "vue"


class Language(str, Enum):
    """Source variant of the generated project."""
    TS = "ts"
    JS = "js"


class WorkflowState(str, Enum):
    """States of the ``init`` workflow, in the order they are entered."""
    START = "start"
    RESOLVING_CHOICES = "resolving_choices"
    LOCATING_TEMPLATE = "locating_template"
    CHECKING_TARGET = "checking_target"
    CREATING_DIR = "creating_dir"
    FETCHING = "fetching"
    FETCHED = "fetched"
    PROMPTING_INSTALL = "prompting_install"
    INSTALLING = "installing"

    # Terminal states
    RESOLUTION_FAILED = "resolution_failed"
    ABORTED_EXISTS = "aborted_exists"
    CREATE_FAILED = "create_failed"
    FETCH_FAILED = "fetch_failed"
    SKIPPED = "skipped"
    INSTALL_OK = "install_ok"
    INSTALL_FAILED = "install_failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES

    @property
    def is_success(self) -> bool:
        return self in (WorkflowState.SKIPPED, WorkflowState.INSTALL_OK)


TERMINAL_STATES: frozenset[WorkflowState] = frozenset({
    WorkflowState.RESOLUTION_FAILED,
    WorkflowState.ABORTED_EXISTS,
    WorkflowState.CREATE_FAILED,
    WorkflowState.FETCH_FAILED,
    WorkflowState.SKIPPED,
    WorkflowState.INSTALL_OK,
    WorkflowState.INSTALL_FAILED,
})


# ---------------------------------------------------------------------------
# Workflow data
# ---------------------------------------------------------------------------

class Selection(BaseModel):
    """A fully resolved request: which template to materialize, and where."""
    project_name: str = Field(..., min_length=1, description="Relative directory name")
    framework: Framework
    language: Language


class TemplateRef(BaseModel):
    """Reference to one branch of a remote template repository."""
    host: str
    org: str
    repo: str
    branch: str

    def __str__(self) -> str:
        return f"{self.host}:{self.org}/{self.repo}#{self.branch}"


class InstallOutcome(BaseModel):
    """Result of running the dependency install command."""
    success: bool
    exit_code: Optional[int] = None
    error: Optional[str] = Field(default=None, description="Failure reason, if any")


class WorkflowResult(BaseModel):
    """Terminal state of one ``init`` run plus what led there."""
    state: WorkflowState
    selection: Optional[Selection] = None
    template: Optional[TemplateRef] = None
    target: Optional[Path] = None
    install: Optional[InstallOutcome] = None
    message: str = ""

    @property
    def success(self) -> bool:
        return self.state.is_success

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1
