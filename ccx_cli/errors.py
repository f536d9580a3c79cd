"""Exceptions raised by the scaffolding workflow."""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error the ``init`` workflow reports."""


class ResolutionError(ScaffoldError):
    """Raised when the project name, framework or language cannot be resolved."""


class TargetExistsError(ScaffoldError):
    """Raised when the destination directory is already present."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"{path.name} already exists ({path})")


class DirectoryCreateError(ScaffoldError):
    """Raised when the project directory cannot be created."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Cannot create directory {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class FetchError(ScaffoldError):
    """Raised when a template cannot be downloaded or extracted."""

    def __init__(self, message: str, url: str = "") -> None:
        self.url = url
        super().__init__(message)
