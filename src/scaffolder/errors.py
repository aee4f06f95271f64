"""Exceptions raised by the scaffolder."""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for errors that abort a scaffolding run."""


class MissingProjectNameError(ScaffoldError):
    """Raised when no project directory name was supplied."""

    def __init__(self) -> None:
        super().__init__("Project directory name is required.")


class ProjectExistsError(ScaffoldError):
    """Raised when the target directory already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Folder {path.name} already exists. Please choose a different directory name."
        )


class TemplateAssetError(ScaffoldError):
    """Raised when the packaged templates or boilerplate are missing."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Could not find template assets at {path}. The installation may be corrupted."
        )
